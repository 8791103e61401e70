# speedx/services/threshold_service.py
from types import MappingProxyType
from typing import Dict, Mapping

from speedx.models import ComparisonPoint, WebsiteMetrics

# "Good" targets per metric. Timings in ms, sizes in bytes.
OPTIMAL_THRESHOLDS: Mapping[str, float] = MappingProxyType({
    "load_time": 3000,
    "request_size": 1600000,
    "request_count": 50,
    "speed_index": 3400,
    "ttfb": 800,
    "fcp": 1800,
    "lcp": 2500,
    "fid": 100,
    "tti": 3800,
    "cls": 0.1,
})

def compare_with_thresholds(
    metrics: WebsiteMetrics,
    thresholds: Mapping[str, float] = OPTIMAL_THRESHOLDS,
) -> Dict[str, ComparisonPoint]:
    """
    Pairs every metric with its optimal value for the comparison chart.

    Missing values are charted as 0. No pass/fail verdict is made here.

    Args:
        metrics: The metrics returned by the analysis call.
        thresholds: Reference values keyed by WebsiteMetrics field name.

    Returns:
        A mapping of field name to ComparisonPoint, one per threshold key.
    """
    comparison = {}
    for metric, optimal in thresholds.items():
        value = getattr(metrics, metric, None)
        comparison[metric] = ComparisonPoint(
            current=round(value, 2) if value is not None else 0,
            optimal=optimal,
        )
    return comparison
