# speedx/services/processing_service.py
from typing import Dict, Optional

from speedx.models import WebsiteMetrics

PLACEHOLDER = "-"
NOT_AVAILABLE = "N/A"

# Display order and labels shown next to each metric.
METRIC_LABELS: Dict[str, str] = {
    "load_time": "Page Load Time",
    "request_size": "Total Request Size",
    "request_count": "Number of Requests",
    "speed_index": "Speed Index",
    "ttfb": "Time to First Byte (TTFB)",
    "fcp": "First Contentful Paint (FCP)",
    "lcp": "Largest Contentful Paint (LCP)",
    "fid": "First Input Delay (FID)",
    "tti": "Time to Interactive (TTI)",
    "cls": "Cumulative Layout Shift (CLS)",
}

MILLISECOND_METRICS = frozenset(["load_time", "speed_index", "ttfb", "fcp", "lcp", "fid", "tti"])

def format_value(metric: str, value: Optional[float]) -> Optional[str]:
    """
    Renders one raw metric value with its unit and rounding.

    Args:
        metric: The WebsiteMetrics field name.
        value: The raw value, or None if it was not collected.

    Returns:
        The display string, or None when there is no value.
    """
    if value is None:
        return None
    if metric in MILLISECOND_METRICS:
        return f"{value:.2f} ms"
    if metric == "request_size":
        return f"{round(value):,} bytes"
    if metric == "request_count":
        return f"{round(value)}"
    if metric == "cls":
        return f"{value:.4f}"
    return f"{value:.2f}"

def format_metric(metric: str, value: Optional[float]) -> str:
    formatted = format_value(metric, value)
    return PLACEHOLDER if formatted is None else formatted

def format_metrics(metrics: WebsiteMetrics) -> Dict[str, str]:
    """
    Builds the per-metric display strings for the metric cards.

    Args:
        metrics: The metrics returned by the analysis call.

    Returns:
        A mapping of field name to display string, in display order.
    """
    return {
        metric: format_metric(metric, getattr(metrics, metric))
        for metric in METRIC_LABELS
    }

def format_for_llm(metrics: WebsiteMetrics) -> str:
    """
    Formats all ten metrics into one comma-separated line for the insight prompt.
    """
    parts = []
    for metric, label in METRIC_LABELS.items():
        formatted = format_value(metric, getattr(metrics, metric))
        parts.append(f"{label}: {NOT_AVAILABLE if formatted is None else formatted}")
    return ", ".join(parts)
