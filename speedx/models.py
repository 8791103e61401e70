# speedx/models.py
from datetime import datetime, timezone
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from speedx.core.errors import AnalysisError


# Finite and non-negative when present
MetricValue = Annotated[float, Field(ge=0, allow_inf_nan=False)]

def _metric(camel: str, snake: str):
    return Field(default=None, validation_alias=AliasChoices(camel, snake))


class WebsiteMetrics(BaseModel):
    """Performance signals for one page. A missing value means it was not collected."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    load_time: Optional[MetricValue] = _metric("loadTime", "load_time")
    request_size: Optional[MetricValue] = _metric("requestSize", "request_size")
    request_count: Optional[MetricValue] = _metric("requestCount", "request_count")
    speed_index: Optional[MetricValue] = _metric("speedIndex", "speed_index")
    ttfb: Optional[MetricValue] = None
    fcp: Optional[MetricValue] = None
    lcp: Optional[MetricValue] = None
    fid: Optional[MetricValue] = None
    tti: Optional[MetricValue] = None
    cls: Optional[MetricValue] = None


class ComparisonPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    current: float
    optimal: float


class ErrorInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: str
    title: str
    description: str
    status_code: Optional[int] = None

    @classmethod
    def from_error(cls, error: AnalysisError) -> "ErrorInfo":
        return cls(
            kind=error.kind,
            title=error.title,
            description=error.description,
            status_code=error.status_code,
        )


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AnalysisResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    metrics: WebsiteMetrics
    insights: List[str] = []


# --- Analysis state variants ---
class IdleState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["idle"] = "idle"


class LoadingState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["loading"] = "loading"
    request_id: int
    url: str
    previous: Optional[AnalysisResult] = None


class SuccessState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["success"] = "success"
    request_id: int
    result: AnalysisResult


class ErrorState(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: Literal["error"] = "error"
    request_id: int
    url: str
    error: ErrorInfo
    result: Optional[AnalysisResult] = None


AnalysisState = Annotated[
    Union[IdleState, LoadingState, SuccessState, ErrorState],
    Field(discriminator="status"),
]


class SubmissionResult(BaseModel):
    accepted: bool
    busy: bool = False
    error: Optional[ErrorInfo] = None
    state: AnalysisState


# --- API bodies ---
class AnalysisRequest(BaseModel):
    url: str


class ReportResponse(BaseModel):
    url: str
    display: Dict[str, str]
    comparison: Dict[str, ComparisonPoint]
    insights: List[str]
