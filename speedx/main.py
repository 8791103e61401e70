# speedx/main.py
import logging
from typing import Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from speedx.core.config import settings
from speedx.models import (
    AnalysisRequest,
    Notification,
    ReportResponse,
    SubmissionResult,
)
from speedx.services.analysis_service import AnalysisClient
from speedx.services.llm_service import InsightClient
from speedx.services.notification_service import NotificationCenter
from speedx.services.orchestrator import AnalysisOrchestrator
from speedx.services.processing_service import METRIC_LABELS, format_metrics
from speedx.services.threshold_service import OPTIMAL_THRESHOLDS, compare_with_thresholds

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
# httpx logs full request URLs, which carry the insight API key
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)
logger.info("Using analysis endpoint %s", settings.ANALYZE_ENDPOINT)

# --- Application State ---
analysis_orchestrator = AnalysisOrchestrator(
    analysis_client=AnalysisClient(settings.ANALYZE_ENDPOINT, timeout=settings.REQUEST_TIMEOUT),
    insight_client=InsightClient(
        settings.INSIGHT_ENDPOINT,
        settings.GEMINI_API_KEY,
        timeout=settings.REQUEST_TIMEOUT,
    ),
    notifications=NotificationCenter(),
)

# --- FastAPI App Initialization ---
app = FastAPI(
    title="SpeedX Performance Analysis",
    description="An API to measure website performance and explain the results with AI-generated insights.",
    version="1.0.0"
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- API Endpoints ---
@app.post("/api/analyze", response_model=SubmissionResult)
async def analyze_website(request: AnalysisRequest):
    """
    Receives a URL, measures the website and asks for insights about the metrics.
    Only one analysis runs at a time; a second request while one is running gets 409.
    """
    result = await analysis_orchestrator.submit(request.url)

    if result.busy:
        return JSONResponse(status_code=409, content=result.model_dump(mode="json"))
    if not result.accepted:
        return JSONResponse(status_code=422, content=result.model_dump(mode="json"))
    return result

@app.get("/api/state")
async def get_state():
    """Returns the current analysis state (idle, loading, success or error)."""
    return analysis_orchestrator.state

@app.get("/api/report", response_model=ReportResponse)
async def get_report():
    """
    Returns the displayable view of the latest result: formatted metric values,
    the comparison against optimal thresholds, and the insights.
    """
    result = analysis_orchestrator.displayed_result
    if result is None:
        raise HTTPException(status_code=400, detail="No report available. Please analyze a website first.")

    return ReportResponse(
        url=result.url,
        display=format_metrics(result.metrics),
        comparison=compare_with_thresholds(result.metrics),
        insights=result.insights,
    )

@app.get("/api/thresholds")
async def get_thresholds() -> Dict[str, float]:
    return dict(OPTIMAL_THRESHOLDS)

@app.get("/api/metrics")
async def get_metric_labels() -> Dict[str, str]:
    return METRIC_LABELS

@app.get("/api/notifications", response_model=List[Notification])
async def get_notifications():
    """Returns the pending user notifications and clears them."""
    return analysis_orchestrator.notifications.drain()

@app.post("/api/reset")
async def reset_analysis():
    return analysis_orchestrator.reset()

# A simple root endpoint to confirm the API is running
@app.get("/")
def read_root():
    return {"message": "Welcome to the SpeedX Performance Analysis API"}
