# speedx/services/orchestrator.py
"""
Sequences one website analysis from user input to insights.

The orchestrator is the only writer of the analysis state. A submission runs
validate -> analyze -> format -> insights, and only one submission may be in
flight at a time. All state changes happen between awaits on a single event
loop, so no lock is needed.
"""
import logging
from typing import Optional

from speedx.core.errors import AnalysisError, ClientError, ValidationError
from speedx.models import (
    AnalysisResult,
    AnalysisState,
    ErrorInfo,
    ErrorState,
    IdleState,
    LoadingState,
    SubmissionResult,
    SuccessState,
    WebsiteMetrics,
)
from speedx.services.analysis_service import AnalysisClient
from speedx.services.llm_service import InsightClient
from speedx.services.notification_service import NotificationCenter
from speedx.services.processing_service import format_for_llm
from speedx.services.validation_service import validate_url

logger = logging.getLogger(__name__)

def _displayed_result(state: AnalysisState) -> Optional[AnalysisResult]:
    if isinstance(state, SuccessState):
        return state.result
    if isinstance(state, LoadingState):
        return state.previous
    if isinstance(state, ErrorState):
        return state.result
    return None

class AnalysisOrchestrator:

    def __init__(
        self,
        analysis_client: AnalysisClient,
        insight_client: InsightClient,
        notifications: Optional[NotificationCenter] = None,
    ):
        self.analysis_client = analysis_client
        self.insight_client = insight_client
        self.notifications = notifications or NotificationCenter()
        self._state: AnalysisState = IdleState()
        self._last_request_id = 0

    @property
    def state(self) -> AnalysisState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return isinstance(self._state, LoadingState)

    @property
    def displayed_result(self) -> Optional[AnalysisResult]:
        """The result currently on screen, whatever the state."""
        return _displayed_result(self._state)

    def reset(self) -> AnalysisState:
        """
        Returns to Idle. A submission still in flight is abandoned: its
        result is discarded when it arrives.
        """
        if self.is_loading:
            logger.info("Abandoning in-flight analysis %s", self._state.request_id)
        self._state = IdleState()
        return self._state

    async def submit(self, url: str) -> SubmissionResult:
        """
        Runs one full analysis for the given input.

        Args:
            url: The text the user entered.

        Returns:
            Whether the submission was accepted, the validation error if it
            was not, and the state once the submission has finished.
        """
        if self.is_loading:
            logger.info("Rejected submission for %s: analysis %s still running", url, self._state.request_id)
            return SubmissionResult(accepted=False, busy=True, state=self._state)

        try:
            validate_url(url)
        except ValidationError as e:
            logger.info("Rejected submission %r: %s", url, e.kind)
            self.notifications.notify_error(e)
            return SubmissionResult(accepted=False, error=ErrorInfo.from_error(e), state=self._state)

        previous_state = self._state
        self._last_request_id += 1
        request_id = self._last_request_id
        self._state = LoadingState(request_id=request_id, url=url, previous=_displayed_result(previous_state))
        logger.info("Analysis %s started for %s", request_id, url)

        metrics: Optional[WebsiteMetrics] = None
        try:
            metrics = await self.analysis_client.analyze(url)
            # Insights are always generated from this submission's metrics
            insights = await self.insight_client.get_insights(format_for_llm(metrics))
        except AnalysisError as e:
            self._fail(request_id, url, e, metrics)
        except Exception:
            logger.exception("Analysis %s failed unexpectedly", request_id)
            self._fail(request_id, url, ClientError(), metrics)
        else:
            result = AnalysisResult(url=url, metrics=metrics, insights=insights)
            self._finish(request_id, SuccessState(request_id=request_id, result=result))
        finally:
            if self._is_current(request_id):
                # Interrupted before completing (e.g. cancelled); never leave Loading behind
                logger.warning("Analysis %s interrupted, restoring previous state", request_id)
                self._state = previous_state

        return SubmissionResult(accepted=True, state=self._state)

    def _is_current(self, request_id: int) -> bool:
        return isinstance(self._state, LoadingState) and self._state.request_id == request_id

    def _finish(self, request_id: int, state: AnalysisState) -> bool:
        if not self._is_current(request_id):
            logger.info("Discarding stale result of analysis %s", request_id)
            return False
        self._state = state
        logger.info("Analysis %s finished: %s", request_id, state.status)
        return True

    def _fail(
        self,
        request_id: int,
        url: str,
        error: AnalysisError,
        metrics: Optional[WebsiteMetrics],
    ) -> None:
        loading = self._state
        if not self._is_current(request_id):
            logger.info("Discarding stale %s of analysis %s", error.kind, request_id)
            return

        if metrics is not None:
            # The analysis call succeeded; keep its metrics even without insights
            result = AnalysisResult(url=url, metrics=metrics, insights=[])
        else:
            result = loading.previous

        state = ErrorState(
            request_id=request_id,
            url=url,
            error=ErrorInfo.from_error(error),
            result=result,
        )
        if self._finish(request_id, state):
            self.notifications.notify_error(error)
