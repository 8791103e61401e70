"""
Shared fixtures for the analysis pipeline tests.
"""
import os

# Settings are read at import time and the API key is required
os.environ.setdefault("GEMINI_API_KEY", "test-key")

from unittest.mock import AsyncMock

import httpx
import pytest

from speedx.models import WebsiteMetrics
from speedx.services.analysis_service import AnalysisClient
from speedx.services.llm_service import InsightClient
from speedx.services.notification_service import NotificationCenter
from speedx.services.orchestrator import AnalysisOrchestrator

ANALYZE_BASE_URL = "http://analysis.test"
INSIGHT_URL = "https://insights.test/v1/models/test:generateContent"


@pytest.fixture
def metrics_payload():
    """Analysis endpoint body with one metric missing."""
    return {
        'loadTime': 500,
        'requestSize': 200000,
        'requestCount': 12,
        'ttfb': 80,
        'fcp': 900,
        'lcp': 1200,
        'fid': 20,
        'tti': 1500,
        'cls': 0.05,
        'speedIndex': None,
    }


@pytest.fixture
def metrics(metrics_payload):
    return WebsiteMetrics.model_validate(metrics_payload)


@pytest.fixture
def gemini_body():
    """Builds a generateContent response carrying the given text."""
    def _body(text):
        return {
            'candidates': [
                {'content': {'parts': [{'text': text}], 'role': 'model'}},
            ],
        }
    return _body


@pytest.fixture
def make_analysis_client():
    def _make(handler):
        return AnalysisClient(ANALYZE_BASE_URL, transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def make_insight_client():
    def _make(handler):
        return InsightClient(INSIGHT_URL, 'secret-key', transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def analysis_client(metrics):
    client = AsyncMock(spec=AnalysisClient)
    client.analyze.return_value = metrics
    return client


@pytest.fixture
def insight_client():
    client = AsyncMock(spec=InsightClient)
    client.get_insights.return_value = ['Load time is good.', 'TTFB is excellent.']
    return client


@pytest.fixture
def notifications():
    return NotificationCenter()


@pytest.fixture
def orchestrator(analysis_client, insight_client, notifications):
    return AnalysisOrchestrator(analysis_client, insight_client, notifications)
