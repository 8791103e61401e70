# speedx/services/analysis_service.py
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from speedx.core.errors import (
    AnalysisServerError,
    AnalysisUnexpectedError,
    ClientError,
    NetworkError,
    RateLimitError,
)
from speedx.models import WebsiteMetrics

logger = logging.getLogger(__name__)

class AnalysisClient:
    """Calls the performance-analysis endpoint for a single URL."""

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = base_url.rstrip("/") + "/analyze"
        self.timeout = timeout
        self.transport = transport

    async def analyze(self, url: str) -> WebsiteMetrics:
        """
        Asynchronously asks the analysis endpoint to measure a website.

        Args:
            url: The website URL, exactly as the user entered it.

        Returns:
            The metrics reported for the website.

        Raises:
            RateLimitError: On HTTP 429.
            AnalysisServerError: On HTTP 500.
            AnalysisUnexpectedError: On any other status, or an unusable body.
            NetworkError: If no response was received.
            ClientError: If the request could not be built or sent.
        """
        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.post(self.endpoint, json={"url": url}, timeout=self.timeout)
                response.raise_for_status()  # Raise an exception for bad status codes (4xx or 5xx)
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                logger.warning("Analysis endpoint answered %s for %s", status_code, url)
                if status_code == 429:
                    raise RateLimitError(status_code=status_code) from e
                if status_code == 500:
                    raise AnalysisServerError(status_code=status_code) from e
                raise AnalysisUnexpectedError(status_code=status_code) from e
            except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
                logger.error("Could not send analysis request to %s: %s", self.endpoint, e)
                raise ClientError() from e
            except httpx.RequestError as e:
                logger.warning("No response from analysis endpoint: %s", e)
                raise NetworkError() from e

        if response.status_code != 200:
            logger.warning("Analysis endpoint answered %s instead of 200", response.status_code)
            raise AnalysisUnexpectedError(status_code=response.status_code)

        try:
            return WebsiteMetrics.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.warning("Analysis endpoint returned an unusable body: %s", e)
            raise AnalysisUnexpectedError(status_code=response.status_code) from e
