# speedx/services/llm_service.py
import logging
from typing import Any, Dict, List, Optional

import httpx
from langchain_core.prompts import PromptTemplate

from speedx.core.errors import ClientError, InsightServiceError, MalformedResponseError

logger = logging.getLogger(__name__)

# Prompt sent to the generative-text service, seeded with the formatted metrics
INSIGHT_PROMPT_TEMPLATE = """
You are an expert frontend performance analyst.
Here are the performance metrics collected for a website:
{metrics_summary}

Give short insights about what these metrics mean for the website's performance.
Write one insight per line, separated by newlines. Do not use bullet points,
numbering, headings, or any Markdown formatting.
"""

prompt = PromptTemplate.from_template(INSIGHT_PROMPT_TEMPLATE)

def build_prompt(metrics_summary: str) -> str:
    return prompt.format(metrics_summary=metrics_summary)

def extract_text(data: Any) -> str:
    """
    Pulls the first candidate's generated text out of the service response.

    Raises:
        MalformedResponseError: If the response does not have the expected shape.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedResponseError() from e
    if not isinstance(text, str):
        raise MalformedResponseError()
    return text

def split_insights(text: str) -> List[str]:
    """Splits generated text into insight lines, dropping blank ones."""
    return [line for line in text.splitlines() if line.strip()]

class InsightClient:
    """Asks a generative-text service for insights about a set of metrics."""

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self.transport = transport

    async def get_insights(self, metrics_summary: str) -> List[str]:
        """
        Gets natural-language insights for the formatted metrics.

        The service output is free text; the number and content of the
        returned lines are not checked.

        Args:
            metrics_summary: The text produced by format_for_llm.

        Returns:
            The non-blank lines of the first generated candidate.

        Raises:
            InsightServiceError: If the call fails.
            MalformedResponseError: If the response carries no generated text.
            ClientError: If the request could not be built or sent.
        """
        payload: Dict[str, Any] = {
            "contents": [{"parts": [{"text": build_prompt(metrics_summary)}]}]
        }
        params = {"key": self.api_key}

        async with httpx.AsyncClient(transport=self.transport) as client:
            try:
                response = await client.post(
                    self.endpoint, params=params, json=payload, timeout=self.timeout
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                # The request URL carries the API key, so only the status is logged
                status_code = e.response.status_code
                logger.warning("Insight service answered %s", status_code)
                raise InsightServiceError(status_code=status_code) from e
            except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
                logger.error("Could not send insight request: %s", type(e).__name__)
                raise ClientError() from e
            except httpx.RequestError as e:
                logger.warning("Insight service request failed: %s", type(e).__name__)
                raise InsightServiceError() from e

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("Insight service returned a non-JSON body")
            raise MalformedResponseError(status_code=response.status_code) from e

        text = extract_text(data)
        return split_insights(text)
