# speedx/core/errors.py
"""
Classified errors raised by the analysis pipeline.

Every error carries the short title and description shown to the user,
so the orchestrator never has to inspect an exception to decide what to say.
"""
from typing import Optional


class SpeedXError(Exception):
    """Base class for all SpeedX exceptions."""
    pass


class AnalysisError(SpeedXError):
    """Base class for every error the orchestrator surfaces to the user."""

    kind = "error"
    title = "Error"
    description = "An error occurred while analyzing the website."

    def __init__(self, description: Optional[str] = None, status_code: Optional[int] = None):
        if description is not None:
            self.description = description
        self.status_code = status_code
        super().__init__(self.description)


class ValidationError(AnalysisError):
    """Raised when user input is rejected before any request is made."""
    kind = "validation"


class EmptyInputError(ValidationError):
    kind = "empty_input"
    title = "Input Required"
    description = "Please enter a website link."


class InvalidUrlError(ValidationError):
    kind = "invalid_url"
    title = "Invalid URL"
    description = "Please enter a valid URL."


class RateLimitError(AnalysisError):
    """Raised when the analysis endpoint answers 429."""
    kind = "rate_limit"
    title = "Rate Limit Exceeded"
    description = "Too many requests. Please try again later."


class AnalysisServerError(AnalysisError):
    """Raised when the analysis endpoint answers 500."""
    kind = "server_error"
    title = "Server Error"
    description = "There was an issue analyzing the website. Please try again later."


class AnalysisUnexpectedError(AnalysisError):
    """Raised for any other non-200 answer, or a 200 with an unusable body."""
    kind = "unexpected_error"
    title = "Error"
    description = "An unexpected error occurred."


class NetworkError(AnalysisError):
    """Raised when the request was sent but no response came back."""
    kind = "network_error"
    title = "Network Error"
    description = "No response from the server. Please check your connection."


class ClientError(AnalysisError):
    """Raised when the request could not be built or sent."""
    kind = "client_error"
    title = "Error"
    description = "An error occurred while analyzing the website."


class InsightServiceError(AnalysisError):
    """Raised when the insight-generation call fails."""
    kind = "insight_error"
    title = "Insights Unavailable"
    description = "Metrics were collected, but insights could not be generated."


class MalformedResponseError(InsightServiceError):
    """Raised when the insight service answers without the expected text."""
    kind = "malformed_response"
    description = "The insight service returned a response without any generated text."
