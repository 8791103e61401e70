# speedx/services/validation_service.py
import re

from speedx.core.errors import EmptyInputError, InvalidUrlError

# Input longer than this is rejected without matching
MAX_URL_LENGTH = 2048

# Optional http(s) scheme, dotted host, 2-6 letter TLD, optional path. ASCII only.
URL_PATTERN = re.compile(
    r"(https?://)?([a-z0-9.-]+)\.([a-z]{2,6})([/\w .-]*)/?",
    re.IGNORECASE | re.ASCII,
)

def validate_url(text: str) -> str:
    """
    Checks that the user's input looks like a website URL.

    Args:
        text: Whatever the user typed.

    Returns:
        The text, unchanged.

    Raises:
        EmptyInputError: If nothing (or only whitespace) was entered.
        InvalidUrlError: If the text is too long or does not match the URL pattern.
    """
    if not text or not text.strip():
        raise EmptyInputError()
    if len(text) > MAX_URL_LENGTH or not URL_PATTERN.fullmatch(text):
        raise InvalidUrlError()
    return text
