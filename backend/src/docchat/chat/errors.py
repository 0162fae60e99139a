"""Error categories for the chat endpoint and provider failure classification."""

from enum import Enum

from docchat.constants.llm import RATE_LIMIT_SIGNALS, TIMEOUT_SIGNALS, TOO_LARGE_SIGNALS


class ErrorCategory(Enum):
    """Caller-facing error categories, each with an HTTP status and message."""

    CLIENT = (400, "Invalid request")
    AUTH = (401, "Invalid API key")
    METHOD = (405, "Method not allowed. Use POST.")
    CONFIG = (500, "Server configuration error")
    PROVIDER_TIMEOUT = (
        504,
        "Request timeout. Please try again with a shorter question or documentation.",
    )
    PROVIDER_RATE_LIMIT = (
        429,
        "Rate limit exceeded. Your documentation is too large for the free tier. "
        "Please try with a smaller Django project or upgrade your Groq plan.",
    )
    PROVIDER_CAPACITY = (
        413,
        "Documentation too large. Please try with a smaller Django project "
        "or break your question into smaller parts.",
    )
    PROVIDER_FATAL = (500, "Internal server error. Please try again later.")

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message

    @property
    def is_provider_error(self) -> bool:
        return self.name.startswith("PROVIDER_")


class ChatError(Exception):
    """A request failure resolved to a caller-facing category.

    Args:
        category: The category selecting status code and default message.
        detail: Raw failure text. Only exposed outside production.
        message: Overrides the category message (e.g. validation reasons).
    """

    def __init__(
        self,
        category: ErrorCategory,
        detail: str | None = None,
        message: str | None = None,
    ):
        self.category = category
        self.detail = detail
        self.message = message or category.message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.category.status_code

    def to_body(self, include_details: bool) -> dict[str, str]:
        """Build the JSON error body.

        Details are attached only for server errors and only when include_details
        is set (non-production).
        """
        body = {"error": self.message}
        if include_details and self.status_code == 500 and self.detail:
            body["details"] = self.detail
        return body


def _matches(text: str, signals: tuple[str, ...]) -> bool:
    return any(signal in text for signal in signals)


def classify_provider_error(
    message: str,
    timeout_signals: tuple[str, ...] = TIMEOUT_SIGNALS,
    rate_limit_signals: tuple[str, ...] = RATE_LIMIT_SIGNALS,
    too_large_signals: tuple[str, ...] = TOO_LARGE_SIGNALS,
) -> ErrorCategory:
    """Map a provider failure message to an error category.

    Matching is case-insensitive substring search, checked in precedence order:
    timeout, rate limit, request too large. Anything else is PROVIDER_FATAL.

    Args:
        message: Failure text from the last model tier.
        timeout_signals: Lowercase substrings meaning the provider was too slow.
        rate_limit_signals: Lowercase substrings meaning quota was exceeded.
        too_large_signals: Lowercase substrings meaning the payload was too big.

    Returns:
        The matching ErrorCategory.
    """
    text = (message or "").lower()
    if _matches(text, timeout_signals):
        return ErrorCategory.PROVIDER_TIMEOUT
    if _matches(text, rate_limit_signals):
        return ErrorCategory.PROVIDER_RATE_LIMIT
    if _matches(text, too_large_signals):
        return ErrorCategory.PROVIDER_CAPACITY
    return ErrorCategory.PROVIDER_FATAL
