"""LLM-related exception classes.

Contains all exception classes for LLM operations:
- LLMError: Base exception for LLM-related errors
- LLMTimeoutError: The request exceeded the wall-clock timeout
- LLMTransportError: Network or API failure other than auth
- LLMAuthError: The provider rejected the credentials
- LLMResponseParseError: The response could not be turned into a CommitPlan
"""

RAW_PREFIX_LENGTH = 200


class LLMError(Exception):
    """Base exception for LLM-related errors."""

    pass


class LLMTimeoutError(LLMError):
    """Raised when the LLM call times out."""

    pass


class LLMTransportError(LLMError):
    """Raised when the LLM call fails in transit or with a server error."""

    pass


class LLMAuthError(LLMError):
    """Raised when the provider rejects the API key."""

    pass


class LLMResponseParseError(LLMError):
    """Raised when the LLM response cannot be parsed into a commit plan.

    The first 200 characters of the raw response are kept for diagnostics.
    """

    def __init__(self, message: str, raw_response: str = ""):
        self.raw_prefix = (raw_response or "")[:RAW_PREFIX_LENGTH]
        if self.raw_prefix:
            message = f"{message}\nRaw response (first {RAW_PREFIX_LENGTH} chars):\n{self.raw_prefix}"
        super().__init__(message)
