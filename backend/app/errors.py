"""News pipeline error taxonomy.

Every failure the search pipeline can produce is a ``PipelineError``
subclass. Stages raise them unchanged; the HTTP and websocket layers branch on
``kind`` / ``status_code`` and callers decide on retries with ``retryable``.
An empty search result is not an error.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for news search failures."""

    kind: str = "pipeline_error"
    status_code: int = 500
    retryable: bool = False


class InvalidQuery(PipelineError):
    """The query was empty after trimming."""

    kind = "invalid_query"
    status_code = 400

    def __init__(self, message: str = "Please enter a search term") -> None:
        super().__init__(message)


class MissingCredential(PipelineError):
    """The provider API key is not configured."""

    kind = "missing_credential"
    status_code = 503

    def __init__(self, variable: str = "NEWSDATA_API_KEY") -> None:
        self.variable = variable
        super().__init__(f"{variable} environment variable is not set")


class AuthenticationError(PipelineError):
    """The provider rejected the configured API key."""

    kind = "authentication_error"
    status_code = 502

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Invalid {provider} API key. Please check your .env file.")


class TransportError(PipelineError):
    """Network-level failure: DNS, connect, reset or timeout."""

    kind = "transport_error"
    status_code = 504
    retryable = True


class ProviderHttpError(PipelineError):
    """The provider answered with a non-success status."""

    kind = "provider_http_error"
    status_code = 502

    def __init__(self, status: int, body: str) -> None:
        self.status = status
        self.body = body
        super().__init__(f"News provider returned error status {status}: {body}")


class ProviderReportedError(PipelineError):
    """The provider returned its own ``{"status": "error"}`` envelope."""

    kind = "provider_reported_error"
    status_code = 502

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(f"News provider error: {message}")


class MalformedPayload(PipelineError):
    """The response body is not a JSON object."""

    kind = "malformed_payload"
    status_code = 502


class DateParseError(PipelineError):
    """A ``pubDate`` matched none of the supported formats."""

    kind = "date_parse_error"
    status_code = 502

    def __init__(self, raw: str) -> None:
        self.raw = raw
        super().__init__(f"Failed to parse date: {raw}")
