"""Exception classes raised by the finance analytics collaborators."""


class FinanceAnalyticsError(Exception):
    """Base exception for finance analytics."""
    pass


class UpstreamError(FinanceAnalyticsError):
    """A remote collaborator (auth service, transaction API) failed."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class UnauthorizedError(UpstreamError):
    """Credential missing, invalid or rejected."""
    pass


class SourceUnavailableError(UpstreamError):
    """Remote service unreachable or answering with a non-success status."""
    pass


class MalformedPayloadError(UpstreamError):
    """Remote service answered, but the body could not be understood."""
    pass
