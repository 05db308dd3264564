"""Exception hierarchy mapped onto HTTP responses by the API layer."""


class ShareServiceError(Exception):
    """Base error for request handling failures."""

    status_code = 500
    title = "Server Error"

    def __init__(self, message: str, *, detail: str | None = None):
        super().__init__(message)
        self.message = message
        self.detail = detail


class NotFoundError(ShareServiceError):
    """Record is missing or not public."""

    status_code = 404
    title = "Not Found"


class BadRequestError(ShareServiceError):
    """Request is missing a required identifier."""

    status_code = 400
    title = "Invalid Request"


class UpstreamError(ShareServiceError):
    """Backend or image service call failed."""

    status_code = 500
    title = "Server Error"


class ConfigurationError(UpstreamError):
    """A required setting is absent."""
