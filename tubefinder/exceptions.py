class TubefinderError(Exception):
    """Base class for every error raised by tubefinder."""


class RemoteError(TubefinderError):
    """Raised when a gateway call fails."""

    kind = "remote"

    def __init__(self, message: str, status: int | None = None, endpoint: str | None = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.endpoint = endpoint


class NetworkFailure(RemoteError):
    """Raised when the gateway cannot be reached or returns an unreadable body."""

    kind = "network"


class RemoteFailure(RemoteError):
    """Raised when the gateway answers with a non-2xx status."""

    kind = "remote"


class NoContentAvailable(TubefinderError):
    """Raised when none of a video's transcript facets could be fetched."""
