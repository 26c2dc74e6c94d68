"""Contains the error taxonomy raised by the reconciliation engine."""


class SyncError(Exception):
    """Base class for errors raised while mirroring GitLab issues into Notion."""

    pass


class TransportError(SyncError):
    """Raised when a remote API call fails or returns a malformed body.

    A TransportError is fatal for the run. No partial progress is checkpointed,
    so a failed run is re-run from scratch.
    """

    def __init__(self, message: str, method: str | None = None, url: str | None = None, status_code: int | None = None) -> None:
        """Initializes the exception with details about the failed request."""
        super().__init__(message)
        self.method = method
        self.url = url
        self.status_code = status_code


class ParseError(SyncError):
    """Raised when the identity property of a Notion page cannot be parsed."""

    def __init__(self, handle: str, reason: str) -> None:
        """Initializes the exception with the page handle and the parse failure reason."""
        super().__init__(f"Unable to parse issue identity of Notion page {handle}: {reason}")
        self.handle = handle
        self.reason = reason


class MappingError(SyncError):
    """Raised when a GitLab issue is missing a field required by the Notion schema."""

    def __init__(self, local_id: int, field: str, reason: str = "missing required field") -> None:
        """Initializes the exception with the issue identity and the offending field."""
        super().__init__(f"Unable to map GitLab issue #{local_id} to Notion properties: {reason} '{field}'")
        self.local_id = local_id
        self.field = field
        self.reason = reason
