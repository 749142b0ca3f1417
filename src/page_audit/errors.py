"""Exception taxonomy for the audit pipeline."""


class AuditError(Exception):
    """Base class for audit failures."""

    #: HTTP-style status used when the error is reported as a response.
    status_code = 500

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, str | None]:
        return {"status": "error", "message": self.message, "details": self.details}


class InputError(AuditError):
    """The audit target is missing or is not an absolute http(s) URL."""

    status_code = 400


class FetchError(AuditError):
    """The page itself could not be retrieved."""


class LinkCheckError(AuditError):
    """A single link request failed at the transport level."""


class EnrichmentError(AuditError):
    """The external performance service failed."""
