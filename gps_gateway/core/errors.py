"""
Error taxonomy for the gateway.

Every failure a request can hit maps to exactly one of these classes.
Each class carries the HTTP status and the single-line message the
caller sees. Underlying detail (SDK errors, OS errors) stays in the
exception chain and the server log, never in the response body.
"""


class GatewayError(Exception):
    """Base class for errors that end a request with a plain-text response."""

    status_code: int = 500
    public_message: str = "Internal server error"


class ValidationError(GatewayError):
    """The client sent a request we cannot turn into an object key."""

    status_code = 400
    public_message = "Bad request"


class MissingParametersError(ValidationError):
    """One or more required query parameters is absent or empty."""

    public_message = "Missing query parameters"

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"missing query parameters: {', '.join(missing)}")


class InvalidMonthError(ValidationError):
    """Month is not a zero-padded number between 01 and 12."""

    public_message = "Invalid month format"

    def __init__(self, month: str) -> None:
        self.month = month
        super().__init__(f"invalid month format: {month!r}")


class ObjectStoreError(GatewayError):
    """
    Lookup or transfer against the object store failed.

    A missing key and a transient store failure both land here.
    """

    status_code = 500
    public_message = "Failed to retrieve object"


class LocalIOError(GatewayError):
    """Reading the buffered payload back from local disk failed."""

    status_code = 500
    public_message = "Failed to read downloaded file"
