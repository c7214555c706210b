"""Error Types — application errors that carry a machine-readable code.

Invariants:
    - Every ResponderError has a message (str); code and http_status are optional
    - code is read by ErrorResponder through the configured error_code_key ("code")
    - to_response() never includes a stack trace

Design Decisions:
    - Plain Exception subclass with attributes: ErrorResponder reads them by name,
      so third-party errors with the same shape work without inheriting from here
    - http_status is informational only; the code → status map stays authoritative
"""


class ResponderError(Exception):
    """Base exception for errors that know their own error code."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        http_status: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope (no stack)."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationFailedError(ResponderError):
    """Request data failed validation."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, "VALIDATION_ERROR", 400)
        self.field = field


class NotFoundError(ResponderError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} '{resource_id}' not found", "NOT_FOUND", 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


def unknown_error() -> ResponderError:
    """The error substituted when none is supplied."""
    return ResponderError("Unknown error")
