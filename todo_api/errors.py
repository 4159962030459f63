from typing import Optional


class TodoError(Exception):
    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_body(self) -> dict:
        error = {"message": self.message}
        if self.field is not None:
            error["field"] = self.field
        return {"error": error}


class InvalidInput(TodoError):
    """Client-correctable input problem; names the offending field."""

    status_code = 400

    def __init__(self, field: Optional[str], message: str):
        super().__init__(message, field)


class NotFound(TodoError):
    status_code = 404

    def __init__(self, message: str = "Todo not found"):
        super().__init__(message)


class InternalError(TodoError):
    """Unexpected failure. The public message never carries the cause."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


class PayloadTooLarge(TodoError):
    status_code = 413

    def __init__(self, message: str = "Request body too large"):
        super().__init__(message)
