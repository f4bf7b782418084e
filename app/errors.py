"""Domain errors - closed set, each with a stable code."""


class AnalyticsError(Exception):
    """Base class for all analytics errors."""

    code = "ANALYTICS_ERROR"

    def __init__(self, message: str = "Analytics error"):
        self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "error": self.code, "message": self.message}


class ValidationError(AnalyticsError):
    """Malformed input."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str = "Validation error"):
        super().__init__(message)


class InvalidSubjectError(ValidationError):
    """Subject id is not a positive integer or kind is unknown."""

    code = "INVALID_SUBJECT"

    def __init__(self, message: str = "Invalid subject"):
        super().__init__(message)


class NotFoundError(AnalyticsError):
    """Subject does not exist."""

    code = "NOT_FOUND"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class ComputeFailureError(AnalyticsError):
    """Recompute or snapshot write failed; no snapshot was persisted."""

    code = "COMPUTE_FAILED"

    def __init__(self, kind: str, subject_id: int, reason: str):
        self.kind = kind
        self.subject_id = subject_id
        self.reason = reason
        super().__init__(reason)
