"""
Error types for DoseKeeper
All failures raised by the tracker are recoverable at the call site.
"""

from typing import Any, Dict, List, Optional


class TrackerError(Exception):
    """Base class for tracker errors"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Raised when medication, dose or suggestion input is malformed"""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        # [{"field": "schedule.times.0", "message": "..."}]
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}

    @classmethod
    def from_pydantic(cls, exc, message: str = "Invalid input") -> "ValidationError":
        """Build from a pydantic ValidationError, keeping field-level detail"""
        errors = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ()))
            errors.append({"field": field or "__root__", "message": err.get("msg", "")})
        return cls(message, errors)


class NotFoundError(TrackerError):
    """Raised when a referenced medication does not exist"""
    pass


class SuggestionFailure(TrackerError):
    """Raised when the schedule suggestion service fails or returns bad output"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause
