from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def to_dict(self):
        return {"field": self.field, "message": self.message}


class SiteBuilderError(Exception):
    """Base class for errors that map onto an API response."""

    status_code = 400
    error = "SiteBuilderError"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__ or self.error)

    def to_dict(self):
        return {"error": self.error, "message": str(self)}


class InvariantViolation(SiteBuilderError):
    error = "InvariantViolation"


class ContentValidationError(InvariantViolation):
    """Payload does not match its schema."""

    error = "ValidationError"

    def __init__(self, errors: Iterable[FieldError], message: str = "Validation failed"):
        self.errors: List[FieldError] = list(errors)
        super().__init__(message)

    def to_dict(self):
        data = super().to_dict()
        data["fields"] = [e.to_dict() for e in self.errors]
        return data


class NotFoundError(SiteBuilderError):
    """Resource not found."""

    status_code = 404
    error = "NotFound"


class ConflictError(SiteBuilderError):
    """Resource already exists."""

    status_code = 409
    error = "Conflict"


class StaleWriteError(ConflictError):
    """Conflict detected. Resource has been modified."""

    error = "StaleWrite"


class ImmediateWriteFailed(SiteBuilderError):
    """The change could not be saved and has been undone."""

    status_code = 503
    error = "ImmediateWriteFailed"


class UnsavedChangesError(SiteBuilderError):
    """There are unsaved changes."""

    status_code = 409
    error = "UnsavedChanges"
