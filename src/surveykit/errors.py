"""
Exceptions raised by survey entities.

Every guard failure raises (never returns an error code). Callers catch
the specific subclass they care about or SurveyError for all of them.
"""


class SurveyError(Exception):
    """Base class for all surveykit errors."""
    pass


class ValidationError(SurveyError):
    """Raised when a field or an operation argument fails validation."""
    pass


class DuplicateError(ValidationError):
    """Raised when adding an entry whose id is already present."""
    pass


class SurveyRejectedError(ValidationError):
    """Raised when a survey is constructed with an empty name."""
    pass


class NotFoundError(SurveyError):
    """Raised by update operations when the target id is missing."""
    pass


class SerializationError(SurveyError):
    """Raised when an import payload cannot be parsed."""
    pass
