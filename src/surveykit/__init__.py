"""
Survey Kit Package

In-memory model of surveys, their questions and the users permitted
to work on them.

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Storage engines
    - HTTP / API layers
    - Multi-user coordination

Entities validate themselves. Everything else (reports, exports)
consumes them unchanged.
"""

from surveykit.errors import (
    SurveyError,
    ValidationError,
    DuplicateError,
    NotFoundError,
    SurveyRejectedError,
    SerializationError,
)
from surveykit.model import QuestionType, Permission, User
from surveykit.question import Question
from surveykit.survey import Survey, SurveyStats

__version__ = "0.1.0"

__all__ = [
    "SurveyError",
    "ValidationError",
    "DuplicateError",
    "NotFoundError",
    "SurveyRejectedError",
    "SerializationError",
    "QuestionType",
    "Permission",
    "User",
    "Question",
    "Survey",
    "SurveyStats",
]
