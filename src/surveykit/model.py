"""
Core Value Types

Defines the closed vocabularies shared by questions and surveys:
    - QuestionType (what kind of answer a question expects)
    - Permission (ordered access levels on a survey)
    - User (a permissioned participant, consumed as data)

ARCHITECTURAL RULE:
    These types carry no behavior beyond lookups and ordering.
    Validation of composite state belongs to Question and Survey.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from surveykit.errors import ValidationError


class QuestionType(str, Enum):
    """
    Question types supported by the model.

    The string values are the interoperable wire names and compare
    equal to plain strings, so "radio" == QuestionType.RADIO.
    """

    DROPDOWN = "dropdown"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    TEXT = "text"
    RATING = "rating"


# Types whose answer is picked from a fixed list of choices
CHOICE_BASED_TYPES = (QuestionType.DROPDOWN, QuestionType.RADIO, QuestionType.CHECKBOX)

VALID_QUESTION_TYPES = tuple(t.value for t in QuestionType)


class Permission(str, Enum):
    """
    Access levels on a survey, ordered by privilege rank.

        read (1) < write (2) < delete (3) < owner (4)
    """

    READ = "read"
    WRITE = "write"
    DELETE = "delete"
    OWNER = "owner"

    @property
    def rank(self) -> int:
        return _PERMISSION_RANKS[self]

    @classmethod
    def parse(cls, value: Any) -> "Permission":
        """
        Coerce a string (or Permission) into a Permission.

        Raises:
            ValidationError: If value is not a known permission level
        """
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Invalid permission: {value!r}")


_PERMISSION_RANKS = {
    Permission.READ: 1,
    Permission.WRITE: 2,
    Permission.DELETE: 3,
    Permission.OWNER: 4,
}


@dataclass
class User:
    """
    A user holding a permission on a survey.

    Users are owned elsewhere; a survey only keeps references to them.

    Properties:
        id: Unique user identifier
        user_name: Display name ("UserName" on the wire)
        permission: Access level ("Permission" on the wire)
    """

    id: str
    user_name: str
    permission: Permission = Permission.READ

    def __post_init__(self):
        self.permission = Permission.parse(self.permission)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "UserName": self.user_name,
            "Permission": self.permission.value,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "User":
        return cls(
            id=d["id"],
            user_name=d.get("UserName", ""),
            permission=d.get("Permission", Permission.READ),
        )
