"""
Survey Entity

Root container for a survey: its name and description, the ordered list
of questions and the ordered list of users holding permissions on it.

ARCHITECTURAL RULE:
    The survey does NOT re-validate itself after mutations.
    Only the name is checked at construction; the aggregate invariant
    (non-empty name, at least one question) is checked on demand by
    validate_survey().
"""

import copy
import json
import logging
import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from surveykit.errors import (
    DuplicateError,
    NotFoundError,
    SerializationError,
    SurveyRejectedError,
    ValidationError,
)
from surveykit.model import VALID_QUESTION_TYPES, Permission, QuestionType, User
from surveykit.question import Question, questions_from_dicts

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"

# Question fields that update_question() may merge
_QUESTION_FIELDS = ("text", "question_type", "choices")


def generate_survey_id() -> str:
    return f"survey_{uuid.uuid4().hex}"


@dataclass
class SurveyStats:
    """
    Counts of a survey's questions and users.

    Properties:
        total_questions: Number of questions
        total_users: Number of users
        questions_by_type: {question type value: count}, present types only
        users_by_permission: {permission value: count}, present levels only
    """

    total_questions: int = 0
    total_users: int = 0
    questions_by_type: Dict[str, int] = field(default_factory=dict)
    users_by_permission: Dict[str, int] = field(default_factory=dict)


@dataclass
class Survey:
    """
    A named collection of questions and permissioned users.

    Properties:
        name:
            Survey name ("Name" on the wire). Must be non-empty at
            construction, otherwise the survey is rejected.

        description:
            Free text ("Description" on the wire), unconstrained

        users:
            Ordered User list, unique by id when built through add_user

        questions:
            Ordered Question list, unique by id when built through
            add_question

        id:
            Opaque unique identifier, generated when left blank

    Raises:
        SurveyRejectedError: If name is empty.
    """

    name: str
    description: str = ""
    users: List[User] = field(default_factory=list)
    questions: List[Question] = field(default_factory=list)
    id: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = generate_survey_id()
        self.users = list(self.users or [])
        self.questions = list(self.questions or [])
        self.validate_name(self.name)

    # ------------------------------------------------------------------
    # Validation and lifecycle
    # ------------------------------------------------------------------

    def validate_name(self, name: str) -> None:
        if name:
            self.create_survey()
        else:
            self.reject()

    def validate_survey(self) -> bool:
        """
        Check the aggregate invariant.

        Not run by any mutator; call it before relying on the survey
        being complete.
        """
        if not self.name:
            raise ValidationError("Survey name cannot be empty")
        if not self.questions:
            raise ValidationError("Survey must have at least one question")
        return True

    def create_survey(self) -> None:
        logger.info("Survey created: %s (%s)", self.name, self.id)

    def reject(self) -> None:
        logger.warning("Survey rejected: empty name (%s)", self.id)
        raise SurveyRejectedError("Survey name cannot be empty")

    def delete_survey(self) -> bool:
        """Mark the survey as deleted. Referenced questions and users are left alone."""
        logger.info("Survey deleted: %s (%s)", self.name, self.id)
        return True

    def update_survey(
        self,
        name: Optional[str] = None,
        description: Optional[str] = None,
        users: Optional[List[User]] = None,
        questions: Optional[List[Question]] = None,
    ) -> "Survey":
        """Apply the supplied fields in place; None leaves a field untouched."""
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if users is not None:
            self.users = list(users)
        if questions is not None:
            self.questions = list(questions)
        return self

    # ------------------------------------------------------------------
    # Questions
    # ------------------------------------------------------------------

    def add_question(self, question: Question) -> List[Question]:
        if self.get_question_by_id(question.id) is not None:
            raise DuplicateError(f"Question with id '{question.id}' already exists")
        self.questions.append(question)
        return self.questions

    def remove_question(self, question_id: str) -> bool:
        question = self.get_question_by_id(question_id)
        if question is None:
            return False
        self.questions.remove(question)
        return True

    def update_question(self, question_id: str, **changes: Any) -> Question:
        """
        Merge field changes into an existing question in place.

        Accepted keywords: text, question_type, choices. A value of None
        leaves that field untouched. A known question_type is coerced to
        QuestionType; anything else is stored as given. The merged
        question is not re-validated; call validate_question() on it
        when that matters.

        Raises:
            NotFoundError: If no question has this id
            ValidationError: On an unknown field name
        """
        question = self.get_question_by_id(question_id)
        if question is None:
            raise NotFoundError(f"Question with id '{question_id}' not found")

        unknown = set(changes) - set(_QUESTION_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown question fields: {', '.join(sorted(unknown))}")

        for name, value in changes.items():
            if value is None:
                continue
            if name == "choices":
                value = list(value)
            elif name == "question_type" and value in VALID_QUESTION_TYPES:
                value = QuestionType(value)
            setattr(question, name, value)
        return question

    def get_question_by_id(self, question_id: str) -> Optional[Question]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def reorder_questions(self, question_ids: Sequence[str]) -> List[Question]:
        """
        Rebuild the question list in the order of question_ids.

        Ids that match no question are skipped; questions whose id is not
        listed are dropped from the survey.
        """
        reordered = []
        for question_id in question_ids:
            question = self.get_question_by_id(question_id)
            if question is not None:
                reordered.append(question)
        self.questions = reordered
        return self.questions

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def add_user(self, user: User) -> List[User]:
        if self.get_user_by_id(user.id) is not None:
            raise DuplicateError(f"User with id '{user.id}' already exists")
        self.users.append(user)
        return self.users

    def remove_user(self, user_id: str) -> bool:
        user = self.get_user_by_id(user_id)
        if user is None:
            return False
        self.users.remove(user)
        return True

    def update_user_permission(self, user_id: str, permission: Any) -> User:
        user = self.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User with id '{user_id}' not found")
        user.permission = Permission.parse(permission)
        return user

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        for user in self.users:
            if user.id == user_id:
                return user
        return None

    def check_user_permission(self, user_id: str, required: Any) -> bool:
        """
        True when the user exists and holds at least the required level.

        An absent user is always False, whatever level is asked for.

        Raises:
            ValidationError: If the user exists and required is not a
                permission level
        """
        user = self.get_user_by_id(user_id)
        if user is None:
            return False
        required = Permission.parse(required)
        return user.permission.rank >= required.rank

    # ------------------------------------------------------------------
    # Stats and copies
    # ------------------------------------------------------------------

    def get_survey_stats(self) -> SurveyStats:
        by_type: Dict[str, int] = defaultdict(int)
        for question in self.questions:
            by_type[getattr(question.question_type, "value", question.question_type)] += 1

        by_permission: Dict[str, int] = defaultdict(int)
        for user in self.users:
            by_permission[user.permission.value] += 1

        return SurveyStats(
            total_questions=len(self.questions),
            total_users=len(self.users),
            questions_by_type=dict(by_type),
            users_by_permission=dict(by_permission),
        )

    def clone(self) -> "Survey":
        """Copy name, description and questions into a new survey without users."""
        return Survey(
            name=self.name + COPY_SUFFIX,
            description=self.description,
            users=[],
            questions=copy.deepcopy(self.questions),
            id=generate_survey_id(),
        )

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "Name": self.name,
            "Description": self.description,
            "Users": [u.to_dict() for u in self.users],
            "Questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Survey":
        try:
            return cls(
                name=d.get("Name", ""),
                description=d.get("Description", ""),
                users=[User.from_dict(u) for u in d.get("Users") or []],
                questions=questions_from_dicts(d.get("Questions")),
                id=d.get("id") or "",
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise SerializationError(f"Malformed survey data: {e}") from e

    def export_to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def import_from_json(self, text: str) -> "Survey":
        """
        Load state from a JSON document produced by export_to_json().

        Only keys present in the document are applied. Users and questions
        are rebuilt from their dicts, so invalid questions are rejected.

        Raises:
            SerializationError: If text is not a JSON object or an entry is malformed
        """
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise SerializationError(f"Invalid survey JSON: {e}") from e
        if not isinstance(data, dict):
            raise SerializationError("Invalid survey JSON: expected an object")

        try:
            users = [User.from_dict(u) for u in data["Users"]] if "Users" in data else None
            questions = questions_from_dicts(data["Questions"]) if "Questions" in data else None
        except (KeyError, TypeError, AttributeError) as e:
            raise SerializationError(f"Malformed survey data: {e}") from e

        if "id" in data:
            self.id = data["id"]
        self.update_survey(
            name=data.get("Name"),
            description=data.get("Description"),
            users=users,
            questions=questions,
        )
        logger.info("Survey imported: %s (%s)", self.name, self.id)
        return self
