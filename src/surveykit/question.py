"""
Question Entity

A single survey question: its text, its type and (for choice-based
types) the list of choices a respondent picks from.

A Question validates itself on construction and guards every mutation,
so an instance observed from outside always satisfies:

    - 3 <= len(text) <= 500
    - question_type is one of QuestionType
    - choice-based types have at least 2 unique choices
    - non-choice types ignore choices; they are not checked at
      construction, and choice mutators refuse to touch them

The one exception is change_question_type between two types of the
same family, which leaves choices untouched (see its docstring).
"""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from surveykit.errors import ValidationError
from surveykit.model import CHOICE_BASED_TYPES, VALID_QUESTION_TYPES, QuestionType

MIN_TEXT_LENGTH = 3
MAX_TEXT_LENGTH = 500
MIN_CHOICES = 2
DEFAULT_CHOICES = ("Option 1", "Option 2")
RATING_MIN = 1
RATING_MAX = 5


def generate_question_id() -> str:
    return f"question_{uuid.uuid4().hex}"


@dataclass
class Question:
    """
    Represents one question of a survey.

    Properties:
        text:
            Question wording, 3 to 500 characters

        question_type:
            QuestionType (plain strings are accepted and coerced)

        choices:
            Ordered answer options. Required for dropdown, radio and
            checkbox questions; not checked for other types.

        id:
            Opaque unique identifier, generated when left blank

    Raises:
        ValidationError: On construction, if any invariant is violated.
    """

    text: str
    question_type: QuestionType = QuestionType.TEXT
    choices: List[str] = field(default_factory=list)
    id: str = ""

    def __post_init__(self):
        if not self.id:
            self.id = generate_question_id()
        self.choices = list(self.choices or [])
        self.validate_question()
        self.question_type = QuestionType(self.question_type)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_text(self, text: str) -> bool:
        if not isinstance(text, str) or len(text) < MIN_TEXT_LENGTH:
            raise ValidationError(f"Question text must be at least {MIN_TEXT_LENGTH} characters")
        if len(text) > MAX_TEXT_LENGTH:
            raise ValidationError(f"Question text cannot exceed {MAX_TEXT_LENGTH} characters")
        return True

    def validate_question_type(self, question_type: Any) -> bool:
        if question_type not in VALID_QUESTION_TYPES:
            raise ValidationError(f"Invalid question type: {question_type!r}")
        return True

    def validate_choices(self) -> bool:
        """Check the choice list against the current type. No-op for non-choice types."""
        if self.is_choice_based_type():
            if not self.choices:
                raise ValidationError("Choices are required for this question type")
            if len(self.choices) < MIN_CHOICES:
                raise ValidationError(f"At least {MIN_CHOICES} choices are required")
            if len(set(self.choices)) != len(self.choices):
                raise ValidationError("Duplicate choices are not allowed")
        return True

    def validate_question(self) -> bool:
        """Run text, type and choice validation in order, stopping at the first failure."""
        self.validate_text(self.text)
        self.validate_question_type(self.question_type)
        self.validate_choices()
        return True

    # ------------------------------------------------------------------
    # Choice management
    # ------------------------------------------------------------------

    def _require_choice_based(self) -> None:
        if not self.is_choice_based_type():
            raise ValidationError("Choices not applicable for this question type")

    def _require_index(self, index: int) -> None:
        if not 0 <= index < len(self.choices):
            raise ValidationError(f"Invalid choice index: {index}")

    def add_choice(self, choice: str) -> List[str]:
        self._require_choice_based()
        if not isinstance(choice, str) or not choice.strip():
            raise ValidationError("Choice text cannot be empty")
        if choice in self.choices:
            raise ValidationError(f"Duplicate choice: {choice!r}")
        self.choices.append(choice)
        return self.choices

    def remove_choice(self, index: int) -> List[str]:
        self._require_choice_based()
        self._require_index(index)
        if len(self.choices) <= MIN_CHOICES:
            raise ValidationError(
                f"Cannot remove choice - minimum {MIN_CHOICES} choices required"
            )
        del self.choices[index]
        return self.choices

    def update_choice(self, index: int, new_text: str) -> List[str]:
        self._require_choice_based()
        self._require_index(index)
        if not isinstance(new_text, str) or not new_text.strip():
            raise ValidationError("Choice text cannot be empty")
        others = [c for i, c in enumerate(self.choices) if i != index]
        if new_text in others:
            raise ValidationError(f"Duplicate choice: {new_text!r}")
        self.choices[index] = new_text
        return self.choices

    def reorder_choices(self, new_order: Sequence[int]) -> List[str]:
        """
        Rebuild the choice list from a sequence of current indices.

        The sequence must have one entry per choice and every entry must
        be a valid index. It is NOT checked to be a permutation: repeating
        or leaving out an index is accepted and yields the corresponding
        list, e.g. [0, 0, 1] on ["A", "B", "C"] gives ["A", "A", "B"].
        """
        if len(new_order) != len(self.choices):
            raise ValidationError("Invalid reorder array")
        reordered = []
        for index in new_order:
            if not 0 <= index < len(self.choices):
                raise ValidationError(f"Invalid index in reorder array: {index}")
            reordered.append(self.choices[index])
        self.choices = reordered
        return self.choices

    # ------------------------------------------------------------------
    # Text and type
    # ------------------------------------------------------------------

    def update_text(self, new_text: str) -> str:
        self.validate_text(new_text)
        self.text = new_text
        return self.text

    def change_question_type(self, new_type: Any) -> QuestionType:
        """
        Switch to another question type.

        Crossing from a non-choice type to a choice-based one installs the
        placeholder choices "Option 1" and "Option 2"; crossing back clears
        the choices. Moving within the same family keeps choices as they
        are.
        """
        self.validate_question_type(new_type)
        new_type = QuestionType(new_type)

        was_choice_based = self.is_choice_based_type()
        will_be_choice_based = new_type in CHOICE_BASED_TYPES

        if will_be_choice_based and not was_choice_based:
            self.choices = list(DEFAULT_CHOICES)
        elif was_choice_based and not will_be_choice_based:
            self.choices = []

        self.question_type = new_type
        return self.question_type

    # ------------------------------------------------------------------
    # Queries and utilities
    # ------------------------------------------------------------------

    def clone(self) -> "Question":
        """Return a validated copy with its own choice list and a fresh id."""
        return Question(
            text=self.text,
            question_type=self.question_type,
            choices=list(self.choices),
            id=generate_question_id(),
        )

    def is_choice_based_type(self) -> bool:
        return self.question_type in CHOICE_BASED_TYPES

    def get_choice_count(self) -> int:
        return len(self.choices)

    def has_choice(self, choice_text: str) -> bool:
        return choice_text in self.choices

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "text": self.text,
            "questionType": getattr(self.question_type, "value", self.question_type),
            "choices": list(self.choices),
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Question":
        return cls(
            text=d.get("text", ""),
            question_type=d.get("questionType", QuestionType.TEXT),
            choices=d.get("choices") or [],
            id=d.get("id") or "",
        )

    # ------------------------------------------------------------------
    # Answer validation
    # ------------------------------------------------------------------

    def validate_answer(self, answer: Any) -> bool:
        """
        Check that an answer has the right shape for this question.

        Args:
            answer:
                text           -> str
                radio/dropdown -> str, one of the choices
                checkbox       -> list of choices
                rating         -> number between 1 and 5

        Returns:
            True when the answer is acceptable

        Raises:
            ValidationError: Naming what is wrong with the answer
        """
        question_type = self.question_type

        if question_type == QuestionType.TEXT:
            if not isinstance(answer, str):
                raise ValidationError("Answer must be a string")

        elif question_type in (QuestionType.RADIO, QuestionType.DROPDOWN):
            if not isinstance(answer, str):
                raise ValidationError("Answer must be a string")
            if answer not in self.choices:
                raise ValidationError("Answer must be one of the available choices")

        elif question_type == QuestionType.CHECKBOX:
            if not isinstance(answer, (list, tuple)):
                raise ValidationError("Answer must be a list")
            for selected in answer:
                if selected not in self.choices:
                    raise ValidationError(f'"{selected}" is not a valid choice for this question')

        elif question_type == QuestionType.RATING:
            # bool is an int subclass but not a rating
            if isinstance(answer, bool) or not isinstance(answer, (int, float)):
                raise ValidationError("Answer must be a number")
            if not RATING_MIN <= answer <= RATING_MAX:
                raise ValidationError(f"Rating must be between {RATING_MIN} and {RATING_MAX}")

        else:
            raise ValidationError("Unknown question type")

        return True


def questions_from_dicts(items: Optional[Sequence[Dict[str, Any]]]) -> List[Question]:
    return [Question.from_dict(d) for d in items or []]
