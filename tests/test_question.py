"""
Tests for the Question entity.

These tests verify:
    - Construction and validation
    - Choice management guards
    - Type changes and their effect on choices
    - Cloning and dict projection
    - Answer validation per question type
"""

import pytest
from surveykit.errors import ValidationError
from surveykit.model import QuestionType
from surveykit.question import Question


def radio(choices=None, **kwargs):
    return Question(
        text="Pick one",
        question_type="radio",
        choices=["A", "B"] if choices is None else choices,
        **kwargs,
    )


class TestConstruction:
    """Test building questions."""

    def test_valid_radio_question(self):
        """A radio question with two choices is valid."""
        q = radio()
        assert q.text == "Pick one"
        assert q.question_type == QuestionType.RADIO
        assert q.choices == ["A", "B"]

    def test_generates_id_when_blank(self):
        """Should generate distinct ids when none is given."""
        q1 = radio()
        q2 = radio()
        assert q1.id
        assert q1.id != q2.id

    def test_keeps_given_id(self):
        q = radio(id="q1")
        assert q.id == "q1"

    def test_string_type_is_coerced(self):
        q = Question(text="Your name?", question_type="text")
        assert isinstance(q.question_type, QuestionType)
        assert q.question_type is QuestionType.TEXT

    def test_input_choices_are_copied(self):
        choices = ["A", "B"]
        q = radio(choices)
        choices.append("C")
        assert q.choices == ["A", "B"]

    @pytest.mark.parametrize("length", [3, 500])
    def test_text_length_bounds_accepted(self, length):
        q = Question(text="x" * length, question_type="text")
        assert len(q.text) == length

    def test_text_too_short(self):
        with pytest.raises(ValidationError, match="at least 3 characters"):
            Question(text="ab", question_type="text")

    def test_text_too_long(self):
        with pytest.raises(ValidationError, match="cannot exceed 500 characters"):
            Question(text="x" * 501, question_type="text")

    def test_invalid_type(self):
        with pytest.raises(ValidationError, match="Invalid question type"):
            Question(text="What?", question_type="slider")

    def test_choice_type_without_choices(self):
        with pytest.raises(ValidationError, match="Choices are required"):
            Question(text="Pick one", question_type="dropdown")

    def test_choice_type_with_one_choice(self):
        with pytest.raises(ValidationError, match="At least 2 choices"):
            Question(text="Pick one", question_type="checkbox", choices=["A"])

    def test_duplicate_choices(self):
        with pytest.raises(ValidationError, match="Duplicate choices"):
            radio(["A", "A"])

    def test_text_checked_before_type(self):
        """validate_question stops at the first failure."""
        with pytest.raises(ValidationError, match="at least 3 characters"):
            Question(text="", question_type="slider")

    def test_non_choice_type_keeps_given_choices(self):
        """Choices on a non-choice type are accepted as given, not cleared."""
        q = Question(text="Your name?", question_type="text", choices=["A", "B"])
        assert q.choices == ["A", "B"]
        assert q.validate_choices()
        with pytest.raises(ValidationError, match="not applicable"):
            q.add_choice("C")

    def test_from_dict(self):
        q = Question.from_dict(
            {"id": "q9", "text": "Rate us", "questionType": "rating", "choices": []}
        )
        assert q.id == "q9"
        assert q.question_type == QuestionType.RATING
        assert q.choices == []


class TestChoiceManagement:
    """Test add/remove/update/reorder of choices."""

    def test_add_choice(self):
        q = radio()
        assert q.add_choice("C") == ["A", "B", "C"]

    def test_add_choice_to_text_question(self):
        q = Question(text="Your name?", question_type="text")
        with pytest.raises(ValidationError, match="not applicable"):
            q.add_choice("A")

    @pytest.mark.parametrize("choice", ["", "   "])
    def test_add_blank_choice(self, choice):
        with pytest.raises(ValidationError, match="cannot be empty"):
            radio().add_choice(choice)

    def test_add_duplicate_choice(self):
        with pytest.raises(ValidationError, match="Duplicate choice"):
            radio().add_choice("A")

    def test_remove_choice_twice(self):
        """Removing from a two-choice question fails."""
        q = radio(["A", "B", "C"])
        assert q.remove_choice(0) == ["B", "C"]
        with pytest.raises(ValidationError, match="minimum 2 choices"):
            q.remove_choice(0)
        assert q.choices == ["B", "C"]

    def test_remove_choice_at_two(self):
        with pytest.raises(ValidationError, match="minimum 2 choices"):
            radio().remove_choice(0)

    @pytest.mark.parametrize("index", [-1, 3])
    def test_remove_choice_bad_index(self, index):
        with pytest.raises(ValidationError, match="Invalid choice index"):
            radio(["A", "B", "C"]).remove_choice(index)

    def test_update_choice(self):
        q = radio()
        assert q.update_choice(1, "Z") == ["A", "Z"]

    def test_update_choice_to_same_text(self):
        """The target index itself is not a duplicate."""
        q = radio()
        assert q.update_choice(0, "A") == ["A", "B"]

    def test_update_choice_duplicate(self):
        with pytest.raises(ValidationError, match="Duplicate choice"):
            radio().update_choice(0, "B")

    def test_update_choice_blank(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            radio().update_choice(0, " ")

    def test_update_choice_bad_index(self):
        with pytest.raises(ValidationError, match="Invalid choice index"):
            radio().update_choice(2, "C")

    def test_reorder_choices(self):
        q = radio(["A", "B", "C"])
        assert q.reorder_choices([2, 0, 1]) == ["C", "A", "B"]

    def test_reorder_is_not_checked_as_permutation(self):
        q = radio(["A", "B", "C"])
        assert q.reorder_choices([0, 0, 1]) == ["A", "A", "B"]

    @pytest.mark.parametrize("order", [[0], [0, 1, 2], []])
    def test_reorder_length_mismatch(self, order):
        with pytest.raises(ValidationError, match="Invalid reorder array"):
            radio().reorder_choices(order)

    def test_reorder_index_out_of_bounds(self):
        q = radio()
        with pytest.raises(ValidationError, match="Invalid index in reorder array"):
            q.reorder_choices([0, 2])
        assert q.choices == ["A", "B"]


class TestTextAndType:
    """Test text updates and type changes."""

    def test_update_text(self):
        q = radio()
        assert q.update_text("Choose wisely") == "Choose wisely"
        assert q.text == "Choose wisely"

    def test_update_text_invalid_keeps_old(self):
        q = radio()
        with pytest.raises(ValidationError):
            q.update_text("no")
        assert q.text == "Pick one"

    @pytest.mark.parametrize("new_type", ["dropdown", "radio", "checkbox"])
    def test_non_choice_to_choice_installs_defaults(self, new_type):
        q = Question(text="Your name?", question_type="text")
        assert q.change_question_type(new_type) == new_type
        assert q.choices == ["Option 1", "Option 2"]

    @pytest.mark.parametrize("new_type", ["text", "rating"])
    def test_choice_to_non_choice_clears(self, new_type):
        q = radio(["A", "B", "C"])
        q.change_question_type(new_type)
        assert q.choices == []
        assert not q.is_choice_based_type()

    def test_choice_to_choice_keeps_choices(self):
        q = radio(["A", "B", "C"])
        q.change_question_type(QuestionType.CHECKBOX)
        assert q.question_type is QuestionType.CHECKBOX
        assert q.choices == ["A", "B", "C"]

    def test_non_choice_to_non_choice(self):
        q = Question(text="Rate us", question_type="rating")
        q.change_question_type("text")
        assert q.choices == []

    def test_change_to_invalid_type(self):
        q = radio()
        with pytest.raises(ValidationError, match="Invalid question type"):
            q.change_question_type("matrix")
        assert q.question_type is QuestionType.RADIO


class TestUtilities:
    """Test clone, queries and dict projection."""

    def test_clone(self):
        q = radio(["A", "B", "C"])
        copy = q.clone()
        assert copy.id != q.id
        assert copy.text == q.text
        assert copy.question_type == q.question_type
        assert copy.choices == q.choices
        assert copy.choices is not q.choices

    def test_queries(self):
        q = radio()
        assert q.is_choice_based_type()
        assert q.get_choice_count() == 2
        assert q.has_choice("A")
        assert not q.has_choice("C")

    def test_to_dict(self):
        q = radio(id="q1")
        assert q.to_dict() == {
            "id": "q1",
            "text": "Pick one",
            "questionType": "radio",
            "choices": ["A", "B"],
        }
        assert type(q.to_dict()["questionType"]) is str


class TestValidateAnswer:
    """Test type-directed answer validation."""

    def test_text_answer(self):
        q = Question(text="Your name?", question_type="text")
        assert q.validate_answer("Ada")
        with pytest.raises(ValidationError, match="must be a string"):
            q.validate_answer(42)

    @pytest.mark.parametrize("qtype", ["radio", "dropdown"])
    def test_single_choice_answer(self, qtype):
        q = Question(text="Pick one", question_type=qtype, choices=["A", "B"])
        assert q.validate_answer("A")
        with pytest.raises(ValidationError, match="one of the available choices"):
            q.validate_answer("C")
        with pytest.raises(ValidationError, match="must be a string"):
            q.validate_answer(["A"])

    def test_checkbox_answer(self):
        q = Question(text="Pick some", question_type="checkbox", choices=["A", "B"])
        assert q.validate_answer(["A", "B"])
        assert q.validate_answer([])

    def test_checkbox_names_invalid_choice(self):
        """An answer of ["A", "C"] fails naming "C"."""
        q = Question(text="Pick some", question_type="checkbox", choices=["A", "B"])
        with pytest.raises(ValidationError, match='"C" is not a valid choice'):
            q.validate_answer(["A", "C"])

    def test_checkbox_requires_list(self):
        q = Question(text="Pick some", question_type="checkbox", choices=["A", "B"])
        with pytest.raises(ValidationError, match="must be a list"):
            q.validate_answer("A")

    @pytest.mark.parametrize("answer", [1, 3, 5, 4.5])
    def test_rating_in_range(self, answer):
        q = Question(text="Rate us", question_type="rating")
        assert q.validate_answer(answer)

    @pytest.mark.parametrize("answer", [0, 6, -1, 5.5])
    def test_rating_out_of_range(self, answer):
        q = Question(text="Rate us", question_type="rating")
        with pytest.raises(ValidationError, match="between 1 and 5"):
            q.validate_answer(answer)

    @pytest.mark.parametrize("answer", ["3", True, None])
    def test_rating_requires_number(self, answer):
        q = Question(text="Rate us", question_type="rating")
        with pytest.raises(ValidationError, match="must be a number"):
            q.validate_answer(answer)

    def test_unknown_type(self):
        q = Question(text="Rate us", question_type="rating")
        q.question_type = "slider"
        with pytest.raises(ValidationError, match="Unknown question type"):
            q.validate_answer(3)
