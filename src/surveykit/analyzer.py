"""
Survey Analyzer — read-only diagnostics for Survey objects.

Surveys only check their aggregate invariant on request and
update_question() merges fields without validation, so a survey can
drift into a state its entities would reject. This module reports on
that without modifying anything:
    - Question and user inventory
    - Choice statistics
    - Questions that no longer validate
    - Duplicate ids
    - Warning flags
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from surveykit.errors import ValidationError
from surveykit.model import Permission
from surveykit.survey import Survey


@dataclass
class SurveyReport:
    """Analysis report for a survey."""

    survey_name: str
    total_questions: int = 0
    total_users: int = 0
    questions_by_type: Dict[str, int] = field(default_factory=dict)
    users_by_permission: Dict[str, int] = field(default_factory=dict)

    # Choices
    choice_based_questions: int = 0
    total_choices: int = 0
    avg_choices_per_question: float = 0.0

    # Integrity
    invalid_questions: Dict[str, str] = field(default_factory=dict)  # question id -> error
    duplicate_question_ids: List[str] = field(default_factory=list)
    duplicate_user_ids: List[str] = field(default_factory=list)
    owners: List[str] = field(default_factory=list)
    survey_error: Optional[str] = None

    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return (
            self.survey_error is None
            and not self.invalid_questions
            and not self.duplicate_question_ids
            and not self.duplicate_user_ids
        )

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def _duplicates(ids: List[str]) -> List[str]:
    return sorted(i for i, n in Counter(ids).items() if n > 1)


def analyze_survey(survey: Survey) -> SurveyReport:
    """
    Perform analysis of a Survey.

    Returns a SurveyReport with metrics and warnings.
    """
    report = SurveyReport(survey_name=survey.name)

    stats = survey.get_survey_stats()
    report.total_questions = stats.total_questions
    report.total_users = stats.total_users
    report.questions_by_type = stats.questions_by_type
    report.users_by_permission = stats.users_by_permission

    for question in survey.questions:
        if question.is_choice_based_type():
            report.choice_based_questions += 1
            report.total_choices += question.get_choice_count()
        try:
            question.validate_question()
        except ValidationError as e:
            report.invalid_questions[question.id] = str(e)

    if report.choice_based_questions:
        report.avg_choices_per_question = report.total_choices / report.choice_based_questions

    report.duplicate_question_ids = _duplicates([q.id for q in survey.questions])
    report.duplicate_user_ids = _duplicates([u.id for u in survey.users])
    report.owners = [u.id for u in survey.users if u.permission == Permission.OWNER]

    try:
        survey.validate_survey()
    except ValidationError as e:
        report.survey_error = str(e)

    # Warning flags
    if report.survey_error:
        report.add_warning(report.survey_error)

    if report.invalid_questions:
        report.add_warning(
            f"Invalid questions: {', '.join(sorted(report.invalid_questions))}"
        )

    if report.duplicate_question_ids:
        report.add_warning(
            f"Duplicate question ids: {', '.join(report.duplicate_question_ids)}"
        )

    if report.duplicate_user_ids:
        report.add_warning(
            f"Duplicate user ids: {', '.join(report.duplicate_user_ids)}"
        )

    if not report.owners:
        report.add_warning("Survey has no owner")

    if not survey.description:
        report.add_warning("Survey has no description")

    return report
