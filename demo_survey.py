#!/usr/bin/env python3
"""
Demo: Build the example survey, run the analyzer and export it.
"""

import argparse
import logging

from surveykit.analyzer import analyze_survey
from surveykit.examples import build_example_survey
from surveykit.serialization import save_survey


def print_report(report):
    """Pretty-print a SurveyReport."""
    print()
    print("=" * 70)
    print(f"SURVEY ANALYSIS REPORT: {report.survey_name}")
    print("=" * 70)
    print()

    print("BASIC METRICS")
    print(f"  Total Questions:       {report.total_questions}")
    print(f"  Total Users:           {report.total_users}")
    for qtype, count in sorted(report.questions_by_type.items()):
        print(f"    {qtype}: {count}")
    for permission, count in sorted(report.users_by_permission.items()):
        print(f"    {permission}: {count} user(s)")
    print()

    print("CHOICES")
    print(f"  Choice-based Questions:{report.choice_based_questions}")
    print(f"  Avg Choices/Question:  {report.avg_choices_per_question:.2f}")
    print()

    print("INTEGRITY")
    print(f"  Owners:                {report.owners}")
    print(f"  Invalid Questions:     {report.invalid_questions or 'None'}")
    print(f"  Survey Valid:          {'YES' if report.is_valid else 'NO'}")
    print()

    if report.warnings:
        print("WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("NO WARNINGS - Survey looks clean!")
    print()


def main():
    parser = argparse.ArgumentParser(description="Analyze and export the example survey")
    parser.add_argument("--output", default="example_survey.yaml",
                        help="Export path (.yaml/.yml for YAML, anything else for JSON)")
    parser.add_argument("--verbose", action="store_true", help="Show entity lifecycle logs")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    survey = build_example_survey()
    report = analyze_survey(survey)
    print_report(report)

    save_survey(survey, args.output)
    print(f"Survey exported to {args.output}")


if __name__ == "__main__":
    main()
