"""
Serialization helpers for Survey objects.

JSON and YAML both go through the same dict projection (Survey.to_dict),
so the key names and casing are identical in either format:

    Survey:   id, Name, Description, Users, Questions
    Question: id, text, questionType, choices
    User:     id, UserName, Permission
"""
from __future__ import annotations

import json
import os
from typing import Any, Dict

import yaml

from surveykit.errors import SerializationError
from surveykit.survey import Survey

_YAML_EXTENSIONS = (".yaml", ".yml")


def _require_mapping(d: Any) -> Dict[str, Any]:
    if not isinstance(d, dict):
        raise SerializationError(f"Expected a survey mapping, got {type(d).__name__}")
    return d


def survey_to_json(s: Survey) -> str:
    return s.export_to_json()


def survey_from_json(s: str) -> Survey:
    try:
        d = json.loads(s)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Invalid survey JSON: {e}") from e
    return Survey.from_dict(_require_mapping(d))


def survey_to_yaml(s: Survey) -> str:
    return yaml.safe_dump(s.to_dict(), sort_keys=False, allow_unicode=True)


def survey_from_yaml(s: str) -> Survey:
    try:
        d = yaml.safe_load(s)
    except yaml.YAMLError as e:
        raise SerializationError(f"Invalid survey YAML: {e}") from e
    return Survey.from_dict(_require_mapping(d))


def _is_yaml_path(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in _YAML_EXTENSIONS


def save_survey(survey: Survey, path: str) -> None:
    """Write a survey to path as YAML (.yaml/.yml) or JSON (anything else)."""
    content = survey_to_yaml(survey) if _is_yaml_path(path) else survey_to_json(survey)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def load_survey(path: str) -> Survey:
    """Read a survey written by save_survey()."""
    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        raise FileNotFoundError(f"Survey file not found: {path}")
    if _is_yaml_path(path):
        return survey_from_yaml(content)
    return survey_from_json(content)
