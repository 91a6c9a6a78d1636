"""
Client-side response validation.

Every check is a rule from `VALIDATION_RULES`; `validate_question_response`
and `validate_response` only evaluate that table against plain dicts, so
both are pure functions of their arguments.
"""
import re
from typing import Any, Callable, Dict, List, Mapping, NamedTuple

from surveyhub_core.app.survey_core.constants import DEFAULT_MAX_FILE_SIZE, TEXT_TYPES

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Rule(NamedTuple):
    message: Callable[..., str]
    validate: Callable[..., bool]


def _required(value: Any, question: Mapping[str, Any]) -> bool:
    if not question.get("required"):
        return True
    if isinstance(value, list):
        return len(value) > 0
    if isinstance(value, str):
        return value.strip() != ""
    if isinstance(value, dict) and "files" in value:
        return len(value["files"]) > 0
    return value is not None


def _email(value: Any) -> bool:
    if not value or not str(value).strip():
        return True
    return EMAIL_RE.match(str(value)) is not None


def _min_length(value: Any, question: Mapping[str, Any], min_: int) -> bool:
    if not value or not isinstance(value, str):
        return True
    return len(value) >= min_


def _max_length(value: Any, question: Mapping[str, Any], max_: int) -> bool:
    if not value or not isinstance(value, str):
        return True
    return len(value) <= max_


def _min_selection(value: Any, question: Mapping[str, Any], min_: int) -> bool:
    if not isinstance(value, list):
        return True
    return len(value) >= min_


def _max_selection(value: Any, question: Mapping[str, Any], max_: int) -> bool:
    if not isinstance(value, list):
        return True
    return len(value) <= max_


def _files(value: Any) -> List[Mapping[str, Any]]:
    if not isinstance(value, dict):
        return []
    return value.get("files") or []


def _file_size(value: Any, question: Mapping[str, Any], max_bytes: int) -> bool:
    return all((f.get("size") or 0) <= max_bytes for f in _files(value))


def _file_type(value: Any, question: Mapping[str, Any], allowed: List[str]) -> bool:
    if not allowed:
        return True
    allowed_lower = [a.lower() for a in allowed]
    for f in _files(value):
        name = f.get("name") or ""
        ext = "." + name.rsplit(".", 1)[-1].lower()
        if ext not in allowed_lower and ext[1:] not in allowed_lower:
            return False
    return True


VALIDATION_RULES: Dict[str, Rule] = {
    "required": Rule(lambda: "This question is required.", _required),
    "email": Rule(lambda: "Please enter a valid email address.", _email),
    "min_length": Rule(lambda n: f"Enter at least {n} characters.", _min_length),
    "max_length": Rule(lambda n: f"Enter at most {n} characters.", _max_length),
    "min_selection": Rule(lambda n: f"Select at least {n} options.", _min_selection),
    "max_selection": Rule(lambda n: f"Select at most {n} options.", _max_selection),
    "file_size": Rule(lambda mb: f"The file is too large (max: {mb}MB).", _file_size),
    "file_type": Rule(
        lambda types: f"File type not allowed (allowed: {', '.join(types)}).",
        _file_type,
    ),
}


def validate_question_response(
    question: Mapping[str, Any], value: Any
) -> Dict[str, Any]:
    errors: List[str] = []
    rules = VALIDATION_RULES
    config = question.get("config") or {}
    type_name = question.get("type")

    if not rules["required"].validate(value, question):
        errors.append(rules["required"].message())

    if type_name in TEXT_TYPES:
        for key in ("min_length", "max_length"):
            bound = config.get(key)
            if bound and not rules[key].validate(value, question, bound):
                errors.append(rules[key].message(bound))

    if type_name == "checkbox":
        for key in ("min_selection", "max_selection"):
            bound = config.get(key)
            if bound and not rules[key].validate(value, question, bound):
                errors.append(rules[key].message(bound))

    if type_name == "file-upload":
        max_size = config.get("max_file_size") or DEFAULT_MAX_FILE_SIZE
        if not rules["file_size"].validate(value, question, max_size):
            errors.append(rules["file_size"].message(round(max_size / (1024 * 1024))))
        allowed = config.get("allowed_extensions") or []
        if allowed and not rules["file_type"].validate(value, question, allowed):
            errors.append(rules["file_type"].message(allowed))

    return {"valid": len(errors) == 0, "errors": errors}


def validate_response(
    form: Mapping[str, Any], response: Mapping[str, Any]
) -> Dict[str, Any]:
    results: Dict[str, Any] = {"valid": True, "errors": {}, "question_errors": {}}

    settings = form.get("settings") or {}
    if settings.get("collect_email"):
        email = response.get("respondent_email") or ""
        if not email.strip():
            results["valid"] = False
            results["errors"]["email"] = ["Email is required."]
        elif not VALIDATION_RULES["email"].validate(email):
            results["valid"] = False
            results["errors"]["email"] = [VALIDATION_RULES["email"].message()]

    answers = response.get("answers") or {}
    for question in form.get("questions") or []:
        question_result = validate_question_response(
            question, answers.get(question["id"])
        )
        if not question_result["valid"]:
            results["valid"] = False
            results["question_errors"][question["id"]] = question_result["errors"]

    return results
