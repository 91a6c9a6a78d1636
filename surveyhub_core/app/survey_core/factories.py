from typing import Any, Dict, List, Mapping

from surveyhub_core.app.survey_core.constants import (
    DEFAULT_MAX_FILE_SIZE,
    OPTION_BASED_TYPES,
)
from surveyhub_core.app.survey_core.utils import generate_id


def create_empty_response(form: Mapping[str, Any]) -> Dict[str, Any]:
    answers: Dict[Any, Any] = {}
    for question in form.get("questions") or []:
        if question["type"] == "checkbox":
            answers[question["id"]] = []
        elif question["type"] == "file-upload":
            answers[question["id"]] = {"files": [], "uploaded_metadata": []}
        else:
            answers[question["id"]] = ""
    return {
        "form_id": form.get("id"),
        "respondent_email": "",
        "answers": answers,
        "submitted_at": None,
        "metadata": {},
    }


def create_default_form() -> Dict[str, Any]:
    return {
        "id": generate_id(),
        "title": "Untitled form",
        "description": "",
        "questions": [],
        "settings": {
            "collect_email": False,
            "allow_response_edit": False,
            "show_progress_bar": True,
        },
    }


def create_default_option(order: int) -> Dict[str, Any]:
    return {"id": generate_id(), "label": f"Option {order + 1}", "order": order}


def default_config(type_name: str) -> Dict[str, Any]:
    if type_name in OPTION_BASED_TYPES:
        options: List[Dict[str, Any]] = [create_default_option(0)]
        return {"options": options}
    if type_name == "linear-scale":
        return {"min": 1, "max": 5, "min_label": "", "max_label": ""}
    if type_name == "file-upload":
        return {
            "allowed_extensions": [],
            "max_file_size": DEFAULT_MAX_FILE_SIZE,
            "allow_multiple": False,
        }
    return {}


def create_default_question(type_name: str, order: int = 0) -> Dict[str, Any]:
    return {
        "id": generate_id(),
        "type": type_name,
        "title": "",
        "description": "",
        "required": False,
        "order_index": order,
        "config": default_config(type_name),
    }
