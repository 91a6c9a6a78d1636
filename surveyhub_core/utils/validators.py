from typing import Any, Dict, Optional

from surveyhub_core.app.survey_core.constants import QUESTION_TYPES
from surveyhub_core.utils.errors import InvalidPayloadError


def validate_form_title(title: str) -> str:
    stripped = title.strip()
    if len(stripped) == 0:
        raise ValueError("Form title can't be empty.")
    return stripped


def validate_section_title(title: str) -> str:
    return title.strip()


def validate_order_index(order_index: Optional[int]) -> Optional[int]:
    if order_index is not None and order_index < 0:
        raise ValueError("Order index can't be negative.")
    return order_index


def validate_config(config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if config is None:
        return {}
    return config


def check_question_type(type_name: str) -> None:
    from surveyhub_core.app.config import settings

    if type_name not in QUESTION_TYPES:
        raise InvalidPayloadError(f"Unsupported question type: {type_name}")
    if type_name in settings.DISABLED_QUESTION_TYPES:
        raise InvalidPayloadError(
            f"The '{type_name}' question type is currently disabled."
        )
