import random
import string
from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient

from surveyhub_core.app.config import settings


def random_short_lower_string() -> str:
    return "".join(random.choices(string.ascii_lowercase, k=4))


def random_lower_string() -> str:
    return "".join(random.choices(string.ascii_lowercase, k=32))


def random_email() -> str:
    return f"{random_short_lower_string()}@{random_short_lower_string()}.com"


def question_payload(type_name: str = "short-text", **kwargs: Any) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "type": type_name,
        "title": random_lower_string(),
        "required": False,
        "config": {},
    }
    data.update(kwargs)
    return data


def form_payload(
    *,
    questions: Optional[List[Dict[str, Any]]] = None,
    sections: Optional[List[Dict[str, Any]]] = None,
    **kwargs: Any,
) -> Dict[str, Any]:
    data: Dict[str, Any] = {
        "title": random_lower_string(),
        "description": "",
        "settings": {},
        "sections": sections if sections is not None else [],
        "questions": questions if questions is not None else [],
    }
    data.update(kwargs)
    return data


def create_random_form(client: TestClient, **kwargs: Any) -> Dict[str, Any]:
    if "questions" not in kwargs:
        kwargs["questions"] = [question_payload(), question_payload("long-text")]
    if "sections" not in kwargs:
        kwargs["sections"] = [
            {"title": "Part 1", "questions": [question_payload("date")]}
        ]
    r = client.post(f"{settings.API_STR}/forms", json=form_payload(**kwargs))
    assert r.status_code == 201, r.text
    return r.json()
