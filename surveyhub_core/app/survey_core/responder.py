import datetime
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from surveyhub_core.app.survey_core.factories import (
    create_default_form,
    create_empty_response,
)
from surveyhub_core.app.survey_core.utils import deep_clone
from surveyhub_core.app.survey_core.validation import validate_response

logger = logging.getLogger(__name__)

FileUploader = Callable[[Any, List[Any], Dict[str, Any]], List[Any]]


def _noop(*args: Any, **kwargs: Any) -> None:
    pass


def _no_upload(question_id: Any, files: List[Any], config: Dict[str, Any]) -> List[Any]:
    return []


def _is_answered(value: Any) -> bool:
    if isinstance(value, list):
        return len(value) > 0
    if isinstance(value, dict) and "files" in value:
        return len(value["files"]) > 0
    return bool(value) and str(value).strip() != ""


class Responder(object):
    """
    In-memory answer state for one respondent filling one form.

    `submit()` validates with `validate_response`, uploads the selected files
    through `on_file_upload` and hands the completed response to `on_submit`.
    """

    def __init__(
        self,
        form: Optional[Mapping[str, Any]] = None,
        *,
        on_change: Callable[[Dict[str, Any]], None] = _noop,
        on_submit: Callable[[Dict[str, Any]], None] = _noop,
        on_validation_error: Callable[[Dict[str, Any]], None] = _noop,
        on_file_upload: FileUploader = _no_upload,
    ) -> None:
        self.on_change = on_change
        self.on_submit = on_submit
        self.on_validation_error = on_validation_error
        self.on_file_upload = on_file_upload
        self.is_submitting = False
        self.set_form(form or create_default_form())

    def get_form(self) -> Dict[str, Any]:
        return deep_clone(self._form)

    def set_form(self, form: Mapping[str, Any]) -> None:
        self._form: Dict[str, Any] = deep_clone(form)
        self._form["questions"] = self.sorted_questions(self._form)
        self._response: Dict[str, Any] = create_empty_response(self._form)

    def get_response(self) -> Dict[str, Any]:
        return deep_clone(self._response)

    def set_response(self, response: Mapping[str, Any]) -> None:
        self._response = deep_clone(response)

    @staticmethod
    def sorted_questions(form: Mapping[str, Any]) -> List[Dict[str, Any]]:
        return sorted(form.get("questions") or [], key=lambda q: q.get("order_index") or 0)

    @property
    def questions(self) -> List[Dict[str, Any]]:
        return deep_clone(self._form["questions"])

    def _notify_change(self) -> None:
        self.on_change(deep_clone(self._response))

    def set_answer(self, question_id: Any, value: Any) -> None:
        self._response["answers"][question_id] = value
        self._notify_change()

    def set_email(self, email: str) -> None:
        self._response["respondent_email"] = email
        self._notify_change()

    def select_files(self, question_id: Any, files: List[Any]) -> None:
        slot = self._response["answers"].get(question_id)
        if not isinstance(slot, dict):
            slot = {"files": [], "uploaded_metadata": []}
            self._response["answers"][question_id] = slot
        slot["files"] = list(files)
        self._notify_change()

    def progress(self) -> float:
        """Percentage of required slots (questions plus email) filled in."""
        settings = self._form.get("settings") or {}
        collect_email = bool(settings.get("collect_email"))
        required = [q for q in self._form["questions"] if q.get("required")]

        total = len(required) + (1 if collect_email else 0)
        if total == 0:
            return 100.0

        answered = 0
        if collect_email and (self._response.get("respondent_email") or "").strip():
            answered += 1
        answers = self._response["answers"]
        answered += len([q for q in required if _is_answered(answers.get(q["id"]))])
        return answered / total * 100

    def validate(self) -> Dict[str, Any]:
        return validate_response(self._form, self._response)

    def submit(self) -> Optional[Dict[str, Any]]:
        if self.is_submitting:
            return None

        result = self.validate()
        if not result["valid"]:
            self.on_validation_error(result)
            return None

        self.is_submitting = True
        try:
            for question in self._form["questions"]:
                if question["type"] != "file-upload":
                    continue
                slot = self._response["answers"].get(question["id"])
                if isinstance(slot, dict) and slot.get("files"):
                    slot["uploaded_metadata"] = self.on_file_upload(
                        question["id"], slot["files"], question.get("config") or {}
                    )
            now = datetime.datetime.now(tz=datetime.timezone.utc)
            self._response["submitted_at"] = now.isoformat()
            response = deep_clone(self._response)
            self.on_submit(response)
            return response
        except Exception:
            logger.exception(f"Submitting response for form {self._form.get('id')} failed")
            raise
        finally:
            self.is_submitting = False
