import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from surveyhub_core.app.survey_core.constants import OPTION_BASED_TYPES
from surveyhub_core.app.survey_core.factories import (
    create_default_form,
    create_default_option,
    create_default_question,
)
from surveyhub_core.app.survey_core.utils import deep_clone, generate_id

FormDict = Dict[str, Any]
QuestionDict = Dict[str, Any]


def _noop(*args: Any, **kwargs: Any) -> None:
    pass


class Builder(object):
    """
    In-memory form editor.

    Every mutation works on a private copy of the form; callbacks always
    receive deep copies so callers can't change the builder's state behind
    its back. Operations on unknown ids are no-ops.
    """

    def __init__(
        self,
        form: Optional[Mapping[str, Any]] = None,
        *,
        on_change: Callable[[FormDict], None] = _noop,
        on_question_add: Callable[[QuestionDict, int], None] = _noop,
        on_question_remove: Callable[[QuestionDict, int], None] = _noop,
        on_question_update: Callable[[QuestionDict], None] = _noop,
        on_save: Callable[[FormDict], None] = _noop,
    ) -> None:
        self._form: FormDict = deep_clone(form) if form else create_default_form()
        self._form.setdefault("questions", [])
        self._sort()
        self.on_change = on_change
        self.on_question_add = on_question_add
        self.on_question_remove = on_question_remove
        self.on_question_update = on_question_update
        self.on_save = on_save
        self.active_question_id: Optional[str] = None

    @property
    def questions(self) -> List[QuestionDict]:
        return self._form["questions"]

    def get_form(self) -> FormDict:
        return deep_clone(self._form)

    def set_form(self, form: Mapping[str, Any]) -> None:
        self._form = deep_clone(form)
        self._form.setdefault("questions", [])
        self._sort()
        self.active_question_id = None

    def save(self) -> None:
        self.on_save(deep_clone(self._form))

    def _sort(self) -> None:
        self._form["questions"].sort(key=lambda q: q.get("order_index") or 0)

    def _resequence(self) -> None:
        for i, q in enumerate(self.questions):
            q["order_index"] = i

    def _find(self, question_id: str) -> Optional[QuestionDict]:
        for q in self.questions:
            if q["id"] == question_id:
                return q
        return None

    def _index_of(self, question_id: str) -> int:
        for i, q in enumerate(self.questions):
            if q["id"] == question_id:
                return i
        return -1

    def _notify_change(self) -> None:
        now = datetime.datetime.now(tz=datetime.timezone.utc)
        self._form["updated_at"] = now.isoformat()
        self.on_change(deep_clone(self._form))

    def set_title(self, title: str) -> None:
        self._form["title"] = title
        self._notify_change()

    def set_description(self, description: str) -> None:
        self._form["description"] = description
        self._notify_change()

    def add_question(self, type_name: str = "short-text") -> QuestionDict:
        order = len(self.questions)
        question = create_default_question(type_name, order)
        self.questions.append(question)
        self._notify_change()
        self.on_question_add(deep_clone(question), order)
        self.active_question_id = question["id"]
        return deep_clone(question)

    def remove_question(self, question_id: str) -> None:
        index = self._index_of(question_id)
        if index == -1:
            return
        removed = self.questions.pop(index)
        self._resequence()
        if self.active_question_id == question_id:
            self.active_question_id = None
        self._notify_change()
        self.on_question_remove(deep_clone(removed), index)

    def update_question(self, question_id: str, updates: Mapping[str, Any]) -> None:
        question = self._find(question_id)
        if question is None:
            return
        question.update(updates)
        self._notify_change()
        self.on_question_update(deep_clone(question))

    def change_question_type(self, question_id: str, new_type: str) -> None:
        question = self._find(question_id)
        if question is None:
            return
        old_type = question["type"]
        question["type"] = new_type
        if new_type in OPTION_BASED_TYPES and old_type not in OPTION_BASED_TYPES:
            question["config"] = question.get("config") or {}
            question["config"]["options"] = [create_default_option(0)]
        if new_type == "linear-scale":
            question["config"] = {"min": 1, "max": 5, "min_label": "", "max_label": ""}
        self._notify_change()

    def duplicate_question(self, question_id: str) -> Optional[QuestionDict]:
        original = self._find(question_id)
        if original is None:
            return None
        duplicate = deep_clone(original)
        duplicate["id"] = generate_id()
        duplicate["title"] = (original.get("title") or "") + " (copy)"
        duplicate["order_index"] = len(self.questions)
        options = (duplicate.get("config") or {}).get("options")
        if options:
            duplicate["config"]["options"] = [
                dict(opt, id=generate_id()) for opt in options
            ]
        self.questions.append(duplicate)
        self._notify_change()
        self.active_question_id = duplicate["id"]
        return deep_clone(duplicate)

    def reorder_questions(self, dragged_id: str, target_id: str) -> None:
        dragged_index = self._index_of(dragged_id)
        target_index = self._index_of(target_id)
        if dragged_index == -1 or target_index == -1:
            return
        dragged = self.questions.pop(dragged_index)
        self.questions.insert(target_index, dragged)
        self._resequence()
        self._notify_change()

    def add_option(self, question_id: str) -> None:
        question = self._find(question_id)
        if question is None:
            return
        config = question["config"] = question.get("config") or {}
        options = config.setdefault("options", [])
        options.append(create_default_option(len(options)))
        self._notify_change()

    def remove_option(self, question_id: str, option_id: str) -> None:
        question = self._find(question_id)
        if question is None:
            return
        options = (question.get("config") or {}).get("options")
        # A choice question keeps at least one option
        if not options or len(options) <= 1:
            return
        question["config"]["options"] = [o for o in options if o["id"] != option_id]
        self._notify_change()

    def update_option_label(self, question_id: str, option_id: str, label: str) -> None:
        question = self._find(question_id)
        if question is None:
            return
        for option in (question.get("config") or {}).get("options") or []:
            if option["id"] == option_id:
                option["label"] = label
                self._notify_change()
                return

    def update_question_config(self, question_id: str, field: str, value: Any) -> None:
        question = self._find(question_id)
        if question is None:
            return
        question["config"] = question.get("config") or {}
        question["config"][field] = value
        self._notify_change()

    def set_active_question(self, question_id: Optional[str]) -> None:
        self.active_question_id = question_id
