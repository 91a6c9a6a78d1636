import logging
from typing import Any, List

from sqlalchemy.orm import Session

from surveyhub_core.app.common import (
    allows_response_edit,
    check_response_window,
    collects_email,
)
from surveyhub_core.app.crud.base import CRUDBase
from surveyhub_core.app.crud.crud_answer import answer as crud_answer
from surveyhub_core.app.crud.crud_file_metadata import file_metadata as crud_file_metadata
from surveyhub_core.app.models.form import Form
from surveyhub_core.app.models.form_response import FormResponse
from surveyhub_core.app.schemas.answer import AnswerCreate
from surveyhub_core.app.schemas.form_response import (
    FormResponseCreate,
    FormResponseUpdate,
)
from surveyhub_core.utils.base import get_utc_now
from surveyhub_core.utils.errors import NotFoundError, ResponseEditForbiddenError

logger = logging.getLogger(__name__)


def _referenced_file_ids(value: Any) -> List[int]:
    # File answers are arrays of uploaded metadata objects
    if not isinstance(value, list):
        return []
    ids = []
    for item in value:
        if isinstance(item, dict) and item.get("id") is not None:
            try:
                ids.append(int(item["id"]))
            except (TypeError, ValueError):
                continue
    return ids


class CRUDFormResponse(CRUDBase[FormResponse, FormResponseCreate, FormResponseUpdate]):
    def get_in_form_or_404(
        self, db: Session, *, form_id: int, id: int
    ) -> FormResponse:
        response = self.get(db, id=id)
        if response is None or response.form_id != form_id:
            raise NotFoundError(f"Response not found with id: {id}")
        return response

    def get_by_form(self, db: Session, *, form_id: int) -> List[FormResponse]:
        return (
            db.query(FormResponse)
            .filter(FormResponse.form_id == form_id)
            .order_by(FormResponse.submitted_at.desc(), FormResponse.id.desc())
            .all()
        )

    def submit(
        self, db: Session, *, form: Form, obj_in: FormResponseCreate
    ) -> FormResponse:
        check_response_window(form.start_at, form.end_at)
        db_obj = self.model(form_id=form.id, submitted_at=get_utc_now())
        if collects_email(form.settings) and obj_in.email:
            db_obj.email = obj_in.email
        for a in obj_in.answers:
            db_obj.answers.append(crud_answer.build(a))
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)

        linked = self._link_files(db, response=db_obj, answers=obj_in.answers)
        if linked:
            db.commit()
            db.refresh(db_obj)
        logger.info(
            f"Response {db_obj.id} submitted to form {form.id} "
            f"with {len(db_obj.answers)} answers and {linked} files"
        )
        return db_obj

    def _link_files(
        self, db: Session, *, response: FormResponse, answers: List[AnswerCreate]
    ) -> int:
        linked = 0
        for a in answers:
            for file_id in _referenced_file_ids(a.value):
                if crud_file_metadata.link_to_response(
                    db, file_id=file_id, response=response, question_id=a.question_id
                ):
                    linked += 1
        return linked

    def update_answers(
        self,
        db: Session,
        *,
        form: Form,
        db_obj: FormResponse,
        obj_in: FormResponseUpdate,
    ) -> FormResponse:
        if not allows_response_edit(form.settings):
            raise ResponseEditForbiddenError("Response edit is not allowed for this form.")
        db_obj.answers.clear()
        for a in obj_in.answers:
            db_obj.answers.append(crud_answer.build(a))
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


form_response = CRUDFormResponse(FormResponse)
