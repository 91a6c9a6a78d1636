import logging
from typing import Iterable, List, Set

from sqlalchemy.orm import Session

from surveyhub_core.app.crud.base import CRUDBase
from surveyhub_core.app.crud.crud_file_metadata import file_metadata as crud_file_metadata
from surveyhub_core.app.crud.crud_question import question as crud_question
from surveyhub_core.app.crud.crud_section import section as crud_section
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.models.form import Form
from surveyhub_core.app.models.question import Question
from surveyhub_core.app.models.section import Section
from surveyhub_core.app.schemas.form import FormCreate, FormUpdate
from surveyhub_core.utils.base import get_utc_now
from surveyhub_core.utils.validators import check_question_type

logger = logging.getLogger(__name__)


def _check_types(obj_in: FormCreate) -> None:
    # Reject the whole payload before anything is written
    for s in obj_in.sections:
        for q in s.questions:
            check_question_type(q.type)
    for q in obj_in.questions:
        check_question_type(q.type)


def _drop_foreign_attachments(questions: Iterable[Question], owned: Set[str]) -> None:
    # A question may only carry an attachment its form already holds,
    # and each one at most once
    available = set(owned)
    for q in questions:
        stored_name = q.attachment_stored_name
        if not stored_name:
            continue
        if stored_name in available:
            available.discard(stored_name)
        else:
            logger.warning(f"Dropping attachment {stored_name} not owned by the form")
            q.attachment_filename = None
            q.attachment_stored_name = None
            q.attachment_content_type = None


class CRUDForm(CRUDBase[Form, FormCreate, FormUpdate]):
    def get_all(self, db: Session) -> List[Form]:
        return db.query(Form).order_by(Form.created_at.desc(), Form.id.desc()).all()

    def _add_children(
        self, db_obj: Form, obj_in: FormCreate, *, owned_attachments: Set[str]
    ) -> None:
        for i, s_in in enumerate(obj_in.sections):
            section = crud_section.build(
                s_in, order_index=s_in.order_index if s_in.order_index is not None else i
            )
            db_obj.sections.append(section)
            for q in section.questions:
                db_obj.questions.append(q)
        for i, q_in in enumerate(obj_in.questions):
            db_obj.questions.append(
                crud_question.build(
                    q_in,
                    order_index=q_in.order_index if q_in.order_index is not None else i,
                )
            )
        _drop_foreign_attachments(db_obj.questions, owned_attachments)

    def create_with_children(self, db: Session, *, obj_in: FormCreate) -> Form:
        _check_types(obj_in)
        utc_now = get_utc_now()
        db_obj = self.model(
            title=obj_in.title,
            description=obj_in.description,
            settings=obj_in.settings,
            start_at=obj_in.start_at,
            end_at=obj_in.end_at,
            created_at=utc_now,
            updated_at=utc_now,
        )
        self._add_children(db_obj, obj_in, owned_attachments=set())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        logger.info(
            f"Created form {db_obj.id} with {len(db_obj.sections)} sections "
            f"and {len(db_obj.questions)} questions"
        )
        return db_obj

    def update_with_children(
        self, db: Session, *, db_obj: Form, obj_in: FormUpdate, storage: FileStorage
    ) -> Form:
        """
        Replaces the form's sections and questions with the submitted ones.

        Question ids change on every update. Attachments the form already held
        and the payload still carries survive; dropped ones are removed from
        disk after the commit. Any other attachment reference is ignored.
        """
        _check_types(obj_in)
        old_question_ids: Set[int] = {q.id for q in db_obj.questions}
        old_attachments: Set[str] = {
            q.attachment_stored_name for q in db_obj.questions if q.attachment_stored_name
        }
        orphaned_files = crud_file_metadata.delete_by_questions(
            db, question_ids=old_question_ids
        )
        db.query(Question).filter(Question.form_id == db_obj.id).delete(
            synchronize_session=False
        )
        db.query(Section).filter(Section.form_id == db_obj.id).delete(
            synchronize_session=False
        )
        db.flush()
        db.expire(db_obj, ["sections", "questions"])

        db_obj.title = obj_in.title
        db_obj.description = obj_in.description
        db_obj.settings = obj_in.settings
        db_obj.start_at = obj_in.start_at
        db_obj.end_at = obj_in.end_at
        db_obj.updated_at = get_utc_now()
        self._add_children(db_obj, obj_in, owned_attachments=old_attachments)
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)

        kept_attachments = {
            q.attachment_stored_name for q in db_obj.questions if q.attachment_stored_name
        }
        for stored_name in sorted(old_attachments - kept_attachments):
            storage.delete_quietly(stored_name)
        for stored_name in orphaned_files:
            storage.delete_quietly(stored_name)
        return db_obj

    def remove_with_files(
        self, db: Session, *, db_obj: Form, storage: FileStorage
    ) -> None:
        form_id = db_obj.id
        for q in db_obj.questions:
            storage.delete_quietly(q.attachment_stored_name)
        for f in crud_file_metadata.get_reachable_from_form(db, form_id=form_id):
            storage.delete_quietly(f.stored_filename)
            # Pending uploads have no cascading parent
            db.delete(f)
        db.delete(db_obj)
        db.commit()
        logger.info(f"Deleted form {form_id}")


form = CRUDForm(Form)
