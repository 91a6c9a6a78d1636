import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Query, Session

from surveyhub_core.app.crud.base import CRUDBase
from surveyhub_core.app.crud.crud_file_metadata import file_metadata as crud_file_metadata
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.models.question import Question
from surveyhub_core.app.models.section import Section
from surveyhub_core.app.schemas.question import (
    QuestionCreate,
    QuestionOrder,
    QuestionUpdate,
)
from surveyhub_core.utils.base import dedup
from surveyhub_core.utils.errors import NotFoundError
from surveyhub_core.utils.validators import check_question_type

logger = logging.getLogger(__name__)

# Columns that can't be cleared through a partial update
_NON_NULLABLE_FIELDS = {"type", "title", "required", "order_index", "config"}


class CRUDQuestion(CRUDBase[Question, QuestionCreate, QuestionUpdate]):
    def get_in_form_or_404(self, db: Session, *, form_id: int, id: int) -> Question:
        question = self.get(db, id=id)
        if question is None or question.form_id != form_id:
            raise NotFoundError(f"Question not found with id: {id}")
        return question

    def get_by_form(self, db: Session, *, form_id: int) -> List[Question]:
        return (
            db.query(Question)
            .filter(Question.form_id == form_id)
            .order_by(
                Question.section_id.isnot(None),
                Question.section_id,
                Question.order_index,
                Question.id,
            )
            .all()
        )

    def get_root(self, db: Session, *, form_id: int) -> List[Question]:
        return (
            self._scope(db, form_id=form_id, section_id=None)
            .order_by(Question.order_index, Question.id)
            .all()
        )

    def _scope(self, db: Session, *, form_id: int, section_id: Optional[int]) -> Query:
        # A question's siblings share its section, or the form root
        if section_id is not None:
            return db.query(Question).filter(Question.section_id == section_id)
        return db.query(Question).filter(
            Question.form_id == form_id, Question.section_id.is_(None)
        )

    def build(
        self, obj_in: QuestionCreate, *, order_index: int, section_id: Optional[int] = None
    ) -> Question:
        check_question_type(obj_in.type)
        return Question(
            section_id=section_id,
            type=obj_in.type,
            title=obj_in.title,
            description=obj_in.description,
            required=obj_in.required,
            order_index=order_index,
            config=obj_in.config,
            attachment_filename=obj_in.attachment_filename,
            attachment_stored_name=obj_in.attachment_stored_name,
            attachment_content_type=obj_in.attachment_content_type,
        )

    def create_appended(
        self, db: Session, *, form_id: int, obj_in: QuestionCreate
    ) -> Question:
        if obj_in.section_id is not None:
            section = db.get(Section, obj_in.section_id)
            if section is None or section.form_id != form_id:
                raise NotFoundError(f"Section not found with id: {obj_in.section_id}")
        order_index = self._scope(
            db, form_id=form_id, section_id=obj_in.section_id
        ).count()
        db_obj = self.build(obj_in, order_index=order_index, section_id=obj_in.section_id)
        db_obj.form_id = form_id
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_partial(
        self, db: Session, *, db_obj: Question, obj_in: QuestionUpdate
    ) -> Question:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field in _NON_NULLABLE_FIELDS:
            if field in update_data and update_data[field] is None:
                del update_data[field]
        if "type" in update_data:
            check_question_type(update_data["type"])
        return self.update(db, db_obj=db_obj, obj_in=update_data)

    def shift_after(
        self, db: Session, *, form_id: int, section_id: Optional[int], order_index: int
    ) -> int:
        return self._scope(db, form_id=form_id, section_id=section_id).filter(
            Question.order_index > order_index
        ).update(
            {Question.order_index: Question.order_index - 1},
            synchronize_session=False,
        )

    def remove_and_resequence(
        self, db: Session, *, db_obj: Question, storage: FileStorage
    ) -> None:
        attachment = db_obj.attachment_stored_name
        question_id, form_id, section_id, order_index = (
            db_obj.id,
            db_obj.form_id,
            db_obj.section_id,
            db_obj.order_index,
        )
        bound_files = crud_file_metadata.delete_by_questions(
            db, question_ids={question_id}
        )
        db.delete(db_obj)
        db.flush()
        shifted = self.shift_after(
            db, form_id=form_id, section_id=section_id, order_index=order_index
        )
        db.commit()
        storage.delete_quietly(attachment)
        for stored_name in bound_files:
            storage.delete_quietly(stored_name)
        logger.info(f"Deleted question {question_id}, shifted {shifted} siblings")

    def reorder(
        self, db: Session, *, form_id: int, items: List[QuestionOrder]
    ) -> List[Question]:
        question_ids = dedup([item.id for item in items])
        section_ids = dedup(
            [item.section_id for item in items if item.section_id is not None]
        )
        questions: Dict[int, Question] = {
            q.id: q
            for q in db.query(Question).filter(Question.id.in_(question_ids)).all()
        }
        sections: Dict[int, Section] = {
            s.id: s for s in db.query(Section).filter(Section.id.in_(section_ids)).all()
        }
        # Everything is checked before the first mutation
        for item in items:
            question = questions.get(item.id)
            if question is None or question.form_id != form_id:
                raise NotFoundError(f"Question not found with id: {item.id}")
            if item.section_id is not None:
                section = sections.get(item.section_id)
                if section is None or section.form_id != form_id:
                    raise NotFoundError(f"Section not found with id: {item.section_id}")
        for item in items:
            questions[item.id].order_index = item.order_index
            questions[item.id].section_id = item.section_id
        db.commit()
        return self.get_by_form(db, form_id=form_id)

    def set_attachment(
        self,
        db: Session,
        *,
        db_obj: Question,
        filename: str,
        stored_name: str,
        content_type: Optional[str],
        storage: FileStorage,
    ) -> Question:
        previous = db_obj.attachment_stored_name
        db_obj.attachment_filename = filename
        db_obj.attachment_stored_name = stored_name
        db_obj.attachment_content_type = content_type
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        if previous and previous != stored_name:
            storage.delete_quietly(previous)
        return db_obj

    def clear_attachment(
        self, db: Session, *, db_obj: Question, storage: FileStorage
    ) -> Question:
        if not db_obj.has_attachment:
            raise NotFoundError(f"Question {db_obj.id} has no attachment")
        storage.delete_quietly(db_obj.attachment_stored_name)
        db_obj.attachment_filename = None
        db_obj.attachment_stored_name = None
        db_obj.attachment_content_type = None
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj


question = CRUDQuestion(Question)
