import logging
from typing import List

from sqlalchemy.orm import Session

from surveyhub_core.app.crud.base import CRUDBase
from surveyhub_core.app.crud.crud_file_metadata import file_metadata as crud_file_metadata
from surveyhub_core.app.crud.crud_question import question as crud_question
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.models.section import Section
from surveyhub_core.app.schemas.section import SectionCreate, SectionUpdate
from surveyhub_core.utils.errors import NotFoundError
from surveyhub_core.utils.validators import validate_section_title

logger = logging.getLogger(__name__)


class CRUDSection(CRUDBase[Section, SectionCreate, SectionUpdate]):
    def get_in_form_or_404(self, db: Session, *, form_id: int, id: int) -> Section:
        section = self.get(db, id=id)
        if section is None or section.form_id != form_id:
            raise NotFoundError(f"Section not found with id: {id}")
        return section

    def get_by_form(self, db: Session, *, form_id: int) -> List[Section]:
        return (
            db.query(Section)
            .filter(Section.form_id == form_id)
            .order_by(Section.order_index, Section.id)
            .all()
        )

    def build(self, obj_in: SectionCreate, *, order_index: int) -> Section:
        section = Section(
            title=obj_in.title,
            description=obj_in.description,
            order_index=order_index,
        )
        for i, q_in in enumerate(obj_in.questions):
            q = crud_question.build(
                q_in, order_index=q_in.order_index if q_in.order_index is not None else i
            )
            section.questions.append(q)
        return section

    def create_appended(
        self, db: Session, *, form_id: int, obj_in: SectionCreate
    ) -> Section:
        order_index = db.query(Section).filter(Section.form_id == form_id).count()
        db_obj = self.build(obj_in, order_index=order_index)
        db_obj.form_id = form_id
        for q in db_obj.questions:
            q.form_id = form_id
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def update_partial(
        self, db: Session, *, db_obj: Section, obj_in: SectionUpdate
    ) -> Section:
        update_data = obj_in.model_dump(exclude_unset=True)
        for field in ("title", "order_index"):
            if field in update_data and update_data[field] is None:
                del update_data[field]
        if "title" in update_data:
            update_data["title"] = validate_section_title(update_data["title"])
        return self.update(db, db_obj=db_obj, obj_in=update_data)

    def remove_and_resequence(
        self, db: Session, *, db_obj: Section, storage: FileStorage
    ) -> None:
        for q in db_obj.questions:
            storage.delete_quietly(q.attachment_stored_name)
        section_id, form_id, order_index = db_obj.id, db_obj.form_id, db_obj.order_index
        bound_files = crud_file_metadata.delete_by_questions(
            db, question_ids={q.id for q in db_obj.questions}
        )
        db.delete(db_obj)
        db.flush()
        shifted = (
            db.query(Section)
            .filter(Section.form_id == form_id, Section.order_index > order_index)
            .update(
                {Section.order_index: Section.order_index - 1},
                synchronize_session=False,
            )
        )
        db.commit()
        for stored_name in bound_files:
            storage.delete_quietly(stored_name)
        logger.info(f"Deleted section {section_id}, shifted {shifted} siblings")


section = CRUDSection(Section)
