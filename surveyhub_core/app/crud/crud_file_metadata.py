import logging
from typing import List, Set

from sqlalchemy.orm import Session

from surveyhub_core.app.crud.base import CRUDBase
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.models import FormResponse, Question
from surveyhub_core.app.models.file_metadata import FileMetadata
from surveyhub_core.app.schemas.file_metadata import FileMetadataCreate
from surveyhub_core.utils.base import get_utc_now

logger = logging.getLogger(__name__)


class CRUDFileMetadata(CRUDBase[FileMetadata, FileMetadataCreate, FileMetadataCreate]):
    def create(self, db: Session, *, obj_in: FileMetadataCreate) -> FileMetadata:
        db_obj = self.model(**obj_in.model_dump(), uploaded_at=get_utc_now())
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_response(self, db: Session, *, response_id: int) -> List[FileMetadata]:
        return (
            db.query(FileMetadata)
            .filter(FileMetadata.response_id == response_id)
            .order_by(FileMetadata.id)
            .all()
        )

    def get_by_question(self, db: Session, *, question_id: int) -> List[FileMetadata]:
        return (
            db.query(FileMetadata)
            .filter(FileMetadata.question_id == question_id)
            .order_by(FileMetadata.id)
            .all()
        )

    def get_by_response_and_question(
        self, db: Session, *, response_id: int, question_id: int
    ) -> List[FileMetadata]:
        return (
            db.query(FileMetadata)
            .filter(
                FileMetadata.response_id == response_id,
                FileMetadata.question_id == question_id,
            )
            .order_by(FileMetadata.id)
            .all()
        )

    def get_reachable_from_form(self, db: Session, *, form_id: int) -> List[FileMetadata]:
        """Files of the form's responses, questions and pending uploads."""
        response_ids = db.query(FormResponse.id).filter(FormResponse.form_id == form_id)
        question_ids = db.query(Question.id).filter(Question.form_id == form_id)
        return (
            db.query(FileMetadata)
            .filter(
                FileMetadata.response_id.in_(response_ids)
                | FileMetadata.question_id.in_(question_ids)
                | (FileMetadata.temp_form_id == form_id)
            )
            .all()
        )

    def delete_by_questions(self, db: Session, *, question_ids: Set[int]) -> List[str]:
        """Deletes the rows bound to the questions, returns their stored names."""
        if not question_ids:
            return []
        rows = (
            db.query(FileMetadata)
            .filter(FileMetadata.question_id.in_(question_ids))
            .all()
        )
        stored_names = [r.stored_filename for r in rows]
        for r in rows:
            db.delete(r)
        return stored_names

    def link_to_response(
        self, db: Session, *, file_id: int, response: FormResponse, question_id: int
    ) -> bool:
        db_obj = self.get(db, id=file_id)
        if db_obj is None:
            logger.warning(f"Submitted file {file_id} has no metadata, skipping link")
            return False
        db_obj.response_id = response.id
        db_obj.question_id = question_id
        db.add(db_obj)
        logger.info(
            f"Linked file {file_id} to response {response.id} and question {question_id}"
        )
        return True

    def remove_with_file(
        self, db: Session, *, db_obj: FileMetadata, storage: FileStorage
    ) -> None:
        file_id = db_obj.id
        storage.delete(db_obj.stored_filename)
        db.delete(db_obj)
        db.commit()
        logger.info(f"File deleted with id: {file_id}")


file_metadata = CRUDFileMetadata(FileMetadata)
