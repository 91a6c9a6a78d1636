import logging
from typing import Any, List

from fastapi import APIRouter, Depends, File, Response, UploadFile, status
from sqlalchemy.orm import Session

from surveyhub_core.app import crud, models, schemas
from surveyhub_core.app.api import deps
from surveyhub_core.app.endpoint_utils import file_response, save_upload
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.materialize import materializer
from surveyhub_core.utils.errors import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=schemas.Question, status_code=status.HTTP_201_CREATED)
def create_question(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
    question_in: schemas.QuestionCreate,
) -> Any:
    question = crud.question.create_appended(db, form_id=form.id, obj_in=question_in)
    return materializer.question_schema_from_orm(question)


@router.get("", response_model=List[schemas.Question])
def get_questions(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
) -> Any:
    return [
        materializer.question_schema_from_orm(q)
        for q in crud.question.get_by_form(db, form_id=form.id)
    ]


# Declared before the /{question_id} routes so "reorder" isn't parsed as an id
@router.put("/reorder", response_model=List[schemas.Question])
def reorder_questions(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
    reorder_in: schemas.QuestionReorder,
) -> Any:
    questions = crud.question.reorder(db, form_id=form.id, items=reorder_in.questions)
    return [materializer.question_schema_from_orm(q) for q in questions]


@router.get("/{question_id}", response_model=schemas.Question)
def get_question(
    *,
    db: Session = Depends(deps.get_db),
    form_id: int,
    question_id: int,
) -> Any:
    question = crud.question.get_in_form_or_404(db, form_id=form_id, id=question_id)
    return materializer.question_schema_from_orm(question)


@router.put("/{question_id}", response_model=schemas.Question)
def update_question(
    *,
    db: Session = Depends(deps.get_db),
    form_id: int,
    question_id: int,
    question_in: schemas.QuestionUpdate,
) -> Any:
    question = crud.question.get_in_form_or_404(db, form_id=form_id, id=question_id)
    question = crud.question.update_partial(db, db_obj=question, obj_in=question_in)
    return materializer.question_schema_from_orm(question)


@router.delete("/{question_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_question(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    form_id: int,
    question_id: int,
) -> Response:
    question = crud.question.get_in_form_or_404(db, form_id=form_id, id=question_id)
    crud.question.remove_and_resequence(db, db_obj=question, storage=storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{question_id}/attachment",
    response_model=schemas.Question,
    status_code=status.HTTP_201_CREATED,
)
def upload_attachment(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    form_id: int,
    question_id: int,
    file: UploadFile = File(...),
) -> Any:
    question = crud.question.get_in_form_or_404(db, form_id=form_id, id=question_id)
    stored_name, _ = save_upload(storage, file)
    question = crud.question.set_attachment(
        db,
        db_obj=question,
        filename=file.filename or stored_name,
        stored_name=stored_name,
        content_type=file.content_type,
        storage=storage,
    )
    logger.info(f"Attached {stored_name} to question {question_id}")
    return materializer.question_schema_from_orm(question)


@router.get("/{question_id}/attachment")
def download_attachment(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    form_id: int,
    question_id: int,
) -> Response:
    question = crud.question.get_in_form_or_404(db, form_id=form_id, id=question_id)
    if not question.attachment_stored_name:
        raise NotFoundError(f"Question {question_id} has no attachment")
    data = storage.read(question.attachment_stored_name)
    return file_response(
        data,
        filename=question.attachment_filename,
        content_type=question.attachment_content_type,
    )


@router.delete("/{question_id}/attachment", status_code=status.HTTP_204_NO_CONTENT)
def delete_attachment(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    form_id: int,
    question_id: int,
) -> Response:
    question = crud.question.get_in_form_or_404(db, form_id=form_id, id=question_id)
    crud.question.clear_attachment(db, db_obj=question, storage=storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
