import logging
from typing import Any, List

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status
from sqlalchemy.orm import Session

from surveyhub_core.app import crud, schemas
from surveyhub_core.app.api import deps
from surveyhub_core.app.endpoint_utils import file_response, save_upload
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.materialize import materializer

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/files/upload",
    response_model=schemas.FileMetadata,
    status_code=status.HTTP_201_CREATED,
)
def upload_temp_file(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    file: UploadFile = File(...),
    form_id: int = Form(...),
    question_id: int = Form(...),
) -> Any:
    """
    Uploads a file before its response exists. Submitting a response whose
    answer references the returned id links the file to it.
    """
    stored_name, size = save_upload(storage, file)
    file_metadata = crud.file_metadata.create(
        db,
        obj_in=schemas.FileMetadataCreate(
            original_filename=file.filename or stored_name,
            stored_filename=stored_name,
            file_size=size,
            content_type=file.content_type,
            temp_form_id=form_id,
            temp_question_id=question_id,
        ),
    )
    logger.info(
        f"Temp file {file_metadata.id} saved for form {form_id} question {question_id}"
    )
    return materializer.file_metadata_schema_from_orm(file_metadata)


@router.post(
    "/responses/{response_id}/questions/{question_id}/files",
    response_model=schemas.FileMetadata,
    status_code=status.HTTP_201_CREATED,
)
def upload_response_file(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    response_id: int,
    question_id: int,
    file: UploadFile = File(...),
) -> Any:
    response = crud.form_response.get_or_404(db, id=response_id)
    question = crud.question.get_or_404(db, id=question_id)
    stored_name, size = save_upload(storage, file)
    file_metadata = crud.file_metadata.create(
        db,
        obj_in=schemas.FileMetadataCreate(
            original_filename=file.filename or stored_name,
            stored_filename=stored_name,
            file_size=size,
            content_type=file.content_type,
            response_id=response.id,
            question_id=question.id,
        ),
    )
    return materializer.file_metadata_schema_from_orm(file_metadata)


@router.get("/files/{file_id}")
def download_file(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    file_id: int,
) -> Response:
    file_metadata = crud.file_metadata.get_or_404(db, id=file_id)
    data = storage.read(file_metadata.stored_filename)
    return file_response(
        data,
        filename=file_metadata.original_filename,
        content_type=file_metadata.content_type,
    )


@router.get("/files/{file_id}/metadata", response_model=schemas.FileMetadata)
def get_file_metadata(
    *,
    db: Session = Depends(deps.get_db),
    file_id: int,
) -> Any:
    file_metadata = crud.file_metadata.get_or_404(db, id=file_id)
    return materializer.file_metadata_schema_from_orm(file_metadata)


@router.delete("/files/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    file_id: int,
) -> Response:
    file_metadata = crud.file_metadata.get_or_404(db, id=file_id)
    crud.file_metadata.remove_with_file(db, db_obj=file_metadata, storage=storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/responses/{response_id}/files", response_model=List[schemas.FileMetadata])
def get_response_files(
    *,
    db: Session = Depends(deps.get_db),
    response_id: int,
) -> Any:
    return [
        materializer.file_metadata_schema_from_orm(f)
        for f in crud.file_metadata.get_by_response(db, response_id=response_id)
    ]


@router.get("/questions/{question_id}/files", response_model=List[schemas.FileMetadata])
def get_question_files(
    *,
    db: Session = Depends(deps.get_db),
    question_id: int,
) -> Any:
    return [
        materializer.file_metadata_schema_from_orm(f)
        for f in crud.file_metadata.get_by_question(db, question_id=question_id)
    ]


@router.get(
    "/responses/{response_id}/questions/{question_id}/files",
    response_model=List[schemas.FileMetadata],
)
def get_response_question_files(
    *,
    db: Session = Depends(deps.get_db),
    response_id: int,
    question_id: int,
) -> Any:
    return [
        materializer.file_metadata_schema_from_orm(f)
        for f in crud.file_metadata.get_by_response_and_question(
            db, response_id=response_id, question_id=question_id
        )
    ]
