from typing import Any, List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from surveyhub_core.app import crud, models, schemas
from surveyhub_core.app.api import deps
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.materialize import materializer

router = APIRouter()


@router.post("", response_model=schemas.Form, status_code=status.HTTP_201_CREATED)
def create_form(
    *,
    db: Session = Depends(deps.get_db),
    form_in: schemas.FormCreate,
) -> Any:
    form = crud.form.create_with_children(db, obj_in=form_in)
    return materializer.form_schema_from_orm(form)


@router.get("", response_model=List[schemas.FormSummary])
def get_forms(
    db: Session = Depends(deps.get_db),
) -> Any:
    return [materializer.form_summary_schema_from_orm(f) for f in crud.form.get_all(db)]


@router.get("/{form_id}", response_model=schemas.Form)
def get_form(
    *,
    form: models.Form = Depends(deps.get_form),
) -> Any:
    return materializer.form_schema_from_orm(form)


@router.get("/{form_id}/public", response_model=schemas.FormPublic)
def get_public_form(
    *,
    form: models.Form = Depends(deps.get_form),
) -> Any:
    """
    Respondent view of a form: no settings blob, only what answering needs.
    """
    return materializer.public_form_schema_from_orm(form)


@router.put("/{form_id}", response_model=schemas.Form)
def update_form(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    form: models.Form = Depends(deps.get_form),
    form_in: schemas.FormUpdate,
) -> Any:
    form = crud.form.update_with_children(
        db, db_obj=form, obj_in=form_in, storage=storage
    )
    return materializer.form_schema_from_orm(form)


@router.delete("/{form_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_form(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    form: models.Form = Depends(deps.get_form),
) -> Response:
    crud.form.remove_with_files(db, db_obj=form, storage=storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
