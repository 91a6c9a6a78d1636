from typing import Any, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from surveyhub_core.app import crud, models, schemas
from surveyhub_core.app.api import deps
from surveyhub_core.app.materialize import materializer

router = APIRouter()


@router.post(
    "", response_model=schemas.FormResponse, status_code=status.HTTP_201_CREATED
)
def submit_response(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
    response_in: schemas.FormResponseCreate,
) -> Any:
    """
    Answers are stored as submitted; checking them against the question
    config is the client's job.
    """
    response = crud.form_response.submit(db, form=form, obj_in=response_in)
    return materializer.form_response_schema_from_orm(response)


@router.get("", response_model=List[schemas.FormResponse])
def get_responses(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
) -> Any:
    return [
        materializer.form_response_schema_from_orm(r)
        for r in crud.form_response.get_by_form(db, form_id=form.id)
    ]


@router.get("/{response_id}", response_model=schemas.FormResponse)
def get_response(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
    response_id: int,
) -> Any:
    response = crud.form_response.get_in_form_or_404(
        db, form_id=form.id, id=response_id
    )
    return materializer.form_response_schema_from_orm(response)


@router.put("/{response_id}", response_model=schemas.FormResponse)
def update_response(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
    response_id: int,
    response_in: schemas.FormResponseUpdate,
) -> Any:
    response = crud.form_response.get_in_form_or_404(
        db, form_id=form.id, id=response_id
    )
    response = crud.form_response.update_answers(
        db, form=form, db_obj=response, obj_in=response_in
    )
    return materializer.form_response_schema_from_orm(response)
