from typing import Any, List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from surveyhub_core.app import crud, models, schemas
from surveyhub_core.app.api import deps
from surveyhub_core.app.file_storage import FileStorage
from surveyhub_core.app.materialize import materializer

router = APIRouter()


@router.post("", response_model=schemas.Section, status_code=status.HTTP_201_CREATED)
def create_section(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
    section_in: schemas.SectionCreate,
) -> Any:
    section = crud.section.create_appended(db, form_id=form.id, obj_in=section_in)
    return materializer.section_schema_from_orm(section)


@router.get("", response_model=List[schemas.Section])
def get_sections(
    *,
    db: Session = Depends(deps.get_db),
    form: models.Form = Depends(deps.get_form),
) -> Any:
    return [
        materializer.section_schema_from_orm(s)
        for s in crud.section.get_by_form(db, form_id=form.id)
    ]


@router.get("/{section_id}", response_model=schemas.Section)
def get_section(
    *,
    db: Session = Depends(deps.get_db),
    form_id: int,
    section_id: int,
) -> Any:
    section = crud.section.get_in_form_or_404(db, form_id=form_id, id=section_id)
    return materializer.section_schema_from_orm(section)


@router.put("/{section_id}", response_model=schemas.Section)
def update_section(
    *,
    db: Session = Depends(deps.get_db),
    form_id: int,
    section_id: int,
    section_in: schemas.SectionUpdate,
) -> Any:
    section = crud.section.get_in_form_or_404(db, form_id=form_id, id=section_id)
    section = crud.section.update_partial(db, db_obj=section, obj_in=section_in)
    return materializer.section_schema_from_orm(section)


@router.delete("/{section_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_section(
    *,
    db: Session = Depends(deps.get_db),
    storage: FileStorage = Depends(deps.get_file_storage),
    form_id: int,
    section_id: int,
) -> Response:
    section = crud.section.get_in_form_or_404(db, form_id=form_id, id=section_id)
    crud.section.remove_and_resequence(db, db_obj=section, storage=storage)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
