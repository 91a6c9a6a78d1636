import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from surveyhub_core.app import crud, schemas
from surveyhub_core.app.api import deps
from surveyhub_core.app.common import is_dev
from surveyhub_core.utils.base import HTTPException_

logger = logging.getLogger(__name__)


router = APIRouter()


@router.delete("/reset", response_model=schemas.GenericResponse)
def reset_database(
    *,
    db: Session = Depends(deps.get_db),
) -> Any:
    """
    Wipe every form and everything hanging off it. Dev only.

    Uploaded files stay on disk.
    """
    if not is_dev():
        raise HTTPException_(
            status_code=403, detail="Admin tools are only available in dev."
        )
    # Children first so no row ever points at a deleted parent
    ordered = [
        crud.answer,
        crud.file_metadata,
        crud.form_response,
        crud.question,
        crud.section,
        crud.form,
    ]
    counts = {}
    try:
        for c in ordered:
            counts[c.label] = c.delete_all(db)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Database reset failed")
        raise HTTPException_(status_code=500, detail="Could not reset the database.")
    logger.info(f"Database reset: {counts}")
    return schemas.GenericResponse(msg=f"Deleted {sum(counts.values())} rows.")
