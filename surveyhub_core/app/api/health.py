import logging
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from surveyhub_core.app import schemas
from surveyhub_core.app.api import deps

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=schemas.HealthResponse)
def get_root() -> Any:
    return schemas.HealthResponse()


@router.get("/health", response_model=schemas.HealthResponse)
def get_health(db: Session = Depends(deps.get_db)) -> Any:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.exception("Health check could not reach the database")
        return schemas.HealthResponse(success=False, database="unreachable")
    return schemas.HealthResponse()
