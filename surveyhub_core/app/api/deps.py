from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from surveyhub_core.app import crud, models
from surveyhub_core.app.config import settings
from surveyhub_core.app.data_broker import DataBroker
from surveyhub_core.app.file_storage import FileStorage


def get_data_broker() -> Generator:
    broker = DataBroker()
    try:
        yield broker
    except Exception:
        broker.rollback()
        raise
    finally:
        broker.close()


def get_db(
    broker: DataBroker = Depends(get_data_broker),
) -> Generator:
    yield broker.get_db()


def get_file_storage() -> FileStorage:
    return FileStorage(settings.UPLOAD_DIR, max_file_size=settings.MAX_FILE_SIZE)


def get_form(form_id: int, db: Session = Depends(get_db)) -> models.Form:
    return crud.form.get_or_404(db, id=form_id)
