from typing import Optional

from sqlalchemy.orm import Session

from surveyhub_core.db.session import SessionLocal


# Data broker operates before the business logic.
# Its main job is to manage the data backend session of one request.
class DataBroker(object):
    def __init__(self) -> None:
        self.db: Optional[Session] = None

    def get_db(self) -> Session:
        if self.db is None:
            self.db = SessionLocal()
        return self.db

    def rollback(self) -> None:
        if self.db:
            self.db.rollback()

    def close(self) -> None:
        if self.db:
            self.db.commit()
            self.db.close()
