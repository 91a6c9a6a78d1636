import logging

from sqlalchemy.engine import Engine

from surveyhub_core.db.base import Base

logger = logging.getLogger(__name__)

# make sure all SQL Alchemy models are imported (db.base) before initializing DB
# otherwise, SQL Alchemy might fail to initialize relationships properly


def init_db(engine: Engine) -> None:
    # There are no migrations; missing tables are created in place
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready: " + ", ".join(Base.metadata.tables.keys()))
