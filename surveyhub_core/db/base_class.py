# flake8: noqa
from typing import Any, Dict

from sqlalchemy.ext.declarative import declared_attr
from sqlalchemy.orm import DeclarativeBase  # type: ignore


class Base(DeclarativeBase):
    __allow_unmapped__ = True

    # Generate __tablename__ automatically
    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower()

    # SQLite would otherwise hand a deleted row's id to the next insert,
    # and file metadata keeps plain question ids
    @declared_attr
    def __table_args__(cls) -> Dict[str, Any]:
        return {"sqlite_autoincrement": True}
