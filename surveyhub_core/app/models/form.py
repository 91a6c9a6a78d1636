from typing import TYPE_CHECKING, List

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql.sqltypes import JSON

from surveyhub_core.db.base_class import Base

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class Form(Base):
    id = Column(Integer, primary_key=True, index=True)

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # collect_email, allow_response_edit, show_progress_bar, ...
    settings = Column(JSON, nullable=False, default=dict)

    start_at = Column(DateTime(timezone=True), nullable=True)
    end_at = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    sections: List["Section"] = relationship(  # type: ignore
        "Section",
        back_populates="form",
        order_by="Section.order_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    questions: List["Question"] = relationship(  # type: ignore
        "Question",
        back_populates="form",
        order_by="Question.order_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    responses: List["FormResponse"] = relationship(  # type: ignore
        "FormResponse",
        back_populates="form",
        order_by="FormResponse.submitted_at.desc()",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
