from typing import TYPE_CHECKING, List

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from surveyhub_core.db.base_class import Base

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class FormResponse(Base):
    __tablename__ = "response"  # type: ignore

    id = Column(Integer, primary_key=True, index=True)
    form_id = Column(
        Integer, ForeignKey("form.id", ondelete="CASCADE"), nullable=False, index=True
    )
    form: "Form" = relationship("Form", back_populates="responses")  # type: ignore

    email = Column(String, nullable=True)
    submitted_at = Column(DateTime(timezone=True), nullable=False)

    answers: List["Answer"] = relationship(  # type: ignore
        "Answer",
        back_populates="response",
        order_by="Answer.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    files: List["FileMetadata"] = relationship(  # type: ignore
        "FileMetadata",
        back_populates="response",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
