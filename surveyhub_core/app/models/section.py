from typing import TYPE_CHECKING, List

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from surveyhub_core.db.base_class import Base

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class Section(Base):
    id = Column(Integer, primary_key=True, index=True)
    form_id = Column(
        Integer, ForeignKey("form.id", ondelete="CASCADE"), nullable=False, index=True
    )
    form: "Form" = relationship("Form", back_populates="sections")  # type: ignore

    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)

    questions: List["Question"] = relationship(  # type: ignore
        "Question",
        back_populates="section",
        order_by="Question.order_index",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
