from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from surveyhub_core.db.base_class import Base

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class Answer(Base):
    id = Column(Integer, primary_key=True, index=True)
    response_id = Column(
        Integer,
        ForeignKey("response.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    response: "FormResponse" = relationship(  # type: ignore
        "FormResponse", back_populates="answers"
    )

    # Not a foreign key: answers outlive edits that re-create the questions
    question_id = Column(Integer, nullable=False, index=True)

    # Non-string values are stored JSON encoded
    value = Column(Text, nullable=True)
