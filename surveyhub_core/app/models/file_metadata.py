from typing import TYPE_CHECKING, Optional

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from surveyhub_core.db.base_class import Base

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class FileMetadata(Base):
    __tablename__ = "file_metadata"  # type: ignore

    id = Column(Integer, primary_key=True, index=True)

    original_filename = Column(String, nullable=False)
    stored_filename = Column(String, nullable=False, unique=True)
    file_size = Column(Integer, nullable=False)
    content_type = Column(String, nullable=True)

    response_id = Column(
        Integer,
        ForeignKey("response.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    response: Optional["FormResponse"] = relationship(  # type: ignore
        "FormResponse", back_populates="files"
    )
    question_id = Column(Integer, nullable=True, index=True)

    # Set while the file is uploaded ahead of the response it belongs to
    temp_form_id = Column(Integer, nullable=True, index=True)
    temp_question_id = Column(Integer, nullable=True)

    uploaded_at = Column(DateTime(timezone=True), nullable=False)
