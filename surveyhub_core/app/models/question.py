from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql.sqltypes import JSON

from surveyhub_core.db.base_class import Base

if TYPE_CHECKING:
    from . import *  # noqa: F401, F403


class Question(Base):
    id = Column(Integer, primary_key=True, index=True)

    form_id = Column(
        Integer, ForeignKey("form.id", ondelete="CASCADE"), nullable=False, index=True
    )
    form: "Form" = relationship("Form", back_populates="questions")  # type: ignore

    # NULL means the question sits at the root of the form
    section_id = Column(
        Integer, ForeignKey("section.id", ondelete="CASCADE"), nullable=True, index=True
    )
    section: Optional["Section"] = relationship(  # type: ignore
        "Section", back_populates="questions"
    )

    type = Column(String, nullable=False)
    title = Column(String, nullable=False, default="")
    description = Column(Text, nullable=True)
    required = Column(Boolean, nullable=False, default=False)
    order_index = Column(Integer, nullable=False, default=0)

    # options, min/max, labels, allowed_extensions, ...
    config = Column(JSON, nullable=False, default=dict)

    attachment_filename = Column(String, nullable=True)
    attachment_stored_name = Column(String, nullable=True)
    attachment_content_type = Column(String, nullable=True)

    @property
    def has_attachment(self) -> bool:
        return self.attachment_stored_name is not None
