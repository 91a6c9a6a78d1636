from typing import List, Optional

from pydantic import BaseModel, field_validator

from surveyhub_core.app.schemas.question import (
    Question,
    QuestionCreate,
    QuestionPublic,
)
from surveyhub_core.utils.validators import validate_order_index, validate_section_title


# Shared properties
class SectionBase(BaseModel):
    title: str = ""
    description: Optional[str] = None


# Properties to receive via API on creation
class SectionCreate(SectionBase):
    # Only honoured when the section is created along with its form
    order_index: Optional[int] = None
    questions: List[QuestionCreate] = []

    @field_validator("title")
    @classmethod
    def _valid_title(cls, v: str) -> str:
        return validate_section_title(v)

    @field_validator("order_index")
    @classmethod
    def _valid_order_index(cls, v: Optional[int]) -> Optional[int]:
        return validate_order_index(v)


# Properties to receive via API on update
class SectionUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    order_index: Optional[int] = None

    @field_validator("order_index")
    @classmethod
    def _valid_order_index(cls, v: Optional[int]) -> Optional[int]:
        return validate_order_index(v)


class SectionInDBBase(SectionBase):
    id: int
    form_id: int
    order_index: int

    class Config:
        from_attributes = True


# Properties to return to client
class Section(SectionInDBBase):
    questions: List[Question] = []


class SectionPublic(SectionBase):
    id: int
    order_index: int
    questions: List[QuestionPublic] = []
