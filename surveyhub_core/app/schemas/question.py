from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator

from surveyhub_core.utils.validators import validate_config, validate_order_index


# Shared properties
class QuestionBase(BaseModel):
    type: str
    title: str = ""
    description: Optional[str] = None
    required: bool = False
    config: Dict[str, Any] = {}


# Properties to receive via API on creation
class QuestionCreate(QuestionBase):
    section_id: Optional[int] = None
    # Only honoured when the question is created along with its form
    order_index: Optional[int] = None

    # Kept on a form update only when the form already holds this attachment
    attachment_filename: Optional[str] = None
    attachment_stored_name: Optional[str] = None
    attachment_content_type: Optional[str] = None

    @field_validator("order_index")
    @classmethod
    def _valid_order_index(cls, v: Optional[int]) -> Optional[int]:
        return validate_order_index(v)

    @field_validator("config", mode="before")
    @classmethod
    def _valid_config(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return validate_config(v)


# Properties to receive via API on update
class QuestionUpdate(BaseModel):
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    required: Optional[bool] = None
    order_index: Optional[int] = None
    config: Optional[Dict[str, Any]] = None

    @field_validator("order_index")
    @classmethod
    def _valid_order_index(cls, v: Optional[int]) -> Optional[int]:
        return validate_order_index(v)


class QuestionInDBBase(QuestionBase):
    id: int
    form_id: int
    section_id: Optional[int] = None
    order_index: int
    has_attachment: bool = False
    attachment_filename: Optional[str] = None
    attachment_stored_name: Optional[str] = None
    attachment_content_type: Optional[str] = None

    class Config:
        from_attributes = True


# Properties to return to client
class Question(QuestionInDBBase):
    pass


class QuestionPublic(BaseModel):
    id: int
    section_id: Optional[int] = None
    type: str
    title: str
    description: Optional[str] = None
    required: bool
    order_index: int
    config: Dict[str, Any] = {}
    has_attachment: bool = False
    attachment_filename: Optional[str] = None

    class Config:
        from_attributes = True


class QuestionOrder(BaseModel):
    id: int
    order_index: int
    section_id: Optional[int] = None

    @field_validator("order_index")
    @classmethod
    def _valid_order_index(cls, v: int) -> int:
        validate_order_index(v)
        return v


class QuestionReorder(BaseModel):
    questions: List[QuestionOrder]
