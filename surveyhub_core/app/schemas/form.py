import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, field_validator, model_validator

from surveyhub_core.app.schemas.question import (
    Question,
    QuestionCreate,
    QuestionPublic,
)
from surveyhub_core.app.schemas.section import Section, SectionCreate, SectionPublic
from surveyhub_core.utils.validators import validate_config, validate_form_title


# Shared properties
class FormBase(BaseModel):
    title: str
    description: Optional[str] = None
    settings: Dict[str, Any] = {}
    start_at: Optional[datetime.datetime] = None
    end_at: Optional[datetime.datetime] = None


# Properties to receive via API on creation
class FormCreate(FormBase):
    sections: List[SectionCreate] = []
    questions: List[QuestionCreate] = []

    @field_validator("title")
    @classmethod
    def _valid_title(cls, v: str) -> str:
        return validate_form_title(v)

    @field_validator("settings", mode="before")
    @classmethod
    def _valid_settings(cls, v: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return validate_config(v)

    @model_validator(mode="after")
    def _valid_window(self) -> "FormCreate":
        if self.start_at and self.end_at and self.end_at < self.start_at:
            raise ValueError("The form can't close before it opens.")
        return self


# Update replaces the whole form, children included
class FormUpdate(FormCreate):
    pass


class FormInDBBase(FormBase):
    id: int
    created_at: datetime.datetime
    updated_at: datetime.datetime

    class Config:
        from_attributes = True


# Listing view, without children
class FormSummary(FormInDBBase):
    pass


# Properties to return to client
class Form(FormInDBBase):
    sections: List[Section] = []
    questions: List[Question] = []


class FormPublic(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    start_at: Optional[datetime.datetime] = None
    end_at: Optional[datetime.datetime] = None
    collect_email: bool = False
    sections: List[SectionPublic] = []
    questions: List[QuestionPublic] = []
