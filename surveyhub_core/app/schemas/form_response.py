import datetime
from typing import List, Optional

from pydantic import BaseModel

from surveyhub_core.app.schemas.answer import Answer, AnswerCreate


# Properties to receive via API on creation
class FormResponseCreate(BaseModel):
    email: Optional[str] = None
    answers: List[AnswerCreate] = []


# Properties to receive via API on update
class FormResponseUpdate(BaseModel):
    answers: List[AnswerCreate] = []


class FormResponseInDBBase(BaseModel):
    id: int
    form_id: int
    email: Optional[str] = None
    submitted_at: datetime.datetime

    class Config:
        from_attributes = True


# Properties to return to client
class FormResponse(FormResponseInDBBase):
    answers: List[Answer] = []
