from typing import Any, Optional

from pydantic import BaseModel


# Properties to receive via API on creation
class AnswerCreate(BaseModel):
    question_id: int
    # Strings are stored as is, anything else JSON encoded
    value: Any = None


class AnswerInDBBase(BaseModel):
    id: int
    question_id: int
    value: Optional[str] = None

    class Config:
        from_attributes = True


# Properties to return to client
class Answer(AnswerInDBBase):
    pass
