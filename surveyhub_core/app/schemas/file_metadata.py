import datetime
from typing import Optional

from pydantic import BaseModel


class FileMetadataCreate(BaseModel):
    original_filename: str
    stored_filename: str
    file_size: int
    content_type: Optional[str] = None
    response_id: Optional[int] = None
    question_id: Optional[int] = None
    temp_form_id: Optional[int] = None
    temp_question_id: Optional[int] = None


class FileMetadataInDBBase(FileMetadataCreate):
    id: int
    uploaded_at: datetime.datetime

    class Config:
        from_attributes = True


# Properties to return to client
class FileMetadata(FileMetadataInDBBase):
    pass
