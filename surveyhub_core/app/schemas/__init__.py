# flake8: noqa

from .answer import Answer, AnswerCreate, AnswerInDBBase
from .file_metadata import FileMetadata, FileMetadataCreate, FileMetadataInDBBase
from .form import (
    Form,
    FormCreate,
    FormInDBBase,
    FormPublic,
    FormSummary,
    FormUpdate,
)
from .form_response import (
    FormResponse,
    FormResponseCreate,
    FormResponseInDBBase,
    FormResponseUpdate,
)
from .msg import GenericResponse, HealthResponse
from .question import (
    Question,
    QuestionCreate,
    QuestionInDBBase,
    QuestionOrder,
    QuestionPublic,
    QuestionReorder,
    QuestionUpdate,
)
from .section import (
    Section,
    SectionCreate,
    SectionInDBBase,
    SectionPublic,
    SectionUpdate,
)
