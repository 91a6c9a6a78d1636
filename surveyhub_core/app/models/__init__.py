# flake8: noqa

from .answer import Answer
from .file_metadata import FileMetadata
from .form import Form
from .form_response import FormResponse
from .question import Question
from .section import Section
