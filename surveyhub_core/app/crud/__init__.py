from .crud_answer import answer
from .crud_file_metadata import file_metadata
from .crud_form import form
from .crud_form_response import form_response
from .crud_question import question
from .crud_section import section
