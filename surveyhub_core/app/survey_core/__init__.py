"""
Framework agnostic form building and answering logic.

Nothing in this package touches the network, the database or the file
system; the embedding application plugs those in through callbacks.
"""
from surveyhub_core.app.survey_core.builder import Builder
from surveyhub_core.app.survey_core.constants import OPTION_BASED_TYPES, QUESTION_TYPES
from surveyhub_core.app.survey_core.factories import (
    create_default_form,
    create_default_option,
    create_default_question,
    create_empty_response,
)
from surveyhub_core.app.survey_core.responder import Responder
from surveyhub_core.app.survey_core.utils import (
    deep_clone,
    escape_html,
    format_file_size,
    generate_id,
    is_image_file,
)
from surveyhub_core.app.survey_core.validation import (
    VALIDATION_RULES,
    validate_question_response,
    validate_response,
)

VERSION = "1.0.0"
