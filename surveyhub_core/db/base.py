# Import all the models, so that Base has them before being
# imported by init_db or used with metadata.create_all
from surveyhub_core.db.base_class import Base  # noqa
from surveyhub_core.app.models import (  # noqa
    Answer,
    FileMetadata,
    Form,
    FormResponse,
    Question,
    Section,
)
