import os.path
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..'))


import logging

from dotenv import load_dotenv  # isort:skip
load_dotenv()  # isort:skip

from surveyhub_core.app import crud, schemas
from surveyhub_core.db.init_db import init_db
from surveyhub_core.db.session import SessionLocal, engine

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


SAMPLE_FORM = schemas.FormCreate(
    title="Event feedback",
    description="Tell us how the event went.",
    settings={"collect_email": True, "show_progress_bar": True},
    sections=[
        schemas.SectionCreate(
            title="About you",
            questions=[
                schemas.QuestionCreate(type="short-text", title="Name", required=True),
                schemas.QuestionCreate(
                    type="dropdown",
                    title="Role",
                    config={
                        "options": [
                            {"id": "attendee", "label": "Attendee", "order": 0},
                            {"id": "speaker", "label": "Speaker", "order": 1},
                        ]
                    },
                ),
            ],
        ),
    ],
    questions=[
        schemas.QuestionCreate(
            type="linear-scale",
            title="Overall rating",
            required=True,
            config={"min": 1, "max": 5, "min_label": "Poor", "max_label": "Great"},
        ),
        schemas.QuestionCreate(type="long-text", title="Anything else?"),
    ],
)


def init() -> None:
    init_db(engine)
    db = SessionLocal()
    try:
        if not crud.form.get_all(db):
            form = crud.form.create_with_children(db, obj_in=SAMPLE_FORM)
            logger.info(f"Created sample form {form.id}")
    finally:
        db.close()


def main() -> None:
    logger.info("Creating initial data")
    init()
    logger.info("Initial data created")


if __name__ == "__main__":
    main()
