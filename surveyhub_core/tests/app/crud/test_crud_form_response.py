import datetime
import json

import pytest
from sqlalchemy.orm import Session

from surveyhub_core.app import crud
from surveyhub_core.app.models.form import Form
from surveyhub_core.app.schemas.answer import AnswerCreate
from surveyhub_core.app.schemas.file_metadata import FileMetadataCreate
from surveyhub_core.app.schemas.form import FormCreate
from surveyhub_core.app.schemas.form_response import (
    FormResponseCreate,
    FormResponseUpdate,
)
from surveyhub_core.app.schemas.question import QuestionCreate
from surveyhub_core.tests.utils.utils import random_email, random_lower_string
from surveyhub_core.utils.errors import (
    NotFoundError,
    ResponseEditForbiddenError,
    ResponsePeriodError,
)


def _create_form(db: Session, **kwargs) -> Form:
    return crud.form.create_with_children(
        db,
        obj_in=FormCreate(
            title=random_lower_string(),
            questions=[
                QuestionCreate(type="short-text", title="Name"),
                QuestionCreate(type="checkbox", title="Colors"),
                QuestionCreate(type="file-upload", title="Photo"),
            ],
            **kwargs,
        ),
    )


def test_submit_response(db: Session) -> None:
    form = _create_form(db)
    name_q, colors_q, _ = form.questions

    response = crud.form_response.submit(
        db,
        form=form,
        obj_in=FormResponseCreate(
            answers=[
                AnswerCreate(question_id=name_q.id, value="Ada"),
                AnswerCreate(question_id=colors_q.id, value=["red", "blue"]),
            ]
        ),
    )

    assert response.form_id == form.id
    assert response.submitted_at is not None
    assert response.email is None
    values = {a.question_id: a.value for a in response.answers}
    assert values[name_q.id] == "Ada"
    assert json.loads(values[colors_q.id]) == ["red", "blue"]


def test_submit_response_email_only_when_collected(db: Session) -> None:
    email = random_email()
    collecting = _create_form(db, settings={"collect_email": True})
    not_collecting = _create_form(db)

    r1 = crud.form_response.submit(
        db, form=collecting, obj_in=FormResponseCreate(email=email)
    )
    r2 = crud.form_response.submit(
        db, form=not_collecting, obj_in=FormResponseCreate(email=email)
    )
    assert r1.email == email
    assert r2.email is None


def test_submit_response_outside_window(db: Session) -> None:
    now = datetime.datetime.now(tz=datetime.timezone.utc)
    not_open = _create_form(db, start_at=now + datetime.timedelta(days=1))
    closed = _create_form(
        db,
        start_at=now - datetime.timedelta(days=2),
        end_at=now - datetime.timedelta(days=1),
    )

    with pytest.raises(ResponsePeriodError):
        crud.form_response.submit(db, form=not_open, obj_in=FormResponseCreate())
    with pytest.raises(ResponsePeriodError):
        crud.form_response.submit(db, form=closed, obj_in=FormResponseCreate())
    assert crud.form_response.get_by_form(db, form_id=not_open.id) == []
    assert crud.form_response.get_by_form(db, form_id=closed.id) == []


def test_submit_response_links_pending_uploads(db: Session) -> None:
    form = _create_form(db)
    photo_q = form.questions[2]
    pending = crud.file_metadata.create(
        db,
        obj_in=FileMetadataCreate(
            original_filename="me.jpg",
            stored_filename=f"me_{random_lower_string()}.jpg",
            file_size=10,
            content_type="image/jpeg",
            temp_form_id=form.id,
            temp_question_id=photo_q.id,
        ),
    )

    response = crud.form_response.submit(
        db,
        form=form,
        obj_in=FormResponseCreate(
            answers=[
                AnswerCreate(
                    question_id=photo_q.id,
                    value=[{"id": pending.id, "name": "me.jpg"}, {"id": 99999999}],
                )
            ]
        ),
    )
    db.refresh(pending)

    assert pending.response_id == response.id
    assert pending.question_id == photo_q.id
    files = crud.file_metadata.get_by_response_and_question(
        db, response_id=response.id, question_id=photo_q.id
    )
    assert [f.id for f in files] == [pending.id]


def test_get_responses_newest_first(db: Session) -> None:
    form = _create_form(db)
    first = crud.form_response.submit(db, form=form, obj_in=FormResponseCreate())
    second = crud.form_response.submit(db, form=form, obj_in=FormResponseCreate())

    ids = [r.id for r in crud.form_response.get_by_form(db, form_id=form.id)]
    assert ids == [second.id, first.id]


def test_get_response_in_other_form(db: Session) -> None:
    form = _create_form(db)
    other = _create_form(db)
    response = crud.form_response.submit(db, form=form, obj_in=FormResponseCreate())

    with pytest.raises(NotFoundError):
        crud.form_response.get_in_form_or_404(db, form_id=other.id, id=response.id)


def test_update_answers(db: Session) -> None:
    form = _create_form(db, settings={"allow_response_edit": True})
    name_q = form.questions[0]
    response = crud.form_response.submit(
        db,
        form=form,
        obj_in=FormResponseCreate(answers=[AnswerCreate(question_id=name_q.id, value="Ada")]),
    )

    response = crud.form_response.update_answers(
        db,
        form=form,
        db_obj=response,
        obj_in=FormResponseUpdate(
            answers=[AnswerCreate(question_id=name_q.id, value="Grace")]
        ),
    )
    assert [a.value for a in response.answers] == ["Grace"]


def test_update_answers_forbidden(db: Session) -> None:
    form = _create_form(db)
    name_q = form.questions[0]
    response = crud.form_response.submit(
        db,
        form=form,
        obj_in=FormResponseCreate(answers=[AnswerCreate(question_id=name_q.id, value="Ada")]),
    )

    with pytest.raises(ResponseEditForbiddenError):
        crud.form_response.update_answers(
            db,
            form=form,
            db_obj=response,
            obj_in=FormResponseUpdate(answers=[]),
        )
    db.refresh(response)
    assert [a.value for a in response.answers] == ["Ada"]
