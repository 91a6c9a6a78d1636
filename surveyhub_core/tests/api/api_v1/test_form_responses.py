import datetime
import json

from fastapi.testclient import TestClient

from surveyhub_core.app.config import settings
from surveyhub_core.app.survey_core import create_empty_response, validate_response
from surveyhub_core.tests.utils.utils import (
    create_random_form,
    question_payload,
    random_email,
)


def _submit(client: TestClient, form_id: int, data: dict):
    return client.post(f"{settings.API_STR}/forms/{form_id}/responses", json=data)


def test_submit_validated_response(client: TestClient) -> None:
    form = create_random_form(
        client,
        sections=[],
        questions=[question_payload("short-text", required=True)],
    )
    question_id = form["questions"][0]["id"]

    response = create_empty_response(form)
    result = validate_response(form, response)
    assert not result["valid"]
    assert result["question_errors"][question_id] == ["This question is required."]

    response["answers"][question_id] = "Ada"
    assert validate_response(form, response)["valid"]

    r = _submit(
        client,
        form["id"],
        {
            "answers": [
                {"question_id": qid, "value": value}
                for qid, value in response["answers"].items()
            ]
        },
    )
    assert r.status_code == 201, r.text
    stored = r.json()
    assert stored["form_id"] == form["id"]
    assert [(a["question_id"], a["value"]) for a in stored["answers"]] == [
        (question_id, "Ada")
    ]

    r = client.get(f"{settings.API_STR}/forms/{form['id']}/responses")
    assert r.status_code == 200, r.text
    assert [x["id"] for x in r.json()] == [stored["id"]]


def test_submit_structured_answers(client: TestClient) -> None:
    form = create_random_form(
        client, sections=[], questions=[question_payload("checkbox")]
    )
    question_id = form["questions"][0]["id"]

    r = _submit(
        client,
        form["id"],
        {"answers": [{"question_id": question_id, "value": ["a", "b"]}]},
    )
    assert r.status_code == 201, r.text
    assert json.loads(r.json()["answers"][0]["value"]) == ["a", "b"]


def test_submit_response_email(client: TestClient) -> None:
    email = random_email()
    collecting = create_random_form(client, settings={"collect_email": True})
    r = _submit(client, collecting["id"], {"email": email, "answers": []})
    assert r.status_code == 201, r.text
    assert r.json()["email"] == email

    not_collecting = create_random_form(client)
    r = _submit(client, not_collecting["id"], {"email": email, "answers": []})
    assert r.status_code == 201, r.text
    assert r.json()["email"] is None


def test_submit_response_outside_period(client: TestClient) -> None:
    now = datetime.datetime.now(tz=datetime.timezone.utc)
    not_open = create_random_form(
        client, start_at=(now + datetime.timedelta(hours=1)).isoformat()
    )
    r = _submit(client, not_open["id"], {"answers": []})
    assert r.status_code == 403, r.text
    assert r.json()["detail"] == "The form is not accepting responses yet."

    closed = create_random_form(
        client, end_at=(now - datetime.timedelta(hours=1)).isoformat()
    )
    r = _submit(client, closed["id"], {"answers": []})
    assert r.status_code == 403, r.text
    assert r.json()["detail"] == "The form is no longer accepting responses."

    r = client.get(f"{settings.API_STR}/forms/{closed['id']}/responses")
    assert r.json() == []


def test_update_response(client: TestClient) -> None:
    form = create_random_form(client, settings={"allow_response_edit": True})
    question_id = form["questions"][0]["id"]
    r = _submit(client, form["id"], {"answers": [{"question_id": question_id, "value": "v1"}]})
    response_id = r.json()["id"]
    url = f"{settings.API_STR}/forms/{form['id']}/responses/{response_id}"

    r = client.put(url, json={"answers": [{"question_id": question_id, "value": "v2"}]})
    assert r.status_code == 200, r.text
    assert [a["value"] for a in r.json()["answers"]] == ["v2"]

    r = client.get(url)
    assert r.status_code == 200, r.text
    assert [a["value"] for a in r.json()["answers"]] == ["v2"]


def test_update_response_forbidden(client: TestClient) -> None:
    form = create_random_form(client)
    question_id = form["questions"][0]["id"]
    r = _submit(client, form["id"], {"answers": [{"question_id": question_id, "value": "v1"}]})
    response_id = r.json()["id"]
    url = f"{settings.API_STR}/forms/{form['id']}/responses/{response_id}"

    r = client.put(url, json={"answers": []})
    assert r.status_code == 403, r.text
    assert r.json()["detail"] == "Response edit is not allowed for this form."

    r = client.get(url)
    assert [a["value"] for a in r.json()["answers"]] == ["v1"]


def test_get_response_in_other_form(client: TestClient) -> None:
    form = create_random_form(client)
    other = create_random_form(client)
    r = _submit(client, form["id"], {"answers": []})
    response_id = r.json()["id"]

    r = client.get(f"{settings.API_STR}/forms/{other['id']}/responses/{response_id}")
    assert r.status_code == 404, r.text


def test_submit_links_uploaded_files(client: TestClient) -> None:
    form = create_random_form(
        client, sections=[], questions=[question_payload("file-upload")]
    )
    question_id = form["questions"][0]["id"]

    r = client.post(
        f"{settings.API_STR}/files/upload",
        files={"file": ("cv.pdf", b"%PDF-1.4 cv", "application/pdf")},
        data={"form_id": str(form["id"]), "question_id": str(question_id)},
    )
    assert r.status_code == 201, r.text
    uploaded = r.json()
    assert uploaded["response_id"] is None
    assert uploaded["temp_form_id"] == form["id"]

    r = _submit(
        client,
        form["id"],
        {"answers": [{"question_id": question_id, "value": [uploaded]}]},
    )
    assert r.status_code == 201, r.text
    response_id = r.json()["id"]

    r = client.get(f"{settings.API_STR}/files/{uploaded['id']}/metadata")
    assert r.json()["response_id"] == response_id
    assert r.json()["question_id"] == question_id

    r = client.get(
        f"{settings.API_STR}/responses/{response_id}/questions/{question_id}/files"
    )
    assert [f["id"] for f in r.json()] == [uploaded["id"]]
