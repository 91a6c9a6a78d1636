from fastapi.testclient import TestClient
from pytest_mock import MockerFixture

from surveyhub_core.app.config import settings
from surveyhub_core.tests.utils.utils import create_random_form, question_payload


def _upload_temp(client: TestClient, form_id: int, question_id: int, file: tuple):
    return client.post(
        f"{settings.API_STR}/files/upload",
        files={"file": file},
        data={"form_id": str(form_id), "question_id": str(question_id)},
    )


def test_upload_and_download_file(client: TestClient) -> None:
    form = create_random_form(client, questions=[question_payload("file-upload")])
    question_id = form["questions"][0]["id"]

    r = _upload_temp(client, form["id"], question_id, ("resume notes.txt", b"hello", "text/plain"))
    assert r.status_code == 201, r.text
    uploaded = r.json()
    assert uploaded["original_filename"] == "resume notes.txt"
    assert uploaded["file_size"] == 5
    assert uploaded["temp_question_id"] == question_id
    assert uploaded["stored_filename"] != "resume notes.txt"
    assert uploaded["stored_filename"].endswith(".txt")

    r = client.get(f"{settings.API_STR}/files/{uploaded['id']}")
    assert r.status_code == 200, r.text
    assert r.content == b"hello"
    assert r.headers["content-disposition"] == (
        "attachment; filename*=UTF-8''resume%20notes.txt"
    )

    r = client.get(f"{settings.API_STR}/files/{uploaded['id']}/metadata")
    assert r.status_code == 200, r.text
    assert r.json()["id"] == uploaded["id"]


def test_upload_rejected_files(client: TestClient, mocker: MockerFixture) -> None:
    form = create_random_form(client)
    question_id = form["questions"][0]["id"]

    r = _upload_temp(client, form["id"], question_id, ("empty.txt", b"", "text/plain"))
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "File is empty."

    r = _upload_temp(client, form["id"], question_id, ("script.sh", b"echo", "text/plain"))
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "File extension not allowed: sh"

    r = _upload_temp(client, form["id"], question_id, ("page.txt", b"<html>", "text/html"))
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "Content type not allowed: text/html"

    mocker.patch("surveyhub_core.app.config.settings.MAX_FILE_SIZE", 4)
    r = _upload_temp(client, form["id"], question_id, ("big.txt", b"12345", "text/plain"))
    assert r.status_code == 400, r.text


def test_upload_response_file(client: TestClient) -> None:
    form = create_random_form(client, questions=[question_payload("file-upload")])
    question_id = form["questions"][0]["id"]
    r = client.post(f"{settings.API_STR}/forms/{form['id']}/responses", json={"answers": []})
    response_id = r.json()["id"]
    url = f"{settings.API_STR}/responses/{response_id}/questions/{question_id}/files"

    r = client.post(url, files={"file": ("photo.jpg", b"\xff\xd8\xff", "image/jpeg")})
    assert r.status_code == 201, r.text
    file_id = r.json()["id"]
    assert r.json()["response_id"] == response_id

    r = client.get(f"{settings.API_STR}/files/{file_id}")
    assert r.headers["content-type"] == "image/jpeg"
    assert r.headers["content-disposition"].startswith("inline")

    r = client.get(url)
    assert [f["id"] for f in r.json()] == [file_id]
    r = client.get(f"{settings.API_STR}/responses/{response_id}/files")
    assert [f["id"] for f in r.json()] == [file_id]
    r = client.get(f"{settings.API_STR}/questions/{question_id}/files")
    assert [f["id"] for f in r.json()] == [file_id]

    r = client.post(
        f"{settings.API_STR}/responses/99999999/questions/{question_id}/files",
        files={"file": ("photo.jpg", b"\xff\xd8\xff", "image/jpeg")},
    )
    assert r.status_code == 404, r.text
    r = client.post(
        f"{settings.API_STR}/responses/{response_id}/questions/99999999/files",
        files={"file": ("photo.jpg", b"\xff\xd8\xff", "image/jpeg")},
    )
    assert r.status_code == 404, r.text


def test_delete_file(client: TestClient) -> None:
    form = create_random_form(client)
    question_id = form["questions"][0]["id"]
    r = _upload_temp(client, form["id"], question_id, ("notes.csv", b"a,b", "text/csv"))
    file_id = r.json()["id"]

    r = client.delete(f"{settings.API_STR}/files/{file_id}")
    assert r.status_code == 204, r.text
    r = client.get(f"{settings.API_STR}/files/{file_id}")
    assert r.status_code == 404, r.text
    r = client.get(f"{settings.API_STR}/files/{file_id}/metadata")
    assert r.status_code == 404, r.text
    r = client.delete(f"{settings.API_STR}/files/{file_id}")
    assert r.status_code == 404, r.text


def test_delete_form_removes_files(client: TestClient) -> None:
    form = create_random_form(client, questions=[question_payload("file-upload")])
    question_id = form["questions"][0]["id"]
    r = _upload_temp(client, form["id"], question_id, ("a.pdf", b"%PDF", "application/pdf"))
    pending_id = r.json()["id"]
    r = client.post(
        f"{settings.API_STR}/forms/{form['id']}/responses",
        json={"answers": [{"question_id": question_id, "value": "plain"}]},
    )
    response_id = r.json()["id"]
    r = client.post(
        f"{settings.API_STR}/responses/{response_id}/questions/{question_id}/files",
        files={"file": ("b.pdf", b"%PDF", "application/pdf")},
    )
    bound_id = r.json()["id"]

    r = client.delete(f"{settings.API_STR}/forms/{form['id']}")
    assert r.status_code == 204, r.text

    for file_id in (pending_id, bound_id):
        r = client.get(f"{settings.API_STR}/files/{file_id}/metadata")
        assert r.status_code == 404, r.text
    r = client.get(f"{settings.API_STR}/responses/{response_id}/files")
    assert r.json() == []


def test_delete_question_removes_its_files(client: TestClient) -> None:
    form = create_random_form(client, questions=[question_payload("file-upload")])
    question_id = form["questions"][0]["id"]
    r = client.post(f"{settings.API_STR}/forms/{form['id']}/responses", json={"answers": []})
    response_id = r.json()["id"]
    r = client.post(
        f"{settings.API_STR}/responses/{response_id}/questions/{question_id}/files",
        files={"file": ("c.pdf", b"%PDF", "application/pdf")},
    )
    assert r.status_code == 201, r.text
    file_id = r.json()["id"]

    r = client.delete(f"{settings.API_STR}/forms/{form['id']}/questions/{question_id}")
    assert r.status_code == 204, r.text

    r = client.get(f"{settings.API_STR}/files/{file_id}/metadata")
    assert r.status_code == 404, r.text
    r = client.get(f"{settings.API_STR}/responses/{response_id}/files")
    assert r.json() == []
