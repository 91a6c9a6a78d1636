from fastapi.testclient import TestClient

from surveyhub_core.app.config import settings
from surveyhub_core.tests.utils.utils import create_random_form, question_payload


def test_create_section(client: TestClient) -> None:
    form = create_random_form(client)
    r = client.post(
        f"{settings.API_STR}/forms/{form['id']}/sections",
        json={
            "title": "Part 2",
            "description": "Tell us more",
            "questions": [question_payload("checkbox"), question_payload()],
        },
    )
    assert r.status_code == 201, r.text
    section = r.json()
    assert section["form_id"] == form["id"]
    assert section["order_index"] == 1
    assert [q["order_index"] for q in section["questions"]] == [0, 1]

    r = client.get(f"{settings.API_STR}/forms/{form['id']}/sections")
    assert r.status_code == 200, r.text
    assert [s["title"] for s in r.json()] == ["Part 1", "Part 2"]


def test_get_and_update_section(client: TestClient) -> None:
    form = create_random_form(client)
    section_id = form["sections"][0]["id"]
    url = f"{settings.API_STR}/forms/{form['id']}/sections/{section_id}"

    r = client.get(url)
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Part 1"

    r = client.put(url, json={"description": "Dates only"})
    assert r.status_code == 200, r.text
    assert r.json()["title"] == "Part 1"
    assert r.json()["description"] == "Dates only"

    other = create_random_form(client)
    r = client.get(f"{settings.API_STR}/forms/{other['id']}/sections/{section_id}")
    assert r.status_code == 404, r.text


def test_delete_section(client: TestClient) -> None:
    form = create_random_form(
        client,
        sections=[
            {"title": "A", "questions": [question_payload()]},
            {"title": "B", "questions": []},
        ],
    )
    first = form["sections"][0]
    question_id = first["questions"][0]["id"]

    r = client.delete(f"{settings.API_STR}/forms/{form['id']}/sections/{first['id']}")
    assert r.status_code == 204, r.text

    r = client.get(f"{settings.API_STR}/forms/{form['id']}/sections")
    sections = r.json()
    assert [s["title"] for s in sections] == ["B"]
    assert sections[0]["order_index"] == 0

    r = client.get(f"{settings.API_STR}/forms/{form['id']}/questions/{question_id}")
    assert r.status_code == 404, r.text
