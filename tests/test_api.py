from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient

from assessment_builder.core.config import get_settings
from assessment_builder.core.security import create_session_token
from assessment_builder.db.session import get_db
from assessment_builder.main import app

settings = get_settings()


@pytest.fixture
async def client(session_factory) -> AsyncIterator[AsyncClient]:
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def _sign_in(client: AsyncClient, owner_id: str = "owner-1") -> None:
    client.cookies.set(settings.auth_cookie_name, create_session_token(owner_id))


def _payload(name: str = "Team health") -> dict:
    return {
        "name": name,
        "description": "Monthly check-in",
        "questions": [
            {
                "id": "local-1",
                "type": "single_choice",
                "prompt": "Do you have what you need?",
                "choices": [
                    {"id": "a", "label": "Yes", "value": 1},
                    {"id": "b", "label": "No", "value": 2},
                ],
            },
            {"id": "local-2", "type": "scale", "prompt": "Energy level", "scale_min": 1, "scale_max": 10},
        ],
    }


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_new_template_draft(client: AsyncClient) -> None:
    response = await client.get("/api/templates/new")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == ""
    assert len(body["questions"]) == 1
    assert [c["value"] for c in body["questions"][0]["choices"]] == [1, 2]


async def test_create_then_load_and_replace(client: AsyncClient) -> None:
    _sign_in(client)
    created = await client.post("/api/templates", json=_payload())
    assert created.status_code == 201
    template_id = created.json()["template_id"]

    loaded = await client.get(f"/api/templates/{template_id}")
    assert loaded.status_code == 200
    draft = loaded.json()
    assert draft["name"] == "Team health"
    assert [q["prompt"] for q in draft["questions"]] == ["Do you have what you need?", "Energy level"]
    assert draft["questions"][1]["scale_max"] == 10

    draft["questions"] = draft["questions"][1:]
    draft["name"] = "Energy only"
    replaced = await client.put(f"/api/templates/{template_id}", json=draft)
    assert replaced.status_code == 200
    assert replaced.json() == {"template_id": template_id}

    again = (await client.get(f"/api/templates/{template_id}")).json()
    assert again["name"] == "Energy only"
    assert [q["prompt"] for q in again["questions"]] == ["Energy level"]


async def test_validation_errors_are_path_keyed(client: AsyncClient) -> None:
    _sign_in(client)
    payload = _payload(name="  ")
    payload["questions"][0]["choices"] = payload["questions"][0]["choices"][:1]
    response = await client.post("/api/templates", json=payload)
    assert response.status_code == 422
    assert response.json()["errors"] == {
        "templateName": "Template name is required.",
        "questions.0.choices": "Provide at least two options.",
    }


async def test_save_requires_identity(client: AsyncClient) -> None:
    response = await client.post("/api/templates", json=_payload())
    assert response.status_code == 401

    client.cookies.set(settings.auth_cookie_name, "forged.token")
    response = await client.post("/api/templates", json=_payload())
    assert response.status_code == 401


async def test_unknown_template_is_404(client: AsyncClient) -> None:
    _sign_in(client)
    assert (await client.get("/api/templates/nope")).status_code == 404
    assert (await client.put("/api/templates/nope", json=_payload())).status_code == 404


async def test_list_templates_is_scoped_to_owner(client: AsyncClient) -> None:
    _sign_in(client, "owner-1")
    await client.post("/api/templates", json=_payload("First"))
    await client.post("/api/templates", json=_payload("Second"))
    _sign_in(client, "owner-2")
    await client.post("/api/templates", json=_payload("Someone else's"))

    _sign_in(client, "owner-1")
    response = await client.get("/api/templates")
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["page_count"] == 1
    assert [item["name"] for item in body["items"]] == ["Second", "First"]
    assert {item["question_count"] for item in body["items"]} == {2}


async def test_list_templates_requires_identity(client: AsyncClient) -> None:
    assert (await client.get("/api/templates")).status_code == 401


async def test_preview_summarizes_unsaved_draft(client: AsyncClient) -> None:
    response = await client.post("/api/templates/preview", json=_payload())
    assert response.status_code == 200
    assert response.json() == {"name": "Team health", "description": "Monthly check-in", "question_count": 2}

    untitled = await client.post("/api/templates/preview", json={**_payload(), "name": ""})
    assert untitled.json()["name"] == "Untitled assessment"
