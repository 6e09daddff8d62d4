"""Note Routes — ownership-enforced CRUD over HTTP.

Invariants:
    - No/invalid token → 401 before the note is looked up
    - Foreign note → 401 ACCESS_DENIED; admin bypasses
    - Deleted notes answer 404 to every later operation
    - Non-numeric ids never match a route
"""

from dataclasses import dataclass

from notes_api.api.dependencies import get_token_codec
from notes_api.config import get_settings
from notes_api.main import app
from tests.services.api_helpers import register, register_and_login


@dataclass
class _Ghost:
    id: int
    is_admin: bool = False


def _auth(token: str) -> dict:
    return {"auth-token": token}


async def test_end_to_end_ownership_scenario(client):
    res = await register(client, "Ann", "ann", "pw1")
    assert res.status_code == 200
    ann = res.json()
    assert "password" not in ann

    assert (await register(client, "Ann", "ann", "pw1")).status_code == 400

    login = await client.post("/users/login", json={"username": "ann", "password": "pw1"})
    assert login.status_code == 200
    ann_token = login.json()["token"]

    created = await client.post(
        "/notes/new", json={"description": "shopping list"}, headers=_auth(ann_token),
    )
    assert created.status_code == 200
    note = created.json()
    assert note["owner_id"] == ann["id"]
    assert note["description"] == "shopping list"

    _, bob_token = await register_and_login(client, "Bob", "bob")
    denied = await client.get(f"/notes/{note['id']}", headers=_auth(bob_token))
    assert denied.status_code == 401
    assert denied.json()["error"]["code"] == "ACCESS_DENIED"

    _, admin_token = await register_and_login(client, "Root", "root", is_admin=True)
    allowed = await client.get(f"/notes/{note['id']}", headers=_auth(admin_token))
    assert allowed.status_code == 200
    assert allowed.json()["description"] == "shopping list"


async def test_create_without_token_is_401(client):
    res = await client.post("/notes/new", json={"description": "x"})
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "MISSING_TOKEN"


async def test_create_with_invalid_token_is_401(client):
    res = await client.post(
        "/notes/new", json={"description": "x"}, headers=_auth("garbage"),
    )
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"


async def test_read_own_note_round_trip(client):
    _, token = await register_and_login(client, "Ann", "ann")
    note = (await client.post(
        "/notes/new", json={"description": "hello"}, headers=_auth(token),
    )).json()
    res = await client.get(f"/notes/{note['id']}", headers=_auth(token))
    assert res.status_code == 200
    assert res.json()["description"] == "hello"
    assert res.json()["owner_id"] == note["owner_id"]


async def test_create_without_body_stores_null(client):
    _, token = await register_and_login(client, "Ann", "ann")
    res = await client.post("/notes/new", headers=_auth(token))
    assert res.status_code == 200
    assert res.json()["description"] is None


async def test_read_missing_note_is_404(client):
    _, token = await register_and_login(client, "Ann", "ann")
    res = await client.get("/notes/999", headers=_auth(token))
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_non_numeric_id_does_not_match(client):
    _, token = await register_and_login(client, "Ann", "ann")
    res = await client.get("/notes/abc", headers=_auth(token))
    assert res.status_code == 404


async def test_update_own_note(client):
    _, token = await register_and_login(client, "Ann", "ann")
    note = (await client.post(
        "/notes/new", json={"description": "v1"}, headers=_auth(token),
    )).json()
    res = await client.put(
        f"/notes/{note['id']}", json={"description": "v2"}, headers=_auth(token),
    )
    assert res.status_code == 200
    assert res.json()["description"] == "v2"
    assert res.json()["owner_id"] == note["owner_id"]
    reread = await client.get(f"/notes/{note['id']}", headers=_auth(token))
    assert reread.json()["description"] == "v2"


async def test_update_foreign_note_denied(client):
    _, ann_token = await register_and_login(client, "Ann", "ann")
    _, bob_token = await register_and_login(client, "Bob", "bob")
    note = (await client.post(
        "/notes/new", json={"description": "mine"}, headers=_auth(ann_token),
    )).json()
    res = await client.put(
        f"/notes/{note['id']}", json={"description": "hijack"}, headers=_auth(bob_token),
    )
    assert res.status_code == 401
    reread = await client.get(f"/notes/{note['id']}", headers=_auth(ann_token))
    assert reread.json()["description"] == "mine"


async def test_delete_then_delete_again_is_404(client):
    _, token = await register_and_login(client, "Ann", "ann")
    note = (await client.post(
        "/notes/new", json={"description": "bye"}, headers=_auth(token),
    )).json()

    first = await client.delete(f"/notes/{note['id']}", headers=_auth(token))
    assert first.status_code == 200
    assert first.json() == {"id": note["id"], "status": "deleted"}

    second = await client.delete(f"/notes/{note['id']}", headers=_auth(token))
    assert second.status_code == 404
    read = await client.get(f"/notes/{note['id']}", headers=_auth(token))
    assert read.status_code == 404


async def test_admin_can_delete_foreign_note(client):
    _, ann_token = await register_and_login(client, "Ann", "ann")
    _, admin_token = await register_and_login(client, "Root", "root", isAdmin=True)
    note = (await client.post(
        "/notes/new", json={"description": "spam"}, headers=_auth(ann_token),
    )).json()
    res = await client.delete(f"/notes/{note['id']}", headers=_auth(admin_token))
    assert res.status_code == 200


async def test_token_for_unknown_user_passes_by_default(client):
    token = get_token_codec().issue(_Ghost(id=999))
    res = await client.get("/notes/1", headers=_auth(token))
    assert res.status_code == 404


async def test_token_for_unknown_user_rejected_when_existence_checked(client):
    strict = get_settings().model_copy(update={"token_require_existing_user": True})
    app.dependency_overrides[get_settings] = lambda: strict
    token = get_token_codec().issue(_Ghost(id=999))
    res = await client.get("/notes/1", headers=_auth(token))
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "INVALID_TOKEN"
