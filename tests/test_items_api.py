"""
Item API tests - REST CRUD, auth and ownership over HTTP (identity replaced by a fake).
"""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from item_api.services.item_service import MAX_OFFSET, ItemService

ITEMS = "/api/v1/items"


@pytest.fixture
def ann(fake_validator):
    claims = fake_validator.grant("ann-token", email="ann@x.com")
    return {"claims": claims, "headers": {"Authorization": "Bearer ann-token"}}


@pytest.fixture
def bob(fake_validator):
    claims = fake_validator.grant("bob-token", email="bob@x.com")
    return {"claims": claims, "headers": {"Authorization": "Bearer bob-token"}}


@pytest.mark.asyncio
async def test_requests_without_credential_are_unauthorized(item_client: AsyncClient, fake_validator):
    response = await item_client.get(ITEMS)
    assert response.status_code == 401
    assert response.json() == {"detail": "missing credential"}
    assert response.headers["www-authenticate"] == "Bearer"
    assert fake_validator.calls == 0


@pytest.mark.asyncio
async def test_rejected_token_is_unauthorized(item_client: AsyncClient):
    response = await item_client.post(
        ITEMS,
        headers={"Authorization": "Bearer forged"},
        json={"name": "n", "description": "d"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "token is malformed"


@pytest.mark.asyncio
async def test_create_and_list(item_client: AsyncClient, ann):
    response = await item_client.post(ITEMS, headers=ann["headers"], json={"name": "n", "description": "d"})
    assert response.status_code == 201
    item = response.json()
    assert item["owner_id"] == ann["claims"].user_id
    assert item["name"] == "n"
    assert item["description"] == "d"

    response = await item_client.get(ITEMS, headers=ann["headers"])
    assert response.status_code == 200
    assert [i["id"] for i in response.json()] == [item["id"]]


@pytest.mark.asyncio
async def test_owner_cannot_be_set_from_body(item_client: AsyncClient, ann, bob):
    response = await item_client.post(
        ITEMS,
        headers=ann["headers"],
        json={"name": "n", "owner_id": bob["claims"].user_id},
    )
    assert response.status_code == 201
    assert response.json()["owner_id"] == ann["claims"].user_id


@pytest.mark.asyncio
async def test_raw_token_without_scheme_is_accepted(item_client: AsyncClient, ann):
    response = await item_client.get(ITEMS, headers={"Authorization": "ann-token"})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_other_owner_sees_not_found(item_client: AsyncClient, ann, bob):
    created = await item_client.post(ITEMS, headers=ann["headers"], json={"name": "n"})
    item_id = created.json()["id"]

    assert (await item_client.get(f"{ITEMS}/{item_id}", headers=bob["headers"])).status_code == 404
    assert (await item_client.put(f"{ITEMS}/{item_id}", headers=bob["headers"], json={"name": "x"})).status_code == 404
    assert (await item_client.delete(f"{ITEMS}/{item_id}", headers=bob["headers"])).status_code == 404
    assert (await item_client.get(ITEMS, headers=bob["headers"])).json() == []

    missing = await item_client.get(f"{ITEMS}/{uuid.uuid4()}", headers=bob["headers"])
    foreign = await item_client.get(f"{ITEMS}/{item_id}", headers=bob["headers"])
    assert missing.json() == foreign.json() == {"detail": "item not found"}


@pytest.mark.asyncio
async def test_update_item(item_client: AsyncClient, ann):
    created = await item_client.post(ITEMS, headers=ann["headers"], json={"name": "n", "description": "d"})
    item_id = created.json()["id"]

    response = await item_client.put(f"{ITEMS}/{item_id}", headers=ann["headers"], json={"name": "renamed"})
    assert response.status_code == 200
    assert response.json()["name"] == "renamed"
    assert response.json()["description"] == "d"


@pytest.mark.asyncio
async def test_delete_then_delete_again(item_client: AsyncClient, ann):
    created = await item_client.post(ITEMS, headers=ann["headers"], json={"name": "n"})
    item_id = created.json()["id"]

    first = await item_client.delete(f"{ITEMS}/{item_id}", headers=ann["headers"])
    assert first.status_code == 204

    for _ in range(2):
        again = await item_client.delete(f"{ITEMS}/{item_id}", headers=ann["headers"])
        assert again.status_code == 404
    assert (await item_client.get(f"{ITEMS}/{item_id}", headers=ann["headers"])).status_code == 404


@pytest.mark.asyncio
async def test_negative_offset_is_rejected(item_client: AsyncClient, ann):
    response = await item_client.get(ITEMS, headers=ann["headers"], params={"offset": -1})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_identity_outage_fails_closed(item_client: AsyncClient, fake_validator, ann):
    fake_validator.unavailable = True

    response = await item_client.get(ITEMS, headers=ann["headers"])
    assert response.status_code == 401
    assert response.json() == {"detail": "not authorized"}


@pytest.mark.asyncio
@pytest.mark.parametrize("offset", [MAX_OFFSET + 1, 2**64])
async def test_offset_beyond_integer_range_is_rejected(item_client: AsyncClient, ann, offset):
    response = await item_client.get(ITEMS, headers=ann["headers"], params={"offset": offset})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_largest_offset_is_an_empty_page(item_client: AsyncClient, ann):
    response = await item_client.get(ITEMS, headers=ann["headers"], params={"offset": MAX_OFFSET})
    assert response.status_code == 200
    assert response.json() == []


def _driver_failure(*args, **kwargs):
    raise OperationalError("SELECT", None, Exception("connection to 10.0.0.5 lost, password=hunter2"))


@pytest.mark.asyncio
async def test_failed_commit_is_not_reported_as_created(item_client: AsyncClient, item_session, ann, monkeypatch):
    async def failing_commit():
        _driver_failure()

    monkeypatch.setattr(item_session, "commit", failing_commit)

    response = await item_client.post(ITEMS, headers=ann["headers"], json={"name": "n"})
    assert response.status_code == 503
    assert response.json() == {"detail": "storage unavailable"}


@pytest.mark.asyncio
async def test_failed_delete_commit_is_not_reported_as_deleted(
    item_client: AsyncClient, item_session, ann, monkeypatch
):
    created = await item_client.post(ITEMS, headers=ann["headers"], json={"name": "n"})
    item_id = created.json()["id"]

    async def failing_commit():
        _driver_failure()

    monkeypatch.setattr(item_session, "commit", failing_commit)

    response = await item_client.delete(f"{ITEMS}/{item_id}", headers=ann["headers"])
    assert response.status_code == 503
    assert response.json() == {"detail": "storage unavailable"}


@pytest.mark.asyncio
async def test_store_failure_on_read_is_opaque(item_client: AsyncClient, item_session, ann, monkeypatch):
    async def failing_execute(*args, **kwargs):
        _driver_failure()

    monkeypatch.setattr(item_session, "execute", failing_execute)

    response = await item_client.get(ITEMS, headers=ann["headers"])
    assert response.status_code == 503
    assert response.json() == {"detail": "storage unavailable"}


@pytest.mark.asyncio
async def test_unwrapped_database_error_is_opaque(item_client: AsyncClient, ann, monkeypatch):
    async def failing_list(self, token, offset=0):
        _driver_failure()

    monkeypatch.setattr(ItemService, "list_items", failing_list)

    response = await item_client.get(ITEMS, headers=ann["headers"])
    assert response.status_code == 503
    assert response.json() == {"detail": "storage unavailable"}
