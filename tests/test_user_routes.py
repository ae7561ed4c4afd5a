"""
Tests for listing, editing, ping and random user creation.
"""

import pytest

from auth.jwt import create_token
from config.settings import Settings
from conftest import TEST_SECRET, login, register


def _bearer(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_token(user_id, TEST_SECRET)}"}


class TestListing:
    @pytest.mark.asyncio
    async def test_three_pages_of_25(self, client, seed_users):
        await seed_users(25)

        counts = []
        for page in (1, 2, 3):
            resp = await client.get("/", params={"page": page, "limit": 10})
            assert resp.status_code == 200
            assert "Page %d of 3" % page in resp.text
            counts.append(resp.text.count("<li>"))
            if page == 1:
                assert "Previous" not in resp.text
                assert "Next" in resp.text
            if page == 3:
                assert "Next" not in resp.text
                assert "Previous" in resp.text
        assert counts == [10, 10, 5]

    @pytest.mark.asyncio
    async def test_defaults_and_lenient_params(self, client, seed_users):
        await seed_users(12)
        resp = await client.get("/", params={"page": "abc", "limit": "-5"})
        assert resp.status_code == 200
        assert resp.text.count("<li>") == 10
        assert "Page 1 of 2" in resp.text
        assert "/?page=2&amp;limit=10" in resp.text

    @pytest.mark.asyncio
    async def test_missing_name_and_escaping(self, client):
        await register(client, "<script>alert(1)</script>", "pw")
        resp = await client.get("/")
        assert "<script>alert(1)</script>" not in resp.text
        assert "&lt;script&gt;" in resp.text
        assert "No Name" in resp.text


class TestEdit:
    @pytest.mark.asyncio
    async def test_edit_requires_token(self, client, seed_users):
        [user_id] = await seed_users(1)
        assert (await client.get(f"/edit/{user_id}")).status_code == 403
        resp = await client.post(f"/edit/{user_id}", data={"name": "x", "username": "y"})
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_edit_persists(self, client):
        await register(client, "alice", "secret")
        await login(client, "alice", "secret")

        resp = await client.get("/edit/1")
        assert resp.status_code == 200
        assert 'value="alice"' in resp.text

        resp = await client.post("/edit/1", data={"name": "Alice A", "username": "alice_a"})
        assert resp.status_code == 200
        assert resp.text == "User updated"

        resp = await client.get("/edit/1")
        assert 'value="Alice A"' in resp.text
        assert 'value="alice_a"' in resp.text

    @pytest.mark.asyncio
    async def test_clearing_name(self, client, seed_users):
        [user_id] = await seed_users(1)
        resp = await client.post(
            f"/edit/{user_id}",
            data={"name": "", "username": "seed_01"},
            headers=_bearer(user_id),
        )
        assert resp.status_code == 200
        assert resp.text == "User updated"

        listing = await client.get("/")
        assert f"{user_id}: seed_01 - No Name" in listing.text

    @pytest.mark.asyncio
    async def test_cannot_edit_someone_else(self, client, seed_users):
        first, second = await seed_users(2)
        resp = await client.get(f"/edit/{second}", headers=_bearer(first))
        assert resp.status_code == 403
        assert resp.json() == {"error": "Access forbidden: Not the owner"}

    @pytest.mark.asyncio
    async def test_unknown_id_is_404(self, client):
        resp = await client.get("/edit/999", headers=_bearer(999))
        assert resp.status_code == 404
        assert resp.text == "User not found"
        resp = await client.post("/edit/999", data={"name": "a", "username": "b"}, headers=_bearer(999))
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_username_collision_is_store_error(self, client, seed_users):
        first, _ = await seed_users(2)
        resp = await client.post(
            f"/edit/{first}",
            data={"name": "dup", "username": "seed_02"},
            headers=_bearer(first),
        )
        assert resp.status_code == 500
        assert resp.text == "Error updating user"


class TestOpenEdit:
    @pytest.fixture()
    def settings(self, tmp_path):
        return Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'users.db'}",
            secret_key=TEST_SECRET,
            bcrypt_rounds=4,
            create_tables=False,
            edit_requires_owner=False,
        )

    @pytest.mark.asyncio
    async def test_any_identity_may_edit(self, client, seed_users):
        first, second = await seed_users(2)
        resp = await client.get(f"/edit/{second}", headers=_bearer(first))
        assert resp.status_code == 200
        assert 'value="seed_02"' in resp.text


class TestPingAndCreate:
    @pytest.mark.asyncio
    async def test_ping(self, client):
        resp = await client.get("/ping")
        assert resp.status_code == 200
        assert resp.json() == {"RESULT": "hello world"}

    @pytest.mark.asyncio
    async def test_create_random(self, client):
        resp = await client.get("/create")
        assert resp.status_code == 200
        body = resp.json()
        assert body["message"] == "Random user created"
        assert isinstance(body["userId"], int)

        listing = await client.get("/")
        assert f"{body['userId']}: user_" in listing.text

    @pytest.mark.asyncio
    async def test_process_time_header(self, client):
        resp = await client.get("/ping")
        assert "x-process-time" in resp.headers
