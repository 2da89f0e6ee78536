"""
Noteful Backend — /api/tags Endpoint Tests
============================================

What:  Tag endpoints, with the focus on what tag deletion does to notes.
How:   httpx AsyncClient against the app, seeded in-memory database.
"""

import pytest

from conftest import INVALID_ID, MISSING_ID, NOTE_CATS, TAG_BREED, TAG_HYBRID

TAGS = "/api/tags"


class TestTagCrud:

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, test_client):
        response = await test_client.get(TAGS)
        assert response.status_code == 200
        assert [t["name"] for t in response.json()] == ["breed", "domestic", "feral", "hybrid"]

    @pytest.mark.asyncio
    async def test_create_get_round_trip(self, test_client):
        created = await test_client.post(TAGS, json={"name": "Siamese"})
        assert created.status_code == 201
        assert created.headers["location"] == f"{TAGS}/{created.json()['id']}"

        fetched = await test_client.get(created.headers["location"])
        assert fetched.json()["name"] == "Siamese"

    @pytest.mark.asyncio
    async def test_duplicate_name_is_400(self, test_client):
        response = await test_client.post(TAGS, json={"name": "breed"})
        assert response.status_code == 400
        assert response.json()["message"] == "The tag name already exists"

    @pytest.mark.asyncio
    async def test_missing_name_is_400(self, test_client):
        response = await test_client.post(TAGS, json={})
        assert response.status_code == 400
        assert response.json()["message"] == "Missing `name` in request body"

    @pytest.mark.asyncio
    async def test_overlong_rename_is_400(self, test_client):
        response = await test_client.put(f"{TAGS}/{TAG_BREED}", json={"name": "t" * 256})
        assert response.status_code == 400
        assert response.json()["error"] == "field_too_long"

    @pytest.mark.asyncio
    async def test_rename(self, test_client):
        response = await test_client.put(f"{TAGS}/{TAG_BREED}", json={"name": "pedigree"})
        assert response.status_code == 200
        assert response.json()["name"] == "pedigree"

        note = (await test_client.get(f"/api/notes/{NOTE_CATS}")).json()
        assert note["tags"][0]["name"] == "pedigree"

    @pytest.mark.asyncio
    async def test_invalid_and_unknown_ids(self, test_client):
        assert (await test_client.get(f"{TAGS}/{INVALID_ID}")).status_code == 400
        assert (await test_client.get(f"{TAGS}/{MISSING_ID}")).status_code == 404
        assert (await test_client.put(f"{TAGS}/{MISSING_ID}", json={"name": "x"})).status_code == 404


class TestDeleteTag:

    @pytest.mark.asyncio
    async def test_delete_pulls_tag_from_notes(self, test_client):
        response = await test_client.delete(f"{TAGS}/{TAG_BREED}")
        assert response.status_code == 204

        assert (await test_client.get(f"{TAGS}/{TAG_BREED}")).status_code == 404
        assert (await test_client.get("/api/notes", params={"tagId": TAG_BREED})).json() == []

        note = (await test_client.get(f"/api/notes/{NOTE_CATS}")).json()
        assert [t["id"] for t in note["tags"]] == [TAG_HYBRID]

    @pytest.mark.asyncio
    async def test_delete_twice_is_204(self, test_client):
        assert (await test_client.delete(f"{TAGS}/{TAG_BREED}")).status_code == 204
        assert (await test_client.delete(f"{TAGS}/{TAG_BREED}")).status_code == 204

    @pytest.mark.asyncio
    async def test_invalid_id_is_400(self, test_client):
        response = await test_client.delete(f"{TAGS}/{INVALID_ID}")
        assert response.status_code == 400
        assert response.json()["message"] == "The id is not valid"
