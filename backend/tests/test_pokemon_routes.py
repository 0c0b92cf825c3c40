"""
Pokemon API — HTTP Route Tests
================================

What:  End-to-end tests of the Pokemon endpoints, the health check, the
       documentation endpoints and the cross-cutting middleware.
How:   HTTPX AsyncClient over ASGITransport against create_app() with an
       injected store (in-memory by default, SQLite where noted).
"""

import pytest
from httpx import AsyncClient, ASGITransport

from pokemon_api.config import Settings
from pokemon_api.exceptions import StoreError
from pokemon_api.main import API_DESCRIPTION, README_PATH, create_app, load_api_description


async def add_pokemon(client, data):
    response = await client.post("/pokemon", json=data)
    assert response.status_code == 201
    return response.json()["id"]


class TestCreatePokemon:

    @pytest.mark.asyncio
    async def test_create_returns_201_and_id(self, test_client, sample_pokemon_data):
        response = await test_client.post("/pokemon", json=sample_pokemon_data)

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Pokemon added successfully."
        assert isinstance(body["id"], int)

    @pytest.mark.asyncio
    async def test_create_missing_field_returns_400(self, test_client, sample_pokemon_data):
        """A 400 leaves the store untouched."""
        del sample_pokemon_data["image"]

        response = await test_client.post("/pokemon", json=sample_pokemon_data)

        assert response.status_code == 400
        assert response.json()["error"] == "All fields are required."
        assert (await test_client.get("/pokemon")).json() == []

    @pytest.mark.asyncio
    async def test_create_empty_string_returns_400(self, test_client, sample_pokemon_data):
        sample_pokemon_data["name"] = ""

        response = await test_client.post("/pokemon", json=sample_pokemon_data)

        assert response.status_code == 400
        assert response.json()["error"] == "All fields are required."

    @pytest.mark.asyncio
    async def test_create_without_body_returns_400(self, test_client):
        response = await test_client.post("/pokemon")

        assert response.status_code == 400
        assert response.json()["error"] == "All fields are required."

    @pytest.mark.asyncio
    async def test_create_malformed_json_returns_400(self, test_client):
        response = await test_client.post(
            "/pokemon",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request."

    @pytest.mark.asyncio
    async def test_create_duplicate_name_returns_500(self, test_client, sample_pokemon_data):
        """Duplicate names hit the unique constraint; no driver detail leaks."""
        await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.post("/pokemon", json=sample_pokemon_data)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Error adding the Pokemon."
        assert "details" not in body
        assert "IntegrityError" not in response.text


class TestReadPokemon:

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/pokemon")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_list_after_creates(self, test_client, sample_pokemon_data):
        await add_pokemon(test_client, sample_pokemon_data)
        await add_pokemon(test_client, {**sample_pokemon_data, "name": "Charmeleon"})

        response = await test_client.get("/pokemon")

        assert [p["name"] for p in response.json()] == ["Charmander", "Charmeleon"]
        assert set(response.json()[0]) == {"id", "name", "types", "description", "image"}

    @pytest.mark.asyncio
    async def test_get_by_id(self, test_client, sample_pokemon_data):
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.get(f"/pokemon/{new_id}")

        assert response.status_code == 200
        assert response.json() == {"id": new_id, **sample_pokemon_data}

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, test_client):
        response = await test_client.get("/pokemon/9999")

        assert response.status_code == 404
        assert response.json()["error"] == "Pokemon not found."

    @pytest.mark.asyncio
    async def test_get_by_non_integer_id_returns_400(self, test_client):
        response = await test_client.get("/pokemon/pikachu")

        assert response.status_code == 400
        assert response.json()["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_get_by_name(self, test_client, sample_pokemon_data):
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.get("/pokemon/nombre/Charmander")

        assert response.status_code == 200
        assert response.json()["id"] == new_id

    @pytest.mark.asyncio
    async def test_get_by_name_not_found(self, test_client):
        response = await test_client.get("/pokemon/nombre/Missingno")

        assert response.status_code == 404
        assert response.json()["error"] == "Pokemon not found."

    @pytest.mark.asyncio
    async def test_store_failure_returns_500(self, mock_store):
        mock_store.list_all.side_effect = StoreError(context={"operation": "list"})
        app = create_app(Settings(db_driver="memory"), store=mock_store)

        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get("/pokemon")

        assert response.status_code == 500
        assert response.json()["error"] == "Error retrieving Pokemon."
        assert response.json()["code"] == "store_error"


class TestUpdatePokemon:

    @pytest.mark.asyncio
    async def test_update_by_id(self, test_client, sample_pokemon_data):
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.patch(f"/pokemon/{new_id}", json={"types": "Fire, Dragon"})

        assert response.status_code == 200
        assert response.json() == {"message": "Pokemon updated successfully."}
        record = (await test_client.get(f"/pokemon/{new_id}")).json()
        assert record["types"] == "Fire, Dragon"
        assert record["description"] == sample_pokemon_data["description"]

    @pytest.mark.asyncio
    async def test_update_by_name(self, test_client, sample_pokemon_data):
        await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.patch(
            "/pokemon/nombre/Charmander", json={"name": "Charmeleon"}
        )

        assert response.status_code == 200
        assert (await test_client.get("/pokemon/nombre/Charmeleon")).status_code == 200
        assert (await test_client.get("/pokemon/nombre/Charmander")).status_code == 404

    @pytest.mark.asyncio
    async def test_update_empty_body_returns_400(self, test_client, sample_pokemon_data):
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.patch(f"/pokemon/{new_id}", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "At least one field must be provided."

    @pytest.mark.asyncio
    async def test_update_unknown_keys_only_returns_400(self, test_client, sample_pokemon_data):
        """Unknown keys are ignored, leaving nothing to update."""
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.patch(f"/pokemon/{new_id}", json={"id": 1, "weight": "8.5"})

        assert response.status_code == 400
        assert (await test_client.get(f"/pokemon/{new_id}")).json()["id"] == new_id

    @pytest.mark.asyncio
    async def test_update_null_value_returns_400(self, test_client, sample_pokemon_data):
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.patch(f"/pokemon/{new_id}", json={"image": None})

        assert response.status_code == 400
        assert response.json()["error"] == "Fields cannot be null."

    @pytest.mark.asyncio
    async def test_update_blank_name_returns_400(self, test_client, sample_pokemon_data):
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.patch(f"/pokemon/{new_id}", json={"name": "  "})

        assert response.status_code == 400
        assert response.json()["error"] == "Fields cannot be empty."
        assert (await test_client.get(f"/pokemon/{new_id}")).json()["name"] == "Charmander"

    @pytest.mark.asyncio
    async def test_update_missing_returns_404(self, test_client):
        by_id = await test_client.patch("/pokemon/9999", json={"types": "Normal"})
        by_name = await test_client.patch("/pokemon/nombre/Missingno", json={"types": "Normal"})

        assert by_id.status_code == 404
        assert by_name.status_code == 404
        assert by_name.json()["error"] == "Pokemon not found."


class TestDeletePokemon:

    @pytest.mark.asyncio
    async def test_delete_by_id(self, test_client, sample_pokemon_data):
        new_id = await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.delete(f"/pokemon/{new_id}")

        assert response.status_code == 200
        assert response.json() == {"message": "Pokemon deleted successfully."}
        assert (await test_client.get(f"/pokemon/{new_id}")).status_code == 404
        assert (await test_client.delete(f"/pokemon/{new_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_by_name(self, test_client, sample_pokemon_data):
        await add_pokemon(test_client, sample_pokemon_data)

        response = await test_client.delete("/pokemon/nombre/Charmander")

        assert response.status_code == 200
        assert (await test_client.get("/pokemon")).json() == []

    @pytest.mark.asyncio
    async def test_delete_by_name_missing(self, test_client):
        response = await test_client.delete("/pokemon/nombre/Missingno")

        assert response.status_code == 404


class TestSqliteRoundTrip:
    """The same flow against the SQL store on SQLite."""

    @pytest.mark.asyncio
    async def test_full_lifecycle(self, sqlite_client, sample_pokemon_data):
        new_id = await add_pokemon(sqlite_client, sample_pokemon_data)

        assert (await sqlite_client.get(f"/pokemon/{new_id}")).json()["name"] == "Charmander"

        patched = await sqlite_client.patch(
            "/pokemon/nombre/Charmander", json={"types": "Fire", "name": "Charizard"}
        )
        assert patched.status_code == 200
        assert (await sqlite_client.get("/pokemon/nombre/Charizard")).json()["id"] == new_id

        duplicate = await sqlite_client.post(
            "/pokemon", json={**sample_pokemon_data, "name": "Charizard"}
        )
        assert duplicate.status_code == 500
        assert duplicate.json()["error"] == "Error adding the Pokemon."

        assert (await sqlite_client.delete(f"/pokemon/{new_id}")).status_code == 200
        assert (await sqlite_client.get("/pokemon")).json() == []


class TestOutOfRangeIds:
    """Ids too large for the primary key are plain not-found on every store."""

    HUGE_ID = "99999999999999999999"

    @pytest.mark.asyncio
    async def test_huge_id_sqlite(self, sqlite_client):
        path = f"/pokemon/{self.HUGE_ID}"

        responses = [
            await sqlite_client.get(path),
            await sqlite_client.patch(path, json={"types": "Normal"}),
            await sqlite_client.delete(path),
        ]

        for response in responses:
            assert response.status_code == 404
            assert response.json()["error"] == "Pokemon not found."

    @pytest.mark.asyncio
    async def test_huge_negative_id_memory(self, test_client):
        response = await test_client.get(f"/pokemon/-{self.HUGE_ID}")

        assert response.status_code == 404


class TestCrossCutting:

    @pytest.mark.asyncio
    async def test_request_id_generated(self, test_client):
        response = await test_client.get("/pokemon")

        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed_in_header_and_error(self, test_client):
        response = await test_client.get("/pokemon/9999", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_cors_preflight(self, test_client):
        response = await test_client.options(
            "/pokemon",
            headers={
                "Origin": "http://localhost:5173",
                "Access-Control-Request-Method": "PATCH",
            },
        )

        assert response.status_code == 200
        assert "PATCH" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["store"] == "memory"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_health_unhealthy_when_store_closed(self, memory_store, test_client):
        await memory_store.close()

        response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"


class TestDocumentation:

    @pytest.mark.asyncio
    async def test_openapi_document(self, test_client):
        response = await test_client.get("/api-spec")

        assert response.status_code == 200
        document = response.json()
        assert document["info"]["title"] == "Pokemon API"
        assert "/pokemon/nombre/{name}" in document["paths"]
        assert set(document["paths"]["/pokemon/{pokemon_id}"]) == {"get", "patch", "delete"}
        assert document["servers"][0]["url"] == "http://localhost:3002"

    @pytest.mark.asyncio
    async def test_swagger_ui(self, test_client):
        response = await test_client.get("/api-doc")

        assert response.status_code == 200
        assert "/api-spec" in response.text

    @pytest.mark.asyncio
    async def test_redoc(self, test_client):
        assert (await test_client.get("/api-redoc")).status_code == 200

    @pytest.mark.asyncio
    async def test_description_is_project_readme(self, test_client):
        document = (await test_client.get("/api-spec")).json()

        assert document["info"]["description"] == README_PATH.read_text(encoding="utf-8")

    def test_description_falls_back_without_readme(self, tmp_path):
        assert load_api_description(tmp_path / "missing.md") == API_DESCRIPTION
