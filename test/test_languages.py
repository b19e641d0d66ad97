"""
Language catalog tests
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError

from conftest import make_settings
from lingopress.database import Database, get_db
from lingopress.exceptions import DuplicateResourceError
from lingopress.services.language_service import create_language, list_languages


class TestLanguageService:
    @pytest.mark.asyncio
    async def test_list_ordered_by_name(self, test_db, languages):
        rows = await list_languages(test_db)
        assert [row.code for row in rows] == ["ar", "en", "ru"]

    @pytest.mark.asyncio
    async def test_active_only(self, test_db, languages):
        languages["ru"].is_active = False
        await test_db.commit()

        rows = await list_languages(test_db, active_only=True)
        assert [row.code for row in rows] == ["ar", "en"]

    @pytest.mark.asyncio
    async def test_create_derives_direction(self, test_db):
        language = await create_language("ar", test_db)

        assert language.is_rtl is True
        assert language.name == "Arabic"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, test_db, languages):
        with pytest.raises(DuplicateResourceError):
            await create_language("en", test_db)


class TestLanguageRoutes:
    @pytest.mark.asyncio
    async def test_admin_list(self, client, languages):
        response = await client.get("/api/admin/languages")

        assert response.status_code == 200
        data = response.json()["languages"]
        assert [row["code"] for row in data] == ["ar", "en", "ru"]
        assert data[0]["isRtl"] is True
        assert data[0]["nativeName"] == "العربية"

    @pytest.mark.asyncio
    async def test_admin_list_unavailable_catalog_is_503(self, app, client):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("connection refused"))

        async def broken_session():
            yield db

        app.dependency_overrides[get_db] = broken_session
        response = await client.get("/api/admin/languages")

        assert response.status_code == 503
        assert response.json()["error"]["error_code"] == "SERVICE_UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_create_requires_capability(self, app, client):
        app.state.settings.rbac_fallback_role = "ANON"
        response = await client.post("/api/admin/languages", json={"code": "fr"})
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_create_and_delete(self, client):
        response = await client.post("/api/admin/languages", json={"code": "fr"}, headers={"x-role": "EDITOR"})
        assert response.status_code == 201
        language_id = response.json()["id"]

        response = await client.delete(f"/api/admin/languages/{language_id}", headers={"x-role": "EDITOR"})
        assert response.status_code == 403

        response = await client.delete(f"/api/admin/languages/{language_id}", headers={"x-role": "ADMIN"})
        assert response.status_code == 204

    @pytest.mark.asyncio
    async def test_public_list_hides_inactive(self, client, test_db, languages):
        languages["ar"].is_active = False
        await test_db.commit()

        response = await client.get("/api/languages")
        assert [row["code"] for row in response.json()["languages"]] == ["en", "ru"]


class TestUnreachableDatabase:
    """A refused TCP connection surfaces from asyncpg as a plain OSError."""

    @pytest.fixture
    async def unreachable_client(self):
        from main import create_app

        database = Database("postgresql+asyncpg://u:p@127.0.0.1:1/x")
        app = create_app(database=database, config=make_settings())
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            yield ac
        await database.dispose()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/api/admin/languages", "/api/languages"])
    async def test_connection_refused_is_503(self, unreachable_client, path):
        response = await unreachable_client.get(path)

        assert response.status_code == 503
        error = response.json()["error"]
        assert error["error_code"] == "SERVICE_UNAVAILABLE"
        assert error["message"] == "Database not available"
