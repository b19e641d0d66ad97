"""
Tag translation management tests
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.exceptions import DatabaseError, TagNotFoundError, ValidationError
from lingopress.models import Tag, TagTranslation
from lingopress.services.translation_service import (
    TagTranslationInput,
    list_tag_translations,
    replace_tag_translations,
)


async def _stored(db: AsyncSession, tag_id: str) -> list[tuple[str, str]]:
    result = await db.execute(
        select(TagTranslation.language_code, TagTranslation.name)
        .where(TagTranslation.tag_id == tag_id)
        .order_by(TagTranslation.language_code)
    )
    return [tuple(row) for row in result.all()]


class TestReplaceTagTranslations:
    @pytest.mark.asyncio
    async def test_replace_is_idempotent(self, test_db: AsyncSession, tag: Tag):
        items = [TagTranslationInput("ar", "علوم"), TagTranslationInput("fr", "Sciences")]

        await replace_tag_translations(tag.id, items, test_db)
        await replace_tag_translations(tag.id, items, test_db)

        assert await _stored(test_db, tag.id) == [("ar", "علوم"), ("fr", "Sciences")]

    @pytest.mark.asyncio
    async def test_replace_drops_languages_not_in_input(self, test_db: AsyncSession, tag: Tag):
        await replace_tag_translations(tag.id, [TagTranslationInput("de", "Wissenschaft")], test_db)
        await replace_tag_translations(tag.id, [TagTranslationInput("ru", "Наука")], test_db)

        assert await _stored(test_db, tag.id) == [("ru", "Наука")]

    @pytest.mark.asyncio
    async def test_empty_list_clears_translations(self, test_db: AsyncSession, tag: Tag):
        await replace_tag_translations(tag.id, [TagTranslationInput("de", "Wissenschaft")], test_db)
        await replace_tag_translations(tag.id, [], test_db)

        assert await _stored(test_db, tag.id) == []

    @pytest.mark.asyncio
    async def test_names_are_trimmed(self, test_db: AsyncSession, tag: Tag):
        await replace_tag_translations(tag.id, [TagTranslationInput("fr", "  Sciences ")], test_db)

        assert await _stored(test_db, tag.id) == [("fr", "Sciences")]

    @pytest.mark.asyncio
    async def test_duplicate_language_rejected(self, test_db: AsyncSession, tag: Tag):
        await replace_tag_translations(tag.id, [TagTranslationInput("fr", "Sciences")], test_db)

        with pytest.raises(ValidationError):
            await replace_tag_translations(
                tag.id, [TagTranslationInput("de", "A"), TagTranslationInput("de", "B")], test_db
            )

        # Rejected input leaves the previous set untouched
        assert await _stored(test_db, tag.id) == [("fr", "Sciences")]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("item", [TagTranslationInput("xx", "Nope"), TagTranslationInput("fr", "   ")])
    async def test_invalid_entries_rejected(self, test_db: AsyncSession, tag: Tag, item):
        with pytest.raises(ValidationError):
            await replace_tag_translations(tag.id, [item], test_db)

    @pytest.mark.asyncio
    async def test_unknown_tag(self, test_db: AsyncSession):
        with pytest.raises(TagNotFoundError):
            await replace_tag_translations("missing", [], test_db)

    @pytest.mark.asyncio
    async def test_database_failure_is_rolled_back(self):
        db = AsyncMock()
        db.add_all = lambda rows: None
        db.get.return_value = Tag(id="t1", name="Science", slug="science")
        db.execute.side_effect = OperationalError("DELETE", {}, Exception("locked"))

        with pytest.raises(DatabaseError):
            await replace_tag_translations("t1", [TagTranslationInput("fr", "Sciences")], db)

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_translations(self, test_db: AsyncSession, tag: Tag):
        await replace_tag_translations(tag.id, [TagTranslationInput("ru", "Наука"), TagTranslationInput("ar", "علوم")], test_db)

        rows = await list_tag_translations(tag.id, test_db)
        assert [row.language_code for row in rows] == ["ar", "ru"]


class TestTagTranslationRoutes:
    @pytest.mark.asyncio
    async def test_post_then_get(self, client, tag: Tag):
        payload = {"translations": [{"languageCode": "ar", "name": "علوم"}, {"languageCode": "zh", "name": "科学"}]}

        response = await client.post(f"/api/admin/tags/{tag.id}/translations", json=payload)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        response = await client.get(f"/api/admin/tags/{tag.id}/translations")
        assert response.status_code == 200
        assert response.json()["translations"] == payload["translations"]

    @pytest.mark.asyncio
    async def test_editor_may_update(self, client, tag: Tag):
        payload = {"translations": [{"languageCode": "fr", "name": "Sciences"}]}

        response = await client.post(
            f"/api/admin/tags/{tag.id}/translations", json=payload, headers={"x-role": "editor"}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_duplicate_languages_are_400(self, client, tag: Tag):
        payload = {"translations": [{"languageCode": "fr", "name": "A"}, {"languageCode": "fr", "name": "B"}]}

        response = await client.post(f"/api/admin/tags/{tag.id}/translations", json=payload)
        assert response.status_code == 400
        assert response.json()["error"]["error_code"] == "VALIDATION_FAILED"

    @pytest.mark.asyncio
    async def test_malformed_body_is_400(self, client, tag: Tag):
        response = await client.post(f"/api/admin/tags/{tag.id}/translations", json={"translations": "nope"})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_unknown_tag_is_404(self, client, languages):
        response = await client.get("/api/admin/tags/missing/translations")
        assert response.status_code == 404
