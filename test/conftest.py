"""
Pytest configuration and fixtures for LingoPress tests
"""

import os
import sys
from collections.abc import AsyncGenerator
from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

# Settings are read at import time, so the URL has to be in place first
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from lingopress.config import Settings  # noqa: E402
from lingopress.database import Database  # noqa: E402
from lingopress.models import (  # noqa: E402
    Article,
    ArticleStatus,
    ArticleTranslation,
    Language,
    NewsletterSubscriber,
    Tag,
)


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite://",
        "environment": "test",
        "app_url": "https://example.com",
        "smtp_host": None,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def test_settings() -> Settings:
    return make_settings()


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """
    Fresh in-memory database per test. StaticPool keeps a single connection
    so every session sees the same tables.
    """
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.drop_all()
    await db.dispose()


@pytest.fixture
async def test_db(database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


@pytest.fixture
def app(database, test_settings):
    from main import create_app

    return create_app(database=database, config=test_settings)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def languages(test_db) -> dict[str, Language]:
    """English, Arabic and Russian catalog entries."""
    rows = {
        "en": Language(code="en", name="English", native_name="English", is_rtl=False),
        "ar": Language(code="ar", name="Arabic", native_name="العربية", is_rtl=True),
        "ru": Language(code="ru", name="Russian", native_name="Русский", is_rtl=False),
    }
    test_db.add_all(rows.values())
    await test_db.commit()
    return rows


@pytest.fixture
async def draft_article(test_db, languages) -> Article:
    article = Article(
        id="A1",
        title="Hello World",
        slug="hello-world",
        excerpt="A first post",
        author_name="Layla",
        status=ArticleStatus.DRAFT,
        original_language_id=languages["en"].id,
    )
    test_db.add(article)
    await test_db.commit()
    return article


@pytest.fixture
async def published_catalog(test_db, languages) -> dict:
    """One published English article with a published Arabic translation, plus a draft."""
    updated = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    published = Article(
        title="Published",
        slug="published-post",
        status=ArticleStatus.PUBLISHED,
        published_at=updated,
        updated_at=updated,
        original_language_id=languages["en"].id,
    )
    draft = Article(
        title="Draft",
        slug="draft-post",
        status=ArticleStatus.DRAFT,
        original_language_id=languages["en"].id,
    )
    test_db.add_all([published, draft])
    await test_db.flush()

    translation = ArticleTranslation(
        article_id=published.id,
        language_id=languages["ar"].id,
        title="منشور",
        slug="manshur",
        status=ArticleStatus.PUBLISHED,
        updated_at=updated,
    )
    test_db.add(translation)
    await test_db.commit()
    return {"published": published, "draft": draft, "translation": translation}


@pytest.fixture
async def tag(test_db) -> Tag:
    tag = Tag(name="Science", slug="science")
    test_db.add(tag)
    await test_db.commit()
    return tag


@pytest.fixture
async def subscribers(test_db) -> list[NewsletterSubscriber]:
    rows = [
        NewsletterSubscriber(email="one@example.com"),
        NewsletterSubscriber(email="two@example.com", language_code="ar"),
        NewsletterSubscriber(email="gone@example.com", is_active=False),
    ]
    test_db.add_all(rows)
    await test_db.commit()
    return rows
