"""
Publication workflow tests

Covers the service (status transition, idempotence, notification isolation)
and the publish endpoint (capability check, response shape).
"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import delete, update
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from lingopress.models import Article, ArticleStatus
from lingopress.services.newsletter_service import NotificationResult
from lingopress.services.publication_service import PublicationService


def _notifier(result: NotificationResult | None = None, error: Exception | None = None):
    notifier = MagicMock()
    notifier.notify_article_published = AsyncMock(return_value=result, side_effect=error)
    return notifier


async def _reload(db: AsyncSession, article_id: str) -> Article:
    article = await db.get(Article, article_id, populate_existing=True)
    return article


def _interleave(service: PublicationService, database, statement) -> None:
    """Run ``statement`` from another session right after the first read of the article."""
    load = service._load
    calls = []

    async def load_then_interleave(article_id: str):
        article = await load(article_id)
        if not calls:
            calls.append(article_id)
            async with database.session() as other:
                await other.execute(statement)
                await other.commit()
        return article

    service._load = load_then_interleave


class TestPublicationService:
    @pytest.mark.asyncio
    async def test_publishes_draft_and_notifies(self, test_db: AsyncSession, draft_article):
        notifier = _notifier(NotificationResult(success=True, message="sent", total_subscribers=2, success_count=2))
        service = PublicationService(test_db, notifier)

        result = await service.publish("A1")

        assert result.success is True
        assert result.already_published is False
        assert result.article.status == ArticleStatus.PUBLISHED
        assert result.article.published_at is not None
        assert result.email_result.success_count == 2
        notifier.notify_article_published.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_second_publish_is_a_no_op(self, test_db: AsyncSession, draft_article):
        notifier = _notifier(NotificationResult(success=True))
        service = PublicationService(test_db, notifier)

        first = await service.publish("A1")
        published_at = first.article.published_at
        second = await service.publish("A1")

        assert second.success is True
        assert second.already_published is True
        assert second.email_result.skipped is True
        assert second.article.published_at == published_at
        assert notifier.notify_article_published.await_count == 1

    @pytest.mark.asyncio
    async def test_notification_failure_does_not_revert(self, test_db: AsyncSession, draft_article):
        service = PublicationService(test_db, _notifier(error=RuntimeError("smtp exploded")))

        result = await service.publish("A1")

        assert result.success is True
        assert result.email_result.success is False
        assert result.email_result.error == "Failed to send notifications"
        article = await _reload(test_db, "A1")
        assert article.status == ArticleStatus.PUBLISHED

    @pytest.mark.asyncio
    async def test_missing_article(self, test_db: AsyncSession, languages):
        notifier = _notifier(NotificationResult(success=True))
        result = await PublicationService(test_db, notifier).publish("missing")

        assert result.success is False
        assert result.error == "Article not found"
        notifier.notify_article_published.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_concurrent_publish_between_read_and_update(self, database, test_db: AsyncSession, draft_article):
        notifier = _notifier(NotificationResult(success=True))
        service = PublicationService(test_db, notifier)
        _interleave(
            service,
            database,
            update(Article)
            .where(Article.id == "A1")
            .values(status=ArticleStatus.PUBLISHED, published_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        )

        result = await service.publish("A1")

        assert result.success is True
        assert result.already_published is True
        assert result.article.status == ArticleStatus.PUBLISHED
        assert result.email_result.skipped is True
        notifier.notify_article_published.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_article_deleted_between_read_and_update(self, database, test_db: AsyncSession, draft_article):
        notifier = _notifier(NotificationResult(success=True))
        service = PublicationService(test_db, notifier)
        _interleave(service, database, delete(Article).where(Article.id == "A1"))

        result = await service.publish("A1")

        assert result.success is False
        assert result.error == "Article not found"
        notifier.notify_article_published.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_failure_rolls_back(self):
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))
        notifier = _notifier(NotificationResult(success=True))

        result = await PublicationService(db, notifier).publish("A1")

        assert result.success is False
        assert result.error == "Failed to publish article"
        db.rollback.assert_awaited_once()
        notifier.notify_article_published.assert_not_awaited()


class TestPublishRoute:
    @pytest.mark.asyncio
    async def test_editor_cannot_publish(self, client, test_db: AsyncSession, draft_article):
        response = await client.post("/api/articles/A1/publish", headers={"x-role": "EDITOR"})

        assert response.status_code == 403
        assert response.json()["error"]["error_code"] == "AUTH_PERMISSION_DENIED"
        article = await _reload(test_db, "A1")
        assert article.status == ArticleStatus.DRAFT

    @pytest.mark.asyncio
    async def test_admin_publishes_draft(self, client, test_db: AsyncSession, draft_article):
        response = await client.post("/api/articles/A1/publish", headers={"x-role": "ADMIN"})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Article published successfully"
        assert data["article"]["id"] == "A1"
        assert data["article"]["status"] == "published"
        assert data["article"]["publishedAt"] is not None
        # SMTP is not configured in tests: the publish stands, the email reports failure
        assert data["emailResult"]["success"] is False

        article = await _reload(test_db, "A1")
        assert article.status == ArticleStatus.PUBLISHED

    @pytest.mark.asyncio
    async def test_republish_reports_already_published(self, client, draft_article):
        await client.post("/api/articles/A1/publish", headers={"x-role": "ADMIN"})
        response = await client.post("/api/articles/A1/publish", headers={"x-role": "ADMIN"})

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Article was already published"
        assert data["emailResult"]["skipped"] is True

    @pytest.mark.asyncio
    async def test_missing_article_is_500(self, client, languages):
        response = await client.post("/api/articles/nope/publish")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["error_code"] == "PUBLICATION_FAILED"
        assert error["message"] == "Article not found"

    @pytest.mark.asyncio
    async def test_blank_id_is_400(self, client):
        response = await client.post("/api/articles/%20/publish")

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_notifier_crash_keeps_article_published(self, client, test_db: AsyncSession, draft_article):
        with patch(
            "lingopress.routes.articles.NewsletterService.notify_article_published",
            new=AsyncMock(side_effect=RuntimeError("boom")),
        ):
            response = await client.post("/api/articles/A1/publish")

        assert response.status_code == 200
        assert response.json()["emailResult"]["error"] == "Failed to send notifications"
        article = await _reload(test_db, "A1")
        assert article.status == ArticleStatus.PUBLISHED
