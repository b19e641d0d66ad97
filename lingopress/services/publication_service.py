"""
Publication Service

Moves an article from draft to published and then notifies newsletter
subscribers. The two steps are reported separately: the status change is
the durable fact, the notification is best-effort and never undoes it.

Callers are expected to have checked ``can_publish`` already.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from lingopress.models import Article, ArticleStatus
from lingopress.services.newsletter_service import NotificationResult

logger = logging.getLogger(__name__)


class ArticleNotifier(Protocol):
    async def notify_article_published(self, article: Article) -> NotificationResult: ...


@dataclass
class PublishResult:
    success: bool
    article: Article | None = None
    email_result: NotificationResult | None = None
    error: str | None = None
    already_published: bool = False


class PublicationService:
    """Draft → published transition for articles."""

    def __init__(self, db: AsyncSession, notifier: ArticleNotifier):
        self.db = db
        self.notifier = notifier

    async def _load(self, article_id: str) -> Article | None:
        result = await self.db.execute(
            select(Article)
            .options(selectinload(Article.original_language))
            .where(Article.id == article_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().first()

    async def publish(self, article_id: str) -> PublishResult:
        """
        Publish an article and notify subscribers.

        Returns:
            PublishResult with ``success`` describing the status change and
            ``email_result`` describing the notification. Publishing an
            article that is already published is a successful no-op and
            sends nothing.
        """
        try:
            article = await self._load(article_id)
            if article is None:
                logger.warning(f"Publish requested for missing article {article_id}")
                return PublishResult(success=False, error="Article not found")

            if article.status == ArticleStatus.PUBLISHED:
                return self._already_published(article)

            now = datetime.now(timezone.utc)
            result = await self.db.execute(
                update(Article)
                .where(Article.id == article_id, Article.status != ArticleStatus.PUBLISHED)
                .values(status=ArticleStatus.PUBLISHED, published_at=now, updated_at=now)
                .execution_options(synchronize_session=False)
            )
            await self.db.commit()

            article = await self._load(article_id)
        except SQLAlchemyError as e:
            logger.error(f"Error publishing article {article_id}: {e}")
            await self._rollback()
            return PublishResult(success=False, error="Failed to publish article")

        if article is None:
            logger.warning(f"Article {article_id} was deleted while being published")
            return PublishResult(success=False, error="Article not found")

        if result.rowcount == 0:
            # Another request published it between our read and our update
            return self._already_published(article)

        logger.info(f"Article {article_id} published")
        email_result = await self._notify(article)
        return PublishResult(success=True, article=article, email_result=email_result)

    async def _notify(self, article: Article) -> NotificationResult:
        try:
            email_result = await self.notifier.notify_article_published(article)
        except Exception as e:
            logger.exception(f"Notification for article {article.id} failed: {e}")
            return NotificationResult.failed("Failed to send notifications")

        if not email_result.success:
            logger.warning(f"Article {article.id} published but notification failed: {email_result.error}")
        return email_result

    def _already_published(self, article: Article) -> PublishResult:
        logger.info(f"Article {article.id} already published, nothing to do")
        return PublishResult(
            success=True,
            article=article,
            already_published=True,
            email_result=NotificationResult(
                success=True,
                skipped=True,
                message="Article was already published; no notification sent",
            ),
        )

    async def _rollback(self) -> None:
        try:
            await self.db.rollback()
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Rollback after publish failure also failed: {e}")
