"""
Newsletter Service

Subscriber management and new-article notifications. Delivery is
best-effort: failures are counted and reported, never raised to the caller.
"""

import asyncio
import logging
from dataclasses import asdict, dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from lingopress.config import settings
from lingopress.i18n.locale import DEFAULT_LANGUAGE, get_text_direction
from lingopress.models import Article, NewsletterSubscriber
from lingopress.services.email_service import EmailService

logger = logging.getLogger(__name__)


@dataclass
class NotificationResult:
    success: bool
    message: str | None = None
    error: str | None = None
    total_subscribers: int = 0
    success_count: int = 0
    failure_count: int = 0
    skipped: bool = False

    @classmethod
    def failed(cls, error: str) -> "NotificationResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        return asdict(self)


class NewsletterService:
    """Sends new-article notifications to active newsletter subscribers."""

    def __init__(self, db: AsyncSession, email_service: EmailService | None = None, config=settings):
        self.db = db
        self.email_service = email_service or EmailService(config)
        self.base_url = config.app_url.rstrip("/")
        self.batch_size = max(1, config.newsletter_batch_size)
        self.batch_delay = 1.0

    async def get_active_subscribers(self) -> list[str]:
        result = await self.db.execute(
            select(NewsletterSubscriber.email)
            .where(NewsletterSubscriber.is_active.is_(True))
            .order_by(NewsletterSubscriber.created_at)
        )
        return list(result.scalars().all())

    async def subscribe(self, email: str, language_code: str = DEFAULT_LANGUAGE.value) -> NewsletterSubscriber:
        """Create or reactivate a subscriber."""
        result = await self.db.execute(select(NewsletterSubscriber).where(NewsletterSubscriber.email == email))
        subscriber = result.scalars().first()
        if subscriber is None:
            subscriber = NewsletterSubscriber(email=email, language_code=language_code, is_active=True)
            self.db.add(subscriber)
        else:
            subscriber.is_active = True
            subscriber.language_code = language_code

        await self.db.commit()
        await self.db.refresh(subscriber)
        logger.info(f"Newsletter subscription saved for {email}")
        return subscriber

    def build_article_payload(self, article: Article) -> dict:
        language = article.original_language.code if article.original_language else DEFAULT_LANGUAGE.value
        return {
            "title": article.title or "Untitled Article",
            "url": f"{self.base_url}/{language}/articles/{article.slug or 'untitled'}",
            "excerpt": article.excerpt or "No excerpt available",
            "author_name": article.author_name or "Unknown Author",
            "published_at": article.published_at.strftime("%B %d, %Y") if article.published_at else "Unknown Date",
            "cover_url": article.cover_url,
            "language": language,
            "direction": get_text_direction(language).value,
        }

    async def notify_article_published(self, article: Article) -> NotificationResult:
        """Email every active subscriber about a newly published article."""
        if not self.email_service.is_configured:
            logger.warning("SMTP not configured, skipping newsletter notification")
            return NotificationResult.failed("Email delivery is not configured")

        subscribers = await self.get_active_subscribers()
        if not subscribers:
            logger.info("No active newsletter subscribers to notify")
            return NotificationResult(success=True, message="No subscribers to notify")

        payload = self.build_article_payload(article)
        successes = 0

        for start in range(0, len(subscribers), self.batch_size):
            batch = subscribers[start : start + self.batch_size]
            logger.info(f"Sending newsletter batch {start // self.batch_size + 1} ({len(batch)} emails)")

            results = await asyncio.gather(
                *(run_in_threadpool(self.email_service.send_article_published_email, email, payload) for email in batch)
            )
            successes += sum(1 for sent in results if sent)

            # Stay under the SMTP provider's rate limit
            if start + self.batch_size < len(subscribers):
                await asyncio.sleep(self.batch_delay)

        failures = len(subscribers) - successes
        logger.info(f"Newsletter for article {article.id}: {successes} delivered, {failures} failed")

        if successes == 0:
            return NotificationResult(
                success=False,
                error="Failed to send newsletter notifications",
                total_subscribers=len(subscribers),
                failure_count=failures,
            )

        return NotificationResult(
            success=True,
            message=f"Newsletter notifications sent. {successes} delivered, {failures} failed.",
            total_subscribers=len(subscribers),
            success_count=successes,
            failure_count=failures,
        )
