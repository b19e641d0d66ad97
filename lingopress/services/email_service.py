"""
Email Service

Renders and sends newsletter emails over SMTP.
"""

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from lingopress.config import settings

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "emails"


class EmailService:
    """Service for sending emails with template support"""

    def __init__(self, config=settings):
        """Initialize email service with Jinja2 template engine"""
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            autoescape=select_autoescape(["html", "xml"]),
        )

        self.app_name = config.app_name
        self.smtp_host = config.smtp_host
        self.smtp_port = config.smtp_port
        self.smtp_user = config.smtp_user
        self.smtp_password = config.smtp_password
        self.smtp_from = config.smtp_from

    @property
    def is_configured(self) -> bool:
        return bool(self.smtp_host)

    def _send_email(
        self,
        to_email: str | list[str],
        subject: str,
        html_body: str,
        text_body: str | None = None,
    ) -> bool:
        """
        Send an email using SMTP.

        Args:
            to_email: Recipient email address(es)
            subject: Email subject
            html_body: HTML email body
            text_body: Plain text email body (optional)

        Returns:
            bool: True if email sent successfully, False otherwise
        """
        try:
            msg = MIMEMultipart("alternative")
            msg["Subject"] = subject
            msg["From"] = self.smtp_from
            msg["To"] = to_email if isinstance(to_email, str) else ", ".join(to_email)

            if text_body:
                msg.attach(MIMEText(text_body, "plain", "utf-8"))
            msg.attach(MIMEText(html_body, "html", "utf-8"))

            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)

            return True

        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

    def render_article_published(self, article: dict, recipient: str) -> tuple[str, str]:
        """Return (html, text) bodies for a new-article notification."""
        template = self.env.get_template("article_published.html")
        html_body = template.render(article=article, recipient=recipient, app_name=self.app_name)

        text_body = (
            f"New article: {article['title']}\n\n"
            f"{article['excerpt']}\n\n"
            f"By {article['author_name']} on {article['published_at']}\n"
            f"Read it here: {article['url']}\n"
        )
        return html_body, text_body

    def send_article_published_email(self, to_email: str, article: dict) -> bool:
        html_body, text_body = self.render_article_published(article, to_email)
        return self._send_email(
            to_email=to_email,
            subject=f"New Article: {article['title']}",
            html_body=html_body,
            text_body=text_body,
        )
