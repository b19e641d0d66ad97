from .article import Article, ArticleStatus, article_tags
from .article_translation import ArticleTranslation
from .language import Language
from .newsletter_subscriber import NewsletterSubscriber
from .tag import Tag, TagTranslation

__all__ = [
    "Article",
    "ArticleStatus",
    "ArticleTranslation",
    "article_tags",
    "Language",
    "NewsletterSubscriber",
    "Tag",
    "TagTranslation",
]
