import re

from unidecode import unidecode


def slugify(text: str) -> str:
    """ASCII, lowercase, hyphen-separated slug. Non-Latin scripts are transliterated."""
    text = unidecode(text).lower()
    return re.sub(r"[^a-z0-9]+", "-", text).strip("-")
