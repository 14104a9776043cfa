"""URL slug generation for Turkish text."""

import re

TURKISH_CHAR_MAP = str.maketrans({
    "ğ": "g", "Ğ": "g",
    "ü": "u", "Ü": "u",
    "ş": "s", "Ş": "s",
    "ı": "i", "İ": "i",
    "ö": "o", "Ö": "o",
    "ç": "c", "Ç": "c",
})

DEFAULT_MAX_LENGTH = 100


def generate_slug(text: str, max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """
    Generate a URL-friendly slug from Turkish text.

    Turkish letters are transliterated before lowercasing so that "İ" does
    not turn into "i" plus a combining dot. Long slugs are cut at the last
    hyphen when that keeps at least half of the allowed length.
    """
    if not text:
        return ""

    slug = text.translate(TURKISH_CHAR_MAP).lower()
    slug = re.sub(r"[^a-z0-9]+", "-", slug).strip("-")

    if len(slug) > max_length:
        truncated = slug[:max_length]
        last_hyphen = truncated.rfind("-")
        if last_hyphen > max_length * 0.5:
            slug = truncated[:last_hyphen]
        else:
            slug = truncated

    return slug.rstrip("-")
