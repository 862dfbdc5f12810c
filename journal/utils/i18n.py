"""Language detection for API responses.

Picks a language from the Accept-Language header.
"""

from __future__ import annotations

from fastapi import Request

SUPPORTED_LANGUAGES = ("en", "ko")
DEFAULT_LANGUAGE = "en"


def get_language(request: Request) -> str:
    """Extract preferred language from the Accept-Language header.

    Returns 'en' or 'ko'. Defaults to 'en' if header is missing
    or contains an unsupported language.
    """
    header = request.headers.get("accept-language", DEFAULT_LANGUAGE)
    lang = header.split(",")[0].strip().lower()
    if lang.startswith("ko"):
        return "ko"
    return DEFAULT_LANGUAGE
