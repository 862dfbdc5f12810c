"""Bilingual message translations for API responses.

Usage:
    from journal.utils.messages import msg
    msg("search.failed", lang)                # → "Search failed, please try again"
    msg("tags.name_required", lang)           # → "Tag name is required"
"""

from __future__ import annotations

_MESSAGES: dict[str, dict[str, str]] = {
    "search.failed": {
        "ko": "검색에 실패했습니다. 다시 시도해 주세요",
        "en": "Search failed, please try again",
    },
    "tags.name_required": {
        "ko": "태그 이름이 필요합니다",
        "en": "Tag name is required",
    },
}


def msg(key: str, lang: str = "en", **kwargs: object) -> str:
    """Look up a translated message, falling back to English, then the key."""
    entry = _MESSAGES.get(key)
    if entry is None:
        return key
    text = entry.get(lang) or entry["en"]
    return text.format(**kwargs) if kwargs else text
