"""
Keywords — fixed vocabularies used to read titles and tags.

All dictionaries are immutable module constants. Title matching is
case-insensitive and whole-word (a trailing plural "s" is allowed), so
"ai" matches "AI tools" but not "email" or "explained".
"""

import re
from functools import lru_cache
from typing import Iterable, List, Pattern

# ── Title themes ──
TECH_KEYWORDS = ("ai", "artificial intelligence")
TUTORIAL_KEYWORDS = ("tutorial", "how to")
NOVELTY_KEYWORDS = ("new", "latest")
TIPS_KEYWORDS = ("tips", "tricks")
REVIEW_KEYWORDS = ("review", "analysis")

# Any four-digit year from 2000 onward counts as a timeliness marker
YEAR_TOKEN = re.compile(r"(?<![0-9])20\d{2}(?![0-9])")

# ── Tags ──
TRENDING_TAG_KEYWORDS = (
    "ai", "artificial intelligence", "machine learning", "chatgpt", "gemini",
    "coding", "programming", "development", "tutorial", "guide",
    "javascript", "python", "react", "nodejs", "web development",
    "productivity", "tips", "tricks", "best practices",
    "google", "microsoft", "apple", "tech", "innovation",
)

# ── Viral language ──
ATTENTION_KEYWORDS = ("shocking", "incredible", "amazing")
EXCLUSIVITY_KEYWORDS = ("new", "breaking", "exclusive")


@lru_cache(maxsize=None)
def _pattern(keyword: str) -> Pattern:
    return re.compile(
        r"(?<![a-z0-9])" + re.escape(keyword.lower()) + r"s?(?![a-z0-9])"
    )


def has_keyword(text: str, keyword: str) -> bool:
    """True if the keyword appears in text as a whole word or phrase."""
    if not text:
        return False
    return _pattern(keyword).search(text.lower()) is not None


def has_any(text: str, keywords: Iterable[str]) -> bool:
    return any(has_keyword(text, k) for k in keywords)


def has_year_token(text: str) -> bool:
    return bool(text) and YEAR_TOKEN.search(text) is not None


def match_trending_tags(tags: Iterable[str]) -> List[str]:
    """
    Return the tags that mention a trending keyword, in tag order.

    Tags are often run together ("reactjs", "pythonprogramming"), so they
    are matched by substring rather than by whole word.
    """
    return [
        tag for tag in tags
        if any(keyword in tag.lower() for keyword in TRENDING_TAG_KEYWORDS)
    ]
