# ABOUTME: Heuristic city-name extraction from free-text chat messages.
# ABOUTME: Strips punctuation, filler words, and short tokens to isolate a location.

import re

STOPWORDS = frozenset(
    {
        "weather",
        "in",
        "at",
        "for",
        "temperature",
        "how",
        "is",
        "the",
        "like",
        "show",
        "me",
        "please",
        "tell",
        "forecast",
    }
)

_NON_WORD = re.compile(r"[^\w\s]")


def extract_city(text: str) -> str:
    """Guess the location a user is asking about.

    Falls back to the original text when nothing survives filtering, so a
    non-empty input never yields an empty query.
    """
    words = _NON_WORD.sub("", text.lower()).split()
    candidates = [w for w in words if w not in STOPWORDS and len(w) > 2]
    return " ".join(candidates) if candidates else text
