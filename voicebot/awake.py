"""Wake-word check for recognised speech."""

from __future__ import annotations

WAKE_WORD = "元宝"


def is_wake_phrase(text: str, wake_word: str = WAKE_WORD) -> bool:
    """Return True when ``text`` contains the wake word."""
    return wake_word in text