"""Anti-bot interstitial detection.

A phrase heuristic. A miss only costs an empty timecode list, while a false
hit turns a readable page into an error, so phrases come from challenge-page
wording rather than generic site text. Callers pass visible page text, not
raw markup, so script and stylesheet URLs never count.
"""

from __future__ import annotations

BLOCK_PHRASES: tuple[str, ...] = (
    "checking your browser",
    "attention required",
    "performance & security by cloudflare",
    "verify you are human",
    "enable javascript and cookies to continue",
    "just a moment...",
    "ddos protection by",
)


def is_blocked(content: str, phrases: tuple[str, ...] = BLOCK_PHRASES) -> bool:
    """Return True if ``content`` looks like a bot-challenge page."""
    lowered = content.lower()
    return any(phrase in lowered for phrase in phrases)
