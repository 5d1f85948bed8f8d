"""Timecode extraction for jump-scare listings.

Single-pass scan over whitespace-collapsed text. Every candidate token is
validated and rewritten to the fixed-width ``HH:MM:SS`` form, so the output is
both deduplicated by plain string equality and sortable lexicographically.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_CANDIDATE_RE = re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?\b", re.ASCII)

MAX_HOURS = 99


def normalise_timecode(token: str) -> str | None:
    """Return ``token`` as a zero-padded ``HH:MM:SS`` string, or None if invalid.

    ``MM:SS`` tokens are read as hours=0. Hours above 99 are rejected to keep
    version numbers and similar colon-separated noise out of the result.
    """
    groups = token.split(":")
    if len(groups) not in (2, 3):
        return None
    if not all(group.isdigit() for group in groups):
        return None

    values = [int(group) for group in groups]
    if len(values) == 2:
        values.insert(0, 0)
    hours, minutes, seconds = values

    if minutes > 59 or seconds > 59 or hours > MAX_HOURS:
        return None
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def extract_timestamps(text: str) -> list[str]:
    """Extract unique normalised timecodes from ``text`` in first-seen order.

    Returns an empty list when nothing timecode-shaped survives validation.
    """
    collapsed = _WHITESPACE_RE.sub(" ", text).strip()

    seen: set[str] = set()
    timestamps: list[str] = []
    for match in _CANDIDATE_RE.finditer(collapsed):
        timecode = normalise_timecode(match.group(0))
        if timecode is None or timecode in seen:
            continue
        seen.add(timecode)
        timestamps.append(timecode)
    return timestamps
