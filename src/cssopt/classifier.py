"""Utility-class recognition shared by the scanner, filters and analytics."""

from __future__ import annotations

import re

__all__ = ["UTILITY_PATTERNS", "is_utility_class", "utility_chunk"]

# Ordered; the first pattern that matches wins.
UTILITY_PATTERNS: tuple[re.Pattern[str], ...] = (
    # Layout
    re.compile(r"^(flex|grid|block|inline|hidden|relative|absolute|fixed|sticky)$"),
    # Spacing
    re.compile(r"^(p|m|px|py|mx|my|pl|pr|pt|pb|ml|mr|mt|mb)-\d+$"),
    # Colors and backgrounds
    re.compile(r"^(text|bg|border)-.+"),
    # Sizing
    re.compile(r"^(w|h|min-w|min-h|max-w|max-h)-(full|auto|\d+)$"),
    # Typography
    re.compile(r"^(font|text|leading|tracking)-.+"),
    # Borders and effects
    re.compile(r"^(rounded|shadow|opacity)-.*"),
    # Animations
    re.compile(r"^(transition|transform|animate)-.*"),
    # Spacing helpers
    re.compile(r"^(space-[xy]|gap|divide)-.*"),
    # Positioning
    re.compile(r"^(top|right|bottom|left|inset)-.*"),
    # Z-index and order
    re.compile(r"^(z|order)-.*"),
)

# Prefix -> chunk, checked in order.  Used to decide which chunk file a
# single class should be loaded from.
_CHUNK_PREFIXES: tuple[tuple[str, str], ...] = (
    ("flex", "layout"),
    ("grid", "layout"),
    ("p-", "spacing"),
    ("m-", "spacing"),
    ("text-", "typography"),
    ("bg-", "colors"),
    ("border-", "borders"),
    ("rounded", "borders"),
    ("shadow", "effects"),
    ("transition", "animations"),
)

FALLBACK_CHUNK = "utilities"


def is_utility_class(name: str) -> bool:
    """Return True if *name* looks like a utility class."""
    return any(pattern.search(name) for pattern in UTILITY_PATTERNS)


def utility_chunk(name: str) -> str:
    """Return the chunk name expected to contain the class *name*."""
    for prefix, chunk in _CHUNK_PREFIXES:
        if name.startswith(prefix):
            return chunk
    return FALLBACK_CHUNK
