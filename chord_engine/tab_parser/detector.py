"""Tablature detection.

A message is treated as containing tab when any of a handful of loose
patterns matches: string-labelled lines, dense dash/digit runs, or fret
numbers joined by technique markers.
"""

from __future__ import annotations

import re

TAB_PATTERNS: tuple[re.Pattern[str], ...] = (
    # e|--3--2--0--|
    re.compile(r"[eEbBgGdDaA]\s*\|\s*[-\d\s]+\s*\|"),
    # E|--3--2--0--
    re.compile(r"[eEbBgGdDaA]\s*\|\s*[-\d\s]+"),
    # Two or more consecutive string lines with | - or : separators
    re.compile(r"(?:[eEbBgGdDaA]\s*[|\-:]\s*[-\d\s]+\s*(?:\||$)\s*){2,}", re.MULTILINE),
    # Fret numbers with dashes
    re.compile(r"[-\d]{3,}.*[-\d]{3,}"),
    # Techniques between fret numbers: 5h7, 7p5, 7b9, 5/7
    re.compile(r"\d+[hpb~r/\\]\d+"),
)


def detect_tab(text: str) -> bool:
    """Return True if ``text`` looks like it contains guitar tablature.

    Examples
    --------
    >>> detect_tab("e|--3--2--0--|\\nB|--0--0--0--|")
    True
    >>> detect_tab("How do I play a C chord?")
    False
    """
    return any(pattern.search(text) for pattern in TAB_PATTERNS)
