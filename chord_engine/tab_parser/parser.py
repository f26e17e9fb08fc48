"""ASCII tablature parser.

Tab lines are scanned column by column. Columns stand in for rhythm: a
shared timing counter advances whenever a column holds a ``-`` or ``|``
on any line, so notes stacked in the same column share a timing index.
This approximates rhythmic position and ignores real note durations.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from chord_engine.tab_parser.detector import detect_tab
from chord_engine.tab_parser.models import ParsedNote, ParsedTab, TabLine, TabTechnique

logger = logging.getLogger(__name__)

# A string label, its separator, then the line content
TAB_LINE_RE = re.compile(r"^([eEbBgGdDaA])\s*[|\-:]\s*(.+)")
SEPARATOR_RE = re.compile(r"[-|]")

STRING_INDICES: dict[str, int] = {
    "A": 1,
    "D": 2,
    "G": 3,
    "B": 4,
}

# Recognized lines before this index read "E" as the high string
HIGH_E_LINE_LIMIT = 3

TECHNIQUES: dict[str, TabTechnique] = {
    "h": "hammer-on",
    "p": "pull-off",
    "b": "bend",
    "r": "release",
    "~": "vibrato",
    "/": "slide-up",
    "\\": "slide-down",
}


def resolve_string_index(label: str, line_index: int) -> tuple[int, bool]:
    """Map a string label to a string index.

    "E" is ambiguous between the low and high string. Tabs are usually
    written high string first, so an "E" among the first three recognized
    lines is read as the high string (5) and later ones as the low string
    (0). This is a line-position guess, not a tuning-aware parse.

    Parameters
    ----------
    label : str
        Upper-cased string letter.
    line_index : int
        Number of string lines recognized before this one.

    Returns
    -------
    tuple[int, bool]
        The string index (-1 if the label is unknown) and whether the
        E-string heuristic decided it.

    Examples
    --------
    >>> resolve_string_index("E", 0)
    (5, True)
    >>> resolve_string_index("E", 5)
    (0, True)
    >>> resolve_string_index("G", 2)
    (3, False)
    """
    if label == "E":
        return (5 if line_index < HIGH_E_LINE_LIMIT else 0), True
    return STRING_INDICES.get(label, -1), False


def parse_technique(content: str, position: int) -> TabTechnique | None:
    """Return the technique marked at ``position``, if any."""
    if position >= len(content):
        return None
    return TECHNIQUES.get(content[position])


def find_tab_lines(text: str, string_order: Sequence[int] | None = None) -> list[TabLine]:
    """Pick out the string lines of a tab block.

    Parameters
    ----------
    text : str
        Raw text.
    string_order : Sequence[int] | None
        Explicit string index for each recognized line, in order. Lines
        beyond its length fall back to label-based resolution.

    Returns
    -------
    list[TabLine]
        Recognized lines in source order.
    """
    tab_lines: list[TabLine] = []
    for raw in text.replace("\r\n", "\n").split("\n"):
        line = raw.strip()
        match = TAB_LINE_RE.match(line)
        if not match:
            continue

        label = match.group(1).upper()
        position = len(tab_lines)
        if string_order is not None and position < len(string_order):
            string, inferred = string_order[position], False
        else:
            string, inferred = resolve_string_index(label, position)
        if string == -1:
            logger.debug("Skipping tab line with unknown string label %r", label)
            continue

        tab_lines.append(TabLine(string=string, label=label, content=match.group(2), inferred=inferred))
    return tab_lines


def _fret_run(content: str, position: int) -> tuple[int, int] | None:
    """Read the fret number starting at ``position``; return (fret, end)."""
    if not content[position].isdigit():
        return None
    # The tail of a multi-digit fret was already read with its first digit
    if position > 0 and content[position - 1].isdigit():
        return None
    end = position
    while end < len(content) and content[end].isdigit():
        end += 1
    return int(content[position:end]), end


def parse_tab(text: str, string_order: Sequence[int] | None = None) -> ParsedTab | None:
    """Parse tablature into notes grouped by timing.

    Parameters
    ----------
    text : str
        Text containing ASCII tab.
    string_order : Sequence[int] | None
        Optional explicit string index per recognized line, replacing the
        E-string position heuristic.

    Returns
    -------
    ParsedTab | None
        Parsed notes, or None if ``text`` holds no recognizable tab.

    Examples
    --------
    >>> tab = parse_tab("e|--3--2--0--|\\nB|--0--0--0--|")
    >>> [(n.string, n.fret, n.timing) for n in tab.measures[0]]
    [(5, 3, 1), (4, 0, 1)]
    >>> tab.is_chord
    True
    """
    if not detect_tab(text):
        return None

    tab_lines = find_tab_lines(text, string_order)
    if not tab_lines:
        logger.debug("Tab detected but no string lines recognized")
        return None

    notes: list[ParsedNote] = []
    timing = 0
    max_length = max(len(line.content) for line in tab_lines)

    for position in range(max_length):
        found = False
        for line in tab_lines:
            if position >= len(line.content):
                continue
            run = _fret_run(line.content, position)
            if run is None:
                continue
            fret, end = run
            notes.append(
                ParsedNote(
                    string=line.string,
                    fret=fret,
                    timing=timing,
                    technique=parse_technique(line.content, end),
                )
            )
            found = True

        first = tab_lines[0].content
        first_is_separator = position < len(first) and SEPARATOR_RE.match(first[position]) is not None
        if (found or first_is_separator) and position > 0:
            if any(
                position < len(line.content) and SEPARATOR_RE.match(line.content[position])
                for line in tab_lines
            ):
                timing += 1

    groups: dict[int, list[ParsedNote]] = {}
    for note in notes:
        groups.setdefault(note.timing or 0, []).append(note)
    measures = tuple(tuple(group) for group in groups.values())

    logger.debug("Parsed %d tab notes in %d timing groups", len(notes), len(measures))
    return ParsedTab(
        notes=tuple(notes),
        is_chord=any(len(group) > 1 for group in measures),
        measures=measures,
        original_text=text,
        inferred_lines=tuple(i for i, line in enumerate(tab_lines) if line.inferred),
    )
