"""Chord identification for parsed tablature.

Identification runs a chain of matchers over the first chord group of a
tab: an exact lookup of common open-chord fingerings first, then a
general interval-template match.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from chord_engine.pitch_class import pc_to_note
from chord_engine.tab_parser.models import ParsedNote, ParsedTab
from chord_engine.voicings.models import ChordShape, Difficulty, Frets

logger = logging.getLogger(__name__)

STRING_COUNT = 6

# Open-string pitch classes, low E first
STANDARD_TUNING: tuple[int, ...] = (4, 9, 2, 7, 11, 4)

OPEN_CHORD_PATTERNS: dict[str, Frets] = {
    "E Major": (0, 2, 2, 1, 0, 0),
    "A Major": (None, 0, 2, 2, 2, 0),
    "D Major": (None, None, 0, 2, 3, 2),
    "G Major": (3, 2, 0, 0, 3, 3),
    "C Major": (None, 3, 2, 0, 1, 0),
    "E Minor": (0, 2, 2, 0, 0, 0),
    "A Minor": (None, 0, 2, 2, 1, 0),
    "D Minor": (None, None, 0, 2, 3, 1),
}

# Checked in order; the first template contained in the notes wins
CHORD_TEMPLATES: dict[str, tuple[int, ...]] = {
    "Major": (0, 4, 7),
    "Minor": (0, 3, 7),
    "Dominant 7": (0, 4, 7, 10),
    "Major 7": (0, 4, 7, 11),
    "Minor 7": (0, 3, 7, 10),
    "Diminished": (0, 3, 6),
    "Augmented": (0, 4, 8),
    "Sus2": (0, 2, 7),
    "Sus4": (0, 5, 7),
}

TEMPLATE_QUALITIES: dict[str, str] = {
    "Major": "major",
    "Minor": "minor",
    "Dominant 7": "dominant7",
    "Major 7": "major7",
    "Minor 7": "minor7",
    "Diminished": "diminished",
    "Augmented": "augmented",
    "Sus2": "sus2",
    "Sus4": "sus4",
}

UNKNOWN_CHORD = "Unknown Chord"
MIN_TEMPLATE_PITCHES = 3
MIN_CHORD_NOTES = 2


class ChordMatcher(Protocol):
    """A strategy that names the chord formed by a group of notes."""

    def match(self, notes: Sequence[ParsedNote]) -> str | None: ...


def notes_to_frets(notes: Sequence[ParsedNote]) -> Frets:
    """Lay notes out as a six-string fret array, low string first.

    Examples
    --------
    >>> notes_to_frets([ParsedNote(string=5, fret=3), ParsedNote(string=4, fret=0)])
    (None, None, None, None, 0, 3)
    """
    frets: list[int | None] = [None] * STRING_COUNT
    for note in notes:
        if 0 <= note.string < STRING_COUNT:
            frets[note.string] = note.fret
    return tuple(frets)


class ExactShapeMatcher:
    """Look the fingering up in a table of known shapes.

    Parameters
    ----------
    patterns : dict[str, Frets]
        Chord name to exact fret array; every string must agree,
        muted strings included.
    """

    def __init__(self, patterns: dict[str, Frets] | None = None) -> None:
        self.patterns = OPEN_CHORD_PATTERNS if patterns is None else patterns

    def match(self, notes: Sequence[ParsedNote]) -> str | None:
        frets = notes_to_frets(notes)
        for name, pattern in self.patterns.items():
            if frets == pattern:
                return name
        return None


class IntervalTemplateMatcher:
    """Match the notes' interval set against chord-type templates.

    A template matches when every one of its intervals is present; extra
    notes are tolerated, missing ones are not. Intervals are measured from
    the lowest pitch class (C = 0), not from the bass note, so inversions
    and some barre shapes go unnamed.

    Parameters
    ----------
    templates : dict[str, tuple[int, ...]]
        Chord-type name to semitone intervals above the root.
    """

    def __init__(self, templates: dict[str, tuple[int, ...]] | None = None) -> None:
        self.templates = CHORD_TEMPLATES if templates is None else templates

    def match(self, notes: Sequence[ParsedNote]) -> str | None:
        playable = [note for note in notes if 0 <= note.string < STRING_COUNT]
        pitch_classes = sorted({(STANDARD_TUNING[n.string] + n.fret) % 12 for n in playable})
        if len(pitch_classes) < MIN_TEMPLATE_PITCHES:
            return None

        root = pitch_classes[0]
        intervals = {(pc - root) % 12 for pc in pitch_classes}
        for chord_type, template in self.templates.items():
            if set(template) <= intervals:
                return f"{pc_to_note(root)} {chord_type}"
        return None


DEFAULT_MATCHERS: tuple[ChordMatcher, ...] = (ExactShapeMatcher(), IntervalTemplateMatcher())


def first_chord_group(parsed: ParsedTab) -> tuple[ParsedNote, ...] | None:
    """Return the opening timing group if it sounds two or more notes."""
    if not parsed.is_chord or not parsed.measures:
        return None
    group = parsed.measures[0]
    return group if len(group) >= MIN_CHORD_NOTES else None


def identify_chord(parsed: ParsedTab, matchers: Sequence[ChordMatcher] = DEFAULT_MATCHERS) -> str | None:
    """Name the first chord in a parsed tab.

    Parameters
    ----------
    parsed : ParsedTab
        Output of :func:`chord_engine.tab_parser.parser.parse_tab`.
    matchers : Sequence[ChordMatcher]
        Strategies tried in order; the first non-None answer wins.

    Returns
    -------
    str | None
        A name such as "E Major" or "F# Minor 7", or None if the tab holds
        no chord or nothing matched.

    Examples
    --------
    >>> from chord_engine.tab_parser.parser import parse_tab
    >>> tab = parse_tab("e|-0-\\nB|-0-\\nG|-1-\\nD|-2-\\nA|-2-\\nE|-0-")
    >>> identify_chord(tab)
    'E Major'
    """
    group = first_chord_group(parsed)
    if group is None:
        return None

    for matcher in matchers:
        name = matcher.match(group)
        if name is not None:
            logger.debug("%s identified %s", type(matcher).__name__, name)
            return name
    return None


def shape_difficulty(frets: Frets) -> Difficulty:
    """Rate a fingering by how high and how wide it sits on the neck.

    Examples
    --------
    >>> shape_difficulty((None, 3, 2, 0, 1, 0))
    'beginner'
    >>> shape_difficulty((8, 10, 10, 9, 8, 8))
    'advanced'
    """
    fretted = [fret for fret in frets if fret]
    if not fretted:
        return "beginner"

    max_fret = max(fretted)
    spread = max_fret - min(fretted)
    if max_fret <= 3 and spread <= 2:
        return "beginner"
    if max_fret > 7 or spread > 4:
        return "advanced"
    return "intermediate"


def assign_fingers(frets: Frets) -> Frets:
    """Give each fretted string a finger by its distance from the lowest fret."""
    fretted = [fret for fret in frets if fret]
    base = min(fretted) if fretted else 0
    return tuple(None if fret is None else 0 if fret == 0 else min(4, fret - base + 1) for fret in frets)


def tab_to_chord_shape(parsed: ParsedTab, name: str | None = None) -> ChordShape | None:
    """Turn the first chord of a tab into a displayable chord shape.

    Parameters
    ----------
    parsed : ParsedTab
        Parsed tablature.
    name : str | None
        Chord name to use; identified from the tab when omitted.

    Returns
    -------
    ChordShape | None
        The shape, or None if the tab holds no chord.
    """
    group = first_chord_group(parsed)
    if group is None:
        return None

    frets = notes_to_frets(group)
    detected = name or identify_chord(parsed) or UNKNOWN_CHORD
    root, _, chord_type = detected.partition(" ")
    if detected == UNKNOWN_CHORD:
        root, quality = "Unknown", "unknown"
    else:
        quality = TEMPLATE_QUALITIES.get(chord_type, chord_type.lower() or "unknown")

    return ChordShape(
        name=detected,
        root=root,
        quality=quality,
        frets=frets,
        fingers=assign_fingers(frets),
        difficulty=shape_difficulty(frets),
    )
