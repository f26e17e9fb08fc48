"""Pitch class primitives.

All interval arithmetic in chord-engine happens on integers 0-11 (C=0).
Note names are normalized to sharp spellings on the way in; flat or
unicode spellings never reach the rest of the engine.
"""

from __future__ import annotations

# Canonical sharp-spelled pitch class names, index == pitch class
CHROMATIC_NOTES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

UNICODE_ACCIDENTALS = str.maketrans({"♭": "b", "♯": "#"})


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("C")
    0
    >>> note_to_pc("Bb")
    10
    """
    if note in NOTE_TO_PC:
        return NOTE_TO_PC[note]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pc: int) -> str:
    """Return the canonical sharp name of a pitch class (taken mod 12).

    Examples
    --------
    >>> pc_to_note(10)
    'A#'
    >>> pc_to_note(13)
    'C#'
    """
    return CHROMATIC_NOTES[pc % 12]


def normalize_note(note: str) -> str:
    """Normalize any note spelling to its canonical sharp name.

    Accepts ASCII and unicode accidentals in any letter case.

    Parameters
    ----------
    note : str
        Note name (e.g., "Db", "d♭", "C♯", "e").

    Returns
    -------
    str
        Canonical name from ``CHROMATIC_NOTES``.

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> normalize_note("Bb")
    'A#'
    >>> normalize_note("d♭")
    'C#'
    """
    text = note.strip().translate(UNICODE_ACCIDENTALS)
    if text:
        text = text[0].upper() + text[1:].lower()
    return pc_to_note(note_to_pc(text))


def transpose_note(note: str, semitones: int) -> str:
    """Transpose a note by a number of semitones (positive = up).

    Examples
    --------
    >>> transpose_note("C", 2)
    'D'
    >>> transpose_note("C", -1)
    'B'
    """
    return pc_to_note(note_to_pc(normalize_note(note)) + semitones)


def interval_between(lower: str, upper: str) -> int:
    """Ascending interval in semitones (0-11) from ``lower`` to ``upper``.

    Examples
    --------
    >>> interval_between("A", "C")
    3
    """
    return (note_to_pc(normalize_note(upper)) - note_to_pc(normalize_note(lower))) % 12
