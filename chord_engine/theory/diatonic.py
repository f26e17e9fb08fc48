"""Diatonic chord construction.

Triads are stacked along the already mode-adjusted scale (degrees d, d+2,
d+4), so each chord's quality is measured from the notes it actually
contains instead of being read from the mode's metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from chord_engine.models import Resolved
from chord_engine.pitch_class import interval_between, normalize_note, transpose_note
from chord_engine.theory.modes import Mode, get_mode, scale_notes

logger = logging.getLogger(__name__)

HarmonicFunction = Literal[
    "tonic",
    "supertonic",
    "mediant",
    "subdominant",
    "dominant",
    "submediant",
    "leading-tone",
]

# Indexed by zero-based scale degree, applied positionally to every mode
CHORD_FUNCTIONS: tuple[HarmonicFunction, ...] = (
    "tonic",
    "supertonic",
    "mediant",
    "subdominant",
    "dominant",
    "submediant",
    "leading-tone",
)

CHORD_INTERVALS: dict[str, tuple[int, ...]] = {
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "diminished": (0, 3, 6),
    "augmented": (0, 4, 8),
    "dominant7": (0, 4, 7, 10),
    "major7": (0, 4, 7, 11),
    "minor7": (0, 3, 7, 10),
    "diminished7": (0, 3, 6, 9),
    "half-diminished7": (0, 3, 6, 10),
    "sus2": (0, 2, 7),
    "sus4": (0, 5, 7),
    "add9": (0, 4, 7, 14),
    "minor9": (0, 3, 7, 10, 14),
    "power": (0, 7),
}

CHORD_SUFFIXES: dict[str, str] = {
    "major": "",
    "minor": "m",
    "diminished": "°",
    "augmented": "+",
    "dominant7": "7",
    "major7": "maj7",
    "minor7": "m7",
    "diminished7": "°7",
    "half-diminished7": "ø7",
    "sus2": "sus2",
    "sus4": "sus4",
    "add9": "add9",
    "minor9": "m9",
    "power": "5",
}

# (third, fifth) semitone gaps above the triad root
TRIAD_QUALITIES: dict[tuple[int, int], str] = {
    (4, 7): "major",
    (3, 7): "minor",
    (3, 6): "diminished",
    (4, 8): "augmented",
}

ROMAN_NUMERALS = ("I", "II", "III", "IV", "V", "VI", "VII")


@dataclass(frozen=True)
class DiatonicChord:
    """A triad built on one degree of a mode.

    Parameters
    ----------
    root : str
        Chord root (canonical sharp name).
    quality : str
        Triad quality measured from the scale tones.
    roman_numeral : str
        Numeral whose case and marks follow ``quality``.
    scale_degree : int
        1-7.
    intervals : tuple[int, ...]
        Semitones above the root for ``quality``.
    name : str
        Display name (e.g., "Am", "B°").
    function : HarmonicFunction
        Positional harmonic function label.
    notes : tuple[str, ...]
        The three scale tones the triad was stacked from.
    quality_fallback : bool
        True when the gaps matched no known triad and ``quality`` is the
        major default.
    """

    root: str
    quality: str
    roman_numeral: str
    scale_degree: int
    intervals: tuple[int, ...]
    name: str
    function: HarmonicFunction
    notes: tuple[str, ...] = ()
    quality_fallback: bool = False


def build_chord(root: str, quality: str) -> tuple[str, ...]:
    """Spell a chord from the interval table.

    Raises
    ------
    ValueError
        If ``quality`` is not in ``CHORD_INTERVALS`` or ``root`` is not a note.

    Examples
    --------
    >>> build_chord("C", "major7")
    ('C', 'E', 'G', 'B')
    >>> build_chord("A", "minor9")
    ('A', 'C', 'E', 'G', 'B')
    """
    if quality not in CHORD_INTERVALS:
        msg = f"Unknown chord quality: {quality}"
        raise ValueError(msg)
    return tuple(transpose_note(root, interval) for interval in CHORD_INTERVALS[quality])


def chord_name(root: str, quality: str) -> str:
    """Return a display name such as ``"F#m"`` or ``"B°"``."""
    return f"{normalize_note(root)}{CHORD_SUFFIXES.get(quality, '')}"


def build_triad(notes: tuple[str, ...], degree: int) -> tuple[str, str, str]:
    """Stack a triad on ``degree`` (1-7) by skipping every other scale note.

    Examples
    --------
    >>> build_triad(("C", "D", "E", "F", "G", "A", "B"), 7)
    ('B', 'D', 'F')
    """
    index = (degree - 1) % 7
    return notes[index], notes[(index + 2) % 7], notes[(index + 4) % 7]


def classify_triad(triad: tuple[str, str, str]) -> Resolved[str]:
    """Classify a triad from the gaps between its root, third and fifth.

    Gap pairs outside the four standard triads resolve to ``"major"``
    with ``fallback=True``.

    Examples
    --------
    >>> classify_triad(("B", "D", "F")).value
    'diminished'
    >>> classify_triad(("C", "D", "G")).fallback
    True
    """
    root, third, fifth = triad
    gaps = (interval_between(root, third), interval_between(root, fifth))
    if gaps in TRIAD_QUALITIES:
        return Resolved(TRIAD_QUALITIES[gaps])
    logger.debug("Triad %s has gaps %s, defaulting to major", triad, gaps)
    return Resolved("major", fallback=True, requested=f"{gaps[0]},{gaps[1]}")


def roman_numeral(degree: int, quality: str) -> str:
    """Return the Roman numeral for ``degree`` cased by ``quality``.

    Examples
    --------
    >>> roman_numeral(2, "minor")
    'ii'
    >>> roman_numeral(7, "diminished")
    'vii°'
    >>> roman_numeral(3, "augmented")
    'III+'
    """
    numeral = ROMAN_NUMERALS[degree - 1]
    if quality == "diminished":
        return f"{numeral.lower()}°"
    if quality == "minor":
        return numeral.lower()
    if quality == "augmented":
        return f"{numeral}+"
    return numeral


def mode_chords(root: str, mode: str | Mode) -> tuple[DiatonicChord, ...]:
    """Build the seven diatonic triads of ``mode`` on ``root``.

    Parameters
    ----------
    root : str
        Tonic in any spelling.
    mode : str | Mode
        Mode name or ``Mode``; unknown names use Ionian.

    Returns
    -------
    tuple[DiatonicChord, ...]
        Seven chords in scale-degree order.

    Examples
    --------
    >>> [c.name for c in mode_chords("C", "major")]
    ['C', 'Dm', 'Em', 'F', 'G', 'Am', 'B°']
    >>> [c.roman_numeral for c in mode_chords("A", "harmonic minor")][:3]
    ['i', 'ii°', 'III+']
    """
    resolved = get_mode(mode)
    notes = scale_notes(root, resolved)
    logger.debug("Scale notes for %s %s: %s", root, resolved.name, notes)

    chords: list[DiatonicChord] = []
    for index in range(7):
        degree = index + 1
        triad = build_triad(notes, degree)
        quality = classify_triad(triad)
        logger.debug("Degree %d: %s -> %s", degree, triad, quality.value)
        chords.append(
            DiatonicChord(
                root=triad[0],
                quality=quality.value,
                roman_numeral=roman_numeral(degree, quality.value),
                scale_degree=degree,
                intervals=CHORD_INTERVALS[quality.value],
                name=chord_name(triad[0], quality.value),
                function=CHORD_FUNCTIONS[index],
                notes=triad,
                quality_fallback=quality.fallback,
            )
        )
    return tuple(chords)
