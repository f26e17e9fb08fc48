"""Mode catalog and scale construction.

The catalog holds the seven church modes plus harmonic and melodic minor.
It is built once at import time and never mutated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from chord_engine.models import Resolved
from chord_engine.pitch_class import normalize_note, note_to_pc, pc_to_note

logger = logging.getLogger(__name__)

ParentScale = Literal["major", "minor"]


@dataclass(frozen=True)
class CharacteristicInterval:
    """An interval that sets a mode apart from its parent scale.

    Parameters
    ----------
    semitones : int
        Offset from the mode's root (0-11).
    name : str
        Interval name (e.g., "4th", "7th").
    quality : str
        Interval quality (e.g., "augmented", "minor").
    """

    semitones: int
    name: str
    quality: str


@dataclass(frozen=True)
class Mode:
    """A seven-note interval pattern with its harmonic metadata.

    Parameters
    ----------
    name : str
        Catalog key (e.g., "dorian", "harmonic_minor").
    display_name : str
        Human-readable name.
    intervals : tuple[int, ...]
        Seven ascending semitone offsets from the root.
    characteristic : str
        Short description of the mode's sound.
    parent_scale : ParentScale
        Family the mode belongs to.
    chord_qualities : tuple[str, ...]
        Qualities of the seven diatonic triads.
    roman_numerals : tuple[str, ...]
        Roman numeral labels of the seven diatonic triads.
    characteristic_intervals : tuple[CharacteristicInterval, ...]
        Intervals that distinguish the mode.
    """

    name: str
    display_name: str
    intervals: tuple[int, ...]
    characteristic: str
    parent_scale: ParentScale
    chord_qualities: tuple[str, ...]
    roman_numerals: tuple[str, ...]
    characteristic_intervals: tuple[CharacteristicInterval, ...] = ()


@dataclass(frozen=True)
class Progression:
    """A named Roman numeral progression idiomatic to a mode."""

    name: str
    numerals: tuple[str, ...]
    description: str


_CI = CharacteristicInterval

MODES: dict[str, Mode] = {
    "ionian": Mode(
        name="ionian",
        display_name="Ionian (Major)",
        intervals=(0, 2, 4, 5, 7, 9, 11),
        characteristic="Natural 4th and 7th - bright, happy sound",
        parent_scale="major",
        chord_qualities=("major", "minor", "minor", "major", "major", "minor", "diminished"),
        roman_numerals=("I", "ii", "iii", "IV", "V", "vi", "vii°"),
        characteristic_intervals=(_CI(5, "4th", "perfect"), _CI(11, "7th", "major")),
    ),
    "dorian": Mode(
        name="dorian",
        display_name="Dorian",
        intervals=(0, 2, 3, 5, 7, 9, 10),
        characteristic="Natural 6th, flat 3rd and 7th - jazzy, sophisticated",
        parent_scale="minor",
        chord_qualities=("minor", "minor", "major", "major", "minor", "diminished", "major"),
        roman_numerals=("i", "ii", "III", "IV", "v", "vi°", "VII"),
        characteristic_intervals=(_CI(9, "6th", "major"), _CI(3, "3rd", "minor")),
    ),
    "phrygian": Mode(
        name="phrygian",
        display_name="Phrygian",
        intervals=(0, 1, 3, 5, 7, 8, 10),
        characteristic="Flat 2nd - dark, Spanish/Middle Eastern flavor",
        parent_scale="minor",
        chord_qualities=("minor", "major", "major", "minor", "diminished", "major", "minor"),
        roman_numerals=("i", "II", "III", "iv", "v°", "VI", "vii"),
        characteristic_intervals=(_CI(1, "2nd", "minor"), _CI(3, "3rd", "minor")),
    ),
    "lydian": Mode(
        name="lydian",
        display_name="Lydian",
        intervals=(0, 2, 4, 6, 7, 9, 11),
        characteristic="Sharp 4th (#11) - dreamy, ethereal, floating",
        parent_scale="major",
        chord_qualities=("major", "major", "minor", "diminished", "major", "minor", "minor"),
        roman_numerals=("I", "II", "iii", "iv°", "V", "vi", "vii"),
        characteristic_intervals=(_CI(6, "4th", "augmented"),),
    ),
    "mixolydian": Mode(
        name="mixolydian",
        display_name="Mixolydian",
        intervals=(0, 2, 4, 5, 7, 9, 10),
        characteristic="Flat 7th - bluesy, rock, folk sound",
        parent_scale="major",
        chord_qualities=("major", "minor", "diminished", "major", "minor", "minor", "major"),
        roman_numerals=("I", "ii", "iii°", "IV", "v", "vi", "VII"),
        characteristic_intervals=(_CI(10, "7th", "minor"),),
    ),
    "aeolian": Mode(
        name="aeolian",
        display_name="Aeolian (Natural Minor)",
        intervals=(0, 2, 3, 5, 7, 8, 10),
        characteristic="Natural minor - sad, melancholic, introspective",
        parent_scale="minor",
        chord_qualities=("minor", "diminished", "major", "minor", "minor", "major", "major"),
        roman_numerals=("i", "ii°", "III", "iv", "v", "VI", "VII"),
        characteristic_intervals=(_CI(3, "3rd", "minor"), _CI(8, "6th", "minor"), _CI(10, "7th", "minor")),
    ),
    "locrian": Mode(
        name="locrian",
        display_name="Locrian",
        intervals=(0, 1, 3, 5, 6, 8, 10),
        characteristic="Flat 2nd and 5th - unstable, dissonant, rarely used",
        parent_scale="minor",
        chord_qualities=("diminished", "major", "minor", "minor", "major", "major", "minor"),
        roman_numerals=("i°", "II", "iii", "iv", "V", "VI", "vii"),
        characteristic_intervals=(_CI(1, "2nd", "minor"), _CI(6, "5th", "diminished")),
    ),
    "harmonic_minor": Mode(
        name="harmonic_minor",
        display_name="Harmonic Minor",
        intervals=(0, 2, 3, 5, 7, 8, 11),
        characteristic="Raised 7th - exotic, Middle Eastern flavor, strong leading tone",
        parent_scale="minor",
        chord_qualities=("minor", "diminished", "augmented", "minor", "major", "major", "diminished"),
        roman_numerals=("i", "ii°", "III+", "iv", "V", "VI", "vii°"),
        characteristic_intervals=(_CI(11, "7th", "major"), _CI(3, "3rd", "minor"), _CI(8, "6th", "minor")),
    ),
    "melodic_minor": Mode(
        name="melodic_minor",
        display_name="Melodic Minor",
        intervals=(0, 2, 3, 5, 7, 9, 11),
        characteristic="Raised 6th and 7th - smooth melodic motion, jazz applications",
        parent_scale="minor",
        chord_qualities=("minor", "minor", "augmented", "major", "major", "diminished", "diminished"),
        roman_numerals=("i", "ii", "III+", "IV", "V", "vi°", "vii°"),
        characteristic_intervals=(_CI(9, "6th", "major"), _CI(11, "7th", "major"), _CI(3, "3rd", "minor")),
    ),
}

DEFAULT_MODE = "ionian"

# Alternate spellings, keyed lower-case with separators stripped
MODE_ALIASES: dict[str, str] = {
    "major": "ionian",
    "minor": "aeolian",
    "naturalminor": "aeolian",
    "harmonicminor": "harmonic_minor",
    "melodicminor": "melodic_minor",
}

COMMON_PROGRESSIONS: dict[str, tuple[Progression, ...]] = {
    "ionian": (
        Progression("I-V-vi-IV", ("I", "V", "vi", "IV"), "Pop progression"),
        Progression("ii-V-I", ("ii", "V", "I"), "Jazz turnaround"),
        Progression("I-vi-ii-V", ("I", "vi", "ii", "V"), "Circle progression"),
    ),
    "dorian": (
        Progression("i-IV-i", ("i", "IV", "i"), "Modal vamp"),
        Progression("i-VII-i", ("i", "VII", "i"), "Dorian cadence"),
        Progression("i-ii-i", ("i", "ii", "i"), "Minor ii emphasis"),
    ),
    "phrygian": (
        Progression("i-II-i", ("i", "II", "i"), "Phrygian cadence"),
        Progression("i-VI-VII-i", ("i", "VI", "VII", "i"), "Spanish progression"),
    ),
    "lydian": (
        Progression("I-II-I", ("I", "II", "I"), "Lydian characteristic"),
        Progression("I-iii-II-I", ("I", "iii", "II", "I"), "Floating progression"),
    ),
    "mixolydian": (
        Progression("I-VII-I", ("I", "VII", "I"), "Rock progression"),
        Progression("I-VII-IV-I", ("I", "VII", "IV", "I"), "Mixolydian loop"),
    ),
    "aeolian": (
        Progression("i-VI-VII-i", ("i", "VI", "VII", "i"), "Minor progression"),
        Progression("i-iv-V-i", ("i", "iv", "V", "i"), "Harmonic minor feel"),
    ),
    "locrian": (Progression("i°-II-i°", ("i°", "II", "i°"), "Unstable resolution"),),
    "harmonic_minor": (
        Progression("i-V-i", ("i", "V", "i"), "Strong resolution with major V"),
        Progression("i-VI-vii°-i", ("i", "VI", "vii°", "i"), "Harmonic minor cadence"),
    ),
    "melodic_minor": (
        Progression("i-IV-V-i", ("i", "IV", "V", "i"), "Major IV and V chords"),
        Progression("i-ii-V-i", ("i", "ii", "V", "i"), "Jazz minor progression"),
    ),
}


def _mode_key(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalpha())


def resolve_mode(name: str | Mode) -> Resolved[Mode]:
    """Look up a mode by name, falling back to Ionian.

    Parameters
    ----------
    name : str | Mode
        Catalog name, alias ("major", "Harmonic Minor", "melodicMinor"),
        or an already resolved ``Mode``.

    Returns
    -------
    Resolved[Mode]
        The mode; ``fallback`` is True when the name was not recognized.

    Examples
    --------
    >>> resolve_mode("minor").value.name
    'aeolian'
    >>> resolved = resolve_mode("bebop")
    >>> resolved.value.name, resolved.fallback
    ('ionian', True)
    """
    if isinstance(name, Mode):
        return Resolved(name, requested=name.name)

    key = _mode_key(name)
    for mode in MODES.values():
        if _mode_key(mode.name) == key:
            return Resolved(mode, requested=name)
    if key in MODE_ALIASES:
        return Resolved(MODES[MODE_ALIASES[key]], requested=name)

    logger.warning("Unknown mode %r, falling back to %s", name, DEFAULT_MODE)
    return Resolved(MODES[DEFAULT_MODE], fallback=True, requested=name)


def get_mode(name: str | Mode) -> Mode:
    """Return the mode for ``name`` (Ionian when unrecognized)."""
    return resolve_mode(name).value


def scale_notes(root: str, mode: str | Mode) -> tuple[str, ...]:
    """Spell the seven notes of ``mode`` on ``root`` in scale-degree order.

    Parameters
    ----------
    root : str
        Root note in any spelling.
    mode : str | Mode
        Mode name or ``Mode``; unknown names use Ionian.

    Returns
    -------
    tuple[str, ...]
        Seven canonical note names, degree 1 first (not pitch sorted).

    Raises
    ------
    ValueError
        If ``root`` is not a note name.

    Examples
    --------
    >>> scale_notes("D", "dorian")
    ('D', 'E', 'F', 'G', 'A', 'B', 'C')
    >>> scale_notes("A", "minor")
    ('A', 'B', 'C', 'D', 'E', 'F', 'G')
    """
    root_pc = note_to_pc(normalize_note(root))
    return tuple(pc_to_note(root_pc + interval) for interval in get_mode(mode).intervals)


def characteristic_intervals(mode: str | Mode) -> tuple[CharacteristicInterval, ...]:
    """Return the intervals that distinguish ``mode`` from its parent scale."""
    return get_mode(mode).characteristic_intervals


def common_progressions(mode: str | Mode) -> tuple[Progression, ...]:
    """Return idiomatic progressions for ``mode``.

    Examples
    --------
    >>> common_progressions("mixolydian")[0].name
    'I-VII-I'
    """
    return COMMON_PROGRESSIONS.get(get_mode(mode).name, ())
