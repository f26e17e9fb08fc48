"""Free-text chord symbol parsing.

``parse_chord`` splits a symbol such as ``"F#m7b5/A"`` into root, quality
run and slash bass with a single regex, then classifies the quality run
with substring checks. Malformed input returns None.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from chord_engine.pitch_class import UNICODE_ACCIDENTALS, normalize_note, note_to_pc, transpose_note

logger = logging.getLogger(__name__)

SymbolQuality = Literal["major", "minor", "diminished", "augmented", "dominant", "suspended"]

CHORD_SYMBOL_RE = re.compile(r"^([A-G][#b]?)([^/]*?)(?:/([A-G][#b]?))?$")

# Lower-case "m" that does not start "maj"
MINOR_RE = re.compile(r"m(?!aj)")
DIGITS_RE = re.compile(r"\d+")
FLAT_FIVE_RE = re.compile(r"(?:b|-)5")
SHARP_FIVE_RE = re.compile(r"(?:#|\+)5")

EXTENSION_INTERVALS: dict[str, int] = {
    "6": 9,
    "9": 2,
    "11": 5,
    "13": 9,
}
DOMINANT_EXTENSIONS = frozenset({"7", "9", "11", "13"})


@dataclass(frozen=True)
class ChordSymbol:
    """A parsed chord symbol.

    Parameters
    ----------
    symbol : str
        The symbol text after accidental normalization.
    root : str
        Canonical root name.
    quality : SymbolQuality
        Quality tag.
    extensions : tuple[str, ...]
        Every digit run found in the quality text, in order, not validated
        against ``quality``.
    bass : str | None
        Canonical bass note for slash chords.
    suffix : str
        Raw quality text between root and slash.
    """

    symbol: str
    root: str
    quality: SymbolQuality
    extensions: tuple[str, ...] = ()
    bass: str | None = None
    suffix: str = ""


def classify_quality(suffix: str) -> SymbolQuality:
    """Classify the text after a chord root.

    Examples
    --------
    >>> classify_quality("maj7")
    'major'
    >>> classify_quality("m7b5")
    'minor'
    >>> classify_quality("dim7")
    'diminished'
    >>> classify_quality("7")
    'dominant'
    """
    lowered = suffix.lower()
    if "dim" in lowered or "°" in suffix:
        return "diminished"
    if MINOR_RE.search(suffix):
        return "minor"
    if "aug" in lowered or "+" in suffix:
        return "augmented"
    if "sus" in lowered:
        return "suspended"
    extensions = DIGITS_RE.findall(suffix)
    if (
        any(ext in DOMINANT_EXTENSIONS for ext in extensions)
        and "maj" not in lowered
        and "M" not in suffix
        and "add" not in lowered
    ):
        return "dominant"
    return "major"


def parse_chord(text: str) -> ChordSymbol | None:
    """Parse a chord symbol.

    Parameters
    ----------
    text : str
        Symbol such as ``"Cmaj7"``, ``"B♭m"`` or ``"F#m7b5/A"``.

    Returns
    -------
    ChordSymbol | None
        The parsed symbol, or None if ``text`` is not a chord symbol.

    Examples
    --------
    >>> chord = parse_chord("Cmaj7")
    >>> chord.root, chord.quality, chord.extensions
    ('C', 'major', ('7',))
    >>> chord = parse_chord("F#m7b5/A")
    >>> chord.root, chord.quality, chord.bass
    ('F#', 'minor', 'A')
    >>> parse_chord("hello") is None
    True
    """
    normalized = text.strip().translate(UNICODE_ACCIDENTALS)
    match = CHORD_SYMBOL_RE.match(normalized)
    if not match:
        return None

    root, suffix, bass = match.groups()
    try:
        canonical_root = normalize_note(root)
        canonical_bass = normalize_note(bass) if bass else None
    except ValueError:
        return None

    return ChordSymbol(
        symbol=normalized,
        root=canonical_root,
        quality=classify_quality(suffix),
        extensions=tuple(DIGITS_RE.findall(suffix)),
        bass=canonical_bass,
        suffix=suffix,
    )


def _third(chord: ChordSymbol) -> int:
    if chord.quality in ("minor", "diminished"):
        return 3
    if chord.quality == "suspended":
        return 2 if "sus2" in chord.suffix.lower() else 5
    return 4


def _fifth(chord: ChordSymbol) -> int:
    if chord.quality == "diminished" or FLAT_FIVE_RE.search(chord.suffix):
        return 6
    if chord.quality == "augmented" or SHARP_FIVE_RE.search(chord.suffix):
        return 8
    return 7


def _seventh(chord: ChordSymbol) -> int:
    lowered = chord.suffix.lower()
    if "maj" in lowered or "M" in chord.suffix:
        return 11
    if chord.quality == "diminished" and "dim7" in lowered:
        return 9
    return 10


def chord_tones(chord: ChordSymbol) -> tuple[str, ...]:
    """Spell the tones of a parsed chord, root first, without duplicates.

    Includes the root, third, fifth, every recognized extension and the
    slash bass when it differs from the root.

    Examples
    --------
    >>> chord_tones(parse_chord("G7"))
    ('G', 'B', 'D', 'F')
    >>> chord_tones(parse_chord("C/E"))
    ('C', 'E', 'G')
    >>> chord_tones(parse_chord("Dsus2"))
    ('D', 'E', 'A')
    """
    tones = [chord.root, transpose_note(chord.root, _third(chord)), transpose_note(chord.root, _fifth(chord))]

    for ext in chord.extensions:
        if ext == "7":
            tones.append(transpose_note(chord.root, _seventh(chord)))
        elif ext in EXTENSION_INTERVALS:
            tones.append(transpose_note(chord.root, EXTENSION_INTERVALS[ext]))

    if chord.bass and chord.bass != chord.root:
        tones.append(chord.bass)

    return tuple(dict.fromkeys(tones))


def chord_to_pitch_classes(chord: ChordSymbol) -> frozenset[int]:
    """Convert a parsed chord to its set of pitch classes.

    Examples
    --------
    >>> sorted(chord_to_pitch_classes(parse_chord("Am")))
    [0, 4, 9]
    """
    return frozenset(note_to_pc(tone) for tone in chord_tones(chord))
