"""Chord notation bridge between pychord, Harte and voicing qualities.

Voicing requests may name a chord in pychord's simplified notation
("Gm7") or in Harte notation ("G:min7"). Both are parsed into a
``Chord`` whose quality is a Harte shorthand, which is then folded into
one of the quality buckets the curated shape database is indexed by.
"""

from __future__ import annotations

import logging

from chord_engine.models import Chord, Resolved

logger = logging.getLogger(__name__)


def _normalize_bass(bass: str | None) -> str | None:
    """Normalize bass note, converting empty strings to None."""
    return bass if bass else None


# Mapping from pychord quality names to Harte shorthand
PYCHORD_TO_HARTE_QUALITY: dict[str, str] = {
    "": "maj",
    "maj": "maj",
    "M": "maj",
    "m": "min",
    "min": "min",
    "m7": "min7",
    "7": "7",
    "maj7": "maj7",
    "M7": "maj7",
    "dim": "dim",
    "dim7": "dim7",
    "aug": "aug",
    "+": "aug",
    "m7-5": "hdim7",
    "m7b5": "hdim7",
    "sus4": "sus4",
    "sus2": "sus2",
    "sus": "sus4",
    "7sus4": "7sus4",
    "add9": "maj(9)",
    "madd9": "min(9)",
    "9": "9",
    "m9": "min9",
    "maj9": "maj9",
    "6": "maj6",
    "m6": "min6",
    "mmaj7": "minmaj7",
    "5": "5",
}

# Harte shorthand to the quality buckets of the curated shape database.
# Richer chords fold onto the closest bucket that has shapes.
HARTE_TO_VOICING_QUALITY: dict[str, str] = {
    "maj": "major",
    "maj6": "major",
    "min": "minor",
    "min6": "minor",
    "7": "dominant7",
    "9": "dominant7",
    "maj7": "major7",
    "maj9": "major7",
    "min7": "minor7",
    "minmaj7": "minor7",
    "dim": "diminished",
    "dim7": "diminished",
    "hdim7": "half-diminished7",
    "aug": "major",
    "sus2": "sus2",
    "sus4": "sus4",
    "7sus4": "sus4",
    "maj(9)": "add9",
    "min(9)": "minor9",
    "min9": "minor9",
    "5": "power",
}


def pychord_quality_to_harte(pychord_quality: str) -> str:
    """Convert a pychord quality string to Harte shorthand.

    Raises
    ------
    ValueError
        If the quality is not recognized.

    Examples
    --------
    >>> pychord_quality_to_harte("m7")
    'min7'
    >>> pychord_quality_to_harte("")
    'maj'
    """
    if pychord_quality in PYCHORD_TO_HARTE_QUALITY:
        return PYCHORD_TO_HARTE_QUALITY[pychord_quality]
    msg = f"Unknown pychord quality: {pychord_quality}"
    raise ValueError(msg)


def harte_quality_to_voicing(harte_quality: str) -> Resolved[str]:
    """Fold a Harte shorthand into a voicing database quality bucket.

    Unrecognized qualities resolve to ``"major"`` with ``fallback=True``.

    Examples
    --------
    >>> harte_quality_to_voicing("min7").value
    'minor7'
    >>> harte_quality_to_voicing("13").fallback
    True
    """
    if harte_quality in HARTE_TO_VOICING_QUALITY:
        return Resolved(HARTE_TO_VOICING_QUALITY[harte_quality], requested=harte_quality)
    logger.debug("No voicing bucket for Harte quality %r, using major", harte_quality)
    return Resolved("major", fallback=True, requested=harte_quality)


def from_pychord(chord_str: str) -> Chord:
    """Parse a pychord notation string into a Chord object.

    Parameters
    ----------
    chord_str : str
        Chord in pychord notation (e.g., "Gm7", "C", "F#dim7/A").

    Returns
    -------
    Chord
        Chord with a Harte quality.

    Raises
    ------
    ValueError
        If pychord rejects the symbol or its quality has no Harte mapping.
    """
    from pychord import Chord as PyChord

    pc = PyChord(chord_str)
    harte_quality = pychord_quality_to_harte(str(pc.quality))

    return Chord(
        root=pc.root,
        quality=harte_quality,
        bass=_normalize_bass(pc.on),
    )


def from_harte(chord_str: str) -> Chord:
    """Parse a Harte notation string into a Chord object.

    Parameters
    ----------
    chord_str : str
        Chord in Harte notation (e.g., "G:min7", "C:maj", "F#:dim7/A").

    Returns
    -------
    Chord
        Chord with the Harte shorthand as quality.
    """
    from harte.harte import Harte

    hc = Harte(chord_str)
    shorthand = hc.get_shorthand()

    bass = None
    if "/" in chord_str:
        bass = chord_str.split("/")[-1]

    return Chord(
        root=hc.get_root(),
        quality=shorthand if shorthand else "maj",
        bass=bass,
    )


def is_harte(chord_str: str) -> bool:
    """Return True when text looks like Harte notation (``root:quality``).

    Examples
    --------
    >>> is_harte("G:min7")
    True
    >>> is_harte("Gm7")
    False
    """
    head, sep, _ = chord_str.strip().partition(":")
    return bool(sep) and 1 <= len(head) <= 2 and head[:1] in "ABCDEFG"
