"""Shared data models for chord-engine.

This module provides the pychord/Harte bridge chord representation and the
``Resolved`` wrapper used wherever a lookup falls back to a documented
default instead of failing.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Chord:
    """Unified chord representation in Harte quality terms.

    Parameters
    ----------
    root : str
        The root note of the chord (e.g., "C", "F#", "Bb").
    quality : str
        The chord quality in Harte notation (e.g., "maj", "min7", "dim").
    bass : str | None
        The bass note if different from root (for slash chords).

    Examples
    --------
    >>> chord = Chord(root="G", quality="min7")
    >>> chord.to_harte()
    'G:min7'
    """

    root: str
    quality: str
    bass: str | None = None

    def to_harte(self) -> str:
        """Convert to Harte notation string (e.g., "G:min7", "C:maj/E")."""
        result = f"{self.root}:{self.quality}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def __str__(self) -> str:
        """Return Harte notation as default string representation."""
        return self.to_harte()


@dataclass(frozen=True)
class Resolved(Generic[T]):
    """A looked-up value tagged with whether a default was substituted.

    Parameters
    ----------
    value : T
        The resolved value.
    fallback : bool
        True when ``requested`` was not recognized and ``value`` is the
        documented default.
    requested : str | None
        The caller's original input, kept for messages.

    Examples
    --------
    >>> Resolved("ionian", fallback=True, requested="bebop").fallback
    True
    """

    value: T
    fallback: bool = False
    requested: str | None = None
