"""Data models for guitar tablature parsing.

String indices run 0-5 from the lowest-pitched string (low E in standard
tuning) to the highest (high e).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

TabTechnique = Literal[
    "hammer-on",
    "pull-off",
    "bend",
    "release",
    "vibrato",
    "slide-up",
    "slide-down",
]


@dataclass(frozen=True)
class ParsedNote:
    """A single fretted (or open) note read from a tab line.

    Parameters
    ----------
    string : int
        String index, 0 = lowest string.
    fret : int
        Fret number, 0 = open string.
    timing : int | None
        Column-derived position shared by simultaneous notes.
    technique : TabTechnique | None
        Technique marked right after the fret number.
    """

    string: int
    fret: int
    timing: int | None = None
    technique: TabTechnique | None = None


@dataclass(frozen=True)
class TabLine:
    """A recognized string line of a tab block.

    Parameters
    ----------
    string : int
        Resolved string index.
    label : str
        String letter as written (upper-cased).
    content : str
        Everything after the string label and its separator.
    inferred : bool
        True when ``string`` came from the E-string position heuristic.
    """

    string: int
    label: str
    content: str
    inferred: bool = False


@dataclass(frozen=True)
class ParsedTab:
    """Structured notes read from ASCII tablature.

    Parameters
    ----------
    notes : tuple[ParsedNote, ...]
        Every note, in column order.
    is_chord : bool
        True if any timing group holds more than one note.
    measures : tuple[tuple[ParsedNote, ...], ...]
        Notes grouped by shared timing index, in first-seen order.
    original_text : str
        The text that was parsed.
    inferred_lines : tuple[int, ...]
        Indices (into the recognized string lines) whose string was
        resolved by the E-string position heuristic.
    """

    notes: tuple[ParsedNote, ...]
    is_chord: bool
    measures: tuple[tuple[ParsedNote, ...], ...]
    original_text: str
    inferred_lines: tuple[int, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "notes": [_note_dict(note) for note in self.notes],
            "is_chord": self.is_chord,
            "measures": [[_note_dict(note) for note in group] for group in self.measures],
            "original_text": self.original_text,
            "inferred_lines": list(self.inferred_lines),
        }


def _note_dict(note: ParsedNote) -> dict[str, Any]:
    result: dict[str, Any] = {"string": note.string, "fret": note.fret, "timing": note.timing}
    if note.technique is not None:
        result["technique"] = note.technique
    return result
