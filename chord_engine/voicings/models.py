"""Data models for chord voicing generation.

Fret and finger arrays run from the lowest-pitched string (index 0) to the
highest. ``None`` marks a muted string, ``0`` an open one.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from chord_engine.pitch_class import note_to_pc

Instrument = Literal["guitar", "piano", "bass"]
Difficulty = Literal["beginner", "intermediate", "advanced"]
Register = Literal["low", "mid", "high"]
ChordType = Literal["triad", "seventh", "extended", "any"]
OpenPreference = Literal["prefer", "avoid"]
ErrorCode = Literal["INVALID_CHORD", "NO_VOICINGS_FOUND", "CONSTRAINT_CONFLICT", "INVALID_TUNING"]

Frets = tuple[int | None, ...]

STANDARD_TUNINGS: dict[str, tuple[str, ...]] = {
    "guitar": ("E", "A", "D", "G", "B", "E"),
    "bass": ("E", "A", "D", "G"),
    "piano": (),
}

COMMON_TUNINGS: dict[str, dict[str, tuple[str, ...]]] = {
    "guitar": {
        "standard": ("E", "A", "D", "G", "B", "E"),
        "drop_d": ("D", "A", "D", "G", "B", "E"),
        "half_step_down": ("Eb", "Ab", "Db", "Gb", "Bb", "Eb"),
        "open_g": ("D", "G", "D", "G", "B", "D"),
    },
    "bass": {
        "standard": ("E", "A", "D", "G"),
        "drop_d": ("D", "A", "D", "G"),
        "five_string": ("B", "E", "A", "D", "G"),
    },
}

# Piano register ranges as MIDI note numbers (inclusive)
PIANO_REGISTERS: dict[str, tuple[int, int]] = {
    "low": (36, 60),
    "mid": (48, 72),
    "high": (60, 84),
}


@dataclass(frozen=True)
class Barre:
    """One finger held across several strings at a single fret.

    Parameters
    ----------
    fret : int
        Fret the barre sits on.
    from_string : int
        Lowest string index covered.
    to_string : int
        Highest string index covered.
    """

    fret: int
    from_string: int
    to_string: int


@dataclass(frozen=True)
class ChordShape:
    """A hand-authored chord fingering.

    Parameters
    ----------
    name : str
        Display name.
    root : str
        Canonical root name.
    quality : str
        Voicing quality bucket (e.g., "major", "minor7", "power").
    frets : Frets
        Per-string frets, low string first.
    fingers : Frets
        Per-string finger numbers (1-4), 0 for open, None for muted.
    difficulty : Difficulty
        Authoring difficulty tag.
    barres : tuple[Barre, ...]
        Barre descriptors; empty for open shapes.
    """

    name: str
    root: str
    quality: str
    frets: Frets
    fingers: Frets
    difficulty: Difficulty
    barres: tuple[Barre, ...] = ()

    @property
    def has_open_strings(self) -> bool:
        """True if any string rings open."""
        return any(fret == 0 for fret in self.frets)

    @property
    def is_moveable(self) -> bool:
        """True if the shape can slide along the neck unchanged.

        A shape is moveable when it is held by a barre and rings no open
        strings; open strings cannot move with the hand.
        """
        return bool(self.barres) and not self.has_open_strings


@dataclass(frozen=True)
class PianoNote:
    """A pitched piano key."""

    note: str
    octave: int

    @property
    def midi(self) -> int:
        return (self.octave + 1) * 12 + note_to_pc(self.note)


@dataclass(frozen=True)
class VoicingShape:
    """A ranked voicing returned to the caller.

    Parameters
    ----------
    id : str
        Identifier, unique within one response and stable across
        identical requests.
    name, root, quality : str
        Chord identity.
    instrument : Instrument
        Instrument the voicing is for.
    difficulty : Difficulty
        Difficulty tag.
    playability_score, musical_score, total_score : float
        Ranking scores; ``total_score`` orders the results.
    frets, fingers, barres, tuning
        Fretted-instrument layout (empty for piano).
    notes : tuple[PianoNote, ...]
        Piano keys, lowest first (empty for fretted instruments).
    position : str
        Human-readable position ("Open position", "5th position",
        "Mid register").
    """

    id: str
    name: str
    root: str
    quality: str
    instrument: Instrument
    difficulty: Difficulty
    playability_score: float
    musical_score: float
    total_score: float
    frets: Frets = ()
    fingers: Frets = ()
    barres: tuple[Barre, ...] = ()
    tuning: tuple[str, ...] = ()
    notes: tuple[PianoNote, ...] = ()
    position: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        data = asdict(self)
        for key in ("frets", "fingers", "barres", "tuning", "notes"):
            data[key] = list(data[key])
        return data


@dataclass(frozen=True)
class StringRange:
    """Inclusive range of guitar string numbers (1 = highest string)."""

    low: int
    high: int

    def __contains__(self, number: object) -> bool:
        return isinstance(number, int) and self.low <= number <= self.high


@dataclass
class Constraints:
    """Optional restrictions on generated voicings.

    Every field defaults to None (or empty), meaning unconstrained.
    """

    fret_min: int | None = None
    fret_max: int | None = None
    string_range: StringRange | None = None
    max_fret_span: int | None = None
    require_open_strings: tuple[str, ...] = ()
    chord_type: ChordType | None = None
    register: Register | None = None
    open_preference: OpenPreference | None = None
    key_center: str | None = None
    tuning: tuple[str, ...] | None = None

    def merged(self, patch: dict[str, Any]) -> Constraints:
        """Return a copy with ``patch`` fields applied on top."""
        fields = {name: value for name, value in vars(self).items()}
        fields.update({k: v for k, v in patch.items() if k in fields})
        return Constraints(**fields)


@dataclass(frozen=True)
class ChordInput:
    """Either a literal chord symbol or a structured root/quality."""

    literal: str | None = None
    root: str | None = None
    quality: str | None = None
    extension: str | None = None
    bass: str | None = None


@dataclass(frozen=True)
class VoicingRequest:
    """A request for ranked voicings of one chord."""

    instrument: Instrument
    chord_input: ChordInput
    constraints: Constraints | None = None
    count: int | None = None
    lesson_mode: bool = False


@dataclass
class GenerationMetadata:
    """Bookkeeping attached to every response."""

    candidates_generated: int = 0
    candidates_filtered: int = 0
    processing_time_ms: float = 0.0
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class VoicingResponse:
    """Ranked voicings plus generation metadata."""

    voicings: tuple[VoicingShape, ...]
    request: VoicingRequest
    metadata: GenerationMetadata
    lesson_tips: dict[str, str] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict (the request is omitted)."""
        return {
            "voicings": [voicing.to_dict() for voicing in self.voicings],
            "metadata": asdict(self.metadata),
            "lesson_tips": self.lesson_tips,
        }


class VoicingGenerationError(Exception):
    """Raised when a voicing request cannot be satisfied.

    Parameters
    ----------
    message : str
        Human-readable description.
    code : ErrorCode
        Machine-readable failure kind.
    suggestions : list[str] | None
        Hints the caller can show the user.
    """

    def __init__(self, message: str, code: ErrorCode, suggestions: list[str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.suggestions = list(suggestions or [])

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"error": self.message, "code": self.code, "suggestions": self.suggestions}
