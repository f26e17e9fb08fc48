"""Natural-language voicing constraints.

``parse_constraints`` is a best-effort phrase matcher, not a grammar:
each recognized phrase sets one field, later phrases win over earlier
ones, and anything unrecognized is ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from chord_engine import config
from chord_engine.pitch_class import UNICODE_ACCIDENTALS, normalize_note, note_to_pc
from chord_engine.voicings.models import STANDARD_TUNINGS, Constraints, StringRange

logger = logging.getLogger(__name__)

NOTE = r"[a-g][#b]?(?![\w#])"

CHORD_TYPE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"triads?\s+only|just\s+triads?|no\s+7ths?"), "triad"),
    (re.compile(r"(?:seventh|7th)\s+chords?"), "seventh"),
    (re.compile(r"extended\s+chords?|add\s+tensions?"), "extended"),
)

# String 1 is the highest-pitched string
STRING_RANGE_PATTERNS: tuple[tuple[re.Pattern[str], StringRange], ...] = (
    (re.compile(r"top\s*3\s*strings?"), StringRange(1, 3)),
    (re.compile(r"top\s*4\s*strings?"), StringRange(1, 4)),
    (re.compile(r"bottom\s*3\s*strings?"), StringRange(4, 6)),
    (re.compile(r"bottom\s*4\s*strings?"), StringRange(3, 6)),
)

MAX_SPAN_RE = re.compile(r"max(?:imum)?\s*(\d+)\s*frets?")
NO_STRETCH_RE = re.compile(r"no\s+stretch(?:es)?|compact\s+shapes?")
NO_STRETCH_SPAN = 3
FRET_RANGE_RE = re.compile(r"(?:frets?\s*)?(\d+)(?:\s*[-–—]\s*|\s+to\s+)(\d+)")
SINGLE_FRET_RE = re.compile(r"(?:around\s+)?(?:fret\s+)?(\d+)(?:st|nd|rd|th)?\s+(?:fret|position)\b")
SINGLE_FRET_WINDOW = 2

AVOID_OPEN_RE = re.compile(r"(?:avoid|no)\s+open\s+strings?")
PREFER_OPEN_RE = re.compile(r"(?:prefer|use)\s+open\s+strings?")
OPEN_NOTE_RE = re.compile(rf"open\s*({NOTE})")
KEY_RE = re.compile(rf"(?:in\s+the\s+)?key\s+of\s*({NOTE})(?:\s+(major|minor))?")
COUNT_RE = re.compile(r"(?:only\s+)?(\d+)\s+(?:shapes?|options?|voicings?)")

REGISTER_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"low\s+register|bass\s+register|lower"), "low"),
    (re.compile(r"mid(?:dle)?\s+register|medium"), "mid"),
    (re.compile(r"high\s+register|treble\s+register|upper"), "high"),
)

INSTRUMENT_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"guitar|fret"), "guitar"),
    (re.compile(r"piano|keyboard"), "piano"),
    (re.compile(r"bass"), "bass"),
)

CHORD_TEXT_RE = re.compile(
    r"^([A-G][#b]?)"
    r"((?:maj|min|aug|dim|sus|add|m|M|°|ø|∅|\+|-|#|b|\d|\(|\))*)"
    r"(?:/([A-G][#b]?))?$"
)
EXTENSION_RE = re.compile(r"7|9|11|13")


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def parse_constraints(text: str) -> dict[str, Any]:
    """Read voicing constraints out of a free-text phrase.

    Parameters
    ----------
    text : str
        Phrase such as "top 3 strings, max 4 frets, open G".

    Returns
    -------
    dict[str, Any]
        Field names of :class:`Constraints` mapped to parsed values, plus
        ``count`` and ``instrument_hint`` when mentioned. Empty when
        nothing was recognized.

    Examples
    --------
    >>> patch = parse_constraints("top 3 strings, max 9 frets, open G")
    >>> patch["string_range"], patch["max_fret_span"], patch["require_open_strings"]
    (StringRange(low=1, high=3), 6, ('G',))
    >>> parse_constraints("something else entirely")
    {}
    """
    s = text.lower().translate(UNICODE_ACCIDENTALS)
    patch: dict[str, Any] = {}

    for pattern, chord_type in CHORD_TYPE_PATTERNS:
        if pattern.search(s):
            patch["chord_type"] = chord_type

    for pattern, string_range in STRING_RANGE_PATTERNS:
        if pattern.search(s):
            patch["string_range"] = string_range

    match = MAX_SPAN_RE.search(s)
    if match:
        patch["max_fret_span"] = _clamp(int(match.group(1)), config.MIN_FRET_SPAN, config.MAX_FRET_SPAN)
    if NO_STRETCH_RE.search(s):
        patch["max_fret_span"] = NO_STRETCH_SPAN

    match = FRET_RANGE_RE.search(s)
    if match:
        fret_min, fret_max = int(match.group(1)), int(match.group(2))
        if fret_min <= fret_max:
            patch["fret_min"], patch["fret_max"] = fret_min, fret_max

    match = SINGLE_FRET_RE.search(s)
    if match:
        fret = int(match.group(1))
        patch["fret_min"] = max(1, fret - SINGLE_FRET_WINDOW)
        patch["fret_max"] = fret + SINGLE_FRET_WINDOW

    if AVOID_OPEN_RE.search(s):
        patch["open_preference"] = "avoid"
        patch["require_open_strings"] = ()
    if PREFER_OPEN_RE.search(s):
        patch["open_preference"] = "prefer"

    open_notes = tuple(dict.fromkeys(normalize_note(note) for note in OPEN_NOTE_RE.findall(s)))
    if open_notes:
        patch["require_open_strings"] = open_notes

    match = KEY_RE.search(s)
    if match:
        patch["key_center"] = normalize_note(match.group(1))

    match = COUNT_RE.search(s)
    if match:
        patch["count"] = _clamp(int(match.group(1)), config.MIN_COUNT, config.MAX_COUNT)

    for pattern, register in REGISTER_PATTERNS:
        if pattern.search(s):
            patch["register"] = register

    for pattern, instrument in INSTRUMENT_PATTERNS:
        if pattern.search(s):
            patch["instrument_hint"] = instrument

    logger.debug("Parsed constraints from %r: %s", text, patch)
    return patch


@dataclass(frozen=True)
class ChordText:
    """A chord named inside a voicing request.

    Parameters
    ----------
    root : str
        Canonical root.
    quality : str
        Base quality: major, minor, diminished, augmented, dominant or
        suspended.
    suffix : str
        Everything written after the root, before any slash.
    extension : str | None
        The suffix again when it carries more than the base quality
        (e.g. "m7", "sus4", "add9").
    bass : str | None
        Canonical slash-bass note.
    """

    root: str
    quality: str
    suffix: str = ""
    extension: str | None = None
    bass: str | None = None


def base_quality(suffix: str) -> tuple[str, str | None]:
    """Split a chord suffix into a base quality and extension text.

    Examples
    --------
    >>> base_quality("m7")
    ('minor', 'm7')
    >>> base_quality("")
    ('major', None)
    >>> base_quality("sus4")
    ('suspended', 'sus4')
    """
    if suffix in ("", "M", "maj"):
        return "major", None
    if suffix in ("m", "min"):
        return "minor", None
    if "dim" in suffix or "°" in suffix:
        return "diminished", None
    if "aug" in suffix or "+" in suffix:
        return "augmented", None
    if EXTENSION_RE.search(suffix):
        if "maj7" in suffix or "M7" in suffix or suffix.startswith("add"):
            return "major", suffix
        if re.match(r"m(?!aj)|min", suffix):
            return "minor", suffix
        return "dominant", suffix
    if "sus" in suffix:
        return "suspended", suffix
    return "major", suffix


def parse_chord_from_text(text: str) -> ChordText | None:
    """Find the first chord symbol written in ``text``.

    Words are tried one at a time, so capital letters inside ordinary
    words are never mistaken for roots.

    Examples
    --------
    >>> parse_chord_from_text("Give me some Bbmaj7 shapes")
    ChordText(root='A#', quality='major', suffix='maj7', extension='maj7', bass=None)
    >>> parse_chord_from_text("no chord here") is None
    True
    """
    for word in text.translate(UNICODE_ACCIDENTALS).split():
        match = CHORD_TEXT_RE.match(word.strip(",.;:!?\"'"))
        if not match:
            continue
        root, suffix, bass = match.groups()
        quality, extension = base_quality(suffix)
        try:
            return ChordText(
                root=normalize_note(root),
                quality=quality,
                suffix=suffix,
                extension=extension,
                bass=normalize_note(bass) if bass else None,
            )
        except ValueError:
            continue
    return None


@dataclass(frozen=True)
class ConstraintValidation:
    """Outcome of :func:`validate_constraints`."""

    conflicts: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = field(default=())

    @property
    def valid(self) -> bool:
        return not self.conflicts


def open_string_numbers(note: str, tuning: tuple[str, ...]) -> list[int]:
    """Return the string numbers (1 = highest) whose open pitch is ``note``.

    Examples
    --------
    >>> open_string_numbers("E", ("E", "A", "D", "G", "B", "E"))
    [6, 1]
    """
    pc = note_to_pc(normalize_note(note))
    return [len(tuning) - index for index, name in enumerate(tuning) if note_to_pc(normalize_note(name)) == pc]


def validate_constraints(constraints: Constraints, instrument: str) -> ConstraintValidation:
    """Check a constraint set for contradictions.

    Parameters
    ----------
    constraints : Constraints
        Constraints to check.
    instrument : str
        "guitar", "bass" or "piano".

    Returns
    -------
    ConstraintValidation
        Conflicts found (empty when valid) and hints for fixing them.
    """
    conflicts: list[str] = []
    suggestions: list[str] = []

    if (
        constraints.fret_min is not None
        and constraints.fret_max is not None
        and constraints.fret_min > constraints.fret_max
    ):
        conflicts.append("Minimum fret cannot be higher than maximum fret")
        suggestions.append("Check your fret range values")

    if instrument == "piano":
        if constraints.fret_min is not None or constraints.fret_max is not None or constraints.string_range:
            conflicts.append("Fret and string constraints do not apply to piano")
            suggestions.append("Use register constraints for piano instead")
    elif constraints.register:
        conflicts.append("Register constraints are for piano only")
        suggestions.append("Use fret range constraints for guitar/bass")

    if constraints.string_range and constraints.require_open_strings and instrument != "piano":
        tuning = constraints.tuning or STANDARD_TUNINGS.get(instrument, ())
        for note in constraints.require_open_strings:
            try:
                numbers = open_string_numbers(note, tuning)
            except ValueError:
                continue
            if not any(number in constraints.string_range for number in numbers):
                conflicts.append(f"Open {note} is outside the requested string range")
                suggestions.append("Widen the string range or drop the open-string requirement")

    return ConstraintValidation(conflicts=tuple(conflicts), suggestions=tuple(suggestions))
