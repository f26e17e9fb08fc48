"""Ranked chord voicing generation over the curated shape database.

A request runs through five steps: resolve the chord to a (root,
quality bucket) pair, collect candidates (exact shape matches plus
transposed moveable shapes), filter them by the request's constraints,
rank them by score, and keep at most ``config.MAX_VOICINGS``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable

from chord_engine import config
from chord_engine.converter import from_harte, from_pychord, harte_quality_to_voicing, is_harte
from chord_engine.models import Resolved
from chord_engine.pitch_class import normalize_note, note_to_pc
from chord_engine.theory.modes import scale_notes
from chord_engine.voicings.constraints import parse_chord_from_text, validate_constraints
from chord_engine.voicings.models import (
    COMMON_TUNINGS,
    STANDARD_TUNINGS,
    ChordInput,
    ChordShape,
    Constraints,
    GenerationMetadata,
    VoicingGenerationError,
    VoicingRequest,
    VoicingResponse,
    VoicingShape,
)
from chord_engine.voicings.piano import DEFAULT_REGISTER, piano_voicings
from chord_engine.voicings.shapes import SHAPE_ORDER, moveable_shapes, shapes_for, transpose_shape

logger = logging.getLogger(__name__)

VOICING_QUALITIES = frozenset(
    {
        "major",
        "minor",
        "major7",
        "minor7",
        "dominant7",
        "power",
        "sus2",
        "sus4",
        "diminished",
        "half-diminished7",
        "add9",
        "minor9",
    }
)

# Base qualities from text parsing, used when pychord rejects the symbol
BASE_QUALITY_BUCKETS: dict[str, str] = {
    "major": "major",
    "minor": "minor",
    "diminished": "diminished",
    "dominant": "dominant7",
    "suspended": "sus4",
}

# Symbol fragment for a structured quality when an extension is appended.
# For the seventh buckets the extension replaces the 7 (dominant7 + "9" -> "9").
QUALITY_SYMBOLS: dict[str, str] = {
    "major": "",
    "minor": "m",
    "dominant": "",
    "diminished": "dim",
    "augmented": "aug",
    "suspended": "sus",
    "major7": "maj",
    "minor7": "m",
    "dominant7": "",
    "minor9": "m",
    "half-diminished7": "m7b5",
    "sus2": "sus2",
    "sus4": "sus4",
    "add9": "add9",
    "power": "5",
}

CHORD_TYPE_QUALITIES: dict[str, frozenset[str]] = {
    "triad": frozenset({"major", "minor", "diminished", "sus2", "sus4", "power"}),
    "seventh": frozenset({"major7", "minor7", "dominant7", "half-diminished7"}),
    "extended": frozenset({"add9", "minor9"}),
}

INVALID_CHORD_SUGGESTIONS = ['Try a format like "Cmaj7", "Dm", or "G7"']
NO_CANDIDATE_SUGGESTIONS = [
    "Try a different chord",
    "Check spelling of chord name",
    'Try basic chords like "C", "Dm", "G7"',
]
FILTERED_OUT_SUGGESTIONS = [
    "Try expanding fret range",
    "Remove string restrictions",
    "Use different chord position",
]
DEFAULT_LESSON_TIP = "Practice slowly and focus on clean finger placement"


def _bucket_from_symbol(symbol: str, base: str | None = None) -> Resolved[str]:
    try:
        chord = from_pychord(symbol)
    except Exception:  # pychord raises several exception types for unknown symbols
        logger.debug("pychord could not parse %r", symbol)
        if base in BASE_QUALITY_BUCKETS:
            return Resolved(BASE_QUALITY_BUCKETS[base], requested=symbol)
        if base in VOICING_QUALITIES:
            return Resolved(base, requested=symbol)
        return Resolved("major", fallback=True, requested=symbol)
    return harte_quality_to_voicing(chord.quality)


def resolve_chord(chord_input: ChordInput) -> tuple[str, Resolved[str]] | None:
    """Resolve a chord request to a root and a voicing quality bucket.

    Parameters
    ----------
    chord_input : ChordInput
        A ``literal`` symbol ("Cmaj7", "G:min7", "play me an Am9") or a
        structured root/quality/extension.

    Returns
    -------
    tuple[str, Resolved[str]] | None
        Canonical root and quality bucket, or None if no chord could be
        read. Unrecognized qualities resolve to "major" with
        ``fallback=True``.

    Examples
    --------
    >>> root, quality = resolve_chord(ChordInput(literal="Am7"))
    >>> root, quality.value
    ('A', 'minor7')
    >>> root, quality = resolve_chord(ChordInput(root="Bb", quality="minor"))
    >>> root, quality.value
    ('A#', 'minor')
    """
    if chord_input.literal:
        literal = chord_input.literal.strip()
        if is_harte(literal):
            try:
                chord = from_harte(literal)
                return normalize_note(chord.root), harte_quality_to_voicing(chord.quality)
            except Exception:  # harte-library raises on malformed shorthand
                logger.debug("harte-library could not parse %r", literal)
                return None

        text = parse_chord_from_text(literal)
        if text is None:
            return None
        return text.root, _bucket_from_symbol(text.root + text.suffix, text.quality)

    if not chord_input.root:
        return None
    try:
        root = normalize_note(chord_input.root)
    except ValueError:
        return None

    quality = chord_input.quality or "major"
    if quality in VOICING_QUALITIES and not chord_input.extension:
        return root, Resolved(quality, requested=quality)

    suffix = QUALITY_SYMBOLS.get(quality, quality) + (chord_input.extension or "")
    return root, _bucket_from_symbol(root + suffix, quality)


def tuning_name(pitch_classes: list[int], instrument: str) -> str | None:
    """Return the name of a common tuning with these open-string pitch classes.

    Examples
    --------
    >>> tuning_name([2, 9, 2, 7, 11, 4], "guitar")
    'drop_d'
    """
    for name, notes in COMMON_TUNINGS.get(instrument, {}).items():
        if [note_to_pc(normalize_note(note)) for note in notes] == pitch_classes:
            return name
    return None


def check_tuning(tuning: tuple[str, ...] | None, instrument: str, metadata: GenerationMetadata) -> None:
    """Validate a requested tuning.

    Raises
    ------
    VoicingGenerationError
        ``INVALID_TUNING`` for unknown note names, a tuning on piano, or
        the wrong number of strings.
    """
    if tuning is None:
        return

    standard = STANDARD_TUNINGS[instrument]
    if instrument == "piano":
        raise VoicingGenerationError("Piano has no tuning", "INVALID_TUNING", ["Remove the tuning for piano requests"])

    allowed = {len(known) for known in COMMON_TUNINGS[instrument].values()}
    if len(tuning) not in allowed:
        msg = f"A {instrument} tuning needs {len(standard)} strings, got {len(tuning)}"
        raise VoicingGenerationError(msg, "INVALID_TUNING", ["List one note per string, lowest first"])

    try:
        pitch_classes = [note_to_pc(normalize_note(note)) for note in tuning]
    except ValueError as e:
        raise VoicingGenerationError(str(e), "INVALID_TUNING", ['Use note names such as "E", "F#" or "Bb"']) from e

    if pitch_classes != [note_to_pc(note) for note in standard]:
        name = tuning_name(pitch_classes, instrument)
        label = name.replace("_", " ") if name else " ".join(tuning)
        metadata.warnings.append(
            f"Shapes are written for standard tuning ({' '.join(standard)}); they will sound different in {label}"
        )


def check_chord_type(chord_type: str | None, quality: str) -> None:
    """Raise ``CONSTRAINT_CONFLICT`` if the chord is not of the requested type."""
    if chord_type is None or chord_type == "any":
        return
    if quality not in CHORD_TYPE_QUALITIES[chord_type]:
        msg = f"A {quality} chord is not a {chord_type} chord"
        raise VoicingGenerationError(msg, "CONSTRAINT_CONFLICT", ["Remove the chord type restriction"])


def check_key_center(root: str, key_center: str | None, metadata: GenerationMetadata) -> None:
    """Warn when the chord root falls outside the key's major scale."""
    if not key_center:
        return
    try:
        key = normalize_note(key_center)
    except ValueError:
        metadata.warnings.append(f"Unknown key center: {key_center}")
        return
    if root not in scale_notes(key, "ionian"):
        metadata.warnings.append(f"{root} is not in the key of {key} major")


def ordinal(number: int) -> str:
    """Return "1st", "2nd", "3rd", "4th", ..., "11th", "12th", "13th"."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def chord_position(frets: Iterable[int | None]) -> str:
    """Describe where a fingering sits on the neck."""
    frets = list(frets)
    fretted = [fret for fret in frets if fret]
    if not fretted or 0 in frets:
        return "Open position"
    return f"{ordinal(min(fretted))} position"


def difficulty_score(difficulty: str) -> float:
    return config.DIFFICULTY_SCORES.get(difficulty, config.UNKNOWN_DIFFICULTY_SCORE)


def shape_to_voicing(shape: ChordShape, index: int, open_preference: str | None) -> VoicingShape:
    """Score a guitar shape and wrap it as a ranked voicing."""
    playability = difficulty_score(shape.difficulty)
    total = playability * config.TOTAL_SCORE_WEIGHT
    if open_preference == "prefer" and shape.has_open_strings:
        total += config.OPEN_PREFERENCE_BONUS
    return VoicingShape(
        id=f"guitar-{index}",
        name=shape.name,
        root=shape.root,
        quality=shape.quality,
        instrument="guitar",
        difficulty=shape.difficulty,
        playability_score=playability,
        musical_score=config.CURATED_MUSICAL_SCORE,
        total_score=round(total, 4),
        frets=shape.frets,
        fingers=shape.fingers,
        barres=shape.barres,
        tuning=STANDARD_TUNINGS["guitar"],
        position=chord_position(shape.frets),
    )


def guitar_candidates(root: str, quality: str) -> list[ChordShape]:
    """Collect curated and transposed shapes for a chord, in database order.

    Exact (root, quality) matches are taken as written. Moveable shapes of
    the same quality on another root are slid up the neck, and kept only
    while every fret stays at or below ``config.MAX_TRANSPOSED_FRET``.
    """
    candidates = [(SHAPE_ORDER[shape], shape) for shape in shapes_for(root, quality)]
    for shape in moveable_shapes(quality):
        if shape.root == root:
            continue
        moved = transpose_shape(shape, root)
        if max(fret for fret in moved.frets if fret is not None) <= config.MAX_TRANSPOSED_FRET:
            candidates.append((SHAPE_ORDER[shape], moved))
    candidates.sort(key=lambda item: item[0])
    return [shape for _, shape in candidates]


def string_numbers(frets: tuple[int | None, ...]) -> list[int]:
    """Return the played string numbers (1 = highest string).

    Examples
    --------
    >>> string_numbers((None, 3, 2, 0, 1, 0))
    [5, 4, 3, 2, 1]
    """
    return [len(frets) - index for index, fret in enumerate(frets) if fret is not None]


def rings_open(frets: tuple[int | None, ...], note: str, tuning: tuple[str, ...]) -> bool:
    """True if some string tuned to ``note`` is played open."""
    pc = note_to_pc(normalize_note(note))
    return any(fret == 0 and note_to_pc(normalize_note(open_note)) == pc for fret, open_note in zip(frets, tuning))


def passes_constraints(voicing: VoicingShape, constraints: Constraints) -> bool:
    """Check one fretted voicing against every active constraint.

    Only fretted notes (fret > 0) count toward fret range and span;
    open strings can always be played.
    """
    fretted = [fret for fret in voicing.frets if fret]

    if fretted:
        if constraints.fret_min is not None and min(fretted) < constraints.fret_min:
            return False
        if constraints.fret_max is not None and max(fretted) > constraints.fret_max:
            return False
        if constraints.max_fret_span is not None and max(fretted) - min(fretted) > constraints.max_fret_span:
            return False

    if constraints.string_range is not None:
        if not all(number in constraints.string_range for number in string_numbers(voicing.frets)):
            return False

    has_open = any(fret == 0 for fret in voicing.frets)
    if constraints.open_preference == "avoid" and has_open:
        return False

    return all(rings_open(voicing.frets, note, voicing.tuning) for note in constraints.require_open_strings)


def lesson_tip(voicing: VoicingShape) -> str:
    """A one-line practice hint for a voicing."""
    tip = ""
    if voicing.instrument == "guitar" and voicing.frets:
        open_strings = sum(1 for fret in voicing.frets if fret == 0)
        fretted = [fret for fret in voicing.frets if fret]
        if open_strings:
            tip = f"Uses {open_strings} open string{'s' if open_strings > 1 else ''} for a richer sound"
        elif fretted:
            span = max(fretted) - min(fretted)
            if span <= 2:
                tip = "Compact fingering makes this very playable"
            elif span >= 4:
                tip = "Wide stretch - practice slowly and build up"
            else:
                tip = "Good balance of reach and playability"
    elif voicing.instrument == "piano" and voicing.notes:
        if voicing.notes[0].note == voicing.root:
            tip = f"Root position: {voicing.root} sits on the bottom"
        else:
            tip = f"Inversion with {voicing.notes[0].note} in the bass keeps your hand close to neighbouring chords"

    limit = config.LESSON_TIP_MAX_LENGTH
    if len(tip) > limit:
        tip = tip[: limit - 3] + "..."
    return tip or DEFAULT_LESSON_TIP


def _piano_candidates(root: str, quality: str, register: str | None) -> list[VoicingShape]:
    register = register or DEFAULT_REGISTER
    voicings = []
    for index, (inversion, difficulty, notes) in enumerate(piano_voicings(root, quality, register)):
        playability = difficulty_score(difficulty)
        voicings.append(
            VoicingShape(
                id=f"piano-{index}",
                name=f"{root} {quality} ({inversion})",
                root=root,
                quality=quality,
                instrument="piano",
                difficulty=difficulty,
                playability_score=playability,
                musical_score=config.CURATED_MUSICAL_SCORE,
                total_score=round(playability * config.TOTAL_SCORE_WEIGHT, 4),
                notes=notes,
                position=f"{register.capitalize()} register",
            )
        )
    return voicings


def generate_voicings(request: VoicingRequest) -> VoicingResponse:
    """Generate up to four ranked voicings for a chord.

    Parameters
    ----------
    request : VoicingRequest
        Instrument, chord and optional constraints, count and lesson mode.

    Returns
    -------
    VoicingResponse
        Voicings ordered by ``total_score`` (ties keep database order),
        with metadata and, in lesson mode, a tip per voicing id.

    Raises
    ------
    VoicingGenerationError
        ``INVALID_CHORD`` when the chord cannot be read,
        ``CONSTRAINT_CONFLICT`` for contradictory constraints,
        ``INVALID_TUNING`` for an unusable tuning and
        ``NO_VOICINGS_FOUND`` when nothing matches or survives filtering.
    """
    start = time.perf_counter()
    metadata = GenerationMetadata()
    constraints = request.constraints or Constraints()

    resolved = resolve_chord(request.chord_input)
    if resolved is None:
        raise VoicingGenerationError("Could not parse chord input", "INVALID_CHORD", INVALID_CHORD_SUGGESTIONS)
    root, quality = resolved

    validation = validate_constraints(constraints, request.instrument)
    if not validation.valid:
        raise VoicingGenerationError("; ".join(validation.conflicts), "CONSTRAINT_CONFLICT", list(validation.suggestions))
    check_tuning(constraints.tuning, request.instrument, metadata)

    if quality.fallback:
        logger.warning("Unrecognized chord quality %r, using major", quality.requested)
        metadata.warnings.append(f"Unrecognized chord quality {quality.requested!r}; showing major voicings")

    check_chord_type(constraints.chord_type, quality.value)
    check_key_center(root, constraints.key_center, metadata)

    if request.instrument == "bass":
        raise VoicingGenerationError(
            "Bass voicings are not available",
            "NO_VOICINGS_FOUND",
            ["Try guitar or piano voicings instead"],
        )

    if request.instrument == "piano":
        candidates = _piano_candidates(root, quality.value, constraints.register)
    else:
        candidates = [
            shape_to_voicing(shape, index, constraints.open_preference)
            for index, shape in enumerate(guitar_candidates(root, quality.value))
        ]
    metadata.candidates_generated = len(candidates)
    logger.debug("%d candidates for %s %s", len(candidates), root, quality.value)

    if not candidates:
        msg = f"No voicings found for {root} {quality.value}"
        raise VoicingGenerationError(msg, "NO_VOICINGS_FOUND", NO_CANDIDATE_SUGGESTIONS)

    if request.instrument == "piano":
        filtered = candidates
    else:
        filtered = [voicing for voicing in candidates if passes_constraints(voicing, constraints)]
    metadata.candidates_filtered = len(filtered)

    if not filtered:
        raise VoicingGenerationError(
            "All voicings filtered out by constraints", "NO_VOICINGS_FOUND", FILTERED_OUT_SUGGESTIONS
        )

    ranked = sorted(filtered, key=lambda voicing: voicing.total_score, reverse=True)
    count = max(1, min(request.count or config.MAX_VOICINGS, config.MAX_VOICINGS))
    selected = tuple(ranked[:count])

    lesson_tips = {voicing.id: lesson_tip(voicing) for voicing in selected} if request.lesson_mode else None

    metadata.processing_time_ms = round((time.perf_counter() - start) * 1000, 3)
    return VoicingResponse(voicings=selected, request=request, metadata=metadata, lesson_tips=lesson_tips)
