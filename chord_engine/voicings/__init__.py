"""Constraint-aware chord voicing generation.

Examples
--------
>>> from chord_engine.voicings import ChordInput, VoicingRequest, generate_voicings
>>> response = generate_voicings(VoicingRequest("guitar", ChordInput(root="C", quality="major")))
>>> response.voicings[0].name
'C Major'
"""

from chord_engine.voicings.constraints import (
    ChordText,
    ConstraintValidation,
    parse_chord_from_text,
    parse_constraints,
    validate_constraints,
)
from chord_engine.voicings.generator import generate_voicings, resolve_chord
from chord_engine.voicings.models import (
    Barre,
    ChordInput,
    ChordShape,
    Constraints,
    GenerationMetadata,
    PianoNote,
    StringRange,
    VoicingGenerationError,
    VoicingRequest,
    VoicingResponse,
    VoicingShape,
)
from chord_engine.voicings.shapes import GUITAR_SHAPE_SETS, GUITAR_SHAPES, shapes_for, transpose_shape

__all__ = [
    "GUITAR_SHAPES",
    "GUITAR_SHAPE_SETS",
    "Barre",
    "ChordInput",
    "ChordShape",
    "ChordText",
    "ConstraintValidation",
    "Constraints",
    "GenerationMetadata",
    "PianoNote",
    "StringRange",
    "VoicingGenerationError",
    "VoicingRequest",
    "VoicingResponse",
    "VoicingShape",
    "generate_voicings",
    "parse_chord_from_text",
    "parse_constraints",
    "resolve_chord",
    "shapes_for",
    "transpose_shape",
    "validate_constraints",
]
