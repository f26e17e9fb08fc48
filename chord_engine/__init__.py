"""Deterministic music theory and chord voicing engine.

This library provides scale and mode spelling, diatonic chord building,
modal analysis of chord progressions in free text, guitar tab parsing
with chord recognition, and constraint-aware chord voicing generation.

Examples
--------
>>> from chord_engine import analyze_progression, parse_tab, identify_chord

>>> # Modal analysis of a progression mentioned in text
>>> analysis = analyze_progression("D C G D")
>>> analysis.best_root, analysis.best_mode
('D', 'mixolydian')

>>> # Chord recognition from tab
>>> tab = parse_tab("e|-0-\\nB|-0-\\nG|-1-\\nD|-2-\\nA|-2-\\nE|-0-")
>>> identify_chord(tab)
'E Major'

>>> # Chord notation conversion
>>> from chord_engine import from_pychord
>>> from_pychord("Gm7").to_harte()
'G:min7'
"""

import logging

from chord_engine.api import MessageEnrichment, enrich_message
from chord_engine.config import configure_logging
from chord_engine.converter import from_harte, from_pychord
from chord_engine.models import Chord, Resolved
from chord_engine.pitch_class import normalize_note
from chord_engine.tab_parser import ParsedTab, detect_tab, identify_chord, parse_tab, tab_to_chord_shape
from chord_engine.theory import (
    ModalAnalysis,
    analyze_progression,
    mode_chords,
    parse_chord,
    parse_scale_request,
    scale_notes,
)
from chord_engine.voicings import (
    ChordInput,
    Constraints,
    VoicingGenerationError,
    VoicingRequest,
    VoicingResponse,
    generate_voicings,
    parse_constraints,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Chord",
    "ChordInput",
    "Constraints",
    "MessageEnrichment",
    "ModalAnalysis",
    "ParsedTab",
    "Resolved",
    "VoicingGenerationError",
    "VoicingRequest",
    "VoicingResponse",
    "analyze_progression",
    "configure_logging",
    "detect_tab",
    "enrich_message",
    "from_harte",
    "from_pychord",
    "generate_voicings",
    "identify_chord",
    "mode_chords",
    "normalize_note",
    "parse_chord",
    "parse_constraints",
    "parse_scale_request",
    "parse_tab",
    "scale_notes",
    "tab_to_chord_shape",
]
