"""Scales, diatonic harmony, chord symbols and modal analysis.

Examples
--------
>>> from chord_engine.theory import mode_chords, scale_notes
>>> scale_notes("G", "mixolydian")
('G', 'A', 'B', 'C', 'D', 'E', 'F')
>>> [chord.roman_numeral for chord in mode_chords("C", "major")]
['I', 'ii', 'iii', 'IV', 'V', 'vi', 'vii°']
"""

from chord_engine.theory.analysis import (
    ModalAnalysis,
    ScaleRequest,
    analyze_progression,
    extract_chords,
    parse_scale_request,
)
from chord_engine.theory.chord_symbol import ChordSymbol, chord_to_pitch_classes, chord_tones, parse_chord
from chord_engine.theory.diatonic import CHORD_INTERVALS, DiatonicChord, build_chord, classify_triad, mode_chords
from chord_engine.theory.modes import (
    MODES,
    CharacteristicInterval,
    Mode,
    Progression,
    characteristic_intervals,
    common_progressions,
    get_mode,
    resolve_mode,
    scale_notes,
)

__all__ = [
    "CHORD_INTERVALS",
    "MODES",
    "CharacteristicInterval",
    "ChordSymbol",
    "DiatonicChord",
    "ModalAnalysis",
    "Mode",
    "Progression",
    "ScaleRequest",
    "analyze_progression",
    "build_chord",
    "characteristic_intervals",
    "chord_to_pitch_classes",
    "chord_tones",
    "classify_triad",
    "common_progressions",
    "extract_chords",
    "get_mode",
    "mode_chords",
    "parse_chord",
    "parse_scale_request",
    "resolve_mode",
    "scale_notes",
]
