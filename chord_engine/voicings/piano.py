"""Piano voicings placed inside a register.

Each inversion of the chord is stacked upward from the lowest key of the
register that carries its bass note. Inversions that would climb past the
top of the register are dropped.
"""

from __future__ import annotations

import logging

from chord_engine.pitch_class import note_to_pc, pc_to_note
from chord_engine.theory.diatonic import CHORD_INTERVALS
from chord_engine.voicings.models import PIANO_REGISTERS, Difficulty, PianoNote

logger = logging.getLogger(__name__)

DEFAULT_REGISTER = "mid"
INVERSION_NAMES = ("root position", "1st inversion", "2nd inversion", "3rd inversion")


def chord_pitch_classes(root: str, quality: str) -> list[int]:
    """Distinct pitch classes of a chord, in stacking order from the root.

    Examples
    --------
    >>> chord_pitch_classes("C", "add9")
    [0, 4, 7, 2]
    """
    root_pc = note_to_pc(root)
    return list(dict.fromkeys((root_pc + interval) % 12 for interval in CHORD_INTERVALS[quality]))


def stack_upward(pitch_classes: list[int], lowest: int) -> list[int]:
    """Place pitch classes in ascending MIDI order starting at ``lowest``.

    The first pitch class lands on the lowest key >= ``lowest``; every
    following one lands on the next key above the previous note.

    Examples
    --------
    >>> stack_upward([4, 7, 0], 48)
    [52, 55, 60]
    """
    notes: list[int] = []
    floor = lowest
    for pc in pitch_classes:
        midi = floor + (pc - floor) % 12
        notes.append(midi)
        floor = midi + 1
    return notes


def midi_to_piano_note(midi: int) -> PianoNote:
    """Convert a MIDI number to a named key (60 = C4)."""
    return PianoNote(note=pc_to_note(midi), octave=midi // 12 - 1)


def inversion_difficulty(inversion: int) -> Difficulty:
    if inversion == 0:
        return "beginner"
    if inversion < 3:
        return "intermediate"
    return "advanced"


def piano_voicings(root: str, quality: str, register: str | None = None) -> list[tuple[str, Difficulty, tuple[PianoNote, ...]]]:
    """Build register-bounded piano voicings of a chord.

    Parameters
    ----------
    root : str
        Canonical root.
    quality : str
        Key of ``CHORD_INTERVALS``.
    register : str | None
        "low", "mid" or "high"; "mid" when omitted.

    Returns
    -------
    list[tuple[str, Difficulty, tuple[PianoNote, ...]]]
        (inversion name, difficulty, keys lowest first) per voicing that
        fits the register, root position first.
    """
    low, high = PIANO_REGISTERS[register or DEFAULT_REGISTER]
    pitch_classes = chord_pitch_classes(root, quality)

    voicings = []
    for inversion in range(min(len(pitch_classes), len(INVERSION_NAMES))):
        rotated = pitch_classes[inversion:] + pitch_classes[:inversion]
        keys = stack_upward(rotated, low)
        if keys[-1] > high:
            logger.debug("%s %s %s exceeds register top %d", root, quality, INVERSION_NAMES[inversion], high)
            continue
        notes = tuple(midi_to_piano_note(key) for key in keys)
        voicings.append((INVERSION_NAMES[inversion], inversion_difficulty(inversion), notes))
    return voicings
