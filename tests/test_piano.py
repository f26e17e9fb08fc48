"""Tests for register-bounded piano voicings."""

import pytest

from chord_engine.voicings import (
    ChordInput,
    Constraints,
    VoicingGenerationError,
    VoicingRequest,
    generate_voicings,
)
from chord_engine.voicings.models import PianoNote
from chord_engine.voicings.piano import (
    chord_pitch_classes,
    inversion_difficulty,
    midi_to_piano_note,
    piano_voicings,
    stack_upward,
)


def spelled(notes: tuple) -> list[str]:
    return [f"{note.note}{note.octave}" for note in notes]


class TestStacking:
    """Test pitch placement helpers."""

    def test_chord_pitch_classes(self) -> None:
        assert chord_pitch_classes("C", "add9") == [0, 4, 7, 2]
        assert chord_pitch_classes("A", "power") == [9, 4]

    def test_stack_upward(self) -> None:
        assert stack_upward([4, 7, 0], 48) == [52, 55, 60]
        assert stack_upward([0, 4, 7], 48) == [48, 52, 55]

    @pytest.mark.parametrize(
        ("midi", "note"),
        [(60, PianoNote("C", 4)), (48, PianoNote("C", 3)), (61, PianoNote("C#", 4)), (21, PianoNote("A", 0))],
    )
    def test_midi_to_piano_note(self, midi: int, note: PianoNote) -> None:
        assert midi_to_piano_note(midi) == note
        assert note.midi == midi

    @pytest.mark.parametrize(("inversion", "difficulty"), [(0, "beginner"), (1, "intermediate"), (3, "advanced")])
    def test_inversion_difficulty(self, inversion: int, difficulty: str) -> None:
        assert inversion_difficulty(inversion) == difficulty


class TestPianoVoicings:
    """Test inversion generation inside a register."""

    def test_c_major_mid(self) -> None:
        voicings = piano_voicings("C", "major", "mid")
        assert [name for name, _, _ in voicings] == ["root position", "1st inversion", "2nd inversion"]
        assert [spelled(notes) for _, _, notes in voicings] == [
            ["C3", "E3", "G3"],
            ["E3", "G3", "C4"],
            ["G3", "C4", "E4"],
        ]

    def test_default_register_is_mid(self) -> None:
        assert piano_voicings("C", "major") == piano_voicings("C", "major", "mid")

    def test_low_register(self) -> None:
        _, _, notes = piano_voicings("C", "major", "low")[0]
        assert spelled(notes) == ["C2", "E2", "G2"]

    def test_wide_chord_drops_inversions(self) -> None:
        """Test that a voicing climbing past the register top is skipped."""
        voicings = piano_voicings("A", "minor9", "mid")
        assert [name for name, _, _ in voicings] == ["root position", "1st inversion", "2nd inversion"]
        assert all(notes[-1].midi <= 72 for _, _, notes in voicings)


class TestGeneratePianoVoicings:
    """Test piano requests through the generator."""

    def test_c_major(self) -> None:
        request = VoicingRequest(instrument="piano", chord_input=ChordInput(literal="C"))
        response = generate_voicings(request)
        assert [v.id for v in response.voicings] == ["piano-0", "piano-1", "piano-2"]
        first = response.voicings[0]
        assert first.name == "C major (root position)"
        assert first.total_score == pytest.approx(0.9)
        assert first.position == "Mid register"
        assert first.frets == ()

    def test_register_constraint(self) -> None:
        request = VoicingRequest(
            instrument="piano", chord_input=ChordInput(literal="Am7"), constraints=Constraints(register="high")
        )
        response = generate_voicings(request)
        assert response.voicings[0].position == "High register"
        assert all(60 <= n.midi <= 84 for v in response.voicings for n in v.notes)

    def test_fret_constraint_conflicts(self) -> None:
        request = VoicingRequest(
            instrument="piano", chord_input=ChordInput(literal="C"), constraints=Constraints(fret_min=3)
        )
        with pytest.raises(VoicingGenerationError) as excinfo:
            generate_voicings(request)
        assert excinfo.value.code == "CONSTRAINT_CONFLICT"

    def test_lesson_tips(self) -> None:
        request = VoicingRequest(instrument="piano", chord_input=ChordInput(literal="C"), lesson_mode=True)
        tips = generate_voicings(request).lesson_tips
        assert tips is not None
        assert tips["piano-0"] == "Root position: C sits on the bottom"
        assert tips["piano-1"].startswith("Inversion with E in the bass")
