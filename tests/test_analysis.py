"""Tests for modal analysis of chord progressions."""

import pytest

from chord_engine.theory.analysis import (
    ScaleRequest,
    analyze_progression,
    extract_chords,
    mode_template,
    parse_scale_request,
    pitch_class_vector,
)


class TestExtractChords:
    """Test chord discovery in free text."""

    def test_progression_in_sentence(self) -> None:
        chords = extract_chords("I'm playing C G Am F, what key is this?")
        assert [c.symbol for c in chords] == ["C", "G", "Am", "F"]

    def test_words_are_not_chords(self) -> None:
        assert extract_chords("Cat and Dog") == []

    def test_sharps_and_slashes(self) -> None:
        chords = extract_chords("F#m7 into D/F# and B♭")
        assert [c.symbol for c in chords] == ["F#m7", "D/F#", "Bb"]


class TestPitchClassVector:
    """Test chroma vectors."""

    def test_template_for_g_major(self) -> None:
        template = mode_template(7, "ionian")
        assert int(template.sum()) == 7
        assert template[6] == 1
        assert template[5] == 0

    def test_empty_set(self) -> None:
        assert int(pitch_class_vector(set()).sum()) == 0


class TestAnalyzeProgression:
    """Test best-fit mode selection."""

    def test_plain_major(self) -> None:
        result = analyze_progression("C G Am F")
        assert result is not None
        assert (result.best_root, result.best_mode) == ("C", "major")
        assert result.confidence == 1.0
        assert result.borrowed_chords == ()
        assert result.notes_used == ("C", "D", "E", "F", "G", "A", "B")
        assert result.reason == "All notes fit within C major."

    def test_mixolydian_flat_seven(self) -> None:
        """Test that the bVII chord and its bonus pick mixolydian."""
        result = analyze_progression("D C G D")
        assert result is not None
        assert (result.best_root, result.best_mode) == ("D", "mixolydian")
        assert result.score == pytest.approx(1.2)
        assert result.confidence == 1.0
        assert result.borrowed_chords == ()
        assert "characteristic mixolydian tones" in result.reason

    def test_borrowed_minor_four(self) -> None:
        """Test that a borrowed chord is flagged while major still wins the tie."""
        result = analyze_progression("C F Fm C")
        assert result is not None
        assert result.best_mode == "major"
        assert result.confidence == pytest.approx(5 / 6 - 0.2)
        assert result.borrowed_chords == ("Fm",)
        assert "G#" in result.reason

    def test_lydian_sharp_four(self) -> None:
        result = analyze_progression("C D")
        assert result is not None
        assert result.best_mode == "lydian"
        assert result.score == pytest.approx(1.3)
        assert result.confidence == 1.0

    def test_dorian(self) -> None:
        result = analyze_progression("Dm G")
        assert result is not None
        assert (result.best_root, result.best_mode) == ("D", "dorian")

    def test_only_first_chord_is_tonic(self) -> None:
        result = analyze_progression("G C D Em")
        assert result is not None
        assert result.best_root == "G"

    def test_no_chords(self) -> None:
        assert analyze_progression("Cat and Dog") is None

    def test_to_dict(self) -> None:
        result = analyze_progression("C G Am F")
        assert result is not None
        data = result.to_dict()
        assert data["best_mode"] == "major"
        assert data["borrowed_chords"] == []
        assert isinstance(data["notes_used"], list)


class TestParseScaleRequest:
    """Test scale lookups from chat text."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("show me d dorian", ScaleRequest("D", "dorian")),
            ("What is the lydian mode in bb?", ScaleRequest("A#", "lydian")),
            ("give me e aeolian", ScaleRequest("E", "minor")),
            ("play the f# phrygian scale", ScaleRequest("F#", "phrygian")),
        ],
    )
    def test_phrases(self, text: str, expected: ScaleRequest) -> None:
        assert parse_scale_request(text) == expected

    def test_progression_takes_precedence(self) -> None:
        assert parse_scale_request("D C G D") == ScaleRequest("D", "mixolydian")

    def test_nothing_requested(self) -> None:
        assert parse_scale_request("how are you today?") is None
