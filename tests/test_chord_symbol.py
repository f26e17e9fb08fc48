"""Tests for free-text chord symbol parsing."""

import pytest

from chord_engine.theory.chord_symbol import chord_to_pitch_classes, chord_tones, classify_quality, parse_chord


class TestParseChord:
    """Test symbol splitting."""

    def test_major_seventh(self) -> None:
        chord = parse_chord("Cmaj7")
        assert chord is not None
        assert chord.root == "C"
        assert chord.quality == "major"
        assert chord.extensions == ("7",)
        assert chord.bass is None

    def test_half_diminished_slash(self) -> None:
        chord = parse_chord("F#m7b5/A")
        assert chord is not None
        assert (chord.root, chord.quality, chord.bass) == ("F#", "minor", "A")
        assert chord.suffix == "m7b5"

    def test_unicode_flat(self) -> None:
        chord = parse_chord("B♭m")
        assert chord is not None
        assert chord.root == "A#"
        assert chord.symbol == "Bbm"

    @pytest.mark.parametrize("text", ["hello", "C/X", "", "cmaj7", "H7"])
    def test_not_a_chord(self, text: str) -> None:
        assert parse_chord(text) is None


class TestClassifyQuality:
    """Test quality tagging of the suffix."""

    @pytest.mark.parametrize(
        ("suffix", "quality"),
        [
            ("", "major"),
            ("m", "minor"),
            ("min7", "minor"),
            ("maj7", "major"),
            ("M7", "major"),
            ("7", "dominant"),
            ("13", "dominant"),
            ("add9", "major"),
            ("dim", "diminished"),
            ("°7", "diminished"),
            ("aug", "augmented"),
            ("+", "augmented"),
            ("sus4", "suspended"),
        ],
    )
    def test_suffixes(self, suffix: str, quality: str) -> None:
        assert classify_quality(suffix) == quality


class TestChordTones:
    """Test tone spelling."""

    @pytest.mark.parametrize(
        ("symbol", "tones"),
        [
            ("Cmaj7", ("C", "E", "G", "B")),
            ("CM7", ("C", "E", "G", "B")),
            ("F#m7b5/A", ("F#", "A", "C", "E")),
            ("Bdim", ("B", "D", "F")),
            ("Cdim7", ("C", "D#", "F#", "A")),
            ("Caug", ("C", "E", "G#")),
            ("Dsus4", ("D", "G", "A")),
            ("Am7", ("A", "C", "E", "G")),
            ("G7", ("G", "B", "D", "F")),
            ("G/B", ("G", "B", "D")),
            ("D/F#", ("D", "F#", "A")),
            ("C/Bb", ("C", "E", "G", "A#")),
        ],
    )
    def test_tones(self, symbol: str, tones: tuple) -> None:
        chord = parse_chord(symbol)
        assert chord is not None
        assert chord_tones(chord) == tones

    def test_pitch_classes(self) -> None:
        chord = parse_chord("G7")
        assert chord is not None
        assert chord_to_pitch_classes(chord) == frozenset({7, 11, 2, 5})
