"""Tests for the mode catalog and scale spelling."""

import logging

import pytest

from chord_engine.pitch_class import CHROMATIC_NOTES
from chord_engine.theory.modes import (
    MODES,
    characteristic_intervals,
    common_progressions,
    get_mode,
    resolve_mode,
    scale_notes,
)


class TestCatalog:
    """Test the static mode table."""

    def test_nine_modes(self) -> None:
        assert len(MODES) == 9

    @pytest.mark.parametrize("mode", list(MODES.values()), ids=list(MODES))
    def test_mode_shape(self, mode) -> None:
        """Test that every mode has seven ascending offsets from the root."""
        assert len(mode.intervals) == 7
        assert mode.intervals[0] == 0
        assert list(mode.intervals) == sorted(mode.intervals)
        assert len(mode.chord_qualities) == 7
        assert len(mode.roman_numerals) == 7

    def test_characteristic_intervals_are_offsets(self) -> None:
        """Test that characteristic tones are real semitone offsets."""
        assert 6 in [ci.semitones for ci in characteristic_intervals("lydian")]
        assert 10 in [ci.semitones for ci in characteristic_intervals("mixolydian")]
        assert 9 in [ci.semitones for ci in characteristic_intervals("dorian")]


class TestScaleNotes:
    """Test scale spelling."""

    @pytest.mark.parametrize("root", CHROMATIC_NOTES)
    @pytest.mark.parametrize("mode", list(MODES))
    def test_seven_distinct_canonical_notes(self, root: str, mode: str) -> None:
        notes = scale_notes(root, mode)
        assert len(notes) == 7
        assert len(set(notes)) == 7
        assert all(note in CHROMATIC_NOTES for note in notes)
        assert notes[0] == root

    @pytest.mark.parametrize(
        ("root", "mode", "expected"),
        [
            ("C", "ionian", ("C", "D", "E", "F", "G", "A", "B")),
            ("C", "lydian", ("C", "D", "E", "F#", "G", "A", "B")),
            ("D", "dorian", ("D", "E", "F", "G", "A", "B", "C")),
            ("A", "harmonic_minor", ("A", "B", "C", "D", "E", "F", "G#")),
            ("A", "melodic minor", ("A", "B", "C", "D", "E", "F#", "G#")),
            ("Bb", "major", ("A#", "C", "D", "D#", "F", "G", "A")),
        ],
    )
    def test_known_scales(self, root: str, mode: str, expected: tuple) -> None:
        assert scale_notes(root, mode) == expected

    def test_degree_order_not_pitch_order(self) -> None:
        """Test that notes follow scale degrees, wrapping past B."""
        assert scale_notes("G", "ionian")[3:] == ("C", "D", "E", "F#")

    def test_accepts_mode_object(self) -> None:
        assert scale_notes("E", MODES["phrygian"])[1] == "F"


class TestResolveMode:
    """Test mode lookup and its documented fallback."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("major", "ionian"),
            ("minor", "aeolian"),
            ("Dorian", "dorian"),
            ("harmonic minor", "harmonic_minor"),
            ("harmonicMinor", "harmonic_minor"),
            ("melodic_minor", "melodic_minor"),
        ],
    )
    def test_aliases(self, name: str, expected: str) -> None:
        resolved = resolve_mode(name)
        assert resolved.value.name == expected
        assert resolved.fallback is False

    def test_unknown_falls_back_to_ionian(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="chord_engine"):
            resolved = resolve_mode("bebop")
        assert resolved.value.name == "ionian"
        assert resolved.fallback is True
        assert resolved.requested == "bebop"
        assert "Unknown mode" in caplog.text

    def test_unknown_mode_scale_is_ionian(self) -> None:
        assert scale_notes("C", "bebop") == scale_notes("C", "ionian")

    def test_get_mode_unwraps(self) -> None:
        assert get_mode("mixolydian") is MODES["mixolydian"]


class TestCommonProgressions:
    """Test the progression catalog."""

    def test_mixolydian(self) -> None:
        assert common_progressions("mixolydian")[0].numerals == ("I", "VII", "I")

    def test_alias_lookup(self) -> None:
        assert common_progressions("minor")[0].name == "i-VI-VII-i"

    @pytest.mark.parametrize("mode", list(MODES))
    def test_every_mode_has_progressions(self, mode: str) -> None:
        assert common_progressions(mode)
