"""Tests for natural-language constraint parsing and validation."""

import pytest

from chord_engine.voicings.constraints import (
    ChordText,
    base_quality,
    open_string_numbers,
    parse_chord_from_text,
    parse_constraints,
    validate_constraints,
)
from chord_engine.voicings.models import Constraints, StringRange


class TestParseConstraints:
    """Test phrase recognition."""

    def test_combined_phrase(self) -> None:
        patch = parse_constraints("top 3 strings, max 9 frets, open G")
        assert patch["string_range"] == StringRange(1, 3)
        assert patch["max_fret_span"] == 6
        assert patch["require_open_strings"] == ("G",)

    def test_nothing_recognized(self) -> None:
        assert parse_constraints("something else entirely") == {}

    @pytest.mark.parametrize(
        ("text", "string_range"),
        [
            ("top 4 strings", StringRange(1, 4)),
            ("bottom 3 strings", StringRange(4, 6)),
            ("bottom 4 strings", StringRange(3, 6)),
        ],
    )
    def test_string_ranges(self, text: str, string_range: StringRange) -> None:
        assert parse_constraints(text)["string_range"] == string_range

    @pytest.mark.parametrize(
        ("text", "span"),
        [("max 4 frets", 4), ("maximum 1 fret", 2), ("no stretches please", 3), ("compact shapes", 3)],
    )
    def test_fret_span(self, text: str, span: int) -> None:
        assert parse_constraints(text)["max_fret_span"] == span

    @pytest.mark.parametrize("text", ["frets 5-8", "between 5 to 8", "fret 5 – 8"])
    def test_fret_range(self, text: str) -> None:
        patch = parse_constraints(text)
        assert (patch["fret_min"], patch["fret_max"]) == (5, 8)

    def test_reversed_range_ignored(self) -> None:
        assert "fret_min" not in parse_constraints("frets 8-5")

    @pytest.mark.parametrize(
        ("text", "window"),
        [("around the 7th fret", (5, 9)), ("1st position", (1, 3)), ("fret 10 position", (8, 12))],
    )
    def test_single_fret_window(self, text: str, window: tuple) -> None:
        patch = parse_constraints(text)
        assert (patch["fret_min"], patch["fret_max"]) == window

    def test_fret_count_is_not_a_position(self) -> None:
        patch = parse_constraints("max 4 frets")
        assert "fret_min" not in patch
        assert "fret_max" not in patch

    def test_avoid_open(self) -> None:
        patch = parse_constraints("avoid open strings")
        assert patch["open_preference"] == "avoid"
        assert patch["require_open_strings"] == ()

    def test_prefer_open(self) -> None:
        patch = parse_constraints("prefer open strings")
        assert patch["open_preference"] == "prefer"
        assert "require_open_strings" not in patch

    def test_open_notes(self) -> None:
        assert parse_constraints("open E and open Bb")["require_open_strings"] == ("E", "A#")

    @pytest.mark.parametrize(("text", "key"), [("in the key of G", "G"), ("key of eb minor", "D#")])
    def test_key_center(self, text: str, key: str) -> None:
        assert parse_constraints(text)["key_center"] == key

    @pytest.mark.parametrize(("text", "count"), [("only 3 shapes", 3), ("10 voicings", 4), ("2 options", 3)])
    def test_count_clamped(self, text: str, count: int) -> None:
        assert parse_constraints(text)["count"] == count

    @pytest.mark.parametrize(
        ("text", "chord_type"),
        [("triads only", "triad"), ("seventh chords", "seventh"), ("add tensions", "extended")],
    )
    def test_chord_type(self, text: str, chord_type: str) -> None:
        assert parse_constraints(text)["chord_type"] == chord_type

    def test_register_and_instrument(self) -> None:
        patch = parse_constraints("on piano in the high register")
        assert patch["register"] == "high"
        assert patch["instrument_hint"] == "piano"

    def test_merge_into_constraints(self) -> None:
        patch = parse_constraints("top 3 strings, only 3 voicings")
        merged = Constraints(fret_max=12).merged(patch)
        assert merged.string_range == StringRange(1, 3)
        assert merged.fret_max == 12
        assert not hasattr(merged, "count")


class TestBaseQuality:
    """Test suffix classification."""

    @pytest.mark.parametrize(
        ("suffix", "expected"),
        [
            ("", ("major", None)),
            ("maj", ("major", None)),
            ("m", ("minor", None)),
            ("dim7", ("diminished", None)),
            ("+", ("augmented", None)),
            ("maj7", ("major", "maj7")),
            ("M7", ("major", "M7")),
            ("m7", ("minor", "m7")),
            ("m9", ("minor", "m9")),
            ("7", ("dominant", "7")),
            ("13", ("dominant", "13")),
            ("add9", ("major", "add9")),
            ("sus2", ("suspended", "sus2")),
            ("6", ("major", "6")),
        ],
    )
    def test_suffixes(self, suffix: str, expected: tuple) -> None:
        assert base_quality(suffix) == expected


class TestParseChordFromText:
    """Test chord discovery in requests."""

    def test_skips_capitalized_words(self) -> None:
        chord = parse_chord_from_text("Give me Am9 please")
        assert chord == ChordText(root="A", quality="minor", suffix="m9", extension="m9")

    def test_slash_chord(self) -> None:
        chord = parse_chord_from_text("Show me C/E")
        assert chord is not None
        assert (chord.root, chord.bass) == ("C", "E")

    def test_trailing_punctuation(self) -> None:
        chord = parse_chord_from_text("How about F#m7b5?")
        assert chord is not None
        assert (chord.root, chord.quality, chord.suffix) == ("F#", "minor", "m7b5")

    def test_flat_root(self) -> None:
        chord = parse_chord_from_text("E♭maj7 voicings")
        assert chord is not None
        assert chord.root == "D#"

    def test_none(self) -> None:
        assert parse_chord_from_text("no chord here") is None


class TestValidateConstraints:
    """Test contradiction detection."""

    def test_empty_is_valid(self) -> None:
        assert validate_constraints(Constraints(), "guitar").valid

    def test_inverted_fret_range(self) -> None:
        result = validate_constraints(Constraints(fret_min=8, fret_max=3), "guitar")
        assert not result.valid
        assert "Minimum fret cannot be higher than maximum fret" in result.conflicts

    def test_frets_on_piano(self) -> None:
        result = validate_constraints(Constraints(fret_max=5), "piano")
        assert result.conflicts == ("Fret and string constraints do not apply to piano",)

    def test_register_on_guitar(self) -> None:
        result = validate_constraints(Constraints(register="low"), "guitar")
        assert result.conflicts == ("Register constraints are for piano only",)
        assert result.suggestions

    def test_register_on_piano(self) -> None:
        assert validate_constraints(Constraints(register="low"), "piano").valid

    def test_open_string_outside_range(self) -> None:
        constraints = Constraints(string_range=StringRange(1, 3), require_open_strings=("A",))
        result = validate_constraints(constraints, "guitar")
        assert result.conflicts == ("Open A is outside the requested string range",)

    def test_high_e_inside_top_strings(self) -> None:
        constraints = Constraints(string_range=StringRange(1, 3), require_open_strings=("E",))
        assert validate_constraints(constraints, "guitar").valid


class TestOpenStringNumbers:
    """Test open-string lookup by note."""

    def test_both_e_strings(self) -> None:
        assert open_string_numbers("E", ("E", "A", "D", "G", "B", "E")) == [6, 1]

    def test_drop_d(self) -> None:
        assert open_string_numbers("D", ("D", "A", "D", "G", "B", "E")) == [6, 4]

    def test_missing(self) -> None:
        assert open_string_numbers("F", ("E", "A", "D", "G", "B", "E")) == []
