"""Tests for tablature detection and parsing."""

import pytest

from chord_engine.tab_parser import ParsedNote, detect_tab, parse_tab
from chord_engine.tab_parser.parser import find_tab_lines, parse_technique, resolve_string_index

TWO_STRING_TAB = "e|--3--2--0--|\nB|--0--0--0--|"


class TestDetectTab:
    """Test loose tab detection."""

    @pytest.mark.parametrize(
        "text",
        [
            TWO_STRING_TAB,
            "E|--3--2--0--",
            "try 5h7 on the G string",
            "slide 5/7 then back",
            "0-2-2-1-0-0 and 3-2-0-0-3-3",
        ],
    )
    def test_detects(self, text: str) -> None:
        assert detect_tab(text) is True

    @pytest.mark.parametrize("text", ["How do I play a C chord?", "C G Am F", ""])
    def test_plain_text(self, text: str) -> None:
        assert detect_tab(text) is False


class TestResolveStringIndex:
    """Test the E-string position heuristic."""

    @pytest.mark.parametrize(
        ("label", "line_index", "expected"),
        [
            ("E", 0, (5, True)),
            ("E", 2, (5, True)),
            ("E", 3, (0, True)),
            ("E", 5, (0, True)),
            ("A", 4, (1, False)),
            ("B", 1, (4, False)),
        ],
    )
    def test_labels(self, label: str, line_index: int, expected: tuple) -> None:
        assert resolve_string_index(label, line_index) == expected


class TestFindTabLines:
    """Test string line recognition."""

    def test_lines_and_labels(self) -> None:
        lines = find_tab_lines("Here is the riff:\ne|--3--|\nb: --0--\nnot a tab line")
        assert [(line.string, line.label) for line in lines] == [(5, "E"), (4, "B")]
        assert lines[0].inferred is True
        assert lines[1].inferred is False

    def test_windows_line_endings(self) -> None:
        assert len(find_tab_lines("e|--3--|\r\nB|--0--|")) == 2


class TestParseTab:
    """Test note extraction and timing groups."""

    def test_two_string_tab(self) -> None:
        """Test that stacked notes share a timing group."""
        parsed = parse_tab(TWO_STRING_TAB)
        assert parsed is not None
        assert parsed.is_chord is True
        assert len(parsed.measures) == 3
        assert all(len(group) == 2 for group in parsed.measures)
        assert [n.fret for n in parsed.notes if n.string == 5] == [3, 2, 0]
        assert [n.fret for n in parsed.notes if n.string == 4] == [0, 0, 0]
        assert parsed.inferred_lines == (0,)

    def test_timings_increase(self) -> None:
        parsed = parse_tab(TWO_STRING_TAB)
        assert parsed is not None
        timings = [group[0].timing for group in parsed.measures]
        assert timings == sorted(timings)
        assert len(set(timings)) == 3

    def test_string_order_override(self) -> None:
        """Test that explicit string indices replace the E heuristic."""
        parsed = parse_tab(TWO_STRING_TAB, string_order=[0, 1])
        assert parsed is not None
        assert {n.string for n in parsed.notes} == {0, 1}
        assert parsed.inferred_lines == ()

    def test_multi_digit_frets(self) -> None:
        parsed = parse_tab("e|--12--10--|")
        assert parsed is not None
        assert [n.fret for n in parsed.notes] == [12, 10]
        assert parsed.is_chord is False

    def test_technique(self) -> None:
        parsed = parse_tab("G|--5h7--|")
        assert parsed is not None
        assert parsed.notes[0] == ParsedNote(string=3, fret=5, timing=parsed.notes[0].timing, technique="hammer-on")
        assert parsed.notes[1].fret == 7
        assert parsed.notes[1].technique is None

    def test_non_tab_text(self) -> None:
        assert parse_tab("How do I play a C chord?") is None

    def test_detected_without_string_lines(self) -> None:
        """Test that dash-number runs alone do not produce a parse."""
        text = "Play 3-5-7 then 7-5-3"
        assert detect_tab(text) is True
        assert parse_tab(text) is None

    def test_to_dict(self) -> None:
        parsed = parse_tab("G|--5h7--|")
        assert parsed is not None
        data = parsed.to_dict()
        assert data["notes"][0]["technique"] == "hammer-on"
        assert "technique" not in data["notes"][1]
        assert data["original_text"] == "G|--5h7--|"
        assert isinstance(data["measures"], list)


class TestParseTechnique:
    """Test technique markers."""

    @pytest.mark.parametrize(
        ("marker", "technique"),
        [("h", "hammer-on"), ("p", "pull-off"), ("b", "bend"), ("~", "vibrato"), ("/", "slide-up"), ("\\", "slide-down")],
    )
    def test_markers(self, marker: str, technique: str) -> None:
        assert parse_technique(f"5{marker}7", 1) == technique

    def test_past_end(self) -> None:
        assert parse_technique("5", 1) is None
