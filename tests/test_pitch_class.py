"""Tests for pitch class primitives."""

import logging

import pytest

from chord_engine.config import LOG_LEVEL_ENV, configure_logging
from chord_engine.pitch_class import (
    CHROMATIC_NOTES,
    interval_between,
    normalize_note,
    note_to_pc,
    pc_to_note,
    transpose_note,
)


class TestNoteToPc:
    """Test note name lookup."""

    @pytest.mark.parametrize(
        ("note", "pc"),
        [
            ("C", 0),
            ("C#", 1),
            ("Db", 1),
            ("E#", 5),
            ("Fb", 4),
            ("Bb", 10),
            ("Cb", 11),
            ("B#", 0),
        ],
    )
    def test_spellings(self, note: str, pc: int) -> None:
        """Test sharps, flats and edge enharmonics."""
        assert note_to_pc(note) == pc

    def test_unknown_note_raises(self) -> None:
        """Test that unknown names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown note"):
            note_to_pc("H")


class TestPcToNote:
    """Test pitch class naming."""

    def test_canonical_names_are_sharps(self) -> None:
        """Test that every pitch class maps to its sharp name."""
        assert [pc_to_note(pc) for pc in range(12)] == list(CHROMATIC_NOTES)

    @pytest.mark.parametrize(("pc", "note"), [(12, "C"), (-1, "B"), (25, "C#")])
    def test_wraps_mod_12(self, pc: int, note: str) -> None:
        """Test that out-of-range values wrap."""
        assert pc_to_note(pc) == note


class TestNormalizeNote:
    """Test enharmonic normalization."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("Bb", "A#"),
            ("bb", "A#"),
            ("d♭", "C#"),
            ("C♯", "C#"),
            (" f# ", "F#"),
            ("e", "E"),
            ("Cb", "B"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        """Test that spellings collapse to canonical names."""
        assert normalize_note(raw) == expected

    @pytest.mark.parametrize("raw", ["H", "", "C##"])
    def test_invalid_raises(self, raw: str) -> None:
        """Test that non-notes raise ValueError."""
        with pytest.raises(ValueError):
            normalize_note(raw)


class TestIntervals:
    """Test semitone arithmetic."""

    def test_transpose_up(self) -> None:
        assert transpose_note("A", 3) == "C"

    def test_transpose_down_wraps(self) -> None:
        assert transpose_note("C", -13) == "B"

    def test_transpose_accepts_flats(self) -> None:
        assert transpose_note("Eb", 2) == "F"

    @pytest.mark.parametrize(
        ("lower", "upper", "semitones"),
        [("C", "G", 7), ("G", "C", 5), ("E", "E", 0), ("B", "C", 1)],
    )
    def test_interval_between(self, lower: str, upper: str, semitones: int) -> None:
        assert interval_between(lower, upper) == semitones


@pytest.fixture
def package_logger():
    logger = logging.getLogger("chord_engine")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


@pytest.mark.usefixtures("package_logger")
class TestConfigureLogging:
    """Test package logging setup."""

    def test_explicit_level(self) -> None:
        logger = configure_logging(logging.DEBUG)
        assert logger.name == "chord_engine"
        assert logger.level == logging.DEBUG

    def test_level_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(LOG_LEVEL_ENV, "error")
        assert configure_logging().level == logging.ERROR

    def test_handler_added_once(self) -> None:
        configure_logging("INFO")
        logger = configure_logging("INFO")
        stream_handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
        assert len(stream_handlers) == 1
