"""Tests for chat message enrichment."""

import json

from chord_engine import enrich_message

C_MAJOR_TAB = "Is this right?\ne|-0-|\nB|-1-|\nG|-0-|\nD|-2-|\nA|-3-|\nE|-x-|"


class TestEnrichMessage:
    """Test the combined analysis entry point."""

    def test_progression_only(self) -> None:
        enrichment = enrich_message("How do I use D C G D?")
        assert enrichment.modal_analysis is not None
        assert enrichment.modal_analysis.best_mode == "mixolydian"
        assert enrichment.scale_request is not None
        assert enrichment.scale_request.mode == "mixolydian"
        assert enrichment.parsed_tab is None
        assert enrichment.identified_chord is None
        assert enrichment.chord_shape is None

    def test_tab_message(self) -> None:
        enrichment = enrich_message(C_MAJOR_TAB)
        assert enrichment.parsed_tab is not None
        assert enrichment.identified_chord == "C Major"
        assert enrichment.chord_shape is not None
        assert enrichment.chord_shape.frets == (None, 3, 2, 0, 1, 0)

    def test_scale_request(self) -> None:
        enrichment = enrich_message("can you show me f# dorian")
        assert enrichment.modal_analysis is None
        assert enrichment.scale_request is not None
        assert (enrichment.scale_request.root, enrichment.scale_request.mode) == ("F#", "dorian")

    def test_nothing_found(self) -> None:
        data = enrich_message("thanks!").to_dict()
        assert all(value is None for value in data.values())

    def test_to_dict_is_json(self) -> None:
        data = enrich_message(C_MAJOR_TAB).to_dict()
        encoded = json.loads(json.dumps(data))
        assert encoded["identified_chord"] == "C Major"
        assert encoded["chord_shape"]["frets"] == [None, 3, 2, 0, 1, 0]
        assert encoded["chord_shape"]["quality"] == "major"
