"""Entry point for chat layers that enrich messages with music analysis.

The chat layer hands over raw user text and embeds the returned dict in
its own response next to whatever text it generated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from chord_engine.tab_parser import detect_tab, identify_chord, parse_tab, tab_to_chord_shape
from chord_engine.tab_parser.models import ParsedTab
from chord_engine.theory.analysis import ModalAnalysis, ScaleRequest, analyze_progression, parse_scale_request
from chord_engine.voicings.models import ChordShape

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MessageEnrichment:
    """Structured facts extracted from one chat message.

    Each field is None when the message held nothing of that kind.
    """

    modal_analysis: ModalAnalysis | None = None
    scale_request: ScaleRequest | None = None
    parsed_tab: ParsedTab | None = None
    identified_chord: str | None = None
    chord_shape: ChordShape | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        shape = self.chord_shape
        return {
            "modal_analysis": self.modal_analysis.to_dict() if self.modal_analysis else None,
            "scale_request": (
                {"root": self.scale_request.root, "mode": self.scale_request.mode} if self.scale_request else None
            ),
            "parsed_tab": self.parsed_tab.to_dict() if self.parsed_tab else None,
            "identified_chord": self.identified_chord,
            "chord_shape": (
                {
                    "name": shape.name,
                    "root": shape.root,
                    "quality": shape.quality,
                    "frets": list(shape.frets),
                    "fingers": list(shape.fingers),
                    "difficulty": shape.difficulty,
                }
                if shape
                else None
            ),
        }


def enrich_message(text: str) -> MessageEnrichment:
    """Run modal analysis and tab recognition over a chat message.

    Parameters
    ----------
    text : str
        Raw user text.

    Returns
    -------
    MessageEnrichment
        Whatever could be extracted; never raises for odd input.

    Examples
    --------
    >>> enrichment = enrich_message("How do I use D C G D?")
    >>> enrichment.modal_analysis.best_mode
    'mixolydian'
    >>> enrichment.parsed_tab is None
    True
    """
    analysis = analyze_progression(text)
    scale_request = parse_scale_request(text)

    parsed_tab = parse_tab(text) if detect_tab(text) else None
    identified = shape = None
    if parsed_tab is not None:
        identified = identify_chord(parsed_tab)
        shape = tab_to_chord_shape(parsed_tab, identified)

    logger.debug(
        "Enriched message: mode=%s tab=%s chord=%s",
        analysis.best_mode if analysis else None,
        parsed_tab is not None,
        identified,
    )
    return MessageEnrichment(
        modal_analysis=analysis,
        scale_request=scale_request,
        parsed_tab=parsed_tab,
        identified_chord=identified,
        chord_shape=shape,
    )
