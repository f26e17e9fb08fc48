"""Guitar tablature detection, parsing and chord identification.

Examples
--------
>>> from chord_engine.tab_parser import detect_tab, identify_chord, parse_tab
>>> text = "e|-0-\\nB|-1-\\nG|-0-\\nD|-2-\\nA|-3-"
>>> detect_tab(text)
True
>>> identify_chord(parse_tab(text))
'C Major'
"""

from chord_engine.tab_parser.detector import detect_tab
from chord_engine.tab_parser.identifier import (
    ExactShapeMatcher,
    IntervalTemplateMatcher,
    identify_chord,
    tab_to_chord_shape,
)
from chord_engine.tab_parser.models import ParsedNote, ParsedTab, TabLine, TabTechnique
from chord_engine.tab_parser.parser import parse_tab

__all__ = [
    "ExactShapeMatcher",
    "IntervalTemplateMatcher",
    "ParsedNote",
    "ParsedTab",
    "TabLine",
    "TabTechnique",
    "detect_tab",
    "identify_chord",
    "parse_tab",
    "tab_to_chord_shape",
]
