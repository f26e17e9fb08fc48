"""Modal analysis of chord progressions found in free text.

The analyzer pulls chord symbols out of arbitrary text, collects every
chord tone into a 12-bin pitch-class vector, and scores each candidate
mode rooted on the first chord by how much of that vector the mode
covers. Characteristic modal tones earn a fixed bonus.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from chord_engine import config
from chord_engine.pitch_class import UNICODE_ACCIDENTALS, normalize_note, note_to_pc, pc_to_note
from chord_engine.theory.chord_symbol import ChordSymbol, chord_to_pitch_classes, parse_chord
from chord_engine.theory.modes import get_mode

logger = logging.getLogger(__name__)

# Permissive chord-symbol finder; parse_chord() decides what survives
CHORD_TOKEN_RE = re.compile(
    r"(?<![\w#])"
    r"[A-G][#b]?"
    r"(?:maj|min|M|m|dim|aug|sus|add|°|\+|[#b-](?=\d)|\d)*"
    r"(?:/[A-G][#b]?)?"
    r"(?![\w#])"
)

# Candidate modes in tie-breaking order, named the way results report them
ANALYSIS_MODES: tuple[str, ...] = (
    "major",
    "minor",
    "dorian",
    "phrygian",
    "lydian",
    "mixolydian",
    "locrian",
)

# mode -> (semitones above the root, bonus) for its characteristic tone
MODAL_BONUSES: dict[str, tuple[int, float]] = {
    "lydian": (6, config.LYDIAN_SHARP_FOUR_BONUS),
    "mixolydian": (10, config.MIXOLYDIAN_FLAT_SEVEN_BONUS),
    "dorian": (9, config.DORIAN_NATURAL_SIX_BONUS),
}

SCALE_MODE_NAMES = "major|minor|dorian|phrygian|lydian|mixolydian|locrian|ionian|aeolian"
SCALE_REQUEST_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(rf"(?:show|play|display|give|teach).*?\b([a-g][#b]?)\s+({SCALE_MODE_NAMES})\b"),
    re.compile(rf"\b([a-g][#b]?)\s+({SCALE_MODE_NAMES})\b\s*(?:scale|mode)?"),
)
# Mode named first: "lydian scale in F"
SCALE_REQUEST_MODE_FIRST = re.compile(rf"\b({SCALE_MODE_NAMES})\b.*?\b(?:in|of|on)\s+([a-g][#b]?)(?![\w#])")


@dataclass(frozen=True)
class ModalAnalysis:
    """Best-fit explanation of a progression.

    Parameters
    ----------
    best_root : str
        Candidate tonic (the first chord's root).
    best_mode : str
        Winning mode name from ``ANALYSIS_MODES``.
    confidence : float
        ``score`` clamped to [0, 1].
    score : float
        Raw ranking value: coverage minus penalty, plus modal bonus.
    reason : str
        Human-readable explanation.
    borrowed_chords : tuple[str, ...]
        Symbols of chords containing a tone outside the winning mode.
    notes_used : tuple[str, ...]
        Distinct chord tones, sorted by pitch class.
    """

    best_root: str
    best_mode: str
    confidence: float
    score: float
    reason: str
    borrowed_chords: tuple[str, ...]
    notes_used: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        data = asdict(self)
        data["borrowed_chords"] = list(self.borrowed_chords)
        data["notes_used"] = list(self.notes_used)
        return data


@dataclass(frozen=True)
class ScaleRequest:
    """A scale the user asked to see (root and mode name)."""

    root: str
    mode: str


def extract_chords(text: str) -> list[ChordSymbol]:
    """Find and parse every chord symbol in ``text``, dropping failures.

    Examples
    --------
    >>> [c.symbol for c in extract_chords("Try C G Am F, then Dm7/G")]
    ['C', 'G', 'Am', 'F', 'Dm7/G']
    """
    normalized = text.translate(UNICODE_ACCIDENTALS)
    chords = []
    for token in CHORD_TOKEN_RE.findall(normalized):
        chord = parse_chord(token)
        if chord is not None:
            chords.append(chord)
    return chords


def pitch_class_vector(pitch_classes: frozenset[int] | set[int]) -> NDArray[np.int_]:
    """Return a 12-bin binary chroma vector for a pitch-class set.

    Examples
    --------
    >>> pitch_class_vector({0, 4, 7}).tolist()
    [1, 0, 0, 0, 1, 0, 0, 1, 0, 0, 0, 0]
    """
    vector = np.zeros(12, dtype=np.int_)
    vector[list(pitch_classes)] = 1
    return vector


def mode_template(root_pc: int, mode: str) -> NDArray[np.int_]:
    """Return the chroma vector of ``mode`` rooted at ``root_pc``."""
    return pitch_class_vector({(root_pc + interval) % 12 for interval in get_mode(mode).intervals})


def _describe_fit(root: str, mode: str, out_of_mode: list[str], bonus: float) -> str:
    if out_of_mode:
        notes = ", ".join(out_of_mode)
        single = len(out_of_mode) == 1
        reason = (
            f"Contains {notes}, which {'is' if single else 'are'} not in {root} major. "
            f"{root} {mode} includes {'this note' if single else 'these notes'}, "
            "making it a better modal fit."
        )
    else:
        reason = f"All notes fit within {root} {mode}."
    if bonus > 0:
        reason += f" The presence of characteristic {mode} tones strengthens this analysis."
    return reason


def analyze_progression(text: str) -> ModalAnalysis | None:
    """Find the mode that best explains the chords mentioned in ``text``.

    Only the first parsed chord's root is tried as tonic. Each mode in
    ``ANALYSIS_MODES`` is scored as ``max(0, coverage - 0.2 * outside)``
    plus its characteristic-tone bonus; the first mode to reach the
    highest score wins.

    Parameters
    ----------
    text : str
        Free text that may contain chord symbols.

    Returns
    -------
    ModalAnalysis | None
        The best fit, or None if no chord symbol could be parsed.

    Examples
    --------
    >>> result = analyze_progression("C G Am F")
    >>> result.best_root, result.best_mode, result.confidence
    ('C', 'major', 1.0)
    >>> analyze_progression("no chords here") is None
    True
    """
    chords = extract_chords(text)
    if not chords:
        return None

    chord_pcs = [chord_to_pitch_classes(chord) for chord in chords]
    used_pcs: frozenset[int] = frozenset().union(*chord_pcs)
    used = pitch_class_vector(used_pcs)
    total = int(used.sum())
    notes_used = tuple(pc_to_note(pc) for pc in sorted(used_pcs))

    root = chords[0].root
    root_pc = note_to_pc(root)
    logger.debug("Analyzing %d chords on %s, notes used: %s", len(chords), root, notes_used)

    candidates: list[ModalAnalysis] = []
    for mode in ANALYSIS_MODES:
        template = mode_template(root_pc, mode)
        inside = int(used @ template)
        out_of_mode_pcs = {int(pc) for pc in np.flatnonzero((used == 1) & (template == 0))}
        out_of_mode = [pc_to_note(pc) for pc in sorted(out_of_mode_pcs)]

        coverage = inside / total
        penalty = config.OUT_OF_MODE_PENALTY * len(out_of_mode)
        confidence = max(0.0, coverage - penalty)

        bonus = 0.0
        if mode in MODAL_BONUSES:
            offset, value = MODAL_BONUSES[mode]
            if used[(root_pc + offset) % 12]:
                bonus = value

        score = confidence + bonus
        logger.debug("%s %s: coverage=%.3f penalty=%.2f bonus=%.2f", root, mode, coverage, penalty, bonus)

        borrowed = tuple(chord.symbol for chord, pcs in zip(chords, chord_pcs) if pcs & out_of_mode_pcs)
        candidates.append(
            ModalAnalysis(
                best_root=root,
                best_mode=mode,
                confidence=min(1.0, score),
                score=score,
                reason=_describe_fit(root, mode, out_of_mode, bonus),
                borrowed_chords=borrowed,
                notes_used=notes_used,
            )
        )

    # Strict comparison: the earliest mode reaching the top score wins, and
    # when nothing scores above zero the major reading stands.
    best = candidates[0]
    best_score = 0.0
    for candidate in candidates:
        if candidate.score > best_score:
            best, best_score = candidate, candidate.score
    return best


def parse_scale_request(text: str) -> ScaleRequest | None:
    """Work out which scale a message is asking about.

    A confident progression analysis wins; otherwise phrases such as
    "show me D dorian" or "the lydian scale in F" are matched.

    Examples
    --------
    >>> parse_scale_request("show me d dorian")
    ScaleRequest(root='D', mode='dorian')
    >>> parse_scale_request("what is the lydian mode in bb?")
    ScaleRequest(root='A#', mode='lydian')
    """
    analysis = analyze_progression(text)
    if analysis is not None and analysis.confidence > config.SCALE_REQUEST_MIN_CONFIDENCE:
        return ScaleRequest(root=analysis.best_root, mode=analysis.best_mode)

    lowered = text.lower().translate(UNICODE_ACCIDENTALS)
    root_text = mode_text = None
    for pattern in SCALE_REQUEST_PATTERNS:
        match = pattern.search(lowered)
        if match:
            root_text, mode_text = match.groups()
            break
    else:
        match = SCALE_REQUEST_MODE_FIRST.search(lowered)
        if match:
            mode_text, root_text = match.groups()

    if root_text is None or mode_text is None:
        return None

    try:
        root = normalize_note(root_text)
    except ValueError:
        return None
    mode = {"ionian": "major", "aeolian": "minor"}.get(mode_text, mode_text)
    return ScaleRequest(root=root, mode=mode)
