"""Engine-wide constants and logging configuration.

Every tunable number used by the analyzer, tab parser and voicing
generator lives here so that callers can read (but not mutate) the
values the engine was built with.
"""

from __future__ import annotations

import logging
import os

# Environment variable read by configure_logging()
LOG_LEVEL_ENV = "CHORD_ENGINE_LOG_LEVEL"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

# Modal analysis
OUT_OF_MODE_PENALTY = 0.2
LYDIAN_SHARP_FOUR_BONUS = 0.3
MIXOLYDIAN_FLAT_SEVEN_BONUS = 0.2
DORIAN_NATURAL_SIX_BONUS = 0.2
SCALE_REQUEST_MIN_CONFIDENCE = 0.6

# Voicing generation
MAX_VOICINGS = 4
MAX_TRANSPOSED_FRET = 15
CURATED_MUSICAL_SCORE = 0.8
TOTAL_SCORE_WEIGHT = 0.9
OPEN_PREFERENCE_BONUS = 0.05
DIFFICULTY_SCORES: dict[str, float] = {
    "beginner": 1.0,
    "intermediate": 0.8,
    "advanced": 0.6,
}
UNKNOWN_DIFFICULTY_SCORE = 0.7
LESSON_TIP_MAX_LENGTH = 120

# Constraint parsing bounds
MIN_FRET_SPAN = 2
MAX_FRET_SPAN = 6
MIN_COUNT = 3
MAX_COUNT = 4


def configure_logging(level: int | str | None = None) -> logging.Logger:
    """Attach a stream handler to the ``chord_engine`` logger.

    Parameters
    ----------
    level : int | str | None
        Logging level. When None, the ``CHORD_ENGINE_LOG_LEVEL``
        environment variable is used, falling back to ``WARNING``.

    Returns
    -------
    logging.Logger
        The configured package logger.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()

    logger = logging.getLogger("chord_engine")
    logger.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
