"""Curated guitar chord shapes.

Shapes are hand-authored constants in standard tuning, grouped into named
sets. They are never generated or mutated at runtime; transposed barre
variants are built per request by :func:`transpose_shape`.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, replace

from chord_engine.pitch_class import interval_between
from chord_engine.voicings.models import Barre, ChordShape


@dataclass(frozen=True)
class ShapeSet:
    """A named group of shapes (e.g., "Barre Chords")."""

    name: str
    description: str
    shapes: tuple[ChordShape, ...]


GUITAR_SHAPE_SETS: tuple[ShapeSet, ...] = (
    ShapeSet(
        name="Open Chords",
        description="Basic open chord shapes using open strings",
        shapes=(
            ChordShape("C Major", "C", "major", (None, 3, 2, 0, 1, 0), (None, 3, 2, 0, 1, 0), "beginner"),
            ChordShape("D Major", "D", "major", (None, None, 0, 2, 3, 2), (None, None, 0, 1, 3, 2), "beginner"),
            ChordShape("E Major", "E", "major", (0, 2, 2, 1, 0, 0), (0, 2, 3, 1, 0, 0), "beginner"),
            ChordShape(
                "F Major",
                "F",
                "major",
                (1, 3, 3, 2, 1, 1),
                (1, 3, 4, 2, 1, 1),
                "intermediate",
                barres=(Barre(fret=1, from_string=0, to_string=5),),
            ),
            ChordShape("G Major", "G", "major", (3, 2, 0, 0, 0, 3), (2, 1, 0, 0, 0, 3), "beginner"),
            ChordShape("A Major", "A", "major", (None, 0, 2, 2, 2, 0), (None, 0, 1, 2, 3, 0), "beginner"),
            ChordShape("A Minor", "A", "minor", (None, 0, 2, 2, 1, 0), (None, 0, 2, 3, 1, 0), "beginner"),
            ChordShape("D Minor", "D", "minor", (None, None, 0, 2, 3, 1), (None, None, 0, 2, 3, 1), "beginner"),
            ChordShape("E Minor", "E", "minor", (0, 2, 2, 0, 0, 0), (0, 2, 3, 0, 0, 0), "beginner"),
        ),
    ),
    ShapeSet(
        name="Barre Chords",
        description="Moveable barre chord shapes",
        shapes=(
            # Authored at the 1st fret (F) and 2nd fret (B)
            ChordShape(
                "E Shape Major",
                "F",
                "major",
                (1, 3, 3, 2, 1, 1),
                (1, 3, 4, 2, 1, 1),
                "intermediate",
                barres=(Barre(fret=1, from_string=0, to_string=5),),
            ),
            ChordShape(
                "E Shape Minor",
                "F",
                "minor",
                (1, 3, 3, 1, 1, 1),
                (1, 3, 4, 1, 1, 1),
                "intermediate",
                barres=(Barre(fret=1, from_string=0, to_string=5),),
            ),
            ChordShape(
                "A Shape Major",
                "B",
                "major",
                (None, 2, 4, 4, 4, 2),
                (None, 1, 2, 3, 4, 1),
                "intermediate",
                barres=(Barre(fret=2, from_string=1, to_string=5),),
            ),
            ChordShape(
                "A Shape Minor",
                "B",
                "minor",
                (None, 2, 4, 4, 3, 2),
                (None, 1, 3, 4, 2, 1),
                "intermediate",
                barres=(Barre(fret=2, from_string=1, to_string=5),),
            ),
        ),
    ),
    ShapeSet(
        name="Jazz Voicings",
        description="Jazz chord voicings with extensions",
        shapes=(
            ChordShape("Cmaj7", "C", "major7", (None, 3, 2, 0, 0, 0), (None, 3, 2, 0, 0, 0), "intermediate"),
            ChordShape("Dm7", "D", "minor7", (None, None, 0, 2, 1, 1), (None, None, 0, 2, 1, 1), "intermediate"),
            ChordShape("G7", "G", "dominant7", (3, 2, 0, 0, 0, 1), (3, 2, 0, 0, 0, 1), "intermediate"),
            ChordShape("Am7", "A", "minor7", (None, 0, 2, 0, 1, 0), (None, 0, 2, 0, 1, 0), "intermediate"),
            ChordShape(
                "Fmaj7",
                "F",
                "major7",
                (1, 3, 3, 2, 1, 0),
                (1, 3, 4, 2, 1, 0),
                "advanced",
                barres=(Barre(fret=1, from_string=0, to_string=4),),
            ),
        ),
    ),
    ShapeSet(
        name="Power Chords",
        description="Two-note power chord shapes",
        shapes=(
            ChordShape("E5", "E", "power", (0, 2, 2, None, None, None), (0, 1, 2, None, None, None), "beginner"),
            ChordShape("A5", "A", "power", (None, 0, 2, 2, None, None), (None, 0, 1, 2, None, None), "beginner"),
            ChordShape("D5", "D", "power", (None, None, 0, 2, 3, None), (None, None, 0, 1, 2, None), "beginner"),
            ChordShape("G5", "G", "power", (3, 5, 5, None, None, None), (1, 3, 4, None, None, None), "beginner"),
        ),
    ),
    ShapeSet(
        name="Suspended Chords",
        description="Suspended 2nd and 4th chords - create tension and movement",
        shapes=(
            ChordShape("Asus2", "A", "sus2", (None, 0, 2, 2, 0, 0), (None, 0, 1, 2, 0, 0), "beginner"),
            ChordShape("Asus4", "A", "sus4", (None, 0, 2, 2, 3, 0), (None, 0, 1, 2, 3, 0), "beginner"),
            ChordShape("Dsus2", "D", "sus2", (None, None, 0, 2, 3, 0), (None, None, 0, 1, 2, 0), "beginner"),
            ChordShape("Dsus4", "D", "sus4", (None, None, 0, 2, 3, 3), (None, None, 0, 1, 2, 3), "beginner"),
            ChordShape("Esus4", "E", "sus4", (0, 2, 2, 2, 0, 0), (0, 1, 2, 3, 0, 0), "beginner"),
        ),
    ),
    ShapeSet(
        name="Diminished Chords",
        description="Diminished and half-diminished chords for tension and color",
        shapes=(
            ChordShape("A°", "A", "diminished", (None, 0, 1, 2, 1, 2), (None, 0, 1, 3, 2, 4), "intermediate"),
            ChordShape("B°", "B", "diminished", (None, 2, 3, 4, 3, 4), (None, 1, 2, 4, 3, 4), "intermediate"),
            ChordShape("C°", "C", "diminished", (None, 3, 4, 5, 4, 5), (None, 1, 2, 4, 3, 4), "intermediate"),
            ChordShape("Gø7", "G", "half-diminished7", (3, None, 3, 4, 3, None), (1, None, 2, 4, 3, None), "advanced"),
        ),
    ),
    ShapeSet(
        name="Extended Chords",
        description="9th, 11th, and 13th chords for sophisticated harmony",
        shapes=(
            ChordShape("Cadd9", "C", "add9", (None, 3, 2, 0, 3, 0), (None, 2, 1, 0, 3, 0), "intermediate"),
            ChordShape("Gadd9", "G", "add9", (3, 0, 0, 0, 0, 3), (2, 0, 0, 0, 0, 3), "beginner"),
            ChordShape("Dadd9", "D", "add9", (None, None, 0, 2, 3, 2), (None, None, 0, 1, 3, 2), "beginner"),
            ChordShape("Em9", "E", "minor9", (0, 2, 0, 0, 0, 0), (0, 1, 0, 0, 0, 0), "beginner"),
            ChordShape("Am9", "A", "minor9", (None, 0, 5, 5, 5, 7), (None, 0, 1, 2, 3, 4), "advanced"),
        ),
    ),
    ShapeSet(
        name="Alternate Voicings",
        description="Alternative fingerings and positions for common chords",
        shapes=(
            ChordShape(
                "C Major (Alt)",
                "C",
                "major",
                (None, 3, 5, 5, 5, 3),
                (None, 1, 2, 3, 4, 1),
                "intermediate",
                barres=(Barre(fret=3, from_string=1, to_string=5),),
            ),
            ChordShape(
                "G Major (Alt)",
                "G",
                "major",
                (3, 5, 5, 4, 3, 3),
                (1, 3, 4, 2, 1, 1),
                "intermediate",
                barres=(Barre(fret=3, from_string=0, to_string=5),),
            ),
            ChordShape(
                "D Major (Alt)",
                "D",
                "major",
                (None, 5, 7, 7, 7, 5),
                (None, 1, 2, 3, 4, 1),
                "intermediate",
                barres=(Barre(fret=5, from_string=1, to_string=5),),
            ),
            ChordShape(
                "A Minor (Alt)",
                "A",
                "minor",
                (5, 7, 7, 5, 5, 5),
                (1, 3, 4, 1, 1, 1),
                "intermediate",
                barres=(Barre(fret=5, from_string=0, to_string=5),),
            ),
        ),
    ),
)

# Flattened in authoring order; the generator relies on this order for ties
GUITAR_SHAPES: tuple[ChordShape, ...] = tuple(shape for group in GUITAR_SHAPE_SETS for shape in group.shapes)


def _build_index(shapes: tuple[ChordShape, ...]) -> dict[tuple[str, str], tuple[ChordShape, ...]]:
    index: defaultdict[tuple[str, str], list[ChordShape]] = defaultdict(list)
    for shape in shapes:
        index[(shape.root, shape.quality)].append(shape)
    return {key: tuple(value) for key, value in index.items()}


SHAPE_INDEX = _build_index(GUITAR_SHAPES)
MOVEABLE_INDEX: dict[str, tuple[ChordShape, ...]] = {
    quality: tuple(shape for shape in GUITAR_SHAPES if shape.quality == quality and shape.is_moveable)
    for quality in dict.fromkeys(shape.quality for shape in GUITAR_SHAPES)
}
# Position of each shape in GUITAR_SHAPES
SHAPE_ORDER: dict[ChordShape, int] = {shape: position for position, shape in enumerate(GUITAR_SHAPES)}


def shapes_for(root: str, quality: str) -> tuple[ChordShape, ...]:
    """Return curated shapes for an exact (root, quality) pair.

    Examples
    --------
    >>> [shape.name for shape in shapes_for("C", "major")]
    ['C Major', 'C Major (Alt)']
    >>> shapes_for("C#", "minor9")
    ()
    """
    return SHAPE_INDEX.get((root, quality), ())


def moveable_shapes(quality: str) -> tuple[ChordShape, ...]:
    """Return the moveable shapes of a quality, in authoring order."""
    return MOVEABLE_INDEX.get(quality, ())


def transpose_shape(shape: ChordShape, root: str) -> ChordShape:
    """Slide a moveable shape up the neck so that it sounds ``root``.

    The shape always moves up, by 0-11 frets. Fingering is unchanged.

    Raises
    ------
    ValueError
        If the shape rings open strings or has no barre.

    Examples
    --------
    >>> from chord_engine.voicings.shapes import shapes_for
    >>> e_shape = next(s for s in shapes_for("F", "major") if s.name == "E Shape Major")
    >>> transpose_shape(e_shape, "G").frets
    (3, 5, 5, 4, 3, 3)
    """
    if not shape.is_moveable:
        msg = f"Shape is not moveable: {shape.name}"
        raise ValueError(msg)

    distance = interval_between(shape.root, root)
    return replace(
        shape,
        name=f"{root} {shape.quality} ({shape.name})",
        root=root,
        frets=tuple(fret + distance if fret else fret for fret in shape.frets),
        barres=tuple(replace(barre, fret=barre.fret + distance) for barre in shape.barres),
    )
