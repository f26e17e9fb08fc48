#!/usr/bin/env python3
"""CLI tool to run the chord engine on text and export to JSON.

Usage:
    python examples/chord_engine_demo.py analyze "<text>"
    python examples/chord_engine_demo.py tab <input_file>
    python examples/chord_engine_demo.py voicings <chord> [--instrument piano] [--constraints "<text>"]
    python examples/chord_engine_demo.py scale <root> <mode>

Examples:
    python examples/chord_engine_demo.py analyze "I keep playing D C G D"
    python examples/chord_engine_demo.py tab my_riff.txt --pretty
    python examples/chord_engine_demo.py voicings Am7 --constraints "top 4 strings, max 3 frets"
    python examples/chord_engine_demo.py scale G mixolydian
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from chord_engine import (
    ChordInput,
    Constraints,
    VoicingGenerationError,
    VoicingRequest,
    configure_logging,
    enrich_message,
    generate_voicings,
    mode_chords,
    parse_constraints,
    scale_notes,
)


def analyze_command(args: argparse.Namespace) -> dict[str, Any]:
    """Run modal analysis and tab recognition over free text."""
    return enrich_message(args.text).to_dict()


def tab_command(args: argparse.Namespace) -> dict[str, Any]:
    """Parse a tab file and identify its first chord."""
    return enrich_message(args.input.read_text()).to_dict()


def scale_command(args: argparse.Namespace) -> dict[str, Any]:
    """Spell a scale and its diatonic triads."""
    return {
        "root": args.root,
        "mode": args.mode,
        "notes": list(scale_notes(args.root, args.mode)),
        "chords": [
            {
                "degree": chord.scale_degree,
                "name": chord.name,
                "roman_numeral": chord.roman_numeral,
                "quality": chord.quality,
                "function": chord.function,
            }
            for chord in mode_chords(args.root, args.mode)
        ],
    }


def voicings_command(args: argparse.Namespace) -> dict[str, Any]:
    """Generate ranked voicings for a chord."""
    patch = parse_constraints(args.constraints) if args.constraints else {}
    request = VoicingRequest(
        instrument=args.instrument,
        chord_input=ChordInput(literal=args.chord),
        constraints=Constraints().merged(patch),
        count=patch.get("count", args.count),
        lesson_mode=args.lesson,
    )
    response = generate_voicings(request)
    data = response.to_dict()
    data["constraints"] = {k: v for k, v in asdict(request.constraints).items() if v not in (None, ())}
    return data


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run the chord engine and export results to JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s analyze "I keep playing D C G D"
  %(prog)s tab my_riff.txt -o riff.json
  %(prog)s voicings Cmaj7 --instrument piano --lesson
  %(prog)s scale A "harmonic minor" --pretty
        """,
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty-print JSON output",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: CHORD_ENGINE_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze = subparsers.add_parser("analyze", help="Analyze chords and tab in a message")
    analyze.add_argument("text", help="Message text")
    analyze.set_defaults(handler=analyze_command)

    tab = subparsers.add_parser("tab", help="Parse a tab file")
    tab.add_argument("input", type=Path, help="Input tab file to parse")
    tab.set_defaults(handler=tab_command)

    scale = subparsers.add_parser("scale", help="Spell a scale and its triads")
    scale.add_argument("root", help="Root note, e.g. G or Bb")
    scale.add_argument("mode", help="Mode name, e.g. dorian or 'harmonic minor'")
    scale.set_defaults(handler=scale_command)

    voicings = subparsers.add_parser("voicings", help="Generate chord voicings")
    voicings.add_argument("chord", help="Chord symbol, e.g. Am7 or G:min7")
    voicings.add_argument(
        "--instrument",
        choices=("guitar", "piano", "bass"),
        default="guitar",
        help="Target instrument (default: guitar)",
    )
    voicings.add_argument("--constraints", default=None, help="Constraints in plain English")
    voicings.add_argument("--count", type=int, default=None, help="Number of voicings (max 4)")
    voicings.add_argument("--lesson", action="store_true", help="Include lesson tips")
    voicings.set_defaults(handler=voicings_command)

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.command == "tab" and not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    try:
        data = args.handler(args)
    except VoicingGenerationError as e:
        data = e.to_dict()
        print(f"Error: {e.message}", file=sys.stderr)
        print(json.dumps(data, ensure_ascii=False))
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    indent = 2 if args.pretty else None
    json_output = json.dumps(data, indent=indent, ensure_ascii=False)

    if args.output:
        args.output.write_text(json_output)
        print(f"Wrote output to {args.output}")
    else:
        print(json_output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
