import sys

from chord_engine import ChordInput, VoicingRequest, analyze_progression, generate_voicings, identify_chord, parse_tab

# Modal analysis of a progression
analysis = analyze_progression("Verse goes D C G D")
sys.stdout.write(f"{analysis.best_root} {analysis.best_mode}: {analysis.reason}\n")

# Chord recognition from tab
tab = parse_tab(
    """e|-0-|
B|-0-|
G|-1-|
D|-2-|
A|-2-|
E|-0-|"""
)
sys.stdout.write(identify_chord(tab) + "\n")  # "E Major"

# Guitar voicings
response = generate_voicings(VoicingRequest("guitar", ChordInput(literal="Am7")))
for voicing in response.voicings:
    sys.stdout.write(f"{voicing.name}: {voicing.frets} ({voicing.position})\n")
