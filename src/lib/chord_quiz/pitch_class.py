"""
Pitch class conversions - no hardware dependencies.
Converts between note names ("Eb", "F#") and pitch classes 0-11.
"""
from .constants import Music

# Base pitch class for each natural note letter
LETTER_TO_PC = {
    "C": 0,
    "D": 2,
    "E": 4,
    "F": 5,
    "G": 7,
    "A": 9,
    "B": 11,
}

# One display name per pitch class (index = pitch class)
CANONICAL_NOTES = ("C", "C#", "D", "Eb", "E", "F", "F#", "G", "Ab", "A", "Bb", "B")


def note_to_pc(name):
    """
    Convert a note name to a pitch class.

    Decoding is lenient and never raises: an unknown letter counts as C,
    characters other than '#' and 'b' after the letter are ignored, and
    empty input gives 0.

    Args:
        name: Note name such as "C", "Eb", "F##"

    Returns:
        Pitch class 0-11
    """
    if not name:
        return 0

    base = LETTER_TO_PC.get(name[0].upper(), 0)
    offset = 0
    for char in name[1:]:
        if char == Music.SHARP:
            offset += 1
        elif char == Music.FLAT:
            offset -= 1
    return (base + offset) % Music.NOTES_PER_OCTAVE


def pc_to_canonical(pc):
    """Convert any integer to the canonical name of its pitch class."""
    return CANONICAL_NOTES[pc % Music.NOTES_PER_OCTAVE]


def normalize_notes(names):
    """Respell note names canonically, keeping order and length."""
    return [pc_to_canonical(note_to_pc(name)) for name in names]


def pcs_to_notes(pcs):
    """Sort pitch classes ascending and return their canonical names."""
    return [pc_to_canonical(pc) for pc in sorted(pcs)]
