"""
Chord dictionary loading - pure parsing logic.
Turns the delimited chord resource into ChordDef records keyed by symbol.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .constants import CsvFormat, Quiz
from .logger_config import logger
from .pitch_class import note_to_pc

_LINE_BREAK = re.compile(r"\r?\n")


class ChordDictionaryLoadError(Exception):
    """The chord dictionary could not be fetched or contained no chords."""


@dataclass(frozen=True)
class ChordDef:
    """
    One chord from the dictionary.

    The *_pc fields are derived from the neutral spellings in
    __post_init__ and cannot be passed in.
    """

    symbol: str
    notes_spelled: Tuple[str, ...]
    notes_neutral: Tuple[str, ...]
    omit_spelled: Tuple[str, ...]
    omit_neutral: Tuple[str, ...]
    notes_neutral_pc: Tuple[int, ...] = field(init=False)
    omit_neutral_pc: Tuple[int, ...] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "notes_neutral_pc", tuple(note_to_pc(note) for note in self.notes_neutral))
        object.__setattr__(self, "omit_neutral_pc", tuple(note_to_pc(note) for note in self.omit_neutral))

    @classmethod
    def from_fields(cls, symbol, notes_spelled, notes_neutral, omit_spelled, omit_neutral):
        return cls(
            symbol=symbol,
            notes_spelled=tuple(notes_spelled),
            notes_neutral=tuple(notes_neutral),
            omit_spelled=tuple(omit_spelled),
            omit_neutral=tuple(omit_neutral),
        )


def split_notes(text):
    """Split a space separated note field, dropping blank tokens."""
    if not text:
        return []
    return [token for token in text.split(CsvFormat.NOTE_DELIMITER) if token]


def parse_csv(text) -> List[ChordDef]:
    """
    Parse the chord dictionary resource.

    The first line is a header and is discarded unread. Rows are split on
    commas with no quoting support; rows with fewer than MIN_FIELDS fields
    are skipped. File order and duplicate symbols are kept.

    Args:
        text: Full text of the resource

    Returns:
        List of ChordDef in file order
    """
    lines = _LINE_BREAK.split(text.strip())
    chords = []
    for row in lines[1:]:
        parts = row.split(CsvFormat.FIELD_DELIMITER)
        if len(parts) < CsvFormat.MIN_FIELDS:
            continue
        chords.append(
            ChordDef.from_fields(
                symbol=parts[CsvFormat.SYMBOL],
                notes_spelled=split_notes(parts[CsvFormat.NOTES_SPELLED]),
                notes_neutral=split_notes(parts[CsvFormat.NOTES_NEUTRAL]),
                omit_spelled=split_notes(parts[CsvFormat.OMIT_SPELLED]),
                omit_neutral=split_notes(parts[CsvFormat.OMIT_NEUTRAL]),
            )
        )
    return chords


def build_chord_map(chords) -> Dict[str, ChordDef]:
    """Key chords by symbol. A later chord replaces an earlier one with the same symbol."""
    chord_map = {}
    for chord in chords:
        chord_map[chord.symbol] = chord
    return chord_map


def load_chord_dictionary(resource):
    """
    Fetch, parse and index the chord dictionary.

    Args:
        resource: ChordResourceHAL implementation

    Returns:
        Tuple of (chords, chord_map)

    Raises:
        ChordDictionaryLoadError: resource unavailable or no chords parsed
    """
    text = resource.fetch_text()
    chords = parse_csv(text)
    if not chords:
        raise ChordDictionaryLoadError(Quiz.EMPTY_DICTIONARY_MESSAGE)
    chord_map = build_chord_map(chords)
    logger.info("Loaded %d chords (%d unique symbols)", len(chords), len(chord_map))
    return chords, chord_map
