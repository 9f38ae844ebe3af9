"""
Chord Quiz - Platform-independent chord recognition quiz.
"""

from .pitch_class import (
    LETTER_TO_PC,
    CANONICAL_NOTES,
    note_to_pc,
    pc_to_canonical,
    normalize_notes,
    pcs_to_notes,
)
from .chord_dictionary import (
    ChordDef,
    ChordDictionaryLoadError,
    parse_csv,
    build_chord_map,
    load_chord_dictionary,
)
from .grading import GradingVerdict, grade
from .midi_input import is_note_on, note_on_pitch_class
from .quiz_state import QuizState, Event
from .hal_protocol import (
    ChordResourceHAL,
    MidiInputHAL,
    DisplayHAL,
    QuizPort,
)
from .resources import PackageResourceHAL, FileResourceHAL
from .chord_quiz_app import ChordQuizApp

__all__ = [
    # Pitch classes
    "LETTER_TO_PC",
    "CANONICAL_NOTES",
    "note_to_pc",
    "pc_to_canonical",
    "normalize_notes",
    "pcs_to_notes",
    # Dictionary
    "ChordDef",
    "ChordDictionaryLoadError",
    "parse_csv",
    "build_chord_map",
    "load_chord_dictionary",
    # Grading
    "GradingVerdict",
    "grade",
    # MIDI
    "is_note_on",
    "note_on_pitch_class",
    # Quiz State
    "QuizState",
    "Event",
    # HAL Protocol
    "ChordResourceHAL",
    "MidiInputHAL",
    "DisplayHAL",
    "QuizPort",
    "PackageResourceHAL",
    "FileResourceHAL",
    # Application
    "ChordQuizApp",
]
