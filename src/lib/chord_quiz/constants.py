"""
Constants for the Chord Quiz application.
All magic strings and numbers are defined here for easy maintenance.
"""


# ============================================================================
# KEYBOARD MODES
# ============================================================================
class KeyboardMode:
    """Which selection set the on-screen keyboard toggles into."""
    INPUT = "input"
    OMITTED = "omitted"

    ALL = [INPUT, OMITTED]


# ============================================================================
# MIDI CONNECTION STATUS
# ============================================================================
class MidiStatus:
    """Status strings shown next to the MIDI connect button."""
    NOT_CONNECTED = "not connected"
    CONNECTED = "connected"
    NOT_SUPPORTED = "MIDI not supported"
    CONNECTION_FAILED = "connection failed"


# ============================================================================
# MIDI CONSTANTS
# ============================================================================
class Midi:
    """MIDI-related constants."""
    STATUS_MASK = 0xF0
    NOTE_ON = 0x90

    # status, note, velocity
    NOTE_ON_LENGTH = 3

    VELOCITY_MIN = 0


# ============================================================================
# MUSIC CONSTANTS
# ============================================================================
class Music:
    """Music theory constants."""
    NOTES_PER_OCTAVE = 12
    SHARP = "#"
    FLAT = "b"


# ============================================================================
# CHORD DICTIONARY FORMAT
# ============================================================================
class CsvFormat:
    """Layout of the chord dictionary resource."""
    FIELD_DELIMITER = ","
    NOTE_DELIMITER = " "

    # Columns 1 and 2 (root, quality) are present but not read
    SYMBOL = 0
    NOTES_SPELLED = 3
    NOTES_NEUTRAL = 4
    OMIT_SPELLED = 5
    OMIT_NEUTRAL = 6
    MIN_FIELDS = 7

    HEADER = "symbol,root,quality,notes_spelled,notes_neutral,omit_spelled,omit_neutral"


# ============================================================================
# QUIZ DEFAULTS
# ============================================================================
class Quiz:
    """Quiz defaults."""
    DEFAULT_TARGET = "Cm7"

    # Bundled resource inside the chord_quiz package
    RESOURCE_PACKAGE = "chord_quiz"
    RESOURCE_NAME = "data/chord_dictionary.csv"
    RESOURCE_ENCODING = "utf-8"

    EMPTY_DICTIONARY_MESSAGE = "Chord dictionary is empty or invalid"
    LOAD_FAILED_PREFIX = "Failed to load chord dictionary: "

    # Placeholder for empty note lists on the answer panel
    EMPTY_FIELD = "-"


# ============================================================================
# WEB SERVER
# ============================================================================
class Server:
    """Web front end settings."""
    HOST = "0.0.0.0"
    PORT = 5177
    DEBUG = False
