"""
MIDI input decoding - platform independent.
Only note-on matters; octave, channel and velocity amount are discarded.
"""
from .constants import Midi, Music


def is_note_on(data):
    """True for a note-on message with non-zero velocity on any channel."""
    if data is None or len(data) < Midi.NOTE_ON_LENGTH:
        return False
    return (data[0] & Midi.STATUS_MASK) == Midi.NOTE_ON and data[2] > Midi.VELOCITY_MIN


def note_on_pitch_class(data):
    """
    Get the pitch class carried by a raw note-on message.

    Args:
        data: Raw MIDI bytes, e.g. [0x90, 60, 100]

    Returns:
        Pitch class 0-11, or None if data is not a sounding note-on
    """
    if not is_note_on(data):
        return None
    return data[1] % Music.NOTES_PER_OCTAVE
