"""
Mock HAL implementations for testing the Chord Quiz.
These mocks record all platform interactions for verification in tests.
"""
from chord_quiz.chord_dictionary import ChordDictionaryLoadError
from chord_quiz.hal_protocol import (
    ChordResourceHAL,
    MidiInputHAL,
    DisplayHAL,
    QuizPort,
)

MOCK_CSV = """symbol,root,quality,notes_spelled,notes_neutral,omit_spelled,omit_neutral
Cm7,C,m7,C Eb G Bb,C Eb G Bb,G,G
G7,G,7,G B D F,G B D F,D,D
Bdim,B,dim,B D F,B D F,,
"""


class MockResourceHAL(ChordResourceHAL):
    """Mock resource returning fixed text, or failing on demand."""

    def __init__(self, text=MOCK_CSV, error=None):
        self.text = text
        self.error = error
        self.fetch_count = 0

    def fetch_text(self):
        self.fetch_count += 1
        if self.error:
            raise ChordDictionaryLoadError(self.error)
        return self.text


class MockMidiInputHAL(MidiInputHAL):
    """Mock MIDI input that can be programmatically fed."""

    def __init__(self, supported=True, open_error=None):
        self.supported = supported
        self.open_error = open_error
        self.is_open = False
        self._queue = []

    def simulate_message(self, data):
        """Simulate a raw MIDI message arriving."""
        self._queue.append(list(data))

    def simulate_note_on(self, note, velocity=100, channel=0):
        self.simulate_message([0x90 | channel, note, velocity])

    def is_supported(self):
        return self.supported

    def open(self):
        if self.open_error:
            raise OSError(self.open_error)
        self.is_open = True

    def poll(self):
        messages = self._queue
        self._queue = []
        return messages

    def close(self):
        self.is_open = False


class MockDisplayHAL(DisplayHAL):
    """Mock display that records all display operations."""

    def __init__(self):
        self.calls = []
        self.loading = False
        self.error = None
        self.target = ""
        self.suggestions = []
        self.input_notes = []
        self.omitted_notes = []
        self.keyboard = (False, "input")
        self.verdict = None
        self.midi_status = ""

    def show_loading(self):
        self.calls.append(("show_loading",))
        self.loading = True

    def show_error(self, message):
        self.calls.append(("show_error", message))
        self.error = message
        self.loading = False

    def show_target(self, symbol, suggestions):
        self.calls.append(("show_target", symbol, list(suggestions)))
        self.target = symbol
        self.suggestions = list(suggestions)
        self.loading = False

    def show_selection(self, input_notes, omitted_notes):
        self.calls.append(("show_selection", list(input_notes), list(omitted_notes)))
        self.input_notes = list(input_notes)
        self.omitted_notes = list(omitted_notes)

    def show_keyboard(self, is_open, mode):
        self.calls.append(("show_keyboard", is_open, mode))
        self.keyboard = (is_open, mode)

    def show_verdict(self, verdict, chord):
        self.calls.append(("show_verdict", verdict, chord))
        self.verdict = verdict

    def show_midi_status(self, status):
        self.calls.append(("show_midi_status", status))
        self.midi_status = status

    def update(self):
        self.calls.append(("update",))


def create_mock_quiz_port(text=MOCK_CSV, error=None):
    """
    Factory function to create a mock quiz port for testing.

    Returns:
        Tuple of (QuizPort, dict of individual mocks)
    """
    resource = MockResourceHAL(text=text, error=error)
    midi_input = MockMidiInputHAL()
    display = MockDisplayHAL()

    port = QuizPort(resource, midi_input, display)

    mocks = {
        "resource": resource,
        "midi_input": midi_input,
        "display": display,
    }

    return port, mocks
