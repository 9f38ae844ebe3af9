"""
Desktop HAL implementations for the Chord Quiz.
MIDI input via mido (USB MIDI controllers), output to the console.
"""
import mido

from chord_quiz.constants import Quiz
from chord_quiz.hal_protocol import DisplayHAL, MidiInputHAL, QuizPort
from chord_quiz.resources import FileResourceHAL, PackageResourceHAL


def list_inputs():
    """List all available MIDI input ports."""
    inputs = mido.get_input_names()
    if not inputs:
        print("No MIDI input ports found!")
        return []
    print("Available MIDI inputs:")
    for i, name in enumerate(inputs):
        print(f"  [{i}] {name}")
    return inputs


class MidoMidiInputHAL(MidiInputHAL):
    """Listens on every mido input port (or the named ones) by polling."""

    def __init__(self, port_names=None):
        """
        Args:
            port_names: Optional list of port names; all inputs if None
        """
        self.port_names = port_names
        self._ports = []

    def is_supported(self):
        # mido loads its backend lazily; a missing backend means no MIDI here
        try:
            mido.get_input_names()
        except ImportError:
            return False
        return True

    def open(self):
        names = self.port_names or mido.get_input_names()
        if not names:
            raise OSError("No MIDI input ports found")

        try:
            for name in names:
                self._ports.append(mido.open_input(name))
        except OSError:
            self.close()
            raise

    def poll(self):
        messages = []
        for port in self._ports:
            for message in port.iter_pending():
                messages.append(message.bytes())
        return messages

    def close(self):
        for port in self._ports:
            port.close()
        self._ports = []


class ConsoleDisplayHAL(DisplayHAL):
    """Renders quiz state as text, printing only when something changed."""

    def __init__(self):
        self.lines = {}
        self._dirty = False

    def _set(self, key, text):
        if self.lines.get(key) != text:
            self.lines[key] = text
            self._dirty = True

    def show_loading(self):
        self._set("status", "Loading chord dictionary...")

    def show_error(self, message):
        self._set("status", "Error: " + message if message else "")

    def show_target(self, symbol, suggestions):
        self._set("target", "Target: " + symbol)
        self._set(
            "suggestions",
            "Commonly omitted: " + (" ".join(suggestions) or "No suggested omissions"),
        )

    def show_selection(self, input_notes, omitted_notes):
        self._set("input", "Input chord: " + (" ".join(input_notes) or "Select notes"))
        self._set(
            "omitted",
            "Omitted selected: " + " ".join(omitted_notes) if omitted_notes else "",
        )

    def show_keyboard(self, is_open, mode):
        self._set("keyboard", "Keyboard adds to: " + mode)

    def show_verdict(self, verdict, chord):
        if verdict is None:
            self._set("verdict", "")
            return

        empty = Quiz.EMPTY_FIELD
        rows = [
            "Correct" if verdict.is_correct else "Incorrect",
            "  Spelled: " + (" ".join(chord.notes_spelled) or empty),
            "  Neutral: " + (" ".join(chord.notes_neutral) or empty),
            "  Commonly omitted (spelled): " + (" ".join(chord.omit_spelled) or empty),
            "  Commonly omitted (neutral): " + (" ".join(chord.omit_neutral) or empty),
            "  Input notes: " + (" ".join(verdict.user_notes) or empty),
            "  Extra notes: " + (" ".join(verdict.extra_notes) or empty),
            "  Missing notes: " + (" ".join(verdict.missing_notes) or empty),
        ]
        self._set("verdict", "\n".join(rows))

    def show_midi_status(self, status):
        self._set("midi", "MIDI: " + status)

    def update(self):
        if not self._dirty:
            return
        print("-" * 40)
        for text in self.lines.values():
            if text:
                print(text)
        self._dirty = False


def create_computer_quiz_port(csv_path=None, port_names=None):
    """
    Factory function to create the desktop port.

    Args:
        csv_path: Chord dictionary file; the bundled one if None
        port_names: MIDI input port names; all inputs if None
    """
    if csv_path:
        resource = FileResourceHAL(csv_path)
    else:
        resource = PackageResourceHAL()

    return QuizPort(resource, MidoMidiInputHAL(port_names), ConsoleDisplayHAL())
