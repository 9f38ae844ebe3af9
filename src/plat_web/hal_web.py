# Web HAL implementations: the browser renders, so these only hold state
from typing import List, Optional

from chord_quiz.hal_protocol import DisplayHAL, MidiInputHAL, QuizPort
from chord_quiz.resources import FileResourceHAL, PackageResourceHAL


class WebMidiInputHAL(MidiInputHAL):
    """
    MIDI input bridged from the browser's Web MIDI API.
    The browser forwards raw messages over a WebSocket; they queue here
    until the app polls them.
    """

    def __init__(self):
        self.supported = True
        self.is_open = False
        self._pending: List[List[int]] = []

    def feed(self, data: List[int]) -> None:
        """Queue one raw message received from the browser."""
        if self.is_open:
            self._pending.append([int(value) for value in data])

    def is_supported(self) -> bool:
        return self.supported

    def open(self) -> None:
        self.is_open = True

    def poll(self) -> List[List[int]]:
        pending = self._pending
        self._pending = []
        return pending

    def close(self) -> None:
        self.is_open = False
        self._pending = []


class WebDisplayHAL(DisplayHAL):
    """
    Tracks the banner text and a revision counter for polling clients.
    Everything else the browser reads from QuizState.get_display_data().
    """

    def __init__(self):
        self.banner: Optional[str] = None
        self.revision = 0
        self._changed = False

    def _touch(self) -> None:
        self._changed = True

    def show_loading(self) -> None:
        self.banner = "Loading chord dictionary..."
        self._touch()

    def show_error(self, message: Optional[str]) -> None:
        self.banner = "Error: " + message if message else None
        self._touch()

    def show_target(self, symbol, suggestions) -> None:
        self._touch()

    def show_selection(self, input_notes, omitted_notes) -> None:
        self._touch()

    def show_keyboard(self, is_open, mode) -> None:
        self._touch()

    def show_verdict(self, verdict, chord) -> None:
        self._touch()

    def show_midi_status(self, status) -> None:
        self._touch()

    def update(self) -> None:
        if self._changed:
            self.revision += 1
            self._changed = False


def create_web_quiz_port(csv_path: Optional[str] = None) -> QuizPort:
    """Factory function to create the web port."""
    if csv_path:
        resource = FileResourceHAL(csv_path)
    else:
        resource = PackageResourceHAL()
    return QuizPort(resource, WebMidiInputHAL(), WebDisplayHAL())
