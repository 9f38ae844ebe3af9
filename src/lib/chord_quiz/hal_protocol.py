"""
Hardware Abstraction Layer Protocol Definitions.
These are abstract base classes that each platform must implement.

This allows the same quiz code to run on:
- Desktop Python with a USB MIDI controller and a console
- A web server driven by a browser keyboard and Web MIDI
- Tests with mock implementations
"""


class ChordResourceHAL:
    """Abstract interface for the chord dictionary resource."""

    def fetch_text(self):
        """
        Fetch the full text of the chord dictionary.

        Returns:
            Resource text (header line plus one chord per line)

        Raises:
            ChordDictionaryLoadError: if the resource is unavailable
        """
        raise NotImplementedError


class MidiInputHAL:
    """Abstract interface for MIDI input devices."""

    def is_supported(self):
        """
        Check whether MIDI input is available on this platform.

        Returns:
            True if open() can be attempted
        """
        raise NotImplementedError

    def open(self):
        """
        Start listening on all available inputs.

        Raises:
            OSError: if the devices could not be opened
        """
        raise NotImplementedError

    def poll(self):
        """
        Collect messages received since the last call.

        Returns:
            List of raw messages, each a list of byte values
        """
        raise NotImplementedError

    def close(self):
        """Stop listening and release the devices."""
        raise NotImplementedError


class DisplayHAL:
    """Abstract interface for rendering quiz state."""

    def show_loading(self):
        """Show that the chord dictionary is loading."""
        raise NotImplementedError

    def show_error(self, message):
        """
        Show a load error banner.

        Args:
            message: Error text, or None to clear the banner
        """
        raise NotImplementedError

    def show_target(self, symbol, suggestions):
        """
        Display the chord to be answered.

        Args:
            symbol: Chord symbol (e.g., "Cm7")
            suggestions: Note names the chord lists as commonly omitted
        """
        raise NotImplementedError

    def show_selection(self, input_notes, omitted_notes):
        """
        Display the current selections.

        Args:
            input_notes: Note names entered as the answer, ascending
            omitted_notes: Note names marked as omitted, ascending
        """
        raise NotImplementedError

    def show_keyboard(self, is_open, mode):
        """
        Display the keyboard interface state.

        Args:
            is_open: Whether the keyboard is shown
            mode: KeyboardMode the keys toggle into
        """
        raise NotImplementedError

    def show_verdict(self, verdict, chord):
        """
        Display the graded answer.

        Args:
            verdict: GradingVerdict, or None to clear the answer panel
            chord: ChordDef that was graded against
        """
        raise NotImplementedError

    def show_midi_status(self, status):
        """
        Display the MIDI connection status.

        Args:
            status: MidiStatus string
        """
        raise NotImplementedError

    def update(self):
        """Push changes to the screen."""
        raise NotImplementedError


class QuizPort:
    """
    Complete platform port interface.
    A platform provides an instance of this with all HAL implementations.
    """

    def __init__(self, resource, midi_input, display):
        """
        Args:
            resource: ChordResourceHAL implementation
            midi_input: MidiInputHAL implementation
            display: DisplayHAL implementation
        """
        self.resource = resource
        self.midi_input = midi_input
        self.display = display

    def update_outputs(self):
        """Push all output changes."""
        self.display.update()
