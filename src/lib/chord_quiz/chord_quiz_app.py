"""
Main Chord Quiz Application.
Ties together the chord dictionary, quiz state and platform I/O.
Platform-independent - receives hardware through dependency injection.
"""
from .chord_dictionary import ChordDictionaryLoadError, load_chord_dictionary
from .constants import MidiStatus, Quiz
from .logger_config import logger
from .pitch_class import pc_to_canonical
from .quiz_state import Event, QuizState


class ChordQuizApp:
    """
    Main application class for the Chord Quiz.
    Platform-independent - receives hardware through dependency injection.
    """

    def __init__(self, hardware, target_symbol=Quiz.DEFAULT_TARGET):
        """
        Initialize the Chord Quiz.

        Args:
            hardware: QuizPort instance with all HAL implementations
            target_symbol: Chord symbol to quiz first
        """
        self.state = QuizState(target_symbol=target_symbol)

        # Hardware (injected)
        self.hw = hardware

        self._setup_event_handlers()

    def _setup_event_handlers(self):
        """Connect quiz state events to display actions."""
        display = self.hw.display

        def on_loading_started(data):
            display.show_error(None)
            display.show_loading()

        def on_dictionary_loaded(data):
            self._update_display()
            display.show_verdict(None, None)

        def on_load_failed(data):
            display.show_error(data["message"])
            display.show_verdict(None, None)

        def on_target_changed(data):
            display.show_target(self.state.target_symbol, self._suggestion_names())
            display.show_verdict(None, None)

        def on_selection_changed(data):
            display.show_selection(data["input"], data["omitted"])

        def on_keyboard_changed(data):
            display.show_keyboard(data["open"], data["mode"])

        def on_answer_graded(data):
            display.show_verdict(data["verdict"], data["chord"])

        def on_midi_status_changed(data):
            display.show_midi_status(data["status"])

        # Register handlers
        self.state.subscribe(Event.LOADING_STARTED, on_loading_started)
        self.state.subscribe(Event.DICTIONARY_LOADED, on_dictionary_loaded)
        self.state.subscribe(Event.LOAD_FAILED, on_load_failed)
        self.state.subscribe(Event.TARGET_CHANGED, on_target_changed)
        self.state.subscribe(Event.SELECTION_CHANGED, on_selection_changed)
        self.state.subscribe(Event.KEYBOARD_CHANGED, on_keyboard_changed)
        self.state.subscribe(Event.ANSWER_GRADED, on_answer_graded)
        self.state.subscribe(Event.MIDI_STATUS_CHANGED, on_midi_status_changed)

    def _suggestion_names(self):
        return [pc_to_canonical(pc) for pc in self.state.omitted_suggestions()]

    def _update_display(self):
        """Update display with current state."""
        display = self.hw.display
        display.show_error(self.state.load_error)
        display.show_target(self.state.target_symbol, self._suggestion_names())
        display.show_selection(self.state.input_notes, self.state.omitted_notes)
        display.show_keyboard(self.state.keyboard_open, self.state.keyboard_mode)
        display.show_midi_status(self.state.midi_status)

    def load_dictionary(self):
        """
        Fetch and parse the chord dictionary, replacing any loaded one.

        Returns:
            True if the dictionary loaded, False if the failure was reported
        """
        self.state.begin_load()
        try:
            chords, chord_map = load_chord_dictionary(self.hw.resource)
        except ChordDictionaryLoadError as e:
            logger.error("Chord dictionary load error: %s", e)
            self.state.fail_load(str(e))
            self.hw.update_outputs()
            return False

        self.state.finish_load(chords, chord_map)
        self.hw.update_outputs()
        return True

    def reload_dictionary(self):
        """Load the dictionary again; there is no automatic retry."""
        return self.load_dictionary()

    def connect_midi(self):
        """
        Start listening to MIDI inputs.

        Returns:
            The resulting MidiStatus string
        """
        midi_input = self.hw.midi_input
        if not midi_input.is_supported():
            self.state.set_midi_status(MidiStatus.NOT_SUPPORTED)
            return self.state.midi_status

        try:
            midi_input.open()
        except OSError as e:
            logger.error("MIDI connection error: %s", e)
            self.state.set_midi_status(MidiStatus.CONNECTION_FAILED)
            return self.state.midi_status

        logger.info("MIDI input connected")
        self.state.set_midi_status(MidiStatus.CONNECTED)
        return self.state.midi_status

    def handle_midi_message(self, data):
        """Route one raw MIDI message into the quiz."""
        return self.state.handle_midi_message(data)

    def update(self):
        """
        Main update loop - call this frequently.
        Drains pending MIDI input and pushes output changes.
        """
        if self.state.midi_status == MidiStatus.CONNECTED:
            for data in self.hw.midi_input.poll():
                self.state.handle_midi_message(data)

        self.hw.update_outputs()

    def cleanup(self):
        """Clean shutdown - release MIDI inputs and clear the display."""
        if self.state.midi_status == MidiStatus.CONNECTED:
            self.hw.midi_input.close()
            self.state.set_midi_status(MidiStatus.NOT_CONNECTED)

        self.hw.display.show_verdict(None, None)
        self.hw.display.update()
