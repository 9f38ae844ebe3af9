"""
Quiz state management - platform independent.
Owns the chord dictionary, the target chord and the user's selections,
and announces every change through events.
"""
from .constants import KeyboardMode, MidiStatus, Music, Quiz
from .grading import grade
from .midi_input import note_on_pitch_class
from .pitch_class import pc_to_canonical, pcs_to_notes


class Event:
    """Event type constants for state changes."""

    LOADING_STARTED = "loading_started"
    DICTIONARY_LOADED = "dictionary_loaded"
    LOAD_FAILED = "load_failed"
    TARGET_CHANGED = "target_changed"
    SELECTION_CHANGED = "selection_changed"
    KEYBOARD_CHANGED = "keyboard_changed"
    ANSWER_GRADED = "answer_graded"
    MIDI_STATUS_CHANGED = "midi_status_changed"


class QuizState:
    """
    Centralized quiz state container.
    All mutable state lives here and is only changed through its methods.
    Selections are frozensets replaced on every change, never mutated.
    """

    def __init__(self, target_symbol=Quiz.DEFAULT_TARGET):
        """
        Args:
            target_symbol: Chord symbol to quiz first
        """
        # Dictionary
        self.chords = []
        self.chord_map = {}
        self.is_loading = False
        self.load_error = None

        # Current question
        self.target_symbol = target_symbol
        self.input_pcs = frozenset()
        self.omitted_pcs = frozenset()
        self.verdict = None

        # Interaction surface
        self.keyboard_open = False
        self.keyboard_mode = KeyboardMode.INPUT
        self.midi_status = MidiStatus.NOT_CONNECTED

        # Event subscribers
        self._subscribers = {}

    def subscribe(self, event_type, callback):
        """
        Subscribe to an event type.

        Args:
            event_type: Event type constant from Event class
            callback: Function to call when event occurs, receives data dict
        """
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        self._subscribers[event_type].append(callback)

    def unsubscribe(self, event_type, callback):
        """Remove a callback from an event type."""
        if event_type in self._subscribers:
            try:
                self._subscribers[event_type].remove(callback)
            except ValueError:
                pass

    def emit(self, event_type, data=None):
        """Emit an event to all subscribers."""
        if event_type in self._subscribers:
            for callback in self._subscribers[event_type]:
                callback(data)

    # ------------------------------------------------------------------
    # Dictionary load cycle
    # ------------------------------------------------------------------

    def begin_load(self):
        self.is_loading = True
        self.load_error = None
        self.emit(Event.LOADING_STARTED)

    def finish_load(self, chords, chord_map):
        """
        Replace the dictionary with a freshly loaded one.
        Any previous verdict belonged to the old dictionary and is dropped.

        If the current target symbol is not in the new dictionary, the
        first chord in file order becomes the target.
        """
        self.chords = list(chords)
        self.chord_map = dict(chord_map)
        self.is_loading = False
        self.load_error = None
        self.verdict = None
        self.emit(Event.DICTIONARY_LOADED, {"count": len(self.chord_map)})

        if self.target_symbol not in self.chord_map and self.chords:
            self.set_target(self.chords[0].symbol)

    def fail_load(self, message):
        """Record a load failure and drop the verdict. Grading is unavailable until a reload succeeds."""
        self.chords = []
        self.chord_map = {}
        self.is_loading = False
        self.load_error = message
        self.verdict = None
        self.emit(Event.LOAD_FAILED, {"message": message})

    # ------------------------------------------------------------------
    # Target chord
    # ------------------------------------------------------------------

    @property
    def target_chord(self):
        """ChordDef for the target symbol, or None if unknown."""
        return self.chord_map.get(self.target_symbol)

    def set_target(self, symbol):
        """
        Change the chord being quizzed.

        A different symbol starts a new question: both selections and the
        previous verdict are cleared. Unknown symbols are accepted; answering
        them does nothing.
        """
        if symbol == self.target_symbol:
            return
        self.target_symbol = symbol
        self.input_pcs = frozenset()
        self.omitted_pcs = frozenset()
        self.verdict = None
        self.emit(
            Event.TARGET_CHANGED,
            {"symbol": symbol, "known": self.target_chord is not None},
        )
        self._emit_selection_changed()

    def omitted_suggestions(self):
        """Pitch classes the target chord lists as commonly omitted."""
        chord = self.target_chord
        if chord is None:
            return []
        return list(chord.omit_neutral_pc)

    # ------------------------------------------------------------------
    # Selections
    # ------------------------------------------------------------------

    def toggle_note(self, pc, target):
        """
        Toggle a pitch class in the input or omitted selection.

        Args:
            pc: Pitch class (any integer, reduced modulo 12)
            target: KeyboardMode.INPUT or KeyboardMode.OMITTED
        """
        if target not in KeyboardMode.ALL:
            raise ValueError("Unknown selection: " + str(target))

        pc = pc % Music.NOTES_PER_OCTAVE
        current = self.input_pcs if target == KeyboardMode.INPUT else self.omitted_pcs
        if pc in current:
            updated = current - {pc}
        else:
            updated = current | {pc}

        if target == KeyboardMode.INPUT:
            self.input_pcs = updated
        else:
            self.omitted_pcs = updated
        self._emit_selection_changed()

    def toggle_from_keyboard(self, pc):
        """Toggle a pitch class in whichever set the keyboard mode selects."""
        self.toggle_note(pc, self.keyboard_mode)

    def handle_midi_message(self, data):
        """
        Route a raw MIDI message. Sounding note-ons toggle the input selection.

        Returns:
            The toggled pitch class, or None if the message was ignored
        """
        pc = note_on_pitch_class(data)
        if pc is not None:
            self.toggle_note(pc, KeyboardMode.INPUT)
        return pc

    @property
    def input_notes(self):
        return pcs_to_notes(self.input_pcs)

    @property
    def omitted_notes(self):
        return pcs_to_notes(self.omitted_pcs)

    def _emit_selection_changed(self):
        self.emit(
            Event.SELECTION_CHANGED,
            {"input": self.input_notes, "omitted": self.omitted_notes},
        )

    # ------------------------------------------------------------------
    # Keyboard interface
    # ------------------------------------------------------------------

    def open_keyboard(self):
        self.keyboard_open = True
        self._emit_keyboard_changed()

    def close_keyboard(self):
        self.keyboard_open = False
        self._emit_keyboard_changed()

    def set_keyboard_mode(self, mode):
        """Set which selection the keyboard toggles into."""
        if mode not in KeyboardMode.ALL:
            raise ValueError("Unknown keyboard mode: " + str(mode))
        self.keyboard_mode = mode
        self._emit_keyboard_changed()

    def _emit_keyboard_changed(self):
        self.emit(
            Event.KEYBOARD_CHANGED,
            {"open": self.keyboard_open, "mode": self.keyboard_mode},
        )

    # ------------------------------------------------------------------
    # Grading
    # ------------------------------------------------------------------

    def answer(self):
        """
        Grade the current selections against the target chord.

        Returns:
            GradingVerdict, or None if there is no target chord
        """
        chord = self.target_chord
        if chord is None:
            return None

        self.verdict = grade(
            chord,
            self.input_pcs,
            self.omitted_pcs,
            user_notes=self.input_notes,
        )
        self.emit(Event.ANSWER_GRADED, {"verdict": self.verdict, "chord": chord})
        return self.verdict

    # ------------------------------------------------------------------
    # MIDI connection
    # ------------------------------------------------------------------

    def set_midi_status(self, status):
        self.midi_status = status
        self.emit(Event.MIDI_STATUS_CHANGED, {"status": status})

    def get_display_data(self):
        """
        Get data needed for display rendering.

        Returns:
            Dict with display information (JSON serializable)
        """
        verdict_info = None
        chord = self.target_chord
        if self.verdict is not None and chord is not None:
            verdict_info = {
                "is_correct": self.verdict.is_correct,
                "user_notes": list(self.verdict.user_notes),
                "extra": self.verdict.extra_notes,
                "missing": self.verdict.missing_notes,
                "chord": {
                    "notes_spelled": list(chord.notes_spelled),
                    "notes_neutral": list(chord.notes_neutral),
                    "omit_spelled": list(chord.omit_spelled),
                    "omit_neutral": list(chord.omit_neutral),
                },
            }

        return {
            "is_loading": self.is_loading,
            "load_error": self.load_error,
            "target_symbol": self.target_symbol,
            "target_known": chord is not None,
            "input_notes": self.input_notes,
            "omitted_notes": self.omitted_notes,
            "omitted_suggestions": [
                {"pc": pc, "note": pc_to_canonical(pc), "selected": pc in self.omitted_pcs}
                for pc in self.omitted_suggestions()
            ],
            "keyboard_open": self.keyboard_open,
            "keyboard_mode": self.keyboard_mode,
            "midi_status": self.midi_status,
            "verdict": verdict_info,
        }
