"""
Tests for the desktop platform (console display, mido input, commands).

Run with: python -m pytest test
"""
import sys
from unittest import mock

sys.path.insert(0, "src/lib")
sys.path.insert(0, "src/plat_computer")

import hal_computer
from hal_computer import ConsoleDisplayHAL, MidoMidiInputHAL, create_computer_quiz_port
from chord_quiz_main import handle_command

from chord_quiz import ChordQuizApp, FileResourceHAL, PackageResourceHAL
from chord_quiz.constants import KeyboardMode

from mock_hal import create_mock_quiz_port


class FakePort:
    """Stands in for a mido input port."""

    def __init__(self, messages):
        self.messages = list(messages)
        self.closed = False

    def iter_pending(self):
        while self.messages:
            yield self.messages.pop(0)

    def close(self):
        self.closed = True


class TestMidoMidiInput:
    """Tests for the mido-backed MIDI input."""

    def test_open_without_ports(self):
        midi = MidoMidiInputHAL()
        with mock.patch.object(hal_computer.mido, "get_input_names", return_value=[]):
            try:
                midi.open()
                assert False, "expected OSError"
            except OSError:
                pass

    def test_poll_all_ports(self):
        note_on = hal_computer.mido.Message("note_on", channel=0, note=60, velocity=100)
        note_off = hal_computer.mido.Message("note_off", channel=1, note=64, velocity=0)
        ports = {"a": FakePort([note_on]), "b": FakePort([note_off])}

        midi = MidoMidiInputHAL()
        with mock.patch.object(hal_computer.mido, "get_input_names", return_value=["a", "b"]), \
                mock.patch.object(hal_computer.mido, "open_input", side_effect=lambda name: ports[name]):
            midi.open()

        assert midi.poll() == [[0x90, 60, 100], [0x81, 64, 0]]
        assert midi.poll() == []

        midi.close()
        assert ports["a"].closed and ports["b"].closed

    def test_open_failure_closes_opened_ports(self):
        opened = FakePort([])

        def open_input(name):
            if name == "broken":
                raise OSError("unknown port " + name)
            return opened

        midi = MidoMidiInputHAL(port_names=["good", "broken"])
        with mock.patch.object(hal_computer.mido, "open_input", side_effect=open_input):
            try:
                midi.open()
                assert False, "expected OSError"
            except OSError:
                pass
        assert opened.closed
        assert midi.poll() == []


class TestConsoleDisplay:
    """Tests for the console renderer."""

    def test_prints_only_on_change(self):
        display = ConsoleDisplayHAL()
        display.show_target("Cm7", ["G"])
        display.show_selection(["C", "Eb"], [])
        assert display.lines["target"] == "Target: Cm7"
        assert display.lines["suggestions"] == "Commonly omitted: G"
        assert display.lines["input"] == "Input chord: C Eb"
        assert display.lines["omitted"] == ""
        assert display._dirty

        display.update()
        assert not display._dirty

        display.show_target("Cm7", ["G"])
        assert not display._dirty

    def test_verdict_panel(self):
        port, mocks = create_mock_quiz_port()
        app = ChordQuizApp(port)
        app.load_dictionary()
        app.state.toggle_note(0, KeyboardMode.INPUT)
        app.state.toggle_note(2, KeyboardMode.INPUT)
        verdict = app.state.answer()

        display = ConsoleDisplayHAL()
        display.show_verdict(verdict, app.state.target_chord)
        rows = display.lines["verdict"].split("\n")
        assert rows[0] == "Incorrect"
        assert "  Extra notes: D" in rows
        assert "  Missing notes: Eb G Bb" in rows

        display.show_verdict(None, None)
        assert display.lines["verdict"] == ""

    def test_error_banner(self):
        display = ConsoleDisplayHAL()
        display.show_error("offline")
        assert display.lines["status"] == "Error: offline"
        display.show_error(None)
        assert display.lines["status"] == ""


class TestConsoleCommands:
    """Tests for the desktop command loop."""

    def test_factory(self):
        assert isinstance(create_computer_quiz_port().resource, PackageResourceHAL)
        assert isinstance(create_computer_quiz_port("chords.csv").resource, FileResourceHAL)

    def test_commands(self):
        port, mocks = create_mock_quiz_port()
        app = ChordQuizApp(port)
        app.load_dictionary()

        for command in ["C", "eb", "A#", ""]:
            assert handle_command(app, command)
        assert app.state.input_notes == ["C", "Eb", "Bb"]

        assert handle_command(app, "m")
        assert handle_command(app, "G")
        assert app.state.omitted_notes == ["G"]

        assert handle_command(app, "a")
        assert app.state.verdict.is_correct

        assert handle_command(app, "t G7")
        assert app.state.target_symbol == "G7"
        assert app.state.input_pcs == frozenset()

        assert handle_command(app, "r")
        assert mocks["resource"].fetch_count == 2

        assert not handle_command(app, "q")
