#!/usr/bin/env python3
"""
Desktop entry point for the Chord Quiz.

Usage: python src/plat_computer/chord_quiz_main.py [chord_dictionary.csv]

Play notes on a USB MIDI controller, or type commands:
    <note>        toggle a note in the keyboard's current set (e.g. "Eb")
    m             switch the keyboard between input and omitted notes
    t <symbol>    quiz a different chord (e.g. "t G7")
    a             answer
    r             reload the chord dictionary
    q             quit
An empty line just picks up pending MIDI notes.
"""
import sys

from hal_computer import create_computer_quiz_port, list_inputs

from chord_quiz import ChordQuizApp, note_to_pc
from chord_quiz.constants import KeyboardMode


def handle_command(app, line):
    """
    Apply one console command.

    Returns:
        False when the user asked to quit
    """
    command = line.strip()
    state = app.state

    if not command:
        return True
    if command == "q":
        return False
    if command == "a":
        if state.answer() is None:
            print("No chord to answer: " + state.target_symbol)
    elif command == "m":
        if state.keyboard_mode == KeyboardMode.INPUT:
            state.set_keyboard_mode(KeyboardMode.OMITTED)
        else:
            state.set_keyboard_mode(KeyboardMode.INPUT)
    elif command == "r":
        app.reload_dictionary()
    elif command.startswith("t "):
        state.set_target(command[2:].strip())
    else:
        state.toggle_from_keyboard(note_to_pc(command))
    return True


def main():
    print("Initializing Chord Quiz...")

    csv_path = sys.argv[1] if len(sys.argv) > 1 else None
    hardware = create_computer_quiz_port(csv_path)
    app = ChordQuizApp(hardware)

    if not app.load_dictionary():
        sys.exit(1)

    if hardware.midi_input.is_supported():
        list_inputs()
    app.connect_midi()
    app.state.open_keyboard()

    print("========================================")
    print("  CHORD QUIZ READY")
    print("========================================")
    print(__doc__.split("\n\n", 2)[2])
    print("========================================")

    try:
        running = True
        while running:
            app.update()
            running = handle_command(app, input("> "))
            app.update()
    except (KeyboardInterrupt, EOFError):
        print("\nShutting down...")
    finally:
        app.cleanup()
        print("Chord Quiz stopped.")


if __name__ == "__main__":
    main()
