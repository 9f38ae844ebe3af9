"""
Web front end for the Chord Quiz, served with microdot.

The browser draws the keyboard grid and answer panel from /api/state and
forwards Web MIDI messages over the /ws/midi WebSocket.

Usage: python src/plat_web/quiz_server.py [chord_dictionary.csv]
"""
import json
import sys
from typing import Any, Dict

from microdot import Microdot
from microdot.websocket import with_websocket

from hal_web import create_web_quiz_port

from chord_quiz import ChordQuizApp
from chord_quiz.constants import KeyboardMode, MidiStatus, Server
from chord_quiz.logger_config import logger

VALID_MIDI_STATUSES = [
    MidiStatus.NOT_CONNECTED,
    MidiStatus.CONNECTED,
    MidiStatus.NOT_SUPPORTED,
    MidiStatus.CONNECTION_FAILED,
]


def chord_to_json(chord) -> Dict[str, Any]:
    return {
        "symbol": chord.symbol,
        "notes_spelled": list(chord.notes_spelled),
        "notes_neutral": list(chord.notes_neutral),
        "omit_spelled": list(chord.omit_spelled),
        "omit_neutral": list(chord.omit_neutral),
        "notes_neutral_pc": list(chord.notes_neutral_pc),
        "omit_neutral_pc": list(chord.omit_neutral_pc),
    }


def state_snapshot(quiz_app: ChordQuizApp) -> Dict[str, Any]:
    """Display data plus the web display's banner and revision."""
    display = quiz_app.hw.display
    data = quiz_app.state.get_display_data()
    data["banner"] = display.banner
    data["revision"] = display.revision
    return data


def handle_ws_message(quiz_app: ChordQuizApp, message: str) -> Dict[str, Any]:
    """
    Apply one WebSocket message from the browser.

    Accepted payloads:
        {"connect": true, "supported": bool}   browser requested MIDI access
        {"midiStatus": "connection failed"}     browser-side status change
        {"midi": [status, note, velocity]}      raw MIDI message

    Returns:
        State snapshot, or {"error": ...} for a malformed payload
    """
    try:
        data = json.loads(message)
        if not isinstance(data, dict):
            raise ValueError("Expected a JSON object")

        if data.get("connect"):
            quiz_app.hw.midi_input.supported = bool(data.get("supported", True))
            quiz_app.connect_midi()

        if "midiStatus" in data:
            status = data["midiStatus"]
            if status not in VALID_MIDI_STATUSES:
                raise ValueError("Unknown MIDI status: " + str(status))
            quiz_app.state.set_midi_status(status)

        if "midi" in data:
            quiz_app.hw.midi_input.feed(data["midi"])

    except (ValueError, TypeError, OverflowError) as e:
        logger.warning("Ignored WebSocket payload: %s", e)
        return {"error": str(e)}

    quiz_app.update()
    return state_snapshot(quiz_app)


def _json_body(request) -> Dict[str, Any]:
    data = request.json
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")
    return data


def create_app(quiz_app: ChordQuizApp) -> Microdot:
    """
    Build the microdot application around a loaded ChordQuizApp.

    Args:
        quiz_app: ChordQuizApp whose port was made by create_web_quiz_port()
    """
    app = Microdot()

    @app.errorhandler(ValueError)
    @app.errorhandler(KeyError)
    @app.errorhandler(TypeError)
    @app.errorhandler(OverflowError)
    async def bad_request(request, exception):
        return {"error": str(exception)}, 400

    @app.get("/api/chords")
    async def chords(request):
        return {"chords": [chord_to_json(chord) for chord in quiz_app.state.chord_map.values()]}

    @app.get("/api/state")
    async def state(request):
        return state_snapshot(quiz_app)

    @app.post("/api/target")
    async def target(request):
        data = _json_body(request)
        quiz_app.state.set_target(str(data["symbol"]))
        quiz_app.update()
        return state_snapshot(quiz_app)

    @app.post("/api/toggle")
    async def toggle(request):
        data = _json_body(request)
        quiz_app.state.toggle_note(int(data["pc"]), data.get("target", KeyboardMode.INPUT))
        quiz_app.update()
        return state_snapshot(quiz_app)

    @app.post("/api/keyboard")
    async def keyboard(request):
        data = _json_body(request)
        if "mode" in data:
            quiz_app.state.set_keyboard_mode(data["mode"])
        if "open" in data:
            if data["open"]:
                quiz_app.state.open_keyboard()
            else:
                quiz_app.state.close_keyboard()
        if "pc" in data:
            quiz_app.state.toggle_from_keyboard(int(data["pc"]))
        quiz_app.update()
        return state_snapshot(quiz_app)

    @app.post("/api/answer")
    async def answer(request):
        quiz_app.state.answer()
        quiz_app.update()
        return state_snapshot(quiz_app)

    @app.post("/api/reload")
    async def reload(request):
        if not quiz_app.reload_dictionary():
            return state_snapshot(quiz_app), 503
        return state_snapshot(quiz_app)

    @app.route("/ws/midi")
    @with_websocket
    async def midi_socket(request, ws):
        """WebSocket carrying Web MIDI messages from the browser"""
        while True:
            message = await ws.receive()
            await ws.send(json.dumps(handle_ws_message(quiz_app, message)))

    return app


def main():
    csv_path = sys.argv[1] if len(sys.argv) > 1 else None
    quiz_app = ChordQuizApp(create_web_quiz_port(csv_path))
    quiz_app.load_dictionary()

    app = create_app(quiz_app)
    print("Starting Chord Quiz server on port " + str(Server.PORT) + "...")
    try:
        app.run(host=Server.HOST, port=Server.PORT, debug=Server.DEBUG)
    except KeyboardInterrupt:
        print("Server stopped")


if __name__ == "__main__":
    main()
