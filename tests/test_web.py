import pytest
from fastapi.testclient import TestClient

from web.app import app


@pytest.fixture
def client():
    return TestClient(app)


def _new_game(client, **body):
    resp = client.post("/api/sessions", json={"bot_depth": 1, **body})
    assert resp.status_code == 200
    return resp.json()


def _click(client, session_id, square, color=None):
    resp = client.post(
        f"/api/sessions/{session_id}/click", json={"square": square, "color": color}
    )
    assert resp.status_code == 200
    return resp.json()


def test_index_page(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "chessBoard" in resp.text


def test_new_bot_game(client):
    state = _new_game(client)
    assert state["mode"] == "bot"
    assert state["turn"] == "white"
    assert state["status"] == "White to move"
    assert state["board"][7][4] == "♔"
    assert state["clock"]["white"] == "10:00"
    assert state["clock"]["running"] is True
    assert state["bot_to_move"] is False
    assert state["game_over"] is False


def test_click_then_bot_reply(client):
    state = _new_game(client)
    sid = state["session_id"]

    state = _click(client, sid, "e2")
    assert state["selected"] == "e2"
    assert state["targets"] == {"e3": "move", "e4": "move"}

    state = _click(client, sid, "E4")
    assert state["last_move"] == "e2e4"
    assert state["bot_to_move"] is True

    resp = client.post(f"/api/sessions/{sid}/bot-move")
    assert resp.status_code == 200
    state = resp.json()
    assert state["turn"] == "white"
    assert state["last_move"] != "e2e4"

    resp = client.post(f"/api/sessions/{sid}/bot-move")
    assert resp.status_code == 409

    state = client.post(f"/api/sessions/{sid}/undo").json()
    assert state["last_move"] is None
    assert client.get(f"/api/sessions/{sid}").json()["fen"] == state["fen"]


def test_tick_and_reset(client):
    sid = _new_game(client, mode="local")["session_id"]
    state = client.post(f"/api/sessions/{sid}/tick", json={"seconds": 65}).json()
    assert state["clock"]["white"] == "8:55"
    assert state["clock"]["white_seconds"] == 535

    state = client.post(f"/api/sessions/{sid}/reset").json()
    assert state["clock"]["white_seconds"] == 600


def test_bad_requests(client):
    assert client.get("/api/sessions/missing").status_code == 404
    assert client.post("/api/sessions", json={"mode": "online"}).status_code == 422
    assert client.post("/api/sessions", json={"player_color": "red"}).status_code == 422
    assert client.post("/api/sessions", json={"bot_strategy": "oracle"}).status_code == 422

    sid = _new_game(client)["session_id"]
    resp = client.post(f"/api/sessions/{sid}/click", json={"square": "i9"})
    assert resp.status_code == 422


def test_depth_is_clamped(client):
    assert client.post("/api/sessions", json={"bot_depth": 99}).status_code == 200


def test_room_flow(client):
    room = client.post("/api/rooms").json()
    code, sid = room["code"], room["session_id"]
    assert room["color"] == "white"
    assert client.get(f"/api/rooms/{code}").json()["opponent_joined"] is False

    # The host waits for an opponent before moving.
    _click(client, sid, "e2", color="white")
    waiting = _click(client, sid, "e4", color="white")
    assert waiting["last_move"] is None
    assert waiting["status"] == "Waiting for opponent..."
    assert waiting["clock"]["running"] is False

    joined = client.post(f"/api/rooms/{code}/join").json()
    assert joined["color"] == "black"
    assert joined["session_id"] == sid
    assert client.get(f"/api/rooms/{code}").json()["opponent_joined"] is True
    assert client.post(f"/api/rooms/{code}/join").status_code == 409

    # Black cannot move on white's turn.
    assert _click(client, sid, "e7", color="black")["selected"] is None
    _click(client, sid, "e2", color="white")
    state = _click(client, sid, "e4", color="white")
    assert state["turn"] == "black"
    assert state["bot_to_move"] is False


def test_unknown_room(client):
    assert client.get("/api/rooms/ZZZZZZ").status_code == 404
    assert client.post("/api/rooms/ZZZZZZ/join").status_code == 404


def test_end_session(client):
    sid = _new_game(client)["session_id"]
    assert client.delete(f"/api/sessions/{sid}").status_code == 204
    assert client.get(f"/api/sessions/{sid}").status_code == 404
    assert client.delete(f"/api/sessions/{sid}").status_code == 404


def test_end_session_closes_room(client):
    room = client.post("/api/rooms").json()
    code, sid = room["code"], room["session_id"]
    assert client.delete(f"/api/sessions/{sid}").status_code == 204
    assert client.get(f"/api/rooms/{code}").status_code == 404
    assert client.post(f"/api/rooms/{code}/join").status_code == 404
