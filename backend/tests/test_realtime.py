import pytest
from starlette.websockets import WebSocketDisconnect

from luxe_estate.services.realtime import NOTIFICATION_EVENT, ConnectionManager


class FakeSocket:
    def __init__(self, broken=False):
        self.broken = broken
        self.sent = []

    async def send_json(self, data):
        if self.broken:
            raise RuntimeError("socket closed")
        self.sent.append(data)


class TestConnectionManager:
    @pytest.mark.anyio
    async def test_emit_reaches_room_members_only(self):
        hub = ConnectionManager()
        alice, bob = FakeSocket(), FakeSocket()
        hub.join("1", alice)
        hub.join("2", bob)

        delivered = await hub.emit("1", NOTIFICATION_EVENT, {"title": "Hi"})
        assert delivered == 1
        assert alice.sent == [{"event": NOTIFICATION_EVENT, "data": {"title": "Hi"}}]
        assert bob.sent == []

    @pytest.mark.anyio
    async def test_dead_sockets_are_dropped(self):
        hub = ConnectionManager()
        dead, live = FakeSocket(broken=True), FakeSocket()
        hub.join("1", dead)
        hub.join("1", live)

        assert await hub.emit("1", NOTIFICATION_EVENT, {}) == 1
        assert hub.listeners("1") == [live]

    def test_leave_all_empties_rooms(self):
        hub = ConnectionManager()
        socket = FakeSocket()
        hub.join("1", socket)
        hub.join("admin", socket)
        hub.leave_all(socket)
        assert not hub.has_listeners("1")
        assert not hub.has_listeners("admin")

    def test_emit_nowait_without_loop_is_a_no_op(self):
        hub = ConnectionManager()
        hub.join("1", FakeSocket())
        assert hub.emit_nowait("1", NOTIFICATION_EVENT, {}) is False

    def test_emit_nowait_without_listeners(self):
        assert ConnectionManager().emit_nowait("1", NOTIFICATION_EVENT, {}) is False


class TestSocketEndpoint:
    def test_rejects_missing_token(self, client):
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/api/ws"):
                pass

    def test_rejects_invalid_token(self, client):
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect("/api/ws?token=not-a-jwt"):
                pass

    def test_rejects_deleted_user(self, client, make_user, auth_headers):
        gone = make_user("Gone", "gone@example.com", is_deleted=True)
        token = auth_headers(gone)["Authorization"].split()[1]
        with pytest.raises(WebSocketDisconnect):
            with client.websocket_connect(f"/api/ws?token={token}"):
                pass

    def test_live_notification_push(self, client, admin, agent, auth_headers):
        token = auth_headers(admin)["Authorization"].split()[1]
        with client.websocket_connect(f"/api/ws?token={token}") as ws:
            ws.send_json({"event": "join_role", "data": "admin"})
            # A rejected join proves the socket is registered and listening.
            ws.send_json({"event": "join_room", "data": "someone-else"})
            assert ws.receive_json()["event"] == "error"
            client.post(
                "/api/properties",
                json={"title": "Live Push", "description": "d", "price": 1, "propertyType": "house"},
                headers=auth_headers(agent),
            )
            message = ws.receive_json()

        assert message["event"] == NOTIFICATION_EVENT
        assert message["data"]["title"] == "New Property Submission"
        assert message["data"]["userId"] == admin.id

    def test_cannot_join_another_users_room(self, client, buyer, agent, auth_headers):
        token = auth_headers(buyer)["Authorization"].split()[1]
        with client.websocket_connect(f"/api/ws?token={token}") as ws:
            ws.send_json({"event": "join_room", "data": str(agent.id)})
            reply = ws.receive_json()
        assert reply["event"] == "error"

    def test_malformed_frame_keeps_socket_open(self, client, buyer, auth_headers):
        token = auth_headers(buyer)["Authorization"].split()[1]
        with client.websocket_connect(f"/api/ws?token={token}") as ws:
            ws.send_text("not json")
            assert ws.receive_json() == {"event": "error", "data": "Malformed message"}
            ws.send_json({"event": "join_room", "data": str(buyer.id)})
            ws.send_json({"event": "join_role", "data": "admin"})
            assert ws.receive_json()["event"] == "error"
