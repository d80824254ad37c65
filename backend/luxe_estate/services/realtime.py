import asyncio
import logging
import threading
from collections import defaultdict
from concurrent.futures import Future
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)

NOTIFICATION_EVENT = "receive_notification"


class ConnectionManager:
    """Room-based fan-out for live sockets.

    Rooms are keyed by user id (as a string) or by role name. Request handlers run
    in worker threads, so pushes are handed to the server's event loop and never
    awaited by the caller.
    """

    def __init__(self) -> None:
        self._rooms: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None

    def bind_loop(self, loop: asyncio.AbstractEventLoop | None) -> None:
        self._loop = loop

    def join(self, room: str, websocket: WebSocket) -> None:
        with self._lock:
            self._rooms[room].add(websocket)
        logger.debug("Socket joined room %s", room)

    def leave_all(self, websocket: WebSocket) -> None:
        with self._lock:
            for room in list(self._rooms):
                self._rooms[room].discard(websocket)
                if not self._rooms[room]:
                    del self._rooms[room]

    def listeners(self, room: str) -> list[WebSocket]:
        with self._lock:
            return list(self._rooms.get(room, ()))

    def has_listeners(self, room: str) -> bool:
        return bool(self.listeners(room))

    async def emit(self, room: str, event: str, data: Any) -> int:
        delivered = 0
        for websocket in self.listeners(room):
            try:
                await websocket.send_json({"event": event, "data": data})
                delivered += 1
            except Exception:
                logger.warning("Dropping dead socket in room %s", room, exc_info=True)
                self.leave_all(websocket)
        return delivered

    def emit_nowait(self, room: str, event: str, data: Any) -> bool:
        """Schedule ``emit`` on the bound loop; returns False when nothing was scheduled."""
        if not self.has_listeners(room):
            return False
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.debug("No running event loop; skipping live push to room %s", room)
            return False
        future = asyncio.run_coroutine_threadsafe(self.emit(room, event, data), loop)
        future.add_done_callback(_log_push_failure)
        return True


def _log_push_failure(future: Future) -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.error("Live notification push failed: %s", exc)


manager = ConnectionManager()
