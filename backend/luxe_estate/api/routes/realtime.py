import logging

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect, status

from luxe_estate.core.database import SessionLocal
from luxe_estate.core.deps import user_from_token
from luxe_estate.services.realtime import manager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def notifications_socket(websocket: WebSocket, token: str = Query("")):
    db = SessionLocal()
    try:
        user = user_from_token(db, token) if token else None
        if not user or user.is_deleted:
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return
        user_id, role = str(user.id), user.role.value
    finally:
        db.close()

    await websocket.accept()
    manager.join(user_id, websocket)
    logger.info("Socket connected for user %s", user_id)

    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                await websocket.send_json({"event": "error", "data": "Malformed message"})
                continue
            event = message.get("event") if isinstance(message, dict) else None
            room = str(message.get("data", "")) if isinstance(message, dict) else ""
            # Sockets may only subscribe to their own user or role room.
            if event == "join_room" and room == user_id:
                manager.join(room, websocket)
            elif event == "join_role" and room == role:
                manager.join(room, websocket)
            else:
                await websocket.send_json({"event": "error", "data": "Unsupported or unauthorized event"})
    except WebSocketDisconnect:
        logger.info("Socket disconnected for user %s", user_id)
    finally:
        manager.leave_all(websocket)
