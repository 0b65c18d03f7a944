"""
WebSocket manager for live guest list updates
"""

import json
import logging
from typing import List
from fastapi import APIRouter, Request, WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)

class WebSocketManager:
    """Manages WebSocket connections watching the guest list"""

    def __init__(self):
        self.active_connections: List[WebSocket] = []

    async def connect(self, websocket: WebSocket):
        await websocket.accept()
        self.active_connections.append(websocket)
        logger.info(f"WebSocket connected. Total connections: {len(self.active_connections)}")

    def disconnect(self, websocket: WebSocket):
        if websocket in self.active_connections:
            self.active_connections.remove(websocket)
            logger.info(f"WebSocket disconnected. Remaining connections: {len(self.active_connections)}")

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast(self, message: dict):
        """Broadcast message to every connected WebSocket"""
        if not self.active_connections:
            return

        # Copy: failed sockets are removed below
        connections = self.active_connections.copy()

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket)

    def get_connection_count(self) -> int:
        return len(self.active_connections)

# Router for WebSocket endpoints
router = APIRouter()

@router.websocket("/guests")
async def websocket_endpoint(websocket: WebSocket):
    """Push the guest list on connect and after every local change"""
    service = websocket.app.state.guest_service
    manager = service.websocket_manager

    await manager.connect(websocket)

    try:
        await manager.send_personal_message(await service.live_message(), websocket)

        while True:
            data = await websocket.receive_text()
            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            if client_message.get("type") == "ping":
                pong_message = {
                    "type": "pong",
                    "timestamp": client_message.get("timestamp")
                }
                await manager.send_personal_message(pong_message, websocket)

    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)

@router.get("/stats")
async def websocket_stats(request: Request):
    """Connection statistics (for debugging)"""
    manager = request.app.state.guest_service.websocket_manager
    return {"total_connections": manager.get_connection_count()}
