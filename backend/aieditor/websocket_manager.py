"""WebSocket connection manager for preview and status push"""

import asyncio
from typing import Dict, Optional
from fastapi import WebSocket
from aieditor.logger import get_logger

logger = get_logger(__name__)


class WebSocketManager:
    """Manages WebSocket connections of editor clients"""

    def __init__(self):
        self.connections: Dict[str, WebSocket] = {}
        self.locks: Dict[str, asyncio.Lock] = {}

    async def connect(self, client_id: str, websocket: WebSocket):
        """Connect a WebSocket for a client"""
        await websocket.accept()
        self.connections[client_id] = websocket
        self.locks[client_id] = asyncio.Lock()
        logger.info(f"WebSocket connected for client: {client_id}")

    async def disconnect(self, client_id: str):
        """Disconnect WebSocket for a client"""
        if client_id in self.connections:
            del self.connections[client_id]
        if client_id in self.locks:
            del self.locks[client_id]
        logger.info(f"WebSocket disconnected for client: {client_id}")

    async def send_message(self, client_id: str, message: dict):
        """Send message to one client"""
        if client_id not in self.connections:
            logger.warning(f"No WebSocket connection for client: {client_id}")
            return False

        try:
            async with self.locks[client_id]:
                await self.connections[client_id].send_json(message)
            return True
        except Exception as e:
            logger.error(f"Failed to send WebSocket message to {client_id}: {e}")
            await self.disconnect(client_id)
            return False

    async def broadcast(self, message: dict) -> int:
        """Send message to every connected client, returns the delivery count"""
        delivered = 0
        for client_id in list(self.connections):
            if await self.send_message(client_id, message):
                delivered += 1
        return delivered

    async def receive_message(self, client_id: str) -> Optional[dict]:
        """Receive message from a client"""
        if client_id not in self.connections:
            return None

        try:
            return await self.connections[client_id].receive_json()
        except Exception as e:
            logger.info(f"WebSocket receive ended for {client_id}: {e}")
            await self.disconnect(client_id)
            return None


# --- global websocket manager instance ---
ws_manager = WebSocketManager()
