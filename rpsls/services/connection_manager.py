import asyncio
import logging
import random

from fastapi import WebSocket


logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self, attempts: int = 3, base_delay: float = 0.03):
        # sid -> cid -> WebSocket; one game can be open in several tabs
        self.sessions: dict[str, dict[str, WebSocket]] = {}
        self.attempts = attempts
        self.base_delay = base_delay

    async def connect(self, sid: str, cid: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self.sessions.setdefault(sid, {})[cid] = websocket

    async def disconnect(self, sid: str, cid: str) -> None:
        conns = self.sessions.get(sid)
        if not conns:
            return
        conns.pop(cid, None)
        if not conns:
            self.sessions.pop(sid, None)

    def connected(self, sid: str) -> bool:
        return bool(self.sessions.get(sid))

    async def _send_with_retry(self, ws: WebSocket, message: dict) -> None:
        for i in range(self.attempts):
            try:
                await ws.send_json(message)
                return
            except Exception as e:
                if i == self.attempts - 1:
                    raise
                logger.debug("retrying %s send after %s", message.get("type", "UNKNOWN"), e)
                await asyncio.sleep((self.base_delay * (2 ** i)) + random.random() * .02)

    async def send_to(self, sid: str, cid: str, message: dict) -> None:
        ws = self.sessions.get(sid, {}).get(cid)
        if not ws:
            return
        await self._send_with_retry(ws, message)

    async def broadcast(self, sid: str, message: dict) -> None:
        conns = self.sessions.get(sid, {})
        dead = []
        for cid, ws in list(conns.items()):
            try:
                await self._send_with_retry(ws, message)
            except Exception as e:
                logger.warning("dropping socket %s of game %s: %s", cid, sid, e)
                dead.append(cid)

        for cid in dead:
            conns.pop(cid, None)
        if not conns:
            self.sessions.pop(sid, None)


manager = ConnectionManager()
