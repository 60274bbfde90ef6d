import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
import logging
import time
from typing import Literal
import uuid

from pydantic import BaseModel, ValidationError
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status

from rpsls.config import settings
from rpsls.game.events import GameEvent, ServerEvent
from rpsls.game.models import Gesture
from rpsls.game.transitions import FSM, build_transitions
from rpsls.game.view import snapshot
from rpsls.services.connection_manager import manager
from rpsls.services.random_source import RandomSource, RandomSourceError, get_random_source
from rpsls.services.sessions import SessionError, session_id


logger = logging.getLogger(__name__)


@dataclass
class GameRuntime:
    sid: str
    fsm: FSM = field(default_factory=build_transitions)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    pending: asyncio.Task | None = None
    last_seen: float = field(default_factory=time.monotonic)

    def cancel_pending(self) -> None:
        if self.pending and not self.pending.done():
            self.pending.cancel()
        self.pending = None


class ClientMessage(BaseModel):
    type: Literal["GESTURE", "RESET", "PING"]
    data: dict | None = None
    meta: dict | None = None


_games: dict[str, GameRuntime] = {}


def _prune_games(now: float) -> None:
    """Forget games nobody has had open for longer than a session token lives."""
    for sid, rt in list(_games.items()):
        if manager.connected(sid) or now - rt.last_seen <= settings.SESSION_TTL:
            continue
        rt.cancel_pending()
        del _games[sid]
        logger.info("game %s: expired", sid)


def _game(sid: str) -> GameRuntime:
    _prune_games(time.monotonic())
    rt = _games.get(sid)
    if rt:
        rt.last_seen = time.monotonic()
        return rt
    rt = GameRuntime(sid=sid)
    _games[sid] = rt
    return rt


def _parse_client_raw(raw: str) -> ClientMessage:
    t = (raw or "").strip()
    if t.startswith("{"):
        return ClientMessage.model_validate_json(t)

    t = t.lower()
    if t == "reset":
        return ClientMessage(type="RESET")
    if t == "ping":
        return ClientMessage(type="PING")
    gesture = Gesture.from_input(t)
    return ClientMessage(type="GESTURE", data={"gesture": gesture.value})


def new_cid() -> str:
    return uuid.uuid4().hex


def _msg_cid(msg: ClientMessage) -> str:
    return (msg.meta or {}).get("cid") or new_cid()


def _evt(rt: GameRuntime, evt: ServerEvent, cid: str | None):
    return {
        "type": evt.name,
        "data": snapshot(rt.fsm.state),
        "meta": {"cid": cid or new_cid()},
    }


def _err(msg: str, cid: str | None):
    return {
        "type": ServerEvent.ERROR.name,
        "data": {"message": msg},
        "meta": {"cid": cid or new_cid()},
    }


@asynccontextmanager
async def timed_lock(rt: GameRuntime, op: str):
    start = time.perf_counter()
    async with rt.lock:
        waited = time.perf_counter() - start
        if waited > 0.1:
            logger.debug("game %s waited %.3fs for lock (%s)", rt.sid, waited, op)
        yield


async def _reply_to(sid, cid, message):
    await manager.send_to(sid, cid, message)


async def _broadcast(sid, message):
    await manager.broadcast(sid, message)


async def _computer_turn(rt: GameRuntime, source: RandomSource):
    try:
        number = await source.fetch()
    except RandomSourceError as e:
        # state stays in ComputerTurn; a reset gets the player out
        logger.warning("game %s: %s", rt.sid, e)
        await _broadcast(rt.sid, _err("Random source unavailable", new_cid()))
        return

    async with timed_lock(rt, "random"):
        applied = rt.fsm.send(GameEvent.RANDOM_NUMBER, number=number)
        state = rt.fsm.state
        message = _evt(rt, ServerEvent.STATE, new_cid())
    if not applied:
        logger.info("game %s: late random number %d ignored in %s", rt.sid, number, state.phase.name)
        return

    logger.info(
        "game %s: %s vs %s -> %s, score %d",
        rt.sid, state.player_gesture.value, state.computer_gesture.value, state.outcome.value, state.score,
    )
    await _broadcast(rt.sid, message)


async def _run_computer_turn(rt: GameRuntime, source: RandomSource):
    try:
        await _computer_turn(rt, source)
    except Exception:
        logger.exception("game %s: computer turn failed", rt.sid)


async def _on_gesture(rt: GameRuntime, cid: str, gesture: Gesture, source: RandomSource, msg_cid: str):
    async with timed_lock(rt, "gesture"):
        accepted = rt.fsm.send(GameEvent.GESTURE, gesture=gesture)
        message = _evt(rt, ServerEvent.STATE if accepted else ServerEvent.ACK, msg_cid)
        if accepted:
            # ComputerTurn goes out before the task can post GameOver
            await _broadcast(rt.sid, message)
            rt.pending = asyncio.create_task(_run_computer_turn(rt, source))

    if not accepted:
        # still waiting on the random number
        await _reply_to(rt.sid, cid, message)


async def _on_reset(rt: GameRuntime, msg_cid: str):
    async with timed_lock(rt, "reset"):
        rt.cancel_pending()
        rt.fsm.send(GameEvent.RESET)
        message = _evt(rt, ServerEvent.STATE, msg_cid)
    await _broadcast(rt.sid, message)


ws_router = APIRouter(tags=["websocket"])


@ws_router.websocket("/ws/games")
async def websocket_game_endpoint(websocket: WebSocket, source: RandomSource = Depends(get_random_source)):
    """WebSocket endpoint for one Rock-Paper-Scissors-Lizard-Spock game session."""
    try:
        sid = session_id(websocket.query_params.get("t"))
    except SessionError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    cid = new_cid()
    await manager.connect(sid=sid, cid=cid, websocket=websocket)
    rt = _game(sid)
    logger.info("game %s: socket %s connected", sid, cid)

    try:
        await _reply_to(sid, cid, _evt(rt, ServerEvent.STATE, new_cid()))

        while True:
            raw_data = await websocket.receive_text()

            try:
                msg = _parse_client_raw(raw_data)
            except (ValueError, ValidationError) as e:
                await _reply_to(sid, cid, _err(str(e), new_cid()))
                continue

            msg_cid = _msg_cid(msg)
            if msg.type == "PING":
                await _reply_to(sid, cid, {"type": ServerEvent.PONG.name, "data": None, "meta": {"cid": msg_cid}})
            elif msg.type == "RESET":
                await _on_reset(rt, msg_cid)
            elif msg.type == "GESTURE":
                try:
                    gesture = Gesture.from_input((msg.data or {}).get("gesture"))
                except ValueError as e:
                    await _reply_to(sid, cid, _err(str(e), msg_cid))
                    continue
                await _on_gesture(rt, cid, gesture, source, msg_cid)

    except WebSocketDisconnect:
        logger.info("game %s: socket %s disconnected", sid, cid)

    finally:
        await manager.disconnect(sid, cid)
        rt.last_seen = time.monotonic()
