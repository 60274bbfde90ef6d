import logging

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse
from pydantic import BaseModel

from rpsls.config import settings
from rpsls.services.sessions import new_sid, session_token


logger = logging.getLogger(__name__)


class Session(BaseModel):
    sid: str
    t: str


web_router = APIRouter(tags=["web"])


@web_router.get("/")
def index():
    page = settings.CLIENT_DIR / "index.html"
    if not page.is_file():
        raise HTTPException(status_code=404, detail="Client not found")
    return FileResponse(page, media_type="text/html; charset=utf-8")


@web_router.post("/session")
def create_session() -> Session:
    sid = new_sid()
    logger.info("new game session %s", sid)
    return Session(sid=sid, t=session_token(sid))


@web_router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
