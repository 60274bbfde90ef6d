import time
import uuid

import jwt

from rpsls.config import settings


class SessionError(Exception):
    pass


def new_sid() -> str:
    return uuid.uuid4().hex


def session_token(sid: str) -> str:
    """Creates JWT token for a game session.

    Args:
        sid (str): Game session id.

    Returns:
        str: JWT token.
    """
    now = int(time.time())
    payload = {
        'sid': sid,
        'iat': now,
        'exp': now + settings.SESSION_TTL,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm='HS256')


def session_id(token: str | None) -> str:
    """Returns the session id carried by ``token``.

    Raises:
        SessionError: token is missing, expired, badly signed or has no sid.
    """
    if not token:
        raise SessionError("Missing token")
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except jwt.PyJWTError as e:
        raise SessionError("Invalid token") from e
    sid = payload.get("sid")
    if not sid:
        raise SessionError("Invalid token")
    return sid
