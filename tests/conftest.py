from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

import httpx
import pytest
from fastapi.testclient import TestClient

from rpsls.api.routes import ws
from rpsls.app import app
from rpsls.services.random_source import RandomSource, get_random_source


RANDOM_URL = "https://random.test/integers/"


def make_source(handler: Callable[[httpx.Request], httpx.Response]) -> RandomSource:
    """RandomSource whose HTTP traffic is answered by ``handler`` instead of the network."""
    return RandomSource(url=RANDOM_URL, client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def reply(text: str, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(status_code, text=text)


@pytest.fixture(autouse=True)
def _clear_games() -> Iterator[None]:
    ws._games.clear()
    yield
    ws._games.clear()


@pytest.fixture()
def game_client():
    """Build a TestClient whose random source is answered by the given handler."""

    @contextmanager
    def _client(handler: Callable[[httpx.Request], httpx.Response]) -> Iterator[TestClient]:
        source = make_source(handler)
        app.dependency_overrides[get_random_source] = lambda: source
        try:
            with TestClient(app) as c:
                yield c
        finally:
            app.dependency_overrides.clear()

    return _client
