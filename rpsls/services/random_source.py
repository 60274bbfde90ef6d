import logging

import httpx

from rpsls.config import settings


logger = logging.getLogger(__name__)


class RandomSourceError(Exception):
    pass


class RandomSource:
    """Fetches one integer in [1, 5] per call from a plain-text random service."""

    params = {
        "num": 1,
        "min": 1,
        "max": 5,
        "col": 1,
        "base": 10,
        "format": "plain",
        "rnd": "new",
    }

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url or settings.RANDOM_URL
        self.timeout = timeout or settings.RANDOM_TIMEOUT
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def fetch(self) -> int:
        try:
            resp = await self.client.get(self.url, params=self.params)
            resp.raise_for_status()
            value = int(resp.text.strip())
        except httpx.HTTPError as e:
            raise RandomSourceError(f"random service request failed: {e}") from e
        except ValueError as e:
            raise RandomSourceError(f"random service returned a non-integer body: {resp.text!r}") from e
        logger.debug("random service returned %d", value)
        return value

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


random_source = RandomSource()


def get_random_source() -> RandomSource:
    return random_source
