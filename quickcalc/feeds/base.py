"""
Base feed abstraction.
Every price source does a JSON GET and reports the outcome the same way, so
the conversion service never sees an exception from the network.
"""

from __future__ import annotations

import abc
import logging
import os
import time
from dataclasses import dataclass, field

import httpx

logger = logging.getLogger(__name__)


@dataclass
class FeedResponse:
    """Standardized response from any feed."""
    ok: bool
    status_code: int = 200
    data: dict = field(default_factory=dict)
    feed_name: str = ""
    latency_ms: float = 0.0
    error: str = ""


class BaseFeed(abc.ABC):
    """
    Abstract base for HTTP/JSON price feeds.
    Subclasses add the request shape and the response schema.
    """

    def __init__(self, name: str, url: str, timeout: float = 5.0):
        self.name = name
        self.url = url.rstrip("/")
        self.timeout = timeout

    @staticmethod
    def _resolve_env(value: str) -> str:
        """Resolve ${ENV_VAR} references in config values."""
        if value and value.startswith("${") and value.endswith("}"):
            return os.environ.get(value[2:-1], "")
        return value

    def _headers(self) -> dict:
        return {"Accept": "application/json"}

    async def _get_json(self, path: str, params: dict | None = None) -> FeedResponse:
        """GET {url}{path} and decode the JSON object body."""
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(
                    f"{self.url}{path}",
                    params=params,
                    headers=self._headers(),
                )
                latency = (time.monotonic() - t0) * 1000

                if resp.status_code >= 400:
                    logger.warning("Feed '%s' returned HTTP %d", self.name, resp.status_code)
                    return FeedResponse(
                        ok=False,
                        status_code=resp.status_code,
                        feed_name=self.name,
                        latency_ms=latency,
                        error=f"HTTP {resp.status_code}: {resp.text[:200]}",
                    )

                data = resp.json()
                if not isinstance(data, dict):
                    logger.warning("Feed '%s' returned %s, expected an object", self.name, type(data).__name__)
                    return FeedResponse(
                        ok=False,
                        status_code=resp.status_code,
                        feed_name=self.name,
                        latency_ms=latency,
                        error="Malformed response",
                    )

                logger.debug("Feed '%s' answered in %.0fms", self.name, latency)
                return FeedResponse(
                    ok=True,
                    status_code=resp.status_code,
                    data=data,
                    feed_name=self.name,
                    latency_ms=latency,
                )
        except httpx.TimeoutException:
            latency = (time.monotonic() - t0) * 1000
            logger.warning("Feed '%s' timed out after %.0fms", self.name, latency)
            return FeedResponse(
                ok=False, feed_name=self.name, latency_ms=latency,
                error=f"Timeout after {self.timeout}s",
            )
        except Exception as e:
            latency = (time.monotonic() - t0) * 1000
            logger.warning("Feed '%s' failed: %s", self.name, e)
            return FeedResponse(
                ok=False, feed_name=self.name, latency_ms=latency,
                error=str(e),
            )

    @abc.abstractmethod
    async def health_check(self) -> bool:
        """Check if this feed is reachable and answering."""
        ...

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r} url={self.url!r}>"
