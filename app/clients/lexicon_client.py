"""
Fetchers for the lexicon feed: a remote JSON endpoint or a local JSON file.
"""
import asyncio
import json
import logging
import time
from typing import Any, Optional

import httpx

from app.core.lexicon import LexiconLoader

logger = logging.getLogger(__name__)


class LexiconClient:
    def __init__(
        self,
        url: str,
        timeout_seconds: int = 0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout_seconds
        self.transport = transport

    async def fetch(self) -> Any:
        """
        Download the lexicon feed. Raises RuntimeError on a non-200 response.
        A timeout of 0 waits indefinitely.
        """
        timeout = httpx.Timeout(self.timeout or None)
        start = time.perf_counter()
        logger.info("[LEXICON] event=start url=%s", self.url)
        async with httpx.AsyncClient(timeout=timeout, transport=self.transport) as client:
            try:
                resp = await client.get(self.url)
                latency_ms = (time.perf_counter() - start) * 1000
                if resp.status_code != 200:
                    logger.error(
                        "[LEXICON] event=error status=%s url=%s latency_ms=%.2f",
                        resp.status_code,
                        self.url,
                        latency_ms,
                    )
                    raise RuntimeError(f"Lexicon feed error status {resp.status_code}")
                data = resp.json()
                logger.info("[LEXICON] event=ok url=%s latency_ms=%.2f", self.url, latency_ms)
                return data
            except Exception as e:
                logger.exception("[LEXICON] event=error url=%s err=%s", self.url, e)
                raise


def read_lexicon_file(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def build_loader(url: str = "", path: str = "", timeout_seconds: int = 0) -> Optional[LexiconLoader]:
    """Pick the remote feed when a URL is configured, else the local file."""
    if url and url.strip():
        return LexiconClient(url=url.strip(), timeout_seconds=timeout_seconds).fetch
    if not path:
        return None

    async def _load_file() -> Any:
        return await asyncio.to_thread(read_lexicon_file, path)

    return _load_file
