from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

import requests

logger = logging.getLogger(__name__)


@dataclass
class HttpClient:
    """
    requests-based fetcher with retry/backoff and a random pause after every
    successful request so the council site is not hammered.
    """

    proxy: Optional[str] = None
    timeout_s: float = 60.0
    max_retries: int = 2
    backoff_base_s: float = 2.0
    backoff_jitter_s: float = 0.5
    pace_min_s: float = 2.0
    pace_jitter_s: float = 4.0
    session: requests.Session = field(default_factory=requests.Session)
    sleep: Callable[[float], None] = time.sleep

    @property
    def proxies(self) -> Optional[Dict[str, str]]:
        if not self.proxy:
            return None
        return {"http": self.proxy, "https": self.proxy}

    def _pace(self) -> None:
        pause = self.pace_min_s
        if self.pace_jitter_s > 0:
            pause += random.uniform(0, self.pace_jitter_s)
        if pause > 0:
            self.sleep(pause)

    def _get(self, url: str, *, verify: bool = True) -> requests.Response:
        """
        GET with simple backoff on connection errors and HTTP errors.
        The last error is re-raised once retries are exhausted.
        """
        for attempt in range(self.max_retries + 1):
            try:
                r = self.session.get(
                    url, timeout=self.timeout_s, proxies=self.proxies, verify=verify
                )
                r.raise_for_status()
                self._pace()
                return r
            except requests.RequestException as e:
                if attempt >= self.max_retries:
                    raise
                sleep_s = (self.backoff_base_s**attempt) + random.uniform(
                    0, self.backoff_jitter_s
                )
                logger.warning(
                    "Request for %s failed (%s); retrying in %.1fs.", url, e, sleep_s
                )
                self.sleep(min(30.0, sleep_s))
        raise RuntimeError(f"Unknown failure fetching {url}")

    def get_text(self, url: str, *, verify: bool = True) -> str:
        logger.info("Retrieving page: %s", url)
        return self._get(url, verify=verify).text

    def get_bytes(self, url: str) -> bytes:
        logger.info("Retrieving document: %s", url)
        return self._get(url).content
