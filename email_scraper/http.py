"""
HTTP client shared by the search and fetch stages.

The client is created once per run and handed to each stage; nothing in the
pipeline reaches for a module-level session. Retries are disabled on purpose:
every failure is terminal for that company's attempt.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from email_scraper.config import Config

log = logging.getLogger(__name__)

logging.getLogger("urllib3.connectionpool").setLevel(logging.ERROR)


def build_session(config: Config) -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": config.user_agent})
    adapter = HTTPAdapter(max_retries=Retry(total=0, read=False))
    s.mount("http://", adapter)
    s.mount("https://", adapter)
    s.max_redirects = config.max_redirects
    return s


class HttpClient:
    """Thin wrapper around a ``requests.Session`` that keeps request statistics."""

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: float = 10.0) -> None:
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.stats = Counter()

    @classmethod
    def from_config(cls, config: Config) -> "HttpClient":
        return cls(build_session(config), timeout=config.request_timeout)

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        stream: bool = False,
    ) -> requests.Response:
        """
        Issue one GET request.

        Transport errors propagate as ``requests.RequestException``; the caller
        decides which pipeline error they map to. Status codes are not checked
        here.
        """
        if timeout is None:
            timeout = self.timeout

        self.stats["total_requests"] += 1
        try:
            response = self.session.get(
                url,
                params=params,
                timeout=timeout,
                allow_redirects=True,
                stream=stream,
            )
        except requests.RequestException:
            self.stats["status_no-response"] += 1
            raise

        self.stats[f"status_{response.status_code}"] += 1
        log.debug("HTTP GET %s → %s", response.url or url, response.status_code)
        return response

    def error_count(self) -> int:
        """Number of responses with a 4xx/5xx status."""
        total = 0
        for key, count in self.stats.items():
            code = key.split("_", 1)[1] if key.startswith("status_") else ""
            if code.isdigit() and 400 <= int(code) < 600:
                total += count
        return total

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
