"""
Content fetcher: downloads the resolved page as text.
"""

import logging
import time
from typing import Optional

import requests

from email_scraper.errors import FetchError, ReadError, StatusError
from email_scraper.http import HttpClient
from email_scraper.search import status_text

log = logging.getLogger(__name__)

CHUNK_SIZE = 8 * 1024


class ContentFetcher:
    """
    Fetches one page per call through the injected :class:`HttpClient`.

    ``max_body_bytes`` bounds how much of the body is kept; ``0`` or ``None``
    reads the whole body. ``timeout`` bounds the whole request, body read
    included, not just each socket operation.
    """

    def __init__(self, http: HttpClient, timeout: float = 10.0,
                 max_body_bytes: Optional[int] = None):
        self.http = http
        self.timeout = timeout
        self.max_body_bytes = max_body_bytes or None

    def fetch(self, url: str) -> str:
        """
        Return the decoded body of ``url``.

        Raises:
            FetchError: transport failure or timeout
            StatusError: non-2xx response
            ReadError: body could not be read
        """
        deadline = time.monotonic() + self.timeout
        try:
            response = self.http.get(url, timeout=self.timeout, stream=True)
        except requests.RequestException as e:
            raise FetchError(f"failed to fetch the page {url}: {e}") from e

        try:
            if not 200 <= response.status_code < 300:
                raise StatusError(status_text(response), url=url)
            body = self._read_body(response, url, deadline)
        finally:
            response.close()

        encoding = response.encoding or "utf-8"
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            log.debug("Unknown encoding %r for %s, falling back to utf-8", encoding, url)
            return body.decode("utf-8", errors="replace")

    def _read_body(self, response: requests.Response, url: str,
                   deadline: Optional[float] = None) -> bytes:
        chunks = []
        size = 0
        try:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if not chunk:
                    continue
                chunks.append(chunk)
                size += len(chunk)
                if deadline is not None and time.monotonic() > deadline:
                    raise ReadError(
                        f"failed to read response body of {url}: exceeded {self.timeout:g}s timeout"
                    )
                if self.max_body_bytes and size >= self.max_body_bytes:
                    log.debug("Body of %s truncated at %d bytes", url, self.max_body_bytes)
                    break
        except (requests.RequestException, OSError) as e:
            raise ReadError(f"failed to read response body of {url}: {e}") from e

        body = b"".join(chunks)
        if self.max_body_bytes:
            body = body[:self.max_body_bytes]
        return body
