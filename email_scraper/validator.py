"""
URL validation run between search and fetch.
"""

import logging
from typing import Iterable, Optional
from urllib.parse import urlparse

from email_scraper.config import DEFAULT_BLOCKED_DOMAINS
from email_scraper.errors import InvalidURLError, SkippedDomainError

log = logging.getLogger(__name__)


class UrlValidator:
    """
    Rejects URLs that should not be fetched.

    Blocked domains (social networks that do not expose a plain-text contact
    address) are matched as substrings of the whole URL and checked before
    the URL is parsed, so a blocked URL is always a skip, never an error.
    """

    def __init__(self, blocked_domains: Optional[Iterable[str]] = None):
        if blocked_domains is None:
            blocked_domains = DEFAULT_BLOCKED_DOMAINS
        self.blocked_domains = tuple(sorted({d.lower() for d in blocked_domains if d}))

    def blocked_match(self, url: str) -> Optional[str]:
        lowered = url.lower()
        for domain in self.blocked_domains:
            if domain in lowered:
                return domain
        return None

    def validate(self, url: str) -> None:
        """
        Raise if ``url`` must not be fetched.

        Raises:
            SkippedDomainError: URL contains a blocked domain
            InvalidURLError: URL lacks a scheme or a host
        """
        domain = self.blocked_match(url)
        if domain:
            raise SkippedDomainError(url, domain)

        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise InvalidURLError(f"invalid company URL: {url!r} ({e})") from e

        if not parsed.scheme or not parsed.netloc:
            raise InvalidURLError(f"invalid company URL: {url!r}")


def validate(url: str) -> None:
    """Validate ``url`` against the default blocked-domain list."""
    UrlValidator().validate(url)
