"""
Error taxonomy for the scraping pipeline.

Every stage raises a subclass of :class:`ScraperError`; the orchestrator
catches them per company and never lets one abort the batch.
"""

from typing import Optional

from email_scraper.config import ConfigurationError


class ScraperError(Exception):
    """Base class for per-company pipeline failures."""
    pass


# ─── search stage ─────────────────────────────────
class SearchError(ScraperError):
    """Resolving a company name to a URL failed."""
    pass


class RequestError(SearchError):
    """The search API could not be reached (transport error or timeout)."""
    pass


class DecodeError(SearchError):
    """The search API answered with a body that is not valid JSON."""
    pass


class NoResultsError(SearchError):
    """The search API returned no organic results."""

    def __init__(self, company: str):
        super().__init__(f"no results found: {company!r}")
        self.company = company


# ─── validation stage ─────────────────────────────
class ValidationError(ScraperError):
    """The resolved URL was rejected before fetching."""
    pass


class InvalidURLError(ValidationError):
    """The URL has no scheme or no host."""
    pass


class SkippedDomainError(ValidationError):
    """The URL points at a blocked domain; skipped on purpose."""

    def __init__(self, url: str, domain: str):
        super().__init__(f"skipping {domain} URL: {url}")
        self.url = url
        self.domain = domain


# ─── fetch stage ──────────────────────────────────
class FetchStageError(ScraperError):
    """Retrieving the resolved page failed."""
    pass


class FetchError(FetchStageError):
    """The page could not be requested (transport error or timeout)."""
    pass


class ReadError(FetchStageError):
    """The response body could not be read completely."""
    pass


class StatusError(SearchError, FetchStageError):
    """A non-2xx HTTP status, raised by both the search and the fetch stage."""

    def __init__(self, status: str, url: Optional[str] = None):
        super().__init__(f"received non-OK HTTP status: {status}")
        self.status = status
        self.url = url


# ─── extraction / output ──────────────────────────
class NoEmailFoundError(ScraperError):
    """No email-shaped substring was found in the page."""
    pass


class WriteError(ScraperError):
    """A contact record could not be appended to the output file."""
    pass


__all__ = [
    "ConfigurationError",
    "ScraperError",
    "SearchError",
    "RequestError",
    "StatusError",
    "DecodeError",
    "NoResultsError",
    "ValidationError",
    "InvalidURLError",
    "SkippedDomainError",
    "FetchStageError",
    "FetchError",
    "ReadError",
    "NoEmailFoundError",
    "WriteError",
]
