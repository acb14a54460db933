"""
Search resolver: maps a company name to the first organic result link.

One GET per call, no caching, no retries. Request shape::

    GET <endpoint>?q=<company>&api_key=<key>&num=1&engine=google

Expected response::

    {"organic": [{"link": "https://..."}, ...]}
"""

import logging
from typing import Any, Dict

import requests

from email_scraper.config import Config, ConfigurationError
from email_scraper.errors import DecodeError, NoResultsError, RequestError, StatusError
from email_scraper.http import HttpClient
from email_scraper.models import CompanyName, SearchResult

# Initialize logger
log = logging.getLogger(__name__)


def status_text(response: requests.Response) -> str:
    """Status line as ``"404 Not Found"``."""
    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


class SearchClient:
    """Resolves company names through a search-as-a-service endpoint."""

    def __init__(self, http: HttpClient, config: Config):
        self.http = http
        self.config = config

    def ensure_configured(self) -> str:
        """Return the API key or raise ConfigurationError if it is missing."""
        if not self.config.api_key:
            raise ConfigurationError("SERPAPI_KEY not set in config or environment")
        return self.config.api_key

    def build_params(self, company: CompanyName, api_key: str) -> Dict[str, Any]:
        return {
            "q": company.encode("utf-8", "surrogateescape"),
            "api_key": api_key,
            "num": 1,
            "engine": self.config.search_engine,
        }

    def search(self, company: CompanyName) -> Dict[str, Any]:
        """
        Run the search request and return the decoded JSON body.

        Raises:
            ConfigurationError: API key missing (no request is made)
            RequestError: transport failure or timeout
            StatusError: non-2xx response
            DecodeError: body is not a JSON object
        """
        params = self.build_params(company, self.ensure_configured())
        log.debug("Searching for: %r", company)

        try:
            response = self.http.get(
                self.config.search_endpoint,
                params=params,
                timeout=self.config.request_timeout,
            )
        except requests.RequestException as e:
            raise RequestError(f"failed to make request to search API: {e}") from e

        try:
            if not 200 <= response.status_code < 300:
                raise StatusError(status_text(response), url=self.config.search_endpoint)
            try:
                payload = response.json()
            except ValueError as e:
                raise DecodeError(f"failed to decode search API response: {e}") from e
        finally:
            response.close()

        if not isinstance(payload, dict):
            raise DecodeError(
                f"failed to decode search API response: expected object, got {type(payload).__name__}"
            )
        return payload

    @staticmethod
    def first_result_url(payload: Dict[str, Any], company: CompanyName) -> str:
        organic = payload.get("organic") or []
        if not isinstance(organic, list):
            raise DecodeError("failed to decode search API response: 'organic' is not a list")
        if not organic:
            raise NoResultsError(company)

        first = organic[0]
        if not isinstance(first, dict):
            raise DecodeError("failed to decode search API response: result is not an object")
        link = first.get("link") or ""
        return str(link)

    def resolve(self, company: CompanyName) -> SearchResult:
        """Resolve ``company`` to the link of the first organic result."""
        payload = self.search(company)
        url = self.first_result_url(payload, company)
        log.debug("Resolved %r → %s", company, url)
        return SearchResult(company=company, url=url)
