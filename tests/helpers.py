"""
Fake HTTP plumbing shared by the test modules.
"""

import json
from typing import Callable, Dict, Optional, Union
from unittest.mock import MagicMock

import requests

from email_scraper.config import Config

REASONS = {
    200: "OK", 300: "Multiple Choices", 304: "Not Modified",
    403: "Forbidden", 404: "Not Found", 500: "Internal Server Error",
}


def make_response(status: int = 200, body: Union[str, bytes] = b"",
                  json_body=None, encoding: Optional[str] = "utf-8",
                  url: str = "") -> MagicMock:
    """A ``requests.Response`` stand-in with the attributes the stages use."""
    if json_body is not None:
        body = json.dumps(json_body)
    if isinstance(body, str):
        body = body.encode("utf-8")

    resp = MagicMock(spec=requests.Response)
    resp.status_code = status
    resp.reason = REASONS.get(status, "")
    # same rule as requests.Response.ok, which counts 3xx as ok
    resp.ok = 200 <= status < 400
    resp.url = url
    resp.encoding = encoding
    resp.content = body
    resp.iter_content.side_effect = lambda chunk_size=1, decode_unicode=False: iter([body])

    def _json():
        return json.loads(body.decode("utf-8"))
    resp.json.side_effect = _json
    return resp


class FakeHttp:
    """
    Routes GET requests by URL to canned responses or exceptions.

    Values in ``routes`` are a response, an exception instance to raise, or a
    callable taking ``params`` and returning either.
    """

    def __init__(self, routes: Optional[Dict[str, object]] = None):
        self.routes = dict(routes or {})
        self.calls = []

    def get(self, url, params=None, timeout=None, stream=False):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if url not in self.routes:
            raise requests.ConnectionError(f"no route for {url}")
        target = self.routes[url]
        if callable(target) and not isinstance(target, MagicMock):
            target = target(params)
        if isinstance(target, Exception):
            raise target
        return target

    def urls(self):
        return [c["url"] for c in self.calls]


def make_config(**overrides) -> Config:
    """A Config built without touching the environment or any .env file."""
    config = Config.__new__(Config)
    config.api_key = "test-key"
    config.search_endpoint = "https://search.test/search"
    config.search_engine = "google"
    config.request_timeout = 10.0
    config.max_redirects = 5
    config.max_body_bytes = 0
    config.user_agent = "test-agent"
    config.blocked_domains = {"facebook.com"}
    for key, value in overrides.items():
        setattr(config, key, value)
    return config


def search_route(mapping: Dict[str, Union[str, None, Exception]]) -> Callable:
    """
    Search endpoint route answering by query: a link, ``None`` for no
    results, or an exception to raise.
    """
    def _route(params):
        query = params["q"]
        if isinstance(query, bytes):
            query = query.decode("utf-8", "surrogateescape")
        value = mapping[query]
        if isinstance(value, Exception):
            return value
        organic = [] if value is None else [{"link": value}]
        return make_response(json_body={"organic": organic})
    return _route
