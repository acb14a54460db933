"""
Configuration module for the company email scraper.

Settings are read from environment variables. A ``.env`` file in the working
directory (or one passed explicitly) is loaded first; variables already set in
the process environment take precedence over the file.
"""

import os
import logging
from typing import Dict, List, Any, Optional, Set

from dotenv import load_dotenv

# Initialize logger
log = logging.getLogger(__name__)

DEFAULT_SEARCH_ENDPOINT = "https://google.serper.dev/search"
DEFAULT_BLOCKED_DOMAINS = ("facebook.com",)
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


class ConfigurationError(Exception):
    """Exception raised for configuration errors."""
    pass


class Config:
    """Scraper configuration with range-checked environment parsing."""

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize configuration with default values and environment overrides.

        Args:
            env_file: Optional path to .env file to load
        """
        if env_file:
            if not os.path.isfile(env_file):
                raise ConfigurationError(f"Config file not found: {env_file}")
            load_dotenv(env_file, override=False)
        else:
            load_dotenv(override=False)

        # Search API credentials and endpoint
        self.api_key = os.getenv("SERPAPI_KEY", "").strip()
        self.search_endpoint = os.getenv("SEARCH_ENDPOINT", DEFAULT_SEARCH_ENDPOINT).strip()
        self.search_engine = os.getenv("SEARCH_ENGINE", "google").strip() or "google"

        # HTTP settings
        self.request_timeout = self._parse_float("REQUEST_TIMEOUT", 10.0, 1.0, 120.0)
        self.max_redirects = self._parse_int("MAX_REDIRECTS", 5, 0, 30)
        self.max_body_bytes = self._parse_int("MAX_BODY_BYTES", 0, 0, 1 << 30)
        self.user_agent = os.getenv("USER_AGENT", "").strip() or DEFAULT_USER_AGENT

        # Domains whose pages are never fetched
        self.blocked_domains: Set[str] = set(DEFAULT_BLOCKED_DOMAINS)
        blocked_domains_str = os.getenv("BLOCKED_DOMAINS", "")
        if blocked_domains_str:
            self.blocked_domains |= {
                d.strip().lower() for d in blocked_domains_str.split(",") if d.strip()
            }

    @classmethod
    def from_env_file(cls, env_file: str) -> "Config":
        """Build a configuration after loading a specific .env file."""
        return cls(env_file=env_file)

    def _parse_int(self, env_var: str, default: int, min_val: int, max_val: int) -> int:
        """
        Parse an integer environment variable with range validation.

        Args:
            env_var: Environment variable name
            default: Default value if not set
            min_val: Minimum allowed value
            max_val: Maximum allowed value

        Returns:
            Parsed integer value
        """
        try:
            value = int(os.getenv(env_var, str(default)))
            if value < min_val:
                log.warning("%s value %d below minimum %d, using minimum", env_var, value, min_val)
                return min_val
            if value > max_val:
                log.warning("%s value %d above maximum %d, using maximum", env_var, value, max_val)
                return max_val
            return value
        except ValueError:
            log.warning("Invalid %s value, using default %d", env_var, default)
            return default

    def _parse_float(self, env_var: str, default: float, min_val: float, max_val: float) -> float:
        """
        Parse a float environment variable with range validation.

        Args:
            env_var: Environment variable name
            default: Default value if not set
            min_val: Minimum allowed value
            max_val: Maximum allowed value

        Returns:
            Parsed float value
        """
        try:
            value = float(os.getenv(env_var, str(default)))
            if value < min_val:
                log.warning("%s value %f below minimum %f, using minimum", env_var, value, min_val)
                return min_val
            if value > max_val:
                log.warning("%s value %f above maximum %f, using maximum", env_var, value, max_val)
                return max_val
            return value
        except ValueError:
            log.warning("Invalid %s value, using default %f", env_var, default)
            return default

    def as_dict(self) -> Dict[str, Any]:
        """Return configuration as a dictionary, with the API key masked."""
        values = {k: v for k, v in self.__dict__.items() if not k.startswith('_')}
        if values.get("api_key"):
            values["api_key"] = "***"
        return values

    def validate(self) -> List[str]:
        """
        Validate configuration and return a list of error messages.

        Returns:
            List of error messages, empty if valid
        """
        errors = []

        if not self.api_key:
            errors.append("SERPAPI_KEY not set in config or environment")

        if not self.search_endpoint.lower().startswith(("http://", "https://")):
            errors.append(f"SEARCH_ENDPOINT must be an http(s) URL: {self.search_endpoint!r}")

        return errors

    def validate_or_raise(self) -> None:
        """
        Validate configuration and raise an exception if invalid.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        errors = self.validate()
        if errors:
            error_msg = "Configuration errors: " + ", ".join(errors)
            log.error(error_msg)
            raise ConfigurationError(error_msg)
