"""
Email extraction from fetched page text.

Matching is a lexical best effort, not an address validator: the first
email-shaped substring in document order wins. The matcher is pluggable so a
stricter candidate finder can replace the regex without touching the pipeline.
"""

import logging
import re
from typing import Callable, Iterable, List, Optional, Pattern

from email_scraper.errors import NoEmailFoundError

# Initialize logger
log = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")

# text -> candidate substrings, in document order
Matcher = Callable[[str], Iterable[str]]


def regex_matcher(pattern: Pattern = EMAIL_RE) -> Matcher:
    """Build a matcher yielding every non-overlapping match of ``pattern``."""
    def _match(text: str) -> Iterable[str]:
        for m in pattern.finditer(text):
            yield m.group(0)
    return _match


class EmailExtractor:
    """Finds the contact email in a page using a pluggable matcher."""

    def __init__(self, matcher: Optional[Matcher] = None):
        self.matcher = matcher or regex_matcher()

    def find_all(self, text: str) -> List[str]:
        """All candidates in document order, duplicates included."""
        if not text:
            return []
        return list(self.matcher(text))

    def extract_email(self, text: str, source: str = "") -> str:
        """
        Return the first candidate in ``text``.

        Args:
            text: Page content
            source: What the text belongs to (company or URL), used in the
                error message

        Raises:
            NoEmailFoundError: no candidate matched
        """
        for candidate in self.matcher(text or ""):
            log.debug("First email candidate %r%s", candidate, f" for {source!r}" if source else "")
            return candidate
        raise NoEmailFoundError(f"no email found on the page: {source!r}" if source else "no email found on the page")


# Create a default extractor instance
email_extractor = EmailExtractor()


def extract_email(text: str) -> str:
    return email_extractor.extract_email(text)
