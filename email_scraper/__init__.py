"""
Company email scraper.

Resolves company names to a web page through a search API and pulls the first
contact email address out of that page.
"""

from email_scraper.email_extractor import EmailExtractor, extract_email
from email_scraper.models import CompanyResult, ContactRecord, PipelineOutcome, SearchResult
from email_scraper.orchestrator import Orchestrator
from email_scraper.validator import UrlValidator, validate

__version__ = "0.1.0"

__all__ = [
    "EmailExtractor",
    "extract_email",
    "CompanyResult",
    "ContactRecord",
    "PipelineOutcome",
    "SearchResult",
    "Orchestrator",
    "UrlValidator",
    "validate",
]
