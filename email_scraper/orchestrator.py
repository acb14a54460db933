"""
Pipeline orchestration: resolve → validate → fetch → extract → record.

Companies are processed one at a time in input order. A failure at any stage
ends that company's attempt, is logged with the company name and reason, and
the loop moves on. Only a missing API key stops the run.

Write policy: by default every company gets exactly one output line, with an
empty email when no address was found. With ``write_failures=False`` only
companies whose email was extracted are written.
"""

import logging
import time
from collections import Counter
from typing import Iterable, List, Optional

from email_scraper.config import Config, ConfigurationError
from email_scraper.email_extractor import EmailExtractor
from email_scraper.errors import (
    FetchStageError,
    InvalidURLError,
    NoEmailFoundError,
    NoResultsError,
    ScraperError,
    SkippedDomainError,
    WriteError,
)
from email_scraper.fetcher import ContentFetcher
from email_scraper.files import ContactWriter
from email_scraper.http import HttpClient
from email_scraper.models import CompanyName, CompanyResult, PipelineOutcome
from email_scraper.search import SearchClient
from email_scraper.validator import UrlValidator

# Initialize logger
log = logging.getLogger(__name__)

# outcome recorded when an unexpected exception escapes a stage
_STAGE_FAILURE = {
    "resolving": PipelineOutcome.RESOLUTION_FAILED,
    "validating": PipelineOutcome.VALIDATION_FAILED,
    "fetching": PipelineOutcome.FETCH_FAILED,
    "extracting": PipelineOutcome.NO_EMAIL,
}


class Orchestrator:
    """Drives every company through the pipeline and keeps run statistics."""

    def __init__(
        self,
        search: SearchClient,
        validator: UrlValidator,
        fetcher: ContentFetcher,
        extractor: EmailExtractor,
        writer: Optional[ContactWriter] = None,
        write_failures: bool = True,
    ):
        self.search = search
        self.validator = validator
        self.fetcher = fetcher
        self.extractor = extractor
        self.writer = writer
        self.write_failures = write_failures
        self.global_stats = Counter()

    @classmethod
    def from_config(
        cls,
        config: Config,
        http: HttpClient,
        writer: Optional[ContactWriter] = None,
        write_failures: bool = True,
        extractor: Optional[EmailExtractor] = None,
    ) -> "Orchestrator":
        """Wire every stage to the same injected HTTP client."""
        return cls(
            search=SearchClient(http, config),
            validator=UrlValidator(config.blocked_domains),
            fetcher=ContentFetcher(http, timeout=config.request_timeout,
                                   max_body_bytes=config.max_body_bytes),
            extractor=extractor or EmailExtractor(),
            writer=writer,
            write_failures=write_failures,
        )

    def reset_stats(self) -> None:
        """Reset global statistics."""
        self.global_stats.clear()

    def process_company(self, company: CompanyName) -> CompanyResult:
        """
        Run one company through every stage and record the result.

        Raises:
            ConfigurationError: the search API key is missing
        """
        start_time = time.time()
        self.global_stats["leads"] += 1
        log.info("▶ Processing company: %r", company)

        result = self._run_stages(company)
        self.global_stats[result.outcome.value] += 1

        if result.outcome.succeeded:
            log.info("✓ %r → %s", company, result.email)
        elif result.outcome is PipelineOutcome.SKIPPED:
            log.info("↩ Skipping %r: %s", company, result.error)
        else:
            log.warning("✗ %r: %s", company, result.error)

        self._record(result)
        log.debug("Processed %r in %.2f seconds", company, time.time() - start_time)
        return result

    def _run_stages(self, company: CompanyName) -> CompanyResult:
        stage = "resolving"
        url = ""
        try:
            try:
                url = self.search.resolve(company).url
            except NoResultsError as e:
                self.global_stats["no_results"] += 1
                return CompanyResult(company, PipelineOutcome.RESOLUTION_FAILED, error=e)
            except ScraperError as e:
                self.global_stats["search_error"] += 1
                return CompanyResult(company, PipelineOutcome.RESOLUTION_FAILED, error=e)

            stage = "validating"
            try:
                self.validator.validate(url)
            except SkippedDomainError as e:
                return CompanyResult(company, PipelineOutcome.SKIPPED, url=url, error=e)
            except InvalidURLError as e:
                return CompanyResult(company, PipelineOutcome.VALIDATION_FAILED, url=url, error=e)

            stage = "fetching"
            try:
                body = self.fetcher.fetch(url)
            except FetchStageError as e:
                return CompanyResult(company, PipelineOutcome.FETCH_FAILED, url=url, error=e)

            stage = "extracting"
            try:
                email = self.extractor.extract_email(body, source=company)
            except NoEmailFoundError as e:
                return CompanyResult(company, PipelineOutcome.NO_EMAIL, url=url, error=e)

            return CompanyResult(company, PipelineOutcome.EXTRACTED, url=url, email=email)

        except ConfigurationError:
            raise
        except Exception as e:
            log.error("Unexpected error processing company %r while %s: %s",
                      company, stage, e, exc_info=True)
            self.global_stats["processing_error"] += 1
            return CompanyResult(company, _STAGE_FAILURE[stage], url=url, error=e)

    def _record(self, result: CompanyResult) -> None:
        if self.writer is None:
            return
        if not (result.outcome.succeeded or self.write_failures):
            return
        try:
            self.writer.write(result.record)
            result.written = True
        except WriteError as e:
            self.global_stats["write_error"] += 1
            log.error("Failed to record %r: %s", result.company, e)

    def run(self, companies: Iterable[CompanyName]) -> List[CompanyResult]:
        """
        Process ``companies`` sequentially, in order.

        Raises:
            ConfigurationError: the search API key is missing; raised before
                the first company is processed
        """
        self.search.ensure_configured()
        self.reset_stats()
        return [self.process_company(company) for company in companies]
