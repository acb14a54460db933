"""
Command-line interface.

Reads company names from a text file, resolves each through the search API,
and writes ``"<company> : <email>"`` lines to the output file.
"""
import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from email_scraper.config import Config, ConfigurationError
from email_scraper.files import (
    DEFAULT_INPUT_FILE,
    ContactWriter,
    default_output_name,
    read_company_names,
)
from email_scraper.http import HttpClient
from email_scraper.models import CompanyResult, PipelineOutcome
from email_scraper.orchestrator import Orchestrator


# Initialize logger
log = logging.getLogger(__name__)


class CLI:
    """Command-line interface for the company email scraper."""

    def __init__(self):
        """Initialize the CLI."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create command-line argument parser.

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            prog="email-scraper",
            description="Find a contact email address for each company in a list",
            formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )

        parser.add_argument(
            "input_file",
            nargs="?",
            default=DEFAULT_INPUT_FILE,
            help="Text file with one company name per line"
        )

        parser.add_argument(
            "-o", "--output",
            default=None,
            help="Output text file (default: company_emails_<timestamp>.txt)"
        )

        parser.add_argument(
            "--append",
            action="store_true",
            help="Append to the output file instead of overwriting it"
        )

        parser.add_argument(
            "--skip-failed",
            action="store_true",
            help="Only write companies whose email was found"
        )

        parser.add_argument(
            "--timeout",
            type=float,
            default=None,
            help="Per-request timeout in seconds (overrides REQUEST_TIMEOUT)"
        )

        parser.add_argument(
            "--config",
            help="Path to custom .env configuration file"
        )

        parser.add_argument(
            "--log-file",
            default=None,
            help="Log file (default: scraper_<timestamp>.log)"
        )

        parser.add_argument(
            "-v", "--verbose",
            action="store_true",
            help="Enable verbose logging"
        )

        return parser

    def setup_logging(self, verbose: bool, logfile: Optional[str] = None) -> str:
        """
        Set up logging configuration.

        Args:
            verbose: Whether to enable verbose logging
            logfile: Log file path, generated when omitted

        Returns:
            Path to log file
        """
        if not logfile:
            logfile = f"scraper_{time.strftime('%Y%m%d_%H%M%S')}.log"

        level = logging.DEBUG if verbose else logging.INFO

        logging.basicConfig(
            level=level,
            format="%(asctime)s | %(levelname)-7s | %(name)-20s | %(message)s",
            handlers=[
                logging.FileHandler(logfile, encoding="utf-8"),
                logging.StreamHandler(sys.stdout)
            ],
            force=True,
        )

        # Set lower level for external libraries
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)

        return logfile

    def load_config(self, args: argparse.Namespace) -> Config:
        """
        Build and validate the configuration.

        Raises:
            ConfigurationError: config file missing or API key not set
        """
        config = Config(env_file=args.config)
        if args.timeout is not None:
            if args.timeout <= 0:
                raise ConfigurationError(f"--timeout must be positive, got {args.timeout}")
            config.request_timeout = args.timeout
        config.validate_or_raise()
        return config

    def validate_input_file(self, file_path: str) -> Tuple[bool, Optional[str]]:
        """
        Check that the input file exists.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not os.path.isfile(file_path):
            return False, f"Input file not found: {file_path}"
        return True, None

    def validate_output_file(self, file_path: str) -> Tuple[bool, Optional[str]]:
        """
        Check that the output directory exists.

        Returns:
            Tuple of (is_valid, error_message)
        """
        output_dir = os.path.dirname(file_path)
        if output_dir and not os.path.isdir(output_dir):
            return False, f"Output directory does not exist: {output_dir}"
        return True, None

    def scrape_companies(self, args: argparse.Namespace) -> bool:
        """
        Run the pipeline for every company in the input file.

        Args:
            args: Command-line arguments

        Returns:
            True if the run completed, False on a fatal error
        """
        logfile = self.setup_logging(args.verbose, args.log_file)
        output_file = args.output or default_output_name()

        log.info("Email scraper starting")
        log.info("Input file: %s", args.input_file)
        log.info("Output file: %s", output_file)
        log.info("Write failed companies: %s", not args.skip_failed)

        try:
            config = self.load_config(args)
        except ConfigurationError as e:
            log.error("Configuration error: %s", e)
            return False
        log.debug("Configuration: %s", config.as_dict())

        valid_input, input_error = self.validate_input_file(args.input_file)
        if not valid_input:
            log.error("Input validation failed: %s", input_error)
            return False

        valid_output, output_error = self.validate_output_file(output_file)
        if not valid_output:
            log.error("Output validation failed: %s", output_error)
            return False

        try:
            companies = read_company_names(args.input_file)
        except OSError as e:
            log.error("Error reading input file: %s", e)
            return False

        writer = ContactWriter(output_file, append=args.append)
        try:
            writer.open()
        except OSError as e:
            log.error("Failed to create output file: %s", e)
            return False

        start_time = time.time()
        http = HttpClient.from_config(config)
        orchestrator = Orchestrator.from_config(
            config, http, writer=writer, write_failures=not args.skip_failed
        )

        try:
            results = orchestrator.run(companies)
        except ConfigurationError as e:
            log.error("Configuration error: %s", e)
            return False
        except KeyboardInterrupt:
            log.warning("Interrupted by user; %d lines written", writer.lines_written)
            raise
        finally:
            writer.close()
            http.close()

        self.log_summary(orchestrator, http, results, time.time() - start_time)
        log.info("Saved %d rows -> %s", writer.lines_written, output_file)
        log.info("Verbose log -> %s", Path(logfile).resolve())
        return True

    def log_summary(self, orchestrator: Orchestrator, http: HttpClient,
                    results: List[CompanyResult], elapsed: float) -> None:
        stats = orchestrator.global_stats
        http_stats = http.stats

        log.info(
            "\n+--------------------------------------------------+\n"
            "| RUN SUMMARY                                      |\n"
            "+--------------------------------------------------+\n"
            f"| Companies        : {stats['leads']:>3}\n"
            f"| With e-mail      : {stats[PipelineOutcome.EXTRACTED.value]:>3}\n"
            f"| Without e-mail   : {stats[PipelineOutcome.NO_EMAIL.value]:>3}\n"
            f"| No search hits   : {stats['no_results']:>3}\n"
            f"| Search errors    : {stats['search_error']:>3}\n"
            f"| Skipped domains  : {stats[PipelineOutcome.SKIPPED.value]:>3}\n"
            f"| Invalid URLs     : {stats[PipelineOutcome.VALIDATION_FAILED.value]:>3}\n"
            f"| Fetch failures   : {stats[PipelineOutcome.FETCH_FAILED.value]:>3}\n"
            f"| Processing errors: {stats['processing_error']:>3}\n"
            f"| Write errors     : {stats['write_error']:>3}\n"
            f"| Lines written    : {sum(1 for r in results if r.written):>3}\n"
            f"| Runtime          : {elapsed:6.1f} s\n"
            f"| HTTP Requests    : {http_stats['total_requests']:>3}\n"
            f"| HTTP errors      : {http.error_count():>3}\n"
            f"| No-response      : {http_stats['status_no-response']:>3}\n"
            "+--------------------------------------------------+"
        )

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run the CLI with the given arguments.

        Args:
            args: Command-line arguments (defaults to sys.argv[1:])

        Returns:
            Exit code (0 for success, non-zero for failure)
        """
        parsed_args = self.parser.parse_args(args)
        try:
            success = self.scrape_companies(parsed_args)
            return 0 if success else 1

        except KeyboardInterrupt:
            raise
        except Exception as e:
            log.error("Unhandled exception: %s", e, exc_info=True)
            return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the email scraper.

    Returns:
        Exit code (0 for success, 1 for failure, 130 when interrupted)
    """
    cli = CLI()

    try:
        return cli.run(argv)

    except KeyboardInterrupt:
        log.warning("Execution interrupted by user")
        return 130
