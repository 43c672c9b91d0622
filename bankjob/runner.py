"""
Bankjob Runner

Orchestrates one run: resolve the configured output formatters, scrape a
statement, then write it with every formatter in turn.
"""
import uuid
from typing import List, Optional

from bankjob.common.config import BankjobConfig
from bankjob.common.logging_config import get_logger, set_run_id, clear_run_id
from bankjob.core.statement import Statement
from bankjob.exporting.registry import OutputFormatter
from bankjob.scraping.base import BaseScraper

logger = get_logger(__name__)

DEFAULT_FORMATTER = "stdout"


class BankjobRunner:
    """
    Runs a scraper and writes its statement to the configured outputs.
    """

    def __init__(self, config: Optional[BankjobConfig] = None):
        """
        Initialize runner with its configuration.

        Args:
            config: BankjobConfig; defaults to writing to stdout only
        """
        self.config = config or BankjobConfig()

    def resolve_formatters(self) -> List[OutputFormatter]:
        """
        Resolve every configured formatter.

        Raises:
            UnknownFormatterError: for the first configuration that does not resolve
        """
        configurations = self.config.output_formatters
        if not configurations:
            logger.debug("No output formatter specified so using the stdout formatter.")
            configurations = [DEFAULT_FORMATTER]
        return [OutputFormatter(c) for c in configurations]

    def run(self, scraper: BaseScraper, scraper_args: Optional[List[str]] = None) -> Statement:
        """
        Scrape a statement and write it out.

        Formatters are resolved before scraping starts so a bad configuration
        fails without touching the bank site. Scrape failures are logged and
        re-raised.

        Returns:
            The statement that was written
        """
        run_id = uuid.uuid4().hex[:12]
        set_run_id(run_id)
        try:
            formatters = self.resolve_formatters()
            scraper_name = scraper.__class__.__name__

            logger.info(f"Scraping with {scraper_name}", scraper=scraper_name)
            try:
                statement = scraper.scrape_statement(scraper_args or [])
                statement = scraper.post_process_transactions(statement)
            except Exception as e:
                logger.error(
                    f"Failed to scrape a statement successfully with {scraper_name}: {e}",
                    exc_info=True,
                    scraper=scraper_name,
                )
                raise

            logger.info(
                "Scraped statement",
                account=statement.account_number,
                transactions=len(statement.transactions),
            )
            self.write(statement, formatters)
            return statement
        finally:
            clear_run_id()

    def write(self, statement: Statement, formatters: List[OutputFormatter]) -> None:
        """Hand the statement to each formatter in order."""
        for output_formatter in formatters:
            logger.debug(f"Outputting to {output_formatter.configuration}")
            output_formatter.output(statement)
