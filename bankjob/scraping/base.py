"""
Base Class for Scrapers

A scraper turns an online banking site into a Statement. The site-specific
navigation and table parsing live in subclasses; this base class only fixes
how statements and transactions are created so that every transaction of a
statement shares the scraper's decimal separator and currency.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from bankjob.common.logging_config import get_logger
from bankjob.common.models import Transaction
from bankjob.core.statement import Statement

logger = get_logger(__name__)


class BaseScraper(ABC):
    """
    Abstract Base Class for all scrapers.

    Subclasses implement ``scrape_statement``: build a statement with
    ``create_statement``, append transactions made with
    ``create_transaction`` in the order the site lists them, and call one
    of the statement's finishing methods exactly once.

    Attributes:
        decimal: decimal separator used by the site ("." or ",")
        currency: three-letter currency code of the account
    """

    decimal = "."
    currency = "EUR"

    def create_statement(self, account_number: str) -> Statement:
        """Create an empty statement in the scraper's currency."""
        return Statement(account_number, self.currency)

    def create_transaction(self) -> Transaction:
        """Create a transaction that parses amounts with the scraper's separator."""
        return Transaction(self.decimal)

    @abstractmethod
    def scrape_statement(self, args: Optional[List[str]] = None) -> Statement:
        """
        Scrape the site and return the finished statement.
        Must be implemented by subclasses.
        """
        raise NotImplementedError

    def post_process_transactions(self, statement: Statement) -> Statement:
        """
        Hook run on the scraped statement before it is written out.
        Defaults to returning it unchanged.
        """
        return statement
