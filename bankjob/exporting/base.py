"""
Base class for output formatters.
"""
import os
import sys
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import List

from bankjob.common.exceptions import MissingRequiredFieldError
from bankjob.common.logging_config import get_logger
from bankjob.core.statement import Statement

logger = get_logger(__name__)


class BaseFormatter(ABC):
    """
    Writes a finished Statement to a destination.

    The destination is a file path, an open text stream, or empty for
    standard output. Streams passed in are written to but left open; files
    opened here are always closed, even when writing fails.
    """

    # newline translation for files opened by the formatter
    newline = None

    def __init__(self, destination=None):
        self.destination = destination

    @contextmanager
    def output_to(self, destination, newline=None):
        if destination is None or (isinstance(destination, str) and not destination.strip()):
            yield sys.stdout
        elif isinstance(destination, (str, os.PathLike)):
            with open(destination, 'w', encoding='utf-8', newline=newline) as f:
                yield f
        elif hasattr(destination, 'write'):
            yield destination
        else:
            raise TypeError(f"Unsupported destination: {destination!r}")

    def output(self, statement: Statement) -> None:
        """Render ``statement`` and write it out in one pass."""
        text = self.render(statement)
        with self.output_to(self.destination, newline=self.newline) as out:
            out.write(text)
        logger.debug(
            f"{self.__class__.__name__} wrote statement",
            account=statement.account_number,
            transactions=len(statement.transactions),
        )

    @abstractmethod
    def render(self, statement: Statement) -> str:
        """Return the full output for ``statement``."""
        raise NotImplementedError

    @staticmethod
    def check_account(statement: Statement) -> None:
        if not statement.account_number:
            raise MissingRequiredFieldError("account_number", "statement cannot be written without it")

    @staticmethod
    def summary_rows(statement: Statement) -> List[tuple]:
        """The label/value rows every text format starts with."""
        return [
            ("Account Number", statement.account_number),
            ("Bank ID", statement.bank_id),
            ("Account Type", statement.account_type),
            ("Closing balance", statement.closing_balance),
            ("Available funds", statement.closing_available),
            ("Currency", statement.currency),
        ]

    def summary_lines(self, statement: Statement) -> List[str]:
        return [f"{label:<15}: {'' if value is None else str(value)}"
                for label, value in self.summary_rows(statement)]
