"""
Shared fixtures for the bankjob test suite.
"""
import logging
from datetime import datetime

import pytest

from bankjob.common.models import Transaction, TransactionType
from bankjob.core.statement import Statement


def make_transaction(date, raw_description="Payment", amount="-10.00",
                     new_balance="100.00", type=TransactionType.DEBIT, decimal="."):
    """Build a transaction the way a scraper would."""
    tx = Transaction(decimal)
    tx.date = date
    tx.raw_description = raw_description
    tx.amount = amount
    tx.new_balance = new_balance
    tx.type = type
    return tx


@pytest.fixture
def tx_factory():
    return make_transaction


@pytest.fixture
def sample_statement():
    """
    Finished two-transaction statement, scraped most recent first.
    """
    statement = Statement("12345678")
    statement.add_transaction(make_transaction(
        datetime(2008, 1, 15), "Coffee, cake", "-3.50", "96.50", TransactionType.DEBIT))
    statement.add_transaction(make_transaction(
        datetime(2008, 1, 14), "Salary", "100.00", "100.00", TransactionType.CREDIT))
    statement.finish(most_recent_first=True)
    return statement


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
