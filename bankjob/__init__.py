"""
bankjob

Canonical bank statement model for scraped transactions:
- Payee, Transaction and Statement
- Statement merging and post-scrape finishing
- OFX, CSV, QIF and console output formatters
"""

__version__ = "0.5.2"

from .common.exceptions import (
    BankjobError,
    MalformedAmountError,
    MissingRequiredFieldError,
    NonContiguousMergeError,
    UnknownFormatterError,
)
from .common.models import Payee, Transaction, TransactionType
from .common.support import capitalize_words, create_date_time, string_to_decimal
from .core.statement import AccountType, Statement
from .exporting import OutputFormatter, create_formatter

__all__ = [
    # Errors
    'BankjobError',
    'MalformedAmountError',
    'MissingRequiredFieldError',
    'NonContiguousMergeError',
    'UnknownFormatterError',
    # Model
    'Payee',
    'Transaction',
    'TransactionType',
    'AccountType',
    'Statement',
    # Support
    'capitalize_words',
    'create_date_time',
    'string_to_decimal',
    # Output
    'OutputFormatter',
    'create_formatter',
]
