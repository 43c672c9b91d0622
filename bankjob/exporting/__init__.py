# Output formatters
from .base import BaseFormatter
from .ofx import OfxFormatter, OFX_HEADER
from .csv_formatter import CsvFormatter
from .qif import QifFormatter
from .stdout import StdoutFormatter
from .registry import FORMATTERS, OutputFormatter, create_formatter, list_formatters

__all__ = [
    'BaseFormatter',
    'OfxFormatter',
    'OFX_HEADER',
    'CsvFormatter',
    'QifFormatter',
    'StdoutFormatter',
    'FORMATTERS',
    'OutputFormatter',
    'create_formatter',
    'list_formatters',
]
