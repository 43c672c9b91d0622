"""
Formatter Registry

Resolves output formatter configurations of the form "name" or
"name:arguments" to formatter instances.
"""
from typing import Optional, Tuple

from bankjob.common.exceptions import UnknownFormatterError
from bankjob.common.logging_config import get_logger
from bankjob.core.statement import Statement
from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .ofx import OfxFormatter
from .qif import QifFormatter
from .stdout import StdoutFormatter

logger = get_logger(__name__)

FORMATTER_SUFFIX = "Formatter"

FORMATTERS = {
    'OfxFormatter': OfxFormatter,
    'CsvFormatter': CsvFormatter,
    'QifFormatter': QifFormatter,
    'StdoutFormatter': StdoutFormatter,
}


def parse_configuration(configuration: str) -> Tuple[str, Optional[str]]:
    """Split "name:arguments" at the first colon; arguments are None when absent."""
    name, sep, arguments = str(configuration).partition(":")
    return name.strip(), (arguments if sep else None)


def formatter_class_name(name: str) -> str:
    """'csv' -> 'CsvFormatter'"""
    return name[:1].upper() + name[1:] + FORMATTER_SUFFIX


def create_formatter(configuration: str) -> BaseFormatter:
    """
    Instantiate the formatter named by ``configuration``.

    Args:
        configuration: "name" or "name:arguments", e.g. "ofx:out.ofx"

    Raises:
        UnknownFormatterError: if no formatter has that name
    """
    name, arguments = parse_configuration(configuration)
    formatter_cls = FORMATTERS.get(formatter_class_name(name)) if name else None
    if formatter_cls is None:
        raise UnknownFormatterError(configuration, name, available=list_formatters())
    logger.debug(f"Resolved formatter {formatter_cls.__name__}", configuration=configuration)
    return formatter_cls(arguments)


def list_formatters() -> list:
    """Configuration names of all registered formatters."""
    return [cls_name[:-len(FORMATTER_SUFFIX)].lower() for cls_name in FORMATTERS]


class OutputFormatter:
    """
    A configured output: the configuration string and the formatter it
    resolves to. Resolution happens on construction so that a bad
    configuration fails before any scraping starts.
    """

    def __init__(self, configuration: str):
        self.configuration = configuration
        self.formatter = create_formatter(configuration)

    def output(self, statement: Statement) -> None:
        self.formatter.output(statement)

    def __repr__(self):
        return f"OutputFormatter({self.configuration!r})"
