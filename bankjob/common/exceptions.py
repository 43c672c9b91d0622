"""
Exceptions raised by the statement model and the output formatters.
"""


class BankjobError(Exception):
    """Base class for every error raised by bankjob."""


class MalformedAmountError(BankjobError, ValueError):
    """
    Raised when a scraped amount or balance cannot be converted to a number.

    Only the numeric accessor that asked for the conversion fails; the
    transaction keeps the scraped string untouched.
    """

    def __init__(self, value, decimal: str = None):
        self.value = value
        self.decimal = decimal

        message = f"Cannot convert {value!r} to a number"
        if decimal:
            message += f" using decimal separator {decimal!r}"
        super().__init__(message)


class NonContiguousMergeError(BankjobError):
    """
    Raised when two statements cannot be merged into one contiguous run.

    This usually means a statement between the two was never scraped, or the
    overlapping region was scraped differently the second time around.

    This exception includes:
    - The number of transactions on each side
    - The size of the merged result
    - The first position in the trailing run that did not match
    """

    def __init__(self, message: str, own_count: int = None, other_count: int = None,
                 merged_count: int = None, mismatch_index: int = None):
        self.own_count = own_count
        self.other_count = other_count
        self.merged_count = merged_count
        self.mismatch_index = mismatch_index

        details = []
        if own_count is not None:
            details.append(f"Transactions in statement: {own_count}")
        if other_count is not None:
            details.append(f"Transactions being merged in: {other_count}")
        if merged_count is not None:
            details.append(f"Transactions after union: {merged_count}")
        if mismatch_index is not None:
            details.append(f"First mismatch at position {mismatch_index} of the merged-in statement")
        details.append("Check for a missed intermediate statement or a scraping fault in the overlap.")

        full_message = f"{message}\n" + "\n".join(details)
        super().__init__(full_message)


class UnknownFormatterError(BankjobError):
    """Raised when an output formatter configuration does not name a known formatter."""

    def __init__(self, configuration: str, name: str = None, available=None):
        self.configuration = configuration
        self.name = name
        self.available = list(available or [])

        message = f"Unknown output formatter {configuration!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class MissingRequiredFieldError(BankjobError, ValueError):
    """
    Raised when a required value is absent.

    Statement construction raises it for a missing account number and the
    formatters raise it when a statement is incomplete for their format.
    """

    def __init__(self, field: str, context: str = None):
        self.field = field
        self.context = context

        message = f"Missing required field: {field}"
        if context:
            message += f" ({context})"
        super().__init__(message)
