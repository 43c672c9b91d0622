"""
Statement

A bank statement built by a scraper: the list of scraped transactions plus
account details and closing balances. Provides merging of overlapping
statements and the post-scrape finishing step.
"""
import copy
from datetime import datetime, timedelta
from enum import Enum
from typing import List, Optional

from bankjob.common.exceptions import (
    MalformedAmountError,
    MissingRequiredFieldError,
    NonContiguousMergeError,
)
from bankjob.common.logging_config import get_logger
from bankjob.common.models import Transaction
from bankjob.common.support import create_date_time

logger = get_logger(__name__)

ONE_MINUTE = 60
ELEVEN_59_PM = 23 * 60 * 60 + 59 * 60  # seconds at 23:59
MIDDAY = 12 * 60 * 60
TWO_AM = 2 * 60 * 60

MAX_ACCOUNT_NUMBER_LENGTH = 22
MAX_BANK_ID_LENGTH = 9


class AccountType(str, Enum):
    """OFX ACCTTYPE values."""
    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    MONEYMRKT = "MONEYMRKT"
    CREDITLINE = "CREDITLINE"  # loan account

    def __str__(self):
        return self.value


def _is_midnight(value: datetime) -> bool:
    return value.time() == datetime.min.time()


class Statement:
    """
    Ordered collection of transactions for one account.

    Transactions are kept in the order they were scraped, which need not be
    chronological. ``finish`` (or ``finish_with_most_recent_last``) is called
    once after scraping to fill in the balances and the covered date range.

    Attributes:
        account_number: 1-22 character account id (OFX ACCTID)
        bank_id: optional 1-9 character bank id (OFX BANKID)
        account_type: AccountType, defaults to CHECKING
        currency: three-letter currency code (OFX CURDEF)
        closing_balance: balance after the last transaction (LEDGERBAL)
        closing_available: available funds after the last transaction (AVAILBAL)
        transactions: list of Transaction in scrape order
    """

    def __init__(self, account_number: str, currency: str = "EUR"):
        if account_number is None or not str(account_number).strip():
            raise MissingRequiredFieldError("account_number", "a statement needs an account number")
        self.account_number = account_number
        self.currency = currency
        self._bank_id = None
        self._account_type = AccountType.CHECKING
        self.closing_balance = None
        self.closing_available = None
        self._from_date = None
        self._to_date = None
        self.transactions: List[Transaction] = []

    @property
    def account_number(self) -> str:
        return self._account_number

    @account_number.setter
    def account_number(self, value):
        value = str(value)
        if len(value) > MAX_ACCOUNT_NUMBER_LENGTH:
            raise ValueError(f"Account number must be at most {MAX_ACCOUNT_NUMBER_LENGTH} characters: {value!r}")
        self._account_number = value

    @property
    def bank_id(self) -> Optional[str]:
        return self._bank_id

    @bank_id.setter
    def bank_id(self, value):
        if value is not None and len(str(value)) > MAX_BANK_ID_LENGTH:
            raise ValueError(f"Bank id must be at most {MAX_BANK_ID_LENGTH} characters: {value!r}")
        self._bank_id = None if value is None else str(value)

    @property
    def account_type(self) -> AccountType:
        return self._account_type

    @account_type.setter
    def account_type(self, value):
        try:
            self._account_type = AccountType(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown account type: {value!r}") from None

    @property
    def from_date(self) -> Optional[datetime]:
        """First date covered (OFX DTSTART); earliest transaction date unless set."""
        if self._from_date is not None:
            return self._from_date
        dates = self._sorted_dates()
        return dates[0] if dates else None

    @from_date.setter
    def from_date(self, value):
        self._from_date = create_date_time(value)

    @property
    def to_date(self) -> Optional[datetime]:
        """Last date covered (OFX DTEND); latest transaction date unless set."""
        if self._to_date is not None:
            return self._to_date
        dates = self._sorted_dates()
        return dates[-1] if dates else None

    @to_date.setter
    def to_date(self, value):
        self._to_date = create_date_time(value)

    def _sorted_dates(self) -> List[datetime]:
        return sorted(tx.date for tx in self.transactions if tx.date is not None)

    def add_transaction(self, transaction: Transaction) -> None:
        """Append a transaction to the end of the statement."""
        self.transactions.append(transaction)

    def sorted_transactions(self) -> List[Transaction]:
        """Transactions in ascending date order, scrape order kept for equal dates."""
        missing = [i for i, tx in enumerate(self.transactions) if tx.date is None]
        if missing:
            raise MissingRequiredFieldError("date", f"transaction at position {missing[0]} has no date")
        return sorted(self.transactions, key=lambda tx: tx.date)

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge_transactions(self, other: "Statement") -> List[Transaction]:
        """
        Return the ordered union of this statement's transactions and those
        of ``other``.

        The union keeps the first occurrence of each transaction. The last
        ``len(other.transactions)`` entries of the union must be exactly the
        transactions of ``other``; otherwise the two statements do not join
        up and NonContiguousMergeError is raised.
        """
        if not isinstance(other, Statement):
            raise TypeError(f"Cannot merge {type(other).__name__} into a Statement")

        union = []
        seen = set()
        for tx in self.transactions + other.transactions:
            if tx not in seen:
                seen.add(tx)
                union.append(tx)

        other_count = len(other.transactions)
        trailing = union[len(union) - other_count:]
        if trailing != other.transactions:
            mismatch = next(
                (i for i, (a, b) in enumerate(zip(trailing, other.transactions)) if a != b),
                None,
            )
            logger.warning(
                "Rejected non-contiguous merge",
                account=self.account_number,
                own_count=len(self.transactions),
                other_count=other_count,
                merged_count=len(union),
            )
            raise NonContiguousMergeError(
                "Failed to merge transactions: the statements do not overlap contiguously.",
                own_count=len(self.transactions),
                other_count=other_count,
                merged_count=len(union),
                mismatch_index=mismatch,
            )

        logger.debug(
            "Merged statements",
            account=self.account_number,
            merged_count=len(union),
            duplicates=len(self.transactions) + other_count - len(union),
        )
        return union

    def merge(self, other: "Statement") -> "Statement":
        """
        Merge ``other`` into a copy of this statement and return the copy.

        Neither statement is changed. The copy's closing balances are
        cleared and must be set again, typically by calling ``finish``.
        """
        union = self.merge_transactions(other)
        merged = copy.copy(self)
        merged.closing_balance = None
        merged.closing_available = None
        merged.transactions = union
        return merged

    def merge_in_place(self, other: "Statement") -> None:
        """Merge ``other`` into this statement. See ``merge``."""
        union = self.merge_transactions(other)
        self.closing_balance = None
        self.closing_available = None
        self.transactions = union

    # ------------------------------------------------------------------
    # Finishing
    # ------------------------------------------------------------------

    def finish(self, most_recent_first: bool, fake_times: bool = False) -> None:
        """
        Complete the statement once scraping is over.

        1. Closing balances and the date range are taken from the boundary
           transactions (the first one is the most recent when
           ``most_recent_first``, otherwise the last one is). Values already
           set by the scraper are left alone.

        2. With ``fake_times``, and when the scraped dates carry no time of
           day, times are invented so that consumers sorting by timestamp
           keep the scraped order within a day. Walking from the most recent
           transaction, the most recent day starts a few minutes after
           midnight ((n + 1) minutes) and counts down one minute per
           transaction; every older day starts at 23:59 and counts down.
           A statement covering a single day starts at midday instead.

           Starting the first day near midnight and the others near 23:59
           keeps adjoining statements for the same day from producing the
           same times, provided that:
           i.  a day has few transactions compared to the 1440 minutes in it
           ii. a single day does not span more than 3 statements

        Does nothing for a statement without transactions.
        """
        if not self.transactions:
            logger.debug("Nothing to finish: statement has no transactions", account=self.account_number)
            return

        if most_recent_first:
            newest, oldest = self.transactions[0], self.transactions[-1]
        else:
            newest, oldest = self.transactions[-1], self.transactions[0]

        self._fill_boundaries(newest, oldest)

        to_date = self.to_date
        if fake_times and to_date is not None and _is_midnight(to_date):
            self._fake_times(most_recent_first)

    def _fill_boundaries(self, newest: Transaction, oldest: Transaction) -> None:
        try:
            balance = newest.real_new_balance
        except MalformedAmountError as e:
            logger.warning(
                f"Leaving closing balances unset: {e}",
                account=self.account_number,
                new_balance=newest.new_balance,
            )
            balance = None
        if self.closing_balance is None:
            self.closing_balance = balance
        if self.closing_available is None:
            self.closing_available = balance
        if self._to_date is None:
            self._to_date = newest.date
        if self._from_date is None:
            self._from_date = oldest.date

    def _fake_times(self, most_recent_first: bool) -> None:
        count = len(self.transactions)
        if self.to_date == self.from_date:
            seconds = MIDDAY
        else:
            seconds = (count + 1) * ONE_MINUTE

        if most_recent_first:
            indices = range(0, count)
        else:
            indices = range(count - 1, -1, -1)

        current_day = self.transactions[indices[0]].date.date()
        for i in indices:
            tx = self.transactions[i]
            if tx.date.date() != current_day:
                # new day, count down from 23:59 again
                current_day = tx.date.date()
                seconds = ELEVEN_59_PM
            if _is_midnight(tx.date):
                tx.date = tx.date + timedelta(seconds=seconds)
            seconds -= ONE_MINUTE

        logger.debug("Assigned synthetic times", account=self.account_number, count=count)

    def finish_with_most_recent_last(self, fake_times: bool = False) -> None:
        """
        Complete a statement whose transactions are in ascending date order.

        Balances and ``to_date`` come from the last transaction, ``from_date``
        from the first. With ``fake_times`` each day's undated transactions
        get 02:00, 02:01, ... in scrape order. Unlike ``finish`` this does
        not try to avoid the times used by an adjoining statement.
        """
        if not self.transactions:
            logger.debug("Nothing to finish: statement has no transactions", account=self.account_number)
            return

        self._fill_boundaries(self.transactions[-1], self.transactions[0])

        if fake_times:
            groups = {}
            for tx in self.transactions:
                groups.setdefault(tx.date.date(), []).append(tx)
            for day, txs in groups.items():
                start = datetime.combine(day, datetime.min.time()) + timedelta(seconds=TWO_AM)
                for i, tx in enumerate(txs):
                    if _is_midnight(tx.date):
                        tx.date = start + timedelta(seconds=i * ONE_MINUTE)

    def __eq__(self, other):
        if not isinstance(other, Statement):
            return NotImplemented
        return (self.from_date == other.from_date and
                self.to_date == other.to_date and
                self.closing_balance == other.closing_balance and
                self.closing_available == other.closing_available and
                self.transactions == other.transactions)

    __hash__ = None

    def __str__(self):
        lines = [f"{self.__class__.__name__}: close_bal = {self.closing_balance}, "
                 f"avail = {self.closing_available}, curr = {self.currency}, transactions:"]
        for tx in self.transactions:
            lines.append(f"\t\t{tx}")
        lines.append("---")
        return "\n".join(lines) + "\n"
