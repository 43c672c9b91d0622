import hashlib
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

from bankjob.common.support import create_date_time, string_to_decimal

# canonical form used for equality, hashing and OFX date elements
OFX_DATE_FORMAT = '%Y%m%d%H%M%S'

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class TransactionType(str, Enum):
    """OFX TRNTYPE values."""
    CREDIT = "CREDIT"            # Generic credit
    DEBIT = "DEBIT"              # Generic debit
    INT = "INT"                  # Interest earned or paid
    DIV = "DIV"                  # Dividend
    FEE = "FEE"                  # FI fee
    SRVCHG = "SRVCHG"            # Service charge
    DEP = "DEP"                  # Deposit
    ATM = "ATM"                  # ATM debit or credit
    POS = "POS"                  # Point of sale debit or credit
    XFER = "XFER"                # Transfer
    CHECK = "CHECK"              # Check
    PAYMENT = "PAYMENT"          # Electronic payment
    CASH = "CASH"                # Cash withdrawal
    DIRECTDEP = "DIRECTDEP"      # Direct deposit
    DIRECTDEBIT = "DIRECTDEBIT"  # Merchant initiated debit
    REPEATPMT = "REPEATPMT"      # Repeating payment/standing order
    OTHER = "OTHER"

    def __str__(self):
        return self.value

    @classmethod
    def coerce(cls, value) -> "TransactionType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown transaction type: {value!r}") from None


@dataclass
class Payee:
    """
    Counterparty of a transaction. Maps to the OFX PAYEE aggregate.

    Every field is optional; an empty Payee still produces an (empty)
    PAYEE element so that consumers do not invent an "unknown payee".
    """
    name: Optional[str] = None        # NAME
    address: Optional[str] = None     # ADDR1
    city: Optional[str] = None        # CITY
    state: Optional[str] = None       # STATE
    postalcode: Optional[str] = None  # POSTALCODE
    country: Optional[str] = None     # COUNTRY, omitted from OFX when None
    phone: Optional[str] = None       # PHONE

    def __str__(self):
        return self.name or ""


def _integer_part(value) -> int:
    """Leading integer of a scraped amount, 0 when there is none."""
    if isinstance(value, (int, float, Decimal)):
        return int(value)
    match = _LEADING_INT.match(str(value or ""))
    return int(match.group(1)) if match else 0


class Transaction:
    """
    One movement on a bank account as scraped from a banking site.

    Amounts are kept exactly as scraped (strings, possibly with locale
    separators); ``real_amount`` and ``real_new_balance`` convert them using
    the decimal separator given at construction.

    Two transactions are equal when date (to the second), raw description,
    amount, type and new balance match. Value date, description, payee and
    ofx_id do not take part, so repeated scrapes of the same movement
    collapse when statements are merged.
    """

    def __init__(self, decimal: str = "."):
        self.decimal = decimal
        self._date = None
        self._value_date = None
        self._type = TransactionType.OTHER
        self._description = None
        self._ofx_id = None
        self._payee = Payee()
        self.raw_description = None
        self.amount = "0"
        self.new_balance = "0"
        self.check_number = None

    @property
    def date(self):
        """Posting date (OFX DTPOSTED)."""
        return self._date

    @date.setter
    def date(self, raw_date_time):
        self._date = create_date_time(raw_date_time)

    @property
    def value_date(self):
        """Date the funds take effect (OFX DTUSER). Ignored by equality."""
        return self._value_date

    @value_date.setter
    def value_date(self, raw_date_time):
        self._value_date = create_date_time(raw_date_time)

    @property
    def type(self) -> TransactionType:
        return self._type

    @type.setter
    def type(self, value):
        self._type = TransactionType.coerce(value)

    @property
    def description(self):
        """Description for output (OFX MEMO); the raw description until set."""
        if self._description is None:
            return self.raw_description
        return self._description

    @description.setter
    def description(self, value):
        self._description = value

    @property
    def payee(self) -> Payee:
        return self._payee

    @payee.setter
    def payee(self, value):
        self._payee = value if value is not None else Payee()

    @property
    def ofx_id(self) -> str:
        """
        Unique id for the OFX FITID element.

        Generated on first access as an MD5 digest of date, raw description,
        type, amount and new balance, so identical transactions from separate
        scrapes always get the same id. An assigned id is returned as is.
        """
        if self._ofx_id is None:
            self._ofx_id = self._compute_ofx_id()
        return self._ofx_id

    @ofx_id.setter
    def ofx_id(self, value):
        self._ofx_id = value

    def _compute_ofx_id(self) -> str:
        text = ":".join([
            self._date_key() or "",
            "" if self.raw_description is None else str(self.raw_description),
            str(self.type),
            "" if self.amount is None else str(self.amount),
            "" if self.new_balance is None else str(self.new_balance),
        ])
        return hashlib.md5(text.encode('utf-8')).hexdigest()

    @property
    def real_amount(self):
        """Amount as a Decimal. Raises MalformedAmountError if unparseable."""
        return string_to_decimal(self.amount, self.decimal)

    @property
    def real_new_balance(self):
        """New balance as a Decimal. Raises MalformedAmountError if unparseable."""
        return string_to_decimal(self.new_balance, self.decimal)

    def _date_key(self) -> Optional[str]:
        return self._date.strftime(OFX_DATE_FORMAT) if self._date else None

    def __eq__(self, other):
        if not isinstance(other, Transaction):
            return NotImplemented
        return (self._date_key() == other._date_key() and
                self.raw_description == other.raw_description and
                self.amount == other.amount and
                self.type == other.type and
                self.new_balance == other.new_balance)

    def __hash__(self):
        return hash((
            _integer_part(self.amount),
            _integer_part(self.new_balance),
            self._date_key(),
            self.raw_description,
            self.type.value,
        ))

    def __str__(self):
        return (f"{self.__class__.__name__} - ofx_id: {self._ofx_id}, date: {self._date}, "
                f"raw description: {self.raw_description}, type: {self.type}, "
                f"amount: {self.amount}, new balance: {self.new_balance}")

    __repr__ = __str__
