from typing import List, Optional
from xml.sax.saxutils import escape

from bankjob.common.exceptions import MissingRequiredFieldError
from bankjob.common.models import OFX_DATE_FORMAT, Transaction
from bankjob.core.statement import Statement
from bankjob.exporting.base import BaseFormatter

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Some consumers only accept these attributes in exactly this order.
OFX_HEADER = '<?OFX OFXHEADER="200" SECURITY="NONE" OLDFILEUID="NONE" NEWFILEUID="NONE" VERSION="200"?>'

INDENT = "  "


def _element(depth: int, tag: str, value) -> str:
    pad = INDENT * depth
    if value is None:
        return f"{pad}<{tag}/>"
    return f"{pad}<{tag}>{escape(str(value))}</{tag}>"


class OfxFormatter(BaseFormatter):
    """
    Writes a statement as an OFX 2.0 bank statement response.
    """

    def render(self, statement: Statement) -> str:
        """
        Generates the complete OFX document for a finished statement.
        """
        self.check_account(statement)
        transactions = statement.sorted_transactions()

        from_date = statement.from_date
        to_date = statement.to_date
        if from_date is None or to_date is None:
            raise MissingRequiredFieldError("from_date/to_date", "statement has no transactions and no explicit dates")

        start_str = from_date.strftime(OFX_DATE_FORMAT)
        end_str = to_date.strftime(OFX_DATE_FORMAT)

        out = []
        out.append(XML_DECLARATION)
        out.append(OFX_HEADER)
        out.append("<OFX>")
        out.append("  <BANKMSGSRSV1>")
        out.append("    <STMTTRNRS>")
        out.append("      <STMTRS>")
        out.append(_element(4, "CURDEF", statement.currency))
        out.append("        <BANKACCTFROM>")
        out.append(_element(5, "BANKID", statement.bank_id))
        out.append(_element(5, "ACCTID", statement.account_number))
        out.append(_element(5, "ACCTTYPE", statement.account_type.value))
        out.append("        </BANKACCTFROM>")
        out.append("        <BANKTRANLIST>")
        out.append(_element(5, "DTSTART", start_str))
        out.append(_element(5, "DTEND", end_str))

        for txn in transactions:
            out.extend(self._build_transaction(txn))

        out.append("        </BANKTRANLIST>")
        out.append("        <LEDGERBAL>")
        out.append(_element(5, "BALAMT", statement.closing_balance))
        out.append(_element(5, "DTASOF", end_str))
        out.append("        </LEDGERBAL>")
        out.append("        <AVAILBAL>")
        out.append(_element(5, "BALAMT", statement.closing_available))
        out.append(_element(5, "DTASOF", end_str))
        out.append("        </AVAILBAL>")
        out.append("      </STMTRS>")
        out.append("    </STMTTRNRS>")
        out.append("  </BANKMSGSRSV1>")
        out.append("</OFX>")

        return "\n".join(out) + "\n"

    def _build_transaction(self, txn: Transaction) -> List[str]:
        payee = txn.payee
        lines = [
            "          <STMTTRN>",
            _element(6, "TRNTYPE", txn.type.value),
            _element(6, "DTPOSTED", txn.date.strftime(OFX_DATE_FORMAT)),
            _element(6, "TRNAMT", self._amount(txn.amount)),
            _element(6, "FITID", txn.ofx_id),
        ]
        if txn.check_number is not None:
            lines.append(_element(6, "CHECKNUM", txn.check_number))
        lines.extend([
            "            <PAYEE>",
            _element(7, "NAME", payee.name),
            _element(7, "ADDR1", payee.address),
            _element(7, "CITY", payee.city),
            _element(7, "STATE", payee.state),
            _element(7, "POSTALCODE", payee.postalcode),
        ])
        # COUNTRY has minOccurs="0" in the schema
        if payee.country is not None:
            lines.append(_element(7, "COUNTRY", payee.country))
        lines.extend([
            _element(7, "PHONE", payee.phone),
            "            </PAYEE>",
            _element(6, "MEMO", txn.description),
            "          </STMTTRN>",
        ])
        return lines

    @staticmethod
    def _amount(amount) -> Optional[str]:
        # TRNAMT carries the amount as scraped, either separator is accepted
        return None if amount is None else str(amount).strip()
