from bankjob.core.statement import Statement
from bankjob.exporting.base import BaseFormatter


class QifFormatter(BaseFormatter):
    """Quicken Interchange Format, preceded by the account summary."""

    def render(self, statement: Statement) -> str:
        self.check_account(statement)
        transactions = statement.sorted_transactions()

        lines = self.summary_lines(statement)
        lines.append("")
        lines.append("!Type:Bank")
        for tx in transactions:
            lines.append(tx.date.strftime("D%m/%d/%Y"))
            amount = tx.real_amount
            lines.append(f"T{'' if amount is None else amount}")
            lines.append(f"P{tx.description or ''}")
            lines.append("^")
        return "\n".join(lines) + "\n"
