from bankjob.core.statement import Statement
from bankjob.exporting.base import BaseFormatter

# date, type, description, amount
LINE_FORMAT = "%-10.10s %-8.8s %-49.49s %10.10s"


class StdoutFormatter(BaseFormatter):
    """Human-readable report, one fixed-width line per transaction."""

    def render(self, statement: Statement) -> str:
        self.check_account(statement)
        transactions = statement.sorted_transactions()

        lines = self.summary_lines(statement)
        lines.append("")
        for tx in transactions:
            lines.append(LINE_FORMAT % (
                tx.date.strftime("%Y-%m-%d"),
                tx.type.value,
                tx.description or "",
                "" if tx.amount is None else str(tx.amount),
            ))
        return "\n".join(lines) + "\n"
