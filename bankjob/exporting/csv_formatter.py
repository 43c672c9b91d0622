"""
CSV output: a label/value summary block followed by one row per transaction.
"""
import io

import pandas as pd

from bankjob.core.statement import Statement
from bankjob.exporting.base import BaseFormatter


class CsvFormatter(BaseFormatter):

    # the csv writer controls line endings itself
    newline = ''

    def render(self, statement: Statement) -> str:
        self.check_account(statement)
        transactions = statement.sorted_transactions()

        buffer = io.StringIO()
        summary = pd.DataFrame(
            [(label, None if value is None else str(value)) for label, value in self.summary_rows(statement)]
        )
        summary.to_csv(buffer, header=False, index=False, lineterminator="\n")
        buffer.write("\n")

        if transactions:
            rows = pd.DataFrame({
                'date': [tx.date.strftime("%Y-%m-%d") for tx in transactions],
                'type': [tx.type.value for tx in transactions],
                'description': [tx.description for tx in transactions],
                'amount': ['' if tx.real_amount is None else str(tx.real_amount) for tx in transactions],
            })
            rows.to_csv(buffer, header=False, index=False, lineterminator="\n")

        return buffer.getvalue()
