"""
Unit tests for BankjobRunner and BaseScraper
"""
from datetime import datetime
from decimal import Decimal

import pytest

from bankjob.common.config import BankjobConfig
from bankjob.common.exceptions import UnknownFormatterError
from bankjob.runner import BankjobRunner
from bankjob.scraping.base import BaseScraper


# =============================================================================
# FIXTURES
# =============================================================================

class FakeScraper(BaseScraper):
    """Builds a fixed statement the way a real scraper would."""

    decimal = ","
    currency = "GBP"

    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []

    def scrape_statement(self, args=None):
        self.calls.append(args)
        if self.fail:
            raise RuntimeError("login page changed")
        statement = self.create_statement("12345678")
        for day, description, amount, balance in [
            (15, "Coffee", "-3,50", "1.096,50"),
            (14, "Salary", "1.000,00", "1.100,00"),
        ]:
            tx = self.create_transaction()
            tx.date = datetime(2008, 1, day)
            tx.raw_description = description
            tx.amount = amount
            tx.new_balance = balance
            statement.add_transaction(tx)
        statement.finish(most_recent_first=True)
        return statement


@pytest.fixture
def scraper():
    return FakeScraper()


# =============================================================================
# TEST: BaseScraper
# =============================================================================

class TestBaseScraper:

    def test_transactions_share_decimal_separator(self, scraper):
        tx = scraper.create_transaction()
        tx.amount = "1.234,56"
        assert tx.real_amount == Decimal("1234.56")

    def test_statement_uses_currency(self, scraper):
        assert scraper.create_statement("12345678").currency == "GBP"

    def test_post_process_defaults_to_identity(self, scraper):
        statement = scraper.create_statement("12345678")
        assert scraper.post_process_transactions(statement) is statement

    def test_cannot_instantiate_without_scrape(self):
        with pytest.raises(TypeError):
            BaseScraper()


# =============================================================================
# TEST: BankjobRunner
# =============================================================================

class TestBankjobRunner:

    def test_writes_every_configured_output(self, scraper, tmp_path, capsys):
        target = tmp_path / "statement.csv"
        config = BankjobConfig(output_formatters=[f"csv:{target}", "qif"])

        statement = BankjobRunner(config).run(scraper, ["--user", "joe"])

        assert scraper.calls == [["--user", "joe"]]
        assert statement.closing_balance == Decimal("1096.50")
        assert target.read_text(encoding="utf-8").startswith("Account Number,12345678\n")
        assert "!Type:Bank" in capsys.readouterr().out

    def test_defaults_to_stdout(self, scraper, capsys):
        BankjobRunner().run(scraper)
        out = capsys.readouterr().out
        assert out.startswith("Account Number : 12345678\n")
        assert "Currency       : GBP" in out

    def test_unknown_formatter_fails_before_scraping(self, scraper):
        config = BankjobConfig(output_formatters=["stdout", "pdf"])
        with pytest.raises(UnknownFormatterError):
            BankjobRunner(config).run(scraper)
        assert scraper.calls == []

    def test_scrape_failure_is_raised(self, capsys):
        failing = FakeScraper(fail=True)
        with pytest.raises(RuntimeError, match="login page changed"):
            BankjobRunner().run(failing)
        assert capsys.readouterr().out == ""

    def test_post_processing_is_applied(self, capsys):
        class RenamingScraper(FakeScraper):
            def post_process_transactions(self, statement):
                for tx in statement.transactions:
                    tx.description = tx.raw_description.upper()
                return statement

        BankjobRunner(BankjobConfig(output_formatters=["qif"])).run(RenamingScraper())

        assert "PCOFFEE\n" in capsys.readouterr().out
