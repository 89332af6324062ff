from decimal import Decimal
from pathlib import Path

import pytest

from statement_pnl import (
    NoStatementFilesError,
    NoTransactionsFoundError,
    StatementReadError,
    build_report,
    format_currency,
    load_statements,
    parse_statement_texts,
    select_statement_files,
)
from statement_pnl.batch import resolve_max_workers

FILE_A = """
Transaction Date,Post Date,Description,Category,Type,Amount,Memo
01/01/2024,01/02/2024,Coffee,Dining,Sale,-4.50,
01/03/2024,01/04/2024,Payment,,Payment,100.00,
"""

FILE_B = """
Details,Posting Date,Description,Amount,Type,Balance,Check or Slip #
DEBIT,01/05/2024,ATM Withdrawal,-20,ATM,980.00,
"""


def test_results_concatenate_in_submission_order(write_csv):
    a = write_csv("a.csv", FILE_A)
    b = write_csv("b.csv", FILE_B)

    result = load_statements([a, b])

    assert [t.description for t in result.transactions] == ["Coffee", "Payment", "ATM Withdrawal"]
    assert result.files_loaded == 2

    reversed_result = load_statements([b, a], max_workers=1)
    assert [t.description for t in reversed_result.transactions] == [
        "ATM Withdrawal",
        "Coffee",
        "Payment",
    ]


def test_non_csv_names_are_ignored(write_csv, tmp_path: Path):
    a = write_csv("A.CSV", FILE_A)
    notes = tmp_path / "notes.txt"
    notes.write_text("not a statement", encoding="utf-8")

    assert select_statement_files([notes, a]) == [a]
    assert len(load_statements([notes, a]).transactions) == 2


def test_no_csv_files_is_an_error(tmp_path: Path):
    with pytest.raises(NoStatementFilesError, match="No CSV files found"):
        load_statements([tmp_path / "statement.pdf"])


def test_any_read_failure_fails_the_whole_batch(write_csv, tmp_path: Path):
    a = write_csv("a.csv", FILE_A)
    missing = tmp_path / "missing.csv"

    with pytest.raises(StatementReadError) as excinfo:
        load_statements([a, missing])

    assert excinfo.value.failed == ["missing.csv"]
    assert isinstance(excinfo.value.causes[0], FileNotFoundError)


def test_empty_and_unrecognized_files_do_not_block_others(write_csv):
    empty = write_csv("empty.csv", "   \n")
    unknown = write_csv("unknown.csv", "Date,Balance\n01/01/2024,10")
    b = write_csv("b.csv", FILE_B)

    result = load_statements([empty, unknown, b])

    assert len(result.transactions) == 1
    # The blank file is skipped; the unrecognized one was still parsed.
    assert result.files_loaded == 2


def test_batch_with_no_transactions_is_reported(write_csv):
    unknown = write_csv("unknown.csv", "Date,Balance\n01/01/2024,10")

    with pytest.raises(NoTransactionsFoundError, match="No transactions found"):
        load_statements([unknown])


def test_byte_order_mark_is_ignored(tmp_path: Path):
    path = tmp_path / "bom.csv"
    path.write_bytes("\ufeffAmount,Type\n5,Deposit\n".encode())

    (tx,) = load_statements([path]).transactions

    assert tx.amount == Decimal("5")


def test_parse_statement_texts_is_pure():
    result = parse_statement_texts(["Amount,Type\n1,A", "", "Amount,Type\n2,B"])

    assert [t.type for t in result.transactions] == ["A", "B"]
    assert result.files_loaded == 2


def test_resolve_max_workers(monkeypatch):
    assert resolve_max_workers(3) == 3
    assert resolve_max_workers(50) == 8
    assert resolve_max_workers(50, 100) == 32
    monkeypatch.setenv("STATEMENT_PNL_MAX_WORKERS", "2")
    assert resolve_max_workers(10) == 2
    monkeypatch.setenv("STATEMENT_PNL_MAX_WORKERS", "lots")
    assert resolve_max_workers(10) == 8


def test_build_report_over_batch(write_csv):
    result = load_statements([write_csv("a.csv", FILE_A), write_csv("b.csv", FILE_B)])

    report = build_report(result)

    assert report.transaction_count == 3
    assert report.active_count == 3
    assert report.types == {"ATM": True, "Payment": True, "Sale": True}
    assert report.revenue == Decimal("100.00")
    assert report.expense == Decimal("24.50")
    assert report.net == Decimal("75.50")


def test_format_currency():
    assert format_currency(Decimal("1234.5")) == "$1,234.50"
    assert format_currency(Decimal("-4.5")) == "-$4.50"
    assert format_currency(Decimal("-0.001")) == "$0.00"
