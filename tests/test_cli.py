import json
from pathlib import Path

from typer.testing import CliRunner

from statement_pnl.cli import app

runner = CliRunner()

STATEMENT = """
Transaction Date,Post Date,Description,Category,Type,Amount,Memo
01/01/2024,01/02/2024,Coffee,Dining,Sale,-4.50,
01/03/2024,01/04/2024,Payment,,Payment,100.00,
01/05/2024,01/06/2024,Books,Shopping,Sale,"-1,200.00",
"""


def test_summary_prints_totals(write_csv):
    path = write_csv("card.csv", STATEMENT)

    result = runner.invoke(app, ["summary", str(path)])

    assert result.exit_code == 0, result.output
    assert "Loaded 3 transactions from 1 file" in result.output
    assert "Revenue:\t$100.00" in result.output
    assert "Expense:\t$1,204.50" in result.output
    assert "Net:\t-$1,104.50" in result.output


def test_summary_json_respects_excluded_types(write_csv):
    path = write_csv("card.csv", STATEMENT)

    result = runner.invoke(app, ["summary", str(path), "--exclude-type", "Payment", "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.output.strip().splitlines()[-1])
    assert payload["types"] == {"Payment": False, "Sale": True}
    assert payload["active_count"] == 2
    assert payload["revenue"] == "0"
    assert payload["expense"] == "1204.50"


def test_transactions_lists_one_page(write_csv):
    path = write_csv("card.csv", STATEMENT)

    result = runner.invoke(app, ["transactions", str(path), "--page-size", "2", "--page", "2"])

    assert result.exit_code == 0, result.output
    lines = result.output.strip().splitlines()
    assert lines[-2:] == ["01/05/2024\tBooks\tSale\t-$1,200.00", "Page 2 of 2"]


def test_transactions_page_size_from_env(write_csv, monkeypatch):
    path = write_csv("card.csv", STATEMENT)
    monkeypatch.setenv("STATEMENT_PNL_PAGE_SIZE", "1")

    result = runner.invoke(app, ["transactions", str(path)])

    assert result.exit_code == 0, result.output
    assert "Page 1 of 3" in result.output
    assert "Payment" not in result.output


def test_types_lists_distinct_sorted(write_csv):
    path = write_csv("card.csv", STATEMENT)

    result = runner.invoke(app, ["types", str(path)])

    assert result.exit_code == 0, result.output
    assert result.output.strip().splitlines()[-2:] == ["Payment", "Sale"]


def test_no_csv_files_reports_error(tmp_path: Path):
    other = tmp_path / "statement.txt"
    other.write_text("Amount,Type\n1,A\n", encoding="utf-8")

    result = runner.invoke(app, ["summary", str(other)])

    assert result.exit_code == 1
    assert "No CSV files found" in result.output


def test_read_failure_reports_error(tmp_path: Path):
    result = runner.invoke(app, ["summary", str(tmp_path / "missing.csv")])

    assert result.exit_code == 1
    assert "Failed to read file(s): missing.csv" in result.output


def test_empty_batch_reports_no_transactions(write_csv):
    path = write_csv("unknown.csv", "Date,Balance\n01/01/2024,10\n")

    result = runner.invoke(app, ["summary", str(path)])

    assert result.exit_code == 1
    assert "No transactions found" in result.output
