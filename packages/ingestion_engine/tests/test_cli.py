import json

from packages.ingestion_engine.cli import main


STATEMENT = """Date,Type,Description,Check #,Amount
2024-03-01,Debit Card,WHOLE FOODS MARKET,,-54.32
bad,Debit Card,SHELL OIL,,-40.00
"""


def test_cli_prints_json_records(tmp_path, capsys):
    path = tmp_path / "statement.csv"
    path.write_text(STATEMENT)

    assert main([str(path), "--json"]) == 0

    records = json.loads(capsys.readouterr().out)
    assert len(records) == 1
    assert records[0]["category"] == "Groceries"
    assert records[0]["amount"] == -5432


def test_cli_table_and_skipped(tmp_path, capsys):
    path = tmp_path / "statement.csv"
    path.write_text(STATEMENT)

    assert main([str(path), "--show-skipped"]) == 0

    captured = capsys.readouterr()
    assert "1 transactions, 1 skipped" in captured.out
    assert "row 2" in captured.err


def test_cli_applies_overrides_file(tmp_path, capsys):
    path = tmp_path / "statement.csv"
    path.write_text("Date,Description,Amount\n2024-03-01,ZQX HOBBY BARN,-12.00\n")
    overrides = tmp_path / "overrides.json"
    overrides.write_text(json.dumps({"zqx": "Shopping"}))

    assert main([str(path), "--json", "--overrides", str(overrides)]) == 0
    assert json.loads(capsys.readouterr().out)[0]["category"] == "Shopping"


def test_cli_fails_without_transactions(tmp_path, capsys):
    path = tmp_path / "statement.csv"
    path.write_text("Date,Description,Amount\n")

    assert main([str(path)]) == 1
    assert "No valid transactions found in file" in capsys.readouterr().err


def test_cli_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.csv")]) == 1
