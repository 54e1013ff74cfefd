"""Integration tests for end-to-end workflows."""

from ledgerdesk.cli.main import cli


def _run(cli_runner, db_path, *args):
    result = cli_runner.invoke(cli, ["--db-path", db_path, *args])
    assert result.exit_code == 0, result.output
    return result


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: catalog → income → expense → snapshot → reports."""
    db_path = temp_db.database_path

    # Step 1: Set up the catalog
    _run(cli_runner, db_path, "method", "create", "Cash", "--sort-order", "1")
    _run(cli_runner, db_path, "method", "create", "Card", "--sort-order", "2")
    _run(cli_runner, db_path, "category", "create", "Supplies")
    _run(cli_runner, db_path, "type", "create", "Cheque")
    result = _run(cli_runner, db_path, "account", "create", "Main Bank")
    assert "Created account 'Main Bank'" in result.output

    # Step 2: Record a day of income
    result = _run(
        cli_runner, db_path, "income", "add", "--date", "2024-03-01", "--line", "Cash:100", "--line", "Card:50"
    )
    assert "Total: 150.00" in result.output

    # Step 3: Pay a supplier by cheque
    _run(
        cli_runner,
        db_path,
        "expense",
        "add",
        "--date",
        "2024-03-05",
        "--vendor",
        "Paper Co",
        "--amount",
        "40",
        "--type",
        "Cheque",
        "--cheque-no",
        "17",
        "--category",
        "Supplies",
    )

    # Step 4: Close the month
    _run(cli_runner, db_path, "snapshot", "save", "2024-03", "--balance", "Main Bank:500")
    result = _run(cli_runner, db_path, "snapshot", "save", "2024-03", "--balance", "Main Bank:600")
    assert "600.00" in result.output

    # Step 5: Reports agree with each other
    result = _run(cli_runner, db_path, "report", "today", "--date", "2024-03-01")
    assert "150.00" in result.output

    result = _run(cli_runner, db_path, "report", "month", "--date", "2024-03-31")
    assert "110.00" in result.output

    result = _run(cli_runner, db_path, "report", "categories", "--from", "2024-03-01", "--to", "2024-03-31")
    assert "Supplies" in result.output
    assert "40.00" in result.output

    # Step 6: The used method can only be deactivated
    result = cli_runner.invoke(cli, ["--db-path", db_path, "method", "delete", "Cash", "--yes"])
    assert result.exit_code == 1
    _run(cli_runner, db_path, "method", "deactivate", "Cash")

    result = _run(cli_runner, db_path, "income", "list")
    assert "Cash 100.00" in result.output
