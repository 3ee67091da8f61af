"""Mini README: Tests for the Typer launcher.

Only ``summary`` is exercised; ``run`` hands control to uvicorn.
"""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from bank_tracker.configuration import get_settings
from bank_tracker.ledger import Ledger
from bank_tracker.persistence import JsonFileStore
from main_tracker import cli


@pytest.fixture()
def data_directory(tmp_path, monkeypatch):
    monkeypatch.setenv("BANK_TRACKER_DATA_DIRECTORY", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()


def test_summary_reports_stored_ledger(data_directory) -> None:
    ledger = Ledger(store=JsonFileStore(data_directory))
    ledger.add("deposit", 1000)
    ledger.add("withdrawal", 300)

    result = CliRunner().invoke(cli, ["summary"])

    assert result.exit_code == 0
    assert "Balance: 700.00" in result.stdout
    assert "Transactions: 2 (1 deposits totalling 1000.00, 1 withdrawals totalling 300.00)" in result.stdout


def test_summary_on_empty_storage(data_directory) -> None:
    result = CliRunner().invoke(cli, ["summary"])

    assert result.exit_code == 0
    assert "Balance: 0.00" in result.stdout
