"""Tests for the click CLI against a temporary SQLite database."""

import json
import logging

import pytest
import structlog
from click.testing import CliRunner

from stockres.infrastructure.cli.main import cli
from stockres.infrastructure.config import get_settings


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("STOCKRES_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    get_settings.cache_clear()
    yield CliRunner()
    get_settings.cache_clear()
    logging.getLogger().handlers = []
    structlog.reset_defaults()


def _ok(runner, *args):
    result = runner.invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result


def _seed(runner):
    _ok(runner, "warehouse", "add", "--code", "W1", "--name", "Main", "--priority", "1")
    _ok(runner, "warehouse", "add", "--code", "W2", "--name", "Overflow", "--priority", "2")
    _ok(runner, "stock", "set", "--product", "P1", "--warehouse", "W1", "--unit", "PCS", "--stock", "10")
    _ok(runner, "stock", "set", "--product", "P1", "--warehouse", "W2", "--unit", "PCS", "--stock", "30")


class TestWarehouseCommands:

    def test_add_and_list(self, runner):
        _seed(runner)
        result = _ok(runner, "warehouse", "list", "--summary")
        assert "W1" in result.output
        assert "(default)" in result.output

    def test_set_default(self, runner):
        _seed(runner)
        result = _ok(runner, "warehouse", "set-default", "--code", "W2")
        assert "'W2' is now the default" in result.output

    def test_duplicate_code_is_a_click_error(self, runner):
        _seed(runner)
        result = runner.invoke(cli, ["warehouse", "add", "--code", "W1", "--name", "Again"])
        assert result.exit_code == 1
        assert "already exists" in result.output


class TestCartAndOrderCommands:

    def test_cart_flow(self, runner):
        _seed(runner)
        result = _ok(runner, "cart", "add", "--user", "7", "--product", "P1", "--unit", "PCS", "--quantity", "4")
        assert "in warehouse #1" in result.output

        _ok(runner, "cart", "remove", "--user", "7", "--product", "P1", "--unit", "PCS", "--quantity", "1")
        result = _ok(runner, "cart", "show", "--user", "7")
        assert "RESERVED" in result.output

        result = _ok(runner, "order", "place", "--user", "7")
        assert "status=PENDING" in result.output

        result = _ok(runner, "order", "complete", "--id", "1")
        assert "completed" in result.output

        result = _ok(runner, "stock", "show", "--product", "P1", "--warehouse", "W1")
        assert "P1" in result.output

    def test_insufficient_stock_shows_available(self, runner):
        _seed(runner)
        result = runner.invoke(
            cli, ["cart", "add", "--user", "7", "--product", "P1", "--unit", "PCS", "--quantity", "31"]
        )
        assert result.exit_code == 1
        assert "have 40 available" in result.output

    def test_clear(self, runner):
        _seed(runner)
        _ok(runner, "cart", "add", "--user", "7", "--product", "P1", "--unit", "PCS", "--quantity", "2")
        result = _ok(runner, "cart", "clear", "--user", "7")
        assert "1 line(s)" in result.output


class TestStockSyncCommand:

    def test_sync_from_json(self, runner, tmp_path):
        _seed(runner)
        report = tmp_path / "erp.json"
        report.write_text(json.dumps([
            {"product_id": "P1", "warehouse_code": "W1", "unit": "PCS", "stock": 15},
            {"product_id": "P2", "warehouse_code": "W9", "unit": "PCS", "stock": 3},
        ]))

        result = _ok(runner, "stock", "sync", str(report))

        assert "2 record(s) reset, 1 updated, 0 created, 1 skipped" in result.output

    def test_malformed_file_rejected(self, runner, tmp_path):
        report = tmp_path / "erp.json"
        report.write_text(json.dumps({"not": "a list"}))
        result = runner.invoke(cli, ["stock", "sync", str(report)])
        assert result.exit_code == 2


class TestReservationCommands:

    def test_release_expired_dry_run(self, runner):
        _seed(runner)
        _ok(runner, "cart", "add", "--user", "7", "--product", "P1", "--unit", "PCS", "--quantity", "2")
        result = _ok(runner, "reservations", "release-expired", "--dry-run", "--timeout", "1")
        assert "No expired reservations found." in result.output

    def test_timeout_out_of_range(self, runner):
        result = runner.invoke(cli, ["reservations", "release-expired", "--timeout", "0"])
        assert result.exit_code == 1
        assert "between 1 and 10080" in result.output
