"""Tests for the opsdesk command line (scripts/opsdesk.py)."""

import argparse
from decimal import Decimal

import pytest

from opsdesk_kernel.exceptions import TransactionNotFoundError
from scripts.opsdesk import build_parser, run_command


def _run(dashboard, *argv):
    return run_command(build_parser().parse_args(list(argv)), dashboard)


class TestParser:

    def test_amount_parsed_as_decimal(self):
        args = build_parser().parse_args(["tx-create", "Ada", "10.005"])

        assert args.loan_amount == Decimal("10.005")

    def test_bad_amount_exits(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["tx-create", "Ada", "ten"])

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:

    def test_transaction_round(self, dashboard):
        tx = _run(dashboard, "tx-create", "Ada", "10.005")
        assert tx["loanAmount"] == 10.01

        updated = _run(dashboard, "tx-update", str(tx["id"]), "--customer", "Bea")
        assert updated["customerName"] == "Bea"
        assert updated["loanAmount"] == 10.01

        assert [t["id"] for t in _run(dashboard, "tx-list")] == [tx["id"]]
        assert _run(dashboard, "tx-delete", str(tx["id"])) == {"success": True}

    def test_inventory_quantity_zero_flag(self, dashboard):
        item = _run(dashboard, "inv-create", "Widget", "40")

        updated = _run(dashboard, "inv-update", str(item["id"]), "--quantity", "0")

        assert updated["quantity"] == 0
        assert updated["itemName"] == "Widget"

    def test_report(self, dashboard):
        _run(dashboard, "tx-create", "A", "5")
        _run(dashboard, "inv-create", "Widget", "3")

        report = _run(dashboard, "report")

        assert report["transactionSummary"]["totalTransactions"] == 1
        assert report["inventorySummary"]["totalStockQuantity"] == 3
        assert report["transactionChartData"] == [{"customerName": "A", "loanAmount": 5.0}]
        assert report["inventoryChartData"] == [{"itemName": "Widget", "quantity": 3}]

    def test_update_missing_propagates(self, dashboard):
        with pytest.raises(TransactionNotFoundError):
            _run(dashboard, "tx-update", "99", "--amount", "1")

    def test_unknown_command(self, dashboard):
        with pytest.raises(ValueError):
            run_command(argparse.Namespace(command="bogus"), dashboard)
