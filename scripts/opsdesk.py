#!/usr/bin/env python3
"""
OpsDesk command line.

Runs dashboard operations against the configured database and prints the
result as JSON.  Settings come from opsdesk_config (DATABASE_URL overrides
the YAML default).

Usage:
    python3 scripts/opsdesk.py init-db
    python3 scripts/opsdesk.py serve [--port 2022]
    python3 scripts/opsdesk.py tx-create "Ada Lovelace" 1250.50
    python3 scripts/opsdesk.py tx-list
    python3 scripts/opsdesk.py tx-update 3 --amount 99.99
    python3 scripts/opsdesk.py tx-delete 3
    python3 scripts/opsdesk.py inv-create "Widget" 40
    python3 scripts/opsdesk.py inv-list
    python3 scripts/opsdesk.py inv-update 1 --quantity 0
    python3 scripts/opsdesk.py inv-delete 1
    python3 scripts/opsdesk.py report
"""

import argparse
import json
import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path

# ---------------------------------------------------------------------------
# Project root on sys.path
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


def _amount(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")


def _json_default(obj):
    if isinstance(obj, datetime):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opsdesk",
        description="Loan transactions and inventory records for the ops dashboard.",
    )
    parser.add_argument(
        "--config", type=Path, default=None,
        help="Settings YAML (default: opsdesk_config/sets/default.yaml)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init-db", help="Create tables if missing")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)

    p = sub.add_parser("tx-create", help="Create a transaction")
    p.add_argument("customer_name")
    p.add_argument("loan_amount", type=_amount)

    sub.add_parser("tx-list", help="List transactions, newest first")

    p = sub.add_parser("tx-update", help="Update a transaction")
    p.add_argument("id", type=int)
    p.add_argument("--customer", dest="customer_name")
    p.add_argument("--amount", dest="loan_amount", type=_amount)

    p = sub.add_parser("tx-delete", help="Delete a transaction")
    p.add_argument("id", type=int)

    p = sub.add_parser("inv-create", help="Create an inventory item")
    p.add_argument("item_name")
    p.add_argument("quantity", type=int)

    sub.add_parser("inv-list", help="List inventory items")

    p = sub.add_parser("inv-update", help="Update an inventory item")
    p.add_argument("id", type=int)
    p.add_argument("--name", dest="item_name")
    p.add_argument("--quantity", type=int)

    p = sub.add_parser("inv-delete", help="Delete an inventory item")
    p.add_argument("id", type=int)

    sub.add_parser("report", help="Summaries and chart data for both record types")

    return parser


def run_command(args: argparse.Namespace, dashboard) -> object:
    """Dispatch a parsed command to the dashboard and return its result."""
    cmd = args.command
    if cmd == "tx-create":
        return dashboard.create_transaction(
            {"customerName": args.customer_name, "loanAmount": args.loan_amount}
        )
    if cmd == "tx-list":
        return dashboard.get_transactions()
    if cmd == "tx-update":
        # Only flags that were given become payload keys
        payload = {"id": args.id}
        if args.customer_name is not None:
            payload["customerName"] = args.customer_name
        if args.loan_amount is not None:
            payload["loanAmount"] = args.loan_amount
        return dashboard.update_transaction(payload)
    if cmd == "tx-delete":
        return dashboard.delete_transaction({"id": args.id})
    if cmd == "inv-create":
        return dashboard.create_inventory_item(
            {"itemName": args.item_name, "quantity": args.quantity}
        )
    if cmd == "inv-list":
        return dashboard.get_inventory_items()
    if cmd == "inv-update":
        payload = {"id": args.id}
        if args.item_name is not None:
            payload["itemName"] = args.item_name
        if args.quantity is not None:
            payload["quantity"] = args.quantity
        return dashboard.update_inventory_item(payload)
    if cmd == "inv-delete":
        return dashboard.delete_inventory_item({"id": args.id})
    if cmd == "report":
        return {
            "transactionSummary": dashboard.get_transaction_summary(),
            "inventorySummary": dashboard.get_inventory_summary(),
            "transactionChartData": dashboard.get_transaction_chart_data(),
            "inventoryChartData": dashboard.get_inventory_chart_data(),
        }
    raise ValueError(f"Unknown command: {cmd}")


def main(argv: list[str] | None = None) -> int:
    from opsdesk_config import get_active_settings
    from opsdesk_kernel.exceptions import OpsDeskError
    from opsdesk_kernel.logging_config import configure_logging
    from opsdesk_services.dashboard import DashboardService
    from opsdesk_services.store import init_store

    args = build_parser().parse_args(argv)
    settings = get_active_settings(args.config)

    if args.command == "serve":
        from opsdesk_services.http_api import create_app

        app = create_app(settings)
        app.run(
            host=args.host or settings.http_host,
            port=args.port or settings.http_port,
        )
        return 0

    configure_logging(level=settings.log_level_number)
    try:
        init_store(settings)
    except Exception as exc:
        print(f"  ERROR: Could not connect: {exc}", file=sys.stderr)
        return 1

    if args.command == "init-db":
        print("  Tables ready.")
        return 0

    try:
        result = run_command(args, DashboardService())
    except OpsDeskError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, default=_json_default))
    return 0


if __name__ == "__main__":
    sys.exit(main())
