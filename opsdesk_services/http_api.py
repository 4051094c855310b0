"""
HTTP transport for the dashboard operations.

Endpoints are named after the operations the dashboard client calls:

    GET  /healthcheck
    POST /createTransaction        GET /getTransactions
    POST /updateTransaction        POST /deleteTransaction
    POST /createInventoryItem      GET /getInventoryItems
    POST /updateInventoryItem      POST /deleteInventoryItem
    GET  /getTransactionSummary    GET /getInventorySummary
    GET  /getTransactionChartData  GET /getInventoryChartData

Mutations take a JSON object body.  Responses are JSON with ISO-8601
timestamps.  Business errors become ``{"error": <code>, "message": ...}``:
InvalidInputError -> 400, RecordNotFoundError -> 404.  Store failures are
not mapped here; Flask turns them into a 500 after the dashboard logged them.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from flask import Blueprint, Flask, current_app, jsonify, request
from flask.json.provider import DefaultJSONProvider

from opsdesk_config import OpsDeskSettings, get_active_settings
from opsdesk_kernel.exceptions import InvalidInputError, RecordNotFoundError
from opsdesk_kernel.logging_config import LogContext, configure_logging, get_logger
from opsdesk_services.dashboard import DashboardService
from opsdesk_services.store import init_store

logger = get_logger("http")

api = Blueprint("opsdesk_api", __name__)

_EXTENSION_KEY = "opsdesk.dashboard"


class OpsDeskJSONProvider(DefaultJSONProvider):
    """JSON provider that writes datetimes as ISO-8601 instead of RFC 822."""

    @staticmethod
    def default(o):
        if isinstance(o, datetime):
            return o.isoformat()
        return DefaultJSONProvider.default(o)


def _dashboard() -> DashboardService:
    return current_app.extensions[_EXTENSION_KEY]


def _body():
    # None for a missing or non-JSON body; validation reports it
    return request.get_json(silent=True)


# ---------------------------------------------------------------------------
# Request context and error mapping
# ---------------------------------------------------------------------------


@api.before_app_request
def _bind_request_context():
    LogContext.set(
        request_id=request.headers.get("X-Request-ID") or uuid.uuid4().hex,
        remote_addr=request.remote_addr,
    )


@api.teardown_app_request
def _clear_request_context(exc):
    LogContext.clear()


@api.app_errorhandler(InvalidInputError)
def _invalid_input(exc: InvalidInputError):
    return jsonify(error=exc.code, message=str(exc), field=exc.field), 400


@api.app_errorhandler(RecordNotFoundError)
def _not_found(exc: RecordNotFoundError):
    return jsonify(error=exc.code, message=str(exc)), 404


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@api.get("/healthcheck")
def healthcheck():
    return jsonify(_dashboard().healthcheck())


@api.post("/createTransaction")
def create_transaction():
    return jsonify(_dashboard().create_transaction(_body()))


@api.get("/getTransactions")
def get_transactions():
    return jsonify(_dashboard().get_transactions())


@api.post("/updateTransaction")
def update_transaction():
    return jsonify(_dashboard().update_transaction(_body()))


@api.post("/deleteTransaction")
def delete_transaction():
    return jsonify(_dashboard().delete_transaction(_body()))


@api.post("/createInventoryItem")
def create_inventory_item():
    return jsonify(_dashboard().create_inventory_item(_body()))


@api.get("/getInventoryItems")
def get_inventory_items():
    return jsonify(_dashboard().get_inventory_items())


@api.post("/updateInventoryItem")
def update_inventory_item():
    return jsonify(_dashboard().update_inventory_item(_body()))


@api.post("/deleteInventoryItem")
def delete_inventory_item():
    return jsonify(_dashboard().delete_inventory_item(_body()))


@api.get("/getTransactionSummary")
def get_transaction_summary():
    return jsonify(_dashboard().get_transaction_summary())


@api.get("/getInventorySummary")
def get_inventory_summary():
    return jsonify(_dashboard().get_inventory_summary())


@api.get("/getTransactionChartData")
def get_transaction_chart_data():
    return jsonify(_dashboard().get_transaction_chart_data())


@api.get("/getInventoryChartData")
def get_inventory_chart_data():
    return jsonify(_dashboard().get_inventory_chart_data())


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------


def create_app(
    settings: OpsDeskSettings | None = None,
    dashboard: DashboardService | None = None,
) -> Flask:
    """
    Build the Flask application.

    Args:
        settings: Runtime settings (``get_active_settings()`` if None).
        dashboard: Pre-built DashboardService.  When None, the engine is
            initialized from ``settings`` and tables are created if missing.

    Returns:
        Configured Flask app.
    """
    settings = settings or get_active_settings()
    configure_logging(level=settings.log_level_number)

    if dashboard is None:
        init_store(settings)
        dashboard = DashboardService()

    app = Flask(__name__)
    app.json = OpsDeskJSONProvider(app)
    app.extensions[_EXTENSION_KEY] = dashboard
    app.register_blueprint(api)

    logger.info(
        "http_app_created",
        extra={"host": settings.http_host, "port": settings.http_port},
    )
    return app
