"""
Inbound payload schemas (``opsdesk_services.schemas``).

Responsibility
--------------
Turns raw request payloads (camelCase dicts, as sent by the dashboard) into
frozen, typed input objects, or raises ``InvalidInputError``.  Nothing in
this module touches the database, so a rejected payload never reaches the
store.

Rules
-----
* Names (``customerName``, ``itemName``) must be strings that are non-empty
  after trimming; the trimmed value is what gets stored.
* ``loanAmount`` must be a real number (int, float or Decimal -- not bool,
  not a string, not NaN/infinity), strictly positive and within the
  NUMERIC(10, 2) column.
* ``quantity`` must be an integer (a float with an integral value is
  accepted), non-negative and within a 32-bit INTEGER column.
* ``id`` must be an integer within the 32-bit INTEGER column range.
* Unknown keys are rejected.
* On update payloads, a key that is absent stays ``UNSET``; a key that is
  present is validated like on create.  ``None`` is not "absent".
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from opsdesk_kernel.db.types import MAX_INTEGER, MAX_MONEY, MAX_QUANTITY, MIN_INTEGER, to_money
from opsdesk_kernel.domain.fields import UNSET
from opsdesk_kernel.exceptions import InvalidInputError


@dataclass(frozen=True)
class CreateTransactionInput:
    customer_name: str
    loan_amount: Decimal


@dataclass(frozen=True)
class UpdateTransactionInput:
    id: int
    customer_name: Any = UNSET
    loan_amount: Any = UNSET


@dataclass(frozen=True)
class CreateInventoryItemInput:
    item_name: str
    quantity: int


@dataclass(frozen=True)
class UpdateInventoryItemInput:
    id: int
    item_name: Any = UNSET
    quantity: Any = UNSET


@dataclass(frozen=True)
class DeleteInput:
    id: int


# ---------------------------------------------------------------------------
# Field validators
# ---------------------------------------------------------------------------


def _require_mapping(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidInputError(
            f"payload must be an object, got {type(payload).__name__}"
        )
    return payload


def _reject_unknown(payload: Mapping[str, Any], allowed: set[str]) -> None:
    unknown = sorted(set(payload) - allowed)
    if unknown:
        raise InvalidInputError(f"unknown field(s): {', '.join(unknown)}")


def _require(payload: Mapping[str, Any], key: str) -> Any:
    if key not in payload:
        raise InvalidInputError("field is required", field=key)
    return payload[key]


def validate_id(value: Any, field: str = "id") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError("must be an integer", field=field)
    # Outside the column range the driver fails before the query runs
    if not MIN_INTEGER <= value <= MAX_INTEGER:
        raise InvalidInputError(f"must be between {MIN_INTEGER} and {MAX_INTEGER}", field=field)
    return value


def validate_name(value: Any, field: str) -> str:
    if not isinstance(value, str):
        raise InvalidInputError("must be a string", field=field)
    name = value.strip()
    if not name:
        raise InvalidInputError("must not be empty", field=field)
    return name


def validate_loan_amount(value: Any, field: str = "loanAmount") -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidInputError("must be a number", field=field)
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInputError("must be a finite number", field=field)
    if isinstance(value, Decimal) and not value.is_finite():
        raise InvalidInputError("must be a finite number", field=field)
    if value <= 0:
        raise InvalidInputError("must be positive", field=field)
    # Checked before rounding: quantizing a huge value overflows the context
    if value > MAX_MONEY:
        raise InvalidInputError(f"must not exceed {MAX_MONEY}", field=field)
    amount = to_money(value)
    if amount > MAX_MONEY:
        raise InvalidInputError(f"must not exceed {MAX_MONEY}", field=field)
    if amount <= 0:
        # e.g. 0.001 rounds to 0.00
        raise InvalidInputError("must be at least 0.01 after rounding", field=field)
    return amount


def validate_quantity(value: Any, field: str = "quantity") -> int:
    if isinstance(value, bool):
        raise InvalidInputError("must be an integer", field=field)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise InvalidInputError("must be an integer", field=field)
    if value < 0:
        raise InvalidInputError("must be non-negative", field=field)
    if value > MAX_QUANTITY:
        raise InvalidInputError(f"must not exceed {MAX_QUANTITY}", field=field)
    return value


# ---------------------------------------------------------------------------
# Payload parsers
# ---------------------------------------------------------------------------


def parse_create_transaction(payload: Any) -> CreateTransactionInput:
    """Validate a createTransaction payload."""
    payload = _require_mapping(payload)
    _reject_unknown(payload, {"customerName", "loanAmount"})
    return CreateTransactionInput(
        customer_name=validate_name(_require(payload, "customerName"), "customerName"),
        loan_amount=validate_loan_amount(_require(payload, "loanAmount")),
    )


def parse_update_transaction(payload: Any) -> UpdateTransactionInput:
    """Validate an updateTransaction payload; absent fields stay UNSET."""
    payload = _require_mapping(payload)
    _reject_unknown(payload, {"id", "customerName", "loanAmount"})
    fields: dict[str, Any] = {"id": validate_id(_require(payload, "id"))}
    if "customerName" in payload:
        fields["customer_name"] = validate_name(payload["customerName"], "customerName")
    if "loanAmount" in payload:
        fields["loan_amount"] = validate_loan_amount(payload["loanAmount"])
    return UpdateTransactionInput(**fields)


def parse_create_inventory_item(payload: Any) -> CreateInventoryItemInput:
    """Validate a createInventoryItem payload."""
    payload = _require_mapping(payload)
    _reject_unknown(payload, {"itemName", "quantity"})
    return CreateInventoryItemInput(
        item_name=validate_name(_require(payload, "itemName"), "itemName"),
        quantity=validate_quantity(_require(payload, "quantity")),
    )


def parse_update_inventory_item(payload: Any) -> UpdateInventoryItemInput:
    """Validate an updateInventoryItem payload; absent fields stay UNSET."""
    payload = _require_mapping(payload)
    _reject_unknown(payload, {"id", "itemName", "quantity"})
    fields: dict[str, Any] = {"id": validate_id(_require(payload, "id"))}
    if "itemName" in payload:
        fields["item_name"] = validate_name(payload["itemName"], "itemName")
    if "quantity" in payload:
        fields["quantity"] = validate_quantity(payload["quantity"])
    return UpdateInventoryItemInput(**fields)


def parse_delete(payload: Any) -> DeleteInput:
    """Validate a delete payload (either entity)."""
    payload = _require_mapping(payload)
    _reject_unknown(payload, {"id"})
    return DeleteInput(id=validate_id(_require(payload, "id")))
