"""
Typed Exception Hierarchy for the OpsDesk kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers (the dashboard facade, the HTTP layer, the CLI) translate failures
into user-facing responses.  Doing that by parsing message strings is
fragile, so every business error:
  1. Has a TYPED exception class (catch by type, not message)
  2. Has a CODE class attribute (machine-readable, API-safe)
  3. Carries structured DATA (not just a message string)

Example:
    try:
        dashboard.update_transaction({"id": 7, "loanAmount": 10})
    except TransactionNotFoundError as e:
        respond(404, code=e.code, record_id=e.record_id)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    OpsDeskError (base)
    |
    +-- InvalidInputError
    |
    +-- RecordNotFoundError
        +-- TransactionNotFoundError
        +-- InventoryItemNotFoundError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                        | When Raised
----------------|-----------------------------|-----------------------------------------
Input           | INVALID_INPUT               | Payload malformed or out of range
----------------|-----------------------------|-----------------------------------------
Lookup          | RECORD_NOT_FOUND            | Update targets a missing id
                | TRANSACTION_NOT_FOUND       | Transaction id doesn't exist
                | INVENTORY_ITEM_NOT_FOUND    | Inventory item id doesn't exist

Store failures are NOT wrapped.  Anything raised by SQLAlchemy
(``sqlalchemy.exc.SQLAlchemyError`` and subclasses) is logged as
``store_failure`` by the dashboard facade and re-raised unmodified.

Delete is the one operation where a missing target is not an error: it is
reported as ``{"success": False}``.
"""


class OpsDeskError(Exception):
    """
    Base exception for all OpsDesk business errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "OPSDESK_ERROR"


class InvalidInputError(OpsDeskError):
    """Inbound payload failed validation; raised before any store access."""

    code: str = "INVALID_INPUT"

    def __init__(self, reason: str, field: str | None = None):
        self.reason = reason
        self.field = field
        if field is not None:
            super().__init__(f"Invalid input for '{field}': {reason}")
        else:
            super().__init__(f"Invalid input: {reason}")


class RecordNotFoundError(OpsDeskError):
    """Record with the given id does not exist."""

    code: str = "RECORD_NOT_FOUND"
    entity: str = "Record"

    def __init__(self, record_id: int):
        self.record_id = record_id
        super().__init__(f"{self.entity} with id {record_id} not found")


class TransactionNotFoundError(RecordNotFoundError):
    """Transaction with given id was not found."""

    code: str = "TRANSACTION_NOT_FOUND"
    entity: str = "Transaction"


class InventoryItemNotFoundError(RecordNotFoundError):
    """Inventory item with given id was not found."""

    code: str = "INVENTORY_ITEM_NOT_FOUND"
    entity: str = "Inventory item"
