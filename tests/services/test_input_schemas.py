"""
Tests for payload validation (opsdesk_services/schemas.py).

Covers:
- Required fields and unknown keys
- Name trimming and emptiness
- Loan amount type/sign/range rules
- Quantity integer/sign/range rules
- Field presence on update payloads (absent vs supplied)
"""

from decimal import Decimal

import pytest

from opsdesk_kernel.domain.fields import UNSET
from opsdesk_kernel.exceptions import InvalidInputError
from opsdesk_services.schemas import (
    parse_create_inventory_item,
    parse_create_transaction,
    parse_delete,
    parse_update_inventory_item,
    parse_update_transaction,
)


class TestCreateTransactionPayload:

    def test_valid(self):
        data = parse_create_transaction({"customerName": "Ada", "loanAmount": 100.5})

        assert data.customer_name == "Ada"
        assert data.loan_amount == Decimal("100.50")

    def test_name_trimmed(self):
        data = parse_create_transaction({"customerName": "  Ada  ", "loanAmount": 1})

        assert data.customer_name == "Ada"

    @pytest.mark.parametrize("name", ["", "   ", "\t\n"])
    def test_blank_name_rejected(self, name):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_create_transaction({"customerName": name, "loanAmount": 1})

        assert exc_info.value.field == "customerName"
        assert exc_info.value.code == "INVALID_INPUT"

    @pytest.mark.parametrize("amount", [0, -1, -0.01, Decimal("0")])
    def test_non_positive_amount_rejected(self, amount):
        with pytest.raises(InvalidInputError, match="positive"):
            parse_create_transaction({"customerName": "Ada", "loanAmount": amount})

    @pytest.mark.parametrize("amount", ["100", True, None, [1], float("nan"), float("inf")])
    def test_non_numeric_amount_rejected(self, amount):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_create_transaction({"customerName": "Ada", "loanAmount": amount})

        assert exc_info.value.field == "loanAmount"

    def test_amount_over_column_capacity_rejected(self):
        with pytest.raises(InvalidInputError, match="exceed"):
            parse_create_transaction({"customerName": "Ada", "loanAmount": 1e30})

    def test_amount_rounding_to_zero_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_create_transaction({"customerName": "Ada", "loanAmount": 0.001})

    def test_missing_field(self):
        with pytest.raises(InvalidInputError, match="required"):
            parse_create_transaction({"customerName": "Ada"})

    def test_unknown_field(self):
        with pytest.raises(InvalidInputError, match="unknown"):
            parse_create_transaction({"customerName": "Ada", "loanAmount": 1, "id": 3})

    def test_payload_must_be_mapping(self):
        with pytest.raises(InvalidInputError, match="object"):
            parse_create_transaction(None)


class TestUpdateTransactionPayload:

    def test_id_only_leaves_fields_unset(self):
        data = parse_update_transaction({"id": 4})

        assert data.id == 4
        assert data.customer_name is UNSET
        assert data.loan_amount is UNSET

    def test_supplied_fields_validated(self):
        data = parse_update_transaction({"id": 4, "loanAmount": 12.345})

        assert data.loan_amount == Decimal("12.35")
        assert data.customer_name is UNSET

    def test_none_is_not_absence(self):
        """A present key with null is invalid, not 'leave unchanged'."""
        with pytest.raises(InvalidInputError):
            parse_update_transaction({"id": 4, "customerName": None})

    @pytest.mark.parametrize("bad_id", ["4", 4.0, True, None])
    def test_id_must_be_integer(self, bad_id):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_update_transaction({"id": bad_id})

        assert exc_info.value.field == "id"

    @pytest.mark.parametrize("bad_id", [2**31, 2**70, -(2**31) - 1])
    def test_id_outside_column_range(self, bad_id):
        """Ids the INTEGER column cannot hold are rejected before any query."""
        with pytest.raises(InvalidInputError) as exc_info:
            parse_update_transaction({"id": bad_id})

        assert exc_info.value.field == "id"

    def test_id_at_column_maximum_accepted(self):
        assert parse_update_transaction({"id": 2**31 - 1}).id == 2**31 - 1

    def test_id_required(self):
        with pytest.raises(InvalidInputError, match="required"):
            parse_update_transaction({"customerName": "Ada"})


class TestInventoryPayloads:

    def test_create_valid(self):
        data = parse_create_inventory_item({"itemName": "Widget", "quantity": 0})

        assert (data.item_name, data.quantity) == ("Widget", 0)

    def test_integral_float_quantity_accepted(self):
        assert parse_create_inventory_item({"itemName": "W", "quantity": 3.0}).quantity == 3

    @pytest.mark.parametrize("quantity", [-1, 1.5, "3", True, None, 2**31])
    def test_bad_quantity_rejected(self, quantity):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_create_inventory_item({"itemName": "Widget", "quantity": quantity})

        assert exc_info.value.field == "quantity"

    def test_blank_item_name_rejected(self):
        with pytest.raises(InvalidInputError):
            parse_create_inventory_item({"itemName": " ", "quantity": 1})

    def test_update_quantity_zero_is_present(self):
        data = parse_update_inventory_item({"id": 1, "quantity": 0})

        assert data.quantity == 0
        assert data.item_name is UNSET


class TestDeletePayload:

    def test_valid(self):
        assert parse_delete({"id": 9}).id == 9

    def test_missing_id(self):
        with pytest.raises(InvalidInputError, match="required"):
            parse_delete({})

    @pytest.mark.parametrize("bad_id", [2**31, 2**70])
    def test_id_outside_column_range(self, bad_id):
        """Delete ids are bounded like update ids."""
        with pytest.raises(InvalidInputError) as exc_info:
            parse_delete({"id": bad_id})

        assert exc_info.value.field == "id"
