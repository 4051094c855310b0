"""
Property-based checks on the payload validators.

Boundaries fuzzed here:
- Loan amounts: any accepted value is stored with exactly two places,
  within half a cent of the input, inside the column range
- Quantities: any accepted value is a non-negative 32-bit integer
- Names: accepted names are trimmed and non-empty
"""

from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from opsdesk_kernel.db.types import MAX_MONEY, MAX_QUANTITY
from opsdesk_kernel.exceptions import InvalidInputError
from opsdesk_services.schemas import validate_loan_amount, validate_name, validate_quantity

HALF_CENT = Decimal("0.005")


@given(
    st.decimals(
        min_value=Decimal("0.005"),
        max_value=MAX_MONEY,
        allow_nan=False,
        allow_infinity=False,
        places=4,
    )
)
@settings(max_examples=200)
def test_accepted_amount_is_two_places(value):
    amount = validate_loan_amount(value)

    assert amount.as_tuple().exponent == -2
    assert Decimal("0.01") <= amount <= MAX_MONEY
    assert abs(amount - value) <= HALF_CENT


@given(st.floats(allow_nan=False, allow_infinity=False))
@settings(max_examples=200)
def test_any_float_is_accepted_or_rejected_cleanly(value):
    try:
        amount = validate_loan_amount(value)
    except InvalidInputError as exc:
        assert exc.field == "loanAmount"
    else:
        assert amount > 0
        assert amount <= MAX_MONEY


@given(st.integers())
def test_quantity_range(value):
    if 0 <= value <= MAX_QUANTITY:
        assert validate_quantity(value) == value
    else:
        with pytest.raises(InvalidInputError):
            validate_quantity(value)


@given(st.text())
def test_names_trimmed_or_rejected(value):
    try:
        name = validate_name(value, "customerName")
    except InvalidInputError:
        assert value.strip() == ""
    else:
        assert name == value.strip()
        assert name
