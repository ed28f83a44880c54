from datetime import datetime

import pytest

from src.domain.billing import (
    calculate_total,
    calculate_vat,
    due_date_from,
    format_invoice_number,
    is_overdue,
    job_limit,
    month_bounds,
    validate_amount,
)
from src.domain.entities import InvoiceStatus, PlanType


def test_invoice_numbers_are_zero_padded():
    assert format_invoice_number(1) == "INV-000001"
    assert format_invoice_number(123456) == "INV-123456"


def test_vat_is_twenty_percent_when_enabled():
    assert calculate_vat(100, True) == 20.0
    assert calculate_total(100, True) == 120.0


def test_no_vat_when_disabled():
    assert calculate_vat(100, False) == 0.0
    assert calculate_total(100, False) == 100.0


def test_vat_rounds_half_up_to_pennies():
    assert calculate_vat(10.05, True) == 2.01
    assert calculate_total(10.05, True) == 12.06


@pytest.mark.parametrize(
    "amount,message",
    [
        (0, "Amount must be greater than 0"),
        (-5, "Amount must be greater than 0"),
        (100000.01, "Amount seems unusually high. Please verify."),
        (10.123, "Amount can have maximum 2 decimal places"),
    ],
)
def test_validate_amount(amount, message):
    assert message in validate_amount(amount)


def test_validate_amount_accepts_pennies():
    assert validate_amount(49.99) == []


def test_due_date_is_thirty_days_out():
    assert due_date_from(datetime(2024, 1, 1)) == datetime(2024, 1, 31)


def test_only_unpaid_invoices_are_overdue():
    now = datetime(2024, 2, 1)
    due = datetime(2024, 1, 31)

    assert is_overdue(InvoiceStatus.UNPAID, due, now)
    assert not is_overdue(InvoiceStatus.PAID, due, now)
    assert not is_overdue(InvoiceStatus.UNPAID, datetime(2024, 2, 2), now)


def test_month_bounds_wraps_december():
    assert month_bounds(12, 2024) == (datetime(2024, 12, 1), datetime(2025, 1, 1))
    assert month_bounds(2, 2024) == (datetime(2024, 2, 1), datetime(2024, 3, 1))


def test_plan_limits():
    assert job_limit(PlanType.FREE) == 10
    assert job_limit(PlanType.SOLO) == 50
    assert job_limit(PlanType.SMALL_TEAM) == 200
