"""
Invoice and plan arithmetic.
"""

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Tuple

from src.domain.entities.enums import InvoiceStatus, PlanType

VAT_RATE = Decimal("0.20")
MAX_INVOICE_AMOUNT = 100000
PAYMENT_TERMS = timedelta(days=30)
SUBSCRIPTION_PERIOD = timedelta(days=30)
INVOICE_NUMBER_PREFIX = "INV-"

PLAN_JOB_LIMITS = {
    PlanType.FREE: 10,
    PlanType.SOLO: 50,
    PlanType.SMALL_TEAM: 200,
}

_CENT = Decimal("0.01")


def _money(value: Decimal) -> float:
    return float(value.quantize(_CENT, rounding=ROUND_HALF_UP))


def calculate_vat(amount: float, vat_enabled: bool) -> float:
    if not vat_enabled:
        return 0.0
    return _money(Decimal(str(amount)) * VAT_RATE)


def calculate_total(amount: float, vat_enabled: bool) -> float:
    vat = calculate_vat(amount, vat_enabled)
    return _money(Decimal(str(amount)) + Decimal(str(vat)))


def format_invoice_number(sequence: int) -> str:
    return f"{INVOICE_NUMBER_PREFIX}{sequence:06d}"


def validate_amount(amount: float) -> List[str]:
    errors = []
    if amount is None or amount <= 0:
        errors.append("Amount must be greater than 0")
        return errors
    if amount > MAX_INVOICE_AMOUNT:
        errors.append("Amount seems unusually high. Please verify.")
    if Decimal(str(amount)) != Decimal(str(amount)).quantize(_CENT):
        errors.append("Amount can have maximum 2 decimal places")
    return errors


def due_date_from(issued_at: datetime) -> datetime:
    return issued_at + PAYMENT_TERMS


def is_overdue(status: InvoiceStatus, due_date: datetime, now: datetime) -> bool:
    return InvoiceStatus(status) == InvoiceStatus.UNPAID and due_date < now


def month_bounds(month: int, year: int) -> Tuple[datetime, datetime]:
    """[start, end) of a calendar month"""
    start = datetime(year, month, 1)
    if month == 12:
        return start, datetime(year + 1, 1, 1)
    return start, datetime(year, month + 1, 1)


def job_limit(plan_type: PlanType) -> int:
    return PLAN_JOB_LIMITS[PlanType(plan_type)]
