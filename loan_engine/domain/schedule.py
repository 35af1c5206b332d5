"""Weekly amortization schedule generation for fixed-rate loans"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List
from loan_engine.domain.models import ScheduledInstallment
from loan_engine.utils.date_utils import add_weeks

WEEKS_PER_YEAR = Decimal(52)
ONE_CENT = Decimal("1")


def round_cents(value: Decimal) -> int:
    """Round a cent amount to a whole cent, halves away from zero"""
    return int(value.quantize(ONE_CENT, rounding=ROUND_HALF_UP))


def weekly_interest_rate(annual_interest_rate: float | Decimal) -> Decimal:
    """Annual percentage rate (e.g. 5.0) to a simple weekly fraction"""
    return (Decimal(str(annual_interest_rate)) / 100) / WEEKS_PER_YEAR


def generate_schedule(
    principal_cents: int,
    annual_interest_rate: float | Decimal,
    term_weeks: int,
    start_date: date,
) -> List[ScheduledInstallment]:
    """
    Generate the weekly installment schedule for a loan.

    Each period pays an equal slice of principal plus simple interest on the
    full principal. Every installment is rounded to the cent on its own; the
    rounding remainder is not carried to other periods, so the schedule total
    is the loan's outstanding amount even when it drifts a few cents from the
    unrounded total.

    Args:
        principal_cents: Amount lent, in cents (> 0)
        annual_interest_rate: Yearly rate in percent, e.g. 5.0 (>= 0)
        term_weeks: Number of weekly installments (> 0)
        start_date: Loan start; first installment is due one week later

    Returns:
        term_weeks installments ordered by due date

    Example:
        100000 cents at 5.0% over 2 weeks from 2023-01-01
        → [50096 due 2023-01-08, 50096 due 2023-01-15]
    """
    principal = Decimal(principal_cents)
    weekly_interest = principal * weekly_interest_rate(annual_interest_rate)
    principal_slice = principal / Decimal(term_weeks)

    amount = round_cents(principal_slice + weekly_interest)

    return [
        ScheduledInstallment(due_date=add_weeks(start_date, week), due_amount_cents=amount)
        for week in range(1, term_weeks + 1)
    ]


def schedule_total(installments: List[ScheduledInstallment]) -> int:
    """Sum of installment amounts; the authoritative outstanding amount"""
    return sum(inst.due_amount_cents for inst in installments)
