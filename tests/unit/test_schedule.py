"""Unit tests for weekly schedule generation"""

import pytest
from datetime import date, timedelta
from decimal import Decimal
from loan_engine.domain.schedule import generate_schedule, round_cents, schedule_total


def test_generate_schedule_reference_example():
    """1000.00 at 5% over 2 weeks → two installments of 500.96"""
    installments = generate_schedule(100000, 5.0, 2, date(2023, 1, 1))

    assert [inst.due_amount_cents for inst in installments] == [50096, 50096]
    assert [inst.due_date for inst in installments] == [date(2023, 1, 8), date(2023, 1, 15)]
    assert schedule_total(installments) == 100192


@pytest.mark.parametrize(
    "principal_cents, annual_rate, term_weeks",
    [
        (100000, 5.0, 2),
        (500000, 0.0, 50),
        (123456, 12.5, 13),
        (1, 99.9, 1),
        (99999999, 3.25, 104),
    ],
)
def test_generate_schedule_length_and_weekly_spacing(principal_cents, annual_rate, term_weeks):
    start = date(2024, 2, 26)
    installments = generate_schedule(principal_cents, annual_rate, term_weeks, start)

    assert len(installments) == term_weeks
    assert installments[0].due_date == start + timedelta(days=7)
    for previous, current in zip(installments, installments[1:]):
        assert current.due_date - previous.due_date == timedelta(days=7)


def test_generate_schedule_zero_interest():
    """Without interest every installment is an equal slice of principal"""
    installments = generate_schedule(120000, 0, 12, date(2024, 1, 1))

    assert all(inst.due_amount_cents == 10000 for inst in installments)
    assert schedule_total(installments) == 120000


def test_generate_schedule_does_not_redistribute_rounding():
    """1000.00 over 3 weeks rounds each period down; the lost cent is not added back"""
    installments = generate_schedule(100000, 0, 3, date(2024, 1, 1))

    assert [inst.due_amount_cents for inst in installments] == [33333, 33333, 33333]
    assert schedule_total(installments) == 99999


def test_generate_schedule_rounds_half_cents_up():
    """0.05 over 2 weeks is 2.5 cents a week, rounded to 3"""
    installments = generate_schedule(5, 0, 2, date(2024, 1, 1))

    assert [inst.due_amount_cents for inst in installments] == [3, 3]
    assert schedule_total(installments) == 6


def test_generate_schedule_interest_on_full_principal_every_week():
    """Simple interest: each week charges the same interest on the original principal"""
    installments = generate_schedule(520000, 10.0, 4, date(2024, 1, 1))

    # 520000/4 = 130000 principal, 520000 * 0.10 / 52 = 1000 interest
    assert all(inst.due_amount_cents == 131000 for inst in installments)


def test_round_cents_half_away_from_zero():
    assert round_cents(Decimal("10.5")) == 11
    assert round_cents(Decimal("10.49")) == 10
    assert round_cents(Decimal("11.5")) == 12
