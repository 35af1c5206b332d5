"""Unit tests for the delinquency rule"""

from datetime import date, timedelta
from loan_engine.domain.delinquency import count_overdue, is_delinquent
from loan_engine.domain.models import InstallmentView

TODAY = date(2024, 6, 1)


def installment(days_from_today: int, paid: bool = False) -> InstallmentView:
    return InstallmentView(
        id=None,
        due_date=TODAY + timedelta(days=days_from_today),
        due_amount_cents=1000,
        paid=paid,
    )


def test_two_unpaid_overdue_is_delinquent():
    assert is_delinquent([installment(-14), installment(-7)], TODAY) is True


def test_one_unpaid_overdue_and_one_paid_is_not_delinquent():
    assert is_delinquent([installment(-14, paid=True), installment(-7)], TODAY) is False


def test_installment_due_today_is_overdue():
    installments = [installment(-7), installment(0)]

    assert count_overdue(installments, TODAY) == 2
    assert is_delinquent(installments, TODAY) is True


def test_installment_due_tomorrow_is_not_overdue():
    installments = [installment(-7), installment(1)]

    assert count_overdue(installments, TODAY) == 1
    assert is_delinquent(installments, TODAY) is False


def test_future_installments_are_ignored():
    assert count_overdue([installment(7), installment(14), installment(21)], TODAY) == 0


def test_overdue_counted_across_loans_combined():
    """One overdue installment on each of two loans still makes two"""
    first_loan = [installment(-7), installment(7)]
    second_loan = [installment(-1, paid=False), installment(6)]

    assert is_delinquent(first_loan + second_loan, TODAY) is True


def test_custom_threshold():
    installments = [installment(-21), installment(-14), installment(-7)]

    assert is_delinquent(installments, TODAY, threshold=3) is True
    assert is_delinquent(installments, TODAY, threshold=4) is False
