"""Unit tests for the display timeline"""

from datetime import date
from decimal import Decimal
from credit_tracker.domain.allocation import allocate_payments
from credit_tracker.domain.models import AllocationResult
from credit_tracker.domain.schedule import (
    amount_left,
    build_schedule,
    months_elapsed,
    months_remaining,
    projected_for_month,
)
from credit_tracker.utils.date_utils import Month

TODAY = date(2024, 5, 20)


def test_schedule_rows_scenario_a(make_purchase):
    """Test purchase month row plus one row per installment month"""
    purchase = make_purchase("1000", date(2024, 1, 15), "a", name="Laptop")

    rows = build_schedule([purchase], {}, today=TODAY)

    assert len(rows) == 10
    assert [str(r.month) for r in rows] == [f"2024-{m:02d}" for m in range(1, 11)]

    first = rows[0]
    assert first.is_first_row is True
    assert first.name == "Laptop"
    assert first.amount == Decimal("1000")
    assert first.installments == 9
    assert first.amount_left == Decimal("1000.00")
    assert first.projected == Decimal("0.00")

    for row in rows[1:]:
        assert row.is_first_row is False
        assert row.name is None
        assert row.amount_left is None
        assert row.months_remaining is None
        assert row.projected == Decimal("111.11")


def test_due_in_full_single_row_scenario_b(make_purchase):
    purchase = make_purchase("50", date(2024, 3, 9), "a")

    rows = build_schedule([purchase], {}, today=TODAY)
    assert len(rows) == 1
    assert rows[0].amount_left == Decimal("50.00")
    assert rows[0].installments == 0

    paid = build_schedule([purchase], {Month(2024, 3): Decimal("50")}, today=TODAY)
    assert paid[0].amount_paid == Decimal("50.00")
    assert paid[0].amount_left == Decimal("0.00")


def test_rows_carry_cash_applied_in_their_month(make_purchase):
    purchase = make_purchase("300", date(2024, 1, 5), "a")
    ledger = {Month(2024, 2): Decimal("100"), Month(2024, 3): Decimal("40")}

    rows = build_schedule([purchase], ledger, today=TODAY)
    paid = {str(r.month): r.amount_paid for r in rows}

    assert paid == {
        "2024-01": Decimal("0.00"),
        "2024-02": Decimal("100.00"),
        "2024-03": Decimal("40.00"),
        "2024-04": Decimal("0.00"),
    }
    assert rows[0].amount_left == Decimal("160.00")


def test_rows_interleaved_by_month_then_date_then_id(make_purchase):
    a = make_purchase("300", date(2024, 1, 20), "a")
    b = make_purchase("150", date(2024, 2, 2), "b")
    c = make_purchase("30", date(2024, 1, 20), "c")

    rows = build_schedule([b, c, a], {}, today=TODAY)
    order = [(str(r.month), r.purchase_id) for r in rows]

    assert order == [
        ("2024-01", "a"),
        ("2024-01", "c"),
        ("2024-02", "a"),
        ("2024-02", "b"),
        ("2024-03", "a"),
        ("2024-03", "b"),
        ("2024-04", "a"),
        ("2024-04", "b"),
        ("2024-05", "b"),
    ]


def test_projected_sums_overlapping_installments(make_purchase):
    a = make_purchase("300", date(2024, 1, 5), "a")  # 100/month Feb-Apr
    b = make_purchase("1000", date(2024, 2, 5), "b")  # 111.11/month Mar-Nov
    c = make_purchase("20", date(2024, 3, 1), "c")  # due in full, no installment

    purchases = [a, b, c]
    assert projected_for_month(Month(2024, 2), purchases) == Decimal("100.00")
    assert projected_for_month(Month(2024, 3), purchases) == Decimal("211.11")
    assert projected_for_month(Month(2024, 5), purchases) == Decimal("111.11")
    assert projected_for_month(Month(2024, 12), purchases) == Decimal("0.00")


def test_months_elapsed_and_remaining(make_purchase):
    purchase = make_purchase("1000", date(2024, 1, 15), "a")

    assert months_elapsed(purchase, date(2024, 5, 20)) == 4
    assert months_remaining(purchase, date(2024, 5, 20)) == 6

    # Before the first installment is due
    assert months_elapsed(purchase, date(2024, 1, 31)) == 0
    assert months_remaining(purchase, date(2024, 1, 31)) == 9

    # Long after the schedule ended
    assert months_remaining(purchase, date(2026, 1, 1)) == 0


def test_amount_left_masks_rounding_dust(make_purchase):
    purchase = make_purchase("1000", date(2024, 1, 15), "a")

    dust = AllocationResult(totals={"a": Decimal("999.96")})
    assert amount_left(purchase, dust) == Decimal("0.00")

    owed = AllocationResult(totals={"a": Decimal("999.95")})
    assert amount_left(purchase, owed) == Decimal("0.05")


def test_full_schedule_pays_off_with_accepted_drift(make_purchase):
    """Test nine payments of 111.11 leave 0.01 which is shown as paid off"""
    purchase = make_purchase("1000", date(2024, 1, 15), "a")
    ledger = {Month(2024, m): Decimal("111.11") for m in range(2, 11)}

    allocation = allocate_payments([purchase], ledger)
    rows = build_schedule([purchase], ledger, allocation=allocation, today=date(2025, 1, 1))

    assert allocation.total_paid("a") == Decimal("999.99")
    assert rows[0].amount_left == Decimal("0.00")
    assert rows[0].months_remaining == 0
