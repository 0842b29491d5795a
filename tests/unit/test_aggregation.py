"""Unit tests for obligation aggregation and balance projection"""

from datetime import date, datetime, timedelta, timezone

import pytest

from left_to_pay.domain.aggregation import aggregate, project_remaining
from left_to_pay.domain.exceptions import CurrencyMismatchError
from left_to_pay.domain.models import DirectDebit, RecurringPayment, ReportRow, StandingOrder
from left_to_pay.domain.money import Money

PAY_DATE = datetime(2024, 3, 28, 9, 0, tzinfo=timezone.utc)
CANCELLED_AT = "2024-01-01T00:00:00.000Z"


def gbp(minor_units: int) -> Money:
    return Money("GBP", minor_units)


def test_empty_lists_give_zero_total_and_no_rows():
    result = aggregate([], [], [], PAY_DATE)

    assert result.rows == []
    assert result.total_due == gbp(0)


def test_rows_ordered_by_kind_then_input_order():
    direct_debits = [
        DirectDebit("LIVE", "Energy Co", gbp(5000), date(2024, 3, 26)),
        DirectDebit("CANCELLED", "Old Gym", gbp(3000), date(2024, 3, 1)),
        DirectDebit("LIVE", "Water Co", gbp(2500), date(2024, 3, 10)),
    ]
    recurring_payments = [
        RecurringPayment("ACTIVE", "Streaming Co", gbp(999), PAY_DATE - timedelta(days=3)),
    ]
    standing_orders = [
        StandingOrder("Rent share", gbp(2000), CANCELLED_AT, PAY_DATE + timedelta(days=10)),
        StandingOrder("Savings", gbp(10000), None, PAY_DATE + timedelta(days=4)),
    ]

    result = aggregate(direct_debits, recurring_payments, standing_orders, PAY_DATE)

    assert result.rows == [
        ReportRow("LIVE", "Energy Co", gbp(5000), date(2024, 3, 26)),
        ReportRow("LIVE", "Water Co", gbp(2500), date(2024, 3, 10)),
        ReportRow("ACTIVE", "Streaming Co", gbp(999), date(2024, 3, 25)),
        ReportRow("ACTIVE", "Rent share", gbp(2000), date(2024, 4, 7)),
    ]
    assert result.total_due == gbp(5000 + 2500 + 999 + 2000)


def test_direct_debit_label_is_mandate_status():
    """Recurring payments and standing orders are labelled ACTIVE, mandates keep their own status"""
    result = aggregate([DirectDebit("LIVE", "Energy Co", gbp(100), date(2024, 3, 1))], [], [], PAY_DATE)
    assert result.rows[0].label == "LIVE"


def test_scenario_direct_debit_and_standing_order():
    """£1000 balance, £50 direct debit and £20 standing order leave £930"""
    balance = gbp(100000)
    result = aggregate(
        [DirectDebit("LIVE", "Energy Co", gbp(5000), PAY_DATE.date() - timedelta(days=2))],
        [],
        [StandingOrder("Rent share", gbp(2000), CANCELLED_AT, PAY_DATE + timedelta(days=10))],
        PAY_DATE,
    )

    assert len(result.rows) == 2
    assert result.total_due == gbp(7000)
    assert project_remaining(balance, result.total_due) == gbp(93000)


def test_unknown_pay_date_excludes_all_obligations():
    result = aggregate(
        [DirectDebit("LIVE", "Energy Co", gbp(5000), date(2020, 1, 1))],
        [RecurringPayment("ACTIVE", "Streaming Co", gbp(999), datetime(2020, 1, 1, tzinfo=timezone.utc))],
        [StandingOrder("Rent share", gbp(2000), CANCELLED_AT, datetime(2030, 1, 1, tzinfo=timezone.utc))],
        None,
    )

    assert result.rows == []
    assert result.total_due == gbp(0)


def test_total_uses_requested_currency():
    result = aggregate([], [], [], PAY_DATE, currency="EUR")
    assert result.total_due == Money("EUR", 0)


def test_obligation_in_other_currency_fails_fast():
    with pytest.raises(CurrencyMismatchError):
        aggregate(
            [DirectDebit("LIVE", "Energy Co", Money("EUR", 5000), date(2024, 3, 1))],
            [],
            [],
            PAY_DATE,
            currency="GBP",
        )


def test_excluded_obligation_in_other_currency_is_ignored():
    result = aggregate([DirectDebit("CANCELLED", "Old Gym", Money("EUR", 5000), date(2024, 3, 1))], [], [], PAY_DATE)
    assert result.total_due == gbp(0)


def test_project_remaining_currency_mismatch():
    with pytest.raises(CurrencyMismatchError):
        project_remaining(Money("EUR", 100), gbp(50))
