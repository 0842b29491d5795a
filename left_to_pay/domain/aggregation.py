"""Left-to-pay aggregation - core business logic for the balance forecast"""

from datetime import datetime
from typing import Iterable, Optional

from left_to_pay.domain.models import (
    AggregationResult,
    DirectDebit,
    RecurringPayment,
    ReportRow,
    StandingOrder,
)
from left_to_pay.domain.money import DEFAULT_CURRENCY, Money
from left_to_pay.domain.obligations import (
    is_direct_debit_due,
    is_recurring_payment_due,
    is_standing_order_due,
)

ACTIVE_LABEL = "ACTIVE"


def aggregate(
    direct_debits: Iterable[DirectDebit],
    recurring_payments: Iterable[RecurringPayment],
    standing_orders: Iterable[StandingOrder],
    pay_date: Optional[datetime],
    currency: str = DEFAULT_CURRENCY,
) -> AggregationResult:
    """
    Collect every obligation due before the next pay day and sum them.

    Rows come out as direct debits, then recurring payments, then standing
    orders, each in input order. The total is exact minor-unit addition.

    Raises:
        CurrencyMismatchError: If an obligation is not in `currency`
    """
    total = Money.zero(currency)
    rows = []

    for dd in direct_debits:
        if is_direct_debit_due(dd, pay_date):
            rows.append(ReportRow(dd.status, dd.payee, dd.last_payment_amount, dd.last_payment_date))
            total += dd.last_payment_amount

    for rp in recurring_payments:
        if is_recurring_payment_due(rp, pay_date):
            rows.append(ReportRow(ACTIVE_LABEL, rp.payee, rp.last_amount, rp.last_date.date()))
            total += rp.last_amount

    for so in standing_orders:
        if is_standing_order_due(so, pay_date):
            rows.append(ReportRow(ACTIVE_LABEL, so.reference, so.amount, so.next_date.date()))
            total += so.amount

    return AggregationResult(total_due=total, rows=rows)


def project_remaining(balance: Money, total_due: Money) -> Money:
    """Balance left once everything due has gone out"""
    return balance - total_due
