"""
Per-kind "due before next pay" rules.

Each obligation type exposes a different forward-looking signal, so each gets
its own predicate rather than one generic date comparison:
- direct debit: only the date of the last collection is known
- recurring payment: only the instant of the last charge is known
- standing order: the next scheduled run is known

Every predicate is False when the pay date is unknown (None).
"""

from datetime import datetime
from typing import Optional

from left_to_pay.domain.models import DirectDebit, RecurringPayment, StandingOrder
from left_to_pay.utils.date_utils import add_months

DIRECT_DEBIT_LIVE = "LIVE"
RECURRING_PAYMENT_ACTIVE = "ACTIVE"


def is_direct_debit_due(direct_debit: DirectDebit, pay_date: Optional[datetime]) -> bool:
    """LIVE mandate last collected on a calendar day before pay day"""
    if pay_date is None or direct_debit.last_payment_date is None:
        return False
    return (
        direct_debit.status == DIRECT_DEBIT_LIVE
        and direct_debit.last_payment_date < pay_date.date()
    )


def is_recurring_payment_due(payment: RecurringPayment, pay_date: Optional[datetime]) -> bool:
    """ACTIVE recurring payment last charged strictly before pay day"""
    if pay_date is None:
        return False
    return payment.status == RECURRING_PAYMENT_ACTIVE and payment.last_date < pay_date


def is_standing_order_due(order: StandingOrder, pay_date: Optional[datetime]) -> bool:
    """
    Standing order whose next run falls strictly inside (pay_date, pay_date + 1 month).

    Only orders with a non-empty cancelledAt value qualify. This mirrors how the
    report has always treated the Starling payload; orders without the field are
    skipped.
    """
    if pay_date is None or not order.cancelled_at or order.next_date is None:
        return False
    return pay_date < order.next_date < add_months(pay_date, 1)
