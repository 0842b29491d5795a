"""Pay day detection from the transaction feed"""

from datetime import datetime
from typing import Iterable, Optional

from left_to_pay.domain.models import Direction, Transaction


def is_salary_deposit(
    transaction: Transaction,
    reference: str,
    counterparty: Optional[str] = None,
) -> bool:
    """Incoming transaction carrying the salary reference (and employer, if given)"""
    if transaction.direction != Direction.IN or transaction.reference != reference:
        return False
    return counterparty is None or transaction.counterparty == counterparty


def resolve_pay_date(
    transactions: Iterable[Transaction],
    reference: str,
    counterparty: Optional[str] = None,
) -> Optional[datetime]:
    """
    Return the timestamp of the last salary deposit in feed order.

    The last match encountered wins, not the chronologically latest one, so an
    unsorted feed decides which deposit counts as pay day.

    Returns:
        The pay date, or None when no transaction matches (unknown pay date)
    """
    pay_date = None
    for transaction in transactions:
        if is_salary_deposit(transaction, reference, counterparty):
            pay_date = transaction.timestamp
    return pay_date
