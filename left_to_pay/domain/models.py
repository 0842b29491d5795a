"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from left_to_pay.domain.money import Money


class Direction(str, Enum):
    """Money flow relative to the account"""

    IN = "IN"
    OUT = "OUT"


@dataclass(frozen=True)
class Account:
    """Starling account the report is built for"""

    account_uid: str
    category_uid: str
    account_type: str = "PRIMARY"
    name: str = ""


@dataclass(frozen=True)
class Transaction:
    """Feed item from the account's default category"""

    amount: Money
    direction: Direction
    timestamp: datetime
    counterparty: str
    reference: str


@dataclass(frozen=True)
class DirectDebit:
    """Direct debit mandate with its most recent collection"""

    status: str  # "LIVE", "CANCELLED", ...
    payee: str
    last_payment_amount: Money
    last_payment_date: Optional[date]  # None when the mandate has never been collected


@dataclass(frozen=True)
class RecurringPayment:
    """Merchant-initiated recurring card payment"""

    status: str  # "ACTIVE", "CANCELLED", ...
    payee: str
    last_amount: Money
    last_date: datetime


@dataclass(frozen=True)
class StandingOrder:
    """Payer-initiated fixed transfer with a known next run"""

    reference: str
    amount: Money
    cancelled_at: Optional[str]  # raw value from the API, "" and None both mean unset
    next_date: Optional[datetime]  # None when no further run is scheduled


@dataclass(frozen=True)
class ReportRow:
    """Single obligation line in the left-to-pay ledger"""

    label: str
    payee: str
    amount: Money
    due_date: date


@dataclass
class AggregationResult:
    """Obligations due before the next pay day and their sum"""

    total_due: Money
    rows: List[ReportRow] = field(default_factory=list)


@dataclass
class LeftToPayReport:
    """Everything produced by one report run"""

    account: Account
    balance: Money
    pay_date: Optional[datetime]
    aggregation: AggregationResult
    remaining: Money
