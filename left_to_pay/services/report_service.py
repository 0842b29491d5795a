"""Report orchestration: fetch the account snapshot, then run the forecast"""

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from left_to_pay.config import settings
from left_to_pay.domain.aggregation import aggregate, project_remaining
from left_to_pay.domain.exceptions import PayReferenceMissingError
from left_to_pay.domain.models import Account, LeftToPayReport
from left_to_pay.domain.paydate import resolve_pay_date
from left_to_pay.domain.report import render_report
from left_to_pay.infrastructure.clients.starling import StarlingClient
from left_to_pay.utils.date_utils import add_months, format_date


def configured_account() -> Optional[Account]:
    """Account pinned in settings, if both identifiers are set"""
    if settings.starling_account_uid and settings.starling_category_uid:
        return Account(
            account_uid=settings.starling_account_uid,
            category_uid=settings.starling_category_uid,
        )
    return None


async def build_report(
    client: StarlingClient,
    pay_reference: str,
    employer: Optional[str] = None,
    account: Optional[Account] = None,
    now: Optional[datetime] = None,
    lookback_months: Optional[int] = None,
) -> LeftToPayReport:
    """
    Build a left-to-pay report for one account.

    Flow:
    1. Discover the PRIMARY account unless one is given
    2. Fetch balance, feed, direct debits, recurring payments and standing orders concurrently
    3. Resolve the last pay day from the feed
    4. Aggregate obligations due before the next pay day
    5. Project the remaining balance

    Any fetch failure aborts the run; no partial report is produced.

    Raises:
        PayReferenceMissingError: If no salary reference is available
        StarlingAPIError: On any failed or undecodable Starling call
        AccountNotFoundError: If account discovery finds no PRIMARY account
        CurrencyMismatchError: If obligations and balance disagree on currency
    """
    if not pay_reference:
        raise PayReferenceMissingError("A pay reference is required to find pay day")

    now = now or datetime.now(timezone.utc)
    if lookback_months is None:
        lookback_months = settings.transaction_lookback_months
    if account is None:
        account = await client.get_primary_account()

    since = add_months(now, -lookback_months)
    balance, transactions, direct_debits, recurring_payments, standing_orders = await asyncio.gather(
        client.get_balance(account),
        client.get_transactions_since(account, since),
        client.get_direct_debits(),
        client.get_recurring_payments(account),
        client.get_standing_orders(account),
    )

    pay_date = resolve_pay_date(transactions, pay_reference, employer)
    aggregation = aggregate(
        direct_debits,
        recurring_payments,
        standing_orders,
        pay_date,
        currency=balance.currency,
    )

    return LeftToPayReport(
        account=account,
        balance=balance,
        pay_date=pay_date,
        aggregation=aggregation,
        remaining=project_remaining(balance, aggregation.total_due),
    )


def render(report: LeftToPayReport) -> str:
    return render_report(
        report.aggregation.rows,
        report.aggregation.total_due,
        report.balance,
        report.pay_date,
    )


def summarize(report: LeftToPayReport) -> Dict[str, Any]:
    """JSON-friendly figures for webhooks and the summary endpoint"""
    return {
        "account_uid": report.account.account_uid,
        "currency": report.balance.currency,
        "pay_date": format_date(report.pay_date),
        "balance_minor_units": report.balance.minor_units,
        "total_due_minor_units": report.aggregation.total_due.minor_units,
        "remaining_minor_units": report.remaining.minor_units,
        "rows": [
            {
                "label": row.label,
                "payee": row.payee,
                "amount_minor_units": row.amount.minor_units,
                "due_date": format_date(row.due_date),
            }
            for row in report.aggregation.rows
        ],
    }
