"""HTML rendering of the left-to-pay ledger"""

from datetime import datetime
from html import escape
from typing import Optional, Sequence

from left_to_pay.domain.models import ReportRow
from left_to_pay.domain.money import Money
from left_to_pay.utils.date_utils import format_date

STYLE = "table, th, td {border: 1px solid black; border-collapse: collapse; padding: 2px 6px;}"
HEADER = "<tr><th>Status</th><th>Payee</th><th>Amount</th><th>Date</th></tr>"

# Zero-width space: forces mail clients that sniff the body to pick UTF-8
ZWSP = "\u200b"


def render_row(row: ReportRow) -> str:
    return (
        f"<tr><td>{escape(row.label)}</td>"
        f"<td>{escape(row.payee)}</td>"
        f"<td>{row.amount.format()}</td>"
        f"<td>{format_date(row.due_date)}</td></tr>"
    )


def render_report(
    rows: Sequence[ReportRow],
    total_due: Money,
    balance: Money,
    pay_date: Optional[datetime],
) -> str:
    """
    Render the ledger plus balance summary as a standalone HTML document.

    Remaining balance is `balance - total_due`; both must share a currency.
    """
    remaining = balance - total_due
    table = "".join([HEADER] + [render_row(row) for row in rows])
    return (
        '<!DOCTYPE html><html><head><meta charset="utf-8">'
        f"<style>{STYLE}</style></head><body>"
        f"<table>{table}</table>"
        f"<p>{ZWSP}Last pay day {format_date(pay_date)}</p>"
        f"<p>Balance {balance.format()}<br>"
        f"To pay {total_due.format()}<br>"
        f"Remaining balance {remaining.format()}</p>"
        "</body></html>"
    )
