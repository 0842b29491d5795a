"""Pydantic schemas for API response validation"""

from typing import List

from pydantic import BaseModel


class ReportRowSchema(BaseModel):
    """Single obligation due before next pay day"""

    label: str
    payee: str
    amount_minor_units: int
    due_date: str


class SummaryResponse(BaseModel):
    """Response for GET /v1/summary and POST /v1/report/deliver"""

    account_uid: str
    currency: str
    pay_date: str  # YYYY-MM-DD or "unknown"
    balance_minor_units: int
    total_due_minor_units: int
    remaining_minor_units: int
    rows: List[ReportRowSchema]
