"""Left-to-pay report endpoints"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse

from left_to_pay.api.dependencies import get_report_notifier, get_request_id, get_starling_client
from left_to_pay.api.v1.schemas import SummaryResponse
from left_to_pay.config import settings
from left_to_pay.domain.exceptions import (
    AccountNotFoundError,
    CurrencyMismatchError,
    PayReferenceMissingError,
    StarlingAPIError,
)
from left_to_pay.domain.models import LeftToPayReport
from left_to_pay.infrastructure.clients.notifier import ReportNotifier
from left_to_pay.infrastructure.clients.starling import StarlingClient
from left_to_pay.infrastructure.observability.logging import log_report
from left_to_pay.infrastructure.observability.metrics import record_report, starling_fetch_failures_counter
from left_to_pay.services.report_service import build_report, configured_account, render, summarize

router = APIRouter()


async def run_report(
    request: Request,
    starling_client: StarlingClient,
    pay_reference: Optional[str],
    employer: Optional[str],
) -> LeftToPayReport:
    """Build a report and translate domain failures into HTTP errors"""
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        report = await build_report(
            starling_client,
            pay_reference=pay_reference or settings.pay_reference,
            employer=employer or settings.employer_name,
            account=configured_account(),
        )

    except StarlingAPIError as e:
        starling_fetch_failures_counter.inc()
        logging.error(f"Starling API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Starling service unavailable")

    except AccountNotFoundError as e:
        logging.warning(f"Account not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except (PayReferenceMissingError, CurrencyMismatchError) as e:
        logging.warning(f"Cannot build report: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    row_count = len(report.aggregation.rows)
    record_report(report.pay_date is not None, row_count)
    log_report(
        request_id,
        report.account.account_uid,
        report.pay_date,
        row_count,
        report.aggregation.total_due.minor_units,
        report.remaining.minor_units,
        duration_ms,
    )
    return report


@router.get("/report", response_class=HTMLResponse)
async def get_report(
    request: Request,
    pay_reference: Optional[str] = Query(None, description="Salary reference; defaults to PAY_REFERENCE"),
    employer: Optional[str] = Query(None, description="Salary counterparty; defaults to EMPLOYER_NAME"),
    starling_client: StarlingClient = Depends(get_starling_client),
):
    """Rendered HTML ledger of obligations due before the next pay day"""
    report = await run_report(request, starling_client, pay_reference, employer)
    return HTMLResponse(content=render(report))


@router.get("/summary", response_model=SummaryResponse)
async def get_summary(
    request: Request,
    pay_reference: Optional[str] = Query(None, description="Salary reference; defaults to PAY_REFERENCE"),
    employer: Optional[str] = Query(None, description="Salary counterparty; defaults to EMPLOYER_NAME"),
    starling_client: StarlingClient = Depends(get_starling_client),
):
    """Same figures as the HTML report, in minor units"""
    report = await run_report(request, starling_client, pay_reference, employer)
    return summarize(report)


@router.post("/report/deliver", response_model=SummaryResponse, status_code=202)
async def deliver_report(
    request: Request,
    background_tasks: BackgroundTasks,
    pay_reference: Optional[str] = Query(None, description="Salary reference; defaults to PAY_REFERENCE"),
    employer: Optional[str] = Query(None, description="Salary counterparty; defaults to EMPLOYER_NAME"),
    starling_client: StarlingClient = Depends(get_starling_client),
    notifier: ReportNotifier = Depends(get_report_notifier),
):
    """
    Build the report and push it to the configured webhook.

    Delivery runs as a background task with retries; the response carries
    the summary as soon as the report is built.
    """
    if not notifier.webhook_url:
        raise HTTPException(status_code=409, detail="No report webhook configured")

    report = await run_report(request, starling_client, pay_reference, employer)
    summary = summarize(report)
    background_tasks.add_task(notifier.send_report, render(report), summary)
    return summary
