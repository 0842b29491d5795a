"""Report delivery webhook client with exponential backoff retry logic"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from left_to_pay.config import settings
from left_to_pay.infrastructure.observability.metrics import webhook_failure_counter, webhook_latency_histogram

REPORT_EVENT = "LEFT_TO_PAY_REPORT"


class ReportNotifier:
    """Client for pushing rendered reports to a webhook (mailer, chat bot...)"""

    def __init__(
        self,
        webhook_url: str | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
    ):
        self.webhook_url = webhook_url or settings.report_webhook_url
        self.max_retries = max_retries if max_retries is not None else settings.webhook_max_retries
        if self.max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.backoff_base = backoff_base if backoff_base is not None else settings.webhook_backoff_base

    async def send_report(self, report_html: str, summary: Dict[str, Any]) -> None:
        """
        Deliver a rendered report with retry logic.

        Retry strategy:
        - Exponential backoff: 1s, 2s, 4s, 8s (base * 2^(attempt-1))
        - Retries on 5xx responses and network failures; 4xx fails at once
        - Tracks latency histogram and failure counter

        Args:
            report_html: Rendered HTML document
            summary: JSON-serialisable figures shown in the report
        """
        payload = {"event": REPORT_EVENT, "html": report_html, "summary": summary}
        attempt = 0
        async with httpx.AsyncClient() as client:
            while attempt < self.max_retries:
                try:
                    with webhook_latency_histogram.time():
                        response = await client.post(
                            self.webhook_url,
                            json=payload,
                            timeout=settings.http_timeout_seconds,
                        )
                        response.raise_for_status()
                        return

                except (httpx.HTTPStatusError, httpx.RequestError) as e:
                    attempt += 1
                    webhook_failure_counter.inc()

                    if isinstance(e, httpx.HTTPStatusError) and e.response.status_code < 500:
                        logging.error(f"Report delivery rejected by webhook: {e}")
                        raise

                    if attempt >= self.max_retries:
                        logging.error(f"Report delivery failed after {attempt} attempts: {e}")
                        raise

                    backoff = self.backoff_base * (2 ** (attempt - 1))
                    logging.warning(f"Report delivery attempt {attempt} failed, retrying in {backoff}s")
                    await asyncio.sleep(backoff)
