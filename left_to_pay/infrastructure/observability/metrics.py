"""Prometheus metrics for report runs, Starling fetches, and webhook delivery"""

from prometheus_client import Counter, Histogram

# Report metrics
report_counter = Counter(
    "left_to_pay_reports_total",
    "Total left-to-pay reports generated",
    ["outcome"],  # pay_date_known | pay_date_unknown
)

obligations_due_histogram = Histogram(
    "left_to_pay_obligations_due",
    "Obligations due before next pay day per report",
    buckets=[0, 1, 2, 5, 10, 20, 50],
)

# Webhook metrics
webhook_latency_histogram = Histogram(
    "webhook_latency_seconds",
    "Report webhook response time",
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

webhook_failure_counter = Counter(
    "webhook_failures_total",
    "Failed webhook deliveries",
)

# Starling API metrics
starling_fetch_failures_counter = Counter(
    "starling_fetch_failures_total",
    "Failed Starling API calls",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_report(pay_date_known: bool, obligations_due: int) -> None:
    """Record report metrics; unknown pay dates mean every obligation was excluded"""
    outcome = "pay_date_known" if pay_date_known else "pay_date_unknown"
    report_counter.labels(outcome=outcome).inc()
    obligations_due_histogram.observe(obligations_due)
