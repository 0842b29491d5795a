"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from left_to_pay.infrastructure.clients.notifier import ReportNotifier
from left_to_pay.infrastructure.clients.starling import StarlingClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_starling_client() -> StarlingClient:
    """Provide Starling API client instance"""
    return StarlingClient()


def get_report_notifier() -> ReportNotifier:
    """Provide report webhook client instance"""
    return ReportNotifier()
