"""Pytest fixtures for testing"""

from datetime import datetime, timezone
from typing import Any, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from left_to_pay.api.dependencies import get_starling_client
from left_to_pay.api.main import create_app
from left_to_pay.infrastructure.clients.starling import StarlingClient

STARLING_BASE = "https://api.starling.test/api/v2"


def gbp(minor_units: int) -> Dict[str, Any]:
    return {"currency": "GBP", "minorUnits": minor_units}


@pytest.fixture
def pay_date() -> datetime:
    """Salary landing time used by the sample feed"""
    return datetime(2024, 3, 28, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def starling_payloads() -> Dict[str, Dict[str, Any]]:
    """
    Starling API responses keyed by path below the API base.

    Expected outcome with reference SALARY: pay day 2024-03-28, two obligations
    due (Energy Co direct debit £50.00, Rent share standing order £20.00),
    balance £1000.00, remaining £930.00.
    """
    return {
        "accounts": {
            "accounts": [
                {
                    "accountUid": "acc-joint",
                    "accountType": "ADDITIONAL",
                    "defaultCategory": "cat-joint",
                    "currency": "GBP",
                    "name": "Joint",
                },
                {
                    "accountUid": "acc-1",
                    "accountType": "PRIMARY",
                    "defaultCategory": "cat-1",
                    "currency": "GBP",
                    "name": "Personal",
                },
            ]
        },
        "accounts/acc-1/balance": {
            "clearedBalance": gbp(95000),
            "effectiveBalance": gbp(100000),
            "amount": gbp(100000),
        },
        "feed/account/acc-1/category/cat-1": {
            "feedItems": [
                {
                    "amount": gbp(250000),
                    "direction": "IN",
                    "transactionTime": "2024-02-28T09:00:00.000Z",
                    "counterPartyName": "ACME LTD",
                    "reference": "SALARY",
                },
                {
                    "amount": gbp(450),
                    "direction": "OUT",
                    "transactionTime": "2024-03-20T08:15:00.000Z",
                    "counterPartyName": "Coffee Shop",
                    "reference": "SALARY",
                },
                {
                    "amount": gbp(250000),
                    "direction": "IN",
                    "transactionTime": "2024-03-28T09:00:00.000Z",
                    "counterPartyName": "ACME LTD",
                    "reference": "SALARY",
                },
                {
                    "amount": gbp(1200),
                    "direction": "IN",
                    "transactionTime": "2024-03-29T10:00:00.000Z",
                    "counterPartyName": "Online Shop",
                    "reference": "REFUND",
                },
            ]
        },
        "direct-debit/mandates": {
            "mandates": [
                {
                    "status": "LIVE",
                    "originatorName": "Energy Co",
                    "lastPayment": {"lastDate": "2024-03-26", "lastAmount": gbp(5000)},
                },
                {
                    "status": "CANCELLED",
                    "originatorName": "Old Gym",
                    "lastPayment": {"lastDate": "2024-03-01", "lastAmount": gbp(3000)},
                },
                {"status": "LIVE", "originatorName": "New Insurer"},
            ]
        },
        "accounts/acc-1/recurring-payment": {
            "recurringPayments": [
                {
                    "status": "ACTIVE",
                    "counterPartyName": "Streaming Co",
                    "latestPaymentAmount": gbp(999),
                    "latestPaymentDate": "2024-03-29T00:00:00.000Z",
                },
            ]
        },
        "payments/local/account/acc-1/category/cat-1/standing-orders": {
            "standingOrders": [
                {
                    "reference": "Rent share",
                    "amount": gbp(2000),
                    "cancelledAt": "2024-01-01T00:00:00.000Z",
                    "nextDate": "2024-04-07",
                },
                {"reference": "Savings", "amount": gbp(10000), "nextDate": "2024-04-01"},
            ]
        },
    }


@pytest.fixture
def starling_requests() -> List[httpx.Request]:
    """Requests seen by the mock Starling API"""
    return []


@pytest.fixture
def starling_client(starling_payloads, starling_requests) -> StarlingClient:
    """Starling client backed by an in-memory transport serving `starling_payloads`"""
    prefix = httpx.URL(STARLING_BASE).path + "/"

    def handler(request: httpx.Request) -> httpx.Response:
        starling_requests.append(request)
        path = request.url.path[len(prefix):]
        if path not in starling_payloads:
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json=starling_payloads[path])

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return StarlingClient(access_token="test-token", base_url=STARLING_BASE, http_client=http_client)


@pytest.fixture
def client(starling_client: StarlingClient) -> TestClient:
    """FastAPI test client talking to the mock Starling API"""
    app = create_app()
    app.dependency_overrides[get_starling_client] = lambda: starling_client
    return TestClient(app)
