"""Starling Bank API client for balance, feed, and payment obligations"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, TypeVar

import httpx

from left_to_pay.config import settings
from left_to_pay.domain.exceptions import AccountNotFoundError, StarlingAPIError
from left_to_pay.domain.models import (
    Account,
    Direction,
    DirectDebit,
    RecurringPayment,
    StandingOrder,
    Transaction,
)
from left_to_pay.domain.money import DEFAULT_CURRENCY, Money
from left_to_pay.utils.date_utils import format_instant, parse_date, parse_instant

logger = logging.getLogger(__name__)

T = TypeVar("T")

PRIMARY_ACCOUNT = "PRIMARY"


def parse_money(data: Dict[str, Any]) -> Money:
    """Decode a Starling {"currency", "minorUnits"} amount"""
    minor_units = data["minorUnits"]
    if isinstance(minor_units, float):
        if not minor_units.is_integer():
            raise ValueError(f"minorUnits must be integral, got {minor_units}")
        minor_units = int(minor_units)
    return Money(currency=data["currency"], minor_units=minor_units)


def parse_accounts(payload: Dict[str, Any]) -> List[Account]:
    return [
        Account(
            account_uid=acc["accountUid"],
            category_uid=acc["defaultCategory"],
            account_type=acc["accountType"],
            name=acc.get("name", ""),
        )
        for acc in payload.get("accounts", [])
    ]


def parse_transactions(payload: Dict[str, Any]) -> List[Transaction]:
    return [
        Transaction(
            amount=parse_money(item["amount"]),
            direction=Direction(item["direction"]),
            timestamp=parse_instant(item["transactionTime"]),
            counterparty=item.get("counterPartyName", ""),
            reference=item.get("reference", ""),
        )
        for item in payload.get("feedItems", [])
    ]


def parse_direct_debits(payload: Dict[str, Any]) -> List[DirectDebit]:
    mandates = []
    for item in payload.get("mandates", []):
        # Mandates that have never been collected carry no lastPayment block
        last_payment = item.get("lastPayment")
        if last_payment:
            amount = parse_money(last_payment["lastAmount"])
            last_date = parse_date(last_payment["lastDate"])
        else:
            amount, last_date = Money.zero(DEFAULT_CURRENCY), None
        mandates.append(
            DirectDebit(
                status=item["status"],
                payee=item.get("originatorName", ""),
                last_payment_amount=amount,
                last_payment_date=last_date,
            )
        )
    return mandates


def parse_recurring_payments(payload: Dict[str, Any]) -> List[RecurringPayment]:
    return [
        RecurringPayment(
            status=item["status"],
            payee=item.get("counterPartyName", ""),
            last_amount=parse_money(item["latestPaymentAmount"]),
            last_date=parse_instant(item["latestPaymentDate"]),
        )
        for item in payload.get("recurringPayments", [])
    ]


def parse_standing_orders(payload: Dict[str, Any]) -> List[StandingOrder]:
    orders = []
    for item in payload.get("standingOrders", []):
        next_date = item.get("nextDate")
        orders.append(
            StandingOrder(
                reference=item.get("reference", ""),
                amount=parse_money(item["amount"]),
                cancelled_at=item.get("cancelledAt"),
                next_date=parse_instant(next_date) if next_date else None,
            )
        )
    return orders


class StarlingClient:
    """
    Client for the Starling Bank public API (v2).

    Pass `http_client` to share one connection pool across calls (or to plug in
    a mock transport); otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        access_token: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.access_token = access_token or settings.starling_access_token
        self.base_url = (base_url or settings.starling_api_base).rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.http_client = http_client

    async def _get(self, path: str, params: Dict[str, str] | None = None) -> Dict[str, Any]:
        """
        GET a JSON resource.

        Raises:
            StarlingAPIError: On timeout, network failure, HTTP errors, or non-JSON body
        """
        url = f"{self.base_url}/{path}"
        headers = {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
        }
        try:
            if self.http_client is not None:
                response = await self.http_client.get(url, params=params, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()

        except httpx.TimeoutException as e:
            raise StarlingAPIError(f"Starling API timeout after {self.timeout}s on {path}") from e
        except httpx.HTTPStatusError as e:
            raise StarlingAPIError(f"Starling API error: {e.response.status_code} on {path}") from e
        except httpx.RequestError as e:
            raise StarlingAPIError(f"Starling API unreachable: {e}") from e
        except ValueError as e:
            raise StarlingAPIError(f"Starling API returned non-JSON body on {path}") from e

    async def _fetch(
        self,
        path: str,
        decode: Callable[[Dict[str, Any]], T],
        params: Dict[str, str] | None = None,
    ) -> T:
        payload = await self._get(path, params)
        try:
            return decode(payload)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise StarlingAPIError(f"Invalid data from Starling on {path}: {e!r}") from e

    async def get_primary_account(self) -> Account:
        """
        Discover the account the report is built for.

        If several PRIMARY accounts are listed the last one wins.

        Raises:
            AccountNotFoundError: If no PRIMARY account is visible
        """
        accounts = await self._fetch("accounts", parse_accounts)
        primary = None
        for account in accounts:
            if account.account_type == PRIMARY_ACCOUNT:
                primary = account
        if primary is None:
            raise AccountNotFoundError("No PRIMARY account found for access token")
        logger.debug("Resolved primary account", extra={"account_uid": primary.account_uid})
        return primary

    async def get_balance(self, account: Account) -> Money:
        """Effective balance (cleared plus pending)"""
        return await self._fetch(
            f"accounts/{account.account_uid}/balance",
            lambda payload: parse_money(payload["effectiveBalance"]),
        )

    async def get_transactions_since(self, account: Account, since: datetime) -> List[Transaction]:
        """Feed items in the account's default category changed since `since`"""
        return await self._fetch(
            f"feed/account/{account.account_uid}/category/{account.category_uid}",
            parse_transactions,
            params={"changesSince": format_instant(since)},
        )

    async def get_direct_debits(self) -> List[DirectDebit]:
        """All direct debit mandates for the token holder"""
        return await self._fetch("direct-debit/mandates", parse_direct_debits)

    async def get_recurring_payments(self, account: Account) -> List[RecurringPayment]:
        return await self._fetch(f"accounts/{account.account_uid}/recurring-payment", parse_recurring_payments)

    async def get_standing_orders(self, account: Account) -> List[StandingOrder]:
        return await self._fetch(
            f"payments/local/account/{account.account_uid}/category/{account.category_uid}/standing-orders",
            parse_standing_orders,
        )
