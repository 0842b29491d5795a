"""Fixed-precision money in minor units"""

from dataclasses import dataclass
from decimal import Decimal

from left_to_pay.domain.exceptions import CurrencyMismatchError

DEFAULT_CURRENCY = "GBP"
CURRENCY_SYMBOLS = {"GBP": "£", "EUR": "€", "USD": "$"}


@dataclass(frozen=True)
class Money:
    """
    Amount held as an integer count of the currency's smallest unit.

    Only same-currency addition and subtraction are defined; mixing
    currencies raises CurrencyMismatchError instead of summing pence with cents.
    """

    currency: str
    minor_units: int

    def __post_init__(self) -> None:
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise TypeError(f"minor_units must be an int, got {self.minor_units!r}")

    @classmethod
    def zero(cls, currency: str) -> "Money":
        return cls(currency=currency, minor_units=0)

    @property
    def amount(self) -> Decimal:
        """Value in major units (pounds, euros...)"""
        return Decimal(self.minor_units) / 100

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(self.currency, other.currency)

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(self.currency, self.minor_units + other.minor_units)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        self._check_currency(other)
        return Money(self.currency, self.minor_units - other.minor_units)

    def format(self) -> str:
        """Render with the currency symbol and exactly two decimals, e.g. £-12.50"""
        symbol = CURRENCY_SYMBOLS.get(self.currency, f"{self.currency} ")
        return f"{symbol}{self.amount:.2f}"
