"""Mortgage scenario inputs: payment frequency, tagged down payment, scenario."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

HUNDRED = Decimal("100")

AMORTIZATION_PERIODS = list(range(5, 31))  # Years offered by the form
TERM_LENGTHS = list(range(1, 11))


class InvalidScenario(ValueError):
    """Scenario values the amortization engine cannot compute."""


class PaymentFrequency(Enum):
    MONTHLY = "monthly"
    BIWEEKLY = "biweekly"
    ACCELERATED_BIWEEKLY = "accelerated_biweekly"
    WEEKLY = "weekly"
    ACCELERATED_WEEKLY = "accelerated_weekly"

    @property
    def payments_per_year(self) -> int:
        return _PAYMENTS_PER_YEAR[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def acceleration_divisor(self) -> int | None:
        """Fraction of the monthly payment charged per period, for accelerated plans.

        Accelerated bi-weekly pays half the monthly payment 26 times a year;
        accelerated weekly pays a quarter 52 times a year.
        """
        return _ACCELERATION_DIVISORS.get(self)

    @property
    def is_accelerated(self) -> bool:
        return self in _ACCELERATION_DIVISORS


_PAYMENTS_PER_YEAR = {
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.BIWEEKLY: 26,
    PaymentFrequency.ACCELERATED_BIWEEKLY: 26,
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.ACCELERATED_WEEKLY: 52,
}

_LABELS = {
    PaymentFrequency.MONTHLY: "Monthly",
    PaymentFrequency.BIWEEKLY: "Bi-Weekly",
    PaymentFrequency.ACCELERATED_BIWEEKLY: "Accelerated Bi-Weekly",
    PaymentFrequency.WEEKLY: "Weekly",
    PaymentFrequency.ACCELERATED_WEEKLY: "Accelerated Weekly",
}

_ACCELERATION_DIVISORS = {
    PaymentFrequency.ACCELERATED_BIWEEKLY: 2,
    PaymentFrequency.ACCELERATED_WEEKLY: 4,
}


@dataclass(frozen=True)
class DownPaymentAmount:
    """Down payment stated in currency."""
    amount: Decimal

    kind = "amount"

    def resolve(self, purchase_price: Decimal) -> Decimal:
        return self.amount

    def validate(self, purchase_price: Decimal) -> None:
        if self.amount < 0:
            raise InvalidScenario("Down payment cannot be negative")
        if self.amount > purchase_price:
            raise InvalidScenario("Down payment cannot exceed the purchase price")


@dataclass(frozen=True)
class DownPaymentPercent:
    """Down payment stated as a percentage of the purchase price (0-100)."""
    percent: Decimal

    kind = "percent"

    def resolve(self, purchase_price: Decimal) -> Decimal:
        return purchase_price * self.percent / HUNDRED

    def validate(self, purchase_price: Decimal) -> None:
        if self.percent < 0:
            raise InvalidScenario("Down payment cannot be negative")
        if self.percent > HUNDRED:
            raise InvalidScenario("Down payment percentage cannot exceed 100")


DownPayment = DownPaymentAmount | DownPaymentPercent

DOWN_PAYMENT_TYPES = {cls.kind: cls for cls in (DownPaymentAmount, DownPaymentPercent)}


@dataclass(frozen=True)
class Scenario:
    # Purchase
    purchase_price: Decimal
    down_payment: DownPayment

    # Financing
    interest_rate: Decimal  # Annual, in percent (5.5 means 5.5%)
    amortization_period: int = 25  # Years
    term: int = 5  # Years, <= amortization_period
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY

    # Prepayment options
    extra_payment: Decimal = Decimal("0")  # Added to every regular payment
    payment_increase: Decimal = Decimal("0")  # Percent on top of the regular payment
    annual_prepayment: Decimal = Decimal("0")  # Percent of original principal, once a year

    def __post_init__(self) -> None:
        if self.purchase_price <= 0:
            raise InvalidScenario("Purchase price must be positive")
        self.down_payment.validate(self.purchase_price)
        if self.interest_rate < 0:
            raise InvalidScenario("Interest rate cannot be negative")
        if self.amortization_period < 1:
            raise InvalidScenario("Amortization period must be at least 1 year")
        if self.term < 1:
            raise InvalidScenario("Term must be at least 1 year")
        if self.term > self.amortization_period:
            raise InvalidScenario(
                f"Term ({self.term} years) cannot exceed the amortization period "
                f"({self.amortization_period} years)"
            )
        for name in ("extra_payment", "payment_increase", "annual_prepayment"):
            if getattr(self, name) < 0:
                raise InvalidScenario(f"{name.replace('_', ' ').capitalize()} cannot be negative")

    @property
    def down_payment_amount(self) -> Decimal:
        return self.down_payment.resolve(self.purchase_price)

    @property
    def principal(self) -> Decimal:
        """Amount financed = purchase price - down payment."""
        return self.purchase_price - self.down_payment_amount

    @property
    def payments_per_year(self) -> int:
        return self.payment_frequency.payments_per_year
