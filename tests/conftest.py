"""Canonical test fixtures used across all engine tests.

Fixture: $500K purchase, $100K down ($400K financed), 5.5% rate,
25yr amortization, 5yr term, monthly payments, no prepayments.
"""

import pytest
from decimal import Decimal

from src.models.scenario import (
    DownPaymentAmount,
    DownPaymentPercent,
    PaymentFrequency,
    Scenario,
)


@pytest.fixture
def canonical_scenario() -> Scenario:
    """$400K mortgage, 5.5%, 25 years, monthly."""
    return Scenario(
        purchase_price=Decimal("500000"),
        down_payment=DownPaymentAmount(amount=Decimal("100000")),
        interest_rate=Decimal("5.5"),
        amortization_period=25,
        term=5,
        payment_frequency=PaymentFrequency.MONTHLY,
    )


@pytest.fixture
def accelerated_scenario() -> Scenario:
    """Same loan at 4.5%, accelerated bi-weekly with $200 extra per payment."""
    return Scenario(
        purchase_price=Decimal("500000"),
        down_payment=DownPaymentPercent(percent=Decimal("20")),
        interest_rate=Decimal("4.5"),
        amortization_period=25,
        term=5,
        payment_frequency=PaymentFrequency.ACCELERATED_BIWEEKLY,
        extra_payment=Decimal("200"),
    )


@pytest.fixture
def zero_rate_scenario() -> Scenario:
    """$360K interest-free over 30 years: exactly $1,000/month."""
    return Scenario(
        purchase_price=Decimal("400000"),
        down_payment=DownPaymentAmount(amount=Decimal("40000")),
        interest_rate=Decimal("0"),
        amortization_period=30,
        term=5,
        payment_frequency=PaymentFrequency.MONTHLY,
    )


@pytest.fixture
def form_fields() -> dict:
    """Raw dashboard form values for the canonical scenario."""
    return {
        "purchase_price": 500000,
        "down_payment": 100000,
        "down_payment_type": "amount",
        "interest_rate": 5.5,
        "amortization_period": 25,
        "term": 5,
        "payment_frequency": "monthly",
        "extra_payment": 0,
        "payment_increase": 0,
        "annual_prepayment": 0,
    }
