"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from src.models.scenario import PaymentFrequency


# ---- Request schemas ----

class DownPaymentAmountIn(BaseModel):
    type: Literal["amount"]
    value: Decimal = Field(..., ge=0, description="Down payment in currency")


class DownPaymentPercentIn(BaseModel):
    type: Literal["percent"]
    value: Decimal = Field(..., ge=0, le=100, description="Down payment as % of purchase price")


DownPaymentIn = Annotated[
    DownPaymentAmountIn | DownPaymentPercentIn,
    Field(discriminator="type"),
]


class ScenarioRequest(BaseModel):
    purchase_price: Decimal = Field(..., gt=0)
    down_payment: DownPaymentIn
    interest_rate: Decimal = Field(..., ge=0, description="Annual rate in percent, e.g. 5.5")
    amortization_period: int = Field(25, ge=1, le=50, description="Years")
    term: int = Field(5, ge=1, description="Years, must not exceed the amortization period")
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    extra_payment: Decimal = Field(Decimal("0"), ge=0, description="Added to every payment")
    payment_increase: Decimal = Field(Decimal("0"), ge=0, description="% on top of each payment")
    annual_prepayment: Decimal = Field(Decimal("0"), ge=0, description="% of original principal per year")


class ComparisonRequest(BaseModel):
    scenario_a: ScenarioRequest
    scenario_b: ScenarioRequest


# ---- Response schemas ----

class AmortizationYearResponse(BaseModel):
    year: int
    principal_paid: Decimal
    interest_paid: Decimal
    extra_payments: Decimal
    ending_balance: Decimal


class MortgageResultResponse(BaseModel):
    monthly_payment: Decimal
    payment_amount: Decimal
    total_mortgage: Decimal
    total_interest_term: Decimal
    total_interest_lifetime: Decimal
    balance_at_end_of_term: Decimal
    effective_amortization: Decimal
    amortization_schedule: list[AmortizationYearResponse]


class DifferencesResponse(BaseModel):
    monthly_payment: Decimal
    total_interest_term: Decimal
    total_interest_lifetime: Decimal
    balance_at_end_of_term: Decimal
    time_shaved: Decimal


class ComparisonResponse(BaseModel):
    scenario_a: MortgageResultResponse
    scenario_b: MortgageResultResponse
    differences: DifferencesResponse
    better_scenario: Literal["A", "B"]
    lifetime_savings: Decimal


class PaymentFrequencyOption(BaseModel):
    value: str
    label: str
    payments_per_year: int


class OptionsResponse(BaseModel):
    payment_frequencies: list[PaymentFrequencyOption]
    amortization_periods: list[int]
    term_lengths: list[int]
