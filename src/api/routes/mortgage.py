"""Mortgage routes: single-scenario calculation and A/B comparison."""

import logging
from decimal import Decimal, ROUND_HALF_UP

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    AmortizationYearResponse,
    ComparisonRequest,
    ComparisonResponse,
    DifferencesResponse,
    MortgageResultResponse,
    OptionsResponse,
    PaymentFrequencyOption,
    ScenarioRequest,
)
from src.engine.amortization import calculate_mortgage
from src.engine.comparison import compare_scenarios
from src.models.results import MortgageResult, ScenarioDifferences
from src.models.scenario import (
    AMORTIZATION_PERIODS,
    DOWN_PAYMENT_TYPES,
    TERM_LENGTHS,
    PaymentFrequency,
    Scenario,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/mortgage", tags=["mortgage"])

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def _cents(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def _build_scenario(req: ScenarioRequest) -> Scenario:
    """Convert request data to an engine Scenario (raises InvalidScenario)."""
    down_payment_cls = DOWN_PAYMENT_TYPES[req.down_payment.type]

    return Scenario(
        purchase_price=req.purchase_price,
        down_payment=down_payment_cls(req.down_payment.value),
        interest_rate=req.interest_rate,
        amortization_period=req.amortization_period,
        term=req.term,
        payment_frequency=req.payment_frequency,
        extra_payment=req.extra_payment,
        payment_increase=req.payment_increase,
        annual_prepayment=req.annual_prepayment,
    )


def _result_to_response(result: MortgageResult) -> MortgageResultResponse:
    """Convert engine MortgageResult to API response, rounded to cents."""
    schedule = [
        AmortizationYearResponse(
            year=y.year,
            principal_paid=_cents(y.principal_paid),
            interest_paid=_cents(y.interest_paid),
            extra_payments=_cents(y.extra_payments),
            ending_balance=_cents(y.ending_balance),
        )
        for y in result.amortization_schedule
    ]
    return MortgageResultResponse(
        monthly_payment=_cents(result.monthly_payment),
        payment_amount=_cents(result.payment_amount),
        total_mortgage=_cents(result.total_mortgage),
        total_interest_term=_cents(result.total_interest_term),
        total_interest_lifetime=_cents(result.total_interest_lifetime),
        balance_at_end_of_term=_cents(result.balance_at_end_of_term),
        effective_amortization=result.effective_amortization.quantize(FOUR_PLACES, ROUND_HALF_UP),
        amortization_schedule=schedule,
    )


def _differences_to_response(diff: ScenarioDifferences) -> DifferencesResponse:
    return DifferencesResponse(
        monthly_payment=_cents(diff.monthly_payment),
        total_interest_term=_cents(diff.total_interest_term),
        total_interest_lifetime=_cents(diff.total_interest_lifetime),
        balance_at_end_of_term=_cents(diff.balance_at_end_of_term),
        time_shaved=diff.time_shaved.quantize(FOUR_PLACES, ROUND_HALF_UP),
    )


@router.post("/calculate", response_model=MortgageResultResponse)
async def calculate(req: ScenarioRequest):
    """Payment, interest totals and yearly schedule for one scenario."""
    try:
        scenario = _build_scenario(req)
    except ValueError as e:
        logger.warning("Rejected scenario: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    return _result_to_response(calculate_mortgage(scenario))


@router.post("/compare", response_model=ComparisonResponse)
async def compare(req: ComparisonRequest):
    """Compute scenario A and scenario B side by side."""
    try:
        scenario_a = _build_scenario(req.scenario_a)
        scenario_b = _build_scenario(req.scenario_b)
    except ValueError as e:
        logger.warning("Rejected comparison: %s", e)
        raise HTTPException(status_code=400, detail=str(e))

    comparison = compare_scenarios(scenario_a, scenario_b)
    return ComparisonResponse(
        scenario_a=_result_to_response(comparison.scenario_a),
        scenario_b=_result_to_response(comparison.scenario_b),
        differences=_differences_to_response(comparison.differences),
        better_scenario=comparison.better_scenario,
        lifetime_savings=_cents(comparison.lifetime_savings),
    )


@router.get("/options", response_model=OptionsResponse)
async def options():
    """Choices offered by the scenario form."""
    return OptionsResponse(
        payment_frequencies=[
            PaymentFrequencyOption(
                value=f.value,
                label=f.label,
                payments_per_year=f.payments_per_year,
            )
            for f in PaymentFrequency
        ],
        amortization_periods=AMORTIZATION_PERIODS,
        term_lengths=TERM_LENGTHS,
    )
