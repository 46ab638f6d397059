"""Amortization engine: scenario in, yearly schedule and totals out.

Pure functions: Decimal in, dataclass out. No I/O. Values are kept at full
precision; rounding to cents is left to the presentation layer.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from src.models.results import AmortizationYear, MortgageResult
from src.models.scenario import HUNDRED, PaymentFrequency, Scenario

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def annuity_payment(principal: Decimal, periodic_rate: Decimal, n_payments: int) -> Decimal:
    """Level payment that retires `principal` over `n_payments` periods."""
    if periodic_rate == 0:
        return principal / n_payments
    # P = L * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + periodic_rate) ** n_payments
    # Rate below Decimal precision: compounding rounds away entirely
    if factor == 1:
        return principal / n_payments
    return principal * (periodic_rate * factor) / (factor - 1)


def monthly_payment(principal: Decimal, annual_rate_pct: Decimal, years: int) -> Decimal:
    """Standard monthly payment: monthly compounding over years x 12 payments."""
    return annuity_payment(principal, annual_rate_pct / HUNDRED / 12, years * 12)


def payment_amount(
    principal: Decimal,
    annual_rate_pct: Decimal,
    years: int,
    frequency: PaymentFrequency,
) -> Decimal:
    """Regular per-period payment for the given frequency.

    Accelerated plans are not recomputed at their own period count: they pay
    the monthly payment divided by 2 (bi-weekly) or 4 (weekly), which is what
    makes them pay off faster than their non-accelerated counterparts.
    """
    if frequency.is_accelerated:
        return monthly_payment(principal, annual_rate_pct, years) / frequency.acceleration_divisor

    ppy = frequency.payments_per_year
    return annuity_payment(principal, annual_rate_pct / HUNDRED / ppy, years * ppy)


def monthly_equivalent(payment: Decimal, frequency: PaymentFrequency) -> Decimal:
    """Express a per-period payment as a monthly amount for display."""
    if frequency is PaymentFrequency.MONTHLY:
        return payment
    return payment * frequency.payments_per_year / 12


@dataclass
class _ScheduleTotals:
    schedule: list[AmortizationYear] = field(default_factory=list)
    total_interest: Decimal = ZERO
    term_interest: Decimal = ZERO
    term_balance: Decimal = ZERO
    term_reached: bool = False
    payments_made: int = 0


def _generate_schedule(scenario: Scenario, payment: Decimal) -> _ScheduleTotals:
    principal = scenario.principal
    ppy = scenario.payments_per_year
    rate = scenario.interest_rate / HUNDRED / ppy
    adjusted_payment = payment * (1 + scenario.payment_increase / HUNDRED)
    extra = scenario.extra_payment
    prepayment_cap = principal * scenario.annual_prepayment / HUNDRED

    totals = _ScheduleTotals()
    balance = principal

    for year in range(1, scenario.amortization_period + 1):
        year_principal = ZERO
        year_interest = ZERO
        year_extra = ZERO

        for i in range(1, ppy + 1):
            if balance <= 0:
                break
            totals.payments_made += 1

            interest = balance * rate
            principal_paid = min(adjusted_payment - interest, balance)

            if extra > 0:
                extra_paid = min(extra, balance - principal_paid)
                principal_paid += extra_paid
                year_extra += extra_paid

            balance -= principal_paid
            year_principal += principal_paid
            year_interest += interest
            totals.total_interest += interest

            if year == scenario.term and i == ppy:
                totals.term_balance = balance
                totals.term_interest = totals.total_interest
                totals.term_reached = True

        # Lump sum once a year, capped at what is still owed
        if prepayment_cap > 0 and balance > 0:
            lump_sum = min(prepayment_cap, balance)
            balance -= lump_sum
            year_principal += lump_sum
            year_extra += lump_sum

        totals.schedule.append(AmortizationYear(
            year=year,
            principal_paid=year_principal,
            interest_paid=year_interest,
            extra_payments=year_extra,
            ending_balance=balance,
        ))

        if balance <= 0:
            break

    # Paid off before the term's last payment: report the payoff point instead
    if not totals.term_reached:
        totals.term_balance = max(balance, ZERO)
        totals.term_interest = totals.total_interest

    return totals


def calculate_mortgage(scenario: Scenario) -> MortgageResult:
    """Compute payment, totals and yearly amortization schedule for one scenario.

    Effective amortization counts only payments actually processed: once the
    balance reaches zero, no further period is counted, even mid-year.
    """
    principal = scenario.principal
    payment = payment_amount(
        principal,
        scenario.interest_rate,
        scenario.amortization_period,
        scenario.payment_frequency,
    )
    totals = _generate_schedule(scenario, payment)
    effective = Decimal(totals.payments_made) / scenario.payments_per_year

    logger.debug(
        "Scenario %s @ %s%% over %sy: payment %s, paid off in %s years",
        scenario.payment_frequency.value,
        scenario.interest_rate,
        scenario.amortization_period,
        payment,
        effective,
    )

    return MortgageResult(
        monthly_payment=monthly_equivalent(payment, scenario.payment_frequency),
        payment_amount=payment,
        total_mortgage=principal,
        total_interest_term=totals.term_interest,
        total_interest_lifetime=totals.total_interest,
        balance_at_end_of_term=totals.term_balance,
        effective_amortization=effective,
        amortization_schedule=totals.schedule,
    )
