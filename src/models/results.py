from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class AmortizationYear:
    year: int
    principal_paid: Decimal  # Includes extra payments and the annual prepayment
    interest_paid: Decimal
    extra_payments: Decimal
    ending_balance: Decimal


@dataclass(frozen=True)
class MortgageResult:
    monthly_payment: Decimal  # Monthly-equivalent of the regular payment
    payment_amount: Decimal  # Per-period payment at the scenario's frequency
    total_mortgage: Decimal  # Principal financed
    total_interest_term: Decimal
    total_interest_lifetime: Decimal
    balance_at_end_of_term: Decimal
    effective_amortization: Decimal  # Years, fractional
    amortization_schedule: list[AmortizationYear] = field(default_factory=list)


@dataclass(frozen=True)
class ScenarioDifferences:
    """B minus A, except time_shaved which is A minus B (positive = B pays off sooner)."""

    monthly_payment: Decimal = Decimal("0")
    total_interest_term: Decimal = Decimal("0")
    total_interest_lifetime: Decimal = Decimal("0")
    balance_at_end_of_term: Decimal = Decimal("0")
    time_shaved: Decimal = Decimal("0")


@dataclass(frozen=True)
class ScenarioComparison:
    """Side-by-side results for scenario A and scenario B."""

    scenario_a: MortgageResult
    scenario_b: MortgageResult
    differences: ScenarioDifferences

    @property
    def better_scenario(self) -> str:
        """Scenario with the lower lifetime interest; ties go to A."""
        return "B" if self.differences.total_interest_lifetime < 0 else "A"

    @property
    def lifetime_savings(self) -> Decimal:
        return abs(self.differences.total_interest_lifetime)
