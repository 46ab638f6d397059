"""Scenario A vs scenario B: pairwise differences and chart-ready series.

Pure computation. No I/O.
"""

from decimal import Decimal

from src.engine.amortization import calculate_mortgage
from src.models.results import MortgageResult, ScenarioComparison, ScenarioDifferences
from src.models.scenario import Scenario


def compute_differences(a: MortgageResult, b: MortgageResult) -> ScenarioDifferences:
    """B - A for costs and balances; A - B for payoff time (years shaved by B)."""
    return ScenarioDifferences(
        monthly_payment=b.monthly_payment - a.monthly_payment,
        total_interest_term=b.total_interest_term - a.total_interest_term,
        total_interest_lifetime=b.total_interest_lifetime - a.total_interest_lifetime,
        balance_at_end_of_term=b.balance_at_end_of_term - a.balance_at_end_of_term,
        time_shaved=a.effective_amortization - b.effective_amortization,
    )


def compare_results(a: MortgageResult, b: MortgageResult) -> ScenarioComparison:
    return ScenarioComparison(scenario_a=a, scenario_b=b, differences=compute_differences(a, b))


def compare_scenarios(a: Scenario, b: Scenario) -> ScenarioComparison:
    """Recompute both scenarios and diff them."""
    return compare_results(calculate_mortgage(a), calculate_mortgage(b))


def balance_series(comparison: ScenarioComparison) -> list[dict]:
    """Ending balance per year for both scenarios.

    Runs to the longer schedule; a scenario already paid off shows 0.
    """
    sched_a = comparison.scenario_a.amortization_schedule
    sched_b = comparison.scenario_b.amortization_schedule
    if not sched_a or not sched_b:
        return []

    series = []
    for i in range(max(len(sched_a), len(sched_b))):
        series.append({
            "year": i + 1,
            "scenario_a": sched_a[i].ending_balance if i < len(sched_a) else Decimal("0"),
            "scenario_b": sched_b[i].ending_balance if i < len(sched_b) else Decimal("0"),
        })
    return series


def interest_bars(comparison: ScenarioComparison) -> list[dict]:
    """Interest over the term and over the lifetime, with the absolute savings."""
    a, b, diff = comparison.scenario_a, comparison.scenario_b, comparison.differences
    return [
        {
            "name": "Over Term",
            "scenario_a": a.total_interest_term,
            "scenario_b": b.total_interest_term,
            "savings": abs(diff.total_interest_term),
        },
        {
            "name": "Lifetime",
            "scenario_a": a.total_interest_lifetime,
            "scenario_b": b.total_interest_lifetime,
            "savings": abs(diff.total_interest_lifetime),
        },
    ]
