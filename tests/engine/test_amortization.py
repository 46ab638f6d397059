from dataclasses import replace
from decimal import Decimal

import pytest

from src.engine.amortization import (
    annuity_payment,
    calculate_mortgage,
    monthly_equivalent,
    monthly_payment,
    payment_amount,
)
from src.models.scenario import DownPaymentAmount, PaymentFrequency, Scenario

PRINCIPAL = Decimal("400000")
RATE = Decimal("5.5")
TOLERANCE = Decimal("0.000001")


class TestAnnuityPayment:
    def test_annuity_identity(self):
        """payment * ((1+r)^n - 1) / r == principal * (1+r)^n"""
        r = RATE / 100 / 12
        n = 300
        pmt = annuity_payment(PRINCIPAL, r, n)
        factor = (1 + r) ** n
        assert abs(pmt * (factor - 1) / r - PRINCIPAL * factor) < TOLERANCE

    def test_standard_mortgage(self):
        """$400K at 5.5% over 25 years: ~$2,456.35/month."""
        pmt = monthly_payment(PRINCIPAL, RATE, 25)
        assert Decimal("2456.30") < pmt < Decimal("2456.40")

    def test_zero_rate(self):
        pmt = annuity_payment(Decimal("360000"), Decimal("0"), 360)
        assert pmt == Decimal("1000")

    def test_rate_below_decimal_precision(self):
        # (1 + 1E-29) ** 300 rounds to exactly 1 at 28 digits
        pmt = annuity_payment(PRINCIPAL, Decimal("1E-29"), 300)
        assert abs(pmt - PRINCIPAL / 300) < TOLERANCE

    def test_zero_principal(self):
        assert monthly_payment(Decimal("0"), RATE, 25) == Decimal("0")

    def test_monthly_frequency_matches_monthly_payment(self):
        assert payment_amount(PRINCIPAL, RATE, 25, PaymentFrequency.MONTHLY) == monthly_payment(PRINCIPAL, RATE, 25)


class TestAcceleratedPayments:
    def test_accelerated_biweekly_is_half_monthly(self):
        pmt = payment_amount(PRINCIPAL, RATE, 25, PaymentFrequency.ACCELERATED_BIWEEKLY)
        assert pmt == monthly_payment(PRINCIPAL, RATE, 25) / 2

    def test_accelerated_weekly_is_quarter_monthly(self):
        pmt = payment_amount(PRINCIPAL, RATE, 25, PaymentFrequency.ACCELERATED_WEEKLY)
        assert pmt == monthly_payment(PRINCIPAL, RATE, 25) / 4

    def test_accelerated_not_recomputed_at_biweekly_rate(self):
        accelerated = payment_amount(PRINCIPAL, RATE, 25, PaymentFrequency.ACCELERATED_BIWEEKLY)
        regular = payment_amount(PRINCIPAL, RATE, 25, PaymentFrequency.BIWEEKLY)
        r = RATE / 100 / 26
        assert regular == annuity_payment(PRINCIPAL, r, 25 * 26)
        assert accelerated > regular

    def test_accelerated_zero_rate(self):
        pmt = payment_amount(Decimal("360000"), Decimal("0"), 30, PaymentFrequency.ACCELERATED_BIWEEKLY)
        assert pmt == Decimal("500")


class TestMonthlyEquivalent:
    def test_monthly_unchanged(self):
        assert monthly_equivalent(Decimal("2000"), PaymentFrequency.MONTHLY) == Decimal("2000")

    def test_biweekly(self):
        # 26 payments of $1,200 a year = $2,600/month
        assert monthly_equivalent(Decimal("1200"), PaymentFrequency.ACCELERATED_BIWEEKLY) == Decimal("2600")

    def test_weekly(self):
        assert monthly_equivalent(Decimal("600"), PaymentFrequency.WEEKLY) == Decimal("2600")


class TestCalculateMortgage:
    def test_totals(self, canonical_scenario):
        result = calculate_mortgage(canonical_scenario)
        assert result.total_mortgage == PRINCIPAL
        assert result.monthly_payment == result.payment_amount
        assert result.effective_amortization == Decimal("25")
        assert len(result.amortization_schedule) == 25

    def test_schedule_years_ordered(self, canonical_scenario):
        result = calculate_mortgage(canonical_scenario)
        assert [y.year for y in result.amortization_schedule] == list(range(1, 26))

    def test_balance_decreases(self, canonical_scenario):
        schedule = calculate_mortgage(canonical_scenario).amortization_schedule
        for i in range(1, len(schedule)):
            assert schedule[i].ending_balance < schedule[i - 1].ending_balance

    def test_schedule_pays_off_principal(self, canonical_scenario):
        schedule = calculate_mortgage(canonical_scenario).amortization_schedule
        total_principal = sum(y.principal_paid for y in schedule)
        assert abs(total_principal - PRINCIPAL) < Decimal("0.01")
        assert abs(schedule[-1].ending_balance) < Decimal("0.01")

    def test_lifetime_interest_is_payments_minus_principal(self, canonical_scenario):
        result = calculate_mortgage(canonical_scenario)
        expected = result.payment_amount * 300 - PRINCIPAL
        assert abs(result.total_interest_lifetime - expected) < Decimal("0.01")

    def test_term_snapshot_at_payment_60(self, canonical_scenario):
        result = calculate_mortgage(canonical_scenario)
        schedule = result.amortization_schedule
        assert result.balance_at_end_of_term == schedule[4].ending_balance
        five_year_interest = sum(y.interest_paid for y in schedule[:5])
        assert abs(result.total_interest_term - five_year_interest) < TOLERANCE

    def test_first_year_interest(self, canonical_scenario):
        first = calculate_mortgage(canonical_scenario).amortization_schedule[0]
        # First payment alone is 400000 * 0.055/12 = $1,833.33 of interest
        assert Decimal("21000") < first.interest_paid < Decimal("22000")
        assert first.extra_payments == Decimal("0")

    def test_down_payment_percent_matches_amount(self, canonical_scenario, accelerated_scenario):
        by_percent = replace(accelerated_scenario, interest_rate=RATE,
                             payment_frequency=PaymentFrequency.MONTHLY, extra_payment=Decimal("0"))
        assert calculate_mortgage(by_percent) == calculate_mortgage(canonical_scenario)

    def test_full_down_payment(self):
        scenario = Scenario(
            purchase_price=Decimal("300000"),
            down_payment=DownPaymentAmount(amount=Decimal("300000")),
            interest_rate=RATE,
        )
        result = calculate_mortgage(scenario)
        assert result.total_mortgage == Decimal("0")
        assert result.total_interest_lifetime == Decimal("0")
        assert result.effective_amortization == Decimal("0")


class TestNonAcceleratedFrequencies:
    @pytest.mark.parametrize("frequency", [PaymentFrequency.BIWEEKLY, PaymentFrequency.WEEKLY])
    def test_runs_full_amortization(self, canonical_scenario, frequency):
        result = calculate_mortgage(replace(canonical_scenario, payment_frequency=frequency))
        assert result.effective_amortization == Decimal("25")
        assert len(result.amortization_schedule) == 25
        assert abs(result.amortization_schedule[-1].ending_balance) < Decimal("0.01")
        total_principal = sum(y.principal_paid for y in result.amortization_schedule)
        assert abs(total_principal - PRINCIPAL) < Decimal("0.01")

    @pytest.mark.parametrize("frequency", [PaymentFrequency.BIWEEKLY, PaymentFrequency.WEEKLY])
    def test_monthly_equivalent_near_monthly(self, canonical_scenario, frequency):
        monthly = calculate_mortgage(canonical_scenario).monthly_payment
        result = calculate_mortgage(replace(canonical_scenario, payment_frequency=frequency))
        # More frequent compounding costs slightly less per month
        assert result.monthly_payment < monthly
        assert monthly - result.monthly_payment < Decimal("10")


class TestTinyRate:
    def test_rate_below_decimal_precision(self, canonical_scenario):
        result = calculate_mortgage(replace(canonical_scenario, interest_rate=Decimal("1E-27")))
        assert abs(result.monthly_payment - PRINCIPAL / 300) < TOLERANCE
        assert result.effective_amortization == Decimal("25")
        assert result.total_interest_lifetime < Decimal("0.01")
        assert abs(result.amortization_schedule[-1].ending_balance) < Decimal("0.01")


class TestZeroRate:
    def test_no_interest(self, zero_rate_scenario):
        result = calculate_mortgage(zero_rate_scenario)
        assert result.monthly_payment == Decimal("1000")
        assert result.total_interest_lifetime == Decimal("0")
        assert result.total_interest_term == Decimal("0")
        assert result.monthly_payment * 30 * 12 == result.total_mortgage

    def test_full_schedule(self, zero_rate_scenario):
        result = calculate_mortgage(zero_rate_scenario)
        assert len(result.amortization_schedule) == 30
        assert result.amortization_schedule[-1].ending_balance == Decimal("0")
        assert result.effective_amortization == Decimal("30")

    def test_term_balance(self, zero_rate_scenario):
        result = calculate_mortgage(zero_rate_scenario)
        # 60 payments of $1,000
        assert result.balance_at_end_of_term == Decimal("300000")


class TestPrepayments:
    def test_extra_payment_shortens_schedule(self, zero_rate_scenario):
        scenario = replace(zero_rate_scenario, extra_payment=Decimal("1000"))
        result = calculate_mortgage(scenario)
        # $2,000 a month retires $360K in 180 payments
        assert result.effective_amortization == Decimal("15")
        assert len(result.amortization_schedule) == 15
        assert result.amortization_schedule[-1].ending_balance == Decimal("0")
        assert result.balance_at_end_of_term == Decimal("240000")
        for year in result.amortization_schedule:
            assert year.principal_paid == Decimal("24000")
            assert year.extra_payments == Decimal("12000")

    def test_extra_payment_monotonic(self, canonical_scenario):
        results = [
            calculate_mortgage(replace(canonical_scenario, extra_payment=Decimal(extra)))
            for extra in ("0", "100", "250", "500", "1000")
        ]
        for prev, cur in zip(results, results[1:]):
            assert cur.total_interest_lifetime <= prev.total_interest_lifetime
            assert cur.effective_amortization <= prev.effective_amortization
        assert results[-1].effective_amortization < results[0].effective_amortization

    def test_effective_amortization_counts_payments(self, canonical_scenario):
        result = calculate_mortgage(replace(canonical_scenario, extra_payment=Decimal("500")))
        payments = result.effective_amortization * 12
        assert payments == payments.to_integral_value()
        assert result.effective_amortization < 25
        assert result.amortization_schedule[-1].ending_balance <= 0

    def test_annual_prepayment(self, zero_rate_scenario):
        scenario = replace(zero_rate_scenario, annual_prepayment=Decimal("10"))
        result = calculate_mortgage(scenario)
        schedule = result.amortization_schedule
        # $12K of payments + $36K lump sum a year
        assert schedule[0].principal_paid == Decimal("48000")
        assert schedule[0].extra_payments == Decimal("36000")
        assert schedule[0].ending_balance == Decimal("312000")
        # Year 8: $12K of payments, lump sum capped at the remaining $12K
        assert len(schedule) == 8
        assert schedule[-1].principal_paid == Decimal("24000")
        assert schedule[-1].extra_payments == Decimal("12000")
        assert schedule[-1].ending_balance == Decimal("0")
        assert result.effective_amortization == Decimal("8")

    def test_term_snapshot_before_lump_sum(self, zero_rate_scenario):
        scenario = replace(zero_rate_scenario, annual_prepayment=Decimal("1"))
        result = calculate_mortgage(scenario)
        # Year 5 closes with 60 payments and 4 lump sums of $3,600 applied;
        # the fifth lump sum lands after the term snapshot
        assert result.balance_at_end_of_term == Decimal("285600")
        assert result.balance_at_end_of_term == result.amortization_schedule[4].ending_balance + 3600

    def test_payment_increase(self, zero_rate_scenario):
        scenario = replace(zero_rate_scenario, payment_increase=Decimal("100"))
        result = calculate_mortgage(scenario)
        # The regular payment stays $1,000; $2,000 is actually paid each period
        assert result.monthly_payment == Decimal("1000")
        assert result.effective_amortization == Decimal("15")
        assert all(y.extra_payments == Decimal("0") for y in result.amortization_schedule)

    def test_accelerated_pays_off_sooner(self, canonical_scenario):
        accelerated = replace(canonical_scenario, payment_frequency=PaymentFrequency.ACCELERATED_BIWEEKLY)
        regular = calculate_mortgage(canonical_scenario)
        result = calculate_mortgage(accelerated)
        assert result.effective_amortization < regular.effective_amortization
        assert result.total_interest_lifetime < regular.total_interest_lifetime


class TestPayoffBeforeTerm:
    def test_term_values_fall_back_to_payoff(self):
        scenario = Scenario(
            purchase_price=Decimal("130000"),
            down_payment=DownPaymentAmount(amount=Decimal("10000")),
            interest_rate=Decimal("0"),
            amortization_period=10,
            term=7,
            extra_payment=Decimal("1000"),
        )
        result = calculate_mortgage(scenario)
        # $2,000 a month retires $120K in 5 years, before the 7-year term ends
        assert result.effective_amortization == Decimal("5")
        assert result.balance_at_end_of_term == Decimal("0")
        assert result.total_interest_term == result.total_interest_lifetime

    def test_term_interest_with_rate(self):
        scenario = Scenario(
            purchase_price=Decimal("250000"),
            down_payment=DownPaymentAmount(amount=Decimal("50000")),
            interest_rate=Decimal("5"),
            amortization_period=10,
            term=10,
            annual_prepayment=Decimal("50"),
        )
        result = calculate_mortgage(scenario)
        assert result.effective_amortization < 10
        assert result.balance_at_end_of_term == Decimal("0")
        assert result.total_interest_term == result.total_interest_lifetime
        assert result.total_interest_lifetime > 0
