"""Scenario Builder: raw form values -> validated Scenario.

Sits between the input form and the pure engine:
    dict of field values (numbers, numeric strings, or blanks)
    -> Scenario, or None while the form is still incomplete
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from src.models.scenario import (
    DOWN_PAYMENT_TYPES,
    HUNDRED,
    DownPayment,
    DownPaymentPercent,
    InvalidScenario,
    PaymentFrequency,
    Scenario,
)

FIELDS = (
    "purchase_price",
    "down_payment",
    "down_payment_type",
    "interest_rate",
    "amortization_period",
    "term",
    "payment_frequency",
    "extra_payment",
    "payment_increase",
    "annual_prepayment",
)

DEFAULT_SCENARIO_A = {
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

DEFAULT_SCENARIO_B = {
    **DEFAULT_SCENARIO_A,
    "interest_rate": 4.5,
    "payment_frequency": "accelerated_biweekly",
    "extra_payment": 200,
}


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def inputs_complete(fields: dict) -> bool:
    """True when every scenario field holds a value (the form is ready to compute)."""
    return all(not _is_blank(fields.get(name)) for name in FIELDS)


def _to_decimal(field: str, value) -> Decimal:
    try:
        result = Decimal(str(value).strip())
    except InvalidOperation:
        raise InvalidScenario(f"{field.replace('_', ' ').capitalize()} must be a number: {value!r}")
    if not result.is_finite():
        raise InvalidScenario(f"{field.replace('_', ' ').capitalize()} must be a finite number")
    return result


def _to_int(field: str, value) -> int:
    number = _to_decimal(field, value)
    if number != number.to_integral_value():
        raise InvalidScenario(f"{field.replace('_', ' ').capitalize()} must be a whole number of years")
    return int(number)


def clamp_down_payment(value: Decimal, down_payment_type: str, purchase_price: Decimal) -> Decimal:
    """Keep the down payment within [0, purchase price] or [0, 100] percent."""
    upper = HUNDRED if down_payment_type == DownPaymentPercent.kind else max(purchase_price, Decimal("0"))
    return min(max(value, Decimal("0")), upper)


def convert_down_payment(value, purchase_price, target_type: str) -> Decimal:
    """Re-express a down payment when the $/% toggle changes.

    Amount -> percent rounds to a whole percent. Percent -> amount rounds to the
    nearest 100.
    """
    value = _to_decimal("down_payment", value)
    price = _to_decimal("purchase_price", purchase_price)
    if target_type == DownPaymentPercent.kind:
        if price == 0:
            return Decimal("0")
        return (value / price * HUNDRED).quantize(Decimal("1"), ROUND_HALF_UP)
    return ((price * value / HUNDRED) / HUNDRED).quantize(Decimal("1"), ROUND_HALF_UP) * HUNDRED


def _down_payment(value: Decimal, down_payment_type: str) -> DownPayment:
    try:
        down_payment_cls = DOWN_PAYMENT_TYPES[down_payment_type]
    except KeyError:
        raise InvalidScenario(f"Unknown down payment type: {down_payment_type!r}")
    return down_payment_cls(value)


def build_scenario(fields: dict) -> Scenario | None:
    """Build a Scenario from form values.

    Returns None if any field is still blank. Raises InvalidScenario for values
    that are present but unusable.
    """
    if not inputs_complete(fields):
        return None

    purchase_price = _to_decimal("purchase_price", fields["purchase_price"])
    down_payment_type = str(fields["down_payment_type"])
    down_payment = clamp_down_payment(
        _to_decimal("down_payment", fields["down_payment"]),
        down_payment_type,
        purchase_price,
    )

    try:
        frequency = PaymentFrequency(fields["payment_frequency"])
    except ValueError:
        raise InvalidScenario(f"Unknown payment frequency: {fields['payment_frequency']!r}")

    return Scenario(
        purchase_price=purchase_price,
        down_payment=_down_payment(down_payment, down_payment_type),
        interest_rate=_to_decimal("interest_rate", fields["interest_rate"]),
        amortization_period=_to_int("amortization_period", fields["amortization_period"]),
        term=_to_int("term", fields["term"]),
        payment_frequency=frequency,
        extra_payment=_to_decimal("extra_payment", fields["extra_payment"]),
        payment_increase=_to_decimal("payment_increase", fields["payment_increase"]),
        annual_prepayment=_to_decimal("annual_prepayment", fields["annual_prepayment"]),
    )
