"""CLI client for the mortgage comparison API: posts two scenarios and prints a terminal report.

Usage:
    python scenario-cli/compare_scenarios.py
    python scenario-cli/compare_scenarios.py --a-rate 5.5 --b-rate 4.5 --b-frequency accelerated_biweekly --b-extra 200
    python scenario-cli/compare_scenarios.py --a-down 20 --a-down-type percent --schedule
"""

import argparse
import asyncio
import sys
from decimal import Decimal

import httpx

FREQUENCIES = ["monthly", "biweekly", "accelerated_biweekly", "weekly", "accelerated_weekly"]

DEFAULTS = {
    "a": {"price": 500000, "down": 100000, "rate": Decimal("5.5"), "frequency": "monthly", "extra": 0},
    "b": {"price": 500000, "down": 100000, "rate": Decimal("4.5"), "frequency": "accelerated_biweekly", "extra": 200},
}


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    amount = round(float(v), 2)
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def _years(v) -> str:
    return f"{float(v):.2f} yrs"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def _row(label: str, a: str, b: str, diff: str = "") -> None:
    print(f"  {label:<24} {a:>12}  {b:>12}  {diff:>12}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_verdict(data: dict) -> None:
    _header("Comparison Summary")
    print(f"  Better Option:      Scenario {data['better_scenario']}")
    print(f"  Lifetime Savings:   {_dollar(data['lifetime_savings'])}")


def print_metrics(data: dict) -> None:
    a, b, diff = data["scenario_a"], data["scenario_b"], data["differences"]
    _header("Side by Side")
    _row("", "Scenario A", "Scenario B", "Difference")
    _row("Mortgage Amount", _dollar(a["total_mortgage"]), _dollar(b["total_mortgage"]))
    _row("Monthly Payment", _dollar(a["monthly_payment"]), _dollar(b["monthly_payment"]),
         _dollar(diff["monthly_payment"]))
    _row("Payment Per Period", _dollar(a["payment_amount"]), _dollar(b["payment_amount"]))
    _row("Interest Over Term", _dollar(a["total_interest_term"]), _dollar(b["total_interest_term"]),
         _dollar(diff["total_interest_term"]))
    _row("Interest Over Lifetime", _dollar(a["total_interest_lifetime"]), _dollar(b["total_interest_lifetime"]),
         _dollar(diff["total_interest_lifetime"]))
    _row("Balance After Term", _dollar(a["balance_at_end_of_term"]), _dollar(b["balance_at_end_of_term"]),
         _dollar(diff["balance_at_end_of_term"]))
    _row("Years to Pay Off", _years(a["effective_amortization"]), _years(b["effective_amortization"]),
         _years(diff["time_shaved"]))


def print_schedule(title: str, result: dict) -> None:
    schedule = result.get("amortization_schedule", [])
    if not schedule:
        return
    _header(f"Amortization Schedule: {title}")
    print(f"  {'Yr':>3}  {'Principal':>13}  {'Interest':>13}  {'Extra':>13}  {'Balance':>14}")
    print(f"  {'---':>3}  {'-' * 13}  {'-' * 13}  {'-' * 13}  {'-' * 14}")
    for yr in schedule:
        print(
            f"  {yr['year']:>3}  {_dollar(yr['principal_paid']):>13}  "
            f"{_dollar(yr['interest_paid']):>13}  {_dollar(yr['extra_payments']):>13}  "
            f"{_dollar(yr['ending_balance']):>14}"
        )


# ── Main ─────────────────────────────────────────────────────────────────────

def _add_scenario_args(parser: argparse.ArgumentParser, prefix: str) -> None:
    defaults = DEFAULTS[prefix]
    name = prefix.upper()
    parser.add_argument(f"--{prefix}-price", type=Decimal, default=defaults["price"],
                        help=f"Scenario {name} purchase price")
    parser.add_argument(f"--{prefix}-down", type=Decimal, default=defaults["down"],
                        help=f"Scenario {name} down payment")
    parser.add_argument(f"--{prefix}-down-type", choices=["amount", "percent"], default="amount")
    parser.add_argument(f"--{prefix}-rate", type=Decimal, default=defaults["rate"],
                        help=f"Scenario {name} annual rate in percent")
    parser.add_argument(f"--{prefix}-amortization", type=int, default=25, help="Years")
    parser.add_argument(f"--{prefix}-term", type=int, default=5, help="Years")
    parser.add_argument(f"--{prefix}-frequency", choices=FREQUENCIES, default=defaults["frequency"])
    parser.add_argument(f"--{prefix}-extra", type=Decimal, default=defaults["extra"],
                        help="Extra payment per period")
    parser.add_argument(f"--{prefix}-increase", type=Decimal, default=0,
                        help="Percent added to each payment")
    parser.add_argument(f"--{prefix}-lump-sum", type=Decimal, default=0,
                        help="Annual prepayment, percent of original principal")


def scenario_payload(args: argparse.Namespace, prefix: str) -> dict:
    """Request body for one scenario, read from the `--{prefix}-*` options."""
    def arg(name):
        return getattr(args, f"{prefix}_{name}")

    return {
        "purchase_price": str(arg("price")),
        "down_payment": {"type": arg("down_type"), "value": str(arg("down"))},
        "interest_rate": str(arg("rate")),
        "amortization_period": arg("amortization"),
        "term": arg("term"),
        "payment_frequency": arg("frequency"),
        "extra_payment": str(arg("extra")),
        "payment_increase": str(arg("increase")),
        "annual_prepayment": str(arg("lump_sum")),
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare two mortgage scenarios via the mortgage comparison API"
    )
    _add_scenario_args(parser, "a")
    _add_scenario_args(parser, "b")
    parser.add_argument("--schedule", action="store_true", help="Print yearly amortization schedules")
    parser.add_argument(
        "--api-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    return parser


async def main() -> None:
    args = build_parser().parse_args()
    payload = {
        "scenario_a": scenario_payload(args, "a"),
        "scenario_b": scenario_payload(args, "b"),
    }
    url = f"{args.api_url}/api/v1/mortgage/compare"

    async with httpx.AsyncClient(timeout=30) as client:
        try:
            resp = await client.post(url, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {args.api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn src.api.app:app --reload", file=sys.stderr)
            sys.exit(1)
        except httpx.TimeoutException:
            print("Error: Request timed out", file=sys.stderr)
            sys.exit(1)

        if resp.status_code != 200:
            print(f"Error: API returned {resp.status_code}", file=sys.stderr)
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            print(f"  {detail}", file=sys.stderr)
            sys.exit(1)

        data = resp.json()

    print_verdict(data)
    print_metrics(data)
    if args.schedule:
        print_schedule("Scenario A", data["scenario_a"])
        print_schedule("Scenario B", data["scenario_b"])
    print()


if __name__ == "__main__":
    asyncio.run(main())
