"""Comparison page: two scenario forms, comparison summary, charts and tables.

Features:
  - Input Scenarios / Compare Results tabs
  - $ / % down payment toggle with value conversion
  - Results recomputed whenever both forms are complete
"""

import logging

import dash
from dash import html, dcc, callback, Input, Output, State, no_update
import plotly.graph_objects as go

from src.config import settings
from src.dashboard.formatting import (
    down_payment_prefix,
    format_currency,
    format_percent,
    format_years,
)
from src.engine.comparison import balance_series, compare_scenarios, interest_bars
from src.engine.scenario_builder import (
    DEFAULT_SCENARIO_A,
    DEFAULT_SCENARIO_B,
    FIELDS,
    build_scenario,
    convert_down_payment,
)
from src.models.scenario import AMORTIZATION_PERIODS, TERM_LENGTHS, PaymentFrequency

logger = logging.getLogger(__name__)

dash.register_page(__name__, path="/", name="Compare")

SCENARIO_COLORS = {"a": "#2563eb", "b": "#16a34a"}
PANEL_BACKGROUNDS = {"a": "#eff6ff", "b": "#f0fdf4"}
BAR_COLORS = {"a": "#93c5fd", "b": "#86efac", "savings": "#fb923c"}
GOOD_COLOR = "#16a34a"
BAD_COLOR = "#dc2626"

BTN_STYLE = {
    "padding": "0.75rem 2rem",
    "fontSize": "1rem",
    "backgroundColor": "#2563eb",
    "color": "white",
    "border": "none",
    "borderRadius": "6px",
    "cursor": "pointer",
}

FIELD_STYLE = {"width": "100%", "padding": "0.5rem", "fontSize": "0.95rem"}

DISCLAIMER = (
    "This calculator provides estimates only and should not be considered financial advice. "
    "Consult with a mortgage professional for personalized information."
)

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def _id(prefix, field):
    return f"{prefix}-{field}"


def _field(label, component):
    return html.Div([
        html.Label(label, style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
        component,
    ], style={"marginBottom": "0.75rem"})


def _number(prefix, field, defaults, step=None):
    return dcc.Input(
        id=_id(prefix, field),
        type="number",
        value=defaults[field],
        min=0,
        step=step,
        debounce=True,
        style=FIELD_STYLE,
    )


def _dropdown(prefix, field, defaults, options):
    return dcc.Dropdown(
        id=_id(prefix, field),
        options=options,
        value=defaults[field],
        clearable=False,
    )


def _scenario_panel(prefix, title, defaults):
    currency = settings.currency_symbol
    return html.Div([
        html.H3(title, style={"color": SCENARIO_COLORS[prefix], "borderBottom": "1px solid #ddd"}),

        _field(f"Purchase Price ({currency})", _number(prefix, "purchase_price", defaults)),

        html.Div([
            html.Label([
                "Down Payment (",
                html.Span(
                    down_payment_prefix(defaults["down_payment_type"]),
                    id=_id(prefix, "down_payment-prefix"),
                ),
                ")",
            ], style={"fontSize": "0.85rem", "marginBottom": "0.25rem", "display": "block"}),
            html.Div([
                html.Div(_number(prefix, "down_payment", defaults), style={"flex": "1"}),
                html.Div(dcc.Dropdown(
                    id=_id(prefix, "down_payment_type"),
                    options=[
                        {"label": currency, "value": "amount"},
                        {"label": "%", "value": "percent"},
                    ],
                    value=defaults["down_payment_type"],
                    clearable=False,
                ), style={"width": "90px"}),
            ], style={"display": "flex", "gap": "0.5rem"}),
        ], style={"marginBottom": "0.75rem"}),

        _field("Interest Rate (%)", _number(prefix, "interest_rate", defaults, step=0.01)),
        _field("Amortization Period", _dropdown(prefix, "amortization_period", defaults, [
            {"label": f"{years} Years", "value": years} for years in AMORTIZATION_PERIODS
        ])),
        _field("Term Length", _dropdown(prefix, "term", defaults, [
            {"label": f"{years} Year{'s' if years > 1 else ''}", "value": years} for years in TERM_LENGTHS
        ])),
        _field("Payment Frequency", _dropdown(prefix, "payment_frequency", defaults, [
            {"label": f.label, "value": f.value} for f in PaymentFrequency
        ])),

        html.H4("Prepayment Options", style={"borderTop": "1px solid #ddd", "paddingTop": "0.5rem"}),
        _field(f"Extra Payment Per Period ({currency})", _number(prefix, "extra_payment", defaults)),
        _field("Payment Increase (%)", _number(prefix, "payment_increase", defaults)),
        _field("Annual Lump Sum (% of principal)", _number(prefix, "annual_prepayment", defaults)),
    ], style={
        "flex": "1",
        "backgroundColor": PANEL_BACKGROUNDS[prefix],
        "padding": "1rem",
        "borderRadius": "8px",
    })


layout = html.Div([
    html.H2("Mortgage Scenario Comparison", style={"textAlign": "center"}),

    dcc.Tabs(
        id="compare-tabs",
        value="input",
        children=[
            dcc.Tab(label="Input Scenarios", value="input"),
            dcc.Tab(label="Compare Results", value="results"),
        ],
        style={"marginBottom": "1.5rem"},
    ),

    # --- Input Section ---
    html.Div(id="input-section", children=[
        html.Div([
            _scenario_panel("a", "Scenario A", DEFAULT_SCENARIO_A),
            _scenario_panel("b", "Scenario B", DEFAULT_SCENARIO_B),
        ], style={"display": "flex", "gap": "1.5rem"}),
        html.Div(
            html.Button("Compare Scenarios", id="show-results-btn", n_clicks=0, style=BTN_STYLE),
            style={"textAlign": "center", "marginTop": "1.5rem"},
        ),
    ]),

    # --- Results Section ---
    html.Div(id="results-section", children=[
        html.Div(id="comparison-results"),
        html.Div(
            html.Button("Update Scenarios", id="show-input-btn", n_clicks=0, style=BTN_STYLE),
            style={"textAlign": "center", "marginTop": "1.5rem"},
        ),
    ], style={"display": "none"}),

    html.P(DISCLAIMER, style={
        "textAlign": "center", "fontSize": "0.85rem", "color": "#555",
        "backgroundColor": "#f5f5f5", "padding": "0.75rem",
        "borderRadius": "8px", "marginTop": "2rem",
    }),
])


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------


@callback(
    Output("compare-tabs", "value"),
    [Input("show-results-btn", "n_clicks"), Input("show-input-btn", "n_clicks")],
    prevent_initial_call=True,
)
def switch_tab(_show_results, _show_input):
    return "results" if dash.ctx.triggered_id == "show-results-btn" else "input"


@callback(
    [Output("input-section", "style"), Output("results-section", "style")],
    Input("compare-tabs", "value"),
)
def toggle_sections(tab):
    if tab == "results":
        return {"display": "none"}, {"display": "block"}
    return {"display": "block"}, {"display": "none"}


def _register_down_payment_toggle(prefix):
    @callback(
        [Output(_id(prefix, "down_payment"), "value"),
         Output(_id(prefix, "down_payment-prefix"), "children")],
        Input(_id(prefix, "down_payment_type"), "value"),
        [State(_id(prefix, "down_payment"), "value"),
         State(_id(prefix, "purchase_price"), "value")],
        prevent_initial_call=True,
    )
    def toggle_down_payment_type(down_payment_type, down_payment, purchase_price):
        label = down_payment_prefix(down_payment_type)
        if down_payment is None or purchase_price is None:
            return no_update, label
        converted = convert_down_payment(down_payment, purchase_price, down_payment_type)
        return float(converted), label

    return toggle_down_payment_type


for _prefix in ("a", "b"):
    _register_down_payment_toggle(_prefix)


@callback(
    Output("comparison-results", "children"),
    [Input(_id(prefix, field), "value") for prefix in ("a", "b") for field in FIELDS],
)
def recompute(*values):
    fields_a = dict(zip(FIELDS, values[:len(FIELDS)]))
    fields_b = dict(zip(FIELDS, values[len(FIELDS):]))

    try:
        scenario_a = build_scenario(fields_a)
        scenario_b = build_scenario(fields_b)
        if scenario_a is None or scenario_b is None:
            # Keep the last results while a field is being edited
            return no_update
        comparison = compare_scenarios(scenario_a, scenario_b)
    except ValueError as e:
        logger.info("Scenario rejected: %s", e)
        return html.Div(f"Error: {e}", style={"color": "red", "padding": "1rem"})

    return _build_results(comparison, scenario_a, scenario_b)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


def _pair(value_a, value_b):
    return html.Div([
        html.Span(value_a, style={"backgroundColor": "#dbeafe", "padding": "2px 8px", "borderRadius": "4px"}),
        " vs ",
        html.Span(value_b, style={"backgroundColor": "#dcfce7", "padding": "2px 8px", "borderRadius": "4px"}),
    ])


def _metric(label, value_a, value_b):
    return html.Div([
        html.Div(label, style={"fontSize": "0.8rem", "color": "#666", "marginBottom": "0.25rem"}),
        _pair(value_a, value_b),
    ], style={"textAlign": "center", "minWidth": "220px"})


def _build_summary(comparison, scenario_a, scenario_b):
    a, b = comparison.scenario_a, comparison.scenario_b
    better = comparison.better_scenario
    better_color = SCENARIO_COLORS[better.lower()]

    verdict = html.Div([
        html.Div("Better Option", style={"fontSize": "0.85rem", "color": "#666"}),
        html.Div(f"Scenario {better}", style={
            "fontSize": "1.8rem", "fontWeight": "bold", "color": better_color,
        }),
        html.Div(f"Lifetime Savings: {format_currency(comparison.lifetime_savings)}",
                 style={"fontWeight": "bold"}),
    ], style={"textAlign": "center", "minWidth": "220px"})

    metrics = html.Div([
        _metric("Monthly Payment", format_currency(a.monthly_payment), format_currency(b.monthly_payment)),
        _metric("Interest (Term)", format_currency(a.total_interest_term), format_currency(b.total_interest_term)),
        _metric("Interest (Lifetime)",
                format_currency(a.total_interest_lifetime), format_currency(b.total_interest_lifetime)),
        _metric("Payment Frequency", scenario_a.payment_frequency.label, scenario_b.payment_frequency.label),
        _metric("Balance After Term",
                format_currency(a.balance_at_end_of_term), format_currency(b.balance_at_end_of_term)),
        _metric("Effective Amortization",
                f"{float(a.effective_amortization):.1f} yrs", f"{float(b.effective_amortization):.1f} yrs"),
    ], style={"display": "flex", "flexWrap": "wrap", "gap": "1rem", "flex": "2"})

    return html.Div([
        html.H3("Comparison Summary"),
        html.Div([verdict, metrics], style={"display": "flex", "gap": "1.5rem", "alignItems": "center"}),
    ], style={
        "border": "1px solid #ddd", "borderRadius": "8px",
        "padding": "1rem 1.5rem", "marginBottom": "1.5rem",
    })


def _balance_figure(comparison):
    series = balance_series(comparison)
    years = [row["year"] for row in series]

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=years,
        y=[float(row["scenario_a"]) for row in series],
        mode="lines+markers",
        name="Scenario A",
        line=dict(color=SCENARIO_COLORS["a"], width=2),
    ))
    fig.add_trace(go.Scatter(
        x=years,
        y=[float(row["scenario_b"]) for row in series],
        mode="lines+markers",
        name="Scenario B",
        line=dict(color=SCENARIO_COLORS["b"], width=2),
    ))
    fig.update_layout(
        title="Mortgage Balance Over Time",
        xaxis_title="Year",
        yaxis=dict(tickprefix=settings.currency_symbol, tickformat="~s"),
        hovermode="x unified",
    )
    return fig


def _interest_figure(comparison):
    bars = interest_bars(comparison)
    names = [row["name"] for row in bars]

    fig = go.Figure()
    for key, label in (("scenario_a", "Scenario A"), ("scenario_b", "Scenario B"), ("savings", "Savings")):
        color_key = key.removeprefix("scenario_")
        fig.add_trace(go.Bar(
            x=names,
            y=[float(row[key]) for row in bars],
            name=label,
            marker_color=BAR_COLORS[color_key],
        ))
    fig.update_layout(
        title="Interest Cost Comparison",
        barmode="group",
        yaxis=dict(tickprefix=settings.currency_symbol, tickformat="~s"),
    )
    return fig


def _diff_cell(text, favorable):
    return html.Td(text, style={"color": GOOD_COLOR if favorable else BAD_COLOR})


def _build_detail_table(comparison, scenario_a, scenario_b):
    a, b, diff = comparison.scenario_a, comparison.scenario_b, comparison.differences

    rows = [
        html.Tr([
            html.Td("Purchase Price"),
            html.Td(format_currency(scenario_a.purchase_price)),
            html.Td(format_currency(scenario_b.purchase_price)),
            html.Td(format_currency(scenario_b.purchase_price - scenario_a.purchase_price)),
        ]),
        html.Tr([
            html.Td("Down Payment"),
            html.Td(format_currency(scenario_a.down_payment_amount)),
            html.Td(format_currency(scenario_b.down_payment_amount)),
            html.Td(format_currency(scenario_b.down_payment_amount - scenario_a.down_payment_amount)),
        ]),
        html.Tr([
            html.Td("Mortgage Amount"),
            html.Td(format_currency(a.total_mortgage)),
            html.Td(format_currency(b.total_mortgage)),
            html.Td(format_currency(b.total_mortgage - a.total_mortgage)),
        ]),
        html.Tr([
            html.Td("Interest Rate"),
            html.Td(format_percent(scenario_a.interest_rate)),
            html.Td(format_percent(scenario_b.interest_rate)),
            html.Td(format_percent(scenario_b.interest_rate - scenario_a.interest_rate)),
        ]),
        html.Tr([
            html.Td("Monthly Payment"),
            html.Td(format_currency(a.monthly_payment)),
            html.Td(format_currency(b.monthly_payment)),
            _diff_cell(format_currency(diff.monthly_payment), diff.monthly_payment < 0),
        ]),
        html.Tr([
            html.Td("Interest Over Term"),
            html.Td(format_currency(a.total_interest_term)),
            html.Td(format_currency(b.total_interest_term)),
            _diff_cell(format_currency(diff.total_interest_term), diff.total_interest_term < 0),
        ]),
        html.Tr([
            html.Td("Interest Over Lifetime"),
            html.Td(format_currency(a.total_interest_lifetime)),
            html.Td(format_currency(b.total_interest_lifetime)),
            _diff_cell(format_currency(diff.total_interest_lifetime), diff.total_interest_lifetime < 0),
        ]),
        html.Tr([
            html.Td("Balance at End of Term"),
            html.Td(format_currency(a.balance_at_end_of_term)),
            html.Td(format_currency(b.balance_at_end_of_term)),
            _diff_cell(format_currency(diff.balance_at_end_of_term), diff.balance_at_end_of_term < 0),
        ]),
        html.Tr([
            html.Td("Years to Pay Off"),
            html.Td(format_years(a.effective_amortization)),
            html.Td(format_years(b.effective_amortization)),
            _diff_cell(format_years(diff.time_shaved), diff.time_shaved > 0),
        ]),
    ]

    header = html.Tr([html.Th("Parameter"), html.Th("Scenario A"), html.Th("Scenario B"), html.Th("Difference")])
    return html.Table(
        [html.Thead(header), html.Tbody(rows)],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": "0.9rem"},
    )


def _schedule_table(title, result):
    header = html.Tr([
        html.Th("Year"), html.Th("Principal"), html.Th("Interest"),
        html.Th("Extra Payments"), html.Th("Ending Balance"),
    ])
    rows = [
        html.Tr([
            html.Td(y.year),
            html.Td(format_currency(y.principal_paid)),
            html.Td(format_currency(y.interest_paid)),
            html.Td(format_currency(y.extra_payments)),
            html.Td(format_currency(y.ending_balance)),
        ])
        for y in result.amortization_schedule
    ]
    return html.Div([
        html.H4(title),
        html.Table(
            [html.Thead(header), html.Tbody(rows)],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": "0.85rem"},
        ),
    ], style={"flex": "1"})


def _build_results(comparison, scenario_a, scenario_b):
    return html.Div([
        _build_summary(comparison, scenario_a, scenario_b),
        html.Div([
            dcc.Graph(figure=_balance_figure(comparison), style={"width": "50%"}),
            dcc.Graph(figure=_interest_figure(comparison), style={"width": "50%"}),
        ], style={"display": "flex", "gap": "1rem"}),
        html.H3("Detailed Comparison", style={"marginTop": "2rem"}),
        _build_detail_table(comparison, scenario_a, scenario_b),
        html.Details([
            html.Summary("Yearly Amortization Schedules", style={"cursor": "pointer", "fontWeight": "bold"}),
            html.Div([
                _schedule_table("Scenario A", comparison.scenario_a),
                _schedule_table("Scenario B", comparison.scenario_b),
            ], style={"display": "flex", "gap": "1.5rem", "marginTop": "0.75rem"}),
        ], style={"marginTop": "2rem"}),
    ])
