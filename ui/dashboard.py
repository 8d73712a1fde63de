import streamlit as st
from core.calculators import (
    breakeven_flat_fee,
    breakeven_split_pct,
    comparison_table,
    evaluate,
)
from core.formatting import delta_direction, money, pct, signed_money
from core.rules import review_inputs
from core.state import save_state
from ui.forms import render_input_form


def render_results(result, warnings):
    """Render per-plan metrics, the annual difference and input warnings."""
    st.header("Comparison")
    cols = st.columns(3)
    cols[0].metric("Gross per Loan", money(result.gross_per_loan))
    cols[1].metric("Current per Loan", money(result.current.per_loan))
    cols[2].metric("Flat Fee per Loan", money(result.target.per_loan))

    cols = st.columns(3)
    cols[0].metric("Current Annual", money(result.current.annual))
    cols[1].metric("Flat Fee Annual", money(result.target.annual))
    direction = delta_direction(result.delta_annual)
    cols[2].metric(
        "Annual Difference",
        signed_money(result.delta_annual),
        delta=signed_money(result.delta_annual),
        delta_color="normal",
        help="Flat fee pays more" if direction == "up" else "Current pays more",
    )
    st.caption(f"Current: {result.current.note}")
    st.caption(f"Flat fee: {result.target.note}")

    for r in warnings:
        if r.severity == "critical":
            st.error(f"[{r.code}] {r.message}")
        elif r.severity == "warn":
            st.warning(f"[{r.code}] {r.message}")
        else:
            st.info(f"[{r.code}] {r.message}")

    df = comparison_table(result)
    for c in ("PerLoan", "Monthly", "Annual"):
        df[c] = df[c].map(money)
    st.dataframe(df, width="stretch", hide_index=True)


def render_breakevens(inp):
    split = breakeven_split_pct(inp)
    fee = breakeven_flat_fee(inp)
    c1, c2 = st.columns(2)
    c1.metric("Breakeven Split", "n/a" if split is None else pct(split, 1))
    c2.metric("Breakeven Flat Fee", money(fee))
    if split is not None and split > 100:
        st.caption("No split of gross matches the flat fee plan.")


def render_comparison_column():
    """Inputs followed by results; returns inputs, result and warnings."""
    inp = render_input_form()
    result = evaluate(inp)
    warnings = review_inputs(inp)
    st.session_state["comparison_result"] = result.model_dump(mode="json")
    render_results(result, warnings)
    render_breakevens(inp)
    save_state()
    return inp, result, warnings
