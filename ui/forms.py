import streamlit as st
from core.calculators import nz
from core.models import ComparisonInput, GrossMode, Structure
from core.presets import FORM_DEFAULTS, GROSS_MODE_LABELS, STRUCTURE_LABELS


def render_input_form() -> ComparisonInput:
    """Loan volume, gross and current-plan inputs.

    Values live in ``st.session_state["comparison_inputs"]`` as plain JSON
    types so they can be persisted.  The flat fee comes from the sidebar.
    """
    st.session_state.setdefault("comparison_inputs", dict(FORM_DEFAULTS))
    v = {**FORM_DEFAULTS, **st.session_state["comparison_inputs"]}

    with st.expander("Production", expanded=True):
        c1, c2 = st.columns(2)
        v["avg_loan_amount"] = c1.number_input(
            "Average Loan Amount", value=nz(v["avg_loan_amount"]), step=5000.0
        )
        v["loans_per_month"] = c2.number_input(
            "Loans per Month", value=nz(v["loans_per_month"]), step=0.5
        )

    with st.expander("Gross Commission", expanded=True):
        modes = [m.value for m in GrossMode]
        v["gross_mode"] = st.radio(
            "Gross Entered As",
            modes,
            index=modes.index(v["gross_mode"]) if v["gross_mode"] in modes else 0,
            format_func=lambda m: GROSS_MODE_LABELS[m],
            horizontal=True,
        )
        if v["gross_mode"] == GrossMode.BPS.value:
            v["gross_bps"] = st.number_input(
                "Gross (bps)",
                value=nz(v["gross_bps"]),
                step=5.0,
                help="Lender-paid comp in basis points of the loan amount (100 bps = 1%).",
            )
        else:
            v["gross_dollar"] = st.number_input(
                "Gross per Loan ($)", value=nz(v["gross_dollar"]), step=100.0
            )

    with st.expander("Current Plan", expanded=True):
        structures = [s.value for s in Structure]
        v["structure"] = st.radio(
            "Current Payout",
            structures,
            index=structures.index(v["structure"]) if v["structure"] in structures else 0,
            format_func=lambda s: STRUCTURE_LABELS[s],
            horizontal=True,
        )
        if v["structure"] == Structure.BPS.value:
            v["current_payout_bps"] = st.number_input(
                "Current Payout (bps)", value=nz(v["current_payout_bps"]), step=5.0
            )
        else:
            v["current_split_pct"] = st.number_input(
                "Current Split %",
                value=nz(v["current_split_pct"]),
                step=5.0,
                help="Your share of gross, 0 to 100.",
            )
        v["current_per_file_fee"] = st.number_input(
            "Current Per-File Fee", value=nz(v["current_per_file_fee"]), step=25.0
        )

    st.session_state["comparison_inputs"] = v
    return ComparisonInput(**v, target_flat_fee=st.session_state.get("target_flat_fee"))
