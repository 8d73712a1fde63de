import streamlit as st
from core.calculators import nz
from core import config


def render_settings_sidebar():
    """Sidebar with the flat fee plan terms and PDF branding."""
    st.session_state.setdefault("target_flat_fee", config.settings.TARGET_FLAT_FEE)
    st.session_state.setdefault("branding", {})

    st.sidebar.header("Flat Fee Plan")
    st.session_state["target_flat_fee"] = st.sidebar.number_input(
        "Flat Fee per File",
        value=nz(st.session_state["target_flat_fee"], config.settings.TARGET_FLAT_FEE),
        step=5.0,
        help="Charged once per closed loan; you keep the rest of gross.",
    )
    if st.sidebar.button("Reset Flat Fee"):
        st.session_state["target_flat_fee"] = config.settings.TARGET_FLAT_FEE
        st.rerun()

    st.sidebar.header("PDF Branding")
    b = st.session_state["branding"]
    b["title"] = st.sidebar.text_input("Report Title", value=b.get("title", "Compensation Plan Comparison"))
    b["name"] = st.sidebar.text_input("Prepared For", value=b.get("name", ""))
    b["nmls"] = st.sidebar.text_input("NMLS", value=b.get("nmls", ""))
    b["contact"] = st.sidebar.text_input("Contact", value=b.get("contact", ""))
    st.session_state["branding"] = b
