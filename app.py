import io
import logging
import streamlit as st
import pandas as pd
from core.config import settings
from core.logging import configure_logging
from core.presets import DISCLAIMER, SENSITIVITY_VOLUMES
from core.calculators import comparison_table, volume_sensitivity
from core.rules import has_blocking
from core.pdf_export import build_comparison_pdf
from core.state import load_state
from ui.topbar import render_topbar
from ui.sidebar import render_settings_sidebar
from ui.dashboard import render_comparison_column

configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = logging.getLogger("payplan")

st.set_page_config(page_title=settings.APP_TITLE, layout="wide")


def init_state():
    ss = st.session_state
    load_state()
    ss.setdefault("override_reason", "")


def render_sensitivity(inp):
    st.header("Volume Sensitivity")
    df = volume_sensitivity(inp, SENSITIVITY_VOLUMES)
    st.line_chart(
        df.set_index("LoansPerMonth")[["CurrentAnnual", "TargetAnnual"]],
        width="stretch",
    )
    st.dataframe(df, width="stretch", hide_index=True)


def render_exports(inp, result, warnings):
    st.header("Exports")
    st.caption(DISCLAIMER)
    blocking = has_blocking(warnings)
    if blocking:
        st.error("Critical warnings present. Provide an override reason to enable PDF export.")
        st.session_state.override_reason = st.text_input(
            "Override reason (will be embedded in PDF)", value=st.session_state.override_reason
        )
    else:
        st.session_state.override_reason = ""

    def make_csv_bytes():
        buf = io.StringIO()
        summary = comparison_table(result)
        summary["GrossPerLoan"] = result.gross_per_loan
        summary["FlatFee"] = result.target_flat_fee
        summary = pd.concat(
            [
                summary,
                pd.DataFrame([{"Plan": "Difference", "Annual": result.delta_annual}]),
            ],
            ignore_index=True,
        )
        summary.to_csv(buf, index=False)
        return buf.getvalue().encode("utf-8")

    c1, c2 = st.columns(2)
    c1.download_button(
        "Download CSV Summary",
        data=make_csv_bytes(),
        file_name="comp_comparison.csv",
        mime="text/csv",
    )
    if (not blocking) or st.session_state.override_reason.strip():
        buf = io.BytesIO()
        build_comparison_pdf(
            buf,
            st.session_state.get("branding", {}),
            inp,
            result,
            warnings,
            override_reason=st.session_state.override_reason or None,
        )
        c2.download_button(
            "Download PDF Summary",
            data=buf.getvalue(),
            file_name="comp_comparison.pdf",
            mime="application/pdf",
        )


init_state()
render_topbar()
render_settings_sidebar()
inp, result, warnings = render_comparison_column()
st.divider()
render_sensitivity(inp)
st.divider()
render_exports(inp, result, warnings)
logger.debug("rendered app")
