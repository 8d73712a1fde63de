import streamlit as st
from core.config import settings
from core.version import __version__


def render_topbar():
    """Render the sticky title bar."""
    st.markdown(
        """
        <style>
        .payplan-topbar {position:sticky; top:0; background-color:white; z-index:100; padding:4px 8px; border-bottom:1px solid #ddd;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    with st.container():
        st.markdown('<div class="payplan-topbar">', unsafe_allow_html=True)
        left, right = st.columns([3, 1])
        left.title(settings.APP_TITLE)
        right.markdown(f"**v{__version__}**")
        st.markdown("</div>", unsafe_allow_html=True)
    st.caption("Same gross, two plans • Per loan, monthly and annual take-home • Flat fee breakeven")
