"""FX Deals Data Warehouse: Streamlit entry point."""

import streamlit as st

from api_client import health

st.set_page_config(
    page_title="FX Deals",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    :root {
        --primary-blue: #3B82F6;
        --bg-card: #1E293B;
        --text-light: #F1F5F9;
        --border-slate: #334155;
    }
    .stButton>button {
        background-color: var(--primary-blue);
        color: white;
        border: none;
    }
    .stDataFrame {
        font-family: 'Fira Code', monospace;
        font-size: 0.9rem;
    }
    [data-testid="stSidebar"] {
        background-color: var(--bg-card);
    }
</style>
""", unsafe_allow_html=True)

st.title("FX Deals Data Warehouse")
st.caption("Validate and record FX deals, one at a time or in batches")

try:
    status = health()
except Exception as e:
    st.error(f"API unreachable: {e}")
    st.stop()

col1, col2, col3 = st.columns(3)
col1.metric("Service", status.get("status", "unknown").upper())
col2.metric("Database", status.get("database", "unknown"))
col3.metric("Stored Deals", status.get("totalDeals", 0))

with st.expander("Validation rules", expanded=False):
    st.markdown("""
- All five fields are required: deal id, from currency, to currency, timestamp, amount.
- Timestamp must be `yyyy-MM-dd HH:mm:ss`.
- Amount must be a decimal number greater than zero.
- Currencies must be uppercase ISO 4217 codes and must differ.
- A deal id can only be imported once.

Batches are imported item by item: valid deals are stored even when others are rejected.
""")

st.markdown("---")
st.markdown("Use the sidebar to navigate between pages.")
