"""Page 2: Stored deals: activity by currency pair and the full deal log."""

import streamlit as st

from api_client import list_deals
from charts import deals_by_pair, deals_frame, static_bar_chart

st.header("Stored Deals")

try:
    deals = list_deals()
except Exception as e:
    st.error(f"Could not load deals: {e}")
    st.info("Start the API server and import some deals first.")
    st.stop()

if not deals:
    st.info("No deals stored yet.")
    st.stop()

df = deals_frame(deals)
by_pair = deals_by_pair(df)

kpi1, kpi2 = st.columns(2)
kpi1.metric("Total Deals", len(df))
kpi2.metric("Currency Pairs", len(by_pair))

col_count, col_volume = st.columns(2)
with col_count:
    static_bar_chart(by_pair, "Pair", "Deals", title="Deals by Currency Pair")
with col_volume:
    static_bar_chart(by_pair, "Pair", "Volume", title="Volume by Currency Pair")

st.subheader("Deal Log")
st.dataframe(df[["dealId", "fromCurrency", "toCurrency", "dealTimestamp", "dealAmount"]],
             use_container_width=True, hide_index=True)
