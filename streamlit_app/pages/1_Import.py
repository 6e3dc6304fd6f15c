"""Page 1: Import deals: single form, batch upload, sample data generator."""

import csv
import io
import json
from datetime import datetime

import streamlit as st

from api_client import import_batch, import_single, seed_deals

st.header("Import Deals")

FIELDS = ["dealId", "fromCurrency", "toCurrency", "dealTimestamp", "dealAmount"]


def show_rejection(body: dict) -> None:
    st.error(body.get("error", "Import rejected"))
    rejected = body.get("rejectedDeals") or ([body["rejectedDeal"]] if "rejectedDeal" in body else [])
    if body.get("details"):
        st.json(body["details"])
    for item in rejected:
        st.markdown(f"**{item.get('dealId') or '(no id)'}**")
        for msg in item.get("validationMsgs", []):
            st.markdown(f"- {msg}")
    if body.get("savedDeals"):
        st.warning(f"{len(body['savedDeals'])} deal(s) from this batch were saved.")
        st.dataframe(body["savedDeals"], use_container_width=True)


tab_form, tab_batch, tab_generate = st.tabs(["Single Deal", "Batch Upload", "Generate Sample Data"])

# ---------------------------------------------------------------------------
# Tab 1: Single deal form
# ---------------------------------------------------------------------------
with tab_form:
    with st.form("deal_form"):
        col1, col2 = st.columns(2)
        with col1:
            deal_id = st.text_input("Deal Id")
            from_ccy = st.text_input("From Currency", value="USD", max_chars=3)
            to_ccy = st.text_input("To Currency", value="EUR", max_chars=3)
        with col2:
            timestamp = st.text_input(
                "Deal Timestamp", value=datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            )
            amount = st.text_input("Deal Amount", value="1000.00")
        submitted = st.form_submit_button("Import Deal", use_container_width=True)

    if submitted:
        payload = {
            "dealId": deal_id,
            "fromCurrency": from_ccy,
            "toCurrency": to_ccy,
            "dealTimestamp": timestamp,
            "dealAmount": amount,
        }
        try:
            ok, body = import_single(payload)
        except Exception as e:
            st.error(f"Error: {e}")
        else:
            if ok:
                st.success(f"Deal **{body['dealId']}** imported.")
                st.json(body)
            else:
                show_rejection(body)

# ---------------------------------------------------------------------------
# Tab 2: Batch upload
# ---------------------------------------------------------------------------
with tab_batch:
    st.markdown(
        "Upload a CSV with columns `" + ", ".join(FIELDS) + "`, or a JSON array of deals."
    )
    uploaded = st.file_uploader("Choose file", type=["csv", "json"])
    if uploaded is not None and st.button("Import Batch", use_container_width=True):
        content = uploaded.read().decode("utf-8")
        if uploaded.name.endswith(".json"):
            payloads = json.loads(content)
        else:
            reader = csv.DictReader(io.StringIO(content))
            payloads = [{f: (row.get(f) or "").strip() for f in FIELDS} for row in reader]

        try:
            ok, body = import_batch(payloads)
        except Exception as e:
            st.error(f"Error: {e}")
        else:
            if ok:
                st.success(f"Imported {len(body)} deals.")
                st.dataframe(body, use_container_width=True)
            else:
                show_rejection(body)

# ---------------------------------------------------------------------------
# Tab 3: Sample data generator
# ---------------------------------------------------------------------------
with tab_generate:
    gen_count = st.number_input("Number of deals", min_value=1, max_value=500, value=50)
    if st.button("Generate Deals", use_container_width=True):
        with st.spinner(f"Generating {gen_count} deals..."):
            try:
                result = seed_deals(count=int(gen_count))
                st.success(f"Generated {result['generated']} deals.")
            except Exception as e:
                st.error(f"Error: {e}")
