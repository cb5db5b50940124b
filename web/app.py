#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

import streamlit as st

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ta_finder.store import SessionStore


def ensure_state() -> None:
    st.session_state.setdefault("store", SessionStore())
    st.session_state.setdefault("ingested_upload", None)
    st.session_state.setdefault("last_ingest", None)


def upload_signature(upload) -> tuple:
    return (upload.name, upload.size, getattr(upload, "file_id", None))


def handle_upload(store: SessionStore, upload) -> None:
    # Streamlit reruns the script on every interaction; ingest each upload once.
    if upload is None:
        return
    signature = upload_signature(upload)
    if st.session_state["ingested_upload"] == signature:
        return
    st.session_state["ingested_upload"] = signature
    st.session_state["last_ingest"] = store.ingest(upload)


def render_ingest_summary(summary: dict | None) -> None:
    if not summary:
        return
    if summary["status"] == "failed":
        st.error(f"Could not read that file: {summary['error']}")
        return
    if summary["warnings"]:
        with st.expander(f"{summary['warnings_count']} rows skipped"):
            st.code("\n".join(summary["warnings"]))


def set_visuals() -> None:
    st.set_page_config(page_title="ta-finder", page_icon="🔎", layout="wide")
    st.markdown(
        """
        <style>
        .padded { padding: 0.5rem 0; }
        pre { white-space: pre-wrap; }
        </style>
        """,
        unsafe_allow_html=True,
    )


def main() -> None:
    set_visuals()
    ensure_state()
    store: SessionStore = st.session_state["store"]

    st.title("ta-finder")
    st.caption("Upload the applicant survey export, then type to rank applicants by fuzzy match.")

    upload = st.file_uploader("CSV", type=["csv"], accept_multiple_files=False, key="upload_input")
    handle_upload(store, upload)
    render_ingest_summary(st.session_state["last_ingest"])
    if store.parsed:
        st.text(store.status_line())

    query = st.text_input("Find", key="query_input")
    if store.cards and query != store.query:
        store.search(query)

    cards_tab, table_tab = st.tabs(["Cards", "Table"])
    with cards_tab:
        st.code(store.render_text(), language=None)
    with table_tab:
        st.dataframe(store.to_frame(), hide_index=True)


if __name__ == "__main__":
    main()
