"""
PDF Link Extractor — Streamlit UI.

Flow:
1. Pick a PDF.
2. Extract Links: every link annotation, page by page, deduplicated per page.
3. Titles for each distinct URL fill into the table as lookups land.
4. Save the (page, url) table as CSV or XLSX.
"""

import asyncio

import streamlit as st
import structlog

from pdf_link_extractor.core.config import settings
from pdf_link_extractor.core.constants import EXTRACTION_FAILED_MESSAGE, ExportFiles
from pdf_link_extractor.core.logging_setup import configure_logging
from pdf_link_extractor.services.exporter import to_csv_bytes, to_xlsx_bytes
from pdf_link_extractor.services.session import (
    ExtractionSession,
    run_extraction,
    run_title_resolution,
)
from pdf_link_extractor.services.table_view import TABLE_CSS, render_links_table

configure_logging(settings.LOG_LEVEL, settings.ENVIRONMENT, settings.LOG_FILE)
logger = structlog.get_logger(__name__)

# ============ PAGE CONFIG ============
st.set_page_config(
    page_title="PDF Link Extractor",
    page_icon="🔗",
    layout="wide",
)
st.markdown(TABLE_CSS, unsafe_allow_html=True)


# ============ SESSION STATE INITIALIZATION ============
if "extraction" not in st.session_state:
    st.session_state.extraction = ExtractionSession()
if "is_loading" not in st.session_state:
    st.session_state.is_loading = False
if "extraction_error" not in st.session_state:
    st.session_state.extraction_error = None


# ============ HELPER FUNCTIONS ============


def _start_extraction() -> None:
    """Button callback: flag the run so the button renders disabled while it works."""
    st.session_state.is_loading = True
    st.session_state.extraction_error = None


def _extract(uploaded_file) -> None:
    """Replace the session with a fresh extraction of ``uploaded_file``."""
    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    try:
        if uploaded_file.size > max_bytes:
            st.session_state.extraction = ExtractionSession()
            st.session_state.extraction_error = (
                f"File too large ({uploaded_file.size // (1024 * 1024)} MB). "
                f"Maximum is {settings.MAX_UPLOAD_SIZE_MB} MB."
            )
            return
        structlog.contextvars.bind_contextvars(filename=uploaded_file.name)
        with st.spinner("Extracting links..."):
            session = asyncio.run(run_extraction(uploaded_file.getvalue()))
    except Exception:
        logger.exception("app.extraction_failed")
        st.session_state.extraction = ExtractionSession()
        st.session_state.extraction_error = EXTRACTION_FAILED_MESSAGE
    else:
        st.session_state.extraction = session
    finally:
        st.session_state.is_loading = False
        structlog.contextvars.clear_contextvars()


# ============ PAGE ============
st.title("PDF Link Extractor")

uploaded = st.file_uploader("Choose a PDF", type=["pdf"], accept_multiple_files=False)

if st.session_state.is_loading and uploaded is None:
    st.session_state.is_loading = False

session: ExtractionSession = st.session_state.extraction
loading = st.session_state.is_loading

col_extract, col_csv, col_xlsx, _ = st.columns([1, 1, 1, 5])
with col_extract:
    st.button(
        "Extracting..." if loading else "Extract Links",
        type="primary",
        disabled=uploaded is None or loading,
        on_click=_start_extraction,
    )
if session.has_links and not loading:
    with col_csv:
        st.download_button(
            "Save as CSV",
            data=to_csv_bytes(session.links),
            file_name=ExportFiles.CSV_NAME,
            mime=ExportFiles.CSV_MIME,
            on_click="ignore",
        )
    with col_xlsx:
        st.download_button(
            "Save as XLSX",
            data=to_xlsx_bytes(session.links),
            file_name=ExportFiles.XLSX_NAME,
            mime=ExportFiles.XLSX_MIME,
            on_click="ignore",
        )

if loading:
    _extract(uploaded)
    st.rerun()

if st.session_state.extraction_error:
    st.error(st.session_state.extraction_error)

summary = session.summary()
if summary:
    st.write(summary)

if session.has_links:
    table_placeholder = st.empty()
    table_placeholder.markdown(render_links_table(session.links, session.titles), unsafe_allow_html=True)

    # Lookups cut short by a rerun leave their URLs pending; pick them up on this run
    if session.pending_urls():

        def _on_title(url: str, result) -> None:
            table_placeholder.markdown(
                render_links_table(session.links, session.titles), unsafe_allow_html=True
            )

        asyncio.run(run_title_resolution(session, on_result=_on_title))
