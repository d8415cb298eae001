"""
app.py
======
Streamlit single-page uploader/viewer.

Run locally (with the backend on :8000):
  streamlit run viewer/app.py
"""

from __future__ import annotations

import os
import sys

import streamlit as st

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from viewer.image_loader import ImageValidationError, load_image
from viewer.proxy_client import ProxyClient, default_api_url
from viewer.session import AnalysisSession, Phase, SessionStateError

ANALYSIS_FAILED_MESSAGE = "Failed to analyze image. Please try again."

MEDICAL_DISCLAIMER = (
    "**Medical Disclaimer:** This is an AI-powered analysis and should not replace "
    "professional medical advice. Please consult a dermatologist for proper "
    "diagnosis and treatment."
)


def _session() -> AnalysisSession:
    if "session" not in st.session_state:
        st.session_state.session = AnalysisSession()
    return st.session_state.session


def _handle_upload(session: AnalysisSession, uploaded) -> None:
    # file_uploader returns the same file on every rerun; decode each once
    key = (uploaded.name, uploaded.size)
    if st.session_state.get("last_upload") == key:
        return
    st.session_state.last_upload = key

    try:
        image = load_image(uploaded.name, uploaded.getvalue(), uploaded.type)
        session.select_image(image)
    except (ImageValidationError, SessionStateError) as exc:
        st.session_state.upload_error = str(exc)


def _render_upload(session: AnalysisSession, client: ProxyClient) -> None:
    st.subheader("Upload Image")
    st.caption("Take or upload a clear photo of the affected area")

    uploaded = st.file_uploader("Click to upload an image", accept_multiple_files=False)
    if uploaded is not None:
        _handle_upload(session, uploaded)

    # shown once; the next rerun starts clean
    upload_error = st.session_state.pop("upload_error", None)
    if upload_error:
        st.error(upload_error)

    if session.image is not None:
        st.image(session.image.data, caption=session.image.filename, width="stretch")

    if st.button("Analyze Image", disabled=not session.can_analyze, width="stretch"):
        with st.spinner("Analyzing..."):
            try:
                session.run(client.analyze)
            except Exception:
                st.error(ANALYSIS_FAILED_MESSAGE)
            else:
                st.success("Analysis complete!")


def _render_result(session: AnalysisSession) -> None:
    if session.phase is not Phase.HAS_RESULT or session.analysis is None:
        st.subheader("No Analysis Yet")
        st.write('Upload an image and click "Analyze" to get started')
        return

    analysis = session.analysis
    st.subheader(analysis.disease)
    st.caption("AI-Generated Analysis")

    st.markdown("#### Possible Causes")
    st.write(analysis.causes)

    st.markdown("#### Summary & Recommendations")
    st.text(analysis.summary)

    st.warning(MEDICAL_DISCLAIMER)


def main() -> None:
    st.set_page_config(page_title="DermaDict AI", layout="wide")
    st.title("DermaDict AI")
    st.caption("AI-Powered Skin Disease Detection & Analysis")

    session = _session()
    client  = ProxyClient(default_api_url())

    left, right = st.columns(2)
    with left:
        _render_upload(session, client)
    with right:
        _render_result(session)


if __name__ == "__main__":
    main()
