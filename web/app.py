# web/app.py
"""
Skin-In - Streamlit Frontend
============================
Upload a skin photo, pick a model, see the predicted condition with a
confidence meter, compare all models, and use the contact form.

Run with: streamlit run web/app.py
"""

import os

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from api_client import (
    APIClient,
    confidence_level,
    confidence_percent,
    format_confidence,
    get_model_info,
    new_session_id,
    validate_image
)
from styles import (
    get_custom_css,
    render_confidence_meter,
    render_footer,
    render_header,
    render_model_card
)
from skin_in.contacts import CSV_FILENAME, ContactSubmission, contacts_to_csv


# =====================================================
# PAGE CONFIG
# =====================================================
st.set_page_config(
    page_title="Skin-In",
    page_icon="🔬",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown(get_custom_css(), unsafe_allow_html=True)
st.markdown(render_header(), unsafe_allow_html=True)


# =====================================================
# INITIALIZE STATE
# =====================================================
_env_api_url = os.environ.get("API_URL")

if _env_api_url:
    if not _env_api_url.startswith("http"):
        API_URL = f"https://{_env_api_url}"
    else:
        API_URL = _env_api_url
else:
    # Local development fallback
    API_URL = "http://127.0.0.1:8000"

if "api_client" not in st.session_state:
    st.session_state.api_client = APIClient(base_url=API_URL)

if "session_id" not in st.session_state:
    st.session_state.session_id = new_session_id()

if "prediction_result" not in st.session_state:
    st.session_state.prediction_result = None

if "comparison" not in st.session_state:
    st.session_state.comparison = None

if "contact_submissions" not in st.session_state:
    st.session_state.contact_submissions = []

client: APIClient = st.session_state.api_client


# =====================================================
# SIDEBAR
# =====================================================
with st.sidebar:
    st.markdown("### Settings")

    is_healthy, health_data = client.health_check()
    models_loaded = health_data.get("models_loaded", {}) if is_healthy else {}

    if is_healthy:
        st.success("API Online")
    else:
        st.error("API Offline")

    st.divider()

    st.markdown("### Model")
    model_type = st.radio(
        "Select model:",
        options=["CNN", "RNN", "GNN"],
        format_func=lambda m: f"{m} {'✓' if models_loaded.get(m) else '✗'}",
        label_visibility="collapsed"
    )

    info = get_model_info(model_type)
    st.markdown(f"""
    <div style="background: linear-gradient(135deg, {info['color']}22, {info['color']}11);
                border-left: 3px solid {info['color']}; padding: 12px 16px;
                border-radius: 8px; margin: 10px 0;">
        <strong style="color: {info['color']};">{info['title']}</strong><br>
        <small>{info['detects']}</small>
    </div>
    """, unsafe_allow_html=True)

    if is_healthy and not models_loaded.get(model_type):
        st.warning(f"{model_type} model is not available. Please try another model.")

    st.divider()

    with st.expander("Advanced"):
        api_url_input = st.text_input("API URL", value=API_URL)
        if st.button("Update"):
            st.session_state.api_client = APIClient(base_url=api_url_input)
            st.rerun()


# =====================================================
# ANALYSIS
# =====================================================
st.markdown("## Analyze Your Skin")

uploaded_file = st.file_uploader(
    "Upload a photo (JPG, PNG, max 5MB)",
    type=["png", "jpg", "jpeg", "bmp", "gif", "webp"]
)

col_image, col_result = st.columns([1, 1])

image_ok = False
if uploaded_file is not None:
    image_ok, error_message = validate_image(uploaded_file)
    if not image_ok:
        st.error(error_message)
    else:
        with col_image:
            st.image(uploaded_file, caption=uploaded_file.name, use_container_width=True)

analyze_disabled = not (image_ok and models_loaded.get(model_type))

with col_image:
    analyze_clicked = st.button("Analyze Now", disabled=analyze_disabled, use_container_width=True)

if analyze_clicked and image_ok:
    image_bytes = uploaded_file.getvalue()

    with st.spinner(f"Analyzing with {model_type}..."):
        success, result = client.predict(
            image_bytes,
            uploaded_file.name,
            model_type,
            session_id=st.session_state.session_id,
            mime_type=uploaded_file.type
        )

    if success:
        st.session_state.prediction_result = result
        st.session_state.comparison = None

        if health_data.get("all_models_loaded"):
            with st.spinner("Comparing all models..."):
                ok, comparison = client.compare(
                    image_bytes,
                    uploaded_file.name,
                    session_id=st.session_state.session_id,
                    mime_type=uploaded_file.type
                )
            if ok and comparison.get("available"):
                st.session_state.comparison = comparison
            elif not ok:
                st.warning(f"Model comparison failed: {comparison['error']}")
    else:
        st.session_state.prediction_result = None
        st.error(f"Error during {model_type} analysis: {result['error']}")


result = st.session_state.prediction_result
if result:
    percent = confidence_percent(result["confidence"])
    level = confidence_level(percent)

    with col_result:
        st.markdown("### Results")
        st.markdown("**Confidence**")
        st.markdown(render_confidence_meter(percent, level), unsafe_allow_html=True)

        st.markdown(f"""
        <div class="result-card">
            <h4>Condition:</h4><p>{result['condition_label']}</p>
            <h4>Recommendation:</h4><p>{result['recommendation']}</p>
        </div>
        """, unsafe_allow_html=True)

        labels = ["Acne", "Eczema", "Psoriasis", "Rosacea", "Healthy Skin"]
        fig = go.Figure(go.Bar(
            x=result["raw_scores"],
            y=labels[:len(result["raw_scores"])],
            orientation="h",
            marker_color=["#0891b2" if i == result["class_id"] else "#cbd5e1"
                          for i in range(len(result["raw_scores"]))]
        ))
        fig.update_layout(height=250, margin=dict(l=20, r=20, t=20, b=20), xaxis=dict(range=[0, 1]))
        st.plotly_chart(fig, use_container_width=True)

comparison = st.session_state.comparison
if comparison and comparison.get("available"):
    st.markdown("### Model Comparison")
    cards = st.columns(len(comparison["results"]))
    for card, item in zip(cards, comparison["results"]):
        pct = confidence_percent(item["confidence"])
        with card:
            st.markdown(
                render_model_card(item["model_id"], item["condition_label"], pct, confidence_level(pct)),
                unsafe_allow_html=True
            )

    table = pd.DataFrame([
        {
            "Model": item["model_id"],
            "Condition": item["condition_label"],
            "Confidence": format_confidence(item["confidence"])
        }
        for item in comparison["results"]
    ])
    st.dataframe(table, use_container_width=True, hide_index=True)


# =====================================================
# CONTACT
# =====================================================
st.divider()
st.markdown("## Contact Us")

with st.form("contact_form", clear_on_submit=True):
    name = st.text_input("Name")
    email = st.text_input("Email")
    message = st.text_area("Message")
    submitted = st.form_submit_button("Send Message")

if submitted:
    if not name.strip() or not email.strip() or not message.strip():
        st.error("Please fill in all fields")
    else:
        submission = ContactSubmission(name=name, email=email, message=message)
        st.session_state.contact_submissions.append(submission)

        ok, response = client.submit_contact(submission.name, submission.email, submission.message)
        if ok:
            st.success(f"Thank you, {submission.name}! Your message has been sent. We'll contact you soon.")
        else:
            st.warning(f"Saved locally, but the server did not accept it: {response['error']}")

if st.session_state.contact_submissions:
    st.download_button(
        "Download Contacts (CSV)",
        data=contacts_to_csv(st.session_state.contact_submissions),
        file_name=CSV_FILENAME,
        mime="text/csv"
    )
else:
    st.caption("No contact submissions to export")

with st.expander("Admin: export all submissions"):
    st.caption("Credentials are sent with HTTP Basic auth. Use an https:// API URL.")
    admin_user = st.text_input("Admin username", value="admin")
    admin_password = st.text_input("Admin password", type="password")
    if st.button("Fetch export") and admin_password:
        ok, payload = client.export_contacts(admin_user, admin_password)
        if ok:
            st.download_button(
                "Save CSV",
                data=payload,
                file_name=CSV_FILENAME,
                mime="text/csv"
            )
        else:
            st.error(f"Error exporting contacts: {payload['error']}")


# =====================================================
# FOOTER
# =====================================================
st.markdown(render_footer(), unsafe_allow_html=True)
