from __future__ import annotations

import sys
import os

# --- Add project root to sys.path ---
current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

import streamlit as st

from app.admin_dashboard import render_admin_dashboard
from app.booking_flow import (
    PREFERRED_TIMES,
    BookingState,
    ReviewState,
    generate_confirmation_text,
    validate_booking,
    validate_review,
)
from app.config import build_data_store, load_config
from app.logging_setup import setup_logging
from app.notifications import EmailNotifier
from app.submissions import SubmissionService
from db.models import GALLERY, PROJECTS, SERVICES, SLIDER_IMAGES, TESTIMONIALS
from db.store import DataStore


@st.cache_resource(show_spinner=False)
def _init_services():
    setup_logging()
    cfg = load_config()
    store = build_data_store(cfg)
    submissions = SubmissionService(store, EmailNotifier(cfg.resend))
    return store, submissions


def main():
    st.set_page_config(
        page_title="Zentra Holdings",
        page_icon="🌿",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    store, submissions = _init_services()

    with st.sidebar:
        st.title("Navigation")
        menu = st.radio("Go to", ["Website", "Admin Dashboard"])
        st.divider()
        if not store.remote_configured:
            st.info("Running without Supabase: data is kept in local storage.")

    if menu == "Website":
        render_site(store, submissions)
    else:
        render_admin_dashboard(store)


def render_site(store: DataStore, submissions: SubmissionService):
    st.title("🌿 Zentra Holdings")
    st.caption("Lawn care and landscaping services.")

    slides = store.fetch(SLIDER_IMAGES).records
    if slides:
        st.image(slides[0].get("image"), caption=slides[0].get("caption"))

    st.header("Our Services")
    services = store.fetch(SERVICES).records
    cols = st.columns(3)
    for i, service in enumerate(services):
        with cols[i % 3]:
            st.image(service.get("image"))
            st.subheader(service.get("title"))
            st.write(service.get("description"))

    st.header("Recent Projects")
    for project in store.fetch(PROJECTS).records:
        st.subheader(project.get("title"))
        c1, c2 = st.columns(2)
        if project.get("before_image"):
            c1.image(project["before_image"], caption="Before")
        if project.get("after_image"):
            c2.image(project["after_image"], caption="After")
        st.write(project.get("description"))

    st.header("Gallery")
    gallery = store.fetch(GALLERY).records
    cols = st.columns(3)
    for i, item in enumerate(gallery):
        cols[i % 3].image(item.get("image"), caption=item.get("caption"))

    st.header("What Our Clients Say")
    for review in store.fetch(TESTIMONIALS).records:
        if review.get("status") == "approved":
            st.write(f"{'⭐' * int(review.get('rating') or 0)} “{review.get('review_text')}”")
            st.caption(review.get("client_name"))

    st.divider()
    c1, c2 = st.columns(2)
    with c1:
        render_booking_form([s.get("title") for s in services], submissions)
    with c2:
        render_review_form(submissions)


def render_booking_form(service_names, submissions: SubmissionService):
    st.header("Book a Service")
    with st.form("booking_form", clear_on_submit=False):
        state = BookingState(
            name=st.text_input("Full name"),
            email=st.text_input("Email"),
            phone=st.text_input("Phone"),
            address=st.text_input("Address"),
            service=st.selectbox("Service", options=service_names or ["General enquiry"]),
            preferred_date=st.date_input("Preferred date", value=None),
            preferred_time=st.selectbox("Preferred time", options=PREFERRED_TIMES),
            message=st.text_area("Message (optional)"),
        )
        submitted = st.form_submit_button("Request booking")

    if not submitted:
        return

    state = validate_booking(state)
    if state.errors:
        st.error(f"⚠️ {next(iter(state.errors.values()))}")
        return

    submissions.submit_booking(state.to_payload())
    st.success("🎉 Thank you! Your booking request has been received. We'll be in touch soon.")
    st.markdown(generate_confirmation_text(state))


def render_review_form(submissions: SubmissionService):
    st.header("Leave a Review")
    with st.form("review_form", clear_on_submit=True):
        state = ReviewState(
            client_name=st.text_input("Your name"),
            rating=st.slider("Rating", min_value=1, max_value=5, value=5),
            review_text=st.text_area("Your review"),
        )
        submitted = st.form_submit_button("Submit review")

    if not submitted:
        return

    state = validate_review(state)
    if state.errors:
        st.error(f"⚠️ {next(iter(state.errors.values()))}")
        return

    submissions.submit_testimonial(state.to_payload())
    st.success("Thanks for your review! It will appear once approved.")


if __name__ == "__main__":
    main()
