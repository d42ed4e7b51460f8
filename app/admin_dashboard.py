import streamlit as st
import pandas as pd
import plotly.express as px

from db.models import (
    BOOKINGS,
    BOOKING_STATUSES,
    GALLERY,
    PROJECTS,
    SERVICES,
    SLIDER_IMAGES,
    TESTIMONIALS,
    ADMIN_CREDENTIALS,
)
from db.store import AuthenticationError, DataStore


def _backend_badge(backend: str):
    if backend == "remote":
        st.sidebar.success("Data source: Supabase")
    else:
        st.sidebar.warning("Data source: local storage")


def _uploader(label: str, key: str):
    return st.file_uploader(label, type=["png", "jpg", "jpeg", "webp"], key=key)


def _store_upload(store: DataStore, uploaded):
    if uploaded is None:
        return None
    return store.upload_image(uploaded.name, uploaded.getvalue(), uploaded.type or "image/jpeg")


def _render_login(store: DataStore):
    st.subheader("🔐 Admin Login")
    with st.form("admin_login"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in")

    if submitted:
        try:
            st.session_state.admin_user = store.authenticate(username, password)
            st.rerun()
        except AuthenticationError as e:
            st.error(str(e))


def render_admin_dashboard(store: DataStore):
    st.title("📊 Zentra Admin Dashboard")

    if "admin_user" not in st.session_state:
        _render_login(store)
        return

    if st.sidebar.button("Log out"):
        del st.session_state.admin_user
        st.rerun()

    tabs = st.tabs(["Bookings", "Reviews", "Services", "Projects", "Gallery", "Slider", "Account"])
    with tabs[0]:
        _render_bookings(store)
    with tabs[1]:
        _render_testimonials(store)
    with tabs[2]:
        _render_services(store)
    with tabs[3]:
        _render_projects(store)
    with tabs[4]:
        _render_gallery(store, GALLERY, "gallery")
    with tabs[5]:
        _render_gallery(store, SLIDER_IMAGES, "slider")
    with tabs[6]:
        _render_account(store)


def _render_bookings(store: DataStore):
    fetched = store.fetch(BOOKINGS)
    _backend_badge(fetched.backend)

    if not fetched.records:
        st.info("No bookings yet.")
        return

    df = pd.DataFrame(fetched.records)

    # --- KPI Metrics ---
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Bookings", len(df))
    col2.metric("Pending", int((df["status"] == "pending").sum()) if "status" in df.columns else 0)
    col3.metric("Completed", int((df["status"] == "completed").sum()) if "status" in df.columns else 0)

    if "status" in df.columns:
        counts = df["status"].value_counts().rename_axis("status").reset_index(name="count")
        st.plotly_chart(px.bar(counts, x="status", y="count", title="Bookings by status"))

    # --- Filters ---
    st.divider()
    status_filter = st.multiselect(
        "Filter by Status",
        options=list(BOOKING_STATUSES),
        default=list(BOOKING_STATUSES),
    )
    filtered_df = df[df["status"].isin(status_filter)] if status_filter and "status" in df.columns else df

    display_cols = [
        "name", "email", "phone", "address", "service",
        "preferred_date", "preferred_time", "status", "created_at", "id",
    ]
    final_cols = [c for c in display_cols if c in filtered_df.columns]
    st.dataframe(filtered_df[final_cols])

    # --- Actions ---
    c1, c2 = st.columns([2, 1])
    with c1:
        st.write("### Update Status")
        booking_id = st.selectbox("Booking", options=list(df["id"]), key="booking_status_id")
        new_status = st.selectbox("New status", options=list(BOOKING_STATUSES), key="booking_status")
        if st.button("Save status"):
            result = store.update(BOOKINGS, booking_id, {"status": new_status})
            st.success(f"Booking {booking_id} set to {new_status} ({result.backend}).")
            st.rerun()
        if st.button("Delete booking"):
            store.delete(BOOKINGS, booking_id)
            st.rerun()

    with c2:
        st.write("### Export")
        csv = filtered_df.to_csv(index=False).encode("utf-8")
        st.download_button(
            "📥 Download as CSV",
            csv,
            "zentra_bookings.csv",
            "text/csv",
            key="download-csv",
        )


def _render_testimonials(store: DataStore):
    fetched = store.fetch(TESTIMONIALS)
    if not fetched.records:
        st.info("No reviews yet.")
        return

    for review in fetched.records:
        with st.container(border=True):
            st.write(f"**{review.get('client_name')}** · {'⭐' * int(review.get('rating') or 0)} · "
                     f"`{review.get('status')}`")
            st.write(review.get("review_text"))
            c1, c2 = st.columns(2)
            if review.get("status") != "approved" and c1.button("Approve", key=f"approve-{review['id']}"):
                store.update(TESTIMONIALS, review["id"], {"status": "approved"})
                st.rerun()
            if c2.button("Delete", key=f"delete-review-{review['id']}"):
                store.delete(TESTIMONIALS, review["id"])
                st.rerun()


def _render_services(store: DataStore):
    with st.expander("➕ Add service"):
        with st.form("add_service", clear_on_submit=True):
            title = st.text_input("Title")
            description = st.text_area("Description")
            category = st.text_input("Category", value="maintenance")
            image_url = st.text_input("Image URL")
            image_file = _uploader("…or upload an image", "service_image")
            if st.form_submit_button("Add service") and title:
                image = _store_upload(store, image_file)
                store.insert(SERVICES, {
                    "title": title,
                    "description": description,
                    "category": category,
                    "image": image or image_url,
                })
                st.rerun()

    for service in store.fetch(SERVICES).records:
        c1, c2 = st.columns([4, 1])
        c1.write(f"**{service.get('title')}** ({service.get('category')})")
        if c2.button("Delete", key=f"delete-service-{service['id']}"):
            store.delete(SERVICES, service["id"])
            st.rerun()


def _render_projects(store: DataStore):
    with st.expander("➕ Add project"):
        with st.form("add_project", clear_on_submit=True):
            title = st.text_input("Title")
            description = st.text_area("Description")
            client_name = st.text_input("Client name")
            before_file = _uploader("Before image", "project_before")
            after_file = _uploader("After image", "project_after")
            if st.form_submit_button("Add project") and title:
                before = _store_upload(store, before_file)
                after = _store_upload(store, after_file)
                store.insert(PROJECTS, {
                    "title": title,
                    "description": description,
                    "client_name": client_name,
                    "before_image": before or "",
                    "after_image": after or "",
                })
                st.rerun()

    for project in store.fetch(PROJECTS).records:
        c1, c2 = st.columns([4, 1])
        c1.write(f"**{project.get('title')}** for {project.get('client_name')}")
        if c2.button("Delete", key=f"delete-project-{project['id']}"):
            store.delete(PROJECTS, project["id"])
            st.rerun()


def _render_gallery(store: DataStore, collection: str, prefix: str):
    with st.expander("➕ Add image"):
        with st.form(f"add_{prefix}", clear_on_submit=True):
            caption = st.text_input("Caption")
            category = st.text_input("Category") if collection == GALLERY else None
            image_file = _uploader("Image", f"{prefix}_image")
            if st.form_submit_button("Add image") and image_file is not None:
                image = _store_upload(store, image_file)
                record = {"image": image, "caption": caption}
                if category is not None:
                    record["category"] = category
                store.insert(collection, record)
                st.rerun()

    items = store.fetch(collection).records
    cols = st.columns(3)
    for i, item in enumerate(items):
        with cols[i % 3]:
            st.image(item.get("image"), caption=item.get("caption"))
            if st.button("Delete", key=f"delete-{prefix}-{item['id']}"):
                store.delete(collection, item["id"])
                st.rerun()


def _render_account(store: DataStore):
    user = st.session_state.admin_user
    st.write(f"Logged in as **{user.get('username')}**")
    with st.form("change_credentials"):
        username = st.text_input("New username", value=user.get("username", ""))
        password = st.text_input("New password", type="password")
        if st.form_submit_button("Update credentials") and password:
            store.update(ADMIN_CREDENTIALS, user["id"], {"username": username, "password": password})
            st.session_state.admin_user = {**user, "username": username, "password": password}
            st.success("Credentials updated.")
