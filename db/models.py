# db/models.py
"""
Collections used by the site and the shape of a record in each.

Supabase tables (created in the Supabase dashboard, all with
`id uuid default gen_random_uuid()` and `created_at timestamptz`):

Table: services          - title, description, image, category
Table: projects          - title, description, before_image, after_image, client_name
Table: gallery           - image, caption, category
Table: testimonials      - client_name, review_text, rating (int), status
Table: slider_images     - image, caption
Table: bookings          - name, email, phone, address, service,
                           preferred_date, preferred_time, message, status
Table: admin_credentials - username, password, updated_at

The store itself passes plain dicts around; the dataclasses below are a
typed view used by the UI and the submission flow.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional, Type, Union


SERVICES = "services"
PROJECTS = "projects"
GALLERY = "gallery"
TESTIMONIALS = "testimonials"
SLIDER_IMAGES = "slider_images"
ADMIN_CREDENTIALS = "admin_credentials"
BOOKINGS = "bookings"

STORAGE_KEYS: Dict[str, str] = {
    SERVICES: "zentra_services",
    PROJECTS: "zentra_projects",
    GALLERY: "zentra_gallery",
    TESTIMONIALS: "zentra_testimonials",
    SLIDER_IMAGES: "zentra_slider_images",
    ADMIN_CREDENTIALS: "zentra_admin_credentials",
    BOOKINGS: "zentra_bookings",
}

TestimonialStatus = Literal["pending", "approved"]
BookingStatus = Literal["pending", "confirmed", "completed", "cancelled"]

BOOKING_STATUSES = ("pending", "confirmed", "completed", "cancelled")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------- RECORD SHAPES ----------------------

@dataclass
class RecordBase:
    id: Optional[str] = field(default=None, kw_only=True)
    created_at: Optional[str] = field(default=None, kw_only=True)
    updated_at: Optional[str] = field(default=None, kw_only=True)

    @classmethod
    def from_dict(cls, row: Dict[str, Any]):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        # Unset bookkeeping fields are left out so the store can assign them
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        for key in ("id", "created_at", "updated_at"):
            if data[key] is None:
                del data[key]
        return data


@dataclass
class Service(RecordBase):
    title: str
    description: str
    image: str
    category: str


@dataclass
class Project(RecordBase):
    title: str
    description: str
    before_image: str
    after_image: str
    client_name: str


@dataclass
class GalleryItem(RecordBase):
    image: str
    caption: str
    category: str


@dataclass
class Testimonial(RecordBase):
    client_name: str
    review_text: str
    rating: int
    status: TestimonialStatus = "pending"


@dataclass
class SliderImage(RecordBase):
    image: str
    caption: str


@dataclass
class Booking(RecordBase):
    name: str
    email: str
    phone: str
    address: str
    service: str
    preferred_date: Optional[str]
    preferred_time: str
    message: Optional[str] = None
    status: BookingStatus = "pending"


@dataclass
class AdminCredential(RecordBase):
    username: str
    password: str


Record = Union[Service, Project, GalleryItem, Testimonial, SliderImage, Booking, AdminCredential]

RECORD_TYPES: Dict[str, Type[RecordBase]] = {
    SERVICES: Service,
    PROJECTS: Project,
    GALLERY: GalleryItem,
    TESTIMONIALS: Testimonial,
    SLIDER_IMAGES: SliderImage,
    ADMIN_CREDENTIALS: AdminCredential,
    BOOKINGS: Booking,
}


def parse_record(collection: str, row: Dict[str, Any]) -> Record:
    """Build the typed record for a raw row. Raises KeyError for unknown collections."""
    return RECORD_TYPES[collection].from_dict(row)
