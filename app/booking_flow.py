from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Dict, Any, List
import re

from email_validator import validate_email as _validate_email, EmailNotValidError


BOOKING_FIELDS = [
    "name",
    "email",
    "phone",
    "address",
    "service",
    "preferred_date",
    "preferred_time",
]

PREFERRED_TIMES = [
    "Morning (8AM - 12PM)",
    "Afternoon (12PM - 4PM)",
    "Evening (4PM - 7PM)",
]


@dataclass
class BookingState:
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    service: Optional[str] = None
    preferred_date: Optional[date] = None
    preferred_time: Optional[str] = None
    message: Optional[str] = None

    errors: Dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "service": self.service,
            "preferred_date": self.preferred_date.isoformat() if self.preferred_date else None,
            "preferred_time": self.preferred_time,
            "message": self.message or None,
        }


@dataclass
class ReviewState:
    client_name: Optional[str] = None
    review_text: Optional[str] = None
    rating: int = 5

    errors: Dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "client_name": self.client_name,
            "review_text": self.review_text,
            "rating": self.rating,
        }


# ----------------- VALIDATORS ------------------------

def validate_email(email: str) -> bool:
    try:
        _validate_email(email, check_deliverability=False)
        return True
    except EmailNotValidError:
        return False


def validate_phone(phone: str) -> bool:
    digits = re.sub(r"\D", "", phone)
    # Standard length (10-15 digits)
    return 10 <= len(digits) <= 15


def parse_date_str(val: str) -> Optional[date]:
    try:
        return datetime.strptime(val.strip(), "%Y-%m-%d").date()
    except (ValueError, AttributeError):
        return None


def get_missing_fields(state: BookingState) -> List[str]:
    missing = []
    for f in BOOKING_FIELDS:
        if getattr(state, f, None) in (None, ""):
            missing.append(f)
    return missing


# ----------------- FORM CHECKS ------------------------

def validate_booking(state: BookingState, today: Optional[date] = None) -> BookingState:
    """Fill `state.errors`; an empty dict means the booking can be submitted."""
    today = today or date.today()
    state.errors.clear()

    if state.name is not None:
        state.name = state.name.strip()
        if state.name and len(state.name) < 2:
            state.errors["name"] = "Invalid name. Please provide your full name."

    if state.email:
        state.email = state.email.strip()
        if not validate_email(state.email):
            state.errors["email"] = "Invalid email. Please try format: name@example.com"

    if state.phone:
        state.phone = state.phone.strip()
        if not validate_phone(state.phone):
            state.errors["phone"] = "Invalid phone number. Please enter a valid phone number."

    if state.preferred_date and state.preferred_date < today:
        state.errors["preferred_date"] = "Invalid date (past). Please choose an upcoming date."

    for f in get_missing_fields(state):
        state.errors.setdefault(f, f"Please provide {f.replace('_', ' ')}.")

    return state


def validate_review(state: ReviewState) -> ReviewState:
    state.errors.clear()

    name = (state.client_name or "").strip()
    if len(name) < 2:
        state.errors["client_name"] = "Please provide your name."
    state.client_name = name

    text = (state.review_text or "").strip()
    if not text:
        state.errors["review_text"] = "Please write a short review."
    state.review_text = text

    if not 1 <= int(state.rating) <= 5:
        state.errors["rating"] = "Rating must be between 1 and 5."

    return state


def generate_confirmation_text(state: BookingState) -> str:
    # Markdown bullet points force new lines in st.markdown
    return (
        f"- **Name:** {state.name}\n"
        f"- **Email:** {state.email}\n"
        f"- **Phone:** {state.phone or 'N/A'}\n"
        f"- **Service:** {state.service}\n"
        f"- **Date:** {state.preferred_date or 'Not specified'}\n"
        f"- **Time:** {state.preferred_time}"
    )
