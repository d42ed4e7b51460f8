"""Tests for typed record shapes."""

import pytest

from db.models import (
    RECORD_TYPES,
    STORAGE_KEYS,
    Booking,
    Testimonial,
    parse_record,
)


def test_every_collection_has_a_record_type():
    assert set(RECORD_TYPES) == set(STORAGE_KEYS)


def test_parse_booking_keeps_bookkeeping_fields():
    booking = parse_record("bookings", {
        "id": "b1",
        "created_at": "2024-05-01T10:00:00+00:00",
        "name": "Dana",
        "email": "dana@example.com",
        "phone": "555-123-4567",
        "address": "1 Elm St",
        "service": "Landscape Design",
        "preferred_date": "2024-05-10",
        "preferred_time": "Morning (8AM - 12PM)",
        "unexpected": "ignored",
    })

    assert isinstance(booking, Booking)
    assert booking.id == "b1"
    assert booking.status == "pending"
    assert booking.message is None


def test_missing_required_field_raises():
    with pytest.raises(TypeError):
        parse_record("testimonials", {"client_name": "Dana"})


def test_unknown_collection_raises():
    with pytest.raises(KeyError):
        parse_record("invoices", {})


def test_to_dict_omits_unset_bookkeeping_fields():
    review = Testimonial(client_name="Dana", review_text="Great", rating=5)

    assert review.to_dict() == {
        "client_name": "Dana",
        "review_text": "Great",
        "rating": 5,
        "status": "pending",
    }
