"""Transactional email notifications via the Resend API."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

import httpx

from app.config import ResendConfig

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
SENDER_NAME = "Zentra Holdings"


@dataclass
class NotificationResult:
    success: bool
    id: Optional[str] = None
    error: Optional[str] = None


def _esc(value: Any) -> str:
    return html.escape("" if value is None else str(value))


def _format_date(value: Any) -> str:
    if not value:
        return "Not specified"
    if isinstance(value, (date, datetime)):
        return value.strftime("%B %d, %Y")
    try:
        return date.fromisoformat(str(value)[:10]).strftime("%B %d, %Y")
    except ValueError:
        return str(value)


def _submitted_line() -> str:
    return (
        '<div style="background-color: #e8f4f8; padding: 20px; border-radius: 8px; margin: 20px 0;">'
        f'<p style="margin: 0;"><strong>Submitted:</strong> {datetime.now():%B %d, %Y %I:%M %p}</p>'
        "</div>"
    )


def booking_email_html(booking: Mapping[str, Any]) -> str:
    message = booking.get("message")
    message_html = f"<p><strong>Message:</strong> {_esc(message)}</p>" if message else ""
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h2 style="color: #006400;">New Service Booking Request</h2>'
        '<div style="background-color: #f9f9f9; padding: 20px; border-radius: 8px; margin: 20px 0;">'
        '<h3 style="color: #333; margin-top: 0;">Customer Information</h3>'
        f"<p><strong>Name:</strong> {_esc(booking.get('name'))}</p>"
        f"<p><strong>Email:</strong> {_esc(booking.get('email'))}</p>"
        f"<p><strong>Phone:</strong> {_esc(booking.get('phone'))}</p>"
        f"<p><strong>Address:</strong> {_esc(booking.get('address'))}</p>"
        "</div>"
        '<div style="background-color: #f0f8f0; padding: 20px; border-radius: 8px; margin: 20px 0;">'
        '<h3 style="color: #333; margin-top: 0;">Service Details</h3>'
        f"<p><strong>Service:</strong> {_esc(booking.get('service'))}</p>"
        f"<p><strong>Preferred Date:</strong> {_esc(_format_date(booking.get('preferred_date')))}</p>"
        f"<p><strong>Preferred Time:</strong> {_esc(booking.get('preferred_time'))}</p>"
        f"{message_html}"
        "</div>"
        f"{_submitted_line()}"
        '<p style="color: #666; font-size: 14px;">'
        "Please respond to this booking request as soon as possible to provide excellent customer service."
        "</p>"
        "</div>"
    )


def review_email_html(review: Mapping[str, Any]) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<h2 style="color: #006400;">New Customer Review</h2>'
        '<div style="background-color: #f9f9f9; padding: 20px; border-radius: 8px; margin: 20px 0;">'
        '<h3 style="color: #333; margin-top: 0;">Review Details</h3>'
        f"<p><strong>Customer:</strong> {_esc(review.get('client_name'))}</p>"
        f"<p><strong>Rating:</strong> {_esc(review.get('rating'))}/5 stars</p>"
        '<div style="margin: 15px 0;"><strong>Review:</strong>'
        '<div style="background-color: white; padding: 15px; border-radius: 5px; margin-top: 5px;">'
        f"&quot;{_esc(review.get('review_text'))}&quot;"
        "</div></div>"
        "</div>"
        f"{_submitted_line()}"
        '<p style="color: #666; font-size: 14px;">'
        "Please review and approve this testimonial in your admin panel."
        "</p>"
        "</div>"
    )


class EmailNotifier:
    """Sends admin notification emails through Resend."""

    def __init__(self, config: ResendConfig, client: Optional[httpx.Client] = None):
        self.config = config
        self.client = client or httpx.Client(timeout=config.timeout)

    def close(self) -> None:
        self.client.close()

    def send_email(self, subject: str, html_body: str) -> NotificationResult:
        """Single POST to Resend. Failures come back as a result, never raised."""
        if not self.config.api_key:
            logger.warning("Resend API key not configured. Skipping email notification.")
            return NotificationResult(success=False, error="API key not configured")

        try:
            response = self.client.post(
                RESEND_API_URL,
                headers={
                    "Authorization": f"Bearer {self.config.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": f"{SENDER_NAME} <{self.config.from_email}>",
                    "to": [self.config.to_email],
                    "subject": subject,
                    "html": html_body,
                },
            )
            if response.is_error:
                raise RuntimeError(f"Email API error: {response.status_code}")

            result = response.json()
            message_id = result.get("id") if isinstance(result, dict) else None
            logger.info("Email sent successfully: %s", message_id)
            return NotificationResult(success=True, id=message_id)

        except (httpx.HTTPError, RuntimeError, ValueError) as e:
            logger.error("Error sending email '%s': %s", subject, e)
            return NotificationResult(success=False, error=str(e))

    def send_booking_notification(self, booking: Mapping[str, Any]) -> NotificationResult:
        return self.send_email("New Service Booking Request", booking_email_html(booking))

    def send_review_notification(self, review: Mapping[str, Any]) -> NotificationResult:
        return self.send_email("New Customer Review Submitted", review_email_html(review))
