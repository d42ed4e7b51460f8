"""Public form submissions: persist first, then notify the admin in the background."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping

from app.notifications import EmailNotifier, NotificationResult
from db.models import BOOKINGS, TESTIMONIALS
from db.store import DataStore, WriteResult

logger = logging.getLogger(__name__)


@dataclass
class Submission:
    result: WriteResult
    notification: "Future[NotificationResult]"


class SubmissionService:
    def __init__(self, store: DataStore, notifier: EmailNotifier, max_workers: int = 2):
        self.store = store
        self.notifier = notifier
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def _dispatch(
        self,
        send: Callable[[Mapping[str, Any]], NotificationResult],
        data: Dict[str, Any],
        label: str,
    ) -> "Future[NotificationResult]":
        future = self._executor.submit(send, data)

        def _log_outcome(f: "Future[NotificationResult]") -> None:
            error = f.exception()
            if error is not None:
                logger.error("%s notification failed: %s", label, error)
            elif not f.result().success:
                logger.warning("%s notification not delivered: %s", label, f.result().error)

        future.add_done_callback(_log_outcome)
        return future

    def submit_booking(self, booking: Mapping[str, Any]) -> Submission:
        data = dict(booking)
        result = self.store.insert(BOOKINGS, {**data, "status": "pending"})
        future = self._dispatch(self.notifier.send_booking_notification, data, "Booking")
        return Submission(result=result, notification=future)

    def submit_testimonial(self, testimonial: Mapping[str, Any]) -> Submission:
        data = dict(testimonial)
        result = self.store.insert(TESTIMONIALS, {**data, "status": "pending"})
        future = self._dispatch(self.notifier.send_review_notification, data, "Review")
        return Submission(result=result, notification=future)
