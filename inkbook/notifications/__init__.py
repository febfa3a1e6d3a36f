"""
Owner notifications for new bookings.

Every configured channel is tried on its own; a failing channel is logged
and reported, never raised, so a booking is stored whatever happens here.
"""
from typing import Dict, Iterable, Optional
import logging

from inkbook.notifications import formspree, mail
from inkbook.notifications.message import format_booking_message

logger = logging.getLogger(__name__)

CHANNELS = {
    formspree.NAME: formspree,
    mail.NAME: mail,
}

SENT = "sent"
SKIPPED = "skipped"
FAILED = "failed"


def notify_new_booking(booking: Dict, channels: Optional[Iterable] = None) -> Dict[str, str]:
    results = {}
    for channel in channels if channels is not None else CHANNELS.values():
        if not channel.is_configured():
            results[channel.NAME] = SKIPPED
            continue
        try:
            channel.send(booking)
            results[channel.NAME] = SENT
        except Exception:
            logger.exception("Notification via %s failed for booking %s", channel.NAME, booking.get("id"))
            results[channel.NAME] = FAILED
    return results


__all__ = ["CHANNELS", "notify_new_booking", "format_booking_message"]
