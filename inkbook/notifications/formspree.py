from typing import Dict
import logging

import httpx

from inkbook.config import formspree_config
from inkbook.notifications.message import booking_fields, format_subject

NAME = "formspree"

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    return bool(formspree_config()["form_id"])


def send(booking: Dict) -> None:
    config = formspree_config()
    form_id = config["form_id"]
    if not form_id:
        raise ValueError("FORMSPREE_FORM_ID is missing in .env")

    payload = booking_fields(booking)
    payload["_subject"] = format_subject(booking)
    if booking.get("email"):
        payload["_replyto"] = booking["email"]

    with httpx.Client(timeout=config["timeout"]) as client:
        response = client.post(
            f"{config['base_url'].rstrip('/')}/{form_id}",
            json=payload,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()

    logger.info("Relayed booking %s through Formspree", booking.get("id"))
