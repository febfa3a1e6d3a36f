from email.message import EmailMessage
from typing import Dict
import logging
import smtplib
import ssl

from inkbook.config import smtp_config
from inkbook.notifications.message import format_booking_message, format_subject

NAME = "email"

logger = logging.getLogger(__name__)


def is_configured() -> bool:
    config = smtp_config()
    return bool(config["user"] and config["password"] and config["recipient"])


def build_message(booking: Dict, sender: str, recipient: str) -> EmailMessage:
    msg = EmailMessage()
    msg.set_content(format_booking_message(booking))
    msg["Subject"] = format_subject(booking)
    msg["From"] = sender
    msg["To"] = recipient
    if booking.get("email"):
        msg["Reply-To"] = booking["email"]
    return msg


def send(booking: Dict) -> None:
    config = smtp_config()
    if not is_configured():
        raise ValueError("SMTP_USER and SMTP_PASSWORD are missing in .env")

    msg = build_message(booking, config["user"], config["recipient"])
    context = ssl.create_default_context()

    # 465 is implicit TLS (Gmail); anything else negotiates STARTTLS
    if config["port"] == 465:
        server = smtplib.SMTP_SSL(config["host"], config["port"], context=context, timeout=config["timeout"])
    else:
        server = smtplib.SMTP(config["host"], config["port"], timeout=config["timeout"])
        server.starttls(context=context)
    with server:
        server.login(config["user"], config["password"])
        server.send_message(msg)

    logger.info("Emailed booking %s to %s", booking.get("id"), config["recipient"])
