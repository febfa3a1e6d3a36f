import logging
import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


load_dotenv()

PACKAGE_DIR = Path(__file__).resolve().parent
MEMORY_STORE = ":memory:"


def get_env(key: str, default: str = "") -> str:
    return os.getenv(key, default).strip()


def get_bool(key: str, default: bool = False) -> bool:
    value = get_env(key)
    if not value:
        return default
    return value.lower() in ("1", "true", "yes", "on")


def get_int(key: str, default: int) -> int:
    value = get_env(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {value!r}")


def bookings_path() -> Optional[Path]:
    """Location of the bookings file, or None when bookings live in memory only."""
    value = get_env("BOOKINGS_FILE")
    if value == MEMORY_STORE:
        return None
    if not value:
        return PACKAGE_DIR / "data" / "bookings.json"
    return Path(value)


def static_dir() -> Path:
    value = get_env("STATIC_DIR")
    return Path(value).resolve() if value else PACKAGE_DIR / "static"


def app_config() -> dict:
    return {
        "max_body_bytes": get_int("MAX_BODY_BYTES", 1024 * 1024),
        "max_image_chars": get_int("MAX_IMAGE_CHARS", 700_000),
        "allow_past_dates": get_bool("ALLOW_PAST_DATES"),
        "admin_token": get_env("ADMIN_TOKEN"),
        "cors_origins": cors_origins(),
    }


def cors_origins() -> List[str]:
    raw = get_env("CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


def server_config() -> dict:
    return {
        "host": get_env("HOST", "0.0.0.0"),
        "port": get_int("PORT", 3000),
    }


def formspree_config() -> dict:
    return {
        "form_id": get_env("FORMSPREE_FORM_ID"),
        "base_url": get_env("FORMSPREE_BASE_URL", "https://formspree.io/f"),
        "timeout": float(get_env("FORMSPREE_TIMEOUT", "10")),
    }


def smtp_config() -> dict:
    user = get_env("SMTP_USER")
    return {
        "host": get_env("SMTP_HOST", "smtp.gmail.com"),
        "port": get_int("SMTP_PORT", 465),
        "user": user,
        "password": get_env("SMTP_PASSWORD"),
        "recipient": get_env("NOTIFY_EMAIL", user),
        "timeout": float(get_env("SMTP_TIMEOUT", "30")),
    }


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or get_env("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
