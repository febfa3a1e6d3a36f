"""
Shared fixtures: a store backed by a temporary JSON file and an API client
wired to it, with every notification channel and the admin guard switched off.
"""
from datetime import date, timedelta

import pytest
from fastapi.testclient import TestClient

from inkbook.main import app
from inkbook.store import BookingStore, get_store, reset_store


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "ADMIN_TOKEN", "ALLOW_PAST_DATES", "MAX_BODY_BYTES", "MAX_IMAGE_CHARS",
        "FORMSPREE_FORM_ID", "SMTP_USER", "SMTP_PASSWORD", "NOTIFY_EMAIL", "SMTP_PORT",
    ):
        monkeypatch.delenv(key, raising=False)
    yield
    reset_store()


@pytest.fixture
def bookings_file(tmp_path):
    return tmp_path / "data" / "bookings.json"


@pytest.fixture
def store(bookings_file):
    return BookingStore(bookings_file)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def future_date():
    return (date.today() + timedelta(days=30)).isoformat()


@pytest.fixture
def payload(future_date):
    return {
        "name": "  ana   lopez ",
        "phone": "+34 (612) 345-678",
        "email": "Ana@Example.COM",
        "date": future_date,
        "time": "9:30",
        "style": "fine   line",
        "placement": "forearm",
        "description": "Small swallow",
    }
