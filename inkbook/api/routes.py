"""
Booking API routes for InkBook.

Provides endpoints for:
- Creating bookings from the public booking form
- Listing, fetching, updating and deleting bookings (studio side)

Creation is always public. When ADMIN_TOKEN is set, everything else
requires a matching X-Admin-Token header.
"""
import secrets
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, HTTPException, Query

from inkbook.config import app_config
from inkbook.errors import BookingNotFound, PastDateError
from inkbook.models import (
    BOOKING_STATUSES, Booking, BookingCreate, BookingResponse, BookingUpdate,
    DeleteResponse, changed_fields, is_past, normalize_date,
)
from inkbook.notifications import notify_new_booking
from inkbook.store import BookingStore, get_store


router = APIRouter(prefix="/api/bookings", tags=["bookings"])


def require_admin(x_admin_token: Optional[str] = Header(None)):
    """Dependency guarding the studio-side endpoints."""
    token = app_config()["admin_token"]
    if token and not secrets.compare_digest((x_admin_token or "").encode("utf-8"), token.encode("utf-8")):
        raise HTTPException(status_code=401, detail="Admin token required")


def check_date(booking_date: Optional[str]) -> None:
    if booking_date and not app_config()["allow_past_dates"] and is_past(booking_date):
        raise PastDateError(booking_date)


@router.get("", response_model=List[Booking], dependencies=[Depends(require_admin)])
async def list_bookings(
    status: Optional[str] = Query(None, description="Filter by status (pending, confirmed, cancelled)"),
    date: Optional[str] = Query(None, description="Filter by date (YYYY-MM-DD)"),
    store: BookingStore = Depends(get_store),
):
    """Get all bookings, oldest first"""
    if status is not None and status not in BOOKING_STATUSES:
        raise HTTPException(status_code=400, detail=f"Unknown status: {status}")
    if date is not None:
        try:
            date = normalize_date(date)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
    return store.list_bookings(status=status, date=date)


@router.post("", response_model=BookingResponse)
async def create_booking(
    request: BookingCreate,
    background_tasks: BackgroundTasks,
    store: BookingStore = Depends(get_store),
):
    """
    Save a new booking.
    The studio owner is notified after the response is sent.
    """
    check_date(request.date)
    booking = store.add_booking(request.model_dump())
    background_tasks.add_task(notify_new_booking, booking)
    return BookingResponse(booking=Booking(**booking))


@router.get("/{booking_id}", response_model=Booking, dependencies=[Depends(require_admin)])
async def get_booking(booking_id: str, store: BookingStore = Depends(get_store)):
    """Get a specific booking by ID"""
    booking = store.get_booking(booking_id)
    if not booking:
        raise BookingNotFound(booking_id)
    return booking


@router.put("/{booking_id}", response_model=BookingResponse, dependencies=[Depends(require_admin)])
@router.patch("/{booking_id}", response_model=BookingResponse, dependencies=[Depends(require_admin)])
async def update_booking(
    booking_id: str,
    request: BookingUpdate,
    store: BookingStore = Depends(get_store),
):
    """Change some fields of a booking, e.g. confirm it or move it"""
    changes = changed_fields(request)
    check_date(changes.get("date"))
    booking = store.update_booking(booking_id, changes)
    if booking is None:
        raise BookingNotFound(booking_id)
    return BookingResponse(booking=Booking(**booking))


@router.delete("/{booking_id}", response_model=DeleteResponse, dependencies=[Depends(require_admin)])
async def delete_booking(booking_id: str, store: BookingStore = Depends(get_store)):
    """Delete a booking"""
    if not store.delete_booking(booking_id):
        raise BookingNotFound(booking_id)
    return DeleteResponse(deleted=booking_id)
