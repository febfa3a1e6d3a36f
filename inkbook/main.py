"""
InkBook API
Main FastAPI application
"""
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import HTMLResponse, JSONResponse
import uvicorn

from inkbook.api.routes import router as bookings_router
from inkbook.config import app_config, configure_logging, server_config, static_dir
from inkbook.errors import BookingError
from inkbook.models import HealthResponse
from inkbook.store import BookingStore, get_store

logger = logging.getLogger(__name__)

app = FastAPI(
    title="InkBook",
    description="Booking API for a tattoo studio",
    version="1.0.0"
)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject oversized payloads before the body is read"""
    limit = app_config()["max_body_bytes"]
    length = request.headers.get("content-length")
    if length and length.isdigit() and int(length) > limit:
        logger.warning("Rejected %s %s: %s bytes exceeds %d", request.method, request.url.path, length, limit)
        return JSONResponse(
            status_code=413,
            content={"detail": f"Payload too large (limit {limit} bytes)"},
        )
    return await call_next(request)


# CORS middleware for frontend, outermost so 413 responses carry its headers
app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config()["cors_origins"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Static files
STATIC_DIR = static_dir()
if STATIC_DIR.exists():
    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(bookings_router)


@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


@app.get("/", response_class=HTMLResponse)
async def root():
    """Serve the booking page"""
    index_path = STATIC_DIR / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    return HTMLResponse(content="<h1>InkBook API is running</h1><p>Static files not found.</p>", status_code=200)


@app.get("/health", response_model=HealthResponse)
async def health(store: BookingStore = Depends(get_store)):
    """Health check endpoint"""
    return HealthResponse(bookings=store.count())


def run(host: str = None, port: int = None, reload: bool = False) -> None:
    config = server_config()
    configure_logging()
    uvicorn.run(
        "inkbook.main:app",
        host=host or config["host"],
        port=port or config["port"],
        reload=reload,
    )


if __name__ == "__main__":
    run()
