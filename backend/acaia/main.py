"""
FastAPI application entry point
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from acaia.config import settings
from acaia.db.database import Base, engine
from acaia.exceptions import AcaiaError
from acaia.logging_config import configure_logging
from acaia.middleware.request_log import RequestLogMiddleware

# Import all models so their tables are registered
import acaia.models  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")
    yield


app = FastAPI(
    title="Acaia POS API",
    description="Point-of-sale backend for the Acaia venue",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


@app.exception_handler(AcaiaError)
async def acaia_error_handler(request: Request, exc: AcaiaError):
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Request validation errors are reported as 400 with the first failing field"""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else first.get("msg")
    else:
        message = "Invalid request"
    return error_response(400, f"Invalid request data - {message}")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Unhandled errors still return the JSON error envelope"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, f"Internal server error: {exc}")


@app.get("/")
async def root():
    return {"message": "Acaia POS API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Health check"""
    return {"status": "ok"}


# API routes
from acaia.api import (  # noqa: E402
    auth, clients, financials, inventory, products, reports, sales, seating_areas, staff, visits
)

app.include_router(auth.router)
app.include_router(sales.router)
app.include_router(visits.router)
app.include_router(seating_areas.router)
app.include_router(seating_areas.menu_router)
app.include_router(products.router)
app.include_router(inventory.router)
app.include_router(clients.router)
app.include_router(staff.router)
app.include_router(financials.router)
app.include_router(reports.router)
