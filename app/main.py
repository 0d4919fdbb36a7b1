# app/main.py
from __future__ import annotations

import re
import time
import uuid
import logging
from contextlib import asynccontextmanager
from typing import List, Optional, Tuple

import uvicorn
from fastapi import FastAPI, Depends, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy import text
from sqlalchemy.orm import Session

from alembic.config import Config as AlembicConfig
from alembic.script import ScriptDirectory

from app.core.errors import CatalogError, endpoint_failure_message
from app.core.logging import setup_logging
from app.core.settings import settings
from app.database import (
    DATABASE_URL,
    DEFAULT_SCHEMA,
    SessionLocal,
    dispose_engine,
    get_db,
    init_db_if_requested,
    mask_url,
)
from app.routers.product import router as products_router
from app.routers.category import router as categories_router

# --- Logging ---
setup_logging(settings.LOG_LEVEL.upper())
logger = logging.getLogger("catalog-api")

APP_STARTED_TS = int(time.time())

OPENAPI_URL = None if settings.DISABLE_DOCS else "/openapi.json"
DOCS_URL = None if settings.DISABLE_DOCS else "/docs"
REDOC_URL = None if settings.DISABLE_DOCS else "/redoc"

tags_metadata = [
    {"name": "health", "description": "Liveness/Readiness checks"},
    {"name": "products", "description": "Product CRUD & status toggle"},
    {"name": "categories", "description": "Distinct categories & sub-categories"},
]

# --- Utilitare ---
_ident_re = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

def _safe_ident(name: str, fallback: str) -> str:
    if _ident_re.fullmatch(name or ""):
        return name
    logger.warning("Invalid SQL identifier from env: %r. Using fallback: %r", name, fallback)
    return fallback

ALEMBIC_VERSION_TABLE = _safe_ident(settings.ALEMBIC_VERSION_TABLE, "alembic_version")

def _get_req_id_from_headers(request: Request) -> str:
    # Prefer X-Request-ID, apoi X-Correlation-ID; dacă lipsesc, generează unul.
    return (
        request.headers.get("x-request-id")
        or request.headers.get("x-correlation-id")
        or uuid.uuid4().hex[:12]
    )

# --- Middleware func (registered after app is created) ---
async def request_context_mw(request: Request, call_next):
    """
    - Generează/propagă X-Request-ID
    - Aplică headers de securitate de bază
    - Server-Timing / X-Process-Time
    """
    req_id = _get_req_id_from_headers(request)

    start = time.perf_counter()
    response: Response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000

    response.headers.setdefault("X-Request-ID", req_id)
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("Cache-Control", "no-store")
    response.headers.setdefault("X-App-Version", settings.APP_VERSION)
    response.headers.setdefault("Server-Timing", f"app;dur={duration_ms:.1f}")
    response.headers.setdefault("X-Process-Time", f"{duration_ms:.1f}ms")
    return response

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: tabele (opțional), sanity check DB, heads Alembic
    try:
        if init_db_if_requested():
            logger.info("SQLALCHEMY_CREATE_ALL=1: tables created from models")
        with SessionLocal() as db:
            db.execute(text("SELECT 1"))
        logger.info(
            "DB startup check OK (url=%s, schema=%s)", mask_url(DATABASE_URL), DEFAULT_SCHEMA or "-"
        )
    except Exception:
        logger.exception("DB startup check FAILED")

    try:
        heads = _get_pkg_alembic_heads()
        logger.info("Alembic heads: %s", heads or [])
    except Exception as e:
        logger.warning("Nu pot obține Alembic heads (%s): %s", settings.ALEMBIC_CONFIG, e)

    logger.info("Server ready (env=%s, port=%s, api prefix=%s)", settings.APP_ENV, settings.PORT, settings.API_PREFIX)
    yield

    # Shutdown: eliberează pool-ul de conexiuni
    dispose_engine()
    logger.info("Connection pool disposed")

# --- App factory (create app BEFORE registering middleware) ---
app = FastAPI(
    title=settings.APP_TITLE,
    version=settings.APP_VERSION,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    root_path=settings.ROOT_PATH or "",
    docs_url=DOCS_URL,
    redoc_url=REDOC_URL,
    openapi_url=OPENAPI_URL,
)

app.middleware("http")(request_context_mw)
app.add_middleware(GZipMiddleware, minimum_size=1024)

# CORS din env: CORS_ORIGINS="*" (implicit) sau "http://localhost:3000,https://example.com"
_origins = settings.cors_origins
if _origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins,
        allow_credentials="*" not in _origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Server-Timing", "X-Process-Time", "X-App-Version"],
    )

# --- Exception handlers ---
@app.exception_handler(CatalogError)
async def _catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message},
        headers={"X-Request-ID": _get_req_id_from_headers(request)},
    )

@app.exception_handler(RequestValidationError)
async def _validation_handler(request: Request, exc: RequestValidationError):
    # Rutele de catalog nu expun 422: body/path invalid -> mesajul generic al endpoint-ului
    message = endpoint_failure_message(request.scope.get("endpoint"))
    if message:
        logger.warning("%s: invalid request %s %s: %s", message, request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": message},
            headers={"X-Request-ID": _get_req_id_from_headers(request)},
        )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": exc.errors()},
        headers={"X-Request-ID": _get_req_id_from_headers(request)},
    )

# Prinde 404/405 Starlette și răspunde JSON unitar
@app.exception_handler(StarletteHTTPException)
async def _starlette_http_exc_handler(request: Request, exc: StarletteHTTPException):
    headers = dict(exc.headers or {})
    headers.setdefault("X-Request-ID", _get_req_id_from_headers(request))
    detail = exc.detail
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        detail = {"message": "Not Found", "path": str(request.url.path)}
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        detail = {"message": "Method Not Allowed", "path": str(request.url.path)}
    return JSONResponse(status_code=exc.status_code, content={"detail": detail}, headers=headers)

@app.exception_handler(Exception)
async def _unhandled_exc_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
        headers={"X-Request-ID": _get_req_id_from_headers(request)},
    )

# --- Helpers Alembic/health ---
def _get_db_alembic_version(db: Session) -> Tuple[Optional[str], bool]:
    table = f'"{DEFAULT_SCHEMA}"."{ALEMBIC_VERSION_TABLE}"' if DEFAULT_SCHEMA else f'"{ALEMBIC_VERSION_TABLE}"'
    try:
        version = db.execute(text(f"SELECT version_num FROM {table}")).scalar_one_or_none()
        return version, True
    except Exception:
        db.rollback()
        return None, False

def _get_pkg_alembic_heads() -> List[str]:
    cfg = AlembicConfig(settings.ALEMBIC_CONFIG)
    script = ScriptDirectory.from_config(cfg)
    return list(script.get_heads())

# --- Routes: health ---
@app.get("/", tags=["health"])
def root():
    return {"name": settings.APP_TITLE, "version": settings.APP_VERSION}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}

@app.get("/health/db", tags=["health"])
def health_db(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        return {"status": "ok", "db": "up", "dialect": db.get_bind().dialect.name}
    except Exception:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="DB not ready")

@app.get("/health/migrations", tags=["health"])
def health_migrations(db: Session = Depends(get_db)):
    version, present = _get_db_alembic_version(db)
    return {"alembic_version": version, "present": present, "started_at": APP_STARTED_TS}

# --- Routers ---
app.include_router(products_router, prefix=settings.API_PREFIX)
app.include_router(categories_router, prefix=settings.API_PREFIX)


def run() -> None:  # pragma: no cover - exercised in deployment
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":  # pragma: no cover
    run()
