# app/database.py
from __future__ import annotations

import os
import re
from typing import Generator, List, Optional

from dotenv import load_dotenv
from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

# Încarcă variabilele din .env (pe host). În container vin din environment.
load_dotenv()

# -----------------------------
# Helpers
# -----------------------------
def _env_bool(key: str, default: bool = False) -> bool:
    val = os.getenv(key)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on"}

def mask_url(url: str) -> str:
    """Ascunde parola din DSN pentru loguri."""
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" not in rest or ":" not in rest.split("@", 1)[0]:
        return url
    creds, tail = rest.split("@", 1)
    user = creds.split(":", 1)[0]
    return f"{scheme}://{user}:***@{tail}"

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

def _sanitize_schema(raw: str) -> Optional[str]:
    """
    Acceptă doar un identificator ne-citat (ex. 'catalog').
    Gol sau invalid -> None (tabelele rămân în schema implicită a conexiunii).
    """
    raw = (raw or "").strip()
    if not raw or not _IDENT_RE.fullmatch(raw):
        return None
    return raw

# -----------------------------
# Config din environment
# -----------------------------
DATABASE_URL = (os.getenv("DATABASE_URL", "sqlite:///./catalog.db") or "").strip()
if not DATABASE_URL:
    raise RuntimeError("DATABASE_URL este gol. Setează o valoare validă.")

IS_SQLITE = DATABASE_URL.startswith("sqlite")

# SQLite nu are scheme; pe Postgres tabela `products` stă în schema conexiunii
# dacă DB_SCHEMA nu e setat.
DEFAULT_SCHEMA: Optional[str] = None if IS_SQLITE else _sanitize_schema(os.getenv("DB_SCHEMA", ""))

# Logs SQL la nevoie: DB_ECHO=1 / true / yes / on
ECHO_SQL = _env_bool("DB_ECHO", False)

PG_STATEMENT_TIMEOUT_MS = (os.getenv("DB_STATEMENT_TIMEOUT_MS") or "").strip()  # ex: "30000"
PG_APP_NAME = (os.getenv("DB_APPLICATION_NAME") or "").strip()

# Pooling
POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "5"))
MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", "10"))
POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "1800"))  # sec (30 min)
POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "30"))    # sec
POOL_USE_LIFO = _env_bool("DB_POOL_LIFO", True)

# Dacă rulezi prin pgbouncer (transaction pooling), de obicei vrei NullPool:
USE_NULLPOOL = _env_bool("DB_USE_NULLPOOL", False)

DISABLE_PRE_PING = _env_bool("DB_DISABLE_PRE_PING", False)

# -----------------------------
# Naming convention pentru Alembic/op.f()
# -----------------------------
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(schema=DEFAULT_SCHEMA, naming_convention=NAMING_CONVENTION)
Base = declarative_base(metadata=metadata)

# -----------------------------
# Engine factory
# -----------------------------
def _build_engine_kwargs() -> dict:
    kwargs: dict = {
        "echo": ECHO_SQL,
        "pool_pre_ping": not DISABLE_PRE_PING,
    }

    if IS_SQLITE:
        # SQLite: single-thread în driver → dezactivează check_same_thread
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory → StaticPool (altfel fiecare conexiune are DB separat)
        if DATABASE_URL in {"sqlite://", "sqlite:///:memory:", "sqlite+pysqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
        else:
            kwargs["poolclass"] = NullPool
        return kwargs

    # Postgres / MySQL
    if USE_NULLPOOL:
        kwargs["poolclass"] = NullPool
    else:
        kwargs.update(
            {
                "pool_size": POOL_SIZE,
                "max_overflow": MAX_OVERFLOW,
                "pool_recycle": POOL_RECYCLE,
                "pool_timeout": POOL_TIMEOUT,
                "pool_use_lifo": POOL_USE_LIFO,
            }
        )

    # ---- Postgres: libpq options (NU ca statements) ----
    pg_options = []
    if DEFAULT_SCHEMA:
        pg_options.append(f"-c search_path={DEFAULT_SCHEMA},public")
    if PG_STATEMENT_TIMEOUT_MS.isdigit():
        pg_options.append(f"-c statement_timeout={PG_STATEMENT_TIMEOUT_MS}")

    if pg_options or PG_APP_NAME:
        kwargs["connect_args"] = {}
    if pg_options:
        kwargs["connect_args"]["options"] = " ".join(pg_options)
    if PG_APP_NAME:
        kwargs["connect_args"]["application_name"] = PG_APP_NAME

    return kwargs

# Pool-ul de conexiuni: unic per proces, creat la import, eliberat la shutdown.
engine: Engine = create_engine(DATABASE_URL, **_build_engine_kwargs())

# -----------------------------
# Session factory
# -----------------------------
# expire_on_commit=False → rândurile returnate rămân serializabile după commit
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency pentru o sesiune SQLAlchemy închisă garantat.
    Face rollback automat dacă apare o excepție în request handler.
    """
    db: Session = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def init_db_if_requested() -> bool:
    """
    Opțional: creează tabelele din modele când SQLALCHEMY_CREATE_ALL=1.
    Util în dev/teste; în producție folosește Alembic.
    """
    if not _env_bool("SQLALCHEMY_CREATE_ALL", False):
        return False
    from app import models  # noqa: F401
    Base.metadata.create_all(bind=engine)
    return True

def dispose_engine() -> None:
    engine.dispose()

__all__: List[str] = [
    "engine",
    "SessionLocal",
    "Base",
    "get_db",
    "init_db_if_requested",
    "dispose_engine",
    "mask_url",
]
