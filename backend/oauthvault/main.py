# oauthvault/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import cors_origins, log_level
from .crypto import get_codec
from .db import pool
from .logging_config import setup_logging
from .routes import router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(log_level())
    # A malformed ENCRYPTION_KEY raises ConfigurationError here and the app refuses to start
    get_codec()
    pool.open()
    logger.info("oauthvault started")
    try:
        yield
    finally:
        pool.close()


app = FastAPI(title="oauthvault", lifespan=lifespan)

# ---------- CORS ----------
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins(),         # explicit origins (no "*")
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "X-API-Key"],
)


@app.exception_handler(Exception)
async def unhandled_exception(request: Request, exc: Exception):
    """Log and return a generic 500; details stay in the logs."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ---------- Health ----------
@app.get("/health")
def health():
    # Simple DB round-trip to prove connectivity and time source
    with pool.connection() as conn, conn.cursor() as cur:
        cur.execute("select now()")
        return {"status": "ok", "db_time_utc": cur.fetchone()[0].isoformat()}


@app.get("/healthz")
def healthz():
    # Alias commonly used by probes
    return health()


app.include_router(router)
