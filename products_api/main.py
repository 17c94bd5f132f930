# products_api/main.py

"""
FastAPI Products REST API.
Creates, lists, fetches, updates, toggles availability of and deletes
products. Routes live in `router.py`; this module wires logging,
configuration, CORS, database startup and error handling around them.
Interactive API docs are served at /docs.
"""
import os
import logging
import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from .db import Base, engine
from .middleware import log_requests, register_error_handlers, reject_foreign_origins
from .router import router

# -----------------------------
# Configure Logging
# -----------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

# Load environment variables
FRONTEND_URL = os.getenv("FRONTEND_URL")
DB_CONNECT_MAX_RETRIES = int(os.getenv("DB_CONNECT_MAX_RETRIES", "10"))
DB_CONNECT_RETRY_DELAY = float(os.getenv("DB_CONNECT_RETRY_DELAY", "5"))

if FRONTEND_URL:
    logger.info(f"Products API: accepting cross-origin requests from {FRONTEND_URL}")
else:
    logger.info("Products API: FRONTEND_URL **NOT SET**, cross-origin requests are refused")


def connect_db(
    max_retries: int = DB_CONNECT_MAX_RETRIES,
    retry_delay_seconds: float = DB_CONNECT_RETRY_DELAY,
) -> bool:
    """
    Ensures database tables exist, retrying while the database is unreachable.
    Returns False when every attempt failed.
    """
    for i in range(max_retries):
        try:
            logger.info(
                f"Attempting to connect to the database and create tables (attempt {i+1}/{max_retries})..."
            )
            Base.metadata.create_all(bind=engine)
            logger.info("Successfully connected to the database and ensured tables exist.")
            return True
        except OperationalError as e:
            logger.warning(f"Failed to connect to the database: {e}")
            if i < max_retries - 1:
                logger.info(f"Retrying in {retry_delay_seconds} seconds...")
                time.sleep(retry_delay_seconds)
        except Exception as e:
            logger.critical(
                f"An unexpected error occurred during database startup: {e}",
                exc_info=True,
            )
            return False
    logger.critical(
        f"Error al conectar con la base de datos after {max_retries} attempts."
    )
    return False


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not connect_db():
        sys.exit(1)  # Critical failure: exit if DB connection is unavailable
    yield


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(
    title="REST API Python / FastAPI",
    description="API docs for products",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Products", "description": "API operations related to products"}
    ],
)

# Only the configured frontend may call the API from a browser
app.add_middleware(
    CORSMiddleware,
    allow_origins=[FRONTEND_URL] if FRONTEND_URL else [],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(reject_foreign_origins(FRONTEND_URL))
app.middleware("http")(log_requests)

register_error_handlers(app)
app.include_router(router)


@app.get("/api", status_code=status.HTTP_200_OK, summary="API root")
async def read_api_root():
    return {"msg": "Desde API"}


# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
async def health_check():
    """
    A simple health check endpoint to verify the service is running.
    Returns 200 OK if the service is alive.
    """
    return {"status": "ok", "service": "product-service"}
