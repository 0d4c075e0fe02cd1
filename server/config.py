# config.py
import os
from dotenv import load_dotenv
load_dotenv()

from concurrent.futures import ThreadPoolExecutor

import logging
from logging_utils import configure_logging

configure_logging()
logger = logging.getLogger("pairings.config")

MAX_WORKERS = int(os.getenv("PAIRINGS_MAX_WORKERS", str(min(8, (os.cpu_count() or 4)))))
thread_pool = ThreadPoolExecutor(max_workers=MAX_WORKERS)

MAX_UPLOAD_MB = int(os.getenv("PAIRINGS_MAX_UPLOAD_MB", "25"))
MAX_UPLOAD_BYTES = MAX_UPLOAD_MB * 1024 * 1024

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "PAIRINGS_CORS_ORIGINS",
        "http://localhost:8001,http://127.0.0.1:8001",
    ).split(",")
    if origin.strip()
]

HOST = os.getenv("PAIRINGS_HOST", "0.0.0.0")
PORT = int(os.getenv("PAIRINGS_PORT", "8001"))

# Shortest run of "=" treated as a pairing separator line
SEPARATOR_MIN_RUN = int(os.getenv("PAIRINGS_SEPARATOR_MIN_RUN", "10"))

logger.info(
    f"Config: workers={MAX_WORKERS}, max_upload_mb={MAX_UPLOAD_MB}, separator_min_run={SEPARATOR_MIN_RUN}"
)
