from __future__ import annotations

import asyncio
import contextvars
import functools as _functools
import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, UploadFile, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from config import CORS_ORIGINS, MAX_UPLOAD_BYTES, MAX_UPLOAD_MB, MAX_WORKERS, thread_pool
from logging_utils import configure_logging, log_event, new_request_id
from models import Pairing
from pipeline import PairingPipeline

# ------------------------------------------------------------------------------
# APP + LOGGING SETUP
# ------------------------------------------------------------------------------

configure_logging()
logger = logging.getLogger("pairings.api")

app = FastAPI(title="Pairings", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

logger.info(
    "Config: workers=%s, max_upload_mb=%s",
    MAX_WORKERS,
    MAX_UPLOAD_MB,
)

pipeline = PairingPipeline()


# ------------------------------------------------------------------------------
# RESPONSE MODELS
# ------------------------------------------------------------------------------

class PairingsResponse(BaseModel):
    document: str
    month: str
    year: str
    codeshare: str
    total_pairings: int
    pairings: List[Pairing]
    recoveries: int
    processing_time: Dict[str, float]
    metadata: Dict[str, Any]


# ------------------------------------------------------------------------------
# MIDDLEWARE
# ------------------------------------------------------------------------------

@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    rid = new_request_id()
    start = time.time()

    log_event(
        logger,
        "http_request_started",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        request_id=rid,
    )

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = int((time.time() - start) * 1000)
        log_event(
            logger,
            "http_request_finished",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=duration_ms,
            request_id=rid,
        )


def _is_pdf(file_bytes: bytes, content_type: Optional[str]) -> bool:
    """
    Check if file is PDF via MIME type or magic bytes.
    """
    if content_type and "pdf" in content_type.lower():
        return True
    return file_bytes[:4] == b"%PDF"


# ------------------------------------------------------------------------------
# ROUTES
# ------------------------------------------------------------------------------

@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "version": app.version,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@app.post("/pairings", response_model=PairingsResponse)
async def parse_pairings(file: UploadFile = File(...)):
    """
    Parse a monthly pairings document, uploaded as a PDF or as its extracted text.
    """
    overall_start = time.time()
    name = file.filename or "upload"

    log_event(
        logger,
        "file_processing_started",
        field_filename=name,
        content_type=file.content_type,
    )

    file_bytes = await file.read()
    if not file_bytes:
        raise HTTPException(400, "Empty file")
    if len(file_bytes) > MAX_UPLOAD_BYTES:
        raise HTTPException(413, f"File larger than {MAX_UPLOAD_MB} MB")

    is_pdf_file = _is_pdf(file_bytes, file.content_type)
    if is_pdf_file:
        log_event(logger, "pdf_detected", field_filename=name)
        result = await pipeline.parse_pdf(file_bytes, name)
    else:
        text = file_bytes.decode("utf-8", errors="replace")
        result = await asyncio.get_running_loop().run_in_executor(
            thread_pool,
            # Carry the request id into the worker thread
            _functools.partial(contextvars.copy_context().run, pipeline.parse_text, text, name),
        )

    if not result.ok:
        failure = result.error
        log_event(
            logger,
            "document_rejected",
            level=logging.WARNING,
            field_filename=name,
            pairing_id=failure.pairing_id,
            failed_field=failure.field,
        )
        raise HTTPException(
            status_code=422,
            detail={
                "file": name,
                "pairing_id": failure.pairing_id,
                "field": failure.field,
                "expected": failure.expected,
                "found": failure.found,
                "message": failure.message,
            },
        )

    processing_time = dict(result.processing_time)
    processing_time["total_request"] = time.time() - overall_start

    log_event(
        logger,
        "http_request_pipeline_completed",
        field_filename=name,
        is_pdf=is_pdf_file,
        pairings=len(result.pairings),
        recoveries=result.recoveries,
        duration_ms=int(processing_time["total_request"] * 1000),
    )

    return PairingsResponse(
        document=name,
        month=result.month_code,
        year=result.year,
        codeshare=result.codeshare,
        total_pairings=len(result.pairings),
        pairings=result.pairings,
        recoveries=result.recoveries,
        processing_time=processing_time,
        metadata={
            "file": {
                "name": name,
                "type": file.content_type,
                "size": len(file_bytes),
            },
            "extraction_method": "pdf" if is_pdf_file else "text",
        },
    )
