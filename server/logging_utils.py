# logging_utils.py
# Structured JSON logging for the pairings parser. Every line carries the
# request id and the document being parsed, so one upload can be followed
# from the HTTP middleware down to the field that rejected it.

import json
import logging
import os
import sys
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, Sequence

from errors import PairingError

# Set by the request middleware in api.py
_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
# Set by the pipeline for the duration of one document parse
_document: ContextVar[Optional[str]] = ContextVar("document", default=None)

SERVICE_NAME = os.getenv("SERVICE_NAME", "pairings")
ENV = os.getenv("APP_ENV", "dev")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Empty disables the file handler
LOG_FILE = os.getenv("LOG_FILE", "")

# Attributes every LogRecord already has; structured fields must not shadow them
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class PairingsJSONFormatter(logging.Formatter):
    """
    One JSON object per line:

        {"ts": "...", "level": "INFO", "logger": "pairings.tokenizer",
         "service": "pairings", "env": "dev", "event": "token_recovered",
         "request_id": "...", "document": "may23.pdf", "pairing_id": "A1234", ...}
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "service": SERVICE_NAME,
            "env": ENV,
            "message": record.getMessage(),
        }

        for key, var in (("request_id", _request_id), ("document", _document)):
            value = var.get()
            if value:
                payload[key] = value

        payload.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        )

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def configure_logging() -> None:
    """JSON to stdout, plus LOG_FILE when it is set. Safe to call more than once."""
    root = logging.getLogger()
    if getattr(root, "_pairings_configured", False):
        return

    root.setLevel(LOG_LEVEL)
    formatter = PairingsJSONFormatter()

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    root.addHandler(stream_handler)

    if LOG_FILE:
        try:
            log_dir = os.path.dirname(LOG_FILE)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            file_handler = logging.FileHandler(LOG_FILE)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            root.error(f"Failed to set up file logging: {e}")

    root._pairings_configured = True  # type: ignore[attr-defined]


def new_request_id() -> str:
    rid = uuid.uuid4().hex
    _request_id.set(rid)
    return rid


@contextmanager
def document_scope(name: str) -> Iterator[None]:
    """Tag every log line emitted inside the block with the document name."""
    token = _document.set(name)
    try:
        yield
    finally:
        _document.reset(token)


def log_event(
    logger: logging.Logger,
    event: str,
    level: int = logging.INFO,
    pairing_id: Optional[str] = None,
    **fields: Any,
) -> None:
    """
    Emit one structured event. Field names that collide with LogRecord
    attributes are prefixed ("filename" -> "field_filename").
    """
    extra: Dict[str, Any] = {"event": event}
    if pairing_id is not None:
        extra["pairing_id"] = pairing_id
    for key, value in fields.items():
        extra[f"field_{key}" if key in _RECORD_ATTRS else key] = value
    logger.log(level, event, extra=extra)


def log_recovery(
    logger: logging.Logger,
    pairing_id: str,
    field: str,
    rule: str,
    before: Sequence[str],
    after: Sequence[str],
) -> None:
    log_event(
        logger,
        "token_recovered",
        pairing_id=pairing_id,
        field=field,
        rule=rule,
        before=" ".join(before),
        after=" ".join(after),
    )


def log_rejection(logger: logging.Logger, error: PairingError, **fields: Any) -> PairingError:
    """Log a hard failure ("pairing_parse_failed" / "pairing_validation_failed") and hand the error back to raise."""
    log_event(
        logger,
        error.event,
        level=logging.ERROR,
        pairing_id=error.pairing_id,
        field=error.field,
        expected=error.expected,
        found=error.found,
        **fields,
    )
    return error
