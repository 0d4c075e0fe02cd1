"""Tests for the structured log helpers."""

import json
import logging

from errors import PairingValidationError
from logging_utils import PairingsJSONFormatter, document_scope, log_event, log_recovery, log_rejection

logger = logging.getLogger("pairings.test")


def _formatted(caplog, formatter=PairingsJSONFormatter()):
    return [json.loads(formatter.format(record)) for record in caplog.records]


def test_recovery_event_carries_document_and_pairing(caplog) -> None:
    caplog.set_level(logging.INFO, logger="pairings.test")

    with document_scope("may23.pdf"):
        log_recovery(logger, "A1234", "report_time", "merge_next", ["05", "45L"], ["0545L"])
        (line,) = _formatted(caplog)

    assert line["event"] == "token_recovered"
    assert line["document"] == "may23.pdf"
    assert line["pairing_id"] == "A1234"
    assert (line["before"], line["after"]) == ("05 45L", "0545L")


def test_document_scope_is_reset_on_exit(caplog) -> None:
    caplog.set_level(logging.INFO, logger="pairings.test")

    with document_scope("may23.pdf"):
        pass
    log_event(logger, "document_parsed", pairings=3)

    (line,) = _formatted(caplog)
    assert "document" not in line
    assert line["pairings"] == 3


def test_rejection_logs_error_and_returns_it(caplog) -> None:
    caplog.set_level(logging.INFO, logger="pairings.test")
    error = PairingValidationError("B2345", "hotels[0].phone", "DDD-DDD-DDDD", "2025550188")

    assert log_rejection(logger, error) is error

    (record,) = caplog.records
    assert record.levelno == logging.ERROR
    assert record.event == "pairing_validation_failed"
    assert (record.field, record.found) == ("hotels[0].phone", "2025550188")


def test_colliding_field_names_are_prefixed(caplog) -> None:
    caplog.set_level(logging.INFO, logger="pairings.test")

    log_event(logger, "file_processing_started", filename="may23.pdf")

    (line,) = _formatted(caplog)
    assert line["field_filename"] == "may23.pdf"
