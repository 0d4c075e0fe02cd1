# header.py
import logging
import re
from typing import List

from errors import DOCUMENT_HEADER, PairingParseError
from logging_utils import log_rejection
from models import DocumentHeader
from patterns import patterns

logger = logging.getLogger("pairings.header")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> List[str]:
    return _LINE_BREAK.split(text)


def parse_document_header(line: str) -> DocumentHeader:
    """
    Read the title line, e.g. "May 2023 Pilot AA Pairings (rev 2)".

    Documents whose first line does not match are rejected outright.
    """
    m = patterns.DOCUMENT_HEADER.match(line)
    if not m:
        error = PairingParseError(
            DOCUMENT_HEADER,
            "title",
            "'<Month> 20YY Pilot AA|DL|UA Pairings ...'",
            line,
        )
        raise log_rejection(logger, error)

    month_code = m.group("month")[:3].upper()
    if month_code == "OCO":
        month_code = "OCT"

    return DocumentHeader(
        month_code=month_code,
        year=m.group("year")[2:],
        codeshare=m.group("codeshare"),
        title=line.strip(),
    )
