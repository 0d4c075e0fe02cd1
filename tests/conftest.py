"""Shared pairing documents for the parser tests."""

from pathlib import Path
import sys

import pytest

if str(Path(__file__).resolve().parents[1] / "server") not in sys.path:
    sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "server"))

from context import DocumentContext
from models import DocumentHeader

SEP = "=" * 40
COLUMNS = "DAY FLT DEPARTS ARRIVES BLK GRD EQP TBLK TCRD TPAY DUTY LAYO"

# One day, one leg, hotel TBD
SINGLE_LEG_BLOCK = [
    "A1234 BASE REPT: 0545L -- 1 2",
    "BASE: BOS 15",
    f"{COLUMNS} 8 9",
    "TBD",
    "MO 1234 BOS-ORD 0700 0900 200 E75 200 200 300 400",
    "D-END 0945L",
    "TOTALS BLK 200 DHD 0 TRIP RIG 0 CDT 300 TAFB 400 LDGS 1",
]

# Two days, deadhead into the overnight
TWO_DAY_BLOCK = [
    "B2345 BASE REPT: 1300L 3",
    "BASE: ORD 10",
    f"{COLUMNS} 17 24",
    "MO 2001 ORD-LGA 1400 1715 215 45 E75",
    "MO DH 456 LGA-DCA 1800 1915 115 E75 330 330 515 615 1430",
    "D-END",
    "Hilton Garden Inn 202-555-0188",
    "TU 2002 DCA-ORD 1000 1130 230 CR9 230 230 400 300",
    "D-END 1145L",
    "TOTALS BLK 445 DHD 115 TRIP RIG 0 CDT 600 TAFB 2300 LDGS 2",
]


def build_document(*blocks, title="MAY 2023 Pilot AA Pairings (Effective)"):
    lines = [title, SEP]
    for block in blocks:
        lines.extend(block)
        lines.append(SEP)
    return "\n".join(lines) + "\n"


@pytest.fixture
def context() -> DocumentContext:
    header = DocumentHeader(month_code="MAY", year="23", codeshare="AA", title="MAY 2023 Pilot AA Pairings")
    return DocumentContext(name="may23.txt", header=header)


@pytest.fixture
def single_leg_document() -> str:
    return build_document(SINGLE_LEG_BLOCK)


@pytest.fixture
def two_day_document() -> str:
    return build_document(SINGLE_LEG_BLOCK, TWO_DAY_BLOCK)
