# context.py
# Per-document and per-block parse state, passed explicitly between stages.

import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from models import DocumentHeader, Hotel, Leg


@dataclass
class Recovery:
    pairing_id: str
    field: str
    rule: str
    before: List[str]
    after: List[str]


@dataclass
class DocumentContext:
    name: str
    header: Optional[DocumentHeader] = None
    recoveries: List[Recovery] = field(default_factory=list)
    # Seconds per pipeline stage
    timings: Dict[str, float] = field(default_factory=dict)
    _started: Dict[str, float] = field(default_factory=dict, init=False, repr=False)

    @property
    def codeshare(self) -> str:
        return self.header.codeshare if self.header else ""

    def start_timer(self, stage: str) -> None:
        self._started[stage] = time.perf_counter()

    def end_timer(self, stage: str) -> float:
        start = self._started.pop(stage, None)
        elapsed = time.perf_counter() - start if start is not None else 0.0
        self.timings[stage] = elapsed
        return elapsed


@dataclass
class PairingDraft:
    """Fields collected from one block before they become a Pairing."""

    pairing_id: str = "?"
    base: str = ""
    report_time: str = ""
    release_time: str = ""
    operating_days: List[int] = field(default_factory=list)
    legs: List[Leg] = field(default_factory=list)
    hotels: List[Hotel] = field(default_factory=list)
    total_block_time: str = ""
    total_deadhead_time: str = "0"
    total_credit_time: str = ""
    time_away_from_base: str = ""
    landings_count: str = ""
