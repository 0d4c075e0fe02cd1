"""
Block segmentation.

Splits the concatenated page lines of one document into pairing blocks.
Month-name lines start a new page column, runs of "=" delimit pairings, and
blank lines, blank-page placeholders and STANDOVER annotations are dropped.
"""

import logging
from typing import Iterable, List

from config import SEPARATOR_MIN_RUN
from logging_utils import log_event
from patterns import BLANK_PAGE_MARKER, MONTH_NAMES, STANDOVER_MARKER

logger = logging.getLogger("pairings.segmenter")


class BlockSegmenter:
    def __init__(self, separator_min_run: int = SEPARATOR_MIN_RUN) -> None:
        self.separator = "=" * separator_min_run

    def is_month_line(self, line: str) -> bool:
        return any(name in line for name in MONTH_NAMES)

    def is_separator(self, line: str) -> bool:
        return self.separator in line

    @staticmethod
    def is_noise(line: str) -> bool:
        return (
            not line.strip()
            or BLANK_PAGE_MARKER in line
            or STANDOVER_MARKER in line
        )

    def segment(self, lines: Iterable[str]) -> List[List[str]]:
        blocks: List[List[str]] = []
        current: List[str] = []
        inside = False
        dropped = 0

        for line in lines:
            # New page column, not pairing content
            if self.is_month_line(line):
                inside = False
                continue

            if self.is_separator(line):
                if inside:
                    blocks.append(current)
                    current = []
                inside = True
                continue

            if not inside:
                continue

            if self.is_noise(line):
                dropped += 1
                continue

            current.append(line)

        if current:
            log_event(
                logger,
                "unterminated_block_discarded",
                level=logging.WARNING,
                lines=len(current),
            )

        log_event(logger, "document_segmented", blocks=len(blocks), noise_lines=dropped)
        return blocks
