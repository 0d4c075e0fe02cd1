"""
Field tokenizer for pairing blocks.

Every line of a block has a structural role fixed by its position: the
header (id, BASE REPT, report time), the base line, the column header, body
rows (legs, hotels, D-END markers) and the two trailer lines (release time,
TOTALS). The first six lines also carry the columnar operating-day calendar
at their right edge.

Fields are read at fixed token offsets. When a token does not have its
expected shape the recovery rules in recovery.py are tried in order and the
first repaired token list whose field matches wins; if none does, the block
(and so the whole document) fails with PairingParseError.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from context import DocumentContext, PairingDraft, Recovery
from errors import PairingParseError
from logging_utils import log_event, log_recovery, log_rejection
from models import Hotel, Leg
from patterns import (
    CALENDAR_DAYS,
    CALENDAR_FILLER,
    CALENDAR_REGION_LINES,
    DEADHEAD_MARKER,
    DUTY_END_MARKER,
    PLACEHOLDER_PHONE,
    TBD_HOTEL,
    TOTALS_MARKER,
    WEEKDAY_CODES,
    patterns,
)
from recovery import (
    RecoveryRule,
    Tokens,
    absorb_digit_prefix,
    complete_keyword,
    merge_next,
    split_after,
    split_route,
    tokenize_line,
)

logger = logging.getLogger("pairings.tokenizer")

Check = Callable[[str], object]

# Token offsets on the TOTALS line
TOTALS_OFFSETS = {
    "total_block_time": 2,
    "total_deadhead_time": 4,
    "total_credit_time": 9,
    "time_away_from_base": 11,
    "landings_count": 13,
}


class LineRole(Enum):
    HEADER = "header"
    BASE = "base"
    COLUMNS = "columns"
    LEG = "leg"
    HOTEL = "hotel"
    PHONE_OVERFLOW = "phone_overflow"
    MARKER = "marker"
    RELEASE = "release"
    TOTALS = "totals"


def _exactly(word: str) -> Check:
    return lambda token: token == word


def _length(n: int) -> Check:
    return lambda token: len(token) == n


def is_leg_line(tokens: Sequence[str]) -> bool:
    first = tokens[0]
    if len(first) == 2 and first in WEEKDAY_CODES:
        return True
    return len(first) == 1 and "1" <= first <= "7" and len(tokens) > 7


def is_phone_line(line: str, tokens: Sequence[str]) -> bool:
    return bool(patterns.PHONE_LINE.match(line.strip())) and bool(patterns.PHONE.match("-".join(tokens)))


def classify_line(index: int, count: int, line: str, tokens: Sequence[str]) -> LineRole:
    if index == 0:
        return LineRole.HEADER
    if index == count - 1:
        return LineRole.TOTALS
    if index == count - 2:
        return LineRole.RELEASE
    if index == 1:
        return LineRole.BASE
    if index == 2:
        return LineRole.COLUMNS

    if is_leg_line(tokens):
        return LineRole.LEG
    if is_phone_line(line, tokens):
        return LineRole.PHONE_OVERFLOW
    first = tokens[0]
    if first in (DUTY_END_MARKER, TOTALS_MARKER, CALENDAR_FILLER) or patterns.NUMERIC.match(first):
        return LineRole.MARKER
    return LineRole.HOTEL


def scan_calendar(tokens: Sequence[str]) -> List[int]:
    """Operating days at the right edge of a line, read until the first non-calendar token."""
    days: List[int] = []
    for token in reversed(tokens):
        if token in CALENDAR_DAYS:
            days.append(int(token))
        elif token != CALENDAR_FILLER:
            break
    return days


class BlockTokenizer:
    def __init__(self, context: DocumentContext) -> None:
        self.context = context

    # ---------------- field readers ----------------

    def _recovered(self, draft: PairingDraft, field: str, rule: str, before: Tokens, after: Tokens) -> None:
        self.context.recoveries.append(Recovery(draft.pairing_id, field, rule, list(before), list(after)))
        log_recovery(logger, draft.pairing_id, field, rule, before, after)

    def _fail(self, draft: PairingDraft, tokens: Tokens, idx: int, field: str, expected: str) -> PairingParseError:
        found = tokens[idx] if idx < len(tokens) else None
        error = PairingParseError(draft.pairing_id, field, expected, found)
        return log_rejection(logger, error, tokens=" ".join(tokens))

    def _read(
        self,
        draft: PairingDraft,
        tokens: Tokens,
        idx: int,
        field: str,
        check: Check,
        expected: str,
        rules: Sequence[RecoveryRule] = (merge_next,),
    ) -> Tokens:
        """Return tokens whose idx-th entry passes check, repairing them if needed."""
        if idx < len(tokens) and check(tokens[idx]):
            return tokens
        for rule in rules:
            repaired = rule(tokens, idx)
            if repaired is not None and idx < len(repaired) and check(repaired[idx]):
                self._recovered(draft, field, rule.__name__, tokens, repaired)
                return repaired
        raise self._fail(draft, tokens, idx, field, expected)

    # ---------------- line handlers ----------------

    def read_header(self, draft: PairingDraft, tokens: Tokens) -> None:
        draft.pairing_id = tokens[0]
        tokens = self._read(draft, tokens, 1, "BASE", _exactly("BASE"), "'BASE'", (complete_keyword("BASE"),))
        tokens = self._read(draft, tokens, 2, "REPT", _exactly("REPT"), "'REPT'", (complete_keyword("REPT"),))
        tokens = self._read(draft, tokens, 3, "report_time", _length(5), "HHMM plus zone letter")
        draft.report_time = tokens[3]

    def read_base(self, draft: PairingDraft, tokens: Tokens) -> None:
        tokens = self._read(draft, tokens, 1, "base", _length(3), "3-letter airport code")
        draft.base = tokens[1]

    def read_release(self, draft: PairingDraft, tokens: Tokens) -> None:
        tokens = self._read(draft, tokens, 1, "release_time", _length(5), "HHMM plus zone letter")
        draft.release_time = tokens[1]

    def read_totals(self, draft: PairingDraft, tokens: Tokens) -> None:
        for field, idx in TOTALS_OFFSETS.items():
            if idx >= len(tokens):
                raise self._fail(draft, tokens, idx, field, f"a value at TOTALS offset {idx}")
            setattr(draft, field, tokens[idx])

    def read_hotel(self, draft: PairingDraft, tokens: Tokens) -> None:
        if tokens[0] == TBD_HOTEL:
            draft.hotels.append(Hotel(name=TBD_HOTEL, phone=PLACEHOLDER_PHONE))
            return

        name: List[str] = []
        phone = ""
        for token in tokens:
            if patterns.PHONE.match(token):
                phone = token
                break
            name.append(token)
        draft.hotels.append(Hotel(name=" ".join(name), phone=phone))

    def read_phone_overflow(self, draft: PairingDraft, tokens: Tokens) -> None:
        if not draft.hotels:
            raise self._fail(draft, tokens, 0, "hotel_phone", "a hotel line before a lone phone number")
        draft.hotels[-1].phone = "-".join(tokens)

    def read_leg(
        self,
        draft: PairingDraft,
        tokens: Tokens,
        index: int,
        next_line: str,
        line_after_next: Optional[str],
    ) -> Leg:
        is_deadhead = len(tokens) > 1 and tokens[1] == DEADHEAD_MARKER
        if is_deadhead:
            tokens = tokens[:1] + tokens[2:]

        tokens = self._read(draft, tokens, 0, "day_code", patterns.DAY_CODE.match, "weekday code or digit 1-7")

        if is_deadhead:
            if len(tokens) > 1 and not patterns.FLIGHT_NUMBER.match(tokens[1]):
                absorbed = absorb_digit_prefix(tokens, 1)
                if absorbed is not None:
                    self._recovered(draft, "flight_number", absorb_digit_prefix.__name__, tokens, absorbed)
                    tokens = absorbed
            tokens = self._read(draft, tokens, 1, "flight_number", patterns.DEADHEAD_FLIGHT_NUMBER.match, "digits", ())
        else:
            tokens = self._read(draft, tokens, 1, "flight_number", patterns.FLIGHT_NUMBER.match, "4 digits")

        if len(tokens) < 3:
            raise self._fail(draft, tokens, 2, "origin", "ORIGIN-DESTINATION")
        origin, sep, destination = tokens[2].partition("-")
        routed = split_route(tokens, 2)
        if not (sep and origin and destination):
            self._recovered(draft, "destination", split_route.__name__, tokens, routed)
        tokens = routed
        tokens = self._read(draft, tokens, 2, "origin", patterns.AIRPORT.match, "3-letter airport code", ())
        tokens = self._read(draft, tokens, 3, "destination", patterns.AIRPORT.match, "3-letter airport code", ())

        tokens = self._read(draft, tokens, 4, "local_departure", patterns.HHMM.match, "HHMM")
        tokens = self._read(draft, tokens, 5, "local_arrival", patterns.HHMM.match, "HHMM")
        tokens = self._read(draft, tokens, 6, "block_time", patterns.BLOCK_TIME.match, "1-4 digits")

        fields = {
            "day_code": tokens[0],
            "is_deadhead": is_deadhead,
            "flight_number": tokens[1],
            "origin": tokens[2],
            "destination": tokens[3],
            "local_departure": tokens[4],
            "local_arrival": tokens[5],
            "block_time": tokens[6],
        }

        if DUTY_END_MARKER not in next_line:
            tokens = self._read(
                draft, tokens, 7, "ground_time", patterns.GROUND_TIME.match, "2-4 digits",
                (split_after(2, longer_than=4), merge_next),
            )
            tokens = self._read(draft, tokens, 8, "equipment_code", patterns.EQUIPMENT.match, "fleet code")
            fields["ground_time"] = tokens[7]
            fields["equipment_code"] = tokens[8]
            return Leg(**fields)

        # Last leg of its duty day: duty totals instead of ground time
        tokens = self._read(draft, tokens, 7, "equipment_code", patterns.EQUIPMENT.match, "fleet code")
        tokens = self._read(draft, tokens, 8, "duty_total_block", patterns.DUTY_BLOCK.match, "1-4 digits")
        tokens = self._read(draft, tokens, 9, "duty_total_credit", patterns.DUTY_CREDIT.match, "1-4 digits")
        tokens = self._read(draft, tokens, 10, "duty_total_pay", patterns.DUTY_PAY.match, "2-4 digits")
        final_day = line_after_next is None or TOTALS_MARKER in line_after_next
        # Nothing follows the duty time on the final day once past the calendar columns,
        # so a trailing token is the rest of a split duty time
        if final_day and index >= CALENDAR_REGION_LINES and len(tokens) > 12:
            merged = merge_next(tokens, 11)
            self._recovered(draft, "duty_total_duty", merge_next.__name__, tokens, merged)
            tokens = merged
        tokens = self._read(draft, tokens, 11, "duty_total_duty", patterns.DUTY_TIME.match, "2-4 digits")
        fields.update(
            equipment_code=tokens[7],
            duty_total_block=tokens[8],
            duty_total_credit=tokens[9],
            duty_total_pay=tokens[10],
            duty_total_duty=tokens[11],
        )

        if not final_day:
            tokens = self._read(draft, tokens, 12, "layover_time", patterns.LAYOVER.match, "2-4 digits")
            fields["layover_time"] = tokens[12]
        return Leg(**fields)

    # ---------------- block ----------------

    def tokenize(self, block: Sequence[str]) -> PairingDraft:
        draft = PairingDraft()
        count = len(block)
        if count == 0:
            raise self._fail(draft, [], 0, "id", "a pairing header line")

        for index, line in enumerate(block):
            tokens = tokenize_line(line)
            if not tokens:
                log_event(logger, "line_without_tokens", level=logging.WARNING, pairing_id=draft.pairing_id, line_index=index)
                continue

            role = classify_line(index, count, line, tokens)

            if role is LineRole.HEADER:
                self.read_header(draft, tokens)
            elif role is LineRole.BASE:
                self.read_base(draft, tokens)
            elif role is LineRole.LEG:
                after_next = block[index + 2] if index + 2 < count else None
                draft.legs.append(self.read_leg(draft, tokens, index, block[index + 1], after_next))
            elif role is LineRole.HOTEL:
                self.read_hotel(draft, tokens)
            elif role is LineRole.PHONE_OVERFLOW:
                self.read_phone_overflow(draft, tokens)
            elif role is LineRole.RELEASE:
                self.read_release(draft, tokens)
            elif role is LineRole.TOTALS:
                self.read_totals(draft, tokens)

            if index < CALENDAR_REGION_LINES:
                draft.operating_days.extend(scan_calendar(tokens))

        return draft
