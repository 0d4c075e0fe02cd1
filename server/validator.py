"""
Second, independent pass over assembled pairings.

Every field is checked against its canonical shape in a fixed order and the
first violation raises PairingValidationError; one bad field rejects the
whole document.
"""

import logging
import re
from typing import List, Optional, Sequence, Tuple

from errors import PairingValidationError
from logging_utils import log_event, log_rejection
from models import Hotel, Leg, Pairing
from patterns import CODESHARES, patterns

logger = logging.getLogger("pairings.validator")

# (field, pattern, description)
_PAIRING_FIELDS: Tuple[Tuple[str, re.Pattern, str], ...] = (
    ("base", patterns.AIRPORT, "3 uppercase letters"),
    ("report_time", patterns.ZONED_TIME, "HHMM plus zone letter"),
    ("release_time", patterns.ZONED_TIME, "HHMM plus zone letter"),
    ("total_block_time", patterns.TOTAL_BLOCK, "1-4 digits"),
    ("total_deadhead_time", patterns.TOTAL_DEADHEAD, "1-4 digits"),
    ("total_credit_time", patterns.TOTAL_CREDIT, "1-4 digits"),
    ("time_away_from_base", patterns.TAFB, "1-5 digits"),
    ("landings_count", patterns.LANDINGS, "1-2 digits"),
)

# (field, pattern, description, required); optional fields are checked only when present
_LEG_FIELDS: Tuple[Tuple[str, re.Pattern, str, bool], ...] = (
    ("origin", patterns.AIRPORT, "3 uppercase letters", True),
    ("destination", patterns.AIRPORT, "3 uppercase letters", True),
    ("flight_number", patterns.FLIGHT_NUMBER, "4 digits", True),
    ("day_code", patterns.DAY_CODE, "weekday code or digit 1-7", True),
    ("local_departure", patterns.HHMM, "HHMM", True),
    ("local_arrival", patterns.HHMM, "HHMM", True),
    ("block_time", patterns.BLOCK_TIME, "1-4 digits", True),
    ("ground_time", patterns.GROUND_TIME, "2-4 digits", False),
    ("equipment_code", patterns.EQUIPMENT, "fleet code", True),
    ("duty_total_block", patterns.DUTY_BLOCK, "1-4 digits", False),
    ("duty_total_credit", patterns.DUTY_CREDIT, "1-4 digits", False),
    ("duty_total_pay", patterns.DUTY_PAY, "2-4 digits", False),
    ("duty_total_duty", patterns.DUTY_TIME, "2-4 digits", False),
    ("layover_time", patterns.LAYOVER, "2-4 digits", False),
)

# Deadhead legs carry another carrier's flight number, any length
_DEADHEAD_FLIGHT_NUMBER = (patterns.DEADHEAD_FLIGHT_NUMBER, "digits")


class PairingValidator:
    def _reject(self, pairing_id: str, field: str, expected: str, found: Optional[str]) -> PairingValidationError:
        return log_rejection(logger, PairingValidationError(pairing_id, field, expected, found))

    def validate_pairing(self, pairing: Pairing) -> None:
        pid = pairing.id

        if not patterns.PAIRING_ID.match(pid):
            raise self._reject(pid, "id", "a letter and 4 digits", pid)

        if pairing.codeshare not in CODESHARES:
            raise self._reject(pid, "codeshare", "one of " + "/".join(CODESHARES), pairing.codeshare)

        for day in pairing.operating_days:
            if not 1 <= day <= 31:
                raise self._reject(pid, "operating_days", "days 1-31", str(day))

        for field, pattern, expected in _PAIRING_FIELDS:
            value = getattr(pairing, field)
            if not pattern.match(value):
                raise self._reject(pid, field, expected, value)

        if not pairing.legs:
            raise self._reject(pid, "legs", "at least one leg", None)

        for index, leg in enumerate(pairing.legs):
            self.validate_leg(pid, index, leg)

        for index, hotel in enumerate(pairing.hotels):
            self.validate_hotel(pid, index, hotel)

    def validate_leg(self, pairing_id: str, index: int, leg: Leg) -> None:
        for field, pattern, expected, required in _LEG_FIELDS:
            if field == "flight_number" and leg.is_deadhead:
                pattern, expected = _DEADHEAD_FLIGHT_NUMBER
            value = getattr(leg, field)
            if value is None and not required:
                continue
            if not pattern.match(value):
                raise self._reject(pairing_id, f"legs[{index}].{field}", expected, value)

    def validate_hotel(self, pairing_id: str, index: int, hotel: Hotel) -> None:
        if not patterns.PHONE.match(hotel.phone):
            raise self._reject(pairing_id, f"hotels[{index}].phone", "DDD-DDD-DDDD", hotel.phone)

    def validate(self, pairings: Sequence[Pairing]) -> List[Pairing]:
        for count, pairing in enumerate(pairings, 1):
            self.validate_pairing(pairing)
            logger.debug(f"{count}/{len(pairings)} pairings verified")

        log_event(logger, "pairings_verified", pairings=len(pairings))
        return list(pairings)
