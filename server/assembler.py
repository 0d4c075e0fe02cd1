# assembler.py
import logging
from typing import List

from calendar_utils import pairing_length
from context import DocumentContext, PairingDraft
from errors import PairingParseError
from logging_utils import log_rejection
from models import DutyDay, Pairing

logger = logging.getLogger("pairings.assembler")


class PairingAssembler:
    def __init__(self, context: DocumentContext) -> None:
        self.context = context

    def assemble(self, draft: PairingDraft) -> Pairing:
        length = 0
        if draft.legs:
            first, last = draft.legs[0].day_code, draft.legs[-1].day_code
            try:
                length = pairing_length(first, last)
            except ValueError:
                error = PairingParseError(
                    draft.pairing_id,
                    "day_code",
                    "first and last legs both weekday codes or both digits",
                    f"{first}..{last}",
                )
                raise log_rejection(logger, error, first=first, last=last)

        return Pairing(
            id=draft.pairing_id,
            codeshare=self.context.codeshare,
            base=draft.base,
            operating_days=sorted(set(draft.operating_days)),
            report_time=draft.report_time,
            release_time=draft.release_time,
            total_block_time=draft.total_block_time,
            total_deadhead_time=draft.total_deadhead_time,
            total_credit_time=draft.total_credit_time,
            time_away_from_base=draft.time_away_from_base,
            landings_count=draft.landings_count,
            legs=draft.legs,
            hotels=draft.hotels,
            length_in_days=length,
        )


def group_duty_days(pairing: Pairing) -> List[DutyDay]:
    """
    Split a pairing's legs into duty days and attach overnight hotels.

    A duty day ends at the leg carrying duty totals. Hotels are listed in
    the order their overnights occur, so the k-th duty day that ends in a
    layover gets hotels[k].
    """
    days: List[DutyDay] = []
    current = []
    overnight = 0

    for leg in pairing.legs:
        current.append(leg)
        if not leg.ends_duty_day:
            continue
        hotel = None
        if leg.layover_time is not None:
            if overnight < len(pairing.hotels):
                hotel = pairing.hotels[overnight]
            overnight += 1
        days.append(DutyDay(index=len(days), legs=current, hotel=hotel, layover_time=leg.layover_time))
        current = []

    if current:
        days.append(DutyDay(index=len(days), legs=current))
    return days
