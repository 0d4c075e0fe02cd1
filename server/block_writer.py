"""
Render pairings back into the fixed-layout text grammar.

The output follows the layout the segmenter and tokenizer read: title line,
"=" separators, then per block the header, base and column-header lines
(operating days at the right edge of the column header), leg rows, D-END
markers with the overnight hotel after each non-final duty day, the release
line and the TOTALS line.
"""

from typing import Iterable, List, Optional

from models import DocumentHeader, Hotel, Leg, Pairing
from patterns import PLACEHOLDER_PHONE, TBD_HOTEL

SEPARATOR = "=" * 72
COLUMNS = "DAY FLT DEPARTS ARRIVES BLK GRD EQP TBLK TCRD TPAY DUTY LAYO"

_MONTH_NAMES = {
    "JAN": "January", "FEB": "February", "MAR": "March", "APR": "April",
    "MAY": "May", "JUN": "June", "JUL": "July", "AUG": "August",
    "SEP": "September", "OCT": "October", "NOV": "November", "DEC": "December",
}


def render_leg(leg: Leg) -> str:
    tokens = [leg.day_code]
    if leg.is_deadhead:
        tokens.append("DH")
    tokens += [
        leg.flight_number,
        f"{leg.origin}-{leg.destination}",
        leg.local_departure,
        leg.local_arrival,
        leg.block_time,
    ]
    if leg.ends_duty_day:
        tokens += [
            leg.equipment_code,
            leg.duty_total_block or "",
            leg.duty_total_credit or "",
            leg.duty_total_pay or "",
            leg.duty_total_duty or "",
        ]
        if leg.layover_time is not None:
            tokens.append(leg.layover_time)
    else:
        tokens += [leg.ground_time or "", leg.equipment_code]
    return " ".join(t for t in tokens if t)


def render_hotel(hotel: Hotel) -> str:
    if hotel.name == TBD_HOTEL and hotel.phone == PLACEHOLDER_PHONE:
        return TBD_HOTEL
    return f"{hotel.name} {hotel.phone}".strip()


def render_block(pairing: Pairing) -> List[str]:
    days = " ".join(str(d) for d in pairing.operating_days)
    lines = [
        f"{pairing.id} BASE REPT: {pairing.report_time}",
        f"BASE: {pairing.base}",
        f"{COLUMNS} {days}".rstrip(),
    ]

    overnights = [
        i for i, leg in enumerate(pairing.legs)
        if leg.ends_duty_day and leg.layover_time is not None
    ]
    # Hotels beyond the number of overnights stay with the last one
    slots = {i: pairing.hotels[k:k + 1] for k, i in enumerate(overnights)}
    extra = pairing.hotels[len(overnights):]
    if overnights:
        slots[overnights[-1]] = slots[overnights[-1]] + extra
    else:
        lines.extend(render_hotel(h) for h in extra)

    for i, leg in enumerate(pairing.legs):
        lines.append(render_leg(leg))
        if i in slots:
            lines.append("D-END")
            lines.extend(render_hotel(h) for h in slots[i])

    lines.append(f"D-END {pairing.release_time}")
    lines.append(
        f"TOTALS BLK {pairing.total_block_time} DHD {pairing.total_deadhead_time} "
        f"TRIP RIG 0 CDT {pairing.total_credit_time} TAFB {pairing.time_away_from_base} "
        f"LDGS {pairing.landings_count}"
    )
    return lines


def render_document(
    header: DocumentHeader,
    pairings: Iterable[Pairing],
    title: Optional[str] = None,
) -> str:
    if title is None:
        month = _MONTH_NAMES.get(header.month_code, header.month_code)
        title = f"{month} 20{header.year} Pilot {header.codeshare} Pairings (Effective)"

    lines = [title, SEPARATOR]
    for pairing in pairings:
        lines.extend(render_block(pairing))
        lines.append(SEPARATOR)
    return "\n".join(lines) + "\n"
