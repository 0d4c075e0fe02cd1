"""Tests for reading pairing blocks into drafts."""

import pytest

from conftest import COLUMNS, SINGLE_LEG_BLOCK, TWO_DAY_BLOCK
from errors import PairingParseError
from tokenizer import BlockTokenizer, LineRole, classify_line, scan_calendar
from recovery import tokenize_line


def _role(index, count, line):
    return classify_line(index, count, line, tokenize_line(line))


def test_single_leg_block(context) -> None:
    draft = BlockTokenizer(context).tokenize(SINGLE_LEG_BLOCK)

    assert draft.pairing_id == "A1234"
    assert draft.base == "BOS"
    assert draft.report_time == "0545L"
    assert draft.release_time == "0945L"
    assert sorted(draft.operating_days) == [1, 2, 8, 9, 15]
    assert (draft.total_block_time, draft.total_deadhead_time, draft.total_credit_time) == ("200", "0", "300")
    assert (draft.time_away_from_base, draft.landings_count) == ("400", "1")

    leg = draft.legs[0]
    assert (leg.origin, leg.destination) == ("BOS", "ORD")
    assert leg.ground_time is None
    assert leg.duty_total_duty == "400"
    assert leg.layover_time is None

    assert draft.hotels[0].name == "TBD"
    assert draft.hotels[0].phone == "000-000-0000"
    assert context.recoveries == []


def test_duty_day_boundaries(context) -> None:
    draft = BlockTokenizer(context).tokenize(TWO_DAY_BLOCK)
    first, deadhead, last = draft.legs

    assert first.ground_time == "45"
    assert first.equipment_code == "E75"
    assert not first.ends_duty_day

    assert deadhead.is_deadhead
    assert deadhead.flight_number == "456"
    assert deadhead.ground_time is None
    assert deadhead.duty_total_block == "330"
    assert deadhead.layover_time == "1430"

    # Final duty day has no layover
    assert last.ends_duty_day
    assert last.duty_total_pay == "400"
    assert last.layover_time is None

    assert [h.name for h in draft.hotels] == ["Hilton Garden Inn"]
    assert draft.hotels[0].phone == "202-555-0188"


def test_split_header_keywords_are_recovered(context) -> None:
    block = ["A1234 BA SE RE PT 05 45L -- 1", *SINGLE_LEG_BLOCK[1:]]

    draft = BlockTokenizer(context).tokenize(block)

    assert draft.report_time == "0545L"
    assert [r.rule for r in context.recoveries] == ["complete_base", "complete_rept", "merge_next"]
    assert all(r.pairing_id == "A1234" for r in context.recoveries)


def test_glued_ground_time_and_equipment(context) -> None:
    block = list(TWO_DAY_BLOCK)
    block[3] = "MO 2001 ORD-LGA 1400 1715 215 45E75"

    draft = BlockTokenizer(context).tokenize(block)

    assert draft.legs[0].ground_time == "45"
    assert draft.legs[0].equipment_code == "E75"
    assert context.recoveries[0].rule == "split_after_2"


def test_deadhead_flight_number_absorbs_digits(context) -> None:
    block = list(TWO_DAY_BLOCK)
    block[4] = "MO DH 45 6LGA-DCA 1800 1915 115 E75 330 330 515 615 1430"

    draft = BlockTokenizer(context).tokenize(block)

    assert draft.legs[1].flight_number == "456"
    assert (draft.legs[1].origin, draft.legs[1].destination) == ("LGA", "DCA")


def test_split_route_is_recovered(context) -> None:
    block = list(SINGLE_LEG_BLOCK)
    block[4] = "MO 1234 BOS -ORD 0700 0900 200 E75 200 200 300 400"

    draft = BlockTokenizer(context).tokenize(block)

    assert (draft.legs[0].origin, draft.legs[0].destination) == ("BOS", "ORD")
    assert context.recoveries[0].field == "destination"


def test_unrecoverable_flight_number_fails(context) -> None:
    block = list(SINGLE_LEG_BLOCK)
    block[4] = "MO 12 BOS-ORD 0700 0900 200 E75 200 200 300 400"

    with pytest.raises(PairingParseError) as exc:
        BlockTokenizer(context).tokenize(block)

    assert exc.value.pairing_id == "A1234"
    assert exc.value.field == "flight_number"
    assert exc.value.found == "12"


def test_phone_on_its_own_line_completes_hotel(context) -> None:
    block = list(TWO_DAY_BLOCK)
    block[6:7] = ["Hilton Garden Inn", "202 555 0188"]

    draft = BlockTokenizer(context).tokenize(block)

    assert len(draft.hotels) == 1
    assert draft.hotels[0].phone == "202-555-0188"


def test_empty_block_fails(context) -> None:
    with pytest.raises(PairingParseError):
        BlockTokenizer(context).tokenize([])


def test_line_roles_by_position() -> None:
    count = len(TWO_DAY_BLOCK)
    roles = [_role(i, count, line) for i, line in enumerate(TWO_DAY_BLOCK)]

    assert roles == [
        LineRole.HEADER,
        LineRole.BASE,
        LineRole.COLUMNS,
        LineRole.LEG,
        LineRole.LEG,
        LineRole.MARKER,
        LineRole.HOTEL,
        LineRole.LEG,
        LineRole.RELEASE,
        LineRole.TOTALS,
    ]


def test_scan_calendar_reads_right_edge_until_other_token() -> None:
    assert scan_calendar(tokenize_line(f"{COLUMNS} 1 -- 3")) == [3, 1]
    assert scan_calendar(tokenize_line("A1234 BASE REPT 0545L")) == []
    assert scan_calendar(tokenize_line("TOTALS 40 15")) == [15]


def test_split_duty_time_on_final_leg_is_rejoined(context) -> None:
    block = list(TWO_DAY_BLOCK)
    block[7] = "TU 2002 DCA-ORD 1000 1130 230 CR9 230 230 400 10 45"

    draft = BlockTokenizer(context).tokenize(block)

    assert draft.legs[-1].duty_total_duty == "1045"
    assert draft.legs[-1].layover_time is None
    assert [(r.field, r.rule) for r in context.recoveries] == [("duty_total_duty", "merge_next")]
