"""Tests for splitting document lines into pairing blocks."""

from conftest import SEP, SINGLE_LEG_BLOCK, TWO_DAY_BLOCK
from header import split_lines
from segmenter import BlockSegmenter


def test_blocks_between_separators() -> None:
    lines = ["MAY 2023 Pilot AA Pairings", SEP, *SINGLE_LEG_BLOCK, SEP, *TWO_DAY_BLOCK, SEP]

    blocks = BlockSegmenter().segment(lines)

    assert blocks == [SINGLE_LEG_BLOCK, TWO_DAY_BLOCK]


def test_month_line_starts_new_page_column() -> None:
    lines = [
        "MAY 2023 Pilot AA Pairings",
        SEP,
        *SINGLE_LEG_BLOCK,
        SEP,
        "May 2023 page 2",
        SEP,
        *TWO_DAY_BLOCK,
        SEP,
    ]

    blocks = BlockSegmenter().segment(lines)

    assert len(blocks) == 2
    assert blocks[1][0].startswith("B2345")


def test_noise_lines_are_dropped() -> None:
    lines = [
        SEP,
        SINGLE_LEG_BLOCK[0],
        "",
        "(This is intentionally left blank.)",
        "STANDOVER 0030",
        *SINGLE_LEG_BLOCK[1:],
        SEP,
    ]

    assert BlockSegmenter().segment(lines) == [SINGLE_LEG_BLOCK]


def test_unterminated_block_is_discarded() -> None:
    lines = [SEP, *SINGLE_LEG_BLOCK, SEP, *TWO_DAY_BLOCK]

    assert BlockSegmenter().segment(lines) == [SINGLE_LEG_BLOCK]


def test_lines_before_first_separator_are_ignored() -> None:
    lines = ["MAY 2023 Pilot AA Pairings", "printed 04/20/2023", SEP, *SINGLE_LEG_BLOCK, SEP]

    assert BlockSegmenter().segment(lines) == [SINGLE_LEG_BLOCK]


def test_separator_run_length_is_configurable() -> None:
    lines = ["=====", *SINGLE_LEG_BLOCK, "====="]

    assert BlockSegmenter().segment(lines) == []
    assert BlockSegmenter(separator_min_run=5).segment(lines) == [SINGLE_LEG_BLOCK]


def test_split_lines_handles_all_line_endings() -> None:
    assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


def test_misspelled_october_line_starts_new_page_column() -> None:
    lines = [
        "Ocotber 2023 Pilot UA Pairings",
        SEP,
        *SINGLE_LEG_BLOCK,
        SEP,
        "Ocotber 2023 continued",
        "printed 09/28/2023",
        SEP,
        *TWO_DAY_BLOCK,
        SEP,
    ]

    assert BlockSegmenter().segment(lines) == [SINGLE_LEG_BLOCK, TWO_DAY_BLOCK]
