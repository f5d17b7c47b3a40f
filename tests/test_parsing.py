from __future__ import annotations

import pytest

from stats_monitor.errors import FailureKind, PollError
from stats_monitor.parsing import normalize_body, parse_csv_numbers


def test_normalize_body_drops_blank_lines_and_trims() -> None:
    raw = b"\n  12.5,1000 \r\n\n\t500,2000  \n   \n"
    assert normalize_body(raw) == "12.5,1000\n500,2000"


def test_normalize_body_empty_payload_is_not_an_error() -> None:
    assert normalize_body(b"") == ""
    assert normalize_body(b" \n\r\n\t\n") == ""


def test_normalize_body_rejects_overlong_line() -> None:
    with pytest.raises(PollError) as exc_info:
        normalize_body(b"1," * 40, max_line_bytes=64)
    assert exc_info.value.kind is FailureKind.READ


def test_normalize_body_ignores_undecodable_trailing_lines() -> None:
    text = normalize_body(b"1,2,3,4,5,6,7\n\xff\n")
    assert parse_csv_numbers(text) == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0, 7.0]


def test_undecodable_byte_in_first_line_is_format_error() -> None:
    with pytest.raises(PollError) as exc_info:
        parse_csv_numbers(normalize_body(b"12.5,\xff\xfe,3"))
    assert exc_info.value.kind is FailureKind.FORMAT


def test_parse_csv_numbers_uses_first_line_only() -> None:
    assert parse_csv_numbers("1,2,3\n4,5,6") == [1.0, 2.0, 3.0]


def test_parse_csv_numbers_skips_empty_fields() -> None:
    assert parse_csv_numbers(" 1 ,, 2.5 ,\t,3e2 ,") == [1.0, 2.5, 300.0]


def test_parse_csv_numbers_accepts_signs_and_scientific() -> None:
    assert parse_csv_numbers("-1.5,+2,.5,5.,1E-3") == [-1.5, 2.0, 0.5, 5.0, 0.001]


def test_parse_csv_numbers_reports_offending_field() -> None:
    with pytest.raises(PollError) as exc_info:
        parse_csv_numbers("12.5,1000,abc,2000")
    err = exc_info.value
    assert err.kind is FailureKind.FORMAT
    assert '"abc"' in err.detail
    assert "invalid syntax" in err.detail


@pytest.mark.parametrize("field", ["1_000", "0x10", "1,5e", "١٢", "1.2.3"])
def test_parse_csv_numbers_rejects_non_decimal_notation(field: str) -> None:
    with pytest.raises(PollError) as exc_info:
        parse_csv_numbers(f"1,{field}")
    assert exc_info.value.kind is FailureKind.FORMAT


def test_parse_csv_numbers_out_of_range_is_format_error() -> None:
    with pytest.raises(PollError) as exc_info:
        parse_csv_numbers("1e400")
    assert "out of range" in exc_info.value.detail


def test_parse_csv_numbers_accepts_hex_floats() -> None:
    assert parse_csv_numbers("0x1p-2, -0x1.8p1, 0X.8P1") == [0.25, -3.0, 1.0]


def test_parse_csv_numbers_hex_float_out_of_range() -> None:
    with pytest.raises(PollError) as exc_info:
        parse_csv_numbers("0x1p2000")
    assert exc_info.value.kind is FailureKind.FORMAT
    assert "out of range" in exc_info.value.detail


def test_parse_csv_numbers_infinity_literal_is_accepted() -> None:
    assert parse_csv_numbers("Inf,-infinity") == [float("inf"), float("-inf")]


@pytest.mark.parametrize("text", ["", ",,,,,,", " , , ,\t, , , "])
def test_parse_csv_numbers_nothing_numeric(text: str) -> None:
    with pytest.raises(PollError) as exc_info:
        parse_csv_numbers(text)
    assert exc_info.value.kind is FailureKind.FORMAT
    assert exc_info.value.detail == "no numbers parsed"
