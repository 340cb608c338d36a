from __future__ import annotations

import pytest

from storefront.store.sanitize import ensure_int, ensure_number, format_price, sanitize_line


@pytest.mark.parametrize(
    "value, expected",
    [
        (5, 5),
        (2.5, 2.5),
        ("12.5", 12.5),
        ("  3", 3),
        ("12.5kg", 12.5),
        ("-4", -4),
        (".5", 0.5),
        ("1e3", 1000),
        ("abc", 0),
        ("", 0),
        (None, 0),
        (True, 0),
        ([1], 0),
        (float("nan"), 0),
        (float("inf"), 0),
        ("nan", 0),
    ],
)
def test_ensure_number(value, expected) -> None:
    assert ensure_number(value) == expected


def test_ensure_int_truncates() -> None:
    assert ensure_int("3.9") == 3
    assert ensure_int(-2.5) == -2


def test_sanitize_line_defaults() -> None:
    line = sanitize_line({"id": "10"})
    assert line.id == 10
    assert line.name == ""
    assert line.unit_price == 0
    assert line.stock == 0
    assert line.quantity == 0
    assert line.image is None


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, "৳0.00"),
        (1234.5, "৳1,234.50"),
        ("99.999", "৳100.00"),
        (1000000, "৳1,000,000.00"),
        ("oops", "৳0.00"),
    ],
)
def test_format_price(value, expected) -> None:
    assert format_price(value) == expected


def test_ints_beyond_float_range_collapse_to_zero() -> None:
    assert ensure_number(10**400) == 0
    assert ensure_int(-(10**400)) == 0
    assert ensure_number("9" * 400) == 0
