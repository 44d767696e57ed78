"""
Test unitari per le funzioni di utilità
"""
from datetime import date, datetime, timedelta, timezone

import pytest

from logitrack.services.core.query_utils import QueryUtils
from logitrack.services.core.tool import (
    blank_to_none,
    month_key,
    normalize_datetime,
    sanitize_filename,
    to_calendar_date,
)


@pytest.mark.unit
class TestNormalizeDatetime:

    def test_date_only_string_becomes_utc_midnight(self):
        assert normalize_datetime("2024-03-10") == datetime(2024, 3, 10, tzinfo=timezone.utc)

    def test_zulu_suffix(self):
        assert normalize_datetime("2024-03-10T08:30:00Z") == datetime(2024, 3, 10, 8, 30, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        result = normalize_datetime("2024-03-10T08:30:00+02:00")

        assert result == datetime(2024, 3, 10, 6, 30, tzinfo=timezone.utc)
        assert result.utcoffset() == timedelta(0)

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_blank_is_none(self, value):
        assert normalize_datetime(value) is None

    def test_date_object(self):
        assert normalize_datetime(date(2024, 1, 2)) == datetime(2024, 1, 2, tzinfo=timezone.utc)

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError):
            normalize_datetime("10/03/2024x")


@pytest.mark.unit
def test_to_calendar_date():
    assert to_calendar_date(datetime(2024, 4, 2, 23, 59, tzinfo=timezone.utc)) == date(2024, 4, 2)
    assert to_calendar_date(None) is None


@pytest.mark.unit
def test_month_key():
    assert month_key(datetime(2024, 1, 31, 23, 0)) == "2024-01"


@pytest.mark.unit
@pytest.mark.parametrize("value,expected", [("  ", None), ("", None), (" a ", "a"), (5, 5), (None, None)])
def test_blank_to_none(value, expected):
    assert blank_to_none(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize("filename,expected", [
    ("invoice.pdf", "invoice.pdf"),
    ("my invoice (1).pdf", "my_invoice_1_.pdf"),
    ("../../etc/passwd", "passwd"),
    ("C:\\docs\\bl.pdf", "bl.pdf"),
    ("...", "document"),
    (None, "document"),
])
def test_sanitize_filename(filename, expected):
    assert sanitize_filename(filename) == expected


@pytest.mark.unit
def test_escape_like():
    assert QueryUtils.escape_like("100%_a\\b") == "100\\%\\_a\\\\b"
