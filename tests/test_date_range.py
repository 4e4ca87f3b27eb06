from datetime import date, datetime, time

import pytest

from models import DateFilter, DateRange, LoadedAttendanceFile
from utils.date_range import parse_date, extract_range, select_active, overlaps, covering_range, format_range


def day_range(first, last):
    return DateRange.from_days(first, last)


@pytest.mark.parametrize("token, expected", [
    ("31/01/2024", date(2024, 1, 31)),
    ("2024/01/31", date(2024, 1, 31)),
    ("31-01-2024", date(2024, 1, 31)),
    ("2024-01-31", date(2024, 1, 31)),
    ("5/1/24", date(2024, 1, 5)),
    ("5/1/2024", date(2024, 1, 5)),
])
def test_parse_date_formats(token, expected):
    assert parse_date(token) == expected


@pytest.mark.parametrize("token", ["", "31/02/2024", "01/01/1960", "not a date", "2024.01.31"])
def test_parse_date_rejects_invalid(token):
    assert parse_date(token) is None


def test_extract_range_slash_dates():
    result = extract_range("2024/01/01 - 2024/01/31")
    assert result.start == datetime(2024, 1, 1, 0, 0)
    assert result.end == datetime.combine(date(2024, 1, 31), time.max)


def test_extract_range_inside_text():
    result = extract_range("Atendimentos por hora - Período: 01-03-2024 a 15-03-2024")
    assert result == day_range(date(2024, 3, 1), date(2024, 3, 15))


def test_extract_range_orders_dates():
    result = extract_range("31/01/2024 - 01/01/2024")
    assert result.start <= result.end
    assert result.start.date() == date(2024, 1, 1)
    assert result.end.date() == date(2024, 1, 31)


def test_extract_range_single_day():
    result = extract_range("2024-01-10 - 2024-01-10")
    assert result.start.date() == result.end.date() == date(2024, 1, 10)


@pytest.mark.parametrize("line", ["", "Vendedor;Vendas;Total Vendas", "2024/01/01", "99/99/9999 - 99/99/9999"])
def test_extract_range_returns_none(line):
    assert extract_range(line) is None


def make_file(name, first, last):
    return LoadedAttendanceFile(name=name, raw_content="", date_range=day_range(first, last))


def test_select_active_without_filter_returns_all():
    files = [make_file("a.csv", date(2024, 1, 1), date(2024, 1, 31))]
    assert select_active(files, None) == files


def test_select_active_file_contains_filter():
    files = [make_file("jan.csv", date(2024, 1, 1), date(2024, 1, 31))]
    selected = select_active(files, DateFilter(date(2024, 1, 10), date(2024, 1, 15)))
    assert [f.name for f in selected] == ["jan.csv"]


def test_select_active_endpoint_inside_filter():
    files = [
        make_file("late-dec.csv", date(2023, 12, 20), date(2024, 1, 2)),
        make_file("late-jan.csv", date(2024, 1, 30), date(2024, 2, 5)),
        make_file("march.csv", date(2024, 3, 1), date(2024, 3, 31)),
    ]
    selected = select_active(files, DateFilter(date(2024, 1, 1), date(2024, 1, 31)))
    assert [f.name for f in selected] == ["late-dec.csv", "late-jan.csv"]


def test_select_active_single_day_filter():
    files = [
        make_file("jan.csv", date(2024, 1, 1), date(2024, 1, 31)),
        make_file("feb.csv", date(2024, 2, 1), date(2024, 2, 29)),
    ]
    selected = select_active(files, DateFilter(date(2024, 2, 1)))
    assert [f.name for f in selected] == ["feb.csv"]


def test_overlaps_disjoint():
    assert not overlaps(day_range(date(2024, 1, 1), date(2024, 1, 5)), day_range(date(2024, 1, 6), date(2024, 1, 9)))


def test_covering_range_and_label():
    combined = covering_range([
        day_range(date(2024, 2, 1), date(2024, 2, 29)),
        day_range(date(2024, 1, 1), date(2024, 1, 31)),
    ])
    assert format_range(combined) == "01/01/2024 - 29/02/2024"
    assert covering_range([]) is None
    assert format_range(None) == ""
