from datetime import date

import pytest

from errors import DuplicateFileError, FormatError, WrongSlotError
from models import DateFilter, SalesSummary
from utils.session_store import PerformanceSession, decode_upload


def by_name(records):
    return {r.salesperson: r for r in records}


@pytest.fixture
def session(attendance_january, attendance_february, sales_january):
    session = PerformanceSession()
    session.add_attendance_file("jan.csv", attendance_january)
    session.add_attendance_file("feb.csv", attendance_february)
    session.add_sales_file("pdv-jan.csv", sales_january)
    return session


def test_files_accumulate(session):
    assert [f.name for f in session.attendance_files] == ["jan.csv", "feb.csv"]
    assert [f.name for f in session.sales_files] == ["pdv-jan.csv"]
    assert session.attendance_files[0].date_range.start.date() == date(2024, 1, 1)


def test_duplicate_file_name_is_rejected(session, attendance_january):
    before = list(session.attendance_files)

    with pytest.raises(DuplicateFileError):
        session.add_attendance_file("jan.csv", attendance_january)

    assert session.attendance_files == before


def test_same_name_allowed_in_other_slot(session, sales_february):
    session.add_sales_file("jan.csv", sales_february)
    assert len(session.sales_files) == 2


def test_failed_parse_does_not_change_state(session, sales_february):
    before = list(session.attendance_files)

    with pytest.raises(WrongSlotError):
        session.add_attendance_file("pdv-feb.csv", sales_february)
    with pytest.raises(FormatError):
        session.add_attendance_file("broken.csv", "just one line")

    assert session.attendance_files == before
    assert "pdv-feb.csv" not in session.file_names("attendance")


def test_consolidated_view(session):
    records = by_name(session.consolidated())

    assert set(records) == {"Ana", "Bruno", "Dan", "Carol"}
    assert records["Ana"].total_attendances == 12
    assert records["Ana"].sales_count == 4
    assert records["Ana"].conversion_rate == pytest.approx(4 / 12)
    assert records["Carol"].total_attendances == 0
    assert records["Carol"].conversion_rate == 0
    assert records["Dan"].sales_count == 0


def test_consolidated_view_with_salesperson(session):
    assert [r.salesperson for r in session.consolidated("Dan")] == ["Dan"]
    assert session.salespeople() == ["Ana", "Bruno", "Carol", "Dan"]


def test_date_filter(session):
    session.set_date_filter(DateFilter(date(2024, 2, 10)))

    records = by_name(session.consolidated())

    assert set(records) == {"Ana", "Dan"}
    assert records["Ana"].total_attendances == 4
    assert records["Ana"].sales_count == 4
    assert session.date_range_label() == "10/02/2024 - 10/02/2024"
    assert [f.name for f in session.active_attendance_files()] == ["feb.csv"]


def test_date_range_label_without_filter(session):
    assert session.date_range_label() == "01/01/2024 - 29/02/2024"


def test_csv_payloads_follow_active_files(session, attendance_february):
    session.set_date_filter(DateFilter(date(2024, 2, 1), date(2024, 2, 29)))

    assert session.attendance_csv() == attendance_february.strip()
    assert "Carol" in session.sales_csv()


def test_reset(session):
    session.set_date_filter(DateFilter(date(2024, 1, 1)))
    session.store_summary(SalesSummary(summary="ok"), session.signature())

    session.reset()

    assert session.is_empty
    assert session.date_filter is None
    assert session.summary is None
    assert session.consolidated() == []


def test_summary_goes_stale_when_inputs_change(session, sales_february):
    signature = session.signature()
    assert session.store_summary(SalesSummary(summary="ok"), signature)
    assert session.summary_is_current
    assert not session.needs_summary

    session.add_sales_file("pdv-feb.csv", sales_february)

    assert not session.summary_is_current
    assert session.needs_summary
    assert not session.store_summary(SalesSummary(summary="late"), signature)


def test_failed_summary_is_not_retried_automatically(session):
    session.mark_summary_failed(session.signature())

    assert session.summary is None
    assert not session.needs_summary

    session.set_date_filter(DateFilter(date(2024, 1, 5)))
    assert session.needs_summary


def test_decode_upload():
    assert decode_upload("Vendedor;Preço\n".encode("utf-8-sig")) == "Vendedor;Preço\n"
    assert decode_upload("Período".encode("cp1252")) == "Período"
