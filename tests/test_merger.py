import pytest

from extractors.attendance_extractor import parse_attendance
from models import HourlyBucket, SalespersonAttendance, SalespersonSales
from utils.merger import merge_attendance, merge_sales, merge_hourly


def totals(records):
    return {r.salesperson: (r.total_attendances, r.total_potentials, r.hourly) for r in records}


def test_merge_hourly_sums_shared_hours():
    merged = merge_hourly(
        (HourlyBucket(8, 5, 1), HourlyBucket(10, 1, 0)),
        (HourlyBucket(9, 2, 2), HourlyBucket(8, 3, 0)),
    )
    assert merged == (HourlyBucket(8, 8, 1), HourlyBucket(9, 2, 2), HourlyBucket(10, 1, 0))


def test_merge_attendance_same_salesperson_same_hour():
    first = [SalespersonAttendance("Ana", (HourlyBucket(8, 5, 0),))]
    second = [SalespersonAttendance("Ana", (HourlyBucket(8, 3, 1),))]

    merged = merge_attendance([first, second])

    assert len(merged) == 1
    assert merged[0].hourly == (HourlyBucket(8, 8, 1),)
    assert merged[0].total_attendances == 8


def test_merge_attendance_is_commutative(attendance_january, attendance_february):
    january = parse_attendance(attendance_january).data
    february = parse_attendance(attendance_february).data

    assert totals(merge_attendance([january, february])) == totals(merge_attendance([february, january]))


def test_merged_totals_are_rederived(attendance_january, attendance_february):
    merged = merge_attendance([
        parse_attendance(attendance_january).data,
        parse_attendance(attendance_february).data,
    ])
    by_name = {r.salesperson: r for r in merged}

    assert set(by_name) == {"Ana", "Bruno", "Dan"}
    assert [b.hour for b in by_name["Ana"].hourly] == [8, 9, 10]
    assert by_name["Ana"].total_attendances == 5 + 3 + 3 + 1
    assert by_name["Ana"].total_potentials == 1 + 0 + 2 + 1
    for record in merged:
        assert record.total_attendances == sum(b.attendances for b in record.hourly)


def test_merge_attendance_empty():
    assert merge_attendance([]) == []


def test_merge_sales_sums_and_recomputes_average_ticket():
    first = [SalespersonSales("Ana", sales_count=4, total_revenue=1000.0, average_ticket=250.0, items_per_sale=1.5)]
    second = [SalespersonSales("Ana", sales_count=6, total_revenue=500.0, average_ticket=83.33, items_per_sale=2.0)]

    merged = merge_sales([first, second])

    assert len(merged) == 1
    ana = merged[0]
    assert ana.sales_count == 10
    assert ana.total_revenue == pytest.approx(1500.0)
    assert ana.average_ticket == pytest.approx(150.0)
    # items per sale is carried from the last file, not re-weighted
    assert ana.items_per_sale == pytest.approx(2.0)


def test_merge_sales_zero_sales_average_ticket():
    first = [SalespersonSales("Ana", sales_count=0, total_revenue=0.0)]
    second = [SalespersonSales("Ana", sales_count=0, total_revenue=0.0)]

    assert merge_sales([first, second])[0].average_ticket == 0.0


def test_merge_sales_single_file_keeps_source_values():
    record = SalespersonSales("Carol", sales_count=10, total_revenue=1234.56, average_ticket=61.73, items_per_sale=1.5)
    assert merge_sales([[record]]) == [record]
