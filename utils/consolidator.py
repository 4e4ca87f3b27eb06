"""
Consolidator
Joins attendance and sales by salesperson and derives the performance metrics.
"""
import pandas as pd

from models import ConsolidatedRecord, TeamOverview
from utils.date_range import select_active
from utils.merger import merge_attendance, merge_sales, merge_hourly

ALL_SALESPEOPLE = "all"


def conversion_rate(sales_count, total_attendances):
    if total_attendances <= 0:
        return 0.0
    return sales_count / total_attendances


def consolidate(attendance, sales):
    """
    Outer join of merged attendance and merged sales by salesperson name.

    A salesperson found in only one source still gets a record; the other
    source's numbers default to zero. Output order is not meaningful.
    """
    attendance_by_name = {record.salesperson: record for record in attendance}
    sales_by_name = {record.salesperson: record for record in sales}

    records = []
    for name in list(attendance_by_name) + [n for n in sales_by_name if n not in attendance_by_name]:
        att = attendance_by_name.get(name)
        sale = sales_by_name.get(name)

        total_attendances = att.total_attendances if att else 0
        sales_count = sale.sales_count if sale else 0

        records.append(ConsolidatedRecord(
            salesperson=name,
            hourly=att.hourly if att else (),
            total_attendances=total_attendances,
            total_potentials=att.total_potentials if att else 0,
            sales_count=sales_count,
            total_revenue=sale.total_revenue if sale else 0.0,
            average_ticket=sale.average_ticket if sale else 0.0,
            items_per_sale=sale.items_per_sale if sale else 0.0,
            conversion_rate=conversion_rate(sales_count, total_attendances),
        ))
    return records


def build_performance_view(attendance_files, sales_files, date_filter=None):
    """
    Recompute the consolidated view from the loaded files.

    With a date filter, only overlapping attendance files are merged and
    sales are restricted to salespeople present in that attendance set,
    since sales exports carry no per-row date.

    Returns:
        list of ConsolidatedRecord
    """
    active_files = select_active(attendance_files, date_filter)
    attendance = merge_attendance(f.parsed for f in active_files)
    sales = merge_sales(f.parsed for f in sales_files)

    if date_filter is not None:
        active_names = {record.salesperson for record in attendance}
        sales = [record for record in sales if record.salesperson in active_names]

    return consolidate(attendance, sales)


def filter_salesperson(records, salesperson=ALL_SALESPEOPLE):
    if not salesperson or salesperson == ALL_SALESPEOPLE:
        return list(records)
    return [record for record in records if record.salesperson == salesperson]


def rank_by_attendances(records):
    """Highest attendance first, ties by name."""
    return sorted(records, key=lambda r: (-r.total_attendances, r.salesperson))


def team_overview(records):
    """Team totals and ratios over the given records."""
    records = list(records)
    total_attendances = sum(r.total_attendances for r in records)
    total_potentials = sum(r.total_potentials for r in records)
    total_sales = sum(r.sales_count for r in records)
    total_revenue = sum(r.total_revenue for r in records)

    return TeamOverview(
        salespeople=len(records),
        total_attendances=total_attendances,
        total_potentials=total_potentials,
        opportunity_ratio=total_potentials / total_attendances if total_attendances > 0 else 0.0,
        total_sales=total_sales,
        total_revenue=total_revenue,
        conversion_rate=conversion_rate(total_sales, total_attendances),
        average_ticket=total_revenue / total_sales if total_sales > 0 else 0.0,
    )


def hourly_totals(records):
    """Hour-ascending buckets summed across all given salespeople."""
    totals = ()
    for record in records:
        totals = merge_hourly(totals, record.hourly)
    return list(totals)


def hourly_dataframe(records):
    """Hourly totals as a DataFrame indexed by "HH:00" labels, for charting."""
    buckets = hourly_totals(records)
    df = pd.DataFrame(
        [{"Hour": f"{b.hour:02d}:00", "Attendances": b.attendances, "Potentials": b.potentials} for b in buckets],
        columns=["Hour", "Attendances", "Potentials"],
    )
    return df.set_index("Hour")


def records_to_dataframe(records):
    """Consolidated records as a display/export table."""
    rows = []
    for r in records:
        rows.append({
            "Salesperson": r.salesperson,
            "Attendances": r.total_attendances,
            "Potentials": r.total_potentials,
            "Opp. Ratio": round(r.opportunity_ratio, 2),
            "Sales": r.sales_count,
            "Conversion (%)": round(r.conversion_rate * 100, 1),
            "Total Revenue": round(r.total_revenue, 2),
            "Average Ticket": round(r.average_ticket, 2),
            "Items per Sale": round(r.items_per_sale, 2),
        })
    return pd.DataFrame(rows, columns=[
        "Salesperson", "Attendances", "Potentials", "Opp. Ratio", "Sales",
        "Conversion (%)", "Total Revenue", "Average Ticket", "Items per Sale",
    ])
