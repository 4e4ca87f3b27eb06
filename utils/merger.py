"""
Dataset Mergers
Fold several parsed files of the same kind into one record per salesperson.
"""
from models import HourlyBucket, SalespersonAttendance, SalespersonSales


def merge_hourly(left, right):
    """Union two hourly sequences, summing buckets that share an hour."""
    by_hour = {}
    for bucket in list(left) + list(right):
        current = by_hour.get(bucket.hour)
        if current is None:
            by_hour[bucket.hour] = bucket
        else:
            by_hour[bucket.hour] = HourlyBucket(
                hour=bucket.hour,
                attendances=current.attendances + bucket.attendances,
                potentials=current.potentials + bucket.potentials,
            )
    return tuple(by_hour[hour] for hour in sorted(by_hour))


def merge_attendance(datasets):
    """
    Merge attendance datasets by salesperson.

    Args:
        datasets: iterable of lists of SalespersonAttendance

    Returns:
        list of SalespersonAttendance, in first-seen order, totals re-derived
    """
    merged = {}
    for dataset in datasets:
        for record in dataset:
            existing = merged.get(record.salesperson)
            if existing is None:
                merged[record.salesperson] = SalespersonAttendance(record.salesperson, record.hourly)
            else:
                merged[record.salesperson] = SalespersonAttendance(
                    record.salesperson, merge_hourly(existing.hourly, record.hourly)
                )
    return list(merged.values())


def average_ticket(total_revenue, sales_count):
    if sales_count <= 0:
        return 0.0
    return total_revenue / sales_count


def merge_sales(datasets):
    """
    Merge sales datasets by salesperson.

    Sale counts and revenue are summed and the average ticket is recomputed
    from them. Items per sale is taken from the last file that has the
    salesperson; it is not re-weighted.

    Args:
        datasets: iterable of lists of SalespersonSales

    Returns:
        list of SalespersonSales, in first-seen order
    """
    merged = {}
    for dataset in datasets:
        for record in dataset:
            existing = merged.get(record.salesperson)
            if existing is None:
                merged[record.salesperson] = record
                continue

            sales_count = existing.sales_count + record.sales_count
            total_revenue = existing.total_revenue + record.total_revenue
            merged[record.salesperson] = SalespersonSales(
                salesperson=record.salesperson,
                sales_count=sales_count,
                total_revenue=total_revenue,
                average_ticket=average_ticket(total_revenue, sales_count),
                items_per_sale=record.items_per_sale,
            )
    return list(merged.values())
