"""
Attendance Extractor
Parses the per-hour attendance export (At./Pot. columns per salesperson)
into SalespersonAttendance records plus the period covered by the file.
"""
import csv
import logging
import re
from collections import namedtuple

from config import (
    CSV_DELIMITER,
    ATTENDANCE_MIN_LINES,
    SALESPERSON_HEADER_PREFIXES,
    METRIC_ATTENDANCES,
    METRIC_POTENTIALS,
    HOUR_LABEL_PATTERN,
    TOTAL_LABEL,
    SALES_HEADER_KEYWORDS,
    SLOT_SALES,
    SLOT_LABELS,
)
from errors import FormatError, WrongSlotError
from models import HourlyBucket, SalespersonAttendance
from utils.date_range import extract_range
from utils.merger import merge_attendance
from utils.name_normalizer import salesperson_key

logger = logging.getLogger(__name__)

HOUR_PATTERN = re.compile(HOUR_LABEL_PATTERN, re.IGNORECASE)
COUNT_PATTERN = re.compile(r"^\d+$")

AttendanceParseResult = namedtuple("AttendanceParseResult", ["data", "date_range"])
ColumnInfo = namedtuple("ColumnInfo", ["hour", "metric"])


def split_lines(text):
    """Non-blank, trimmed lines of a CSV export."""
    return [line.strip() for line in (text or "").splitlines() if line.strip()]


def split_row(line):
    """Split one ';'-delimited line, honouring quotes, and trim each cell."""
    row = next(csv.reader([line], delimiter=CSV_DELIMITER), [])
    return [cell.strip() for cell in row]


def looks_like_sales_header(header_line):
    lowered = header_line.lower()
    return any(keyword in lowered for keyword in SALES_HEADER_KEYWORDS)


def fill_hour_labels(cells):
    """Carry each hour label forward into the blank cells that follow it."""
    filled = []
    last_label = ""
    for cell in cells:
        if cell:
            last_label = cell
        filled.append(last_label)
    return filled


def build_column_map(hour_cells, metric_cells):
    """
    Map each data column to an (hour, metric) pair.

    Args:
        hour_cells: Cells of the hour-group header row ("08h", "", "Total", ...)
        metric_cells: Cells of the metric header row ("Vendedor", "At.", "Pot.", ...)

    Returns:
        dict column index -> ColumnInfo; unmapped columns are absent
    """
    hour_labels = fill_hour_labels(hour_cells)
    metrics = [cell.lower() for cell in metric_cells]
    columns = {}

    for idx in range(1, max(len(hour_labels), len(metrics))):
        label = hour_labels[idx] if idx < len(hour_labels) else ""
        metric = metrics[idx] if idx < len(metrics) else ""

        if not label or TOTAL_LABEL in label.lower():
            continue

        hour_match = HOUR_PATTERN.search(label)
        if not hour_match:
            continue
        hour = int(hour_match.group(1))
        if hour > 23:
            continue

        if metric == METRIC_ATTENDANCES:
            columns[idx] = ColumnInfo(hour, "attendances")
        elif metric == METRIC_POTENTIALS:
            columns[idx] = ColumnInfo(hour, "potentials")

    return columns


def to_count(value):
    """Parse a non-negative integer cell, None if empty or not plain digits."""
    if not value or not COUNT_PATTERN.match(value):
        return None
    return int(value)


def parse_row(cells, columns):
    """Build hourly buckets for one data row. Returns a tuple of HourlyBucket."""
    per_hour = {}
    for idx in range(1, len(cells)):
        column = columns.get(idx)
        if column is None:
            continue
        value = to_count(cells[idx])
        if value is None:
            continue
        counts = per_hour.setdefault(column.hour, {"attendances": 0, "potentials": 0})
        counts[column.metric] += value

    return tuple(
        HourlyBucket(hour=hour, attendances=counts["attendances"], potentials=counts["potentials"])
        for hour, counts in sorted(per_hour.items())
    )


def parse_attendance(text: str) -> AttendanceParseResult:
    """
    Parse an attendance CSV export.

    Layout:
        line 0: period, e.g. "2024/01/01 - 2024/01/31"
        line 1: hour groups, e.g. ";08h;;09h;;Total"
        line 2: metrics, e.g. "Vendedor;At.;Pot.;At.;Pot."
        line 3+: one row per salesperson

    Returns:
        AttendanceParseResult(data=list of SalespersonAttendance, date_range=DateRange)

    Raises:
        WrongSlotError: the file looks like a sales export
        FormatError: the structure is not an attendance export or no rows survive
    """
    lines = split_lines(text)
    date_range = extract_range(lines[0]) if lines else None

    if date_range is None and lines and looks_like_sales_header(lines[0]):
        raise WrongSlotError(
            f"This looks like a sales export. Upload it in the '{SLOT_LABELS[SLOT_SALES]}' area.",
            expected_slot=SLOT_SALES,
        )

    if len(lines) < ATTENDANCE_MIN_LINES:
        raise FormatError(
            "Invalid attendance file. Expected a date range line, two header rows "
            "and at least one salesperson row."
        )

    if date_range is None:
        raise FormatError(f"Could not read the period from the first line: '{lines[0][:80]}'")

    hour_cells = split_row(lines[1])
    metric_cells = split_row(lines[2])
    if not metric_cells or not metric_cells[0].lower().startswith(SALESPERSON_HEADER_PREFIXES):
        raise FormatError(
            "Invalid header format. The first column of the metric header row must be 'Vendedor'."
        )

    columns = build_column_map(hour_cells, metric_cells)

    records = []
    skipped = 0
    for line in lines[3:]:
        cells = split_row(line)
        salesperson = salesperson_key(cells[0] if cells else "")
        if not salesperson:
            skipped += 1
            continue
        records.append(SalespersonAttendance(salesperson, parse_row(cells, columns)))

    if not records:
        raise FormatError("No valid data found in the attendance file.")

    data = merge_attendance([records])
    logger.debug("Skipped %d non-salesperson rows", skipped)
    logger.info("Parsed attendance for %d salespeople (%s to %s)",
                len(data), date_range.start.date(), date_range.end.date())
    return AttendanceParseResult(data=data, date_range=date_range)
