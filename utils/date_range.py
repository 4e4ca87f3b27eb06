"""
Date range handling for attendance exports
Extracts the covered period from the header line and filters loaded files by date.
"""
import logging
import re
from datetime import datetime

from config import DATE_FORMATS, MIN_VALID_YEAR, DATE_LABEL_FORMAT
from models import DateRange

logger = logging.getLogger(__name__)

DATE_TOKEN = r'\d{1,4}[/-]\d{1,4}[/-]\d{1,4}'
DATE_PAIR_PATTERN = re.compile(rf'({DATE_TOKEN})\D+?({DATE_TOKEN})')


def parse_date(token):
    """
    Parse a single date token, trying each known format in order.

    Returns:
        date or None when no format yields a plausible calendar date
    """
    token = (token or "").strip()
    if not token:
        return None

    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(token, fmt)
        except ValueError:
            continue
        if parsed.year > MIN_VALID_YEAR:
            return parsed.date()
    return None


def extract_range(header_line):
    """
    Find the start/end period written on an attendance header line.

    Accepts things like "2024/01/01 - 2024/01/31", "Período: 01-01-2024 a 31-01-2024"
    or dates listed in reverse order.

    Args:
        header_line: First non-blank line of the file

    Returns:
        DateRange with start <= end, or None if no interval could be built
    """
    if not header_line:
        return None

    match = DATE_PAIR_PATTERN.search(header_line)
    if match:
        first, second = parse_date(match.group(1)), parse_date(match.group(2))
        if first and second:
            return DateRange.from_days(first, second)

    # Fallback: "<date> - <date>" with tokens the scan above did not catch
    parts = header_line.split(' - ')
    if len(parts) != 2:
        parts = header_line.split('-')
    if len(parts) == 2:
        first, second = parse_date(parts[0]), parse_date(parts[1])
        if first and second:
            return DateRange.from_days(first, second)

    logger.debug("No date range found in header %r", header_line)
    return None


def overlaps(file_range, filter_range):
    """True when a file's period touches the filter period."""
    return (
        filter_range.contains(file_range.start)
        or filter_range.contains(file_range.end)
        or (file_range.start <= filter_range.start and file_range.end >= filter_range.end)
    )


def select_active(files, date_filter=None):
    """
    Select the attendance files relevant for the active date filter.

    Args:
        files: Loaded attendance files
        date_filter: DateFilter or None

    Returns:
        list of files whose period overlaps the filter (all files if no filter)
    """
    if date_filter is None:
        return list(files)

    filter_range = date_filter.as_range()
    selected = [f for f in files if overlaps(f.date_range, filter_range)]
    logger.debug("Date filter %s kept %d of %d attendance files", filter_range, len(selected), len(files))
    return selected


def covering_range(ranges):
    """Smallest DateRange covering all given ranges, or None."""
    ranges = list(ranges)
    if not ranges:
        return None
    return DateRange(min(r.start for r in ranges), max(r.end for r in ranges))


def format_range(date_range):
    """Human-readable label, e.g. "01/01/2024 - 31/01/2024"."""
    if date_range is None:
        return ""
    return f"{date_range.start.strftime(DATE_LABEL_FORMAT)} - {date_range.end.strftime(DATE_LABEL_FORMAT)}"
