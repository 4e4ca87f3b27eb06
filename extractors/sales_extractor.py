"""
Sales Extractor
Parses the PDV sales summary export into one SalespersonSales per salesperson.
"""
import logging
import re
from collections import namedtuple

from config import (
    SALES_MIN_LINES,
    SALES_MIN_COLUMNS,
    SALES_COL_SALESPERSON,
    SALES_COL_COUNT,
    SALES_COL_ITEMS_PER_SALE,
    SALES_COL_REVENUE,
    SALES_COL_AVERAGE_TICKET,
    VENDOR_HEADER_KEYWORDS,
    SLOT_ATTENDANCE,
    SLOT_LABELS,
)
from errors import FormatError, WrongSlotError
from extractors.attendance_extractor import split_lines, split_row
from models import SalespersonSales
from utils.merger import merge_sales
from utils.name_normalizer import salesperson_key

logger = logging.getLogger(__name__)

DATE_LIKE_PATTERN = re.compile(r'\d{1,4}[/-]\d{1,2}[/-]\d{1,4}')
INTEGER_PATTERN = re.compile(r"^\d+$")
DECIMAL_PATTERN = re.compile(r"^\d+(?:[.,]\d+)?$")
CURRENCY_PATTERN = re.compile(r"^[\d.]*\d(?:,\d+)?$")


def to_int(value):
    """Non-negative integer of plain digits, None otherwise."""
    value = (value or "").strip()
    if not INTEGER_PATTERN.match(value):
        return None
    return int(value)


def to_decimal(value):
    """Plain decimal with ',' as fractional separator ("1,5" -> 1.5)."""
    value = (value or "").strip()
    if not DECIMAL_PATTERN.match(value):
        return None
    return float(value.replace(',', '.'))


def to_currency(value):
    """Brazilian currency string ("R$ 1.234,56" -> 1234.56). Negative amounts are rejected."""
    value = (value or "").replace('R$', '').strip()
    if not CURRENCY_PATTERN.match(value):
        return None
    return float(value.replace('.', '').replace(',', '.'))


# Field name, column index, converter, required
SALES_SCHEMA = (
    ("salesperson", SALES_COL_SALESPERSON, salesperson_key, True),
    ("sales_count", SALES_COL_COUNT, to_int, True),
    ("items_per_sale", SALES_COL_ITEMS_PER_SALE, to_decimal, False),
    ("total_revenue", SALES_COL_REVENUE, to_currency, False),
    ("average_ticket", SALES_COL_AVERAGE_TICKET, to_currency, False),
)

SalesRow = namedtuple("SalesRow", [name for name, _, _, _ in SALES_SCHEMA])


def extract_row(cells):
    """
    Apply the column schema to one split row.

    Returns:
        SalesRow, or None if the row is too short, not a person, or a
        required field does not parse
    """
    if len(cells) < SALES_MIN_COLUMNS:
        return None

    values = {}
    for name, column, convert, required in SALES_SCHEMA:
        value = convert(cells[column])
        if required and (value is None or value == ""):
            return None
        values[name] = value if value is not None else 0.0

    return SalesRow(**values)


def check_header(header_line):
    """Reject attendance exports dropped into the sales slot."""
    lowered = header_line.lower()
    if DATE_LIKE_PATTERN.search(header_line) and not any(k in lowered for k in VENDOR_HEADER_KEYWORDS):
        raise WrongSlotError(
            f"This looks like an attendance export. Upload it in the '{SLOT_LABELS[SLOT_ATTENDANCE]}' area.",
            expected_slot=SLOT_ATTENDANCE,
        )


def parse_sales(text: str) -> list:
    """
    Parse a sales CSV export.

    Columns used: 0 salesperson, 2 sales, 6 items per sale,
    8 total revenue, 10 average ticket.

    Returns:
        list of SalespersonSales

    Raises:
        WrongSlotError: the file looks like an attendance export
        FormatError: too few lines or no valid rows
    """
    lines = split_lines(text)
    if lines:
        check_header(lines[0])

    if len(lines) < SALES_MIN_LINES:
        raise FormatError("Invalid sales file. Expected a header row and at least one salesperson row.")

    records = []
    skipped = 0
    for line in lines[1:]:
        row = extract_row(split_row(line))
        if row is None:
            skipped += 1
            continue
        records.append(SalespersonSales(
            salesperson=row.salesperson,
            sales_count=row.sales_count,
            total_revenue=row.total_revenue,
            average_ticket=row.average_ticket,
            items_per_sale=row.items_per_sale,
        ))

    if not records:
        raise FormatError("No valid data found in the sales file.")

    data = merge_sales([records])
    logger.debug("Skipped %d malformed or non-salesperson rows", skipped)
    logger.info("Parsed sales for %d salespeople", len(data))
    return data
