"""
Performance Session
Owns the attendance and sales files loaded during a Streamlit session.
Every derived view is recomputed from these lists on demand.
"""
import logging

from config import SLOT_ATTENDANCE, SLOT_SALES, SLOT_LABELS
from errors import AnalyzerError, DuplicateFileError
from extractors.attendance_extractor import parse_attendance
from extractors.sales_extractor import parse_sales
from models import LoadedAttendanceFile, LoadedSalesFile
from utils.consolidator import build_performance_view, filter_salesperson, ALL_SALESPEOPLE
from utils.date_range import select_active, covering_range, format_range

logger = logging.getLogger(__name__)

TEXT_ENCODINGS = ("utf-8-sig", "cp1252")


def decode_upload(raw_bytes):
    """Decode an uploaded export: UTF-8 first, then cp1252, then latin-1."""
    for encoding in TEXT_ENCODINGS:
        try:
            return raw_bytes.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw_bytes.decode("latin-1")


class PerformanceSession:
    """Accumulates uploaded files until reset()."""

    def __init__(self):
        self.attendance_files = []
        self.sales_files = []
        self.date_filter = None
        self.summary = None
        self.summary_signature = None
        self.failed_signature = None

    def file_names(self, slot):
        files = self.attendance_files if slot == SLOT_ATTENDANCE else self.sales_files
        return [f.name for f in files]

    def _check_duplicate(self, slot, name):
        if name in self.file_names(slot):
            raise DuplicateFileError(f"'{name}' is already loaded in the {SLOT_LABELS[slot]} area.")

    def add_attendance_file(self, name, content):
        """
        Parse and append an attendance export.

        Raises:
            DuplicateFileError: a file with this name is already loaded
            FormatError/WrongSlotError: the content is not a valid attendance export
        """
        self._check_duplicate(SLOT_ATTENDANCE, name)
        try:
            result = parse_attendance(content)
        except AnalyzerError as e:
            logger.warning("Rejected attendance file %s: %s", name, e)
            raise

        loaded = LoadedAttendanceFile(
            name=name,
            raw_content=content,
            date_range=result.date_range,
            parsed=tuple(result.data),
        )
        self.attendance_files = self.attendance_files + [loaded]
        logger.info("Loaded attendance file %s (%d salespeople)", name, len(loaded.parsed))
        return loaded

    def add_sales_file(self, name, content):
        """
        Parse and append a sales export.

        Raises:
            DuplicateFileError: a file with this name is already loaded
            FormatError/WrongSlotError: the content is not a valid sales export
        """
        self._check_duplicate(SLOT_SALES, name)
        try:
            data = parse_sales(content)
        except AnalyzerError as e:
            logger.warning("Rejected sales file %s: %s", name, e)
            raise

        loaded = LoadedSalesFile(name=name, raw_content=content, parsed=tuple(data))
        self.sales_files = self.sales_files + [loaded]
        logger.info("Loaded sales file %s (%d salespeople)", name, len(loaded.parsed))
        return loaded

    def add_file(self, slot, name, content):
        if slot == SLOT_ATTENDANCE:
            return self.add_attendance_file(name, content)
        return self.add_sales_file(name, content)

    def set_date_filter(self, date_filter):
        self.date_filter = date_filter

    def reset(self):
        self.attendance_files = []
        self.sales_files = []
        self.date_filter = None
        self.clear_summary()
        logger.info("Session reset")

    @property
    def is_empty(self):
        return not self.attendance_files and not self.sales_files

    def active_attendance_files(self):
        return select_active(self.attendance_files, self.date_filter)

    def consolidated(self, salesperson=ALL_SALESPEOPLE):
        records = build_performance_view(self.attendance_files, self.sales_files, self.date_filter)
        return filter_salesperson(records, salesperson)

    def salespeople(self):
        return sorted(record.salesperson for record in self.consolidated())

    def loaded_range(self):
        """Period covered by all loaded attendance files."""
        return covering_range(f.date_range for f in self.attendance_files)

    def date_range_label(self):
        """The active filter's period, or the period of the active files."""
        if self.date_filter is not None:
            return format_range(self.date_filter.as_range())
        return format_range(covering_range(f.date_range for f in self.active_attendance_files()))

    def attendance_csv(self):
        return "\n".join(f.raw_content.strip() for f in self.active_attendance_files())

    def sales_csv(self):
        return "\n".join(f.raw_content.strip() for f in self.sales_files)

    def signature(self):
        """Identifies the inputs a summary was generated from."""
        return (
            tuple(self.file_names(SLOT_ATTENDANCE)),
            tuple(self.file_names(SLOT_SALES)),
            self.date_filter,
        )

    def store_summary(self, summary, signature):
        # A summary for inputs that changed meanwhile is stale
        if signature != self.signature():
            logger.info("Discarding summary for outdated inputs")
            return False
        self.summary = summary
        self.summary_signature = signature
        return True

    def clear_summary(self):
        self.summary = None
        self.summary_signature = None
        self.failed_signature = None

    def mark_summary_failed(self, signature):
        """Drop the stale summary and remember not to retry these inputs automatically."""
        self.summary = None
        self.summary_signature = None
        self.failed_signature = signature

    @property
    def summary_is_current(self):
        return self.summary is not None and self.summary_signature == self.signature()

    @property
    def needs_summary(self):
        if not self.active_attendance_files() or self.summary_is_current:
            return False
        return self.failed_signature != self.signature()
