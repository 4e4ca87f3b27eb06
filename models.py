"""
Data structures shared by the parsers, mergers and the analyzer page
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class DateRange:
    """Calendar-day interval. start is a day start, end is a day end."""

    start: datetime
    end: datetime

    @classmethod
    def from_days(cls, first: date, last: date) -> "DateRange":
        """Build the interval covering both days, whatever their order."""
        first, last = sorted((first, last))
        return cls(datetime.combine(first, time.min), datetime.combine(last, time.max))

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end


@dataclass(frozen=True)
class DateFilter:
    """Active date selection. A missing end means a single day."""

    date_from: date
    date_to: Optional[date] = None

    def as_range(self) -> DateRange:
        return DateRange.from_days(self.date_from, self.date_to or self.date_from)


@dataclass(frozen=True)
class HourlyBucket:
    hour: int
    attendances: int = 0
    potentials: int = 0


@dataclass(frozen=True)
class SalespersonAttendance:
    """
    Attendance of one salesperson, bucketed by hour.

    Totals are always derived from the hourly buckets, never stored.
    """

    salesperson: str
    hourly: tuple = ()

    def __post_init__(self):
        object.__setattr__(self, "hourly", tuple(sorted(self.hourly, key=lambda bucket: bucket.hour)))

    @property
    def total_attendances(self) -> int:
        return sum(bucket.attendances for bucket in self.hourly)

    @property
    def total_potentials(self) -> int:
        return sum(bucket.potentials for bucket in self.hourly)


@dataclass(frozen=True)
class SalespersonSales:
    salesperson: str
    sales_count: int = 0
    total_revenue: float = 0.0
    average_ticket: float = 0.0
    items_per_sale: float = 0.0


@dataclass(frozen=True)
class LoadedAttendanceFile:
    """One successfully parsed attendance upload."""

    name: str
    raw_content: str
    date_range: DateRange
    parsed: tuple = ()


@dataclass(frozen=True)
class LoadedSalesFile:
    """One successfully parsed sales upload. Sales exports carry no dates."""

    name: str
    raw_content: str
    parsed: tuple = ()


@dataclass(frozen=True)
class ConsolidatedRecord:
    """Attendance and sales of one salesperson joined by normalized name."""

    salesperson: str
    hourly: tuple = ()
    total_attendances: int = 0
    total_potentials: int = 0
    sales_count: int = 0
    total_revenue: float = 0.0
    average_ticket: float = 0.0
    items_per_sale: float = 0.0
    conversion_rate: float = 0.0

    @property
    def opportunity_ratio(self) -> float:
        if self.total_attendances <= 0:
            return 0.0
        return self.total_potentials / self.total_attendances


@dataclass
class TeamOverview:
    """Team-level totals shown on the metric cards."""

    salespeople: int = 0
    total_attendances: int = 0
    total_potentials: int = 0
    opportunity_ratio: float = 0.0
    total_sales: int = 0
    total_revenue: float = 0.0
    conversion_rate: float = 0.0
    average_ticket: float = 0.0


@dataclass
class IndividualHighlight:
    salesperson: str
    highlight: str


@dataclass
class SalesSummary:
    """Parsed output of the AI insights request."""

    summary: str
    highlights: list = field(default_factory=list)
    recommendations: list = field(default_factory=list)
    individual_highlights: list = field(default_factory=list)
