"""
╔═══════════════════════════════════════════════════════════════════════════════╗
║                    FLEET UTILIZATION ENGINE                                    ║
║                      Expansion Readiness v1.0                                  ║
╠═══════════════════════════════════════════════════════════════════════════════╣
║  Purpose: Turn load-assignment history into a fleet utilization score        ║
║                                                                                ║
║  Metrics:                                                                      ║
║  - Revenue Days = distinct calendar days a truck had at least one load        ║
║  - Utilization Rate = avg revenue days per truck / days in period              ║
║  - Low-utilization share, distribution buckets, coefficient of variation      ║
╚═══════════════════════════════════════════════════════════════════════════════╝
"""

import calendar
import logging
import statistics
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from errors import InvalidRangeError
from models import LoadRecord, TruckRecord, TruckStatus

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# CONFIGURATION & CONSTANTS
# ═══════════════════════════════════════════════════════════════════════════════

class TimeRange(str, Enum):
    """Supported analysis windows"""
    MONTH = "month"      # Current calendar month
    DAYS_90 = "90d"
    DAYS_180 = "180d"
    DAYS_365 = "365d"

    @classmethod
    def parse(cls, value) -> "TimeRange":
        """Parse a range selector, failing loudly on anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidRangeError(value) from None


class FleetSizeBand(str, Enum):
    """Fleet size classification (active trucks)"""
    SMALL = "SMALL"  # < 10 trucks
    MID = "MID"      # 10-50 trucks
    LARGE = "LARGE"  # > 50 trucks


class UtilizationTier(str, Enum):
    """Qualitative rating of average revenue days per truck"""
    NEEDS_WORK = "NEEDS_WORK"  # < 15 days
    CAUTION = "CAUTION"        # 15-18 days
    HEALTHY = "HEALTHY"        # 18-20 days
    STRONG = "STRONG"          # 20+ days


class UtilizationFlag(str, Enum):
    """Anomaly tags attached to a score"""
    VERY_HIGH_UTILIZATION = "VERY_HIGH_UTILIZATION"  # Possible over-scheduling / burnout


class Momentum(str, Enum):
    """Direction of the monthly revenue-days trend"""
    FLAT = "FLAT"
    IMPROVING_MILD = "IMPROVING_MILD"
    IMPROVING_STRONG = "IMPROVING_STRONG"
    DECLINING_MILD = "DECLINING_MILD"
    DECLINING_STRONG = "DECLINING_STRONG"


ROLLING_RANGE_DAYS = {
    TimeRange.DAYS_90: 90,
    TimeRange.DAYS_180: 180,
    TimeRange.DAYS_365: 365,
}

FLEET_BAND_LIMITS = {
    "small_below": 10,   # N < 10 -> SMALL
    "mid_max": 50,       # 10 <= N <= 50 -> MID
}

# Revenue days a truck needs to NOT count as low-utilization
LOW_UTIL_THRESHOLDS = {
    FleetSizeBand.SMALL: 18,  # Less slack capacity in small fleets
    FleetSizeBand.MID: 16,
    FleetSizeBand.LARGE: 15,
}

# (min avg revenue days, points, tier), evaluated top-down
SCORE_BREAKPOINTS = [
    (20, 25, UtilizationTier.STRONG),
    (18, 20, UtilizationTier.HEALTHY),
    (15, 12, UtilizationTier.CAUTION),
]
FLOOR_SCORE = (5, UtilizationTier.NEEDS_WORK)
MAX_SCORE_POINTS = 25

VERY_HIGH_UTILIZATION_DAYS = 23

# (max CV, label, penalty) - drill-down only, never feeds the score
CONSISTENCY_BANDS = [
    (0.20, "strong", 0),
    (0.35, "caution", -2),
    (0.50, "poor", -4),
]
CONSISTENCY_FLOOR = ("very_poor", -5)

# Trend: slope of avg revenue days per truck, in days per month
TREND_MONTHS = 3
TREND_FLAT_BELOW = 0.5
TREND_STRONG_FROM = 1.0
TREND_POINTS = {
    Momentum.FLAT: 0,
    Momentum.IMPROVING_MILD: 1,
    Momentum.IMPROVING_STRONG: 3,
    Momentum.DECLINING_MILD: -1,
    Momentum.DECLINING_STRONG: -3,
}


# ═══════════════════════════════════════════════════════════════════════════════
# DATA CLASSES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Period:
    """Inclusive calendar window used for every aggregation"""
    start: date
    end: date
    day_count: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Period start {self.start} is after end {self.end}")

    def to_dict(self) -> Dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "daysInPeriod": self.day_count,
        }


@dataclass
class DistributionBuckets:
    """Truck counts per revenue-day band"""
    ge20: int = 0
    between_18_and_19: int = 0
    between_15_and_17: int = 0
    lt15: int = 0

    @property
    def total(self) -> int:
        return self.ge20 + self.between_18_and_19 + self.between_15_and_17 + self.lt15

    def to_dict(self) -> Dict:
        return {
            "ge20": self.ge20,
            "between18And19": self.between_18_and_19,
            "between15And17": self.between_15_and_17,
            "lt15": self.lt15,
        }


@dataclass
class TruckRevenueDays:
    """Revenue days for a single active truck"""
    truck_id: str
    revenue_days: int
    is_low_util: bool
    unit_number: Optional[str] = None
    status: TruckStatus = TruckStatus.ACTIVE

    def to_dict(self) -> Dict:
        return {
            "truckId": self.truck_id,
            "unitNumber": self.unit_number,
            "status": self.status.value,
            "revenueDays": self.revenue_days,
            "isLowUtil": self.is_low_util,
        }


@dataclass
class FleetUtilizationMetrics:
    """Fleet-wide utilization snapshot for one period"""
    period: Period
    active_truck_count: int
    fleet_band: FleetSizeBand
    avg_revenue_days_per_truck: float
    utilization_rate: float          # avg revenue days / period days (0-1)
    low_util_threshold_days: int
    low_util_truck_count: int
    low_util_pct: float              # 0-1
    distribution: DistributionBuckets
    std_dev: float
    cv: float
    trend_delta: float = 0.0

    @property
    def total_revenue_days(self) -> int:
        return round(self.avg_revenue_days_per_truck * self.active_truck_count)

    @property
    def available_days(self) -> int:
        return self.active_truck_count * self.period.day_count

    def to_dict(self) -> Dict:
        return {
            "periodStart": self.period.start.isoformat(),
            "periodEnd": self.period.end.isoformat(),
            "dayCount": self.period.day_count,
            "activeTruckCount": self.active_truck_count,
            "fleetBand": self.fleet_band.value,
            "avgRevenueDaysPerTruck": self.avg_revenue_days_per_truck,
            "utilizationRate": self.utilization_rate,
            "lowUtilThresholdDays": self.low_util_threshold_days,
            "lowUtilTruckCount": self.low_util_truck_count,
            "lowUtilPct": self.low_util_pct,
            "distribution": self.distribution.to_dict(),
            "stdDev": self.std_dev,
            "cv": self.cv,
            "trendDelta": self.trend_delta,
        }


@dataclass
class FleetUtilizationScore:
    """Points (0-25), tier and anomaly flags"""
    total_points: int
    tier: UtilizationTier
    flags: List[UtilizationFlag] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "totalPoints": self.total_points,
            "tier": self.tier.value,
            "flags": [f.value for f in self.flags],
        }


@dataclass
class TrendMonth:
    """Average revenue days per truck for one calendar month"""
    period: Period
    avg_revenue_days_per_truck: float

    def to_dict(self) -> Dict:
        return {
            "monthStart": self.period.start.isoformat(),
            "avgRevenueDaysPerTruck": self.avg_revenue_days_per_truck,
        }


@dataclass
class FleetTrend:
    """Month-over-month momentum over the last TREND_MONTHS calendar months"""
    months: List[TrendMonth]
    slope_days_per_month: float
    points: int
    momentum: Momentum

    def to_dict(self) -> Dict:
        return {
            "months": [m.to_dict() for m in self.months],
            "slopeDaysPerMonth": self.slope_days_per_month,
            "points": self.points,
            "momentum": self.momentum.value,
        }


@dataclass
class FleetUtilizationResult:
    """Metrics + score, with the per-truck breakdown kept for drill-down"""
    metrics: FleetUtilizationMetrics
    score: FleetUtilizationScore
    trucks: List[TruckRevenueDays] = field(default_factory=list)
    trend: Optional[FleetTrend] = None

    def to_dict(self) -> Dict:
        return {
            "metrics": self.metrics.to_dict(),
            "score": self.score.to_dict(),
        }

    def to_breakdown_dict(self) -> Dict:
        """Detailed view: window, fleet, per-truck days and pillars."""
        metrics = self.metrics
        band, penalty = consistency_penalty(
            metrics.cv if metrics.avg_revenue_days_per_truck > 0 else None
        )
        pillars = {
            "overallUtilization": {
                "totalRevenueDays": metrics.total_revenue_days,
                "availableDays": metrics.available_days,
                "utilizationRate": metrics.utilization_rate,
            },
            "revenueDaysPerTruck": {
                "avgRevenueDaysPerTruck": metrics.avg_revenue_days_per_truck,
                "byTruck": [t.to_dict() for t in self.trucks],
            },
            "lowUtilization": {
                "lowUtilCount": metrics.low_util_truck_count,
                "lowUtilPct": metrics.low_util_pct,
            },
            "distribution": metrics.distribution.to_dict(),
            "consistency": {
                "stdDev": metrics.std_dev,
                "cv": metrics.cv,
                "penalty": penalty,
                "band": band,
            },
        }
        if self.trend is not None:
            pillars["trend"] = self.trend.to_dict()

        return {
            "window": metrics.period.to_dict(),
            "fleet": {
                "truckCount": metrics.active_truck_count,
                "fleetBand": metrics.fleet_band.value,
                "lowUtilThresholdDays": metrics.low_util_threshold_days,
            },
            "pillars": pillars,
            "score": self.score.to_dict(),
        }


# ═══════════════════════════════════════════════════════════════════════════════
# PERIOD RESOLUTION
# ═══════════════════════════════════════════════════════════════════════════════

def to_calendar_date(value) -> date:
    """Truncate a datetime to its calendar date (dates pass through)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def resolve_period(time_range, now) -> Period:
    """
    Map a range selector to a concrete inclusive window.

    Args:
        time_range: TimeRange or its string value ("month", "90d", "180d", "365d")
        now: Reference instant (datetime or date)

    Returns:
        Period

    Raises:
        InvalidRangeError: selector is not one of the supported ranges
    """
    selected = TimeRange.parse(time_range)
    today = to_calendar_date(now)

    if selected == TimeRange.MONTH:
        days_in_month = calendar.monthrange(today.year, today.month)[1]
        return Period(
            start=today.replace(day=1),
            end=today.replace(day=days_in_month),
            day_count=days_in_month,
        )

    days = ROLLING_RANGE_DAYS[selected]
    return Period(start=today - timedelta(days=days - 1), end=today, day_count=days)


def month_period(year: int, month: int) -> Period:
    """Full calendar month as a Period."""
    days_in_month = calendar.monthrange(year, month)[1]
    return Period(
        start=date(year, month, 1),
        end=date(year, month, days_in_month),
        day_count=days_in_month,
    )


def trend_month_periods(now, months: int = TREND_MONTHS) -> List[Period]:
    """The last `months` calendar months, oldest first, ending with the current one."""
    today = to_calendar_date(now)
    periods = []
    for offset in range(months - 1, -1, -1):
        year, month = divmod(today.year * 12 + today.month - 1 - offset, 12)
        periods.append(month_period(year, month + 1))
    return periods


# ═══════════════════════════════════════════════════════════════════════════════
# REVENUE-DAY AGGREGATION
# ═══════════════════════════════════════════════════════════════════════════════

def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day in [start, end]."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def load_overlaps_period(load: LoadRecord, period: Period) -> bool:
    """True if the load has a truck and touches the period."""
    if load.truck_id is None:
        return False
    if load.pickup_date > period.end:
        return False
    return load.delivery_date is None or load.delivery_date >= period.start


def clip_load_window(load: LoadRecord, period: Period) -> Optional[Tuple[date, date]]:
    """
    Clip a load's [pickup, delivery] window to the period.

    Open-ended loads (no delivery date) run to the end of the period.
    Returns None when nothing of the load falls inside the period.
    """
    clipped_start = max(period.start, load.pickup_date)
    clipped_end = min(period.end, load.delivery_date or period.end)
    if clipped_start > clipped_end:
        return None
    return clipped_start, clipped_end


def collect_revenue_day_sets(
    period: Period,
    trucks: Sequence[TruckRecord],
    loads: Iterable[LoadRecord],
) -> Dict[str, Set[date]]:
    """
    Build the set of distinct revenue days for every active truck.

    Trucks without loads keep an empty set. Loads on trucks that are not in
    `trucks` (inactive, other company) are ignored.
    """
    day_sets: Dict[str, Set[date]] = {t.id: set() for t in trucks}

    for load in loads:
        if not load_overlaps_period(load, period):
            continue
        days = day_sets.get(load.truck_id)
        if days is None:
            continue
        window = clip_load_window(load, period)
        if window is None:
            continue
        days.update(iter_days(*window))

    return day_sets


def aggregate_revenue_days(
    period: Period,
    trucks: Sequence[TruckRecord],
    loads: Iterable[LoadRecord],
) -> Dict[str, int]:
    """Revenue-day count per active truck (|day set|, never above period.day_count)."""
    day_sets = collect_revenue_day_sets(period, trucks, loads)
    return {truck_id: len(days) for truck_id, days in day_sets.items()}


def merge_date_intervals(intervals: Iterable[Tuple[date, date]]) -> List[Tuple[date, date]]:
    """Union closed date intervals; touching intervals (d, d+1) are merged."""
    merged: List[Tuple[date, date]] = []
    for start, end in sorted(intervals):
        if merged and start <= merged[-1][1] + timedelta(days=1):
            last_start, last_end = merged[-1]
            merged[-1] = (last_start, max(last_end, end))
        else:
            merged.append((start, end))
    return merged


def count_merged_days(intervals: Iterable[Tuple[date, date]]) -> int:
    """Total inclusive day length of the union of the given intervals."""
    return sum((end - start).days + 1 for start, end in merge_date_intervals(intervals))


def aggregate_revenue_days_merged(
    period: Period,
    trucks: Sequence[TruckRecord],
    loads: Iterable[LoadRecord],
) -> Dict[str, int]:
    """
    Interval-merge version of aggregate_revenue_days.

    Linear in the number of loads instead of the number of days; must return
    exactly the same counts as the day-set version.
    """
    windows: Dict[str, List[Tuple[date, date]]] = {t.id: [] for t in trucks}

    for load in loads:
        if not load_overlaps_period(load, period) or load.truck_id not in windows:
            continue
        window = clip_load_window(load, period)
        if window is not None:
            windows[load.truck_id].append(window)

    return {truck_id: count_merged_days(w) for truck_id, w in windows.items()}


# ═══════════════════════════════════════════════════════════════════════════════
# STATISTICS
# ═══════════════════════════════════════════════════════════════════════════════

def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty list."""
    if not values:
        return 0.0
    return statistics.fmean(values)


def std_dev(values: Sequence[float]) -> float:
    """Population standard deviation (divide by N), 0 for an empty list."""
    if not values:
        return 0.0
    return statistics.pstdev(values)


def coefficient_of_variation(values: Sequence[float]) -> float:
    """std_dev / mean, 0 when the mean is 0."""
    avg = mean(values)
    if avg <= 0:
        return 0.0
    return std_dev(values) / avg


def utilization_rate(avg_revenue_days: float, day_count: int) -> float:
    if day_count <= 0:
        return 0.0
    return avg_revenue_days / day_count


def consistency_penalty(cv: Optional[float]) -> Tuple[str, int]:
    """
    Band label and penalty (0 / -2 / -4 / -5) for fleet dispersion.

    None means CV is undefined (mean of 0): band "unknown", no penalty.
    """
    if cv is None:
        return "unknown", 0
    for max_cv, label, penalty in CONSISTENCY_BANDS:
        if cv <= max_cv:
            return label, penalty
    return CONSISTENCY_FLOOR


def classify_consistency(cv: Optional[float]) -> str:
    return consistency_penalty(cv)[0]


# ═══════════════════════════════════════════════════════════════════════════════
# FLEET BAND & DISTRIBUTION
# ═══════════════════════════════════════════════════════════════════════════════

def classify_fleet_band(active_truck_count: int) -> FleetSizeBand:
    if active_truck_count < FLEET_BAND_LIMITS["small_below"]:
        return FleetSizeBand.SMALL
    if active_truck_count <= FLEET_BAND_LIMITS["mid_max"]:
        return FleetSizeBand.MID
    return FleetSizeBand.LARGE


def low_util_threshold(band: FleetSizeBand) -> int:
    return LOW_UTIL_THRESHOLDS[band]


def count_low_utilization(revenue_days: Iterable[int], threshold: int) -> int:
    """Trucks strictly below the threshold."""
    return sum(1 for days in revenue_days if days < threshold)


def low_util_percentage(low_count: int, active_truck_count: int) -> float:
    if active_truck_count == 0:
        return 0.0
    return low_count / active_truck_count


def bucket_distribution(revenue_days: Iterable[int]) -> DistributionBuckets:
    """Place every truck in exactly one of >=20, 18-19, 15-17, <15."""
    buckets = DistributionBuckets()
    for days in revenue_days:
        if days >= 20:
            buckets.ge20 += 1
        elif days >= 18:
            buckets.between_18_and_19 += 1
        elif days >= 15:
            buckets.between_15_and_17 += 1
        else:
            buckets.lt15 += 1
    return buckets


# ═══════════════════════════════════════════════════════════════════════════════
# SCORING
# ═══════════════════════════════════════════════════════════════════════════════

def score_utilization(avg_revenue_days: float) -> FleetUtilizationScore:
    """
    Map average revenue days per truck to points and tier.

    >= 20 -> 25 STRONG, >= 18 -> 20 HEALTHY, >= 15 -> 12 CAUTION, else 5 NEEDS_WORK.
    VERY_HIGH_UTILIZATION is added at >= 23 days on top of the tier.
    """
    points, tier = FLOOR_SCORE
    for min_days, breakpoint_points, breakpoint_tier in SCORE_BREAKPOINTS:
        if avg_revenue_days >= min_days:
            points, tier = breakpoint_points, breakpoint_tier
            break

    flags = []
    if avg_revenue_days >= VERY_HIGH_UTILIZATION_DAYS:
        flags.append(UtilizationFlag.VERY_HIGH_UTILIZATION)

    return FleetUtilizationScore(total_points=points, tier=tier, flags=flags)


def trend_slope(monthly_averages: Sequence[float]) -> float:
    """Days-per-month change from the first to the last month."""
    if len(monthly_averages) < 2:
        return 0.0
    return (monthly_averages[-1] - monthly_averages[0]) / (len(monthly_averages) - 1)


def score_trend(slope: float) -> Tuple[int, Momentum]:
    """
    Map the monthly slope to points and momentum.

    |slope| < 0.5 -> FLAT (0), >= 1.0 -> IMPROVING_STRONG (+3),
    >= 0.5 -> IMPROVING_MILD (+1), <= -1.0 -> DECLINING_STRONG (-3),
    otherwise DECLINING_MILD (-1).
    """
    if abs(slope) < TREND_FLAT_BELOW:
        momentum = Momentum.FLAT
    elif slope >= TREND_STRONG_FROM:
        momentum = Momentum.IMPROVING_STRONG
    elif slope > 0:
        momentum = Momentum.IMPROVING_MILD
    elif slope <= -TREND_STRONG_FROM:
        momentum = Momentum.DECLINING_STRONG
    else:
        momentum = Momentum.DECLINING_MILD
    return TREND_POINTS[momentum], momentum


# ═══════════════════════════════════════════════════════════════════════════════
# METRICS ASSEMBLY
# ═══════════════════════════════════════════════════════════════════════════════

def build_fleet_utilization(
    period: Period,
    trucks: Sequence[TruckRecord],
    loads: Iterable[LoadRecord],
) -> FleetUtilizationResult:
    """
    Compute metrics and score from a snapshot of trucks and loads.

    Pure: no I/O, no shared state.
    """
    revenue_by_truck = aggregate_revenue_days(period, trucks, loads)
    revenue_days = [revenue_by_truck[t.id] for t in trucks]
    truck_count = len(trucks)

    avg = mean(revenue_days)
    band = classify_fleet_band(truck_count)
    threshold = low_util_threshold(band)
    low_count = count_low_utilization(revenue_days, threshold)

    metrics = FleetUtilizationMetrics(
        period=period,
        active_truck_count=truck_count,
        fleet_band=band,
        avg_revenue_days_per_truck=avg,
        utilization_rate=utilization_rate(avg, period.day_count),
        low_util_threshold_days=threshold,
        low_util_truck_count=low_count,
        low_util_pct=low_util_percentage(low_count, truck_count),
        distribution=bucket_distribution(revenue_days),
        std_dev=std_dev(revenue_days),
        cv=coefficient_of_variation(revenue_days),
        # TODO: feed from build_fleet_trend once the readiness payload carries momentum; stays 0 until then
        trend_delta=0.0,
    )

    breakdown = [
        TruckRevenueDays(
            truck_id=t.id,
            unit_number=t.unit_number,
            status=t.status,
            revenue_days=revenue_by_truck[t.id],
            is_low_util=revenue_by_truck[t.id] < threshold,
        )
        for t in trucks
    ]

    return FleetUtilizationResult(
        metrics=metrics,
        score=score_utilization(avg),
        trucks=breakdown,
    )


def build_fleet_trend(
    monthly_snapshots: Sequence[Tuple[Period, Iterable[LoadRecord]]],
    trucks: Sequence[TruckRecord],
) -> FleetTrend:
    """
    Momentum over consecutive calendar months.

    Each month is aggregated exactly like the main period; the slope is
    (last month avg - first month avg) / (months - 1).
    """
    months = []
    for period, loads in monthly_snapshots:
        revenue_by_truck = aggregate_revenue_days(period, trucks, loads)
        avg = mean([revenue_by_truck[t.id] for t in trucks])
        months.append(TrendMonth(period=period, avg_revenue_days_per_truck=avg))

    slope = trend_slope([m.avg_revenue_days_per_truck for m in months])
    points, momentum = score_trend(slope)
    return FleetTrend(
        months=months,
        slope_days_per_month=slope,
        points=points,
        momentum=momentum,
    )


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN ENGINE CLASS
# ═══════════════════════════════════════════════════════════════════════════════

class FleetUtilizationEngine:
    """
    Fleet Utilization Engine

    Reads active trucks and overlapping loads for one company from the fleet
    repository (one snapshot per call) and runs the pure aggregation above.
    Holds no state between calls, so a single instance can serve concurrent
    requests.
    """

    def __init__(self, repository):
        """
        Args:
            repository: Object exposing list_active_trucks(company_id) and
                        list_loads_overlapping(company_id, start, end)
        """
        self.repository = repository

    def calculate(
        self, company_id: str, time_range, now, include_trend: bool = False
    ) -> FleetUtilizationResult:
        """
        Resolve the period, read the snapshot and compute the result.

        With include_trend, the last TREND_MONTHS calendar months are read
        through the same repository and attached as result.trend.

        Raises:
            InvalidRangeError: unknown range selector (raised before any read)
            DataUnavailableError: the repository could not be read
        """
        period = resolve_period(time_range, now)

        trucks = self.repository.list_active_trucks(company_id)
        loads = self.repository.list_loads_overlapping(company_id, period.start, period.end)
        logger.debug(
            f"Fleet utilization for {company_id}: {len(trucks)} active trucks, "
            f"{len(loads)} loads in {period.start}..{period.end}"
        )

        result = build_fleet_utilization(period, trucks, loads)
        if include_trend:
            result.trend = self._calculate_trend(company_id, trucks, now)
        logger.info(
            f"Fleet utilization {company_id} [{TimeRange.parse(time_range).value}]: "
            f"avg={result.metrics.avg_revenue_days_per_truck:.2f} days, "
            f"tier={result.score.tier.value}"
        )
        return result

    def _calculate_trend(self, company_id: str, trucks, now) -> FleetTrend:
        snapshots = [
            (month, self.repository.list_loads_overlapping(company_id, month.start, month.end))
            for month in trend_month_periods(now)
        ]
        trend = build_fleet_trend(snapshots, trucks)
        logger.debug(
            f"Fleet trend for {company_id}: slope={trend.slope_days_per_month:.2f} "
            f"days/month, momentum={trend.momentum.value}"
        )
        return trend
