"""
Expansion Readiness - public entry point

Combines the fleet utilization metrics and score into one verdict:
overall score + "ready to expand" flag. Callers (API routes, reports) should
go through calculate_expansion_readiness() rather than the engine directly,
so ready_to_expand is derived in exactly one place.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional
from zoneinfo import ZoneInfo

from fleet_repository import FleetRepository, get_fleet_repository
from fleet_utilization_engine import (
    FleetUtilizationEngine,
    FleetUtilizationResult,
    UtilizationTier,
)
from settings import READINESS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReadinessResult:
    """Fleet utilization result plus the derived expansion verdict"""

    fleet_utilization: FleetUtilizationResult
    overall_score: int
    ready_to_expand: bool

    def to_dict(self) -> Dict:
        return {
            "fleetUtilization": self.fleet_utilization.to_dict(),
            "overallScore": self.overall_score,
            "readyToExpand": self.ready_to_expand,
        }


def compose_readiness(fleet_utilization: FleetUtilizationResult) -> ReadinessResult:
    """Derive overall score and ready_to_expand from the utilization score."""
    score = fleet_utilization.score
    return ReadinessResult(
        fleet_utilization=fleet_utilization,
        overall_score=score.total_points,
        ready_to_expand=score.tier == UtilizationTier.STRONG,
    )


def business_now() -> datetime:
    """Current time in the configured business timezone."""
    return datetime.now(ZoneInfo(READINESS.business_tz))


def calculate_expansion_readiness(
    company_id: str,
    time_range,
    repository: Optional[FleetRepository] = None,
    now: Optional[datetime] = None,
    include_trend: bool = False,
) -> ReadinessResult:
    """
    Score a company's expansion readiness for a time range.

    Args:
        company_id: Company whose fleet is scored
        time_range: "month", "90d", "180d" or "365d"
        repository: Fleet store to read from (defaults to the MySQL repository)
        now: Reference instant (defaults to now in BUSINESS_TZ)
        include_trend: Also compute the monthly momentum (drill-down only)

    Returns:
        ReadinessResult

    Raises:
        InvalidRangeError: unknown time range
        DataUnavailableError: fleet store could not be read
    """
    if repository is None:
        repository = get_fleet_repository()
    engine = FleetUtilizationEngine(repository)
    fleet_utilization = engine.calculate(
        company_id, time_range, now or business_now(), include_trend=include_trend
    )
    result = compose_readiness(fleet_utilization)

    logger.info(
        f"Expansion readiness {company_id}: score={result.overall_score}, "
        f"ready={result.ready_to_expand}"
    )
    return result
