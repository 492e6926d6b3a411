"""
Expansion Readiness Router
Fleet utilization score and "ready to expand" verdict per company
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from errors import ReadinessError
from expansion_readiness import calculate_expansion_readiness
from fleet_repository import FleetRepository, get_fleet_repository
from settings import READINESS

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/expansion-readiness", tags=["Expansion Readiness"])


def get_repository() -> FleetRepository:
    """Dependency hook - overridden in tests."""
    return get_fleet_repository()


RangeQuery = Query(
    None,
    alias="range",
    description="Analysis window: month, 90d, 180d or 365d",
)
CompanyQuery = Query(
    None,
    description="Company to score (defaults to DEFAULT_COMPANY_ID)",
)


@router.get("")
def get_expansion_readiness(
    time_range: Optional[str] = RangeQuery,
    company_id: Optional[str] = CompanyQuery,
    repository: FleetRepository = Depends(get_repository),
):
    """
    Get the expansion readiness verdict.

    Returns:
        {fleetUtilization: {metrics, score}, overallScore, readyToExpand}
    """
    try:
        result = calculate_expansion_readiness(
            READINESS.default_company_id if company_id is None else company_id,
            READINESS.default_time_range if time_range is None else time_range,
            repository=repository,
        )
        return result.to_dict()

    except ReadinessError:
        raise
    except Exception as e:
        logger.exception(f"Expansion readiness error: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to calculate expansion readiness"
        )


@router.get("/fleet-utilization")
def get_fleet_utilization_breakdown(
    time_range: Optional[str] = RangeQuery,
    company_id: Optional[str] = CompanyQuery,
    repository: FleetRepository = Depends(get_repository),
):
    """
    Get the fleet utilization drill-down.

    Returns:
        Window, fleet band, per-truck revenue days, utilization pillars
        (overall rate, low-utilization share, distribution, consistency
        penalty, three-month momentum)
        and the score, along with the readiness verdict.
    """
    selected_range = READINESS.default_time_range if time_range is None else time_range
    try:
        result = calculate_expansion_readiness(
            READINESS.default_company_id if company_id is None else company_id,
            selected_range,
            repository=repository,
            include_trend=True,
        )
        return {
            "range": selected_range,
            **result.fleet_utilization.to_breakdown_dict(),
            "overallScore": result.overall_score,
            "readyToExpand": result.ready_to_expand,
        }

    except ReadinessError:
        raise
    except Exception as e:
        logger.exception(f"Fleet utilization breakdown error: {e}")
        raise HTTPException(
            status_code=500, detail="Failed to compute fleet utilization"
        )
