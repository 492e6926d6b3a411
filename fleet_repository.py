"""
Fleet Repository - read-only access to trucks and loads

The utilization engine only needs two reads per request:
- list_active_trucks(company_id)
- list_loads_overlapping(company_id, period_start, period_end)

SQLFleetRepository serves them from MySQL; InMemoryFleetRepository is used
for tests and local runs without a database.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from database_mysql import get_db_connection, get_sqlalchemy_engine
from errors import DataUnavailableError
from models import LoadRecord, TruckRecord, TruckStatus

logger = logging.getLogger(__name__)


class FleetRepository(ABC):
    """Read contract consumed by the utilization engine."""

    @abstractmethod
    def list_active_trucks(self, company_id: str) -> List[TruckRecord]:
        """ACTIVE trucks of the company; DataUnavailableError if it is unknown."""
        pass

    @abstractmethod
    def list_loads_overlapping(
        self, company_id: str, period_start: date, period_end: date
    ) -> List[LoadRecord]:
        """Non-deleted, truck-linked loads touching [period_start, period_end]."""
        pass


class SQLFleetRepository(FleetRepository):
    """MySQL-backed repository (trucks / loads / companies tables)."""

    COMPANY_QUERY = text("SELECT id FROM companies WHERE id = :company_id")

    ACTIVE_TRUCKS_QUERY = text(
        """
        SELECT id, unit_number, status
        FROM trucks
        WHERE company_id = :company_id
          AND status = :status
        ORDER BY unit_number, id
        """
    )

    # pickup/delivery are DATETIME columns: compare against the day after the
    # period end so loads picked up late on the last day still qualify.
    OVERLAPPING_LOADS_QUERY = text(
        """
        SELECT id, truck_id, pickup_date, delivery_date
        FROM loads
        WHERE company_id = :company_id
          AND is_soft_deleted = 0
          AND truck_id IS NOT NULL
          AND pickup_date IS NOT NULL
          AND pickup_date < :end_exclusive
          AND (delivery_date IS NULL OR delivery_date >= :period_start)
        """
    ).bindparams(
        bindparam("period_start", type_=DateTime()),
        bindparam("end_exclusive", type_=DateTime()),
    ).columns(pickup_date=DateTime(), delivery_date=DateTime())

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine

    def _get_engine(self) -> Engine:
        if self.engine is None:
            self.engine = get_sqlalchemy_engine()
        return self.engine

    def list_active_trucks(self, company_id: str) -> List[TruckRecord]:
        """Active trucks for the company; raises if the company is unknown."""
        try:
            with get_db_connection(self._get_engine()) as conn:
                company = conn.execute(
                    self.COMPANY_QUERY, {"company_id": company_id}
                ).first()
                if company is None:
                    raise DataUnavailableError(
                        f"Company not found: {company_id}",
                        details={"company_id": company_id},
                    )
                rows = conn.execute(
                    self.ACTIVE_TRUCKS_QUERY,
                    {"company_id": company_id, "status": TruckStatus.ACTIVE.value},
                ).mappings().all()
            trucks = [TruckRecord(**row) for row in rows]
        except (SQLAlchemyError, ValidationError) as e:
            logger.error(f"Failed to read trucks for {company_id}: {e}")
            raise DataUnavailableError(
                "Truck data unavailable", details={"company_id": company_id}
            ) from e

        logger.debug(f"Fetched {len(trucks)} active trucks for {company_id}")
        return trucks

    def list_loads_overlapping(
        self, company_id: str, period_start: date, period_end: date
    ) -> List[LoadRecord]:
        """Truck-linked, non-deleted loads touching [period_start, period_end]."""
        params = {
            "company_id": company_id,
            "period_start": datetime.combine(period_start, time.min),
            "end_exclusive": datetime.combine(period_end + timedelta(days=1), time.min),
        }
        try:
            with get_db_connection(self._get_engine()) as conn:
                rows = conn.execute(self.OVERLAPPING_LOADS_QUERY, params).mappings().all()
            loads = [LoadRecord(**row) for row in rows]
        except (SQLAlchemyError, ValidationError) as e:
            logger.error(f"Failed to read loads for {company_id}: {e}")
            raise DataUnavailableError(
                "Load data unavailable", details={"company_id": company_id}
            ) from e

        logger.debug(f"Fetched {len(loads)} loads for {company_id}")
        return loads


class InMemoryFleetRepository(FleetRepository):
    """Dictionary-backed repository with the same filtering rules as SQL."""

    def __init__(self):
        self._trucks: Dict[str, List[TruckRecord]] = {}
        self._loads: Dict[str, List[LoadRecord]] = {}

    def add_company(self, company_id: str) -> None:
        self._trucks.setdefault(company_id, [])
        self._loads.setdefault(company_id, [])

    def add_truck(self, company_id: str, truck: TruckRecord) -> None:
        self.add_company(company_id)
        self._trucks[company_id].append(truck)

    def add_load(self, company_id: str, load: LoadRecord) -> None:
        self.add_company(company_id)
        self._loads[company_id].append(load)

    def _require_company(self, company_id: str) -> None:
        if company_id not in self._trucks:
            raise DataUnavailableError(
                f"Company not found: {company_id}", details={"company_id": company_id}
            )

    def list_active_trucks(self, company_id: str) -> List[TruckRecord]:
        self._require_company(company_id)
        return [t for t in self._trucks[company_id] if t.status == TruckStatus.ACTIVE]

    def list_loads_overlapping(
        self, company_id: str, period_start: date, period_end: date
    ) -> List[LoadRecord]:
        self._require_company(company_id)
        return [
            load
            for load in self._loads[company_id]
            if not load.is_soft_deleted
            and load.truck_id is not None
            and load.pickup_date <= period_end
            and (load.delivery_date is None or load.delivery_date >= period_start)
        ]


_repository: Optional[FleetRepository] = None


def get_fleet_repository() -> FleetRepository:
    """Shared SQL repository (lazy, engine created on first query)."""
    global _repository
    if _repository is None:
        _repository = SQLFleetRepository()
    return _repository
