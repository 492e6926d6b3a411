"""
API fixtures for testing
"""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from fleet_repository import InMemoryFleetRepository
from models import TruckStatus
from tests.fixtures.fleet_fixtures import make_load, make_trucks

API_COMPANY_ID = "demo-fleet"


@pytest.fixture
def api_repository():
    """
    Store behind the API: the default company with 12 active trucks,
    6 of them on open-ended loads, plus one retired truck.
    """
    repo = InMemoryFleetRepository()
    trucks = make_trucks(12)
    for truck in trucks:
        repo.add_truck(API_COMPANY_ID, truck)
    for truck in trucks[:6]:
        repo.add_load(API_COMPANY_ID, make_load(truck.id, date(2020, 1, 1)))
    repo.add_truck(API_COMPANY_ID, make_trucks(1, prefix="R", status=TruckStatus.RETIRED)[0])
    repo.add_company("empty-co")
    return repo


@pytest.fixture
def test_client(api_repository):
    """Test client with the fleet repository swapped for the in-memory one"""
    from main import app
    from routers.expansion_readiness_router import get_repository

    app.dependency_overrides[get_repository] = lambda: api_repository
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
