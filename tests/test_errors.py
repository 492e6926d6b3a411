"""
Tests for Centralized Error Handling
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


class TestCustomExceptions:
    """Test custom exception classes"""

    def test_readiness_error_creation(self):
        """Should create base error with message"""
        from errors import ErrorCategory, ReadinessError

        error = ReadinessError("Something went wrong")

        assert error.message == "Something went wrong"
        assert error.status_code == 500
        assert error.category == ErrorCategory.INTERNAL
        assert error.details == {}

    def test_invalid_range_error(self):
        """Should be a 400 validation error listing the allowed ranges"""
        from errors import ErrorCategory, InvalidRangeError

        error = InvalidRangeError("1y")

        assert error.status_code == 400
        assert error.category == ErrorCategory.VALIDATION
        assert error.time_range == "1y"
        assert error.details["range"] == "1y"
        assert error.details["allowed"] == ["month", "90d", "180d", "365d"]

    def test_data_unavailable_error(self):
        """Should be a 503 database error"""
        from errors import DataUnavailableError, ErrorCategory

        error = DataUnavailableError("Company not found", details={"company_id": "x"})

        assert error.status_code == 503
        assert error.category == ErrorCategory.DATABASE
        assert error.details["company_id"] == "x"


class TestBuildErrorResponse:
    """Test error response formatting"""

    def test_readiness_error_response(self):
        from errors import InvalidRangeError, build_error_response

        response = build_error_response(InvalidRangeError("week"))

        assert response["error"] is True
        assert response["category"] == "validation"
        assert response["status_code"] == 400
        assert "week" in response["message"]
        assert "timestamp" in response

    def test_generic_exception_response(self):
        from errors import build_error_response

        response = build_error_response(ValueError("boom"))

        assert response["category"] == "internal"
        assert response["status_code"] == 500
        assert response["message"] == "boom"

    def test_include_trace(self):
        from errors import build_error_response

        try:
            raise RuntimeError("traced")
        except RuntimeError as e:
            response = build_error_response(e, include_trace=True)

        assert "trace" in response
        assert "RuntimeError" in response["trace"]


class TestExceptionHandlers:
    """Test FastAPI handler registration"""

    @pytest.fixture
    def client(self):
        from errors import DataUnavailableError, register_exception_handlers

        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/unavailable")
        def unavailable():
            raise DataUnavailableError("Load data unavailable")

        return TestClient(app)

    def test_readiness_error_mapped_to_status(self, client):
        response = client.get("/unavailable")

        assert response.status_code == 503
        body = response.json()
        assert body["category"] == "database"
        assert body["message"] == "Load data unavailable"
