"""
Shared test fixtures.

Services are built over in-memory repositories and a temporary local
storage file, so tests never touch Supabase, Discord or the jobs gateway.
"""

import sys
from pathlib import Path

# Add project root to Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import copy
import pytest
from datetime import datetime, timezone
from typing import Generator

from config import LocalStorage
from repositories import InMemoryRepository, BUSINESSES_TABLE, ITEMS_TABLE
from repositories.seed import SEED_BUSINESSES, SEED_ITEMS
from services.webhook_service import WebhookService
from services.business_service import BusinessService
from services.item_service import ItemService
from services.item_import_service import ItemImportService
from services.item_code_service import ItemCodeService
from services.sales_service import SalesService
from services.job_service import JobService


# ===================
# MOCK SUPABASE CLIENT
# ===================

class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: list = None, count: int = None):
        self.data = data or []
        self.count = count if count is not None else len(self.data)


class MockSupabaseQuery:
    """
    Mock Supabase query builder with chainable methods.

    eq() filters rows; insert/update/delete change the table's row list
    when execute() runs, like the real client.
    """

    def __init__(self, table: "MockSupabaseTable"):
        self._table = table
        self._filters = []
        self._action = "select"
        self._payload = None

    def select(self, *args, **kwargs):
        self._action = "select"
        return self

    def insert(self, data):
        self._action = "insert"
        self._payload = data
        return self

    def update(self, data):
        self._action = "update"
        self._payload = data
        return self

    def delete(self):
        self._action = "delete"
        return self

    def eq(self, column, value):
        self._filters.append((column, value))
        return self

    def order(self, column, **kwargs):
        return self

    def limit(self, count):
        return self

    def _matches(self, row: dict) -> bool:
        return all(row.get(column) == value for column, value in self._filters)

    def execute(self) -> MockSupabaseResponse:
        rows = self._table.rows
        self._table.calls.append(self._action)

        if self._table.error is not None:
            raise self._table.error

        if self._action == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for data in payload:
                row = dict(data)
                row["id"] = max((r["id"] for r in rows), default=0) + 1
                row.setdefault("fecha_creacion", datetime.now(timezone.utc).isoformat())
                rows.append(row)
                inserted.append(copy.deepcopy(row))
            return MockSupabaseResponse(data=inserted)

        matched = [row for row in rows if self._matches(row)]

        if self._action == "update":
            for row in matched:
                row.update(self._payload)
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        if self._action == "delete":
            self._table.rows = [row for row in rows if not self._matches(row)]
            return MockSupabaseResponse(data=copy.deepcopy(matched))

        return MockSupabaseResponse(data=copy.deepcopy(matched))


class MockSupabaseTable:
    """Mock Supabase table holding its rows."""

    def __init__(self, rows: list = None):
        self.rows = [dict(r) for r in rows or []]
        self.calls = []
        self.error = None

    def _query(self) -> MockSupabaseQuery:
        return MockSupabaseQuery(self)

    def select(self, *args, **kwargs):
        return self._query().select(*args, **kwargs)

    def insert(self, data):
        return self._query().insert(data)

    def update(self, data):
        return self._query().update(data)

    def delete(self):
        return self._query().delete()


class MockSupabaseClient:
    """Mock Supabase client."""

    def __init__(self):
        self._tables = {}

    def set_table_data(self, table_name: str, data: list):
        """Configure mock rows for a table."""
        self._tables[table_name] = MockSupabaseTable(data)

    def fail_table(self, table_name: str, error: Exception):
        """Make every query on a table raise."""
        self.table(table_name).error = error

    def table(self, name: str) -> MockSupabaseTable:
        """Get mock table."""
        if name not in self._tables:
            self._tables[name] = MockSupabaseTable()
        return self._tables[name]


# ===================
# FIXTURES
# ===================

@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """
    Create a mock Supabase client.

    Usage:
        def test_something(mock_supabase):
            mock_supabase.set_table_data("negocios", [
                {"id": 1, "nombre": "Taller", ...}
            ])
    """
    return MockSupabaseClient()


@pytest.fixture
def local_storage(tmp_path) -> LocalStorage:
    """LocalStorage writing to a temporary file."""
    return LocalStorage(tmp_path / "local_storage.json")


@pytest.fixture
def business_repository() -> InMemoryRepository:
    """Businesses repository with the sample businesses."""
    return InMemoryRepository(BUSINESSES_TABLE, copy.deepcopy(SEED_BUSINESSES))


@pytest.fixture
def item_repository() -> InMemoryRepository:
    """Items repository with the sample items."""
    return InMemoryRepository(ITEMS_TABLE, copy.deepcopy(SEED_ITEMS))


@pytest.fixture
def webhook_service(local_storage) -> WebhookService:
    return WebhookService(storage=local_storage)


@pytest.fixture
def business_service(business_repository, webhook_service) -> BusinessService:
    return BusinessService(repository=business_repository, webhooks=webhook_service)


@pytest.fixture
def item_service(item_repository, business_service, webhook_service) -> ItemService:
    return ItemService(
        repository=item_repository,
        businesses=business_service,
        importer=ItemImportService(),
        code=ItemCodeService(),
        webhooks=webhook_service,
    )


@pytest.fixture
def sales_service(business_service, item_repository) -> SalesService:
    return SalesService(businesses=business_service, items=item_repository)


@pytest.fixture
def job_service(local_storage) -> JobService:
    return JobService(storage=local_storage)


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(
    monkeypatch,
    business_service,
    item_service,
    sales_service,
    webhook_service,
    job_service
) -> Generator:
    """
    FastAPI test client whose routes use the fixture services.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/businesses")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    monkeypatch.setattr("routes.businesses.get_business_service", lambda: business_service)
    monkeypatch.setattr("routes.businesses.get_item_service", lambda: item_service)
    monkeypatch.setattr("routes.items.get_item_service", lambda: item_service)
    monkeypatch.setattr("routes.sales.get_sales_service", lambda: sales_service)
    monkeypatch.setattr("routes.dashboard.get_sales_service", lambda: sales_service)
    monkeypatch.setattr("routes.webhooks.get_webhook_service", lambda: webhook_service)
    monkeypatch.setattr("routes.jobs.get_job_service", lambda: job_service)
    monkeypatch.setattr("routes.config.get_job_service", lambda: job_service)

    yield TestClient(app)
