"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - Engines come from build_engine, so foreign keys are enforced as in the app
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - make_invoice inserts straight through the ORM: list/get/delete tests do not
      depend on the create endpoint
"""

from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from invoice_api.db.base import Base
from invoice_api.db.session import build_engine, create_session_factory
from invoice_api.infrastructure.database import get_db, DatabaseSessionManager
from invoice_api.models.invoice import Invoice
from invoice_api.models.tag import Tag
import invoice_api.infrastructure.database as db_module
from invoice_api.main import app


@pytest.fixture
async def test_engine():
    engine = build_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def make_invoice(test_db):
    """Factory: insert an invoice directly into the test DB."""
    counter = {"n": 0}

    async def _make(
        status: str = "draft",
        due_date: datetime | None = None,
        tags: list[Tag] | None = None,
        **fields,
    ) -> Invoice:
        counter["n"] += 1
        invoice = Invoice(
            invoice_number=fields.pop("invoice_number", f"INV-{counter['n']:03d}"),
            customer_name=fields.pop("customer_name", "John Doe"),
            title=fields.pop("title", "Monthly Service"),
            description=fields.pop("description", None),
            status=status,
            due_date=due_date,
            tags=tags or [],
        )
        test_db.add(invoice)
        await test_db.commit()
        await test_db.refresh(invoice)
        return invoice

    return _make


@pytest.fixture
def valid_payload() -> dict:
    return {
        "invoice_number": "INV-001",
        "customer_name": "John Doe",
        "title": "Monthly Service",
        "description": "Monthly maintenance service",
        "status": "paid",
        "due_date": "2024-05-15T00:00:00",
    }
