import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from app.main import app
from app.api.bookings import get_booking_store
from app.models.booking_models import StoredBooking
from app.services.booking_store import SchemaCheckedStore, StoreError


class InMemoryBookingStore:
    """Dict-backed stand-in for the Mongo collection."""

    def __init__(self):
        self.documents = {}
        self.closed = False

    async def create(self, record):
        booking_id = str(ObjectId())
        self.documents[booking_id] = record.model_dump()
        return StoredBooking(id=booking_id, **record.model_dump())

    async def get(self, booking_id):
        doc = self.documents.get(booking_id)
        if doc is None:
            return None
        return StoredBooking(id=booking_id, **doc)

    async def close(self):
        self.closed = True


class UnreachableStore(InMemoryBookingStore):
    async def create(self, record):
        raise StoreError(ConnectionError("connection refused: 127.0.0.1:27017"))


@pytest.fixture
def memory_store():
    return InMemoryBookingStore()


@pytest.fixture
def client(memory_store):
    store = SchemaCheckedStore(memory_store)
    app.dependency_overrides[get_booking_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def down_client():
    app.dependency_overrides[get_booking_store] = lambda: SchemaCheckedStore(UnreachableStore())
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def valid_payload():
    return {
        "pickuplocation": "A St",
        "dropofflocation": "B Ave",
        "vantype": "Medium",
        "deliverytime": "2025-01-01T10:00:00Z",
    }
