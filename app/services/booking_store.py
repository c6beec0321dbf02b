from typing import Optional, Protocol
from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo import AsyncMongoClient
from pymongo.errors import CollectionInvalid, PyMongoError

from app.core.config import Settings
from app.core.logger import logger
from app.models.booking_models import (
    BOOKING_JSON_SCHEMA,
    BookingDocument,
    NormalizedBooking,
    StoredBooking,
)

class StoreError(Exception):
    """Insert or read against the booking store failed. `cause` is the underlying error."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause))
        self.cause = cause

    def to_dict(self) -> dict:
        return {"name": type(self.cause).__name__, "message": str(self.cause)}

class BookingStore(Protocol):
    async def create(self, record: NormalizedBooking) -> StoredBooking: ...

    async def get(self, booking_id: str) -> Optional[StoredBooking]: ...

    async def close(self) -> None: ...

def _to_stored(document: dict) -> StoredBooking:
    data = {k: v for k, v in document.items() if k != "_id"}
    return StoredBooking(id=str(document["_id"]), **data)

# Used when MONGODB_URL carries no database path
DEFAULT_DATABASE = "FASBookings"

class MongoBookingStore:
    """
    Bookings collection in MongoDB.
    One instance owns one client; build it at startup and close it at shutdown.
    """

    def __init__(self, client: AsyncMongoClient, collection_name: str = "Bookings"):
        self._client = client
        self._db = client.get_default_database(DEFAULT_DATABASE)
        self.collection_name = collection_name
        self.collection = self._db[collection_name]

    @classmethod
    def from_settings(cls, settings: Settings) -> "MongoBookingStore":
        # Connects lazily, an unreachable server surfaces on the first insert
        client = AsyncMongoClient(settings.MONGODB_URL, tz_aware=True)
        return cls(client, settings.BOOKINGS_COLLECTION)

    async def ensure_schema(self) -> bool:
        """
        Installs the $jsonSchema validator so the database rejects invalid bookings itself.
        Returns False (and logs) when the server can't be reached.
        """
        validator = {"$jsonSchema": BOOKING_JSON_SCHEMA}
        try:
            try:
                await self._db.create_collection(self.collection_name, validator=validator)
                logger.info(f"🗂️ Created collection '{self.collection_name}' with schema validator")
            except CollectionInvalid:
                await self._db.command(
                    "collMod", self.collection_name,
                    validator=validator, validationLevel="strict",
                )
                logger.info(f"🗂️ Schema validator refreshed on '{self.collection_name}'")
            return True
        except PyMongoError as e:
            logger.error(f"❌ MongoDB connection error: {e}")
            return False

    async def create(self, record: NormalizedBooking) -> StoredBooking:
        document = record.model_dump()
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise StoreError(e) from e
        return StoredBooking(id=str(result.inserted_id), **record.model_dump())

    async def get(self, booking_id: str) -> Optional[StoredBooking]:
        try:
            oid = ObjectId(booking_id)
        except (InvalidId, TypeError):
            return None
        try:
            document = await self.collection.find_one({"_id": oid})
        except PyMongoError as e:
            raise StoreError(e) from e
        if document is None:
            return None
        return _to_stored(document)

    async def close(self) -> None:
        await self._client.close()

class SchemaCheckedStore:
    """
    Wraps another store and checks every record against BookingDocument before it
    is handed on. Records that never went through the request validator still
    get rejected here.
    """

    def __init__(self, inner: BookingStore):
        self.inner = inner

    async def create(self, record: NormalizedBooking) -> StoredBooking:
        try:
            BookingDocument.model_validate(record.model_dump())
        except ValidationError as e:
            logger.warning(f"⚠️ Booking rejected by storage schema: {e.error_count()} error(s)")
            raise StoreError(e) from e
        return await self.inner.create(record)

    async def get(self, booking_id: str) -> Optional[StoredBooking]:
        return await self.inner.get(booking_id)

    async def close(self) -> None:
        await self.inner.close()
