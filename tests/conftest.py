import copy

import pytest


class FakeDocumentStore:
    def __init__(self, collections: dict[str, list[dict]] | None = None):
        self.collections: dict[str, list[dict]] = copy.deepcopy(collections or {})
        self.updates: list[tuple[str, object, dict]] = []
        self.fail_ids: set = set()
        self.fail_reads: bool = False

    async def find_all(self, collection: str) -> list[dict]:
        if self.fail_reads:
            raise ConnectionError("server selection timed out")
        return copy.deepcopy(self.collections.get(collection, []))

    async def update_fields(self, collection: str, record_id, fields: dict) -> bool:
        if record_id in self.fail_ids:
            raise RuntimeError("write conflict")
        self.updates.append((collection, record_id, dict(fields)))
        for doc in self.collections.get(collection, []):
            if doc.get("_id") == record_id:
                doc.update(fields)
        return True


@pytest.fixture
def fake_store():
    return FakeDocumentStore


@pytest.fixture
def booking_dataset():
    return {
        "properties": [
            {"_id": "p1", "title": "Thamel flat", "owner": "o1"},
            {"_id": "p2", "title": "Patan house"},
        ],
        "bookings": [
            {
                "_id": "b1",
                "property": "p1",
                "user": "u1",
                "checkInDate": "2024-01-01",
                "checkOutDate": "2024-03-01",
                "status": "approved",
            },
            {
                "_id": "b2",
                "property": "p2",
                "user": "u2",
                "status": "rejected",
            },
            {
                "_id": "b3",
                "property": "p1",
                "renter": "u3",
                "owner": "o1",
                "checkIn": "2024-05-01",
                "checkOut": "2024-06-01",
                "status": "pending",
            },
            {"_id": "b4", "property": "missing", "renter": "u4", "status": "confirmed"},
        ],
    }
