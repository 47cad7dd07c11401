"""
Document store used by the schema migrations.

Migrations only need two operations: read every document of a collection
and $set a handful of fields on one document.
"""

from typing import Any, Protocol


class DocumentStore(Protocol):
    async def find_all(self, collection: str) -> list[dict[str, Any]]: ...

    async def update_fields(
        self, collection: str, record_id: Any, fields: dict[str, Any]
    ) -> bool: ...


class MongoDocumentStore:
    """DocumentStore over an async pymongo database handle."""

    def __init__(self, database: Any) -> None:
        self._db = database

    async def find_all(self, collection: str) -> list[dict[str, Any]]:
        cursor = self._db[collection].find({})
        return await cursor.to_list(None)

    async def update_fields(self, collection: str, record_id: Any, fields: dict[str, Any]) -> bool:
        # $set only the computed fields so concurrent writers keep theirs
        result = await self._db[collection].update_one({"_id": record_id}, {"$set": fields})
        return bool(result.acknowledged)
