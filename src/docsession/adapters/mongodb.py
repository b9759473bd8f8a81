# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""MongoDB-backed document store using Motor."""

from __future__ import annotations

from typing import Any

from bson import ObjectId

from docsession.exceptions import DocumentNotFoundException


class MongoDocumentStore:
    """Document store backed by a ``motor.motor_asyncio.AsyncIOMotorDatabase``.

    Each session collection maps to a Mongo collection of the same name.
    The document identifier is stored as ``_id``; identifiers are allocated
    from :class:`bson.ObjectId`.
    """

    def __init__(self, database: Any) -> None:
        self._database = database

    def collection(self, name: str) -> MongoCollection:
        return MongoCollection(self._database[name], name)


class MongoCollection:
    def __init__(self, collection: Any, name: str) -> None:
        self._collection = collection
        self._name = name

    def document(self, document_id: str) -> MongoDocument:
        return MongoDocument(self._collection, self._name, document_id)

    def new_id(self) -> str:
        return str(ObjectId())


class MongoDocument:
    def __init__(self, collection: Any, name: str, document_id: str) -> None:
        self._collection = collection
        self._name = name
        self._id = document_id

    async def get(self) -> dict[str, Any]:
        raw = await self._collection.find_one({"_id": self._id})
        if raw is None:
            raise DocumentNotFoundException(
                f"Document '{self._name}/{self._id}' not found",
                context={"collection": self._name, "id": self._id},
            )
        raw.pop("_id", None)
        return dict(raw)

    async def set(self, data: dict[str, Any]) -> None:
        await self._collection.replace_one({"_id": self._id}, dict(data), upsert=True)
