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
"""In-memory document store."""

from __future__ import annotations

import asyncio
import copy
import uuid
from typing import Any

from docsession.exceptions import DocumentNotFoundException


class InMemoryDocumentStore:
    """Dict-backed document store with an asyncio.Lock for safety.

    Suitable for development, testing, and single-process applications.
    Documents are copied on read and write so callers never share state
    with the store.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = asyncio.Lock()

    def collection(self, name: str) -> InMemoryCollection:
        return InMemoryCollection(self, name)

    def documents(self, name: str) -> dict[str, dict[str, Any]]:
        """Return a snapshot of every document in collection *name*."""
        return copy.deepcopy(self._collections.get(name, {}))


class InMemoryCollection:
    def __init__(self, store: InMemoryDocumentStore, name: str) -> None:
        self._store = store
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def document(self, document_id: str) -> InMemoryDocument:
        return InMemoryDocument(self._store, self._name, document_id)

    def new_id(self) -> str:
        return uuid.uuid4().hex


class InMemoryDocument:
    def __init__(self, store: InMemoryDocumentStore, collection: str, document_id: str) -> None:
        self._store = store
        self._collection = collection
        self._id = document_id

    @property
    def id(self) -> str:
        return self._id

    async def get(self) -> dict[str, Any]:
        async with self._store._lock:
            data = self._store._collections.get(self._collection, {}).get(self._id)
            if data is None:
                raise DocumentNotFoundException(
                    f"Document '{self._collection}/{self._id}' not found",
                    context={"collection": self._collection, "id": self._id},
                )
            return copy.deepcopy(data)

    async def set(self, data: dict[str, Any]) -> None:
        async with self._store._lock:
            self._store._collections.setdefault(self._collection, {})[self._id] = copy.deepcopy(data)
