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
"""Firestore-backed document store.

See https://firebase.google.com/docs/firestore/quotas for the document size
limit that bounds encoded sessions.
"""

from __future__ import annotations

from typing import Any

from google.api_core import exceptions as gcp_exceptions

from docsession.exceptions import DocumentNotFoundException


class FirestoreDocumentStore:
    """Document store backed by ``google.cloud.firestore.AsyncClient``.

    Identifiers are allocated by Firestore's client-side auto-id generator.
    """

    def __init__(self, client: Any) -> None:
        self._client = client

    def collection(self, name: str) -> FirestoreCollection:
        return FirestoreCollection(self._client.collection(name), name)


class FirestoreCollection:
    def __init__(self, collection: Any, name: str) -> None:
        self._collection = collection
        self._name = name

    def document(self, document_id: str) -> FirestoreDocument:
        return FirestoreDocument(self._collection.document(document_id), self._name, document_id)

    def new_id(self) -> str:
        return str(self._collection.document().id)


class FirestoreDocument:
    def __init__(self, reference: Any, collection: str, document_id: str) -> None:
        self._reference = reference
        self._collection = collection
        self._id = document_id

    async def get(self) -> dict[str, Any]:
        try:
            snapshot = await self._reference.get()
        except gcp_exceptions.NotFound as exc:
            raise self._not_found() from exc
        if not snapshot.exists:
            raise self._not_found()
        return dict(snapshot.to_dict() or {})

    async def set(self, data: dict[str, Any]) -> None:
        await self._reference.set(dict(data))

    def _not_found(self) -> DocumentNotFoundException:
        return DocumentNotFoundException(
            f"Document '{self._collection}/{self._id}' not found",
            context={"collection": self._collection, "id": self._id},
        )
