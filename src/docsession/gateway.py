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
"""PersistenceGateway — reads and writes encoded sessions in a document store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from docsession.exceptions import BackendException, DocumentNotFoundException
from docsession.ports.outbound import DocumentStore

_logger = logging.getLogger(__name__)

ENCODED_SESSION_FIELD = "EncodedSession"


@dataclass(frozen=True)
class StoredDocument:
    """Wraps an encoded session so it can be saved as a document."""

    encoded_session: str

    def to_dict(self) -> dict[str, Any]:
        return {ENCODED_SESSION_FIELD: self.encoded_session}


class PersistenceGateway:
    """Translates document-store calls into session persistence outcomes.

    A missing document surfaces as :class:`DocumentNotFoundException`; every
    other backend failure is wrapped in :class:`BackendException` with the
    original error chained as ``__cause__``. No retries are attempted.
    """

    def __init__(self, document_store: DocumentStore) -> None:
        self._store = document_store

    @property
    def document_store(self) -> DocumentStore:
        return self._store

    async def fetch(self, collection_name: str, session_id: str) -> StoredDocument:
        """Load the stored document for *session_id*."""
        context = {"collection": collection_name, "id": session_id}
        try:
            data = await self._store.collection(collection_name).document(session_id).get()
        except DocumentNotFoundException:
            raise
        except Exception as exc:
            raise BackendException(f"Get: {exc}", context=context) from exc

        encoded = data.get(ENCODED_SESSION_FIELD) if isinstance(data, dict) else None
        if not isinstance(encoded, str):
            raise BackendException(
                f"DataTo: document has no string '{ENCODED_SESSION_FIELD}' field", context=context
            )
        return StoredDocument(encoded_session=encoded)

    async def put(self, collection_name: str, session_id: str, document: StoredDocument) -> None:
        """Create or overwrite the document for *session_id*. Last writer wins."""
        try:
            await self._store.collection(collection_name).document(session_id).set(document.to_dict())
        except Exception as exc:
            raise BackendException(
                f"Create: {exc}", context={"collection": collection_name, "id": session_id}
            ) from exc
        _logger.debug("Stored session document %s/%s", collection_name, session_id)

    async def allocate_id(self, collection_name: str) -> str:
        """Ask the backing store for a fresh identifier in *collection_name*."""
        try:
            return self._store.collection(collection_name).new_id()
        except Exception as exc:
            raise BackendException(f"NewDoc: {exc}", context={"collection": collection_name}) from exc
