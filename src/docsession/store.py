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
"""DocumentSessionStore — session lifecycle against a document store.

Sessions never expire and are never deleted or cleaned up.
"""

from __future__ import annotations

import logging
from typing import Any

from docsession.codec import SessionCodec
from docsession.exceptions import DocumentNotFoundException
from docsession.gateway import PersistenceGateway, StoredDocument
from docsession.identity import HeaderIdentityResolver
from docsession.ports.outbound import DocumentStore, IdentityResolver
from docsession.session import Session

_logger = logging.getLogger(__name__)

# Attribute on ``request.state`` holding sessions already resolved in this request.
_REGISTRY_ATTR = "docsession_registry"


class DocumentSessionStore:
    """Document-store-backed implementation of :class:`~docsession.ports.outbound.SessionStore`.

    The session name is used as the collection name (and as the cookie name
    for the cookie transport), so different applications sharing a backing
    store should use different names.

    Args:
        document_store: Backing store client, injected by the application.
        identity: Transport strategy for the session identifier. Defaults to
            :class:`HeaderIdentityResolver`.
        codec: Session encoder. Defaults to a :class:`SessionCodec` that
            carries options when the identity transport binds them.
    """

    def __init__(
        self,
        document_store: DocumentStore,
        identity: IdentityResolver | None = None,
        codec: SessionCodec | None = None,
    ) -> None:
        self._gateway = PersistenceGateway(document_store)
        self._identity: IdentityResolver = identity or HeaderIdentityResolver()
        self._codec = codec or SessionCodec(include_options=self._identity.binds_options)

    @property
    def identity(self) -> IdentityResolver:
        return self._identity

    @property
    def codec(self) -> SessionCodec:
        return self._codec

    async def get(self, request: Any, name: str) -> Session:
        """Return the session already resolved for this request, or load it.

        Repeated calls for the same *name* within one request return the same
        :class:`Session` object.
        """
        registry = _registry(request)
        if registry is None:
            return await self.new(request, name)
        session = registry.get(name)
        if session is None:
            session = await self.new(request, name)
            registry[name] = session
        return session

    async def new(self, request: Any, name: str) -> Session:
        """Load the session named *name*, or create a new one if none is stored."""
        session = Session(name, store=self)

        session_id, found = self._identity.resolve_incoming_id(request, name)
        if not found:
            return session

        # The transport id is kept so that a later save writes under it.
        session.id = session_id
        try:
            stored = await self._gateway.fetch(name, session_id)
        except DocumentNotFoundException:
            _logger.debug("No stored session %s/%s, starting a new one", name, session_id)
            return session

        cached = self._codec.decode(stored.encoded_session, name)
        loaded = Session(
            name,
            store=self,
            session_id=cached.id or session_id,
            values=cached.values,
            is_new=False,
            options=cached.options,
        )
        _logger.debug("Loaded session %s/%s", name, loaded.id)
        return loaded

    async def save(self, request: Any, response: Any, session: Session) -> None:
        """Persist *session*, assigning it an identifier if it has none."""
        session_id = session.id
        if not session_id:
            session_id, _ = self._identity.resolve_incoming_id(request, session.name)
        if not session_id:
            session_id = await self._gateway.allocate_id(session.name)

        session.id = session_id
        encoded = self._codec.encode(session)
        await self._gateway.put(session.name, session_id, StoredDocument(encoded_session=encoded))

        self._identity.bind_outgoing_id(response, session.name, session_id, session.options)
        session.mark_saved()


def new_store(
    document_store: DocumentStore,
    identity: IdentityResolver | None = None,
) -> DocumentSessionStore:
    """Create a :class:`DocumentSessionStore`.

    Only string keys are supported in session values.
    """
    return DocumentSessionStore(document_store, identity=identity)


def _registry(request: Any) -> dict[str, Session] | None:
    state = getattr(request, "state", None)
    if state is None:
        return None
    registry = getattr(state, _REGISTRY_ATTR, None)
    if not isinstance(registry, dict):
        registry = {}
        setattr(state, _REGISTRY_ATTR, registry)
    return registry
