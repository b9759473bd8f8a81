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
"""Outbound ports: document store, identity transport and session store protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from docsession.session import Session, SessionOptions


@runtime_checkable
class DocumentReference(Protocol):
    """A single document addressed by collection and identifier.

    ``get()`` raises :class:`~docsession.exceptions.DocumentNotFoundException`
    when the document does not exist. ``set()`` creates or overwrites it.
    """

    async def get(self) -> dict[str, Any]: ...

    async def set(self, data: dict[str, Any]) -> None: ...


@runtime_checkable
class DocumentCollection(Protocol):
    """A named partition of the backing document store."""

    def document(self, document_id: str) -> DocumentReference: ...

    def new_id(self) -> str: ...


@runtime_checkable
class DocumentStore(Protocol):
    """Abstract document store interface.

    All backends (in-memory, MongoDB, Firestore) must implement this protocol.
    """

    def collection(self, name: str) -> DocumentCollection: ...


@runtime_checkable
class IdentityResolver(Protocol):
    """Strategy that carries a session identifier over the HTTP transport."""

    @property
    def binds_options(self) -> bool: ...

    def resolve_incoming_id(self, request: Any, session_name: str) -> tuple[str, bool]: ...

    def bind_outgoing_id(
        self,
        response: Any,
        session_name: str,
        session_id: str,
        options: SessionOptions | None,
    ) -> None: ...


@runtime_checkable
class SessionStore(Protocol):
    """Session persistence capability exposed to applications."""

    async def get(self, request: Any, name: str) -> Session: ...

    async def new(self, request: Any, name: str) -> Session: ...

    async def save(self, request: Any, response: Any, session: Session) -> None: ...
