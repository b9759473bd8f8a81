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
"""Session and SessionOptions — the in-memory session model."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Literal

if TYPE_CHECKING:
    from docsession.ports.outbound import SessionStore

SameSite = Literal["lax", "strict", "none"]


@dataclass(frozen=True)
class SessionOptions:
    """Transport policy for the cookie that carries a session identifier.

    ``max_age`` of ``None`` produces a browser-session cookie.
    """

    path: str = "/"
    domain: str | None = None
    max_age: int | None = None
    secure: bool = False
    http_only: bool = True
    same_site: SameSite = "lax"


class Session:
    """A named bag of key/value state correlated with a client.

    ``values`` is handed out by reference; callers mutate it directly or go
    through the attribute helpers. ``id`` stays empty until the store assigns
    one on save.

    Attributes:
        name: Collection name in the backing store, and cookie name in the
            cookie transport.
        is_new: ``True`` until the session has been loaded from or written to
            the backing store.
    """

    def __init__(
        self,
        name: str,
        *,
        store: SessionStore | None = None,
        session_id: str = "",
        values: dict[Any, Any] | None = None,
        is_new: bool = True,
        options: SessionOptions | None = None,
    ) -> None:
        self._name = name
        self._store = store
        self.id = session_id
        self.values: dict[Any, Any] = values if values is not None else {}
        self.is_new = is_new
        self.options = options
        self._modified = False
        self._snapshot = copy.deepcopy(self.values)

    @property
    def name(self) -> str:
        return self._name

    @property
    def store(self) -> SessionStore | None:
        return self._store

    @property
    def modified(self) -> bool:
        """``True`` if values changed since the session was loaded or last saved."""
        return self._modified or self.values != self._snapshot

    def get_attribute(self, name: str) -> Any | None:
        """Return the session value, or ``None`` if absent."""
        return self.values.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self.values[name] = value
        self._modified = True

    def remove_attribute(self, name: str) -> None:
        if name in self.values:
            del self.values[name]
            self._modified = True

    def get_attribute_names(self) -> list[str]:
        return [k for k in self.values if isinstance(k, str)]

    def mark_saved(self) -> None:
        """Reset change tracking after a successful write."""
        self.is_new = False
        self._modified = False
        self._snapshot = copy.deepcopy(self.values)

    async def save(self, request: Any, response: Any) -> None:
        """Persist this session through the store that created it."""
        if self._store is None:
            raise RuntimeError(f"Session '{self._name}' is not bound to a store")
        await self._store.save(request, response, self)

    def __repr__(self) -> str:
        return f"Session(name={self._name!r}, id={self.id!r}, is_new={self.is_new})"
