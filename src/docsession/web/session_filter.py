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
"""SessionFilter — loads and persists sessions around each request."""

from __future__ import annotations

import fnmatch
from collections.abc import Sequence
from typing import Any

from docsession.ports.outbound import SessionStore
from docsession.session import Session

_DEFAULT_SESSION_NAME = "docsession"


class SessionFilter:
    """Attaches the request's session to ``request.state.session``.

    :class:`~docsession.web.middleware.SessionMiddleware` calls :meth:`load`
    before the handler runs and :meth:`commit` when the handler starts its
    response. A session is committed if it is new-and-populated or was
    modified, which lets the identity transport bind the identifier to the
    response.

    Args:
        store: Session store used to load and save sessions.
        session_name: Collection name (and cookie name for cookie transport).
        response_header: When set, the session identifier is echoed in this
            response header after a save. Used with the header transport,
            where the client must learn a newly allocated identifier.
        exclude_paths: fnmatch patterns for request paths that get no session.
    """

    def __init__(
        self,
        store: SessionStore,
        session_name: str = _DEFAULT_SESSION_NAME,
        response_header: str | None = None,
        exclude_paths: Sequence[str] = (),
    ) -> None:
        self._store = store
        self._session_name = session_name
        self._response_header = response_header
        self._exclude_paths = tuple(exclude_paths)

    @property
    def session_name(self) -> str:
        return self._session_name

    @property
    def response_header(self) -> str | None:
        return self._response_header

    def applies_to(self, path: str) -> bool:
        return not any(fnmatch.fnmatch(path, pattern) for pattern in self._exclude_paths)

    async def load(self, request: Any) -> Session:
        session = await self._store.get(request, self._session_name)
        request.state.session = session
        return session

    async def commit(self, request: Any, response: Any, session: Session) -> bool:
        """Save *session* onto *response* if it changed. Returns whether it was saved."""
        if not session.modified:
            return False
        await self._store.save(request, response, session)
        if self._response_header:
            response.headers[self._response_header] = session.id
        return True
