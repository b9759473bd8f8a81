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
"""SessionMiddleware — pure ASGI middleware binding sessions to responses."""

from __future__ import annotations

import logging

from starlette.datastructures import MutableHeaders
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from docsession.web.session_filter import SessionFilter

logger = logging.getLogger(__name__)


class SessionMiddleware:
    """Loads the session before the app runs and commits it on response start.

    The store binds the identifier onto a header carrier (a bare Starlette
    :class:`Response`) whose ``Set-Cookie`` and echo headers are then merged
    into the outgoing ``http.response.start`` message. The response body is
    streamed through untouched.

    Usage::

        app = Starlette(
            routes=routes,
            middleware=[Middleware(SessionMiddleware, session_filter=session_filter)],
        )
    """

    def __init__(self, app: ASGIApp, session_filter: SessionFilter) -> None:
        self.app = app
        self._filter = session_filter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive)
        if not self._filter.applies_to(request.url.path):
            await self.app(scope, receive, send)
            return

        session = await self._filter.load(request)

        async def send_with_session(message: Message) -> None:
            if message["type"] == "http.response.start":
                carrier = Response()
                if await self._filter.commit(request, carrier, session):
                    _merge_headers(carrier, message, self._filter.response_header)
                    logger.debug("Committed session %s on %s", session.id, request.url.path)
            await send(message)

        await self.app(scope, receive, send_with_session)


def _merge_headers(carrier: Response, message: Message, response_header: str | None) -> None:
    echo = response_header.lower().encode("latin-1") if response_header else None
    headers = MutableHeaders(scope=message)
    for key, value in carrier.raw_headers:
        if key == b"set-cookie":
            headers.append("set-cookie", value.decode("latin-1"))
        elif key == echo:
            headers[key.decode("latin-1")] = value.decode("latin-1")
