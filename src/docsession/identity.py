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
"""Identity resolution — carries the session identifier in a header or cookie.

A missing identifier is the normal signal for a new session, so resolvers
report ``found=False`` instead of raising.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
import secrets
from typing import Any

from docsession.session import SessionOptions

_logger = logging.getLogger(__name__)

_SIGNATURE_SEPARATOR = "."


class HeaderIdentityResolver:
    """Reads the session identifier from a request header named after the session.

    Headers are supplied by the client, so nothing is written to the response.
    """

    binds_options = False

    def resolve_incoming_id(self, request: Any, session_name: str) -> tuple[str, bool]:
        headers = getattr(request, "headers", None)
        if headers is None:
            return "", False
        value = headers.get(session_name)
        if not value:
            return "", False
        return str(value), True

    def bind_outgoing_id(
        self,
        response: Any,
        session_name: str,
        session_id: str,
        options: SessionOptions | None,
    ) -> None:
        return None


class CookieIdentityResolver:
    """Reads and writes the session identifier through a cookie named after the session.

    When *secret_key* is given, cookie values are signed as
    ``<id>.<signature>`` with HMAC-SHA256, and cookies whose signature does
    not verify are treated as absent.

    Args:
        secret_key: Key used to sign cookie values. ``None`` disables signing.
        default_options: Cookie policy used for sessions that carry no options.
    """

    binds_options = True

    def __init__(
        self,
        secret_key: str | bytes | None = None,
        default_options: SessionOptions | None = None,
    ) -> None:
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")
        self._secret_key = secret_key or None
        self._default_options = default_options or SessionOptions()

    @property
    def default_options(self) -> SessionOptions:
        return self._default_options

    def resolve_incoming_id(self, request: Any, session_name: str) -> tuple[str, bool]:
        try:
            value = request.cookies.get(session_name)
        except (AttributeError, KeyError, ValueError):
            return "", False
        if not value:
            return "", False
        if self._secret_key is None:
            return str(value), True

        session_id = self.unsign(str(value))
        if session_id is None:
            _logger.warning("Rejected session cookie '%s' with an invalid signature", session_name)
            return "", False
        return session_id, True

    def bind_outgoing_id(
        self,
        response: Any,
        session_name: str,
        session_id: str,
        options: SessionOptions | None,
    ) -> None:
        opts = options or self._default_options
        response.set_cookie(
            key=session_name,
            value=self.sign(session_id),
            max_age=opts.max_age,
            path=opts.path,
            domain=opts.domain,
            secure=opts.secure,
            httponly=opts.http_only,
            samesite=opts.same_site,
        )

    def sign(self, session_id: str) -> str:
        """Return the cookie value for *session_id*."""
        key = self._secret_key
        if key is None:
            return session_id
        return f"{session_id}{_SIGNATURE_SEPARATOR}{_signature(key, session_id)}"

    def unsign(self, value: str) -> str | None:
        """Return the identifier from a signed cookie value, or ``None`` if it does not verify."""
        key = self._secret_key
        if key is None:
            return value
        session_id, sep, signature = value.rpartition(_SIGNATURE_SEPARATOR)
        if not sep or not session_id:
            return None
        if not secrets.compare_digest(signature, _signature(key, session_id)):
            return None
        return session_id


def _signature(key: bytes, session_id: str) -> str:
    digest = hmac.new(key, session_id.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
