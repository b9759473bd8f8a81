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
"""SessionCodec — bounded JSON encoding of sessions for document storage.

Wire format::

    {"Values": {...}, "ID": "...", "Options": {...}}

``Options`` is only written when the codec is configured for a transport
that binds cookie options to the session.
"""

from __future__ import annotations

import json
from typing import Any

from docsession.exceptions import (
    KeyTypeInvalidException,
    MarshalException,
    MaxLengthExceededException,
    UnmarshalException,
)
from docsession.session import Session, SessionOptions

# Maximum size of a single stored document.
MAX_LENGTH = 2 << 20

_VALUES = "Values"
_ID = "ID"
_OPTIONS = "Options"

_OPTION_FIELDS: dict[str, str] = {
    "path": "Path",
    "domain": "Domain",
    "max_age": "MaxAge",
    "secure": "Secure",
    "http_only": "HttpOnly",
    "same_site": "SameSite",
}


class SessionCodec:
    """Encodes a :class:`Session` to text and back.

    Only string keys are supported in ``Session.values``. Values must be
    JSON-representable; nested dicts and lists are allowed.
    """

    def __init__(self, include_options: bool = False, max_length: int = MAX_LENGTH) -> None:
        self._include_options = include_options
        self._max_length = max_length

    @property
    def include_options(self) -> bool:
        return self._include_options

    @property
    def max_length(self) -> int:
        return self._max_length

    def encode(self, session: Session) -> str:
        """Serialize *session*, enforcing string keys and the size bound.

        Keys are checked at every depth, including dicts nested in lists.
        """
        _check_keys(session.values, session.name, "Values")

        payload: dict[str, Any] = {_VALUES: session.values, _ID: session.id}
        if self._include_options:
            payload[_OPTIONS] = _options_to_dict(session.options)

        try:
            text = json.dumps(payload, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
            size = len(text.encode("utf-8"))
        except (TypeError, ValueError) as exc:
            # UnicodeEncodeError (lone surrogates) is a ValueError
            raise MarshalException(f"json.dumps: {exc}", context={"session": session.name}) from exc

        if size > self._max_length:
            raise MaxLengthExceededException(
                f"max length of session exceeded: {size} > {self._max_length}",
                context={"session": session.name, "size": size, "max_length": self._max_length},
            )
        return text

    def decode(self, text: str, name: str = "") -> Session:
        """Rebuild a session from its encoded form. Unknown fields are ignored."""
        try:
            payload = json.loads(text)
        except (TypeError, ValueError) as exc:
            raise UnmarshalException(f"json.loads: {exc}", context={"session": name}) from exc

        if not isinstance(payload, dict):
            raise UnmarshalException(
                f"encoded session must be a JSON object, got {type(payload).__name__}",
                context={"session": name},
            )

        values = payload.get(_VALUES)
        if values is None:
            values = {}
        elif not isinstance(values, dict):
            raise UnmarshalException("'Values' must be a JSON object", context={"session": name})

        session_id = payload.get(_ID)
        if session_id is None:
            session_id = ""
        elif not isinstance(session_id, str):
            raise UnmarshalException("'ID' must be a string", context={"session": name})

        options = None
        if self._include_options and payload.get(_OPTIONS) is not None:
            options = _options_from_dict(payload[_OPTIONS], name)

        return Session(name, session_id=session_id, values=values, is_new=False, options=options)


def _check_keys(value: Any, name: str, path: str) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise KeyTypeInvalidException(
                    f"only string keys supported: {key!r} at {path}",
                    context={"session": name, "key_type": type(key).__name__, "path": path},
                )
            _check_keys(item, name, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _check_keys(item, name, f"{path}[{index}]")


def _options_to_dict(options: SessionOptions | None) -> dict[str, Any] | None:
    if options is None:
        return None
    return {wire: getattr(options, attr) for attr, wire in _OPTION_FIELDS.items()}


def _options_from_dict(raw: Any, name: str) -> SessionOptions:
    if not isinstance(raw, dict):
        raise UnmarshalException("'Options' must be a JSON object", context={"session": name})
    kwargs = {attr: raw[wire] for attr, wire in _OPTION_FIELDS.items() if wire in raw}

    for attr in ("secure", "http_only"):
        if attr in kwargs and not isinstance(kwargs[attr], bool):
            _bad_option(attr, kwargs[attr], name)
    if "path" in kwargs and not isinstance(kwargs["path"], str):
        _bad_option("path", kwargs["path"], name)
    if kwargs.get("domain") is not None and not isinstance(kwargs["domain"], str):
        _bad_option("domain", kwargs["domain"], name)
    max_age = kwargs.get("max_age")
    if max_age is not None and (isinstance(max_age, bool) or not isinstance(max_age, int)):
        _bad_option("max_age", max_age, name)
    if "same_site" in kwargs and kwargs["same_site"] not in ("lax", "strict", "none"):
        raise UnmarshalException(
            f"unsupported SameSite value: {kwargs['same_site']!r}", context={"session": name}
        )
    return SessionOptions(**kwargs)


def _bad_option(attr: str, value: Any, name: str) -> None:
    wire = _OPTION_FIELDS[attr]
    raise UnmarshalException(
        f"invalid {wire} option: {value!r}", context={"session": name, "option": wire}
    )
