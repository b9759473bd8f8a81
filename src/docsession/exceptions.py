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
"""Exception hierarchy for docsession.

All session errors inherit from SessionException, so callers can catch the
base class to handle every failure, or a subclass for targeted handling.

Categories:
- BusinessException: missing identity, missing documents, encoding failures
- InfrastructureException: backing document-store failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class SessionException(Exception):
    """Base exception for all docsession errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SESSION_NOT_FOUND").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(SessionException):
    """Session lifecycle and encoding errors."""


class TransportMissingException(BusinessException):
    """No session identifier was carried by the request transport."""

    default_code = "SESSION_TRANSPORT_MISSING"


class DocumentNotFoundException(BusinessException):
    """The backing store holds no document for the requested identifier."""

    default_code = "SESSION_NOT_FOUND"


class SessionEncodingException(BusinessException):
    """A session could not be converted to or from its stored form."""


class KeyTypeInvalidException(SessionEncodingException):
    """A session value map contains a key that is not a string."""

    default_code = "SESSION_KEY_TYPE_INVALID"


class MaxLengthExceededException(SessionEncodingException):
    """The encoded session is larger than the storable maximum."""

    default_code = "SESSION_MAX_LENGTH_EXCEEDED"


class MarshalException(SessionEncodingException):
    """A session value could not be serialized."""

    default_code = "SESSION_MARSHAL_FAILURE"


class UnmarshalException(SessionEncodingException):
    """A stored session payload is malformed."""

    default_code = "SESSION_UNMARSHAL_FAILURE"


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(SessionException):
    """Infrastructure failures: database, network."""


class BackendException(InfrastructureException):
    """The backing document store failed a read, write or id allocation."""

    default_code = "SESSION_BACKEND_FAILURE"
