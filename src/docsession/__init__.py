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
"""docsession — document-store-backed HTTP sessions.

Sessions are encoded as bounded JSON documents and correlated with clients
through a request header or a (optionally signed) cookie. Sessions never
expire and are never deleted.

Import optional backends from the adapter package::

    from docsession.adapters.mongodb import MongoDocumentStore
    from docsession.adapters.firestore import FirestoreDocumentStore
"""

from docsession.adapters.memory import InMemoryDocumentStore
from docsession.codec import MAX_LENGTH, SessionCodec
from docsession.config import Config
from docsession.exceptions import (
    BackendException,
    DocumentNotFoundException,
    KeyTypeInvalidException,
    MarshalException,
    MaxLengthExceededException,
    SessionEncodingException,
    SessionException,
    TransportMissingException,
    UnmarshalException,
)
from docsession.factory import configure_logging, create_session_filter, create_session_store
from docsession.gateway import PersistenceGateway, StoredDocument
from docsession.identity import CookieIdentityResolver, HeaderIdentityResolver
from docsession.ports.outbound import DocumentStore, IdentityResolver, SessionStore
from docsession.session import Session, SessionOptions
from docsession.store import DocumentSessionStore, new_store
from docsession.web.middleware import SessionMiddleware
from docsession.web.session_filter import SessionFilter

__version__ = "0.1.0"

__all__ = [
    "MAX_LENGTH",
    "BackendException",
    "Config",
    "CookieIdentityResolver",
    "DocumentNotFoundException",
    "DocumentSessionStore",
    "DocumentStore",
    "HeaderIdentityResolver",
    "IdentityResolver",
    "InMemoryDocumentStore",
    "KeyTypeInvalidException",
    "MarshalException",
    "MaxLengthExceededException",
    "PersistenceGateway",
    "Session",
    "SessionCodec",
    "SessionEncodingException",
    "SessionException",
    "SessionFilter",
    "SessionMiddleware",
    "SessionOptions",
    "SessionStore",
    "StoredDocument",
    "TransportMissingException",
    "UnmarshalException",
    "configure_logging",
    "create_session_filter",
    "create_session_store",
    "new_store",
]
