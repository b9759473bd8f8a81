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
"""Assembles session stores and filters from configuration."""

from __future__ import annotations

import importlib
import logging

from docsession.adapters.memory import InMemoryDocumentStore
from docsession.config import Config
from docsession.identity import CookieIdentityResolver, HeaderIdentityResolver
from docsession.logging.port import LoggingPort
from docsession.logging.structlog_adapter import StructlogAdapter
from docsession.ports.outbound import DocumentStore, IdentityResolver
from docsession.properties import SessionProperties
from docsession.store import DocumentSessionStore
from docsession.web.session_filter import SessionFilter

_logger = logging.getLogger(__name__)

_BACKEND_MODULES = {
    "mongodb": "motor.motor_asyncio",
    "firestore": "google.cloud.firestore",
}


def is_available(module_name: str) -> bool:
    """Check if a Python package is importable."""
    try:
        importlib.import_module(module_name)
        return True
    except ImportError:
        return False


def create_document_store(properties: SessionProperties) -> DocumentStore:
    """Build the backing document store selected by ``docsession.session.store``."""
    store_type = properties.store

    if store_type != "memory" and not is_available(_BACKEND_MODULES[store_type]):
        raise RuntimeError(
            f"Session store '{store_type}' requires '{_BACKEND_MODULES[store_type]}'; "
            f"install docsession[{store_type}]"
        )

    if store_type == "mongodb":
        from motor.motor_asyncio import AsyncIOMotorClient

        from docsession.adapters.mongodb import MongoDocumentStore

        client = AsyncIOMotorClient(properties.mongodb.url)
        return MongoDocumentStore(client[properties.mongodb.database])

    if store_type == "firestore":
        from google.cloud import firestore

        from docsession.adapters.firestore import FirestoreDocumentStore

        client = firestore.AsyncClient(
            project=properties.firestore.project, database=properties.firestore.database
        )
        return FirestoreDocumentStore(client)

    return InMemoryDocumentStore()


def create_identity_resolver(properties: SessionProperties) -> IdentityResolver:
    """Build the identity transport selected by ``docsession.session.transport``."""
    if properties.transport == "cookie":
        return CookieIdentityResolver(
            secret_key=properties.secret_key,
            default_options=properties.cookie.to_options(),
        )
    return HeaderIdentityResolver()


def create_session_store(
    config: Config,
    document_store: DocumentStore | None = None,
) -> DocumentSessionStore:
    """Create a :class:`DocumentSessionStore` from configuration.

    Args:
        config: Application configuration.
        document_store: Backing store to use instead of the configured one.
    """
    properties = config.bind(SessionProperties)
    store = document_store if document_store is not None else create_document_store(properties)
    identity = create_identity_resolver(properties)
    _logger.info(
        "Session store configured: store=%s transport=%s name=%s",
        properties.store if document_store is None else type(store).__name__,
        properties.transport,
        properties.name,
    )
    return DocumentSessionStore(store, identity=identity)


def create_session_filter(
    config: Config,
    session_store: DocumentSessionStore | None = None,
) -> SessionFilter:
    """Create a :class:`SessionFilter` for the configured session name.

    With the header transport, new identifiers are echoed back in a response
    header named after the session.
    """
    properties = config.bind(SessionProperties)
    store = session_store if session_store is not None else create_session_store(config)
    response_header = properties.name if properties.transport == "header" else None
    return SessionFilter(
        store=store,
        session_name=properties.name,
        response_header=response_header,
        exclude_paths=properties.exclude_paths,
    )


def configure_logging(config: Config) -> LoggingPort:
    """Route docsession's stdlib log records through structlog."""
    adapter = StructlogAdapter()
    adapter.configure(config)
    return adapter
