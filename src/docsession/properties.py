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
"""Session configuration properties (docsession.session.*)."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from docsession.config import config_properties
from docsession.session import SessionOptions


class CookieProperties(BaseModel):
    """Cookie policy for the cookie transport (docsession.session.cookie.*)."""

    model_config = ConfigDict(populate_by_name=True)

    path: str = "/"
    domain: str | None = None
    max_age: int | None = Field(default=None, alias="max-age", ge=0)
    secure: bool = False
    http_only: bool = Field(default=True, alias="http-only")
    same_site: Literal["lax", "strict", "none"] = Field(default="lax", alias="same-site")

    def to_options(self) -> SessionOptions:
        return SessionOptions(
            path=self.path,
            domain=self.domain,
            max_age=self.max_age,
            secure=self.secure,
            http_only=self.http_only,
            same_site=self.same_site,
        )


class MongoProperties(BaseModel):
    url: str = "mongodb://localhost:27017"
    database: str = "docsession"


class FirestoreProperties(BaseModel):
    project: str | None = None
    database: str | None = None


@config_properties(prefix="docsession.session")
class SessionProperties(BaseModel):
    """Configuration for the session store (docsession.session.*)."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = "docsession"
    transport: Literal["header", "cookie"] = "header"
    store: Literal["memory", "mongodb", "firestore"] = "memory"
    secret_key: str | None = Field(default=None, alias="secret-key")
    exclude_paths: list[str] = Field(default_factory=list, alias="exclude-paths")
    cookie: CookieProperties = Field(default_factory=CookieProperties)
    mongodb: MongoProperties = Field(default_factory=MongoProperties)
    firestore: FirestoreProperties = Field(default_factory=FirestoreProperties)
