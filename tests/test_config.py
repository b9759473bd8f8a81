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
"""Tests for Config and SessionProperties binding."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import pytest
from pydantic import BaseModel

from docsession.config import Config, config_properties
from docsession.properties import SessionProperties
from docsession.session import SessionOptions


class TestConfig:
    def test_get_simple_value(self):
        config = Config({"app": {"port": 8080}})
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "docsession.yaml"
        config_file.write_text("docsession:\n  session:\n    name: shop\n")
        config = Config.from_file(config_file)
        assert config.get("docsession.session.name") == "shop"
        assert str(config_file) in config.loaded_sources

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "docsession.toml"
        config_file.write_text('[docsession.session]\nstore = "mongodb"\n')
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("docsession.session.store") == "mongodb"

    def test_defaults_loaded(self):
        config = Config.defaults()
        assert config.get("docsession.session.transport") == "header"
        assert config.get("docsession.logging.format") == "console"

    def test_file_overrides_defaults(self, tmp_path: Path):
        config_file = tmp_path / "docsession.yaml"
        config_file.write_text("docsession:\n  session:\n    transport: cookie\n")
        config = Config.from_file(config_file)
        assert config.get("docsession.session.transport") == "cookie"
        assert config.get("docsession.session.store") == "memory"

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "docsession.yaml").write_text("docsession:\n  session:\n    name: base\n")
        (tmp_path / "docsession-prod.yaml").write_text("docsession:\n  session:\n    name: prod\n")
        config = Config.from_file(tmp_path / "docsession.yaml", active_profiles=["prod"])
        assert config.get("docsession.session.name") == "prod"

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("DOCSESSION_SESSION_STORE", "firestore")
        config = Config({"docsession": {"session": {"store": "memory"}}})
        assert config.get("docsession.session.store") == "firestore"

    def test_placeholder_resolution(self, monkeypatch):
        monkeypatch.setenv("SESSION_SECRET", "from-env")
        config = Config({"docsession": {"session": {"secret-key": "${SESSION_SECRET}"}}})
        assert config.get("docsession.session.secret-key") == "from-env"

    def test_placeholder_default(self):
        config = Config({"a": "${MISSING_DOCSESSION_VAR:fallback}"})
        assert config.get("a") == "fallback"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"a": "${MISSING_DOCSESSION_VAR}"})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("a")


class TestBind:
    def test_bind_coerces_pydantic_model(self):
        @config_properties(prefix="docsession.pool")
        class PoolProperties(BaseModel):
            url: str = "memory://"
            size: int = 5

        config = Config({"docsession": {"pool": {"url": "mongodb://localhost", "size": "20"}}})
        pool = config.bind(PoolProperties)
        assert pool.url == "mongodb://localhost"
        assert pool.size == 20

    def test_bind_rejects_non_pydantic_class(self):
        @config_properties(prefix="docsession.pool")
        @dataclass
        class PoolSettings:
            size: int = 5

        with pytest.raises(TypeError, match="BaseModel"):
            Config({}).bind(PoolSettings)

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_session_properties_defaults(self):
        props = Config({}).bind(SessionProperties)
        assert props.name == "docsession"
        assert props.transport == "header"
        assert props.store == "memory"
        assert props.secret_key is None

    def test_session_properties_from_defaults_file(self):
        props = Config.defaults().bind(SessionProperties)
        assert props.cookie.to_options() == SessionOptions()
        assert props.mongodb.database == "docsession"

    def test_session_properties_hyphenated_keys(self):
        config = Config(
            {
                "docsession": {
                    "session": {
                        "transport": "cookie",
                        "secret-key": "k",
                        "cookie": {"max-age": 3600, "same-site": "strict", "http-only": False},
                    }
                }
            }
        )
        props = config.bind(SessionProperties)
        assert props.secret_key == "k"
        assert props.cookie.to_options() == SessionOptions(max_age=3600, same_site="strict", http_only=False)

    def test_session_properties_env_override(self, monkeypatch):
        monkeypatch.setenv("DOCSESSION_SESSION_TRANSPORT", "cookie")
        monkeypatch.setenv("DOCSESSION_SESSION_SECRET_KEY", "env-secret")
        props = Config({}).bind(SessionProperties)
        assert props.transport == "cookie"
        assert props.secret_key == "env-secret"

    def test_invalid_transport_fails_fast(self):
        config = Config({"docsession": {"session": {"transport": "carrier-pigeon"}}})
        with pytest.raises(ValueError, match="Configuration validation failed"):
            config.bind(SessionProperties)
