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
"""Tests for SessionCodec — bounded JSON encoding of sessions."""

from __future__ import annotations

import json

import pytest

from docsession.codec import MAX_LENGTH, SessionCodec
from docsession.exceptions import (
    KeyTypeInvalidException,
    MarshalException,
    MaxLengthExceededException,
    SessionEncodingException,
    UnmarshalException,
)
from docsession.session import Session, SessionOptions


def _session(values=None, session_id="abc123", options=None) -> Session:
    return Session("testname", session_id=session_id, values=values, options=options)


class TestEncode:
    def test_wire_format_without_options(self):
        codec = SessionCodec()
        text = codec.encode(_session({"testkey": "testvalue"}))
        assert json.loads(text) == {"Values": {"testkey": "testvalue"}, "ID": "abc123"}

    def test_wire_format_with_options(self):
        codec = SessionCodec(include_options=True)
        opts = SessionOptions(path="/app", max_age=3600, secure=True, same_site="strict")
        payload = json.loads(codec.encode(_session({}, options=opts)))
        assert payload["Options"] == {
            "Path": "/app",
            "Domain": None,
            "MaxAge": 3600,
            "Secure": True,
            "HttpOnly": True,
            "SameSite": "strict",
        }

    def test_empty_session_encodes(self):
        codec = SessionCodec()
        assert json.loads(codec.encode(_session(session_id=""))) == {"Values": {}, "ID": ""}

    def test_non_string_key_rejected(self):
        codec = SessionCodec()
        with pytest.raises(KeyTypeInvalidException) as exc_info:
            codec.encode(_session({1: "one"}))
        assert "only string keys supported" in str(exc_info.value)
        assert exc_info.value.code == "SESSION_KEY_TYPE_INVALID"
        assert exc_info.value.context["key_type"] == "int"

    def test_non_string_key_rejected_among_string_keys(self):
        codec = SessionCodec()
        with pytest.raises(KeyTypeInvalidException):
            codec.encode(_session({"ok": 1, ("tuple",): 2}))

    def test_nested_non_string_key_rejected(self):
        codec = SessionCodec()
        with pytest.raises(KeyTypeInvalidException) as exc_info:
            codec.encode(_session({"cart": {1: "apple", None: "pear"}}))
        assert exc_info.value.context["key_type"] == "int"
        assert exc_info.value.context["path"] == "Values.cart"

    def test_non_string_key_inside_list_rejected(self):
        codec = SessionCodec()
        with pytest.raises(KeyTypeInvalidException) as exc_info:
            codec.encode(_session({"orders": [{"id": 1}, {2: "qty"}]}))
        assert exc_info.value.context["path"] == "Values.orders[1]"

    def test_lone_surrogate_is_marshal_failure(self):
        codec = SessionCodec()
        with pytest.raises(MarshalException) as exc_info:
            codec.encode(_session({"name": "\ud800"}))
        assert exc_info.value.code == "SESSION_MARSHAL_FAILURE"
        assert isinstance(exc_info.value.__cause__, UnicodeEncodeError)

    def test_unserializable_value_is_marshal_failure(self):
        codec = SessionCodec()
        with pytest.raises(MarshalException):
            codec.encode(_session({"items": {1, 2, 3}}))

    def test_nan_is_marshal_failure(self):
        codec = SessionCodec()
        with pytest.raises(MarshalException):
            codec.encode(_session({"ratio": float("nan")}))

    def test_encoding_errors_share_base_class(self):
        assert issubclass(KeyTypeInvalidException, SessionEncodingException)
        assert issubclass(MaxLengthExceededException, SessionEncodingException)
        assert issubclass(MarshalException, SessionEncodingException)
        assert issubclass(UnmarshalException, SessionEncodingException)


class TestMaxLength:
    def test_max_length_is_two_mebibytes(self):
        assert MAX_LENGTH == 2_097_152

    def test_small_session_within_limit(self):
        codec = SessionCodec()
        codec.encode(_session({"testkey": "testvalue"}))

    def test_big_session_exceeds_limit(self):
        codec = SessionCodec()
        big = _session({"store": "firestore" * (1 << 20)})
        with pytest.raises(MaxLengthExceededException) as exc_info:
            codec.encode(big)
        assert "max length" in str(exc_info.value)
        assert exc_info.value.context["max_length"] == MAX_LENGTH

    def test_exactly_at_limit_succeeds(self):
        codec = SessionCodec()
        overhead = len(codec.encode(_session({"k": ""})).encode("utf-8"))
        session = _session({"k": "x" * (MAX_LENGTH - overhead)})
        text = codec.encode(session)
        assert len(text.encode("utf-8")) == MAX_LENGTH

    def test_one_byte_over_limit_fails(self):
        codec = SessionCodec()
        overhead = len(codec.encode(_session({"k": ""})).encode("utf-8"))
        session = _session({"k": "x" * (MAX_LENGTH - overhead + 1)})
        with pytest.raises(MaxLengthExceededException):
            codec.encode(session)

    def test_limit_measured_in_encoded_bytes(self):
        codec = SessionCodec(max_length=64)
        overhead = len(codec.encode(_session({"k": ""}, session_id="")).encode("utf-8"))
        # Each "é" is one character but two UTF-8 bytes.
        chars = (64 - overhead) // 2 + 1
        with pytest.raises(MaxLengthExceededException):
            codec.encode(_session({"k": "é" * chars}, session_id=""))


class TestDecode:
    def test_round_trip_values_and_id(self):
        codec = SessionCodec()
        original = _session({"testkey": "testvalue", "n": 3, "nested": {"a": [1, 2, {"b": None}]}})
        decoded = codec.decode(codec.encode(original), "testname")
        assert decoded.id == original.id
        assert decoded.values == original.values
        assert decoded.options is None
        assert decoded.name == "testname"

    def test_round_trip_options(self):
        codec = SessionCodec(include_options=True)
        opts = SessionOptions(path="/", domain="example.com", max_age=60, secure=True, http_only=False)
        original = _session({"a": True}, options=opts)
        decoded = codec.decode(codec.encode(original))
        assert decoded.options == opts
        assert decoded.values == {"a": True}

    def test_round_trip_absent_options(self):
        codec = SessionCodec(include_options=True)
        decoded = codec.decode(codec.encode(_session({"a": 1})))
        assert decoded.options is None

    def test_unknown_fields_ignored(self):
        codec = SessionCodec()
        decoded = codec.decode('{"Values": {"a": 1}, "ID": "x", "Extra": [1, 2]}')
        assert decoded.values == {"a": 1}
        assert decoded.id == "x"

    def test_missing_fields_default(self):
        codec = SessionCodec(include_options=True)
        decoded = codec.decode("{}")
        assert decoded.values == {}
        assert decoded.id == ""
        assert decoded.options is None

    def test_options_ignored_when_not_included(self):
        codec = SessionCodec()
        decoded = codec.decode('{"Values": {}, "ID": "x", "Options": {"Path": "/x"}}')
        assert decoded.options is None

    def test_decoded_session_is_not_new(self):
        codec = SessionCodec()
        assert codec.decode('{"Values": {}, "ID": "x"}').is_new is False

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[1, 2, 3]",
            '{"Values": [1], "ID": "x"}',
            '{"Values": {}, "ID": 42}',
        ],
    )
    def test_malformed_payload_is_unmarshal_failure(self, text):
        codec = SessionCodec(include_options=True)
        with pytest.raises(UnmarshalException):
            codec.decode(text)

    def test_bad_options_is_unmarshal_failure(self):
        codec = SessionCodec(include_options=True)
        with pytest.raises(UnmarshalException):
            codec.decode('{"Values": {}, "ID": "x", "Options": "nope"}')
        with pytest.raises(UnmarshalException):
            codec.decode('{"Values": {}, "ID": "x", "Options": {"SameSite": "sideways"}}')

    @pytest.mark.parametrize(
        "options",
        [
            {"MaxAge": "abc"},
            {"MaxAge": True},
            {"MaxAge": 1.5},
            {"Path": 5},
            {"Domain": ["example.com"]},
            {"Secure": "yes"},
            {"HttpOnly": 1},
        ],
    )
    def test_mistyped_option_is_unmarshal_failure(self, options):
        codec = SessionCodec(include_options=True)
        text = json.dumps({"Values": {}, "ID": "x", "Options": options})
        with pytest.raises(UnmarshalException) as exc_info:
            codec.decode(text)
        assert exc_info.value.context["option"] == next(iter(options))

    def test_null_domain_and_max_age_accepted(self):
        codec = SessionCodec(include_options=True)
        session = codec.decode('{"Values": {}, "ID": "x", "Options": {"Domain": null, "MaxAge": null}}')
        assert session.options == SessionOptions(domain=None, max_age=None)
