from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from rpcfetch.rpc.request import APPLICATION_JSON, RpcCall, build_envelope, build_headers, build_url, to_envelope
from rpcfetch.rpc.types import RpcRequest


def test_build_envelope_generates_id_when_missing() -> None:
    first = build_envelope("ping")
    second = build_envelope("ping")

    assert isinstance(first.id, str)
    assert first.id != second.id
    assert first.id < second.id


def test_build_envelope_keeps_caller_id() -> None:
    assert build_envelope("ping", request_id=0).id == 0
    assert build_envelope("ping", request_id="abc").id == "abc"


def test_envelope_omits_absent_params() -> None:
    assert json.loads(build_envelope("ping", request_id=1).to_json()) == {"id": 1, "method": "ping"}
    assert json.loads(build_envelope("ping", {"a": None}, 1).to_json()) == {
        "id": 1,
        "method": "ping",
        "params": {"a": None},
    }


def test_envelope_is_frozen() -> None:
    envelope = build_envelope("ping", request_id=1)
    with pytest.raises(ValidationError):
        envelope.method = "pong"


def test_to_envelope_accepts_calls_mappings_and_envelopes() -> None:
    envelope = RpcRequest(id="x", method="m")
    assert to_envelope(envelope) is envelope
    assert to_envelope(RpcCall(method="m", id=5)).id == 5
    assert to_envelope({"method": "m", "params": [1, 2]}).params == [1, 2]


def test_build_url_joins_base_and_method() -> None:
    assert build_url("https://example.com/api", "createTodo") == "https://example.com/api/createTodo"
    assert build_url("https://example.com/api/", "createTodo") == "https://example.com/api/createTodo"


def test_build_headers_protocol_headers_win() -> None:
    headers = build_headers(42, {"Content-Type": "text/plain", "X-Extra": "1"})

    assert headers == {
        "X-Extra": "1",
        "x-request-id": "42",
        "content-type": APPLICATION_JSON,
        "accept": APPLICATION_JSON,
    }
