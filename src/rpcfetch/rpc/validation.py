"""Payload validator.

Parsing and shape checks return explicit ``Parsed``/``Decoded``/``Failure``
values instead of raising, so the call pipeline can fold every failure into
an error response carrying the request's own identifier.
"""

from __future__ import annotations

import json
import traceback
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import ValidationError

from rpcfetch.rpc.types import WRONG_RESPONSE_STRUCTURE, RpcError, RpcResponse, RpcResult

FailureKind = Literal["parse", "schema"]


@dataclass(frozen=True)
class Failure:
    """A parse or schema failure, with a captured stack."""

    kind: FailureKind
    message: str
    stack: str


@dataclass(frozen=True)
class Parsed:
    data: Any


@dataclass(frozen=True)
class Decoded:
    response: RpcResponse


def _capture_stack(kind: FailureKind, message: str) -> str:
    header = f"{kind.capitalize()}Error: {message}\n"
    return header + "".join(traceback.format_stack()[:-1])


def schema_failure(message: str = WRONG_RESPONSE_STRUCTURE) -> Failure:
    return Failure(kind="schema", message=message, stack=_capture_stack("schema", message))


def parse_body(body: bytes | str) -> Parsed | Failure:
    """Decode a response body as JSON."""
    try:
        return Parsed(json.loads(body))
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        return Failure(kind="parse", message=str(exc), stack=traceback.format_exc())


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def is_result(data: Any) -> bool:
    """True when ``data`` has ``id`` and ``result`` but no ``error``."""
    return isinstance(data, Mapping) and "id" in data and "result" in data and "error" not in data


def is_error(data: Any) -> bool:
    """True when ``data`` has ``id`` and ``error`` but no ``result``."""
    return isinstance(data, Mapping) and "id" in data and "error" in data and "result" not in data


def _error_fields_valid(error: Any) -> bool:
    if not isinstance(error, Mapping):
        return False
    if not _is_number(error.get("code")) or not isinstance(error.get("message"), str):
        return False
    # "object-typed" in the JSON sense: object, array or null
    if "data" in error and not (error["data"] is None or isinstance(error["data"], Mapping | list)):
        return False
    return not ("stack" in error and not isinstance(error["stack"], str))


def validate_response(data: Any) -> bool:
    """True when ``data`` is a well-formed result or error response."""
    if is_result(data):
        return True
    if is_error(data):
        return _error_fields_valid(data["error"])
    return False


def _valid_id(value: Any) -> bool:
    return isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool))


def decode_response(data: Any) -> Decoded | Failure:
    """Decode parsed JSON into exactly one response variant."""
    if not validate_response(data) or not _valid_id(data["id"]):
        return schema_failure()

    if is_result(data):
        return Decoded(RpcResult.model_validate(dict(data)))

    error = dict(data["error"])
    code = error["code"]
    if isinstance(code, float):
        if not code.is_integer():
            return schema_failure(f"{WRONG_RESPONSE_STRUCTURE}: error.code must be an integer")
        error["code"] = int(code)
    try:
        return Decoded(RpcError.model_validate({**data, "error": error}))
    except ValidationError as exc:
        return schema_failure(f"{WRONG_RESPONSE_STRUCTURE}: {exc.error_count()} validation error(s)")


__all__ = [
    "Decoded",
    "Failure",
    "FailureKind",
    "Parsed",
    "decode_response",
    "is_error",
    "is_result",
    "parse_body",
    "schema_failure",
    "validate_response",
]
