"""Request builder: envelope, URL and protocol headers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from rpcfetch.rpc.ids import new_request_id
from rpcfetch.rpc.types import RequestId, RpcRequest

X_REQUEST_ID = "x-request-id"
APPLICATION_JSON = "application/json; charset=utf-8"


class RpcCall(BaseModel):
    """Per-call input: method name and params, identifier optional."""

    method: str
    params: Any = None
    id: RequestId | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")


CallLike = RpcCall | RpcRequest | Mapping[str, Any]


def build_envelope(method: str, params: Any = None, request_id: RequestId | None = None) -> RpcRequest:
    """Build the call envelope, generating an identifier when none is given."""
    fields: dict[str, Any] = {
        "id": new_request_id() if request_id is None else request_id,
        "method": method,
    }
    if params is not None:
        fields["params"] = params
    return RpcRequest(**fields)


def to_envelope(call: CallLike) -> RpcRequest:
    if isinstance(call, RpcRequest):
        return call
    if not isinstance(call, RpcCall):
        call = RpcCall.model_validate(call)
    return build_envelope(call.method, call.params, call.id)


def build_url(base_url: str, method: str) -> str:
    return f"{base_url.rstrip('/')}/{method}"


def build_headers(request_id: RequestId, extra: Mapping[str, str] | None = None) -> dict[str, str]:
    """Merge caller headers with the protocol headers.

    Protocol headers always win, whatever case the caller used.
    """
    protocol = {
        X_REQUEST_ID: str(request_id),
        "content-type": APPLICATION_JSON,
        "accept": APPLICATION_JSON,
    }
    headers = {key: value for key, value in (extra or {}).items() if key.lower() not in protocol}
    headers.update(protocol)
    return headers


__all__ = [
    "APPLICATION_JSON",
    "X_REQUEST_ID",
    "CallLike",
    "RpcCall",
    "build_envelope",
    "build_headers",
    "build_url",
    "to_envelope",
]
