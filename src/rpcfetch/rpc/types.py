"""JSON-RPC over HTTP type definitions.

The response is a tagged union of two mutually exclusive variants. Both are
frozen models: once a response is decoded it belongs to the caller, and this
package never mutates the payload it hands back.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from rpcfetch.errors import RpcCallError

RequestId = str | int

# Reserved code for every error synthesized locally (transport, parse, schema).
UNEXPECTED_ERROR_CODE = -1

WRONG_RESPONSE_STRUCTURE = "Response payload does not match the JSON-RPC response structure"


class RpcRequest(BaseModel):
    """Call envelope sent to the server."""

    id: RequestId
    method: str
    params: Any = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_json(self) -> str:
        # params is left off the wire unless it was given
        return self.model_dump_json(exclude_unset=True)


class ErrorData(BaseModel):
    """Error information carried by an error response."""

    code: int
    message: str
    data: Any = None
    stack: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


class RpcResult(BaseModel):
    """A successful response. Never carries ``error``."""

    id: RequestId
    result: Any

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def ok(self) -> Literal[True]:
        return True

    def raise_for_error(self) -> RpcResult:
        return self

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class RpcError(BaseModel):
    """An error response. Never carries ``result``."""

    id: RequestId
    error: ErrorData

    model_config = ConfigDict(frozen=True, extra="allow")

    @property
    def ok(self) -> Literal[False]:
        return False

    def raise_for_error(self) -> RpcResult:
        """Raise :class:`RpcCallError` for this response."""
        raise RpcCallError(
            self.error.code,
            self.error.message,
            request_id=self.id,
            data=self.error.data,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


RpcResponse = RpcResult | RpcError


def unwrap(response: RpcResponse) -> Any:
    """Return the result of ``response`` or raise :class:`RpcCallError`."""
    return response.raise_for_error().result


__all__ = [
    "UNEXPECTED_ERROR_CODE",
    "WRONG_RESPONSE_STRUCTURE",
    "ErrorData",
    "RequestId",
    "RpcError",
    "RpcRequest",
    "RpcResponse",
    "RpcResult",
    "unwrap",
]
