"""Exceptions for callers that prefer raising over inspecting responses.

The call pipeline itself never raises these; they are produced on demand by
``RpcError.raise_for_error()`` and ``unwrap()``.
"""

from __future__ import annotations

from typing import Any


class RpcFetchError(Exception):
    """Base class for rpcfetch exceptions."""


class RpcCallError(RpcFetchError):
    """Exception with the JSON-RPC error code of a failed call."""

    def __init__(self, code: int, message: str, *, request_id: str | int, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.request_id = request_id
        self.data = data

    def __str__(self) -> str:
        return f"[{self.code}] {self.message} (id={self.request_id})"


__all__ = [
    "RpcCallError",
    "RpcFetchError",
]
