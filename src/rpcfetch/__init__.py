"""rpcfetch: JSON-RPC style calls over HTTP."""

from rpcfetch.errors import RpcCallError, RpcFetchError
from rpcfetch.rpc import (
    UNEXPECTED_ERROR_CODE,
    ErrorData,
    Request,
    RequestOptions,
    RpcCall,
    RpcError,
    RpcRequest,
    RpcResponse,
    RpcResult,
    create_request,
    new_request_id,
    unwrap,
)

__all__ = [
    "UNEXPECTED_ERROR_CODE",
    "ErrorData",
    "Request",
    "RequestOptions",
    "RpcCall",
    "RpcCallError",
    "RpcError",
    "RpcFetchError",
    "RpcRequest",
    "RpcResponse",
    "RpcResult",
    "create_request",
    "new_request_id",
    "unwrap",
]
