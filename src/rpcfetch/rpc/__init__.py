"""RPC package.

Client-side JSON-RPC style calls over HTTP with normalized responses.
"""

from rpcfetch.rpc.client import Request, RequestOptions, create_request
from rpcfetch.rpc.ids import new_request_id
from rpcfetch.rpc.request import RpcCall
from rpcfetch.rpc.types import (
    UNEXPECTED_ERROR_CODE,
    WRONG_RESPONSE_STRUCTURE,
    ErrorData,
    RequestId,
    RpcError,
    RpcRequest,
    RpcResponse,
    RpcResult,
    unwrap,
)
from rpcfetch.rpc.validation import is_error, is_result, validate_response

__all__ = [
    "UNEXPECTED_ERROR_CODE",
    "WRONG_RESPONSE_STRUCTURE",
    "ErrorData",
    "Request",
    "RequestId",
    "RequestOptions",
    "RpcCall",
    "RpcError",
    "RpcRequest",
    "RpcResponse",
    "RpcResult",
    "create_request",
    "is_error",
    "is_result",
    "new_request_id",
    "unwrap",
    "validate_response",
]
