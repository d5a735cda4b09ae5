"""Response classifier and synthesized error responses."""

from __future__ import annotations

import httpx
from loguru import logger

from rpcfetch.rpc.types import UNEXPECTED_ERROR_CODE, ErrorData, RequestId, RpcError, RpcResponse
from rpcfetch.rpc.validation import Failure, decode_response, parse_body


def http_error(request_id: RequestId, status_code: int, reason: str) -> RpcError:
    message = reason or httpx.codes.get_reason_phrase(status_code) or f"HTTP {status_code}"
    return RpcError(id=request_id, error=ErrorData(code=status_code, message=message))


def unexpected_error(request_id: RequestId, message: str, stack: str) -> RpcError:
    return RpcError(
        id=request_id,
        error=ErrorData(code=UNEXPECTED_ERROR_CODE, message=message, stack=stack),
    )


def from_failure(request_id: RequestId, failure: Failure) -> RpcError:
    return unexpected_error(request_id, failure.message, failure.stack)


def decode_body(request_id: RequestId, body: bytes | str) -> RpcResponse:
    """Parse and validate a success body into a response."""
    parsed = parse_body(body)
    if isinstance(parsed, Failure):
        logger.warning("rpc.response.parse_error id={} message={}", request_id, parsed.message)
        return from_failure(request_id, parsed)

    decoded = decode_response(parsed.data)
    if isinstance(decoded, Failure):
        logger.warning("rpc.response.schema_error id={} message={}", request_id, decoded.message)
        return from_failure(request_id, decoded)

    if decoded.response.id != request_id:
        logger.warning("rpc.response.id_mismatch expected={} got={}", request_id, decoded.response.id)
    return decoded.response


def classify_response(request_id: RequestId, response: httpx.Response) -> RpcResponse:
    """Short-circuit non-2xx statuses, otherwise decode the body."""
    if not response.is_success:
        logger.debug("rpc.response.http_error id={} status={}", request_id, response.status_code)
        return http_error(request_id, response.status_code, response.reason_phrase)
    return decode_body(request_id, response.content)


__all__ = [
    "classify_response",
    "decode_body",
    "from_failure",
    "http_error",
    "unexpected_error",
]
