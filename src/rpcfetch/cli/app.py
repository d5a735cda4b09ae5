"""Typer CLI entrypoints."""

from __future__ import annotations

import asyncio
import json
import re
from typing import Annotated, Any

import typer
from loguru import logger
from pydantic import ValidationError
from rich.console import Console

from rpcfetch.config.settings import load_settings
from rpcfetch.logging_utils import configure_logging
from rpcfetch.rpc.client import RequestOptions, create_request
from rpcfetch.rpc.ids import new_request_id
from rpcfetch.rpc.request import RpcCall
from rpcfetch.rpc.types import RpcResponse

app = typer.Typer(name="rpcfetch", help="JSON-RPC over HTTP client", add_completion=False)

BAD_INPUT_EXIT_CODE = 2


def _parse_params(raw: str | None) -> Any:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        typer.echo(f"--params is not valid JSON: {exc}", err=True)
        raise typer.Exit(BAD_INPUT_EXIT_CODE) from exc


def _parse_headers(values: list[str] | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values or []:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            typer.echo(f"invalid header {raw!r}; expected NAME:VALUE", err=True)
            raise typer.Exit(BAD_INPUT_EXIT_CODE)
        headers[name.strip()] = value.strip()
    return headers


def _parse_id(raw: str | None) -> str | int | None:
    if raw is None:
        return None
    return int(raw) if re.fullmatch(r"-?\d+", raw, re.ASCII) else raw


async def _invoke(
    base_url: str, options: RequestOptions, call: RpcCall, http_method: str, headers: dict[str, str]
) -> RpcResponse:
    async with create_request(base_url, options) as request:
        return await request(call, http_method=http_method, headers=headers)


@app.command()
def call(
    method: Annotated[str, typer.Argument(help="Remote method name")],
    params: Annotated[str | None, typer.Option("--params", "-p", help="Params as JSON")] = None,
    request_id: Annotated[str | None, typer.Option("--id", help="Request id (generated when omitted)")] = None,
    base_url: Annotated[str | None, typer.Option("--base-url", "-u", help="Base URL")] = None,
    http_method: Annotated[str, typer.Option("--http-method", "-X", help="HTTP method")] = "POST",
    header: Annotated[list[str] | None, typer.Option("--header", "-H", help="Extra header NAME:VALUE")] = None,
    timeout: Annotated[float | None, typer.Option("--timeout", "-t", help="Timeout in seconds")] = None,
) -> None:
    """Call a remote method and print the normalized response."""
    configure_logging(profile="cli")
    try:
        settings = load_settings(base_url=base_url, timeout_seconds=timeout)
    except ValidationError as exc:
        typer.echo(f"invalid settings: {exc}", err=True)
        raise typer.Exit(BAD_INPUT_EXIT_CODE) from exc
    rpc_call = RpcCall(method=method, params=_parse_params(params), id=_parse_id(request_id))
    headers = _parse_headers(header)
    options = RequestOptions(credentials=settings.credentials, timeout=settings.timeout_seconds)

    logger.info("call.start base_url={} method={}", settings.base_url, method)
    response = asyncio.run(_invoke(settings.base_url, options, rpc_call, http_method, headers))

    Console().print_json(data=response.to_dict())
    if not response.ok:
        raise typer.Exit(1)


@app.command("new-id")
def new_id() -> None:
    """Print a fresh request id."""
    typer.echo(new_request_id())
