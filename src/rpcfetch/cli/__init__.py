"""CLI package."""

from rpcfetch.cli.app import app

__all__ = ["app"]
