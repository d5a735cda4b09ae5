"""Configuration package."""

from rpcfetch.config.settings import RpcSettings, load_settings

__all__ = [
    "RpcSettings",
    "load_settings",
]
