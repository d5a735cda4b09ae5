"""Runtime logging helpers."""

from __future__ import annotations

import inspect
import logging
import os
import sys
from logging import Handler
from typing import Literal

from loguru import logger
from rich import get_console
from rich.logging import RichHandler

LogProfile = Literal["default", "cli"]

_DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<6} | {name}:{function}:{line} | {message}"
_CONFIGURED_PROFILE: LogProfile | None = None


class InterceptHandler(logging.Handler):
    """Handler that forwards stdlib logging messages (httpx, httpcore) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame:
            filename = frame.f_code.co_filename
            is_logging = filename == logging.__file__
            is_frozen = "importlib" in filename and "_bootstrap" in filename
            if depth > 0 and not (is_logging or is_frozen):
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _build_cli_handler() -> Handler:
    return RichHandler(
        console=get_console(),
        show_level=True,
        show_time=False,
        show_path=False,
        markup=False,
        rich_tracebacks=False,
    )


def _known_level(name: str) -> bool:
    try:
        logger.level(name)
    except ValueError:
        return False
    return True


def parse_log_filter(value: str | None = None) -> tuple[str, dict[str, str | int | bool]]:
    """Parse RPCFETCH_LOG_FILTER.

    Format: "level" or "level,module=level,..."
    Examples:
        - "info" - global INFO level
        - "warning,rpcfetch.rpc=debug" - global WARNING, rpcfetch.rpc at DEBUG
        - "info,rpcfetch.rpc=false" - global INFO, rpcfetch.rpc disabled

    Unknown level names are ignored.

    Returns:
        (sink_level, module_filter_dict)
    """
    filter_env = (value if value is not None else os.getenv("RPCFETCH_LOG_FILTER", "warning")).lower()
    parts = [p.strip() for p in filter_env.split(",") if p.strip()]

    filter_dict: dict[str, str | int | bool] = {}
    global_level = "WARNING"

    for part in parts:
        if "=" in part:
            module, level = part.split("=", 1)
            module = module.strip()
            level = level.strip()
            if level == "false":
                filter_dict[module] = False
            elif _known_level(level.upper()):
                filter_dict[module] = level.upper()
        elif _known_level(part.upper()):
            global_level = part.upper()

    # loguru drops records below the sink level before the filter runs
    levels = [global_level, *(lvl for lvl in filter_dict.values() if isinstance(lvl, str))]
    sink_level = min(levels, key=lambda name: logger.level(name).no)
    filter_dict[""] = global_level
    return sink_level, filter_dict


def configure_logging(*, profile: LogProfile = "default") -> None:
    """Configure process-level logging once.

    The library only emits records; applications opt in by calling this.
    """
    global _CONFIGURED_PROFILE
    if profile == _CONFIGURED_PROFILE:
        return

    sink_level, module_filter = parse_log_filter()

    logger.remove()

    if profile == "cli":
        logger.add(
            _build_cli_handler(),
            level=sink_level,
            format="{message}",
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )
    else:
        logger.add(
            sys.stderr,
            level=sink_level,
            format=_DEFAULT_FORMAT,
            backtrace=False,
            diagnose=False,
            filter=module_filter,
        )

    logging.getLogger().addHandler(InterceptHandler())

    _CONFIGURED_PROFILE = profile
