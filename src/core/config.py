"""Centralized configuration for the DevTools MCP client.

This module consolidates environment-driven settings such as the server
launch command, its arguments, the browser debugging URL, log level and
prompt text.

Other modules should import Settings via `get_settings()` and avoid
reading environment variables directly.
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from .constants import (
    DEFAULT_BROWSER_URL,
    DEFAULT_PROMPT,
    DEFAULT_SERVER_ARGS,
    DEFAULT_SERVER_COMMAND,
    HEADLESS_SERVER_ARG,
)
from .schemas import LaunchSpec


# Load env once at import (idempotent if already loaded elsewhere)
load_dotenv()


@dataclass(frozen=True)
class Settings:
    # MCP server process
    server_command: str = DEFAULT_SERVER_COMMAND
    server_args: Tuple[str, ...] = tuple(shlex.split(DEFAULT_SERVER_ARGS))
    browser_url: str = DEFAULT_BROWSER_URL

    # Output
    log_level: str = "WARNING"
    prompt: str = DEFAULT_PROMPT


_cached_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return cached settings (loaded from environment) to be used across modules."""
    global _cached_settings
    if _cached_settings is not None:
        return _cached_settings

    server_command = os.getenv("CHROME_DEVTOOLS_MCP_COMMAND", DEFAULT_SERVER_COMMAND)
    server_args = tuple(shlex.split(os.getenv("CHROME_DEVTOOLS_MCP_ARGS", DEFAULT_SERVER_ARGS)))
    browser_url = os.getenv("CHROME_BROWSER_URL", DEFAULT_BROWSER_URL)

    _cached_settings = Settings(
        server_command=server_command,
        server_args=server_args,
        browser_url=browser_url,
        log_level=os.getenv("CHROME_DEVTOOLS_CLI_LOG_LEVEL", "WARNING").upper(),
        prompt=os.getenv("CHROME_DEVTOOLS_CLI_PROMPT", DEFAULT_PROMPT),
    )
    return _cached_settings


def build_launch_spec(
    settings: Optional[Settings] = None,
    *,
    headless: bool = False,
    command: Optional[str] = None,
    args: Optional[Sequence[str]] = None,
    browser_url: Optional[str] = None,
) -> LaunchSpec:
    """Derive the server launch specification.

    Explicit `args` replace the configured argument list entirely; otherwise
    the configured arguments are followed by `--browser-url=<url>` when a URL
    is set. The headless argument is always appended last.
    """
    cfg = settings or get_settings()

    if args is not None:
        argv: List[str] = list(args)
    else:
        argv = list(cfg.server_args)
        url = cfg.browser_url if browser_url is None else browser_url
        if url:
            argv.append(f"--browser-url={url}")

    if headless:
        argv.append(HEADLESS_SERVER_ARG)

    return LaunchSpec(command=command or cfg.server_command, args=argv)
