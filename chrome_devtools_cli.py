#!/usr/bin/env python3
"""
Chrome DevTools CLI

Drives the Chrome DevTools MCP server from the terminal: either an
interactive prompt that forwards each line as a tool call, or a single
headless invocation such as

  chrome-devtools-cli navigate_page '{"url": "https://example.com"}'
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

from src.core.config import Settings, build_launch_spec, get_settings
from src.core.constants import APP_VERSION
from src.core.mcp_client import MCPClient, MCPConnectionError
from src.devtools.arguments import CliMode, CliRequest, UsageError, classify_arguments
from src.devtools.dispatcher import Dispatcher
from src.devtools.formatting import format_command_detail, format_command_list, general_help, interactive_help
from src.devtools.registry import REGISTRY
from src.devtools.repl import InteractiveLoop
from src.devtools.runner import INTERRUPTED_EXIT_CODE, run_command

logger = logging.getLogger("chrome_devtools_cli")


def configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
    # Library chatter only when explicitly debugging
    for lib in ("mcp", "anyio", "asyncio"):
        logging.getLogger(lib).setLevel(max(level, logging.WARNING))


async def run_interactive(request: CliRequest, settings: Settings) -> int:
    spec = build_launch_spec(
        settings,
        headless=request.headless,
        command=request.server_command,
        args=request.server_args,
        browser_url=request.browser_url,
    )
    client = MCPClient(launch_spec=spec)
    repl = InteractiveLoop(Dispatcher(client), client, prompt=settings.prompt)

    async def connect() -> None:
        try:
            await client.open()
        except MCPConnectionError as e:
            print(e, file=sys.stderr)
            print("Tool calls will report 'not connected' until the CLI is restarted.", file=sys.stderr)
        else:
            print(interactive_help(REGISTRY))

    # The loop closes the session on every exit path, signals during connect included
    return await repl.run(startup=connect)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        request = classify_arguments(sys.argv[1:] if argv is None else argv)
    except UsageError as e:
        print(f"chrome-devtools-cli: {e}", file=sys.stderr)
        print("Run 'chrome-devtools-cli --help' for usage.", file=sys.stderr)
        return 2

    settings = get_settings()
    configure_logging(request.log_level or settings.log_level)

    if request.mode is CliMode.VERSION:
        print(APP_VERSION)
        return 0
    if request.mode is CliMode.LIST_COMMANDS:
        print(format_command_list(REGISTRY))
        return 0
    if request.mode is CliMode.COMMAND_HELP:
        print(format_command_detail(REGISTRY, request.command))
        return 0
    if request.mode is CliMode.GENERAL_HELP:
        print(general_help(REGISTRY))
        return 0

    try:
        if request.mode is CliMode.HEADLESS_RUN:
            return asyncio.run(
                run_command(
                    request.command or "",
                    request.raw_argument,
                    request.mode_flag,
                    settings=settings,
                    server_command=request.server_command,
                    server_args=request.server_args,
                    browser_url=request.browser_url,
                )
            )
        return asyncio.run(run_interactive(request, settings))
    except KeyboardInterrupt:
        return INTERRUPTED_EXIT_CODE
    except Exception as e:
        logger.debug("fatal error", exc_info=True)
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
