"""Single-shot execution: spawn, invoke one tool, print, close."""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Callable, List, Optional, Sequence

from src.adapters.tool_invoker import ToolInvoker
from src.core.config import Settings, build_launch_spec
from src.core.constants import HEADLESS_CLIENT_NAME, HEADLESS_FLAG
from src.core.mcp_client import MCPClient, MCPError
from src.core.schemas import LaunchSpec
from src.devtools.coercion import ArgumentError, coerce_arguments
from src.devtools.formatting import format_echo, format_error, format_result
from src.devtools.signals import handle_signals

logger = logging.getLogger(__name__)

ClientFactory = Callable[..., ToolInvoker]

# 128 + SIGINT, the shell convention for an interrupted command
INTERRUPTED_EXIT_CODE = 130


async def run_command(
    tool_name: str,
    raw_argument: Optional[str],
    mode_flag: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
    launch_spec: Optional[LaunchSpec] = None,
    server_command: Optional[str] = None,
    server_args: Optional[Sequence[str]] = None,
    browser_url: Optional[str] = None,
    client_factory: ClientFactory = MCPClient,
) -> int:
    """Run one tool call against a freshly spawned server and return an exit code.

    Steps: build the launch spec (adding the headless browser argument when
    `mode_flag` is `--headless`), open the session, coerce the argument,
    invoke, print. Any failure prints `Error running command: ...` and
    returns 1; a shutdown signal returns 130. The session is closed on every
    path.
    """
    spec = launch_spec or build_launch_spec(
        settings,
        headless=mode_flag == HEADLESS_FLAG,
        command=server_command,
        args=server_args,
        browser_url=browser_url,
    )
    client = client_factory(launch_spec=spec, client_name=HEADLESS_CLIENT_NAME)

    task = asyncio.current_task()
    interrupted: List[int] = []
    closing = False

    def _interrupt(signum: int) -> None:
        if interrupted:
            return
        interrupted.append(signum)
        # Once closing, let the close finish; the signal only changes the exit code
        if not closing and task is not None:
            task.cancel()

    exit_code = 0
    result = None
    with handle_signals(_interrupt):
        try:
            await client.open()
            arguments = coerce_arguments(raw_argument)
            print(format_echo(tool_name, raw_argument))
            result = await client.call_tool(tool_name, arguments)
        except (ArgumentError, MCPError) as e:
            logger.debug("headless command failed", extra={"tool": tool_name, "error_type": type(e).__name__})
            print(format_error(e), file=sys.stderr)
            exit_code = 1
        except asyncio.CancelledError:
            if not interrupted:
                raise
            task.uncancel()
        finally:
            closing = True
            await client.close()

    if interrupted:
        print("Interrupted", file=sys.stderr)
        return INTERRUPTED_EXIT_CODE
    if exit_code:
        return exit_code
    print(format_result(result))
    return 0
