"""Interpret one line of interactive input.

Meta-commands (help, commands, clear, quit) are handled locally; every other
line becomes a tool call on the active session.
"""

from __future__ import annotations

import logging
import sys
from enum import Enum
from typing import Callable, Optional, Tuple

from prompt_toolkit.shortcuts import clear

from src.adapters.tool_invoker import ToolInvoker
from src.core.constants import CLEAR_COMMAND, HELP_COMMANDS, HELP_FLAGS, LIST_COMMAND, QUIT_COMMANDS
from src.core.mcp_client import MCPError, NotConnectedError
from src.devtools.coercion import ArgumentError, coerce_arguments
from src.devtools.formatting import (
    format_command_detail,
    format_command_list,
    format_echo,
    format_error,
    format_result,
    interactive_help,
)
from src.devtools.registry import REGISTRY, CommandRegistry

logger = logging.getLogger(__name__)


class DispatchOutcome(Enum):
    CONTINUE = "continue"
    QUIT = "quit"


def split_command(line: str) -> Tuple[str, Optional[str]]:
    """Split into the command token and the raw remainder (None when absent)."""
    parts = line.strip().split(None, 1)
    if not parts:
        return "", None
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


def is_help_request(remainder: Optional[str]) -> bool:
    if not remainder:
        return False
    return remainder.split(None, 1)[0] in HELP_FLAGS


class Dispatcher:
    def __init__(
        self,
        invoker: Optional[ToolInvoker],
        registry: CommandRegistry = REGISTRY,
        *,
        clear_screen: Callable[[], None] = clear,
    ):
        # None when the session failed to open; every tool call then reports "not connected"
        self.invoker = invoker
        self.registry = registry
        self._clear_screen = clear_screen

    async def handle(self, line: str) -> DispatchOutcome:
        trimmed = line.strip()
        if not trimmed:
            return DispatchOutcome.CONTINUE

        if trimmed in QUIT_COMMANDS:
            return DispatchOutcome.QUIT

        if trimmed in HELP_COMMANDS:
            print(interactive_help(self.registry))
            return DispatchOutcome.CONTINUE

        if trimmed == LIST_COMMAND:
            print(format_command_list(self.registry))
            return DispatchOutcome.CONTINUE

        if trimmed == CLEAR_COMMAND:
            self._clear_screen()
            return DispatchOutcome.CONTINUE

        command, remainder = split_command(trimmed)
        if is_help_request(remainder):
            print(format_command_detail(self.registry, command))
            return DispatchOutcome.CONTINUE

        await self.run_tool(command, remainder)
        return DispatchOutcome.CONTINUE

    async def run_tool(self, command: str, remainder: Optional[str]) -> bool:
        """Coerce, invoke and print. Returns True when the call succeeded."""
        print(format_echo(command, remainder))
        try:
            arguments = coerce_arguments(remainder)
            if self.invoker is None:
                raise NotConnectedError()
            result = await self.invoker.call_tool(command, arguments)
        except (ArgumentError, MCPError) as e:
            logger.debug("command failed", extra={"tool": command, "error_type": type(e).__name__})
            print(format_error(e), file=sys.stderr)
            return False

        print(format_result(result))
        return True
