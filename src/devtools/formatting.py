from __future__ import annotations

import json
import textwrap
from typing import Any, Iterable, Optional

from src.core.constants import APP_VERSION
from src.devtools.registry import CommandRegistry, UnknownCommandError


def format_result(result: Any) -> str:
    return json.dumps(result, indent=2, ensure_ascii=False)


def format_error(error: Exception) -> str:
    text = f"Error running command: {error}"
    # Error-flagged tool results are printed whole, like successful ones
    result = getattr(error, "result", None)
    if result is not None:
        text += "\n" + format_result(result)
    return text


def format_echo(command: str, raw_argument: Optional[str] = None, flag: Optional[str] = None) -> str:
    return " ".join(part for part in (command, raw_argument, flag) if part)


def format_command_list(registry: CommandRegistry) -> str:
    lines = ["", "Available commands:"]
    for i, (name, summary) in enumerate(registry.describe_all(), 1):
        lines.append(f"{i}. {name}: {summary}")
    return "\n".join(lines)


def format_command_detail(registry: CommandRegistry, name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        return "Please provide a command name.\n" + format_command_list(registry)
    try:
        descriptor = registry.lookup(name)
    except UnknownCommandError as e:
        return f"{e}\n" + format_command_list(registry)

    summary = descriptor.summary or "No additional information available."
    detail = descriptor.detail.strip()
    return f"{descriptor.name}\n{summary}" + (f"\n{detail}" if detail else "")


def _wrapped_names(names: Iterable[str], width: int = 72) -> str:
    return textwrap.fill(", ".join(names), width=width, break_on_hyphens=False)


def interactive_help(registry: CommandRegistry) -> str:
    return f"""
Chrome DevTools CLI v{APP_VERSION}

Usage:

commands         list all the available commands
<command> -h     quick help on <command>
<command> <arg>  run <command> with argument
clear            clear the screen
exit, quit, q    exit the CLI

All commands:

{_wrapped_names(registry.names())}

e.g.: >select_page {{"pageIdx":1}}
"""


def general_help(registry: CommandRegistry) -> str:
    return f"""
Chrome DevTools CLI

Usage:

chrome-devtools-cli                  start interactive CLI
chrome-devtools-cli --headless       run CLI in headless mode
chrome-devtools-cli --commands       list all the available commands
chrome-devtools-cli <command> -h     quick help on <command>
chrome-devtools-cli <command> <arg>  run command in headless mode

Server options:

--server-command CMD   executable used to start the MCP server
--server-arg=ARG       server argument (repeatable, replaces the defaults)
--browser-url URL      DevTools endpoint of a running browser
--log-level LEVEL      logging verbosity on stderr

All commands:

{_wrapped_names(registry.names())}

e.g.: >chrome-devtools-cli select_page '{{"pageIdx":1}}'
"""
