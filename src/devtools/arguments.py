"""Classify command-line arguments into an execution mode.

Pure: nothing is printed, spawned or exited here. `chrome_devtools_cli.main`
acts on the returned request.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
from typing import NoReturn, Optional, Sequence, Tuple

from src.core.constants import HEADLESS_FLAG


class UsageError(ValueError):
    pass


class CliMode(Enum):
    VERSION = "version"
    LIST_COMMANDS = "list_commands"
    GENERAL_HELP = "general_help"
    COMMAND_HELP = "command_help"
    HEADLESS_RUN = "headless_run"
    INTERACTIVE = "interactive"


@dataclass(frozen=True)
class CliRequest:
    mode: CliMode
    command: Optional[str] = None
    raw_argument: Optional[str] = None
    headless: bool = False
    server_command: Optional[str] = None
    server_args: Optional[Tuple[str, ...]] = None
    browser_url: Optional[str] = None
    log_level: Optional[str] = None

    @property
    def mode_flag(self) -> Optional[str]:
        return HEADLESS_FLAG if self.headless else None


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    # -h is a plain flag so that "<command> -h" can mean per-command help
    parser = _Parser(prog="chrome-devtools-cli", add_help=False, allow_abbrev=False)
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("--commands", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    parser.add_argument(HEADLESS_FLAG, dest="headless", action="store_true")
    parser.add_argument("--server-command", dest="server_command")
    parser.add_argument("--server-arg", dest="server_args", action="append")
    parser.add_argument("--browser-url", dest="browser_url")
    parser.add_argument("--log-level", dest="log_level", type=str.upper)
    parser.add_argument("command", nargs="?")
    parser.add_argument("argument", nargs="?")
    return parser


def classify_arguments(argv: Sequence[str]) -> CliRequest:
    """Map argv (without the program name) to a CliRequest.

    Precedence: version, command listing, per-command help, general help,
    headless run of a named command, interactive mode.
    """
    ns = build_parser().parse_intermixed_args(list(argv))

    common = dict(
        headless=ns.headless,
        server_command=ns.server_command,
        server_args=tuple(ns.server_args) if ns.server_args is not None else None,
        browser_url=ns.browser_url,
        log_level=ns.log_level,
    )

    if ns.version:
        return CliRequest(CliMode.VERSION, **common)
    if ns.commands:
        return CliRequest(CliMode.LIST_COMMANDS, **common)
    if ns.help:
        if ns.command:
            return CliRequest(CliMode.COMMAND_HELP, command=ns.command, **common)
        return CliRequest(CliMode.GENERAL_HELP, **common)
    if ns.command:
        return CliRequest(CliMode.HEADLESS_RUN, command=ns.command, raw_argument=ns.argument, **common)
    return CliRequest(CliMode.INTERACTIVE, **common)
