from __future__ import annotations

from typing import Any, Dict, Protocol

from pydantic import JsonValue


class ToolInvoker(Protocol):
    """Abstract interface for invoking MCP tools over one session.

    Implementations may spawn a stdio server, talk to a fake in tests, or use
    any other transport; callers only rely on this lifecycle.
    """

    @property
    def connected(self) -> bool:
        ...

    async def open(self) -> None:
        ...

    async def call_tool(self, name: str, arguments: JsonValue) -> Dict[str, Any]:
        ...

    async def close(self) -> None:
        ...
