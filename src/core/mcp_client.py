"""MCP client facade for the Chrome DevTools MCP server.

This module owns the lifecycle of one stdio session: spawn the server
process, perform the initialize handshake, call tools one at a time and
tear everything down again.

All CLI code should call this facade instead of touching the MCP library's
streams or request envelopes directly.
"""

from __future__ import annotations

from contextlib import AsyncExitStack
from typing import Any, Dict, List, Optional
import logging

from mcp import ClientSession, StdioServerParameters, types
from mcp.client.stdio import stdio_client
from pydantic import JsonValue

from .config import build_launch_spec
from .constants import CLIENT_NAME, CLIENT_VERSION
from .schemas import InvocationRequest, LaunchSpec
from src.adapters.tool_invoker import ToolInvoker


class MCPError(RuntimeError):
    pass


class MCPConnectionError(MCPError):
    """The server process could not be spawned or did not complete the handshake."""


class NotConnectedError(MCPError):
    def __init__(self, message: str = "Not connected to the MCP server"):
        super().__init__(message)


class InvocationError(MCPError):
    """A tool call failed; the message is the remote (or library) error text.

    `result` holds the full JSON document when the server answered with an
    error-flagged result rather than failing the request.
    """

    def __init__(self, tool_name: str, message: str, result: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.tool_name = tool_name
        self.result = result


def _describe(exc: BaseException) -> str:
    # Task groups wrap the real failure; report the innermost one
    while isinstance(exc, BaseExceptionGroup) and exc.exceptions:
        exc = exc.exceptions[0]
    text = str(exc)
    return text if text else type(exc).__name__


class MCPClient(ToolInvoker):
    def __init__(
        self,
        *,
        launch_spec: Optional[LaunchSpec] = None,
        client_name: str = CLIENT_NAME,
        client_version: str = CLIENT_VERSION,
    ):
        self.launch_spec = launch_spec or build_launch_spec()
        self.client_name = client_name
        self.client_version = client_version
        self.server_info: Optional[Dict[str, Any]] = None

        self._exit_stack: Optional[AsyncExitStack] = None
        self._session: Optional[ClientSession] = None
        self._closed = False

        self._logger = logging.getLogger(__name__)

    @property
    def connected(self) -> bool:
        return self._session is not None

    async def open(self) -> None:
        """Spawn the server and perform the MCP initialize handshake.

        Raises MCPConnectionError on any failure; whatever was already started
        is torn down before the error propagates.
        """
        if self._closed:
            raise MCPConnectionError("Session already closed; open a new client instead")
        if self._session is not None:
            return

        spec = self.launch_spec
        params = StdioServerParameters(command=spec.command, args=list(spec.args), env=spec.env)
        self._logger.info("mcp.spawn", extra={"command": spec.command, "server_args": spec.args})

        stack = AsyncExitStack()
        # Registered up front so close() still reaps a spawn interrupted by cancellation
        self._exit_stack = stack
        try:
            read, write = await stack.enter_async_context(stdio_client(params))
            session = await stack.enter_async_context(
                ClientSession(
                    read,
                    write,
                    client_info=types.Implementation(name=self.client_name, version=self.client_version),
                )
            )
            result = await session.initialize()
            info = _dump(result).get("serverInfo")
        except Exception as e:
            self._exit_stack = None
            await self._release(stack)
            raise MCPConnectionError(
                f"Failed to connect to MCP server ({spec.command} {' '.join(spec.args)}): {_describe(e)}"
            ) from e

        self._session = session
        # Cache for later debugging/inspection
        self.server_info = info
        self._logger.info("mcp.initialized", extra={"server": self.server_info})

    async def call_tool(self, name: str, arguments: JsonValue) -> Dict[str, Any]:
        if self._session is None:
            raise NotConnectedError()

        self._logger.info("mcp.call", extra={"tool": name, "has_args": bool(arguments)})
        try:
            request = InvocationRequest(tool_name=name, arguments=arguments)
            result = await self._session.call_tool(request.tool_name, request.arguments)  # type: ignore[arg-type]
            document = _dump(result)
        except Exception as e:
            raise InvocationError(name, _describe(e)) from e

        # Surface tool-level errors per MCP guidance
        if document.get("isError"):
            raise InvocationError(name, _tool_error_message(name, document.get("content")), result=document)
        return document

    async def close(self) -> None:
        """Release the session and terminate the server process. Idempotent."""
        if self._closed:
            return
        self._closed = True
        stack, self._exit_stack = self._exit_stack, None
        self._session = None
        if stack is not None:
            self._logger.info("mcp.close", extra={"command": self.launch_spec.command})
            await self._release(stack)

    async def _release(self, stack: AsyncExitStack) -> None:
        try:
            await stack.aclose()
        except Exception as e:
            self._logger.warning("mcp.close cleanup failed: %s", _describe(e))


def _dump(result: Any) -> Dict[str, Any]:
    # Wire (camelCase) field names, e.g. "isError" and "serverInfo"
    return result.model_dump(mode="json", by_alias=True, exclude_none=True)


def _tool_error_message(name: str, content: Optional[List[Dict[str, Any]]]) -> str:
    """Extract a human-friendly message from an isError CallToolResult."""
    for item in content or []:
        text = item.get("text")
        if isinstance(text, str) and text.strip():
            return text.strip()
    return f"Tool '{name}' reported an error. Check arguments."
