from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from src.adapters.tool_invoker import ToolInvoker
from src.core.mcp_client import MCPConnectionError, NotConnectedError
from src.core.schemas import LaunchSpec


DEFAULT_RESULT: Dict[str, Any] = {"content": [{"type": "text", "text": "ok"}], "isError": False}


class FakeToolInvoker(ToolInvoker):
    """In-memory session: records calls, never spawns anything."""

    def __init__(
        self,
        *,
        launch_spec: Optional[LaunchSpec] = None,
        client_name: str = "fake",
        result: Optional[Dict[str, Any]] = None,
        open_error: Optional[Exception] = None,
        call_error: Optional[Exception] = None,
        connected: bool = False,
    ):
        self.launch_spec = launch_spec
        self.client_name = client_name
        self.result = result if result is not None else dict(DEFAULT_RESULT)
        self.open_error = open_error
        self.call_error = call_error
        self._connected = connected
        self.calls: List[Tuple[str, Any]] = []
        self.open_count = 0
        self.close_count = 0

    @property
    def connected(self) -> bool:
        return self._connected

    async def open(self) -> None:
        self.open_count += 1
        if self.open_error is not None:
            raise self.open_error
        self._connected = True

    async def call_tool(self, name: str, arguments: Any) -> Dict[str, Any]:
        if not self._connected:
            raise NotConnectedError()
        self.calls.append((name, arguments))
        if self.call_error is not None:
            raise self.call_error
        return self.result

    async def close(self) -> None:
        self.close_count += 1
        self._connected = False


class RecordingFactory:
    """Stands in for the MCPClient class in the headless runner."""

    def __init__(self, **fake_kwargs: Any):
        self.fake_kwargs = fake_kwargs
        self.instances: List[FakeToolInvoker] = []

    def __call__(self, *, launch_spec: LaunchSpec, client_name: str) -> FakeToolInvoker:
        client = FakeToolInvoker(launch_spec=launch_spec, client_name=client_name, **self.fake_kwargs)
        self.instances.append(client)
        return client

    @property
    def client(self) -> FakeToolInvoker:
        assert len(self.instances) == 1
        return self.instances[0]


def connection_refused() -> MCPConnectionError:
    return MCPConnectionError("Failed to connect to MCP server (npx): spawn failed")
