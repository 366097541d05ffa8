from __future__ import annotations

import asyncio
import json
import os
import signal

import pytest

from src.core.config import Settings
from src.core.mcp_client import InvocationError
from src.devtools.runner import run_command
from fakes import FakeToolInvoker, RecordingFactory, connection_refused


def run(tool, raw=None, flag=None, factory=None, settings=None):
    factory = factory or RecordingFactory()
    code = asyncio.run(run_command(tool, raw, flag, settings=settings or Settings(), client_factory=factory))
    return code, factory


def test_runs_command_without_arguments(capsys):
    code, factory = run("list_pages")

    assert code == 0
    client = factory.client
    assert client.calls == [("list_pages", {})]
    assert client.open_count == 1
    assert client.close_count == 1
    out = capsys.readouterr().out
    assert out == "list_pages\n" + json.dumps(client.result, indent=2) + "\n"


def test_runs_command_with_json_argument(capsys):
    code, factory = run("navigate_page", '{"url": "https://google.com"}')

    assert code == 0
    assert factory.client.calls == [("navigate_page", {"url": "https://google.com"})]
    assert capsys.readouterr().out.startswith('navigate_page {"url": "https://google.com"}\n')


def test_complex_arguments():
    code, factory = run("fill_form", '{"elements": [{"uid": "1", "value": "test"}]}')
    assert code == 0
    assert factory.client.calls == [("fill_form", {"elements": [{"uid": "1", "value": "test"}]})]


def test_blank_arguments_become_empty_object():
    for raw in ("", "   "):
        code, factory = run("list_pages", raw)
        assert code == 0
        assert factory.client.calls == [("list_pages", {})]


def test_headless_flag_adds_server_argument():
    _, factory = run("list_pages", None, "--headless")
    assert factory.client.launch_spec.args[-1] == "--headless=true"


def test_default_launch_without_headless_flag():
    _, factory = run("list_pages")
    spec = factory.client.launch_spec
    assert spec.command == "npx"
    assert spec.args == ["-y", "chrome-devtools-mcp@latest", "--browser-url=http://127.0.0.1:9222"]
    assert "--headless=true" not in spec.args


def test_unrecognised_flag_is_ignored():
    _, factory = run("list_pages", None, "--verbose")
    assert "--headless=true" not in factory.client.launch_spec.args


def test_uses_headless_client_identity():
    _, factory = run("list_pages")
    assert factory.client.client_name == "chrome-devtools-cli-headless"


def test_launch_spec_follows_settings():
    settings = Settings(server_command="node", server_args=("server.js",), browser_url="")
    _, factory = run("list_pages", settings=settings)
    spec = factory.client.launch_spec
    assert spec.command == "node"
    assert spec.args == ["server.js"]


def test_connection_failure_exits_non_zero(capsys):
    code, factory = run("list_pages", factory=RecordingFactory(open_error=connection_refused()))

    assert code == 1
    assert factory.client.calls == []
    assert factory.client.close_count == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("Error running command: Failed to connect to MCP server")


def test_tool_failure_exits_non_zero(capsys):
    error = InvocationError("navigate_page", "Tool execution failed")
    code, factory = run("navigate_page", '{"url": "invalid"}', factory=RecordingFactory(call_error=error))

    assert code == 1
    assert factory.client.close_count == 1
    assert capsys.readouterr().err == "Error running command: Tool execution failed\n"


def test_invalid_json_exits_non_zero_without_output(capsys):
    code, factory = run("navigate_page", "invalid json")

    assert code == 1
    assert factory.client.calls == []
    assert factory.client.close_count == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid JSON arguments" in captured.err


def test_error_flagged_result_is_printed_in_full(capsys):
    document = {"content": [{"type": "text", "text": "No page found"}, {"type": "text", "text": "uid 9_9"}], "isError": True}
    error = InvocationError("click", "No page found", result=document)
    code, _ = run("click", '{"uid": "9_9"}', factory=RecordingFactory(call_error=error))

    assert code == 1
    err = capsys.readouterr().err
    assert err.startswith("Error running command: No page found\n")
    assert json.dumps(document, indent=2) in err


class SignalledInvoker(FakeToolInvoker):
    """Sends itself SIGTERM during one lifecycle phase."""

    def __init__(self, phase, **kwargs):
        super().__init__(**kwargs)
        self.phase = phase

    async def _deliver(self, phase, wait):
        if phase == self.phase:
            os.kill(os.getpid(), signal.SIGTERM)
            await asyncio.sleep(wait)

    async def open(self):
        await self._deliver("open", 5)
        await super().open()

    async def call_tool(self, name, arguments):
        await self._deliver("call", 5)
        return await super().call_tool(name, arguments)

    async def close(self):
        # Long enough for the handler to run; must not be cut short
        await self._deliver("close", 0.1)
        await super().close()


@pytest.mark.parametrize("phase", ["open", "call", "close"])
def test_signal_interrupts_and_still_closes(phase, capsys):
    client = SignalledInvoker(phase)

    code = asyncio.run(
        run_command("list_pages", None, settings=Settings(), client_factory=lambda **_: client)
    )

    assert code == 130
    assert client.close_count == 1
    captured = capsys.readouterr()
    assert captured.err.endswith("Interrupted\n")
    assert json.dumps(client.result, indent=2) not in captured.out


def test_signal_after_argument_error_still_closes(capsys):
    client = SignalledInvoker("close")

    code = asyncio.run(
        run_command("navigate_page", "not json", settings=Settings(), client_factory=lambda **_: client)
    )

    assert code == 130
    assert client.close_count == 1
    assert "Invalid JSON arguments" in capsys.readouterr().err
