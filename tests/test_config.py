from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.core import config
from src.core.config import Settings, build_launch_spec, get_settings
from src.core.schemas import LaunchSpec


def test_default_launch_spec():
    spec = build_launch_spec(Settings())
    assert spec.command == "npx"
    assert spec.args == ["-y", "chrome-devtools-mcp@latest", "--browser-url=http://127.0.0.1:9222"]
    assert spec.env is None


def test_headless_argument_is_appended_last():
    spec = build_launch_spec(Settings(), headless=True)
    assert spec.args[-2:] == ["--browser-url=http://127.0.0.1:9222", "--headless=true"]


def test_explicit_arguments_replace_defaults():
    spec = build_launch_spec(Settings(), command="node", args=["server.js", "--port=9"], headless=True)
    assert spec.command == "node"
    assert spec.args == ["server.js", "--port=9", "--headless=true"]


def test_browser_url_override_and_disable():
    assert build_launch_spec(Settings(), browser_url="http://10.0.0.2:9333").args[-1] == (
        "--browser-url=http://10.0.0.2:9333"
    )
    assert build_launch_spec(Settings(), browser_url="").args == ["-y", "chrome-devtools-mcp@latest"]


def test_settings_from_environment(monkeypatch):
    monkeypatch.setattr(config, "_cached_settings", None)
    monkeypatch.setenv("CHROME_DEVTOOLS_MCP_COMMAND", "/usr/local/bin/devtools-mcp")
    monkeypatch.setenv("CHROME_DEVTOOLS_MCP_ARGS", "--isolated --channel 'canary build'")
    monkeypatch.setenv("CHROME_BROWSER_URL", "")
    monkeypatch.setenv("CHROME_DEVTOOLS_CLI_LOG_LEVEL", "debug")
    monkeypatch.setenv("CHROME_DEVTOOLS_CLI_PROMPT", "devtools> ")

    settings = get_settings()

    assert settings.server_command == "/usr/local/bin/devtools-mcp"
    assert settings.server_args == ("--isolated", "--channel", "canary build")
    assert settings.browser_url == ""
    assert settings.log_level == "DEBUG"
    assert settings.prompt == "devtools> "
    assert get_settings() is settings


def test_settings_are_frozen():
    with pytest.raises(Exception):
        Settings().prompt = "x> "  # type: ignore[misc]


def test_launch_spec_rejects_blank_command():
    with pytest.raises(ValidationError):
        LaunchSpec(command="   ")
