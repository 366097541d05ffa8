from __future__ import annotations

from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator


class LaunchSpec(BaseModel):
    """Command path and argument list used to spawn the MCP server."""

    model_config = ConfigDict(frozen=True)

    command: str = Field(min_length=1, description="Executable to spawn")
    args: List[str] = Field(default_factory=list, description="Ordered argument list")
    env: Optional[Dict[str, str]] = Field(default=None, description="Environment override")

    @field_validator("command")
    @classmethod
    def _strip_command(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("launch command must not be blank")
        return value


class InvocationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    tool_name: str = Field(min_length=1, description="Remote tool name")
    # Usually an object; other JSON values are passed through for the server to judge
    arguments: JsonValue = Field(default_factory=dict)
