from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class HookAction(BaseModel):
    """Single hook action: a shell command run by Claude Code."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    type: Literal["command"] = "command"
    command: str


class HookMatcher(BaseModel):
    """Named rule (matcher) and the list of actions it runs."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)
    matcher: str
    hooks: list[HookAction]


# Event name whose entries are merged element-wise by matcher.
STOP_EVENT = "Stop"
