"""Event dispatch and per-frame timing."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any


@dataclass
class EventTrigger:
    """A list of handlers called, in registration order, when triggered."""

    handlers: list[Callable[..., Any]] = field(default_factory=list)

    def register(self, handler: Callable[..., Any]) -> None:
        self.handlers.append(handler)

    def trigger(self, *args: Any) -> None:
        for handler in list(self.handlers):
            handler(*args)


@dataclass(frozen=True)
class Timing:
    """Time elapsed since the previous frame, and the frame number."""

    delta: timedelta
    frame: int