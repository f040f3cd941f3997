"""The main loop: set up systems, load the launch scene, run frames until closed."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from datetime import timedelta
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar

from simplege import scene
from simplege.components import register_generic_components
from simplege.ecs import EntitySystem
from simplege.events import EventTrigger, Timing
from simplege.resources import DATA_PATH, load_text
from simplege.systems import System

FRAME_LIMITER_MS = 25


class RunResult(Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def _now_ms() -> float:
    return time.monotonic() * 1000.0


class Game(ABC):
    """Base class of a game: subclasses name the launch scene and add their systems."""

    frame_begin_event: ClassVar[EventTrigger] = EventTrigger()
    frame_end_event: ClassVar[EventTrigger] = EventTrigger()
    _close_requested: ClassVar[bool] = False

    def __init__(self, data_root: str | Path = DATA_PATH) -> None:
        self.data_root = data_root
        self.systems: list[System | Any] = []

    def __enter__(self) -> Game:
        return self

    def __exit__(self, *exc_info: object) -> None:
        scene.clear()

    @classmethod
    def close(cls) -> None:
        """Ask the running loop to stop after the current frame."""
        Game._close_requested = True

    def add_system(self, system: System | Any) -> None:
        self.systems.append(system)

    def load_scene(self, file: str) -> bool:
        """Load a scene file from the data directory; False if it cannot be read."""
        try:
            content = load_text(file, self.data_root)
        except OSError:
            return False
        scene.load(content.value)
        return True

    def run(self) -> RunResult:
        """Run frames, at most one every 25 ms, until ``close`` is called."""
        register_generic_components()
        self.register_components()
        self.setup_system()
        self.add_system(EntitySystem.instance())

        if not self.load_scene(self.launch_scene()):
            return RunResult.FAILURE

        last = _now_ms()
        frame = 0
        while not Game._close_requested:
            now = _now_ms()
            delta_ms = int(now - last)
            if delta_ms < FRAME_LIMITER_MS:
                time.sleep((FRAME_LIMITER_MS - delta_ms) / 1000.0)
                now = _now_ms()
                delta_ms = int(now - last)
            last = now

            Game.frame_begin_event.trigger(frame)
            timing = Timing(timedelta(milliseconds=delta_ms), frame)
            for system in self.systems:
                system.iterate(timing)
            Game.frame_end_event.trigger(frame)
            frame += 1

        Game._close_requested = False
        return RunResult.SUCCESS

    @abstractmethod
    def launch_scene(self) -> str:
        """Name of the scene file loaded at start."""

    @abstractmethod
    def setup_system(self) -> None:
        """Add the game's systems."""

    @abstractmethod
    def register_components(self) -> None:
        """Register the game's own component types."""