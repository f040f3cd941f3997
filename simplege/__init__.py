"""A small entity-component game engine core: scenes, components, systems and resources."""

__version__ = "0.1.0"

__all__ = [
    "commandline",
    "components",
    "ecs",
    "events",
    "game",
    "math",
    "resources",
    "scene",
    "systems",
]