"""Building the scene tree from JSON descriptions."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from simplege.ecs import Component, Entity, SetupResult, resolve, root_entity

_COMPONENTS_FIELD = "components"
_CHILDREN_FIELD = "children"


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be a JSON object")
    return value


def _create_internal(
    name: str, desc: Any, parent: Entity, pending: list[SetupResult]
) -> Entity:
    desc = _mapping(desc, f"description of {name!r}")
    components = _mapping(desc.get(_COMPONENTS_FIELD, {}), f"components of {name!r}")
    children = _mapping(desc.get(_CHILDREN_FIELD, {}), f"children of {name!r}")

    entity = Entity()
    parent.add_child(name, entity)
    _create_children(children, entity, pending)
    for type_name in sorted(components):
        entity.add_component(type_name, components[type_name], pending)
    return entity


def _create_children(
    desc: Mapping[str, Any], parent: Entity, pending: list[SetupResult]
) -> None:
    for name in sorted(desc):
        _create_internal(name, desc[name], parent, pending)


def _finish(pending: list[SetupResult]) -> None:
    if not resolve(pending):
        raise RuntimeError(f"{len(pending)} component setup(s) could not complete")


def load(description: str) -> None:
    """Create the entities described by a JSON document under the root entity."""
    desc = _mapping(json.loads(description), "scene description")
    pending: list[SetupResult] = []
    _create_children(desc, root_entity(), pending)
    _finish(pending)


def clear() -> None:
    """Remove everything from the scene."""
    root_entity().clear()


def create_child(desc: Mapping[str, Any], name: str, parent: Entity) -> Entity:
    """Create one entity, with its children and components, from a JSON-like description."""
    pending: list[SetupResult] = []
    entity = _create_internal(name, desc, parent, pending)
    _finish(pending)
    return entity


def create_child_with(
    components: Iterable[tuple[type[Component], Any]], name: str, parent: Entity
) -> Entity:
    """Create an entity with components given as (class, description) pairs, in order."""
    entity = Entity()
    parent.add_child(name, entity)
    pending: list[SetupResult] = []
    for component_class, description in components:
        entity.add_component(component_class, description, pending)
    _finish(pending)
    return entity