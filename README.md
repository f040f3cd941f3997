# simplege

The core of a small entity-component game engine. Scenes are described in
JSON. Entities form a tree and carry components. Systems update the
components once per frame.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `simplege.math`: immutable `Point` and `Vector` of any width, `Size` and
  the centred, axis-aligned `Area` with `intersects` (touching edges do not
  count). `point_from_json`, `size_from_json` and `area_from_json` read the
  `x`/`y`/`w`/`h` keys used in scene data.
- `simplege.events`: `EventTrigger`, which calls its handlers in registration
  order, and `Timing`, which holds a frame's `delta` (a `timedelta`) and
  `frame` number.
- `simplege.commandline`: `CommandLine` maps option names to callbacks.
  `parse(args)` skips the program name. It reports unknown options on stderr
  and raises `ValueError` when a known option has no value after it.
- `simplege.resources`: `load_binary`, `load_text` and `load_image` read
  `root/name` (by default under `data`) and return a `BinAsset`, `TextAsset`
  or `Image`. They raise `OSError` when the file cannot be read.
  `Image.from_bytes` decodes PNG data to 8-bit RGBA `pixels` and raises
  `ValueError` for data that is not PNG.
- `simplege.ecs`: `Entity`, `Component` and `ComponentReference`. Staged setup
  uses `SetupStep`, `SetupResult` and `resolve`. Also provides the component
  registry (`register_component`, `create_component`), the scene root
  (`root_entity`) and the lookups `find_object` and `find_component`.
  `EntitySystem` deactivates removed entities at once and disposes of them on
  its next `iterate`.
- `simplege.scene`: `load` builds entities under the root from a JSON string.
  `create_child` and `create_child_with` add entities at runtime. `clear`
  empties the scene. Setups that cannot complete raise `RuntimeError`.
- `simplege.systems`: the `System` base class, `LogicSystem` with the
  `LogicComponent` base class, and `PhysicSystem`. `PhysicSystem` notifies
  both colliders of every overlapping pair.
- `simplege.components`: `PositionComponent`, `ColliderComponent` (it forwards
  collisions to a `CollisionComponent` handler), `EnablerComponent`, and
  `KeyboardInputComponent` with the `Action` enum. `key_code`, `set_key_reader`
  and `register_generic_components` are here too.
- `simplege.game`: the `Game` base class, its frame loop and `RunResult`.

## A scene description

```json
{
  "player": {
    "components": {
      "Position": {"x": 0, "y": 0, "z": 0},
      "Collider": {"flag": 1, "mask": 2, "size": {"w": 16, "h": 16}}
    },
    "children": {
      "shadow": {"components": {"Position": {"x": 0, "y": -4, "z": 0}}}
    }
  }
}
```

```python
from simplege import components, scene
from simplege.ecs import find_object

components.register_generic_components()
with open("data/scene.json", encoding="utf-8") as f:
    scene.load(f.read())
player = find_object("player")
print(player.get_component(components.PositionComponent).world_position())
```

Entities and component types are created in sorted name order. Components
are referred to by `"entity.Type"` strings, for example `"player.Collider"`.
`resolve` runs setup steps that wait on other components once those
components are ready.

## Writing a game

Subclass `Game` and implement three methods:

- `launch_scene` returns the scene file to load from `data_root`.
- `setup_system` adds systems with `add_system`.
- `register_components` registers the game's own component types.

Then call `run()`. It returns `RunResult.FAILURE` if the launch scene cannot
be read. Otherwise it runs frames, at most one every 25 ms, until
`Game.close()` is called, and then returns `RunResult.SUCCESS`. Handlers on
`Game.frame_begin_event` and `Game.frame_end_event` receive the frame number.
A `Game` used as a context manager clears the scene on exit.

## What it does not do

The package draws nothing and opens no window. It has no camera, no sprites,
no text display and no on-screen interface. Keyboard state comes only from
the function given to `set_key_reader`. Until one is installed, no key
reads as pressed.