import gc
import json

import pytest

from simplege import scene
from simplege.components import PositionComponent
from simplege.ecs import EntitySystem, find_object, root_entity
from simplege.game import Game, RunResult
from simplege.math import Point
from simplege.systems import System


@pytest.fixture(autouse=True)
def clean_scene():
    yield
    root_entity().clear()
    EntitySystem.instance().iterate(None)
    gc.collect()


class _Counter(System):
    def __init__(self, stop_at):
        self.stop_at = stop_at
        self.timings = []

    def iterate(self, timing):
        self.timings.append(timing)
        if timing.frame >= self.stop_at:
            Game.close()


class _TestGame(Game):
    def __init__(self, scene_name, root, stop_at=2):
        super().__init__(root)
        self.scene_name = scene_name
        self.counter = _Counter(stop_at)
        self.registered = False

    def launch_scene(self):
        return self.scene_name

    def setup_system(self):
        self.add_system(self.counter)

    def register_components(self):
        self.registered = True


SCENE = {"player": {"components": {"Position": {"x": 1, "y": 2, "z": 3}}}}


def _player_position():
    return find_object("player").get_component(PositionComponent).local_position


@pytest.fixture
def data_root(tmp_path):
    (tmp_path / "scene.json").write_text(json.dumps(SCENE), encoding="utf-8")
    return tmp_path


def test_run_loads_scene_and_stops_on_close(data_root):
    game = _TestGame("scene.json", data_root)
    assert game.run() is RunResult.SUCCESS
    assert [t.frame for t in game.counter.timings] == [0, 1, 2]
    assert game.registered is True
    assert _player_position() == Point((1, 2, 3))


def test_run_fails_without_scene(tmp_path):
    game = _TestGame("missing.json", tmp_path)
    assert game.run() is RunResult.FAILURE
    assert game.counter.timings == []
    assert root_entity().children == ()
    assert find_object("player") is None


def test_frame_events_surround_systems(data_root):
    events = []
    Game.frame_begin_event.register(lambda frame: events.append(("begin", frame)))
    Game.frame_end_event.register(lambda frame: events.append(("end", frame)))
    game = _TestGame("scene.json", data_root, stop_at=1)
    assert game.run() is RunResult.SUCCESS
    assert events[-4:] == [("begin", 0), ("end", 0), ("begin", 1), ("end", 1)]


def test_deltas_are_whole_milliseconds(data_root):
    game = _TestGame("scene.json", data_root, stop_at=2)
    assert game.run() is RunResult.SUCCESS
    assert len(game.counter.timings) == 3
    assert all(t.delta.microseconds % 1000 == 0 for t in game.counter.timings)
    assert _player_position() == Point((1, 2, 3))


def test_game_can_run_again_after_close(data_root):
    first = _TestGame("scene.json", data_root, stop_at=0)
    assert first.run() is RunResult.SUCCESS
    root_entity().clear()
    EntitySystem.instance().iterate(None)
    assert find_object("player") is None
    second = _TestGame("scene.json", data_root, stop_at=1)
    assert second.run() is RunResult.SUCCESS
    assert [t.frame for t in second.counter.timings] == [0, 1]
    assert _player_position() == Point((1, 2, 3))


def test_load_scene_creates_entities(data_root):
    game = _TestGame("scene.json", data_root)
    assert game.load_scene("scene.json") is True
    assert _player_position() == Point((1, 2, 3))
    assert [child.get_component(PositionComponent).local_position
            for child in root_entity().children] == [Point((1, 2, 3))]
    assert game.load_scene("absent.json") is False


def test_load_scene_invalid_json_raises(tmp_path):
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    game = _TestGame("bad.json", tmp_path)
    with pytest.raises(ValueError):
        game.load_scene("bad.json")
    with pytest.raises(ValueError):
        scene.load("{not json")
    assert root_entity().children == ()


def test_context_manager_clears_scene(data_root):
    with _TestGame("scene.json", data_root) as game:
        game.load_scene("scene.json")
        assert _player_position() == Point((1, 2, 3))
    assert find_object("player") is None
    assert root_entity().children == ()
    scene.clear()