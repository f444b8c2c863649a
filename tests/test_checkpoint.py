"""
Unit tests for checkpoint files
"""

import json

import pytest

from randagent.agents.randomAgent import PersistedState, RandomAgent
from randagent.checkpoint import find_latest_checkpoint, load_checkpoint, save_checkpoint
from randagent.seeding import Seed
from randagent.spaces import ActionSpace, Continuous, Discrete


class TestCheckpointFiles:
    """Test writing, reading and discovering checkpoints."""

    def test_round_trip_with_metadata(self, tmp_path):
        state = PersistedState(seed=Seed.from_value(31), cursor=12)
        path = tmp_path / "nested" / "rand_last_ep_000001.json"
        save_checkpoint(path, state, metadata={"episode": 1})

        loaded, metadata = load_checkpoint(path)
        assert loaded == state
        assert metadata == {"episode": 1}

    def test_file_layout(self, tmp_path):
        path = tmp_path / "ckpt.json"
        save_checkpoint(path, PersistedState(seed=Seed.from_value(0), cursor=3))
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
        assert data == {"agent_state": {"seed": "00" * 32, "cursor": 3}, "metadata": {}}

    def test_resumed_agent_matches_original(self, tmp_path):
        space = ActionSpace([Discrete(0, 100), Continuous(-5.0, 5.0)])
        original = RandomAgent(space, seed=2024)
        for _ in range(9):
            original.choose_action(())
        path = tmp_path / "agent.json"
        save_checkpoint(path, original.store())

        restored = RandomAgent(space)
        restored.load(load_checkpoint(path)[0])
        assert [restored.choose_action(()) for _ in range(5)] == [original.choose_action(()) for _ in range(5)]

    def test_missing_file_raises_os_error(self, tmp_path):
        with pytest.raises(OSError):
            load_checkpoint(tmp_path / "missing.json")

    def test_invalid_json_raises_value_error(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            load_checkpoint(path)

    def test_missing_agent_state_raises_value_error(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}", encoding="utf-8")
        with pytest.raises(ValueError):
            load_checkpoint(path)

    def test_find_latest_checkpoint(self, tmp_path):
        assert find_latest_checkpoint(tmp_path, "rand_last") is None
        for episode in (2, 10, 7):
            save_checkpoint(tmp_path / f"rand_last_ep_{episode:06d}.json", PersistedState(seed=Seed.from_value(0), cursor=episode))
        assert find_latest_checkpoint(tmp_path, "rand_last").name == "rand_last_ep_000010.json"
