"""
Unit tests for the gymnasium action space adapter
"""

import numpy as np
import pytest
from gymnasium import spaces

from randagent.agents.randomAgent import RandomAgent
from randagent.env.gymAdapter import GymActionAdapter, action_space_from_gym, state_from_observation
from randagent.spaces import ActionSpace, Continuous, Discrete, Float, Integer


class TestActionSpaceConversion:
    """Test conversion of gymnasium spaces into flat action spaces."""

    def test_discrete(self):
        assert action_space_from_gym(spaces.Discrete(4)) == ActionSpace([Discrete(0, 3)])

    def test_discrete_with_start(self):
        assert action_space_from_gym(spaces.Discrete(3, start=-1)) == ActionSpace([Discrete(-1, 1)])

    def test_float_box(self):
        box = spaces.Box(low=np.array([-1.0, 0.0]), high=np.array([1.0, 5.0]), dtype=np.float64)
        assert action_space_from_gym(box) == ActionSpace([Continuous(-1.0, 1.0), Continuous(0.0, 5.0)])

    def test_integer_box(self):
        box = spaces.Box(low=0, high=7, shape=(2, 2), dtype=np.int64)
        assert action_space_from_gym(box) == ActionSpace([Discrete(0, 7)] * 4)

    def test_uint64_box_beyond_int64_rejected(self):
        box = spaces.Box(low=0, high=2**64 - 1, shape=(1,), dtype=np.uint64)
        with pytest.raises(ValueError):
            action_space_from_gym(box)

    def test_unbounded_box_rejected(self):
        box = spaces.Box(low=-np.inf, high=np.inf, shape=(2,), dtype=np.float32)
        with pytest.raises(ValueError):
            action_space_from_gym(box)

    def test_multi_discrete(self):
        assert action_space_from_gym(spaces.MultiDiscrete([2, 5])) == ActionSpace([Discrete(0, 1), Discrete(0, 4)])

    def test_multi_binary(self):
        assert action_space_from_gym(spaces.MultiBinary(3)) == ActionSpace([Discrete(0, 1)] * 3)

    def test_tuple_is_flattened_depth_first(self):
        space = spaces.Tuple((spaces.Discrete(2), spaces.Tuple((spaces.Box(0.0, 1.0, shape=(1,)), spaces.Discrete(3)))))
        assert action_space_from_gym(space) == ActionSpace([Discrete(0, 1), Continuous(0.0, 1.0), Discrete(0, 2)])

    def test_unsupported_space_rejected(self):
        with pytest.raises(TypeError):
            action_space_from_gym(spaces.Text(5))


class TestGymActionAdapter:
    """Test that sampled actions are valid members of the gymnasium space."""

    @pytest.mark.parametrize(
        "space",
        [
            spaces.Discrete(5, start=2),
            spaces.Box(low=-2.0, high=2.0, shape=(3,), dtype=np.float32),
            spaces.Box(low=-3, high=3, shape=(2, 2), dtype=np.int64),
            spaces.MultiDiscrete([3, 4, 5]),
            spaces.MultiBinary(4),
            spaces.Tuple((spaces.Discrete(2), spaces.Box(0.0, 1.0, shape=(2,), dtype=np.float32))),
        ],
    )
    def test_sampled_actions_belong_to_space(self, space):
        adapter = GymActionAdapter(space)
        agent = RandomAgent(adapter.action_space, seed=17)
        for _ in range(50):
            assert space.contains(adapter.to_gym(agent.choose_action(())))

    def test_wrong_length_rejected(self):
        adapter = GymActionAdapter(spaces.Discrete(2))
        with pytest.raises(ValueError):
            adapter.to_gym((Integer(0), Integer(1)))


class TestObservationConversion:
    """Test observation flattening."""

    def test_float_observation(self):
        assert state_from_observation(np.array([[0.5, 1.5]], dtype=np.float32)) == (Float(0.5), Float(1.5))

    def test_integer_observation(self):
        assert state_from_observation(3) == (Integer(3),)
