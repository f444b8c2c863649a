from typing import Any, List, Tuple

import numpy as np
from gymnasium import spaces

from randagent.spaces import ActionSpace, AgentAction, Continuous, Discrete, DimensionBoundaries, EnvironmentState, Float, Integer


def _boundaries_for(space: spaces.Space) -> List[DimensionBoundaries]:
    if isinstance(space, spaces.Discrete):
        start = int(space.start)
        return [Discrete(start, start + int(space.n) - 1)]

    if isinstance(space, spaces.Box):
        low = np.asarray(space.low).ravel()
        high = np.asarray(space.high).ravel()
        if np.issubdtype(space.dtype, np.integer):
            return [Discrete(int(lo), int(hi)) for lo, hi in zip(low, high)]
        if not (np.all(np.isfinite(low)) and np.all(np.isfinite(high))):
            raise ValueError(f"Cannot sample uniformly from an unbounded Box: {space}")
        return [Continuous(float(lo), float(hi)) for lo, hi in zip(low, high)]

    if isinstance(space, spaces.MultiDiscrete):
        nvec = np.asarray(space.nvec).ravel()
        start = np.asarray(getattr(space, "start", np.zeros_like(space.nvec))).ravel()
        return [Discrete(int(s), int(s) + int(n) - 1) for s, n in zip(start, nvec)]

    if isinstance(space, spaces.MultiBinary):
        return [Discrete(0, 1) for _ in range(int(np.prod(space.shape)))]

    if isinstance(space, spaces.Tuple):
        boundaries: List[DimensionBoundaries] = []
        for subspace in space.spaces:
            boundaries.extend(_boundaries_for(subspace))
        return boundaries

    raise TypeError(f"Unsupported gymnasium action space: {type(space).__name__}")


def action_space_from_gym(space: spaces.Space) -> ActionSpace:
    return ActionSpace(_boundaries_for(space))


def state_from_observation(observation: Any) -> EnvironmentState:
    flat = np.asarray(observation).ravel()
    if np.issubdtype(flat.dtype, np.integer) or np.issubdtype(flat.dtype, np.bool_):
        return tuple(Integer(int(value)) for value in flat)
    return tuple(Float(float(value)) for value in flat)


class GymActionAdapter:
    """Translates between a gymnasium action space and the flat agent actions.

    Dimensions are laid out in C order for array spaces and depth first for
    Tuple spaces.
    """

    def __init__(self, space: spaces.Space):
        self.space = space
        self.action_space = action_space_from_gym(space)

    def to_gym(self, action: AgentAction) -> Any:
        if len(action) != len(self.action_space):
            raise ValueError(f"Expected {len(self.action_space)} action values, got {len(action)}.")
        gym_action, _ = self._build(self.space, action, 0)
        return gym_action

    def _build(self, space: spaces.Space, action: AgentAction, offset: int) -> Tuple[Any, int]:
        if isinstance(space, spaces.Discrete):
            return int(action[offset].value), offset + 1

        if isinstance(space, spaces.Tuple):
            parts = []
            for subspace in space.spaces:
                part, offset = self._build(subspace, action, offset)
                parts.append(part)
            return tuple(parts), offset

        size = int(np.prod(space.shape))
        values = [item.value for item in action[offset:offset + size]]
        array = np.asarray(values, dtype=space.dtype).reshape(space.shape)
        return array, offset + size
