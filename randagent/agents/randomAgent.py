import numbers
import threading
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from randagent.agents.agent import Agent, AgentError
from randagent.seeding import DeterministicStream, Seed, SeedLike
from randagent.spaces import ActionSpace, AgentAction, EnvironmentState


class RandomAgentError(AgentError):
    """Error kind of RandomAgent. Nothing raises it at the moment."""


@dataclass(frozen=True)
class PersistedState:
    seed: Seed
    cursor: int

    def __post_init__(self) -> None:
        if not isinstance(self.seed, Seed):
            object.__setattr__(self, "seed", Seed.from_value(self.seed))
        if isinstance(self.cursor, bool) or not isinstance(self.cursor, numbers.Integral):
            raise ValueError(f"cursor must be an integer, got {self.cursor!r}")
        object.__setattr__(self, "cursor", int(self.cursor))
        if self.cursor < 0:
            raise ValueError(f"cursor must be non-negative, got {self.cursor}")

    def to_dict(self) -> Dict[str, Any]:
        return {"seed": self.seed.hex(), "cursor": self.cursor}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PersistedState":
        if not isinstance(data, Mapping):
            raise ValueError(f"Persisted state must be a mapping, got {type(data).__name__}.")
        missing = [key for key in ("seed", "cursor") if key not in data]
        if missing:
            raise ValueError(f"Persisted state is missing field(s): {', '.join(missing)}")
        seed_value = data["seed"]
        if not isinstance(seed_value, str):
            raise ValueError("Persisted seed must be a hex string.")
        return cls(seed=Seed.from_hex(seed_value), cursor=data["cursor"])


class RandomAgent(Agent):
    """Chooses every action dimension uniformly at random.

    Draws come from a seeded Philox stream, so a run is fully reproducible
    from its seed, and ``store``/``load`` resume it exactly where it stopped.
    """

    def __init__(self, action_space: ActionSpace, seed: Optional[SeedLike] = None):
        if not isinstance(action_space, ActionSpace):
            action_space = ActionSpace(action_space)
        self.action_space = action_space
        self._lock = threading.Lock()
        self._stream = DeterministicStream(Seed.new_random() if seed is None else Seed.from_value(seed))

    @property
    def seed(self) -> Seed:
        return self._stream.seed

    @property
    def cursor(self) -> int:
        return self._stream.cursor

    def reseed(self, seed: Optional[SeedLike] = None) -> None:
        new_seed = Seed.new_random() if seed is None else Seed.from_value(seed)
        stream = DeterministicStream(new_seed)
        with self._lock:
            self._stream = stream

    def reset(self) -> None:
        pass

    def choose_action(self, state: Optional[EnvironmentState] = None) -> AgentAction:
        # The state is ignored, the choice does not depend on it.
        with self._lock:
            stream = self._stream
            return self.action_space.sample(stream.draw_uniform_integer, stream.draw_uniform_float)

    def process_reward(self, previous_state: EnvironmentState, action: AgentAction, resulting_state: EnvironmentState, reward: float, done: bool) -> None:
        pass

    def store(self) -> PersistedState:
        with self._lock:
            return PersistedState(seed=self._stream.seed, cursor=self._stream.cursor)

    def load(self, state: PersistedState) -> None:
        if isinstance(state, Mapping):
            state = PersistedState.from_dict(state)
        stream = DeterministicStream(state.seed)
        stream.advance_to(state.cursor)
        with self._lock:
            self._stream = stream

    def close(self) -> None:
        pass
