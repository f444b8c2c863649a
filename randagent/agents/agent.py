from abc import ABC, abstractmethod
from typing import Any, Optional

from randagent.seeding import Seed
from randagent.spaces import AgentAction, EnvironmentState


class AgentError(Exception):
    """Base class for errors an agent may raise from any lifecycle hook."""


class Agent(ABC):
    """Lifecycle every agent driven by the harness implements.

    Each hook may raise ``AgentError``; callers treat a normal return as
    success.
    """

    @abstractmethod
    def reseed(self, seed: Optional[Seed] = None) -> None:
        pass

    @abstractmethod
    def reset(self) -> None:
        pass

    @abstractmethod
    def choose_action(self, state: EnvironmentState) -> AgentAction:
        pass

    @abstractmethod
    def process_reward(self, previous_state: EnvironmentState, action: AgentAction, resulting_state: EnvironmentState, reward: float, done: bool) -> None:
        pass

    @abstractmethod
    def store(self) -> Any:
        """Returns the data needed to restore this agent later."""
        pass

    @abstractmethod
    def load(self, state: Any) -> None:
        """Restores the agent from data returned by ``store``."""
        pass

    @abstractmethod
    def close(self) -> None:
        pass
