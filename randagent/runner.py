import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import gymnasium as gym

from randagent.agents.randomAgent import RandomAgent
from randagent.checkpoint import find_latest_checkpoint, load_checkpoint, save_checkpoint
from randagent.config import RunConfig
from randagent.env.gymAdapter import GymActionAdapter, state_from_observation
from randagent.spaces import EnvironmentState


class Runner:
    def __init__(self, config: Optional[RunConfig] = None, env: Optional[gym.Env] = None):
        self.config = config or RunConfig()
        self.env = env if env is not None else gym.make(self.config.env_id, render_mode=self.config.render_mode)
        self.adapter = GymActionAdapter(self.env.action_space)
        self.agent = RandomAgent(self.adapter.action_space, seed=self.config.seed)

        self.save_dir: Optional[Path] = Path(self.config.save_dir) if self.config.save_dir else None
        self.current_checkpoint: Optional[Path] = None
        self.runs = 0
        self.global_step = 0
        self.episode_rewards: List[float] = []

        self._state: Optional[EnvironmentState] = None
        self._step_count = 0
        self._episode_reward = 0.0
        self._episode_active = False
        self._env_seeded = False
        self._start_time = 0.0

        if self.save_dir is not None and self.config.resume:
            latest = find_latest_checkpoint(self.save_dir, self.config.checkpoint_prefix)
            if latest is not None:
                self.resume_from(latest)

    def resume_from(self, path: Path) -> bool:
        try:
            state, metadata = load_checkpoint(path)
        except (OSError, ValueError) as exc:
            print(f"Warning: failed to load checkpoint '{path}': {exc}")
            return False

        self.agent.load(state)
        self.current_checkpoint = Path(path)
        try:
            self.runs = int(metadata.get("episode", 0))
        except (TypeError, ValueError):
            self.runs = 0
        try:
            self.global_step = int(metadata.get("global_step", 0))
        except (TypeError, ValueError):
            self.global_step = 0
        self._episode_active = False
        print(f"Resumed from {path} (episode {self.runs}, cursor {state.cursor}).")
        return True

    def _start_episode(self) -> None:
        if self.config.seed is not None and not self._env_seeded:
            observation, _ = self.env.reset(seed=self.config.seed)
            self._env_seeded = True
        else:
            observation, _ = self.env.reset()
        self._state = state_from_observation(observation)
        self._step_count = 0
        self._episode_reward = 0.0
        self._episode_active = True
        self._start_time = time.time()
        self.agent.reset()

    def run(self, print_interval: Optional[int] = None) -> bool:
        """Advances one environment step, returns False once the episode ended."""
        if print_interval is None:
            print_interval = self.config.print_interval
        if not self._episode_active:
            self._start_episode()

        previous_state = self._state
        action = self.agent.choose_action(previous_state)
        observation, reward, terminated, truncated, info = self.env.step(self.adapter.to_gym(action))
        reward = float(reward)
        self._state = state_from_observation(observation)
        self._step_count += 1
        self.global_step += 1
        self._episode_reward += reward

        episode_done = terminated or truncated or self._step_count >= self.config.max_steps
        self.agent.process_reward(previous_state, action, self._state, reward, episode_done)

        if print_interval > 0 and self._step_count % print_interval == 0:
            elapsed_time = time.time() - self._start_time
            sps = self._step_count / elapsed_time if elapsed_time > 0 else 0.0
            print(f"\nStep {self._step_count}:")
            print(f"  Action: {[value.value for value in action]}")
            print(f"  Reward: {reward:.2f}")
            print(f"  Steps/sec: {sps:.2f}")
            print(f"  Cursor: {self.agent.cursor}")

        if episode_done:
            self.runs += 1
            self.episode_rewards.append(self._episode_reward)
            self._episode_active = False
            print(f"Episode {self.runs} | Steps {self._step_count} | Reward {self._episode_reward:.1f} | Terminated {terminated} | Truncated {truncated}")
            self._save_checkpoint()
            return False

        return True

    def run_episodes(self, episodes: Optional[int] = None) -> List[float]:
        if episodes is None:
            episodes = self.config.episodes
        start = len(self.episode_rewards)
        for _ in range(episodes):
            while self.run():
                pass
        return self.episode_rewards[start:]

    def _save_checkpoint(self) -> None:
        if self.save_dir is None:
            return
        metadata: Dict[str, Any] = {
            "episode": self.runs,
            "reward": self.episode_rewards[-1] if self.episode_rewards else 0.0,
            "global_step": self.global_step,
            "env_id": self.config.env_id,
        }
        new_checkpoint = self.save_dir / f"{self.config.checkpoint_prefix}_ep_{self.runs:06d}.json"
        if self.current_checkpoint and self.current_checkpoint.exists() and self.current_checkpoint != new_checkpoint:
            try:
                self.current_checkpoint.unlink()
            except OSError:
                pass
        save_checkpoint(new_checkpoint, self.agent.store(), metadata=metadata)
        self.current_checkpoint = new_checkpoint

    def close(self) -> None:
        if self.env is not None:
            self.env.close()
        self.agent.close()
        self._episode_active = False
        self._state = None
