from dataclasses import dataclass
from typing import Optional

# Run defaults
ENV_ID = "CartPole-v1"
EPISODES = 10
MAX_STEPS = 500
SEED: Optional[int] = None
SAVE_DIR = "checkpoints"
CHECKPOINT_PREFIX = "rand_last"
PRINT_INTERVAL = 0


@dataclass
class RunConfig:
    env_id: str = ENV_ID
    episodes: int = EPISODES
    max_steps: int = MAX_STEPS
    seed: Optional[int] = SEED
    save_dir: Optional[str] = SAVE_DIR
    checkpoint_prefix: str = CHECKPOINT_PREFIX
    print_interval: int = PRINT_INTERVAL
    render_mode: Optional[str] = None
    resume: bool = True

    def __post_init__(self) -> None:
        if self.episodes < 0:
            raise ValueError("episodes must be non-negative.")
        if self.max_steps <= 0:
            raise ValueError("max_steps must be positive.")
        if self.print_interval < 0:
            raise ValueError("print_interval must be non-negative.")
