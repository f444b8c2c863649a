import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from randagent.agents.randomAgent import PersistedState

PathLike = Union[str, Path]


def find_latest_checkpoint(directory: Path, prefix: str) -> Optional[Path]:
    pattern = f"{prefix}_ep_*.json"
    matches = sorted(Path(directory).glob(pattern))
    return matches[-1] if matches else None


def save_checkpoint(path: PathLike, state: PersistedState, metadata: Optional[Dict[str, Any]] = None) -> None:
    directory = os.path.dirname(str(path))
    if directory:
        os.makedirs(directory, exist_ok=True)
    checkpoint: Dict[str, Any] = {
        "agent_state": state.to_dict(),
        "metadata": dict(metadata) if metadata else {},
    }
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as handle:
        json.dump(checkpoint, handle, indent=2)
    os.replace(tmp_path, path)


def load_checkpoint(path: PathLike) -> Tuple[PersistedState, Dict[str, Any]]:
    with open(path, "r", encoding="utf-8") as handle:
        try:
            checkpoint = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Checkpoint '{path}' is not valid JSON: {exc}") from exc

    if not isinstance(checkpoint, dict) or "agent_state" not in checkpoint:
        raise ValueError(f"Checkpoint '{path}' has no agent_state entry.")

    state = PersistedState.from_dict(checkpoint["agent_state"])
    raw_metadata = checkpoint.get("metadata", {})
    metadata = dict(raw_metadata) if isinstance(raw_metadata, dict) else {}
    return state, metadata
