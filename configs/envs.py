from pathlib import Path

from tclogger import OSEnver

repo_root = Path(__file__).parents[1]
configs_root = repo_root / "configs"
envs_path = configs_root / "envs.json"
ENVS_ENVER = OSEnver(envs_path)
SEARCH_ENVS = ENVS_ENVER["search"]


def resolve_data_root(data_root: str) -> Path:
    """Relative data roots are resolved against the repo root."""
    path = Path(data_root).expanduser()
    if not path.is_absolute():
        path = repo_root / path
    return path
