"""Configuration management for agentdeck."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from agentdeck.core.errors import ConfigError


def get_config_dir() -> Path:
    """Get the agentdeck config directory."""
    return Path.home() / ".agentdeck"


def get_config_path() -> Path:
    """Get the path of ~/.agentdeck/config.yaml."""
    return get_config_dir() / "config.yaml"


@dataclass
class Config:
    """Repositories and settings stored in config.yaml."""

    path: Path
    repos: List[str] = field(default_factory=list)
    log_level: str = "INFO"

    def add_repo(self, repo_path: str) -> bool:
        """Add a repository path. Returns False if it is already present."""
        if repo_path in self.repos:
            return False
        self.repos.append(repo_path)
        return True

    def remove_repo(self, repo_path: str) -> bool:
        """Remove a repository path. Returns False if it was not present."""
        if repo_path not in self.repos:
            return False
        self.repos.remove(repo_path)
        return True

    def get_repos(self) -> List[str]:
        return list(self.repos)

    def to_dict(self) -> Dict:
        return {
            "repos": list(self.repos),
            "log_level": self.log_level,
        }

    def save(self) -> None:
        """Write the config to disk, creating its directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w") as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigError(f"Failed to save {self.path}: {e}") from e


def _validate(data: Dict, path: Path) -> Config:
    repos = data.get("repos") or []
    if not isinstance(repos, list):
        raise ConfigError(f"{path}: 'repos' must be a list")

    seen = set()
    for repo in repos:
        if not isinstance(repo, str) or not repo:
            raise ConfigError(f"{path}: empty or invalid repo entry: {repo!r}")
        if repo in seen:
            raise ConfigError(f"{path}: duplicate repo: {repo}")
        seen.add(repo)

    log_level = data.get("log_level", "INFO")
    if not isinstance(log_level, str):
        raise ConfigError(f"{path}: 'log_level' must be a string")

    return Config(path=path, repos=list(repos), log_level=log_level)


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration, or defaults if the file does not exist.

    Args:
        path: Config file to read (default: ~/.agentdeck/config.yaml)

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    path = Path(path) if path else get_config_path()

    if not path.exists():
        return Config(path=path)

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")

    return _validate(data, path)
