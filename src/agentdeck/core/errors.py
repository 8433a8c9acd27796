"""Exception types for agentdeck."""

from pathlib import Path
from typing import Union


class AgentDeckError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(AgentDeckError):
    """Config file could not be read, parsed or validated."""


class RepoValidationError(AgentDeckError):
    """A path cannot be added as a repository."""

    def __init__(self, path: Union[str, Path], reason: str):
        super().__init__(reason)
        self.path = str(path)
        self.reason = reason
