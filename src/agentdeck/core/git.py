"""Git integration for agentdeck"""

from pathlib import Path
from typing import Optional, Union

import git

from agentdeck.core.completion import expand_home
from agentdeck.core.errors import RepoValidationError


def get_repo(path: Optional[Path] = None) -> git.Repo:
    """Get git repository"""
    if path is None:
        path = Path.cwd()
    return git.Repo(path, search_parent_directories=True)


def validate_repo(path: Union[str, Path]) -> Path:
    """Check that a path is the work tree of a git repository.

    Args:
        path: Path as typed by the user (may start with ~)

    Returns:
        The resolved absolute path

    Raises:
        RepoValidationError: If the path is missing, not a directory,
            or not a git repository
    """
    resolved = Path(expand_home(str(path).strip())).resolve()

    if not resolved.exists():
        raise RepoValidationError(resolved, f"Path does not exist: {resolved}")
    if not resolved.is_dir():
        raise RepoValidationError(resolved, f"Not a directory: {resolved}")

    try:
        git.Repo(resolved)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError):
        raise RepoValidationError(resolved, f"Not a git repository: {resolved}")

    return resolved


def suggest_repo(cwd: Optional[Path] = None) -> Optional[str]:
    """Return the top level of the repository containing cwd, if any."""
    try:
        repo = get_repo(cwd)
    except (git.InvalidGitRepositoryError, git.NoSuchPathError):
        return None

    if repo.working_tree_dir is None:
        return None
    return str(repo.working_tree_dir)
