"""Shell-style Tab completion for filesystem paths.

Used by text inputs that ask for a path (e.g. the Add Repository modal).
The first Tab press completes as far as is unambiguous; further presses with
the same input cycle through the candidates in sorted order.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Cursor value meaning "candidates generated but cycling not yet started"
NO_SELECTION = -1


def expand_home(path: str) -> str:
    """Expand a leading ``~`` or ``~/`` to the user's home directory.

    Any other input (including the empty string and ``~user`` forms) is
    returned unchanged. If the home directory cannot be determined the
    original string is returned as well.
    """
    if path != "~" and not path.startswith("~/"):
        return path

    try:
        home = str(Path.home())
    except (RuntimeError, KeyError) as e:
        logger.debug("Could not resolve home directory: %s", e)
        return path

    if path == "~":
        return home
    return os.path.join(home, path[2:])


def common_prefix(strings: Iterable[str]) -> str:
    """Return the longest prefix shared by every string.

    Examples:
        common_prefix(["hello", "help", "helicopter"]) -> "hel"
        common_prefix(["abc", "xyz"]) -> ""
        common_prefix([]) -> ""
    """
    strings = list(strings)
    if not strings:
        return ""
    if len(strings) == 1:
        return strings[0]

    shortest = min(strings, key=len)
    for i, char in enumerate(shortest):
        for s in strings:
            if s[i] != char:
                return shortest[:i]

    return shortest


def scan_candidates(path: str) -> List[str]:
    """Generate sorted completion candidates for an already expanded path.

    - "" is treated as the filesystem root.
    - An existing directory ending in a separator lists its children.
    - An existing directory without a trailing separator completes to
      itself plus a separator, without scanning.
    - Anything else is split into (parent directory, name prefix) and the
      parent's entries starting with the prefix (case-insensitive) become
      candidates. Without a directory part the current directory is scanned
      and candidates are bare names.

    Dotfiles are only offered when the name prefix itself starts with ".".
    Directories get a trailing separator. Filesystem errors give [].
    """
    if not path:
        path = os.sep

    basename = os.path.basename(path)

    # "dir/." asks for the hidden entries of dir, not for dir itself
    if basename != "." and os.path.isdir(path):
        if path.endswith(os.sep):
            parent_dir, name_prefix = path, ""
        else:
            return [path + os.sep]
    else:
        parent_dir, name_prefix = os.path.split(path)

    scan_dir = parent_dir or os.curdir
    show_hidden = name_prefix.startswith(".")
    lowered_prefix = name_prefix.lower()

    candidates = []
    try:
        with os.scandir(scan_dir) as entries:
            for entry in entries:
                name = entry.name
                if name.startswith(".") and not show_hidden:
                    continue
                if not name.lower().startswith(lowered_prefix):
                    continue

                if parent_dir:
                    full_path = os.path.normpath(os.path.join(parent_dir, name))
                else:
                    full_path = name

                try:
                    is_dir = entry.is_dir()
                except OSError:
                    is_dir = False
                if is_dir:
                    full_path += os.sep

                candidates.append(full_path)
    except (OSError, ValueError) as e:
        logger.debug("Cannot list %s for completion: %s", scan_dir, e)
        return []

    candidates.sort()
    logger.debug(
        "Scanned %s for prefix %r: %d candidate(s)",
        scan_dir, name_prefix, len(candidates),
    )
    return candidates


class PathCompleter:
    """Per-input completion state.

    One instance belongs to one text field. The owner calls ``complete()`` on
    every Tab press and ``reset()`` whenever the text changes any other way.
    """

    def __init__(self):
        self._completions: List[str] = []
        self._index = NO_SELECTION
        self._prefix = ""

    @property
    def prefix(self) -> str:
        """Expanded input that produced the current candidates."""
        return self._prefix

    def complete(self, path: str) -> Tuple[str, bool]:
        """Complete ``path`` as one Tab press would.

        Returns:
            (result, True) with the text to put in the field, or
            (path, False) unchanged when nothing matches.
        """
        expanded = expand_home(path)

        if expanded != self._prefix or not self._completions:
            self.generate_completions(path)

        if not self._completions:
            return path, False

        if len(self._completions) == 1:
            return self._completions[0], True

        if self._index == NO_SELECTION:
            common = common_prefix(self._completions)
            if common and len(common) > len(expanded):
                # Extend first; the next press with this text starts cycling
                self._prefix = common
                return common, True

            self._index = 0
            return self._completions[0], True

        self._index = (self._index + 1) % len(self._completions)
        return self._completions[self._index], True

    def generate_completions(self, path: str) -> None:
        """Expand and scan ``path``, replacing the current candidates."""
        expanded = expand_home(path)
        self._completions = scan_candidates(expanded)
        self._index = NO_SELECTION
        self._prefix = expanded

    def reset(self) -> None:
        """Forget all candidates. Call when the input is edited by hand."""
        self._completions = []
        self._index = NO_SELECTION
        self._prefix = ""

    def get_completions(self) -> List[str]:
        return list(self._completions)

    def get_index(self) -> int:
        return self._index

    def get_common_prefix(self) -> str:
        return common_prefix(self._completions)

    def get_selected(self) -> Optional[str]:
        """Candidate under the cursor, or None when not cycling."""
        if self._index == NO_SELECTION:
            return None
        return self._completions[self._index]
