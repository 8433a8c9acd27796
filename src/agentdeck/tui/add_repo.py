"""Add Repository modal with Tab path completion."""

import logging
import os
from typing import List, Optional

from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Input, Label, Static

from agentdeck.core.completion import NO_SELECTION, PathCompleter
from agentdeck.core.config import Config
from agentdeck.core.errors import AgentDeckError
from agentdeck.core.git import validate_repo

logger = logging.getLogger(__name__)

MAX_VISIBLE_COMPLETIONS = 8


def completion_label(candidate: str) -> str:
    """Last path segment of a candidate, keeping a directory's trailing slash."""
    stripped = candidate.rstrip(os.sep)
    if not stripped:
        return candidate
    trailing = os.sep if candidate.endswith(os.sep) else ""
    return os.path.basename(stripped) + trailing


def format_completion_menu(
    completions: List[str],
    index: int,
    limit: int = MAX_VISIBLE_COMPLETIONS,
) -> List[str]:
    """Render candidates as menu lines, the selected one marked with "> ".

    At most ``limit`` lines are returned; the window scrolls so the selected
    candidate stays visible. A final "… N more" line reports what is hidden.
    """
    if not completions:
        return []

    start = 0
    if index != NO_SELECTION and index >= limit:
        start = index - limit + 1
    visible = completions[start:start + limit]

    lines = []
    for offset, candidate in enumerate(visible):
        marker = "> " if start + offset == index else "  "
        lines.append(marker + completion_label(candidate))

    hidden = len(completions) - len(visible)
    if hidden:
        lines.append(f"  … {hidden} more")
    return lines


class AddRepositoryModal(ModalScreen):
    """Modal for adding a repository path, with shell-style Tab completion"""

    DEFAULT_CSS = """
    AddRepositoryModal {
        align: center middle;
    }

    #add-repo-modal {
        width: 72;
        height: auto;
        border: thick $accent;
        background: $surface;
        padding: 1 2;
    }

    #add-repo-modal #suggestion {
        color: $text-muted;
    }

    #add-repo-modal #suggestion.selected {
        color: $text;
        text-style: bold;
    }

    #add-repo-modal #completions {
        color: $text-muted;
        height: auto;
        max-height: 10;
    }

    #add-repo-modal #error {
        color: $error;
    }
    """

    AUTO_FOCUS = None

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
        Binding("enter", "submit", "Add", show=False),
        Binding("up", "toggle_suggestion", show=False),
        Binding("down", "toggle_suggestion", show=False),
    ]

    def __init__(
        self,
        config: Config,
        suggested_repo: Optional[str] = None,
        completer: Optional[PathCompleter] = None,
    ):
        super().__init__()
        self.config = config
        self.suggested_repo = suggested_repo or ""
        self.use_suggested = bool(self.suggested_repo)
        self.completer = completer or PathCompleter()
        # Last value written into the input by completion
        self._last_accepted: Optional[str] = None

    def compose(self) -> ComposeResult:
        if self.suggested_repo:
            help_text = "up/down to switch, Tab to complete, Enter to confirm, Esc to cancel"
        else:
            help_text = "Tab to complete, Enter to confirm, Esc to cancel"

        yield Container(
            Static("[bold cyan]Add Repository[/bold cyan]", id="modal-title"),
            Static("", id="suggestion", markup=False),
            Input(placeholder="/path/to/repo", id="repo-path"),
            Static("", id="completions", markup=False),
            Label("", id="error", markup=False),
            Static(f"[dim]{help_text}[/dim]", classes="modal-hint"),
            id="add-repo-modal",
        )

    def on_mount(self) -> None:
        suggestion = self.query_one("#suggestion", Static)
        suggestion.display = bool(self.suggested_repo)
        self._render_suggestion()
        if not self.use_suggested:
            self.query_one("#repo-path", Input).focus()

    def _render_suggestion(self) -> None:
        if not self.suggested_repo:
            return
        suggestion = self.query_one("#suggestion", Static)
        prefix = "> " if self.use_suggested else "  "
        suggestion.update(f"Current directory:\n{prefix}{self.suggested_repo}\nOr enter a different path:")
        suggestion.set_class(self.use_suggested, "selected")

    def _render_completions(self) -> None:
        lines = format_completion_menu(
            self.completer.get_completions(), self.completer.get_index()
        )
        self.query_one("#completions", Static).update("\n".join(lines))

    def _set_error(self, message: str) -> None:
        self.query_one("#error", Label).update(message)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Any edit other than accepting a completion starts over"""
        self._last_accepted = None
        self.completer.reset()
        self._render_completions()
        self._set_error("")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in input"""
        event.stop()
        self.action_submit()

    def on_key(self, event: events.Key) -> None:
        if event.key != "tab":
            return

        if self.use_suggested:
            self.action_toggle_suggestion()
        elif self.focused is self.query_one("#repo-path", Input):
            self.complete_path()
        else:
            return

        event.stop()
        event.prevent_default()

    def complete_path(self) -> bool:
        """Run one Tab press of path completion on the input.

        Returns:
            True if the input was updated
        """
        path_input = self.query_one("#repo-path", Input)
        text = path_input.value

        # Still showing a candidate we put there: keep cycling the same set
        if text == self._last_accepted and self.completer.get_index() != NO_SELECTION:
            text = self.completer.prefix

        result, ok = self.completer.complete(text)
        self._render_completions()

        if not ok:
            self._set_error("No matches")
            return False

        self._set_error("")
        self._last_accepted = result
        # Accepted completions must not look like an edit
        with path_input.prevent(Input.Changed):
            path_input.value = result
            path_input.cursor_position = len(result)
        return True

    def get_path(self) -> str:
        """Path to add: the suggestion when selected, else the input text"""
        if self.suggested_repo and self.use_suggested:
            return self.suggested_repo
        return self.query_one("#repo-path", Input).value.strip()

    def action_toggle_suggestion(self) -> None:
        if not self.suggested_repo:
            return

        self.use_suggested = not self.use_suggested
        path_input = self.query_one("#repo-path", Input)
        if self.use_suggested:
            path_input.blur()
        else:
            path_input.focus()
        self._render_suggestion()

    def action_submit(self) -> None:
        path = self.get_path()
        if not path:
            self._set_error("Please enter a path")
            return

        try:
            resolved = validate_repo(path)
        except AgentDeckError as e:
            self._set_error(str(e))
            self.app.notify(str(e), severity="error")
            return

        if not self.config.add_repo(str(resolved)):
            self._set_error("Repository already added")
            return

        try:
            self.config.save()
        except AgentDeckError as e:
            self.config.remove_repo(str(resolved))
            self._set_error(str(e))
            self.app.notify(str(e), severity="error")
            return

        logger.info("Added repository %s", resolved)
        self.dismiss(str(resolved))

    def action_cancel(self) -> None:
        self.dismiss(None)
