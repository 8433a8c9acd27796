"""Textual TUI dashboard for agentdeck"""

import logging
from typing import Optional

from textual.app import App, ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import DataTable, Footer, Header, Static

from agentdeck.core.config import Config, load_config
from agentdeck.core.errors import AgentDeckError
from agentdeck.core.git import suggest_repo
from agentdeck.tui.add_repo import AddRepositoryModal

logger = logging.getLogger(__name__)


class AgentDeckApp(App):
    """Main TUI dashboard application for agentdeck"""

    TITLE = "agentdeck"

    CSS = """
    Screen {
        background: $surface;
    }

    .screen-title {
        background: $boost;
        color: $text;
        text-align: center;
        text-style: bold;
    }

    #repos-container {
        border: solid $accent;
        height: 100%;
    }
    """

    BINDINGS = [
        ("a", "add_repo", "Add Repo"),
        ("d", "remove_repo", "Remove Repo"),
        ("q", "quit", "Quit"),
    ]

    def __init__(self, config: Optional[Config] = None):
        super().__init__()
        self.config = config if config is not None else load_config()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Container(
            Static("📦 REPOSITORIES", classes="screen-title"),
            DataTable(id="repos-table"),
            id="repos-container"
        )
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#repos-table", DataTable)
        table.add_columns("#", "Path")
        table.cursor_type = "row"
        self.load_repos()

    def load_repos(self) -> None:
        """Reload the repositories table from config"""
        table = self.query_one("#repos-table", DataTable)
        table.clear()
        for i, repo in enumerate(self.config.get_repos(), start=1):
            table.add_row(str(i), repo, key=repo)

    def selected_repo(self) -> Optional[str]:
        table = self.query_one("#repos-table", DataTable)
        if table.row_count == 0:
            return None
        row = table.get_row_at(table.cursor_row)
        return str(row[1])

    def action_add_repo(self) -> None:
        """Show modal to add a repository"""
        if isinstance(self.screen, ModalScreen):
            return

        def check_result(result):
            if result:
                self.load_repos()
                self.notify(f"Added {result}")

        suggested = suggest_repo()
        if suggested in self.config.repos:
            suggested = None
        self.push_screen(AddRepositoryModal(self.config, suggested_repo=suggested), check_result)

    def action_remove_repo(self) -> None:
        """Remove the selected repository from config"""
        if isinstance(self.screen, ModalScreen):
            return

        repo = self.selected_repo()
        if repo is None:
            return

        index = self.config.repos.index(repo)
        self.config.remove_repo(repo)
        try:
            self.config.save()
        except AgentDeckError as e:
            self.config.repos.insert(index, repo)
            self.notify(str(e), severity="error")
            return

        logger.info("Removed repository %s", repo)
        self.load_repos()
        self.notify(f"Removed {repo}")


def run_dashboard(config: Optional[Config] = None):
    """Run the dashboard application"""
    app = AgentDeckApp(config)
    app.run()
