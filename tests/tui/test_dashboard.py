"""Tests for the dashboard app"""

import pytest
from textual.widgets import DataTable

from agentdeck.core.config import Config, load_config
from agentdeck.core.errors import ConfigError
from agentdeck.tui import app as app_module
from agentdeck.tui.add_repo import AddRepositoryModal
from agentdeck.tui.app import AgentDeckApp


@pytest.fixture
def config(tmp_path):
    config = Config(path=tmp_path / "config.yaml", repos=["/code/one", "/code/two"])
    config.save()
    return config


class TestAgentDeckApp:
    @pytest.mark.asyncio
    async def test_lists_configured_repos(self, config):
        app = AgentDeckApp(config)
        async with app.run_test() as pilot:
            await pilot.pause()
            table = app.query_one("#repos-table", DataTable)
            assert table.row_count == 2
            assert app.selected_repo() == "/code/one"

    @pytest.mark.asyncio
    async def test_remove_selected_repo(self, config):
        app = AgentDeckApp(config)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("d")
            await pilot.pause()
            assert app.query_one("#repos-table", DataTable).row_count == 1

        assert load_config(config.path).repos == ["/code/two"]

    @pytest.mark.asyncio
    async def test_failed_remove_keeps_repo_order(self, config, monkeypatch):
        def fail_save():
            raise ConfigError("Failed to save config.yaml: read-only")

        monkeypatch.setattr(config, "save", fail_save)
        app = AgentDeckApp(config)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("d")
            await pilot.pause()
            assert app.query_one("#repos-table", DataTable).row_count == 2

        assert config.get_repos() == ["/code/one", "/code/two"]

    @pytest.mark.asyncio
    async def test_add_opens_modal(self, config, monkeypatch):
        monkeypatch.setattr(app_module, "suggest_repo", lambda: None)
        app = AgentDeckApp(config)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a")
            await pilot.pause()
            assert isinstance(app.screen, AddRepositoryModal)
            assert app.screen.suggested_repo == ""

            await pilot.press("escape")
            await pilot.pause()
            assert not isinstance(app.screen, AddRepositoryModal)

    @pytest.mark.asyncio
    async def test_already_added_repo_is_not_suggested(self, config, monkeypatch):
        monkeypatch.setattr(app_module, "suggest_repo", lambda: "/code/one")
        app = AgentDeckApp(config)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a")
            await pilot.pause()
            assert app.screen.suggested_repo == ""
