"""TUI components for agentdeck."""


def run_dashboard(config=None):
    """Run the dashboard application.

    Args:
        config: Loaded Config; read from ~/.agentdeck/config.yaml when omitted
    """
    # Lazy import keeps `agentdeck --help` from loading Textual
    from agentdeck.tui.app import run_dashboard as _run_dashboard

    _run_dashboard(config)
