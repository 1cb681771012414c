"""Loading screen: shows progress during analysis."""

from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Footer, Header, Label, ProgressBar, Static


class LoadingScreen(Screen):
    """Displayed while a run is in progress."""

    BINDINGS = [
        ("b", "go_back", "Back"),
    ]

    CSS = """
    LoadingScreen {
        align: center middle;
    }
    #loading-container {
        width: 72;
        height: auto;
        padding: 2 4;
        border: round $primary;
        background: $surface;
    }
    #loading-title {
        text-align: center;
        text-style: bold;
        margin-bottom: 2;
    }
    #status-label {
        text-align: center;
        margin-bottom: 1;
    }
    #status-label.error {
        color: $error;
    }
    #progress-bar {
        margin: 1 0;
    }
    #phase-label {
        text-align: center;
        color: $text-muted;
    }
    """

    def __init__(self, target: str = "", **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.target = target

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="loading-container"):
                yield Static(f"🔍  Analyzing {self.target} …", id="loading-title")
                yield Label("Initializing …", id="status-label")
                yield ProgressBar(total=100, show_eta=False, id="progress-bar")
                yield Label("", id="phase-label")
        yield Footer()

    def update_status(self, message: str, progress: int | None = None) -> None:
        """Update the status message and optionally the progress bar."""
        if not self.is_mounted:
            return
        self.query_one("#status-label", Label).update(message)
        if progress is not None:
            self.query_one("#progress-bar", ProgressBar).update(progress=progress)

    def show_error(self, message: str) -> None:
        """Turn the screen into an error banner with a back hint."""
        status = self.query_one("#status-label", Label)
        status.update(message)
        status.add_class("error")
        self.query_one("#phase-label", Label).update(
            "Press [b]  b  [/b] to go back and try again."
        )

    def action_go_back(self) -> None:
        """Abandon the run and return to the home screen."""
        self.app.session.abandon()  # type: ignore[attr-defined]
        self.app.pop_screen()
