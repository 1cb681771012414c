"""Home screen: repository URL input."""

import logging

from textual import on
from textual.app import ComposeResult
from textual.containers import Center, Vertical
from textual.screen import Screen
from textual.widgets import Button, Footer, Header, Input, Label, Static

from repo_lens.errors import InvalidRepositoryURL
from repo_lens.urls import parse_repo_url

logger = logging.getLogger(__name__)


class HomeScreen(Screen):
    """Initial screen to collect the repository URL."""

    CSS = """
    HomeScreen {
        align: center middle;
    }
    #home-container {
        width: 72;
        height: auto;
        padding: 1 4;
        border: round $primary;
        background: $surface;
    }
    #title-art {
        text-align: center;
        color: $accent;
    }
    #subtitle {
        text-align: center;
        color: $text-muted;
        margin-bottom: 2;
    }
    .field-label {
        margin-top: 1;
        color: $text;
    }
    #url-input {
        margin-bottom: 1;
    }
    #analyze-btn {
        margin-top: 2;
        width: 100%;
    }
    #error-label {
        color: $error;
        text-align: center;
        margin-top: 1;
    }
    """

    TITLE_ART = """
  ╭──────────────────────────────────────────────╮
  │                                              │
  │          ╻  ┏━╸┏┓╻┏━┓                        │
  │   REPO   ┃  ┣╸ ┃┗┫┗━┓                        │
  │          ┗━╸┗━╸╹ ╹┗━┛                        │
  │                                              │
  │     AI code review for any GitHub repo       │
  ╰──────────────────────────────────────────────╯
"""

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Center():
            with Vertical(id="home-container"):
                yield Static(self.TITLE_ART, id="title-art")
                yield Static(
                    "Score · Vulnerabilities · Suggestions · Chat",
                    id="subtitle",
                )
                yield Label("GitHub repository URL:", classes="field-label")
                yield Input(
                    placeholder="e.g. https://github.com/excalidraw/excalidraw",
                    id="url-input",
                )
                yield Button("▶  Analyze", id="analyze-btn", variant="primary")
                yield Label("", id="error-label")
        yield Footer()

    def on_mount(self) -> None:
        """Focus the input on mount so paste works immediately."""
        self.query_one("#url-input", Input).focus()

    @on(Button.Pressed, "#analyze-btn")
    def start_analysis(self) -> None:
        url = self.query_one("#url-input", Input).value
        error_label = self.query_one("#error-label", Label)

        try:
            owner, repo = parse_repo_url(url)
        except InvalidRepositoryURL as e:
            logger.warning("Invalid GitHub URL: %s", e)
            error_label.update("⚠  Enter a GitHub URL like https://github.com/owner/repo")
            return

        error_label.update("")
        self.app.run_analysis(owner, repo)  # type: ignore[attr-defined]

    @on(Input.Submitted, "#url-input")
    def submit_on_enter(self) -> None:
        self.start_analysis()
