"""Results screen: tabbed view of one AnalysisReport."""

import logging
from pathlib import PurePosixPath

from rich.syntax import Syntax
from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import Screen
from textual.widgets import (
    DataTable,
    Footer,
    Header,
    Input,
    Label,
    Markdown,
    Select,
    Static,
    TabbedContent,
    TabPane,
)

from repo_lens.models import AnalysisReport, ChatMessage

logger = logging.getLogger(__name__)

LANGUAGE_MAP = {
    "js": "javascript",
    "jsx": "jsx",
    "ts": "typescript",
    "tsx": "tsx",
    "py": "python",
    "java": "java",
    "rb": "ruby",
    "go": "go",
    "rs": "rust",
    "php": "php",
    "css": "css",
    "html": "html",
    "json": "json",
    "yml": "yaml",
    "yaml": "yaml",
    "md": "markdown",
}

CHAT_ERROR_REPLY = (
    "Sorry, I encountered an error while processing your request. "
    "Please try again."
)


def syntax_language(path: str) -> str:
    """Lexer name for the code browser; ``text`` when unknown."""
    ext = PurePosixPath(path).suffix.lstrip(".").lower()
    return LANGUAGE_MAP.get(ext, "text")


class ResultsScreen(Screen):
    """Main results display with five tabs."""

    CSS = """
    ResultsScreen {
        layout: vertical;
    }
    #results-header {
        height: 3;
        background: $primary;
        color: $text;
        text-align: center;
        padding: 1 2;
        text-style: bold;
    }
    .section-title {
        text-style: bold;
        margin: 1 0;
        color: $secondary;
    }
    .warning-label {
        color: $warning;
    }
    .vuln-card {
        border: round $error;
        padding: 0 2;
        margin: 1 0;
        background: $surface;
        height: auto;
    }
    .suggestion-card {
        border: round $primary-lighten-2;
        padding: 0 2;
        margin: 1 0;
        background: $surface;
        height: auto;
    }
    .chat-user {
        border: round $accent;
        padding: 0 2;
        margin: 1 0 0 8;
        height: auto;
    }
    .chat-assistant {
        border: round $primary;
        padding: 0 2;
        margin: 1 8 0 0;
        height: auto;
    }
    #code-view {
        height: 1fr;
    }
    #chat-log {
        height: 1fr;
    }
    #chat-bar {
        height: auto;
        dock: bottom;
    }
    #chat-input {
        width: 1fr;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("b", "go_back", "Back"),
    ]

    def __init__(self, report: AnalysisReport, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.report = report

    def compose(self) -> ComposeResult:
        r = self.report
        yield Header(show_clock=True)
        yield Static(
            f"  📊  {r.repository.full_name}  ·  Score {r.score}/100  ",
            id="results-header",
        )

        vuln_title = f"🛡 Vulnerabilities ({len(r.all_vulnerabilities)})"
        sugg_title = f"💡 Suggestions ({len(r.all_suggestions)})"
        with TabbedContent(
            "📊 Overview", "💻 Code Browser", vuln_title, sugg_title, "💬 Chat",
        ):
            with TabPane("📊 Overview"):
                yield from self._compose_overview()
            with TabPane("💻 Code Browser"):
                yield from self._compose_code_browser()
            with TabPane(vuln_title):
                yield from self._compose_vulnerabilities()
            with TabPane(sugg_title):
                yield from self._compose_suggestions()
            with TabPane("💬 Chat"):
                yield from self._compose_chat()

        yield Footer()

    # ── Overview tab ──────────────────────────────────────────────────────

    def _compose_overview(self) -> ComposeResult:
        r = self.report
        repo = r.repository
        with VerticalScroll():
            yield Static("REPOSITORY OVERVIEW", classes="section-title")
            yield Label(
                f"Files Analyzed: {len(r.files)}  ·  "
                f"Vulnerabilities: {len(r.all_vulnerabilities)}  ·  "
                f"Suggestions: {len(r.all_suggestions)}  ·  "
                f"Score: {r.score}/100"
            )
            if r.degraded_files:
                yield Label(
                    "⚠  Analysis could not be fully parsed for: "
                    + ", ".join(r.degraded_files),
                    classes="warning-label",
                )

            yield Static("ANALYSIS SUMMARY", classes="section-title")
            yield Markdown(r.summary or "_No summary was returned._")

            yield Static("REPOSITORY DETAILS", classes="section-title")
            yield Markdown(
                f"**Repository:** [{repo.name}]({repo.url})  \n"
                f"**Owner:** {repo.owner}  \n"
                f"**Description:** {repo.description or '_none_'}  \n"
                f"**Stars:** {repo.stars} · **Forks:** {repo.forks} · "
                f"**Open Issues:** {repo.open_issues}  \n"
                f"**Last Updated:** {repo.last_updated:%Y-%m-%d}"
            )

            yield Static("RECENT COMMITS", classes="section-title")
            commits = DataTable(id="commits-table")
            commits.add_columns("SHA", "Message", "Author", "Date")
            for c in r.commits[:5]:
                commits.add_row(c.short_sha, c.subject, c.author, f"{c.date:%Y-%m-%d}")
            yield commits

            yield Static("FILE ANALYSIS DISTRIBUTION", classes="section-title")
            dist = DataTable(id="distribution-table")
            dist.add_columns(
                "File", "Suggestions", "Vulnerabilities", "Improvements", "Parse",
            )
            for f in r.files:
                dist.add_row(
                    f.path,
                    str(len(f.suggestions)),
                    str(len(f.vulnerabilities)),
                    str(len(f.improvements)),
                    f.display_status,
                )
            yield dist

    # ── Code browser tab ──────────────────────────────────────────────────

    def _compose_code_browser(self) -> ComposeResult:
        files = self.report.files
        if not files:
            yield Markdown("> _No files were found in the repository root._")
            return
        yield Select(
            [(f.path, f.path) for f in files],
            value=files[0].path,
            allow_blank=False,
            id="code-file-select",
        )
        with VerticalScroll(id="code-view"):
            yield Static(self._render_source(files[0].path), id="code-source")

    def _render_source(self, path: str) -> Syntax:
        f = self.report.file(path)
        content = f.content if f else ""
        return Syntax(
            content,
            syntax_language(path),
            theme="monokai",
            line_numbers=True,
            word_wrap=False,
        )

    @on(Select.Changed, "#code-file-select")
    def show_source(self, event: Select.Changed) -> None:
        if event.value is Select.BLANK:
            return
        self.query_one("#code-source", Static).update(
            self._render_source(str(event.value))
        )

    # ── Vulnerabilities / Suggestions tabs ────────────────────────────────

    def _compose_vulnerabilities(self) -> ComposeResult:
        items = self.report.all_vulnerabilities
        with VerticalScroll():
            if not items:
                yield Markdown("> _No vulnerabilities reported._")
                return
            for path, vuln in items:
                with Vertical(classes="vuln-card"):
                    yield Markdown(f"⚠️ **{path}**\n\n{vuln}")

    def _compose_suggestions(self) -> ComposeResult:
        items = self.report.all_suggestions
        with VerticalScroll():
            if not items:
                yield Markdown("> _No suggestions reported._")
                return
            for path, suggestion in items:
                with Vertical(classes="suggestion-card"):
                    yield Markdown(f"💡 **{path}**\n\n{suggestion}")

    # ── Chat tab ──────────────────────────────────────────────────────────

    def _compose_chat(self) -> ComposeResult:
        files = self.report.files
        if not files:
            yield Markdown("> _No files to chat about._")
            return
        yield Select(
            [(f.path, f.path) for f in files],
            value=files[0].path,
            allow_blank=False,
            id="chat-file-select",
        )
        yield VerticalScroll(id="chat-log")
        with Horizontal(id="chat-bar"):
            yield Input(
                placeholder="Ask a question about the selected file...",
                id="chat-input",
            )

    @on(Input.Submitted, "#chat-input")
    async def submit_question(self, event: Input.Submitted) -> None:
        question = event.value.strip()
        selected = self.query_one("#chat-file-select", Select).value
        if not question or selected is Select.BLANK:
            return
        path = str(selected)

        event.input.value = ""
        event.input.disabled = True
        await self._append(ChatMessage(role="user", content=question, file=path))
        self._ask(path, question)

    @work(exclusive=True, group="chat")
    async def _ask(self, path: str, question: str) -> None:
        f = self.report.file(path)
        try:
            answer = await self.app.ask_about_file(  # type: ignore[attr-defined]
                path, f.content if f else "", question
            )
        except Exception:
            logger.exception("Chat request about %s failed", path)
            answer = CHAT_ERROR_REPLY
        await self._append(ChatMessage(role="assistant", content=answer))
        chat_input = self.query_one("#chat-input", Input)
        chat_input.disabled = False
        chat_input.focus()

    async def _append(self, message: ChatMessage) -> None:
        if message.role == "user":
            md = f"_File: {message.file}_\n\n{message.content}"
            css_class = "chat-user"
        else:
            md = message.content
            css_class = "chat-assistant"
        log = self.query_one("#chat-log", VerticalScroll)
        await log.mount(Markdown(md, classes=css_class))
        log.scroll_end(animate=False)

    # ── Actions ───────────────────────────────────────────────────────────

    def action_go_back(self) -> None:
        self.app.pop_screen()
