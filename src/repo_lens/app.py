"""Main Textual TUI application for repo-lens."""

import logging
from typing import Optional

from textual.app import App

from repo_lens.analyzer import Analyzer
from repo_lens.config import Settings
from repo_lens.errors import describe_error
from repo_lens.fetcher import GitHubFetcher
from repo_lens.llm import LanguageModel, create_language_model
from repo_lens.models import AnalysisReport
from repo_lens.screens.home import HomeScreen
from repo_lens.screens.loading import LoadingScreen
from repo_lens.screens.results import ResultsScreen
from repo_lens.session import AnalysisSession

logger = logging.getLogger(__name__)


def failure_message(
    exc: BaseException, owner: str, repo: str, fetcher: GitHubFetcher
) -> str:
    """Describe a failed run in terms of the fetcher that ran it."""
    return describe_error(
        exc,
        owner,
        repo,
        has_token=fetcher.is_authenticated,
        api_host=fetcher.api_host,
    )


class RepoLensApp(App):
    """TUI application for AI-assisted GitHub repository review."""

    TITLE = "Repo Lens"
    SUB_TITLE = "Overview · Code · Vulnerabilities · Suggestions · Chat"

    CSS = """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[Settings] = None, **kwargs) -> None:  # type: ignore[no-untyped-def]
        super().__init__(**kwargs)
        self.settings = settings or Settings.from_env()
        self.session = AnalysisSession()

    def on_mount(self) -> None:
        self.push_screen(HomeScreen())

    def make_language_model(self) -> LanguageModel:
        return create_language_model(self.settings)

    async def ask_about_file(self, path: str, content: str, question: str) -> str:
        """Single-turn chat about one file of the current report."""
        llm = self.make_language_model()
        try:
            return await llm.chat_about_file(path, content, question)
        finally:
            await llm.close()

    def run_analysis(self, owner: str, repo: str) -> None:
        """Kick off a fresh run. Called from HomeScreen."""
        generation = self.session.begin(owner, repo)
        loading = LoadingScreen(f"{owner}/{repo}")
        self.push_screen(loading)

        async def _do_work() -> None:
            status_counter = {"n": 0}
            total_steps = 12  # approximate (fetches + one per file + summary)

            def on_status(msg: str) -> None:
                if not self.session.is_current(generation):
                    return
                status_counter["n"] += 1
                pct = min(int(status_counter["n"] / total_steps * 100), 95)
                self.call_from_thread(loading.update_status, msg, pct)

            fetcher = GitHubFetcher(token=self.settings.github_token)
            llm: Optional[LanguageModel] = None
            try:
                llm = self.make_language_model()
                analyzer = Analyzer(fetcher, llm, on_status=on_status)
                report = await analyzer.analyze(owner, repo)
                self.call_from_thread(self._show_results, generation, report)
            except Exception as e:
                logger.exception("Analysis of %s/%s failed", owner, repo)
                message = failure_message(e, owner, repo, fetcher)
                self.call_from_thread(self._show_error, generation, message)
            finally:
                await fetcher.close()
                if llm is not None:
                    await llm.close()

        self.run_worker(_do_work(), thread=True)

    def _show_results(self, generation: int, report: AnalysisReport) -> None:
        """Replace loading screen with results, unless the run is stale."""
        if not self.session.complete(generation, report):
            return
        if isinstance(self.screen, LoadingScreen):
            self.pop_screen()
        self.push_screen(ResultsScreen(report))

    def _show_error(self, generation: int, message: str) -> None:
        if not self.session.fail(generation, message):
            return
        if isinstance(self.screen, LoadingScreen):
            self.screen.show_error(message)
        else:
            self.notify(message, severity="error", timeout=10)
