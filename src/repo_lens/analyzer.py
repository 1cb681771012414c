"""Analysis pipeline.

Orchestrates GitHub fetches, per-file language-model analysis, response
parsing and scoring to produce a complete AnalysisReport.
"""

import asyncio
import logging
from typing import Callable, Optional

from repo_lens.errors import RepoLensError
from repo_lens.fetcher import GitHubFetcher
from repo_lens.llm import LanguageModel
from repo_lens.models import AnalysisReport, DirectoryEntry, FileAnalysis, ParseStatus
from repo_lens.parsing import parse_analysis

logger = logging.getLogger(__name__)


class Analyzer:
    """End-to-end repository analysis over GitHub and a language model."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        llm: LanguageModel,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._fetcher = fetcher
        self._llm = llm
        self._on_status = on_status or (lambda _: None)

    # ── Status helper ─────────────────────────────────────────────────────

    def _status(self, msg: str) -> None:
        self._on_status(msg)

    async def close(self) -> None:
        """Tear down both clients."""
        await self._fetcher.close()
        await self._llm.close()

    # ── Full analysis ─────────────────────────────────────────────────────

    async def analyze(self, owner: str, repo: str) -> AnalysisReport:
        """Run the entire pipeline; any failure aborts with no report."""
        if not owner or not repo:
            raise ValueError("Both owner and repository name are required")
        logger.info("Analyzing %s/%s", owner, repo)

        # 1-3. Fetch GitHub data, strictly in order
        self._status("Fetching repository …")
        repository = await self._fetcher.fetch_repository(owner, repo)

        self._status("Fetching commits …")
        commits = await self._fetcher.fetch_commits(owner, repo)

        self._status("Listing files …")
        entries = await self._fetcher.fetch_contents(owner, repo)

        # 4. Root-level plain files only
        files = [e for e in entries if e.is_file]
        logger.info(
            "%d of %d root entries are files", len(files), len(entries)
        )

        # 5-6. Fetch + analyze every file concurrently; gather keeps input order
        self._status(f"Analyzing {len(files)} files …")
        analyses = list(
            await asyncio.gather(*(self._analyze_file(owner, repo, e) for e in files))
        )

        # 7. Cross-file summary
        self._status("Generating summary …")
        summary = await self._llm.generate_summary([a.content for a in analyses])

        # 8-9. Score is derived by the report itself
        report = AnalysisReport(
            repository=repository,
            commits=commits,
            files=analyses,
            summary=summary,
        )
        self._status("Done!")
        logger.info(
            "Finished %s/%s: %d files, score %d", owner, repo, len(analyses), report.score
        )
        return report

    # ── Per-file chain ────────────────────────────────────────────────────

    async def _analyze_file(
        self, owner: str, repo: str, entry: DirectoryEntry
    ) -> FileAnalysis:
        """Download one file, ask for its analysis and parse the reply."""
        if not entry.download_url:
            raise RepoLensError(
                f"'{entry.path}' in {owner}/{repo} has no download URL"
            )
        content = await self._fetcher.fetch_raw(entry.download_url)
        raw = await self._llm.analyze_code(content, entry.language_hint)

        parsed = parse_analysis(raw)
        if parsed.status != ParseStatus.complete:
            logger.warning(
                "Analysis of %s did not match the expected layout (%s)",
                entry.path,
                parsed.status.value,
            )
        self._status(f"Analyzed {entry.path}")

        return FileAnalysis(
            path=entry.path,
            content=content,
            language=entry.language_hint,
            suggestions=parsed.suggestions,
            vulnerabilities=parsed.vulnerabilities,
            improvements=parsed.improvements,
            parse_status=parsed.status,
            raw_analysis=raw,
        )
