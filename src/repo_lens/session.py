"""UI session state, replaced wholesale on every run."""

import logging
from typing import Optional

from repo_lens.models import AnalysisReport

logger = logging.getLogger(__name__)


class AnalysisSession:
    """Holds the latest report, loading flag and error for one UI session.

    Each run is tagged with a generation id from :meth:`begin`. Results
    carrying an older id belong to an abandoned run and are dropped.
    """

    def __init__(self) -> None:
        self.generation = 0
        self.loading = False
        self.report: Optional[AnalysisReport] = None
        self.error: Optional[str] = None
        self.target: Optional[tuple[str, str]] = None

    def begin(self, owner: str, repo: str) -> int:
        """Start a new run and return its generation id."""
        self.generation += 1
        self.loading = True
        self.error = None
        self.target = (owner, repo)
        logger.debug("Run %d started for %s/%s", self.generation, owner, repo)
        return self.generation

    def abandon(self) -> None:
        """Stop waiting for the run in progress; its result will be dropped."""
        if self.loading:
            logger.debug("Run %d abandoned", self.generation)
            self.generation += 1
            self.loading = False

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def complete(self, generation: int, report: AnalysisReport) -> bool:
        """Install *report* if it belongs to the current run."""
        if not self.is_current(generation):
            logger.info("Discarding result of stale run %d", generation)
            return False
        self.report = report
        self.loading = False
        self.error = None
        return True

    def fail(self, generation: int, message: str) -> bool:
        """Record *message* if it belongs to the current run."""
        if not self.is_current(generation):
            logger.info("Discarding error of stale run %d", generation)
            return False
        self.report = None
        self.loading = False
        self.error = message
        return True
