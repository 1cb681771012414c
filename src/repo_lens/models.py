"""Data models for repo-lens."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


# ── Raw GitHub data ───────────────────────────────────────────────────────

class RepositoryInfo(BaseModel):
    """Snapshot of a repository's metadata, fetched once per run."""

    model_config = ConfigDict(frozen=True)

    name: str
    owner: str
    description: Optional[str] = None
    url: str
    stars: int = 0
    forks: int = 0
    open_issues: int = 0
    last_updated: datetime

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class CommitRecord(BaseModel):
    """A single commit as listed by the GitHub API."""

    model_config = ConfigDict(frozen=True)

    sha: str
    message: str
    author: str
    date: datetime

    @property
    def short_sha(self) -> str:
        return self.sha[:7]

    @property
    def subject(self) -> str:
        """First line of the commit message."""
        return self.message.splitlines()[0] if self.message else ""


class DirectoryEntry(BaseModel):
    """One item of a repository contents listing."""

    model_config = ConfigDict(frozen=True)

    name: str
    path: str
    type: str  # "file", "dir", "symlink", "submodule"
    download_url: Optional[str] = None
    size: int = 0

    @property
    def is_file(self) -> bool:
        return self.type == "file"

    @property
    def language_hint(self) -> str:
        """Extension of the file name, or the whole name when it has none."""
        return self.name.rsplit(".", 1)[-1]


# ── Per-file analysis ────────────────────────────────────────────────────

class ParseStatus(str, Enum):
    """How well a language-model response matched the expected layout."""

    complete = "complete"
    partial = "partial"
    unparseable = "unparseable"


class ParsedAnalysis(BaseModel):
    """Positional sections extracted from one analysis response."""

    model_config = ConfigDict(frozen=True)

    suggestions: list[str] = Field(default_factory=list)
    vulnerabilities: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    status: ParseStatus = ParseStatus.unparseable


class FileAnalysis(BaseModel):
    """Analysis results for one file of the repository root."""

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    language: str = ""
    suggestions: list[str] = Field(default_factory=list)
    vulnerabilities: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    parse_status: ParseStatus = ParseStatus.complete
    raw_analysis: str = ""

    @property
    def penalty(self) -> int:
        """Points this file subtracts from the report score."""
        return 5 * len(self.vulnerabilities) + 2 * len(self.suggestions)

    @property
    def display_status(self) -> str:
        icons = {
            ParseStatus.complete: "✅",
            ParseStatus.partial: "🟡",
            ParseStatus.unparseable: "⚠️",
        }
        return f"{icons[self.parse_status]} {self.parse_status.value}"


# ── Chat ──────────────────────────────────────────────────────────────────

class ChatMessage(BaseModel):
    """One turn of the file chat assistant."""

    model_config = ConfigDict(frozen=True)

    role: str  # "user" or "assistant"
    content: str
    file: Optional[str] = None


# ── Full report ───────────────────────────────────────────────────────────

def compute_score(files: list[FileAnalysis]) -> int:
    """100 minus 5 per vulnerability and 2 per suggestion, floored at 0."""
    return max(0, 100 - sum(f.penalty for f in files))


class AnalysisReport(BaseModel):
    """Complete result of one analysis run."""

    model_config = ConfigDict(frozen=True)

    repository: RepositoryInfo
    commits: list[CommitRecord] = Field(default_factory=list)
    files: list[FileAnalysis] = Field(default_factory=list)
    summary: str = ""

    @computed_field  # type: ignore[prop-decorator]
    @property
    def score(self) -> int:
        return compute_score(self.files)

    @property
    def all_vulnerabilities(self) -> list[tuple[str, str]]:
        """(path, vulnerability) pairs across every file, in file order."""
        return [(f.path, v) for f in self.files for v in f.vulnerabilities]

    @property
    def all_suggestions(self) -> list[tuple[str, str]]:
        """(path, suggestion) pairs across every file, in file order."""
        return [(f.path, s) for f in self.files for s in f.suggestions]

    @property
    def degraded_files(self) -> list[str]:
        return [f.path for f in self.files if f.parse_status != ParseStatus.complete]

    def file(self, path: str) -> Optional[FileAnalysis]:
        return next((f for f in self.files if f.path == path), None)
