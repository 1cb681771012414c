"""Tests for the data models."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from repo_lens.models import (
    AnalysisReport,
    ChatMessage,
    CommitRecord,
    DirectoryEntry,
    FileAnalysis,
    ParseStatus,
    RepositoryInfo,
    compute_score,
)


def _repo() -> RepositoryInfo:
    return RepositoryInfo(
        name="widget",
        owner="acme",
        url="https://github.com/acme/widget",
        last_updated=datetime(2025, 1, 15, tzinfo=timezone.utc),
    )


def _file(path: str, vulns: int = 0, suggestions: int = 0) -> FileAnalysis:
    return FileAnalysis(
        path=path,
        content="",
        vulnerabilities=[f"v{i}" for i in range(vulns)],
        suggestions=[f"s{i}" for i in range(suggestions)],
    )


class TestRepositoryInfo:
    def test_full_name(self):
        assert _repo().full_name == "acme/widget"

    def test_is_frozen(self):
        repo = _repo()
        with pytest.raises(ValidationError):
            repo.stars = 10


class TestCommitRecord:
    def test_short_sha(self):
        c = CommitRecord(
            sha="1234567890abcdef",
            message="feat: thing\n\nbody",
            author="Dev",
            date=datetime.now(timezone.utc),
        )
        assert c.short_sha == "1234567"
        assert c.subject == "feat: thing"

    def test_empty_message_subject(self):
        c = CommitRecord(
            sha="abc", message="", author="Dev", date=datetime.now(timezone.utc)
        )
        assert c.subject == ""


class TestDirectoryEntry:
    def test_is_file(self):
        assert DirectoryEntry(name="a.py", path="a.py", type="file").is_file
        assert not DirectoryEntry(name="lib", path="lib", type="dir").is_file

    def test_language_hint(self):
        assert DirectoryEntry(name="a.ts", path="a.ts", type="file").language_hint == "ts"
        assert (
            DirectoryEntry(name="x.tar.gz", path="x.tar.gz", type="file").language_hint
            == "gz"
        )

    def test_language_hint_without_extension(self):
        entry = DirectoryEntry(name="Makefile", path="Makefile", type="file")
        assert entry.language_hint == "Makefile"


class TestFileAnalysis:
    def test_penalty(self):
        assert _file("a", vulns=1, suggestions=2).penalty == 9

    def test_display_status(self):
        f = FileAnalysis(path="a", content="", parse_status=ParseStatus.unparseable)
        assert "unparseable" in f.display_status


class TestScore:
    def test_example(self):
        files = [_file("a", vulns=1, suggestions=2), _file("b", suggestions=1)]
        assert compute_score(files) == 89

    def test_no_files(self):
        assert compute_score([]) == 100

    def test_floor_at_zero(self):
        assert compute_score([_file("a", vulns=30)]) == 0

    def test_report_score_is_derived(self):
        report = AnalysisReport(
            repository=_repo(),
            files=[_file("a", vulns=1, suggestions=2), _file("b", suggestions=1)],
        )
        assert report.score == 89

    def test_score_is_serialized(self):
        report = AnalysisReport(repository=_repo(), files=[_file("a", vulns=2)])
        assert report.model_dump()["score"] == 90

    def test_score_cannot_be_overridden(self):
        data = AnalysisReport(repository=_repo(), files=[_file("a", vulns=2)]).model_dump()
        data["score"] = 1
        assert AnalysisReport.model_validate(data).score == 90


class TestAnalysisReport:
    def test_flattened_findings_keep_file_order(self):
        report = AnalysisReport(
            repository=_repo(),
            files=[_file("a", vulns=2, suggestions=1), _file("b", vulns=1)],
        )
        assert report.all_vulnerabilities == [("a", "v0"), ("a", "v1"), ("b", "v0")]
        assert report.all_suggestions == [("a", "s0")]

    def test_degraded_files(self):
        report = AnalysisReport(
            repository=_repo(),
            files=[
                _file("ok"),
                FileAnalysis(path="bad", content="", parse_status=ParseStatus.partial),
            ],
        )
        assert report.degraded_files == ["bad"]

    def test_file_lookup(self):
        report = AnalysisReport(repository=_repo(), files=[_file("a")])
        assert report.file("a").path == "a"
        assert report.file("missing") is None

    def test_is_frozen(self):
        report = AnalysisReport(repository=_repo())
        with pytest.raises(ValidationError):
            report.summary = "changed"


class TestChatMessage:
    def test_create(self):
        msg = ChatMessage(role="user", content="why?", file="a.py")
        assert msg.file == "a.py"
