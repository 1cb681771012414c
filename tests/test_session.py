"""Tests for UI session state."""

from datetime import datetime, timezone

import pytest

from repo_lens.models import AnalysisReport, RepositoryInfo
from repo_lens.session import AnalysisSession


@pytest.fixture
def report():
    return AnalysisReport(
        repository=RepositoryInfo(
            name="widget",
            owner="acme",
            url="https://github.com/acme/widget",
            last_updated=datetime(2025, 1, 15, tzinfo=timezone.utc),
        )
    )


class TestAnalysisSession:
    def test_initial_state(self):
        session = AnalysisSession()
        assert session.loading is False
        assert session.report is None
        assert session.error is None

    def test_begin(self):
        session = AnalysisSession()
        gen = session.begin("acme", "widget")
        assert gen == 1
        assert session.loading is True
        assert session.target == ("acme", "widget")

    def test_complete(self, report):
        session = AnalysisSession()
        gen = session.begin("acme", "widget")
        assert session.complete(gen, report) is True
        assert session.report is report
        assert session.loading is False

    def test_fail_clears_report(self, report):
        session = AnalysisSession()
        session.complete(session.begin("acme", "widget"), report)
        gen = session.begin("acme", "other")
        assert session.fail(gen, "❌ boom") is True
        assert session.report is None
        assert session.error == "❌ boom"
        assert session.loading is False

    def test_begin_clears_previous_error(self):
        session = AnalysisSession()
        session.fail(session.begin("acme", "widget"), "❌ boom")
        session.begin("acme", "widget")
        assert session.error is None

    def test_stale_result_is_discarded(self, report):
        session = AnalysisSession()
        first = session.begin("acme", "widget")
        second = session.begin("acme", "other")
        assert session.complete(first, report) is False
        assert session.report is None
        assert session.loading is True
        assert session.is_current(second)

    def test_abandon_drops_late_result(self, report):
        session = AnalysisSession()
        gen = session.begin("acme", "widget")
        session.abandon()
        assert session.loading is False
        assert session.complete(gen, report) is False
        assert session.fail(gen, "late") is False
        assert session.error is None

    def test_abandon_when_idle_is_noop(self):
        session = AnalysisSession()
        gen = session.begin("acme", "widget")
        session.fail(gen, "❌ boom")
        session.abandon()
        assert session.generation == gen
