"""Pytest configuration and fixtures."""

import asyncio

import httpx
import pytest
import respx

from repo_lens.config import Settings
from repo_lens.llm import LanguageModel


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


class StubModel(LanguageModel):
    """Deterministic language model keyed on the code it is asked about."""

    def __init__(
        self,
        analyses: dict[str, str] | None = None,
        summary: str = "## Executive Summary\nAll good.",
        delays: dict[str, float] | None = None,
        fail_on: str | None = None,
    ) -> None:
        self.analyses = analyses or {}
        self.summary = summary
        self.delays = delays or {}
        self.fail_on = fail_on
        self.analyzed: list[tuple[str, str]] = []
        self.summarized: list[list[str]] = []
        self.closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "StubModel":
        return cls()

    async def generate(self, prompt: str) -> str:
        return "generated"

    async def analyze_code(self, code: str, language: str) -> str:
        await asyncio.sleep(self.delays.get(code, 0))
        if code == self.fail_on:
            raise RuntimeError(f"model failed on {code!r}")
        self.analyzed.append((code, language))
        return self.analyses.get(code, "")

    async def generate_summary(self, analysis: list[str]) -> str:
        self.summarized.append(list(analysis))
        return self.summary

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def repo_json():
    return {
        "name": "widget",
        "owner": {"login": "acme"},
        "description": "A widget",
        "html_url": "https://github.com/acme/widget",
        "stargazers_count": 42,
        "forks_count": 7,
        "open_issues_count": 3,
        "updated_at": "2025-01-15T10:00:00Z",
    }


@pytest.fixture
def commits_json():
    return [
        {
            "sha": "bbbbbbbbbbbbbbbb",
            "commit": {
                "message": "fix: second\n\nlonger body",
                "author": {"name": "Bob", "date": "2025-01-14T10:00:00Z"},
            },
        },
        {
            "sha": "aaaaaaaaaaaaaaaa",
            "commit": {
                "message": "feat: first",
                "author": {"name": "Alice", "date": "2025-01-10T10:00:00Z"},
            },
        },
    ]


@pytest.fixture
def contents_json():
    raw = "https://raw.githubusercontent.com/acme/widget/main"
    return [
        {"name": "a.ts", "path": "a.ts", "type": "file", "size": 10,
         "download_url": f"{raw}/a.ts"},
        {"name": "lib", "path": "lib", "type": "dir", "size": 0,
         "download_url": None},
        {"name": "b.py", "path": "b.py", "type": "file", "size": 12,
         "download_url": f"{raw}/b.py"},
    ]


@pytest.fixture
def stub_model():
    """Factory for :class:`StubModel` instances."""
    return StubModel


@pytest.fixture
def github_routes(repo_json, commits_json, contents_json):
    """Mock every GitHub endpoint one run touches."""
    api = "https://api.github.com/repos/acme/widget"
    raw = "https://raw.githubusercontent.com/acme/widget/main"
    with respx.mock(assert_all_called=False) as mock:
        routes = {
            "repo": mock.get(api).mock(return_value=httpx.Response(200, json=repo_json)),
            "commits": mock.get(f"{api}/commits").mock(
                return_value=httpx.Response(200, json=commits_json)
            ),
            "contents": mock.get(f"{api}/contents/").mock(
                return_value=httpx.Response(200, json=contents_json)
            ),
            "a": mock.get(f"{raw}/a.ts").mock(return_value=httpx.Response(200, text="A")),
            "b": mock.get(f"{raw}/b.py").mock(return_value=httpx.Response(200, text="B")),
        }
        yield routes
