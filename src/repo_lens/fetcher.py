"""GitHub data fetching via REST API."""

import logging
from datetime import datetime
from typing import Optional

import httpx

from repo_lens.models import CommitRecord, DirectoryEntry, RepositoryInfo

logger = logging.getLogger(__name__)


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class GitHubFetcher:
    """Fetches repository metadata, commits and file contents from GitHub."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = "https://api.github.com",
    ) -> None:
        self.token = token
        self.base_url = base_url
        self._client: Optional[httpx.AsyncClient] = None

    # ── HTTP plumbing ─────────────────────────────────────────────────────

    @property
    def headers(self) -> dict[str, str]:
        h: dict[str, str] = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            h["Authorization"] = f"Bearer {self.token}"
        return h

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    @property
    def api_host(self) -> str:
        """Host of the REST API, as it appears in request URLs."""
        return httpx.URL(self.base_url).host

    async def _client_instance(self) -> httpx.AsyncClient:
        if self._client is None:
            # No timeout: a hung upstream call blocks the run.
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=None,
            )
        return self._client

    async def _get(self, path: str, **kwargs) -> httpx.Response:  # type: ignore[no-untyped-def]
        """GET that raises on any non-success status."""
        client = await self._client_instance()
        logger.debug("GET %s", path)
        resp = await client.get(path, **kwargs)
        if resp.status_code == 403 and "rate limit" in resp.text.lower():
            remaining = resp.headers.get("x-ratelimit-remaining", "0")
            if self.token:
                hint = (
                    f"Authenticated rate limit hit (remaining: {remaining}). "
                    "Wait a few minutes and retry."
                )
            else:
                hint = (
                    "Running unauthenticated (60 req/hour). "
                    "Set GITHUB_TOKEN to get 5 000 req/hour."
                )
            raise httpx.HTTPStatusError(
                f"GitHub API rate limit exceeded. {hint}",
                request=resp.request,
                response=resp,
            )
        resp.raise_for_status()
        return resp

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Repo metadata ─────────────────────────────────────────────────────

    async def fetch_repository(self, owner: str, repo: str) -> RepositoryInfo:
        """Fetch basic repository information."""
        resp = await self._get(f"/repos/{owner}/{repo}")
        data = resp.json()
        return RepositoryInfo(
            name=data["name"],
            owner=(data.get("owner") or {}).get("login", owner),
            description=data.get("description"),
            url=data.get("html_url", f"https://github.com/{owner}/{repo}"),
            stars=data.get("stargazers_count", 0),
            forks=data.get("forks_count", 0),
            open_issues=data.get("open_issues_count", 0),
            last_updated=_parse_timestamp(data["updated_at"]),
        )

    # ── Commits ───────────────────────────────────────────────────────────

    async def fetch_commits(self, owner: str, repo: str) -> list[CommitRecord]:
        """Fetch the commit list, newest first, as the API orders it."""
        resp = await self._get(f"/repos/{owner}/{repo}/commits")
        commits: list[CommitRecord] = []
        for item in resp.json():
            commit_detail = item.get("commit", {})
            author_info = commit_detail.get("author") or {}
            commits.append(
                CommitRecord(
                    sha=item["sha"],
                    message=commit_detail.get("message", ""),
                    author=author_info.get("name", "Unknown"),
                    date=_parse_timestamp(author_info["date"]),
                )
            )
        return commits

    # ── Contents ──────────────────────────────────────────────────────────

    async def fetch_contents(
        self, owner: str, repo: str, path: str = ""
    ) -> list[DirectoryEntry]:
        """List one directory of the default branch."""
        resp = await self._get(f"/repos/{owner}/{repo}/contents/{path}")
        data = resp.json()
        if isinstance(data, dict):
            # The path pointed at a single file rather than a directory.
            data = [data]
        return [
            DirectoryEntry(
                name=item["name"],
                path=item["path"],
                type=item["type"],
                download_url=item.get("download_url"),
                size=item.get("size", 0),
            )
            for item in data
        ]

    async def fetch_raw(self, download_url: str) -> str:
        """Download a file's raw text from its ``download_url``."""
        resp = await self._get(download_url)
        return resp.text

    async def fetch_rate_limit(self) -> dict:
        """Current rate-limit status for this token (or anonymous IP)."""
        resp = await self._get("/rate_limit")
        return resp.json()
