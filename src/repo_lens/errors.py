"""Exception types and user-facing error messages."""

import httpx


class RepoLensError(Exception):
    """Base class for errors raised by repo-lens itself."""


class InvalidRepositoryURL(RepoLensError, ValueError):
    """The text entered is not a GitHub repository URL."""


class MissingCredentialError(RepoLensError):
    """The selected language-model provider has no API credential."""


class LanguageModelError(RepoLensError):
    """The language-model API returned something we cannot use."""


GITHUB_API_HOST = "api.github.com"


def describe_error(
    exc: BaseException,
    owner: str = "",
    repo: str = "",
    has_token: bool = False,
    api_host: str = GITHUB_API_HOST,
) -> str:
    """Turn any pipeline failure into the single message shown to the user.

    Repository and token wording is reserved for responses from the GitHub
    REST host; other hosts (raw file downloads) get a plain download error.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        if exc.request.url.host != api_host:
            return (
                f"❌ Download failed ({status} {exc.response.reason_phrase}): "
                f"{exc.request.url}"
            )
        if status == 404:
            return (
                f"❌ Repository '{owner}/{repo}' not found. "
                "Check the URL and try again."
            )
        if status == 401:
            return "❌ Authentication failed. Please check your GitHub token."
        if status == 403:
            resp_text = exc.response.text
            if "rate limit" in resp_text.lower():
                if has_token:
                    return (
                        "❌ GitHub API rate limit exceeded. "
                        "Wait a few minutes and retry."
                    )
                return (
                    "❌ GitHub API rate limit exceeded "
                    "(unauthenticated: 60 req/hour). "
                    "Set GITHUB_TOKEN to get 5 000 req/hour."
                )
            if has_token:
                return (
                    "❌ Access denied. The repository may be private "
                    "or your token lacks permissions."
                )
            return (
                "❌ Access denied and no GitHub token found. "
                "Set GITHUB_TOKEN env var: export GITHUB_TOKEN=ghp_…"
            )
        return f"❌ API error ({status}): {exc.response.reason_phrase}"
    if isinstance(exc, httpx.ConnectError):
        return "❌ Could not connect. Check your internet connection."
    if isinstance(exc, httpx.InvalidURL):
        return f"❌ Malformed URL: {exc}"
    if isinstance(exc, RepoLensError):
        return f"❌ {exc}"
    return f"❌ Unexpected error: {exc}"
