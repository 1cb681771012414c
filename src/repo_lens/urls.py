"""Parsing of the repository URL typed by the user."""

from urllib.parse import urlparse

from repo_lens.errors import InvalidRepositoryURL


def parse_repo_url(url: str) -> tuple[str, str]:
    """Return ``(owner, repo)`` from ``https://github.com/<owner>/<repo>[...]``.

    Owner and repo are the first two path segments after the host; any
    further segments (``/tree/main``...) are ignored and a trailing
    ``.git`` is dropped.
    """
    text = url.strip()
    parsed = urlparse(text)
    if not parsed.scheme or not parsed.netloc:
        raise InvalidRepositoryURL(f"Not a URL: {text!r}")

    segments = parsed.path.split("/")
    owner = segments[1] if len(segments) > 1 else ""
    repo = segments[2] if len(segments) > 2 else ""
    repo = repo.removesuffix(".git")
    if not owner or not repo:
        raise InvalidRepositoryURL(
            f"Expected https://github.com/<owner>/<repo>, got {text!r}"
        )
    return owner, repo
