"""Runtime settings, read from the environment (and ``.env``)."""

import os
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel


class Settings(BaseModel):
    """Everything repo-lens reads from its environment."""

    github_token: Optional[str] = None
    llm_provider: str = "gemini"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.5-flash"
    copilot_model: str = "gpt-4.1"
    log_level: str = "INFO"
    log_file: Path = Path("repo-lens.log")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            github_token=env.get("GITHUB_TOKEN") or env.get("GH_TOKEN") or None,
            llm_provider=env.get("REPO_LENS_LLM_PROVIDER", "gemini").strip().lower(),
            gemini_api_key=(
                env.get("GEMINI_API_KEY") or env.get("VITE_GEMINI_API_KEY") or None
            ),
            gemini_model=env.get("GEMINI_MODEL", "gemini-2.5-flash"),
            copilot_model=env.get("COPILOT_MODEL", "gpt-4.1"),
            log_level=env.get("REPO_LENS_LOG_LEVEL", "INFO").upper(),
            log_file=Path(env.get("REPO_LENS_LOG_FILE", "repo-lens.log")),
        )
