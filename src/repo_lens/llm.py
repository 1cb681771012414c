"""Language-model clients: prompt templates plus pluggable backends.

Every backend implements one primitive, :meth:`LanguageModel.generate`.
The three operations the app needs (per-file analysis, cross-file summary,
file chat) are built on top of it from fixed prompt templates.
"""

import asyncio
import logging
import tempfile
from abc import ABC, abstractmethod
from typing import Callable, Optional

from google import genai
from google.genai import errors as genai_errors

from repo_lens.config import Settings
from repo_lens.errors import LanguageModelError, MissingCredentialError

logger = logging.getLogger(__name__)


# ── Prompt templates ──────────────────────────────────────────────────────

ANALYZE_CODE_PROMPT = """\
Analyze this {language} code for potential improvements, security issues, and best practices. Format your response in markdown with clear sections and bullet points.

{code}

Please provide a detailed analysis including:

## Code Quality Assessment
- Overall code structure and organization
- Code readability and maintainability
- Naming conventions and consistency
- Code duplication and modularity

## Security Vulnerabilities
- Potential security risks
- Input validation issues
- Authentication/authorization concerns
- Data exposure risks

## Performance Optimizations
- Performance bottlenecks
- Resource usage concerns
- Caching opportunities
- Algorithm efficiency

## Best Practices Suggestions
- Industry standard practices
- Framework-specific recommendations
- Code style improvements
- Documentation needs

## Overall Recommendations
- Critical issues to address
- Priority improvements
- Long-term maintenance suggestions
- Positive aspects to maintain"""

SUMMARY_PROMPT = """\
Based on these code analysis results, provide a comprehensive summary in markdown format:

{analysis}

Format your response with the following sections:

## Executive Summary
Brief overview of the codebase health and major findings

## Key Findings
- Critical issues discovered
- Major strengths identified
- Areas needing immediate attention

## Security Assessment
- Security vulnerabilities found
- Risk levels and potential impacts
- Mitigation recommendations

## Performance Analysis
- Performance bottlenecks
- Resource usage concerns
- Optimization opportunities

## Code Quality
- Overall code health
- Maintainability assessment
- Technical debt evaluation

## Recommendations
1. Immediate actions needed
2. Short-term improvements
3. Long-term strategic changes

## Next Steps
Prioritized list of actions to improve the codebase"""

CHAT_PROMPT = """\
I'm looking at this file: {path}

File content:
```
{content}
```

Question: {question}

Please provide a detailed answer about the code, explaining concepts, patterns, and potential improvements where relevant. Format your response in markdown."""


# ── Provider registry ─────────────────────────────────────────────────────

PROVIDERS: dict[str, type["LanguageModel"]] = {}


def register_provider(name: str) -> Callable[[type["LanguageModel"]], type["LanguageModel"]]:
    """Class decorator adding a backend to :data:`PROVIDERS` under *name*."""

    def decorator(cls: type["LanguageModel"]) -> type["LanguageModel"]:
        if name in PROVIDERS:
            raise ValueError(
                f"Provider '{name}' is already registered ({PROVIDERS[name].__name__})"
            )
        PROVIDERS[name] = cls
        return cls

    return decorator


def create_language_model(settings: Settings) -> "LanguageModel":
    """Instantiate the backend named by ``settings.llm_provider``."""
    try:
        cls = PROVIDERS[settings.llm_provider]
    except KeyError:
        known = ", ".join(sorted(PROVIDERS))
        raise ValueError(
            f"Unknown language-model provider '{settings.llm_provider}' (known: {known})"
        ) from None
    return cls.from_settings(settings)


# ── Base class ────────────────────────────────────────────────────────────

class LanguageModel(ABC):
    """A generative language model that turns a prompt into markdown text."""

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: Settings) -> "LanguageModel":
        ...

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Send *prompt* and return the full free-text completion."""

    async def close(self) -> None:
        """Release any network resources."""

    async def analyze_code(self, code: str, language: str) -> str:
        return await self.generate(
            ANALYZE_CODE_PROMPT.format(language=language, code=code)
        )

    async def generate_summary(self, analysis: list[str]) -> str:
        return await self.generate(SUMMARY_PROMPT.format(analysis="\n".join(analysis)))

    async def chat_about_file(self, path: str, content: str, question: str) -> str:
        return await self.generate(
            CHAT_PROMPT.format(path=path, content=content, question=question)
        )


# ── Gemini (google-genai SDK) ─────────────────────────────────────────────

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"


@register_provider("gemini")
class GeminiModel(LanguageModel):
    """Google Gemini through the ``google-genai`` async client."""

    def __init__(self, api_key: Optional[str], model: str = DEFAULT_GEMINI_MODEL) -> None:
        if not api_key:
            raise MissingCredentialError(
                "GEMINI_API_KEY is not set. Add it to your environment or .env file."
            )
        self.api_key = api_key
        self.model = model
        self._client: Optional[genai.Client] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiModel":
        return cls(api_key=settings.gemini_api_key, model=settings.gemini_model)

    def _client_instance(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def generate(self, prompt: str) -> str:
        client = self._client_instance()
        logger.debug("Gemini request (%s, %d chars)", self.model, len(prompt))
        try:
            response = await client.aio.models.generate_content(
                model=self.model, contents=prompt
            )
        except genai_errors.APIError as e:
            raise LanguageModelError(
                f"Gemini request for model '{self.model}' failed ({e.code}): {e.message}"
            ) from e

        feedback = response.prompt_feedback
        if not response.candidates and feedback is not None and feedback.block_reason:
            reason = getattr(feedback.block_reason, "value", feedback.block_reason)
            raise LanguageModelError(f"Prompt blocked by the model: {reason}")
        return response.text or ""

    async def close(self) -> None:
        if self._client:
            await self._client.aio.aclose()
            self._client = None


# ── GitHub Copilot SDK ────────────────────────────────────────────────────

@register_provider("copilot")
class CopilotModel(LanguageModel):
    """Copilot SDK session restricted to plain text answers."""

    SYSTEM_MESSAGE = (
        "You are a code analysis assistant for the repo-lens tool. "
        "You ONLY analyze code provided to you in the prompt. "
        "You NEVER use tools, browse the filesystem, run commands, or "
        "access external resources. Answer in markdown."
    )

    def __init__(self, model: str = "gpt-4.1") -> None:
        self.model = model
        self._copilot_client: object | None = None
        self._copilot_session: object | None = None
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> "CopilotModel":
        return cls(model=settings.copilot_model)

    async def _ensure_session(self) -> None:
        """Lazily start the CopilotClient and create a session."""
        if self._copilot_session is not None:
            return
        from copilot import CopilotClient  # type: ignore[import-untyped]

        # The CLI writes state files into its cwd.
        self._copilot_client = CopilotClient({
            "cwd": tempfile.mkdtemp(prefix="repolens-copilot-"),
        })
        await self._copilot_client.start()  # type: ignore[union-attr]

        async def deny_all_tools(input: dict, invocation: object) -> dict:
            return {"permissionDecision": "deny"}

        self._copilot_session = await self._copilot_client.create_session(  # type: ignore[union-attr]
            {
                "model": self.model,
                "infinite_sessions": {"enabled": False},
                "system_message": {"content": self.SYSTEM_MESSAGE},
                "hooks": {"on_pre_tool_use": deny_all_tools},
            }
        )

    async def generate(self, prompt: str) -> str:
        # One session serves one prompt at a time; per-file analyses queue here.
        async with self._lock:
            await self._ensure_session()
            session = self._copilot_session
            done = asyncio.Event()
            result_parts: list[str] = []

            def _on_event(event: object) -> None:
                etype = getattr(getattr(event, "type", None), "value", "")
                data = getattr(event, "data", None)
                if etype == "assistant.message" and data:
                    content = getattr(data, "content", "") or ""
                    if content:
                        result_parts.append(content)
                    done.set()
                elif etype == "session.idle":
                    done.set()

            unsubscribe = session.on(_on_event)  # type: ignore[union-attr]
            try:
                await session.send({"prompt": prompt})  # type: ignore[union-attr]
                await done.wait()
            finally:
                if callable(unsubscribe):
                    unsubscribe()

        return "".join(result_parts).strip()

    async def close(self) -> None:
        if self._copilot_session:
            try:
                await self._copilot_session.destroy()  # type: ignore[union-attr]
            except Exception:
                logger.warning("Failed to destroy Copilot session", exc_info=True)
            self._copilot_session = None
        if self._copilot_client:
            try:
                await self._copilot_client.stop()  # type: ignore[union-attr]
            except Exception:
                logger.warning("Failed to stop Copilot client", exc_info=True)
            self._copilot_client = None
