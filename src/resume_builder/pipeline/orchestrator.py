"""Generation pipeline: draft, validate, repair once, post-process."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from resume_builder.clients.llm_client import LLMClient
from resume_builder.config import AppConfig
from resume_builder.errors import MissingCredentialError, RepairExhaustedError, TransportError
from resume_builder.models.generation import GenerationRequest, ModelParameters
from resume_builder.models.profile import Profile
from resume_builder.models.resume import ResumeContent
from resume_builder.parsers.profile_parser import compute_years_of_experience
from resume_builder.pipeline.emphasis import emphasize_bullets
from resume_builder.pipeline.prompt_builder import (
    CORPUS_MAX_CHARS,
    JD_MAX_CHARS,
    SYSTEM_PROMPT,
    build_generation_prompt,
    build_repair_prompt,
)
from resume_builder.pipeline.skill_filter import apply_skill_realism
from resume_builder.pipeline.validator import validate_content
from resume_builder.utils.sanitizer import extract_json_text

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    DRAFT = "draft"
    VALIDATE = "validate"
    NEEDS_REPAIR = "needs_repair"
    REPAIR_DRAFT = "repair_draft"
    REPAIR_VALIDATE = "repair_validate"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Accepted, post-processed content plus run metadata."""

    content: ResumeContent
    request: GenerationRequest
    repaired: bool = False
    attempts: int = 1
    elapsed_seconds: float = 0.0
    state_trace: list[GenerationState] = field(default_factory=list)


class GenerationOrchestrator:
    """Drives one draft and at most one repair draft through validation."""

    def __init__(
        self,
        llm: LLMClient,
        *,
        api_key: str | None,
        model: str = "claude-sonnet-4-5-20250929",
        temperature: float = 0.6,
        top_p: float | None = None,
        max_tokens: int = 8192,
        jd_max_chars: int = JD_MAX_CHARS,
        corpus_max_chars: int = CORPUS_MAX_CHARS,
    ):
        self.llm = llm
        self.api_key = api_key
        self.parameters = ModelParameters(model=model, temperature=temperature, top_p=top_p)
        self.max_tokens = max_tokens
        self.jd_max_chars = jd_max_chars
        self.corpus_max_chars = corpus_max_chars

    @classmethod
    def from_config(cls, config: AppConfig, api_key: str | None) -> GenerationOrchestrator:
        llm = LLMClient(
            api_key=api_key or None,
            timeout=config.llm.timeout,
            max_retries=config.llm.max_retries,
        )
        return cls(
            llm,
            api_key=api_key,
            model=config.llm.model,
            temperature=config.llm.temperature,
            top_p=config.llm.top_p,
            max_tokens=config.llm.max_tokens,
            jd_max_chars=config.pipeline.jd_max_chars,
            corpus_max_chars=config.pipeline.corpus_max_chars,
        )

    async def generate(
        self,
        profile: Profile,
        job_description: str,
        candidate_corpus: str = "",
        *,
        years_of_experience: str | None = None,
        on_phase: Callable[[str, str], None] | None = None,
    ) -> GenerationResult:
        """Generate validated resume content for one profile and job description.

        Raises:
            MissingCredentialError: no API key; raised before any model call.
            TransportError: a completion call failed.
            RepairExhaustedError: the repaired answer still broke the rules.
        """
        if not self.api_key or not self.api_key.strip():
            raise MissingCredentialError("API key is missing.")

        def _notify(phase: str, detail: str = "") -> None:
            if on_phase:
                on_phase(phase, detail)

        start = time.monotonic()
        request = GenerationRequest(
            job_description=job_description or "",
            candidate_corpus=candidate_corpus or "",
            base_roles=list(profile.experience),
            years_of_experience=years_of_experience or compute_years_of_experience(profile),
            model_parameters=self.parameters,
        )
        prompt = build_generation_prompt(
            request.job_description,
            request.candidate_corpus,
            request.years_of_experience,
            request.base_roles,
            jd_max_chars=self.jd_max_chars,
            corpus_max_chars=self.corpus_max_chars,
        )

        trace: list[GenerationState] = []
        state = GenerationState.DRAFT
        json_text = ""
        repair_prompt = ""
        content = ResumeContent()
        issues: list[str] = []

        while state not in (GenerationState.DONE, GenerationState.FAILED):
            trace.append(state)
            logger.info("Generation state: %s", state.value)

            if state is GenerationState.DRAFT:
                _notify("draft", "Generating resume content")
                json_text = await self._draft(prompt)
                state = GenerationState.VALIDATE

            elif state is GenerationState.VALIDATE:
                content, issues = validate_content(json_text, profile, request.years_of_experience)
                state = GenerationState.NEEDS_REPAIR if issues else GenerationState.DONE

            elif state is GenerationState.NEEDS_REPAIR:
                logger.warning("First draft failed validation: %s", "; ".join(issues))
                _notify("repair", f"Repairing {len(issues)} issue(s)")
                repair_prompt = build_repair_prompt(prompt, json_text, issues)
                state = GenerationState.REPAIR_DRAFT

            elif state is GenerationState.REPAIR_DRAFT:
                json_text = await self._draft(repair_prompt)
                state = GenerationState.REPAIR_VALIDATE

            elif state is GenerationState.REPAIR_VALIDATE:
                content, issues = validate_content(json_text, profile, request.years_of_experience)
                state = GenerationState.FAILED if issues else GenerationState.DONE

        trace.append(state)
        if state is GenerationState.FAILED:
            logger.error("Repaired draft failed validation with %d issue(s)", len(issues))
            raise RepairExhaustedError(issues)

        _notify("postprocess", "Applying skill and emphasis rules")
        content = apply_skill_realism(content, request.job_description)
        content = emphasize_bullets(content)

        repaired = GenerationState.NEEDS_REPAIR in trace
        elapsed = time.monotonic() - start
        _notify("done", f"Done in {elapsed:.1f}s")
        return GenerationResult(
            content=content,
            request=request,
            repaired=repaired,
            attempts=2 if repaired else 1,
            elapsed_seconds=elapsed,
            state_trace=trace,
        )

    async def _draft(self, prompt: str) -> str:
        """One completion call; returns the cleaned JSON text."""
        try:
            raw = await self.llm.complete(
                SYSTEM_PROMPT,
                prompt,
                model=self.parameters.model,
                temperature=self.parameters.temperature,
                top_p=self.parameters.top_p,
                max_tokens=self.max_tokens,
            )
        except TransportError:
            raise
        except Exception as exc:
            logger.error("Completion call failed", exc_info=True)
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        return extract_json_text(raw)
