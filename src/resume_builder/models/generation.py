"""Pydantic models describing one generation run."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from resume_builder.models.profile import BaseRole


class ModelParameters(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model: str
    temperature: float
    top_p: float | None = None


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True, protected_namespaces=())

    job_description: str
    candidate_corpus: str
    base_roles: list[BaseRole]
    years_of_experience: str  # e.g. "7+"
    model_parameters: ModelParameters
