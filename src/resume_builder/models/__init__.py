"""Data models for the resume generation pipeline."""

from resume_builder.models.generation import GenerationRequest, ModelParameters
from resume_builder.models.profile import BaseRole, Education, Profile
from resume_builder.models.resume import ExperienceEntry, ResumeContent, SkillLine

__all__ = [
    "BaseRole",
    "Education",
    "ExperienceEntry",
    "GenerationRequest",
    "ModelParameters",
    "Profile",
    "ResumeContent",
    "SkillLine",
]
