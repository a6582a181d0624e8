"""Pydantic models for generated resume content."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel

from resume_builder.models.profile import Education


class ExperienceEntry(BaseModel):
    company: str = ""
    title: str = ""
    dates: str = ""
    bullets: list[str] = []


class ResumeContent(BaseModel):
    """Validated resume content handed to the document renderer."""

    summary: str = ""
    skills: list[str] = []  # "Category: item, item, ..."
    experience: list[ExperienceEntry] = []
    education: list[Education] = []


@dataclass
class SkillLine:
    """One "Category: item, item" skills line."""

    category: str
    items: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, line: str) -> SkillLine | None:
        """Split on the first colon; None when the line has no colon."""
        if not line or ":" not in line:
            return None
        category, payload = line.split(":", 1)
        items = [item.strip() for item in payload.split(",")]
        return cls(category=category.strip(), items=[item for item in items if item])

    def __str__(self) -> str:
        return f"{self.category}: {', '.join(self.items)}"
