"""Pydantic models for candidate profiles."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class BaseRole(BaseModel):
    """An employment entry from the profile that generated experience must match."""

    model_config = ConfigDict(frozen=True)

    company: str = ""
    title: str = ""
    dates: str = ""


class Education(BaseModel):
    model_config = ConfigDict(frozen=True)

    school: str = ""
    degree: str = ""
    dates: str = ""
    details: str = ""


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str = ""
    contact_line: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    linkedin: str = ""
    education: list[Education] = []
    experience: list[BaseRole] = []

    @property
    def roles_count(self) -> int:
        return len(self.experience)

    @property
    def education_count(self) -> int:
        return len(self.education)

    @property
    def has_linkedin(self) -> bool:
        return bool(self.linkedin.strip()) or "linkedin" in self.contact_line.lower()
