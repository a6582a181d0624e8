"""Load candidate profiles from profiles.json."""

from __future__ import annotations

import json
import re
from datetime import date
from pathlib import Path

from resume_builder.models.profile import BaseRole, Education, Profile

YEAR_PATTERN = re.compile(r"(19|20)\d{2}")
DEFAULT_YEARS = "5+"


def load_profiles(path: str | Path) -> list[Profile]:
    """Read a JSON object keyed by profile id.

    Example:
        {"jane": {"display_name": "Jane Doe", "experience": [...], "education": [...]}}
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Profiles file must contain a JSON object: {path}")
    return [parse_profile(key, _lower_keys(value or {})) for key, value in raw.items()]


def parse_profile(profile_id: str, data: dict) -> Profile:
    # Keys are matched case-insensitively
    data = {str(k).lower(): v for k, v in data.items()}
    return Profile(
        id=profile_id,
        display_name=data.get("display_name") or profile_id,
        contact_line=data.get("contact_line") or "",
        email=data.get("email") or "",
        phone=data.get("phone") or "",
        address=data.get("address") or "",
        linkedin=data.get("linkedin") or "",
        education=[Education(**_lower_keys(e)) for e in data.get("education") or []],
        experience=[BaseRole(**_lower_keys(e)) for e in data.get("experience") or []],
    )


def get_profile(profiles: list[Profile], profile_id: str) -> Profile:
    for profile in profiles:
        if profile.id.lower() == profile_id.lower():
            return profile
    raise KeyError(f"Profile not found: {profile_id}")


def compute_years_of_experience(profile: Profile, current_year: int | None = None) -> str:
    """Years since the earliest role start, as a label like "7+".

    Falls back to "5+" when no role has a recognizable year.
    """
    years = [y for y in (extract_year(role.dates) for role in profile.experience) if y > 0]
    if not years:
        return DEFAULT_YEARS
    current_year = current_year or date.today().year
    return f"{max(1, current_year - min(years))}+"


def extract_year(dates: str | None) -> int:
    if not dates or not dates.strip():
        return 0
    match = YEAR_PATTERN.search(dates)
    return int(match.group(0)) if match else 0


def _lower_keys(data: dict) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}: {data!r}")
    return {str(k).lower(): "" if v is None else v for k, v in data.items()}
