"""Validation of the model's resume JSON against the profile and format rules.

Summary, skills and experience rules run independently and all of their
issues are collected. Within the skills and experience groups, checking
stops at the first broken line or role.
"""

from __future__ import annotations

import json
import logging
import re

from resume_builder.models.profile import BaseRole, Profile
from resume_builder.models.resume import ExperienceEntry, ResumeContent, SkillLine
from resume_builder.utils.sanitizer import contains_personal_data

logger = logging.getLogger(__name__)

SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")

MIN_SUMMARY_SENTENCES = 4
MAX_SUMMARY_SENTENCES = 5
MIN_SKILL_LINES = 3
MIN_SKILL_ITEMS = 5
MAX_SKILL_ITEMS = 8
MIN_BULLETS = 5
MAX_BULLETS = 6

ISSUE_EMPTY = "Empty JSON output."
ISSUE_INVALID_JSON = "Invalid JSON."
ISSUE_NOT_OBJECT = "Top-level JSON must be an object."
ISSUE_SUMMARY_MISSING = "Summary is missing."
ISSUE_SUMMARY_PREFIX = "Summary must start with the required years-of-experience phrase."
ISSUE_SUMMARY_PII = "Summary must not contain contact details or links."
ISSUE_SUMMARY_SENTENCES = "Summary must be 4-5 sentences."
ISSUE_SKILLS_COUNT = "Skills must include at least 3 category lines."
ISSUE_SKILLS_FORMAT = "Each skills line must use 'Category: item1, item2' format."
ISSUE_SKILLS_ITEMS = "Each skills line must list 5-8 comma-separated items."
ISSUE_ROLES_COUNT = "Experience roles must match the base profile count."
ISSUE_ROLES_IDENTITY = "Experience roles must match the base profile company/title/dates exactly."
ISSUE_BULLETS_COUNT = "Each role must have 5-6 bullets."
ISSUE_BULLETS_PII = "Bullets must not contain contact details or links."


def years_phrase(years: str) -> str:
    return f"{years} years of experience"


def split_sentences(text: str) -> list[str]:
    return [s for s in SENTENCE_SPLIT.split(text.strip()) if s.strip()]


def validate_content(
    json_text: str,
    profile: Profile,
    years: str,
) -> tuple[ResumeContent, list[str]]:
    """Parse and validate model output.

    Returns the content built from whatever could be parsed, together with
    the ordered list of broken rules. An empty list means the content is
    accepted.
    """
    if not json_text or not json_text.strip():
        return ResumeContent(), [ISSUE_EMPTY]

    try:
        root = json.loads(json_text)
    except (ValueError, RecursionError):
        # ValueError also covers integer literals past the digit limit
        return ResumeContent(), [ISSUE_INVALID_JSON]

    if not isinstance(root, dict):
        return ResumeContent(), [ISSUE_NOT_OBJECT]

    issues: list[str] = []

    summary = _read_string(root, "summary")
    issues.extend(check_summary(summary, years))

    skills = _read_string_list(root.get("skills"))
    issues.extend(check_skills(skills))

    experience = _read_experience(root.get("experience"))
    issues.extend(check_experience(experience, profile.experience))

    content = ResumeContent(
        summary=summary,
        skills=skills,
        experience=experience,
        education=list(profile.education),
    )
    logger.debug("Validation finished with %d issue(s)", len(issues))
    return content, issues


def check_summary(summary: str, years: str) -> list[str]:
    if not summary.strip():
        return [ISSUE_SUMMARY_MISSING]

    issues = []
    if not summary.strip().lower().startswith(years_phrase(years).lower()):
        issues.append(ISSUE_SUMMARY_PREFIX)
    if contains_personal_data(summary):
        issues.append(ISSUE_SUMMARY_PII)
    count = len(split_sentences(summary))
    if not MIN_SUMMARY_SENTENCES <= count <= MAX_SUMMARY_SENTENCES:
        issues.append(ISSUE_SUMMARY_SENTENCES)
    return issues


def check_skills(skills: list[str]) -> list[str]:
    if len(skills) < MIN_SKILL_LINES:
        return [ISSUE_SKILLS_COUNT]

    for line in skills:
        parsed = SkillLine.parse(line)
        if parsed is None:
            return [ISSUE_SKILLS_FORMAT]
        if not MIN_SKILL_ITEMS <= len(parsed.items) <= MAX_SKILL_ITEMS:
            return [ISSUE_SKILLS_ITEMS]
    return []


def check_experience(experience: list[ExperienceEntry], base_roles: list[BaseRole]) -> list[str]:
    if len(experience) != len(base_roles):
        return [ISSUE_ROLES_COUNT]

    for base, role in zip(base_roles, experience):
        if not matches_base_role(role, base):
            return [ISSUE_ROLES_IDENTITY]
        if not MIN_BULLETS <= len(role.bullets) <= MAX_BULLETS:
            return [ISSUE_BULLETS_COUNT]
        if any(contains_personal_data(bullet) for bullet in role.bullets):
            return [ISSUE_BULLETS_PII]
    return []


def matches_base_role(role: ExperienceEntry, base: BaseRole) -> bool:
    def same(a: str, b: str) -> bool:
        return a.strip().casefold() == b.strip().casefold()

    return (
        same(role.company, base.company)
        and same(role.title, base.title)
        and same(role.dates, base.dates)
    )


def _read_string(obj: dict, key: str) -> str:
    value = obj.get(key)
    return value if isinstance(value, str) else ""


def _read_string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _read_experience(value) -> list[ExperienceEntry]:
    if not isinstance(value, list):
        return []

    entries = []
    for item in value:
        if not isinstance(item, dict):
            continue
        entries.append(
            ExperienceEntry(
                company=_read_string(item, "company"),
                title=_read_string(item, "title"),
                dates=_read_string(item, "dates"),
                bullets=_read_string_list(item.get("bullets")),
            )
        )
    return entries
