"""Bold one known skill term per experience bullet."""

from __future__ import annotations

import re

from resume_builder.models.resume import ResumeContent, SkillLine

MARKER = "**"
EMPHASIS_PATTERN = re.compile(r"\*\*[^*]+\*\*")
MIN_TERM_LENGTH = 3


def extract_skill_terms(skills: list[str]) -> list[str]:
    """Collect skill items usable as emphasis terms, longest first.

    Items shorter than three characters are kept only when they contain
    '#' or '+' (C#, C++). Duplicates are removed case-insensitively.
    """
    terms: list[str] = []
    seen: set[str] = set()
    for line in skills:
        parsed = SkillLine.parse(line)
        if parsed is None:
            continue
        for term in parsed.items:
            if len(term) < MIN_TERM_LENGTH and "#" not in term and "+" not in term:
                continue
            key = term.casefold()
            if key not in seen:
                seen.add(key)
                terms.append(term)

    return sorted(terms, key=len, reverse=True)


def contains_emphasis(text: str) -> bool:
    return bool(EMPHASIS_PATTERN.search(text or ""))


def is_inside_emphasis(text: str, index: int) -> bool:
    left = text.rfind(MARKER, 0, index + 1)
    if left < 0:
        return False
    right = text.find(MARKER, left + 2)
    return right >= 0 and left < index < right


def _is_boundary(text: str, index: int) -> bool:
    return index < 0 or index >= len(text) or not text[index].isalnum()


def bold_first_occurrence(text: str, term: str) -> str | None:
    """Wrap the first whole-word, unbolded occurrence of term in ** markers.

    Matching is case-insensitive and keeps the original casing. Returns
    None when there is no eligible occurrence.
    """
    if not text or not text.strip() or not term or not term.strip():
        return None

    for match in re.finditer(re.escape(term), text, re.IGNORECASE):
        start, end = match.span()
        if (
            _is_boundary(text, start - 1)
            and _is_boundary(text, end)
            and not is_inside_emphasis(text, start)
        ):
            return f"{text[:start]}{MARKER}{match.group(0)}{MARKER}{text[end:]}"
    return None


def emphasize_bullet(bullet: str, terms: list[str]) -> str:
    if contains_emphasis(bullet):
        return bullet
    for term in terms:
        updated = bold_first_occurrence(bullet, term)
        if updated is not None:
            return updated
    return bullet


def emphasize_bullets(content: ResumeContent) -> ResumeContent:
    """Return a copy of content with one skill term bolded per bullet.

    Bullets that already contain a bold span are left as they are, so
    applying this twice gives the same result as applying it once.
    """
    terms = extract_skill_terms(content.skills)
    if not terms:
        return content

    experience = [
        role.model_copy(update={"bullets": [emphasize_bullet(b or "", terms) for b in role.bullets]})
        for role in content.experience
    ]
    return content.model_copy(update={"experience": experience})
