"""Skill list cleanup: dedupe items, cap line length, prune frontend frameworks."""

from __future__ import annotations

from resume_builder.models.resume import ResumeContent, SkillLine

MAX_ITEMS_PER_LINE = 8
MAX_FRONTEND_FRAMEWORKS = 2
FRONTEND_FRAMEWORKS = ("react", "angular", "vue")


def apply_skill_realism(content: ResumeContent, job_description: str | None) -> ResumeContent:
    """Return a copy of content with normalized skills lines.

    Lines without a colon or without items are dropped. If no line
    survives, the original skills list is kept.
    """
    if not content.skills:
        return content

    jd_lower = (job_description or "").lower()
    normalized: list[str] = []

    for line in content.skills:
        parsed = SkillLine.parse(line)
        if parsed is None:
            continue

        items = dedupe_case_insensitive(parsed.items)
        if not items:
            continue

        if is_frontend_category(parsed.category):
            items = prune_frontend_frameworks(items, jd_lower)

        normalized.append(str(SkillLine(parsed.category, items[:MAX_ITEMS_PER_LINE])))

    if not normalized:
        return content
    return content.model_copy(update={"skills": normalized})


def dedupe_case_insensitive(items: list[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for item in items:
        key = item.casefold()
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def is_frontend_category(category: str) -> bool:
    return "front" in category.strip().lower()


def map_framework(item: str) -> str | None:
    """Map a skill item to react/angular/vue by substring, or None."""
    value = item.lower()
    for key in FRONTEND_FRAMEWORKS:
        if key in value:
            return key
    return None


def prune_frontend_frameworks(items: list[str], jd_lower: str) -> list[str]:
    """Keep at most two of React/Angular/Vue.

    Frameworks named in the job description win; remaining slots go to
    the earliest listed ones. Items unrelated to the three pass through.
    """
    keys_in_order: list[str] = []
    for item in items:
        key = map_framework(item)
        if key is not None and key not in keys_in_order:
            keys_in_order.append(key)

    if len(keys_in_order) <= MAX_FRONTEND_FRAMEWORKS:
        return items

    keep = [key for key in keys_in_order if key in jd_lower][:MAX_FRONTEND_FRAMEWORKS]
    for key in keys_in_order:
        if len(keep) >= MAX_FRONTEND_FRAMEWORKS:
            break
        if key not in keep:
            keep.append(key)

    return [item for item in items if map_framework(item) in (None, *keep)]
