"""Generation and repair prompts for the resume writer."""

from __future__ import annotations

import json
from collections.abc import Sequence

from resume_builder.models.profile import BaseRole

JD_MAX_CHARS = 7000
CORPUS_MAX_CHARS = 5000

SYSTEM_PROMPT = (
    "You output strict JSON only. You are writing a professional resume. "
    "Never include phone numbers, emails, personal addresses, or new company names."
)

GENERATE_MODE_RULES = """\
Mode: GENERATE NEW resume content.

Generate-mode rules:
- Rewrite summary, skills, and bullets for JD alignment while staying realistic and grounded in the provided base roles.
- Do not copy or mirror JD sentences verbatim or near-verbatim.
- Do not lift long JD phrases directly; paraphrase them into resume language.
- Avoid generic AI-sounding phrasing, buzzword stuffing, and empty claims.
- Use natural, concrete wording that sounds like a real candidate's resume.
- Candidate resume text is grounding context, not fixed output.
"""

OUTPUT_SCHEMA = """\
Output strict JSON only with this schema:
{
  "summary": string,
  "skills": ["Category: item1, item2, ..."],
  "experience": [
    {"company": string, "title": string, "dates": string, "bullets": [string, ...]}
  ]
}"""

RULES_TEMPLATE = """\
Rules (non-negotiable):
- Summary must be 4-5 sentences and start with '{years} years of experience'.
- Do NOT include phone numbers, emails, addresses, or links.
- Do NOT introduce company names that are not in base roles.
- Experience roles must match the base roles exactly in company/title/dates and count.
- Each role must have 5-6 bullets.
- Bullets must be JD-aligned and avoid wild claims. Prefer grounded wording.
- Bullets must not read like pasted JD responsibilities; convert them into candidate-focused accomplishments/responsibilities.
- In each experience bullet, bold 1-2 concrete technologies/tools using **double-asterisk** markers.
- Skills must have 3-6 category lines and each line must list 5-8 comma-separated items.
- Skills must include only technologies required/preferred by the JD (plus minimal direct companions).
- Avoid "kitchen sink" stacks. Do not list mutually parallel alternatives unless the JD asks for them.
- For frontend frameworks, include at most two among React/Angular/Vue."""


def truncate(text: str | None, limit: int) -> str:
    """Trim text and cut it to at most `limit` characters.

    The cut is a raw character slice and may split a word.
    """
    text = (text or "").strip()
    return text[:limit] if len(text) > limit else text


def serialize_base_roles(base_roles: Sequence[BaseRole]) -> str:
    roles = [
        {"company": role.company, "title": role.title, "dates": role.dates}
        for role in base_roles
    ]
    return json.dumps(roles, ensure_ascii=False)


def build_generation_prompt(
    job_description: str,
    candidate_corpus: str,
    years_of_experience: str,
    base_roles: Sequence[BaseRole],
    *,
    jd_max_chars: int = JD_MAX_CHARS,
    corpus_max_chars: int = CORPUS_MAX_CHARS,
) -> str:
    """Build the prompt asking the model for a fresh resume JSON."""
    jd = truncate(job_description, jd_max_chars)
    corpus = truncate(candidate_corpus, corpus_max_chars)
    rules = RULES_TEMPLATE.format(years=years_of_experience)

    return f"""{GENERATE_MODE_RULES}

{OUTPUT_SCHEMA}

{rules}

Base roles (must match exactly):
{serialize_base_roles(base_roles)}

Candidate resume text (for grounding if relevant):
{corpus}

Job description:
{jd}
"""


def build_repair_prompt(original_prompt: str, previous_json: str, issues: Sequence[str]) -> str:
    """Build the follow-up prompt listing validation issues of the previous answer."""
    issue_text = "\n- ".join(issues)
    return f"""{original_prompt}

Your previous JSON output had problems:
- {issue_text}

Previous output JSON:
{previous_json}

Return corrected JSON only."""
