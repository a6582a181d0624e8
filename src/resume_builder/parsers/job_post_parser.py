"""Infer the company and role of a job posting from its pasted text and URL.

Job boards paste very differently, so this is a stack of heuristics:
explicit "Company:" / "Role:" markers first, then headline-style role lines
near the top, then the company line closest to the role line. When the
description names no company, the posting URL's host is used.
"""

from __future__ import annotations

import html
import re
from urllib.parse import urlparse

ROLE_KEYWORDS = (
    "engineer",
    "developer",
    "architect",
    "manager",
    "manger",
    "analyst",
    "scientist",
    "consultant",
    "specialist",
    "administrator",
    "designer",
    "lead",
    "director",
    "officer",
)

IGNORED_LINES = frozenset({
    "apply",
    "job details",
    "skills",
    "summary",
    "profile insights",
    "job type",
    "benefits",
    "full job description",
    "responsibilities",
    "skillset",
    "education & requirements",
    "education and requirements",
    "fitment",
    "remote",
    "full-time",
    "contract w2",
    "no travel required",
    "depends on experience",
})

GENERIC_JOB_HOSTS = (
    "dice.com",
    "indeed.com",
    "linkedin.com",
    "ziprecruiter.com",
    "glassdoor.com",
    "monster.com",
    "careerbuilder.com",
    "simplyhired.com",
    "talent.com",
    "wellfound.com",
    "jobcase.com",
)
# Applicant tracking systems put the company slug in the first path segment
ATS_HOSTS = ("greenhouse.io", "lever.co", "myworkdayjobs")

MAX_LINE_LENGTH = 140
ROLE_SCAN_LINES = 32
ROLE_FALLBACK_LINES = 60
COMPANY_SCAN_LINES = 40
ROLE_NEIGHBOURHOOD = 6

_I = re.IGNORECASE
_KEYWORD_ALTERNATION = "|".join(ROLE_KEYWORDS)

EXPLICIT_ROLE = re.compile(r"^\s*(?:role|position|title)\s*:\s*(.+)$", _I | re.MULTILINE)
EXPLICIT_COMPANY = re.compile(r"^\s*company\s*[:\-]\s*(.+)$", _I | re.MULTILINE)
JOIN_AT = re.compile(
    r"\bjoin(?:\s+our\s+[A-Za-z0-9&'\- ]+)?\s+(?:team\s+)?at\s+([A-Z][A-Za-z0-9&.,'\- ]{1,80}?)(?:[\r\n.,]|$)",
    _I | re.DOTALL,
)
EMAIL = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", _I)
LEGAL_SUFFIX = re.compile(r"\b(inc\.?|llc|ltd\.?|corp\.?)\b", _I)
COMPANY_WORDS = re.compile(r"\b(inc\.?|llc|ltd\.?|corp\.?|company|technologies|systems|labs|solutions|group)\b", _I)
PLAIN_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9&'\- ]{1,60}$")
ROLE_WITH_DECORATORS = re.compile(rf"^(?P<core>.+?\b(?:{_KEYWORD_ALTERNATION})\b)\s+with\b.+$", _I)

NOT_A_ROLE = [
    re.compile(r"^(posted|updated|remote|full[- ]?time|part[- ]?time|contract|benefits?)\b", _I),
    re.compile(r"\b(job\s*details|profile insights|full job description|qualifications)\b", _I),
]

NOT_A_COMPANY = [
    re.compile(r"^(role|job\s*details|summary|responsibilities|benefits|skillset|jd)\b", _I),
    # ratings such as "4.2", "4.2 out of 5 stars"
    re.compile(r"^\d+(?:\.\d+)?(?:\s*out\s+of\s+\d+(?:\.\d+)?)?(?:\s*stars?)?$", _I),
    re.compile(r"\bstars?\b|\bposted\b|\bupdated\b", _I),
    re.compile(r"\b(do you have experience|here(?:'|’)?s how|work location|work from home)\b", _I),
    re.compile(r"^\+?\s*show more$", _I),
    re.compile(r"^\(?\s*(required|preferred|highly desired)\s*\)?$", _I),
    re.compile(
        r"^(core backend|security\s*&\s*authentication|healthcare standards"
        r"|integration\s*&\s*processing|infrastructure|development tools)\b",
        _I,
    ),
    re.compile(r"\$\s*\d", _I),
    re.compile(r"\b(full[- ]?time|part[- ]?time|contract|temporary|remote|hybrid|onsite)\b", _I),
    re.compile(r"\b\d+\+?\s*years?\b", _I),
]

# Applied in order by clean_role_candidate
ROLE_DECORATIONS = [
    re.compile(r"^(?:role|position|title)\s*:\s*", _I),
    re.compile(r"\s*-\s*job\s+post.*$", _I),
    re.compile(r"\s*@\s*(remote|hybrid|onsite).*$", _I),
    re.compile(r"\s+\((?:w2|c2c|1099|contract)\b[^)]*\)", _I),
    re.compile(r"\s*[|•]\s*(posted|updated).*$", _I),
    re.compile(r"\s*[-|]\s*(remote|hybrid|onsite)\b.*$", _I),
    re.compile(r"\s+\((?:w2\s*only|c2c\s*only|contract\s*only)\)", _I),
]


def infer_job_post_details(job_url: str, job_description: str) -> tuple[str, str]:
    """Return (company, role) for a posting; either may be empty."""
    lines = extract_lines(job_description)
    role = infer_role(lines, job_description)
    company = infer_company(lines, job_description, role)
    if not company:
        company = infer_company_from_url(job_url)
    return company, role


def infer_company_name(job_url: str, job_description: str) -> str:
    return infer_job_post_details(job_url, job_description)[0]


def infer_role_name(job_url: str, job_description: str) -> str:
    return infer_job_post_details(job_url, job_description)[1]


def extract_lines(job_description: str) -> list[str]:
    """Decoded, whitespace-collapsed, non-empty lines short enough to be headings."""
    lines = []
    for raw in (job_description or "").splitlines():
        line = _collapse(html.unescape(raw))
        if line and len(line) <= MAX_LINE_LENGTH:
            lines.append(line)
    return lines


def infer_role(lines: list[str], job_description: str) -> str:
    if not (job_description or "").strip():
        return ""

    for line in lines[:ROLE_SCAN_LINES]:
        cleaned = clean_role_candidate(line)
        if is_likely_role(cleaned):
            return cleaned

    match = EXPLICIT_ROLE.search(job_description)
    if match:
        cleaned = clean_role_candidate(match.group(1))
        if is_likely_role(cleaned):
            return cleaned

    for line in lines[:ROLE_FALLBACK_LINES]:
        cleaned = clean_role_candidate(line)
        if is_likely_role(cleaned) and not looks_like_company(cleaned):
            return cleaned
    return ""


def infer_company(lines: list[str], job_description: str, role: str = "") -> str:
    if not (job_description or "").strip():
        return ""

    match = EXPLICIT_COMPANY.search(job_description)
    if match:
        return clean_company_name(match.group(1))

    match = JOIN_AT.search(job_description)
    if match:
        return clean_company_name(match.group(1))

    top = lines[:COMPANY_SCAN_LINES]
    counts: dict[str, int] = {}
    for line in top:
        key = clean_company_name(line).lower()
        if key:
            counts[key] = counts.get(key, 0) + 1

    def candidate(line: str, min_count: int = 1) -> str:
        cleaned = clean_company_name(line)
        count = counts.get(cleaned.lower(), 1)
        if count >= min_count and looks_like_company(line, role, count):
            return cleaned
        return ""

    # The company line usually sits just below or just above the role headline
    role_index = find_role_line(top, role)
    if role_index >= 0:
        below = top[role_index + 1 : role_index + 1 + ROLE_NEIGHBOURHOOD]
        above = top[max(0, role_index - ROLE_NEIGHBOURHOOD) : role_index][::-1]
        for line in below + above:
            found = candidate(line)
            if found:
                return found

    # Job boards often repeat the company name line
    for min_count in (2, 1):
        for line in top:
            found = candidate(line, min_count)
            if found:
                return found
    return ""


def infer_company_from_url(job_url: str) -> str:
    """Company name from the posting host, or "" for job boards and bad URLs."""
    parsed = urlparse((job_url or "").strip())
    if not parsed.scheme or not parsed.hostname:
        return ""
    host = parsed.hostname.lower().replace("www.", "")

    if any(ats in host for ats in ATS_HOSTS):
        segments = parsed.path.strip("/").split("/")
        return format_name(segments[0])

    if any(host.endswith(generic) for generic in GENERIC_JOB_HOSTS):
        return ""

    parts = [p for p in host.split(".") if p.strip()]
    if len(parts) < 2:
        return ""
    core = parts[-2]
    if core in ("jobs", "careers", "apply") and len(parts) >= 3:
        core = parts[-3]
    if core in ("dice", "indeed", "linkedin"):
        return ""
    return format_name(core)


def is_likely_role(value: str) -> bool:
    candidate = clean_role_candidate(value)
    if not 6 <= len(candidate) <= 120:
        return False
    if candidate.lower() in IGNORED_LINES or _contains_link_or_email(candidate):
        return False
    if LEGAL_SUFFIX.search(candidate) or any(p.search(candidate) for p in NOT_A_ROLE):
        return False
    lowered = candidate.lower()
    return any(keyword in lowered for keyword in ROLE_KEYWORDS)


def looks_like_company(value: str, role: str = "", count: int = 1) -> bool:
    """Whether a line reads like a company name rather than a heading or job detail.

    ``count`` is how many times the line appears near the top of the posting;
    repeated short lines are usually the employer.
    """
    line = (value or "").strip()
    if not 2 <= len(line) <= 100:
        return False
    if line.lower() in IGNORED_LINES or _contains_link_or_email(line):
        return False
    if line.lower() == "confidential":
        return True

    normalized_role = normalize_for_compare(clean_role_candidate(role))
    normalized_line = normalize_for_compare(clean_role_candidate(line))
    if normalized_role and normalized_line and (
        normalized_role in normalized_line or normalized_line in normalized_role
    ):
        return False

    if any(p.search(line) for p in NOT_A_COMPANY):
        return False
    if is_likely_role(line) or len(line.split()) > 8:
        return False

    if count >= 2 or COMPANY_WORDS.search(line):
        return True
    if "." in line or "," in line:
        return True
    return bool(PLAIN_NAME.match(line))


def find_role_line(lines: list[str], role: str) -> int:
    target = normalize_for_compare(clean_role_candidate(role))
    if not target:
        return -1
    for i, line in enumerate(lines):
        current = normalize_for_compare(clean_role_candidate(line))
        if current and (target in current or current in target):
            return i
    return -1


def clean_role_candidate(raw: str) -> str:
    """Strip location, contract and posting-date decorations from a role line.

    Example:
        "Role: Java Developer with Spring (W2 only) - Remote" -> "Java Developer"
    """
    value = html.unescape(raw or "").strip()
    for pattern in ROLE_DECORATIONS:
        value = pattern.sub("", value)
    match = ROLE_WITH_DECORATORS.match(value)
    if match:
        value = match.group("core")
    return _collapse(value).strip("-|:. ")


def clean_company_name(raw: str) -> str:
    value = html.unescape(raw or "").strip()
    value = re.sub(r"^company\s*[:\-]\s*", "", value, flags=_I)
    return re.sub(r"\s+", " ", value).strip(" -:")


def normalize_for_compare(value: str) -> str:
    return _collapse(re.sub(r"[^a-z0-9]+", " ", (value or "").lower()))


def format_name(raw: str) -> str:
    """Turn a URL slug such as "acme-robotics" into "Acme robotics"."""
    cleaned = _collapse((raw or "").replace("-", " ").replace("_", " "))
    return cleaned[:1].upper() + cleaned[1:]


def _collapse(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def _contains_link_or_email(value: str) -> bool:
    lowered = value.lower()
    return "http" in lowered or "www." in lowered or bool(EMAIL.search(value))
