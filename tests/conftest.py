"""Shared test fixtures."""

from __future__ import annotations

import copy
import json
from unittest.mock import AsyncMock

import pytest

from resume_builder.clients.llm_client import LLMClient
from resume_builder.models.profile import BaseRole, Education, Profile

VALID_SUMMARY = (
    "7+ years of experience building backend services in Python and Go. "
    "Led the migration of monolithic systems to event-driven architectures. "
    "Partnered with product teams to ship reliable APIs on AWS. "
    "Mentored engineers and improved code review practices across teams. "
    "Focused on observability, testing, and pragmatic delivery."
)


@pytest.fixture
def sample_profile() -> Profile:
    return Profile(
        id="jane",
        display_name="Jane Doe",
        contact_line="Austin, TX | jane@example.com | linkedin.com/in/janedoe",
        email="jane@example.com",
        education=[
            Education(school="University of Texas", degree="BS Computer Science", dates="2012 - 2016"),
        ],
        experience=[
            BaseRole(company="Acme Corp", title="Senior Software Engineer", dates="Jan 2019 - Present"),
            BaseRole(company="Globex", title="Software Engineer", dates="Jun 2016 - Dec 2018"),
        ],
    )


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer

We are looking for an engineer to build Python services on AWS.
You will work with React and Vue frontends, Docker and Kubernetes.

Requirements:
- 5+ years of backend development
- Experience with Terraform and CI/CD pipelines
"""


@pytest.fixture
def valid_payload() -> dict:
    return {
        "summary": VALID_SUMMARY,
        "skills": [
            "Languages: Python, Go, TypeScript, SQL, Bash",
            "Frontend: React, Vue, HTML, CSS, Tailwind",
            "Cloud & DevOps: AWS, Docker, Kubernetes, Terraform, GitHub Actions",
        ],
        "experience": [
            {
                "company": "Acme Corp",
                "title": "Senior Software Engineer",
                "dates": "Jan 2019 - Present",
                "bullets": [
                    "Built REST APIs in Python serving internal analytics teams.",
                    "Migrated batch jobs to Kubernetes with zero downtime.",
                    "Introduced Terraform modules for repeatable AWS environments.",
                    "Improved React dashboards used by support staff.",
                    "Reduced CI time by 40% using GitHub Actions caching.",
                ],
            },
            {
                "company": "Globex",
                "title": "Software Engineer",
                "dates": "Jun 2016 - Dec 2018",
                "bullets": [
                    "Developed Go microservices for order processing.",
                    "Wrote SQL reports for finance stakeholders.",
                    "Containerized legacy services with Docker.",
                    "Maintained TypeScript tooling for the web team.",
                    "Automated deployments with Bash scripts.",
                ],
            },
        ],
    }


@pytest.fixture
def valid_json(valid_payload) -> str:
    return json.dumps(valid_payload)


@pytest.fixture
def make_payload(valid_payload):
    """Return a factory producing a deep copy of the valid payload with overrides."""

    def _make(**overrides) -> dict:
        payload = copy.deepcopy(valid_payload)
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.complete = AsyncMock(return_value="{}")
    client.get_token_summary = lambda: {"input": 0, "output": 0, "calls": []}
    return client
