"""Tests for company and role inference from pasted job postings."""

import pytest

from resume_builder.parsers.job_post_parser import (
    clean_role_candidate,
    extract_lines,
    format_name,
    infer_company_from_url,
    infer_company_name,
    infer_job_post_details,
    infer_role_name,
    is_likely_role,
    looks_like_company,
)

INDEED_PASTE = """\
Senior .NET Developer
iTek People, Inc.
iTek People, Inc.
Remote
$60 - $65 an hour - Contract
Profile insights
Here's how the job qualifications align with your profile.
"""


class TestInferJobPostDetails:
    def test_explicit_markers(self):
        jd = "Company: Acme Corp\nRole: Senior Backend Engineer\nWe build things."
        assert infer_job_post_details("", jd) == ("Acme Corp", "Senior Backend Engineer")

    def test_company_below_role_headline(self):
        jd = "Senior Python Developer\nGlobex Systems\nAustin, TX\nJob details\nFull-time"
        assert infer_job_post_details("", jd) == ("Globex Systems", "Senior Python Developer")

    def test_company_above_role_headline(self):
        jd = "Globex\nStaff Software Engineer\nRemote\nPosted 3 days ago"
        assert infer_job_post_details("", jd) == ("Globex", "Staff Software Engineer")

    def test_job_board_paste(self):
        assert infer_job_post_details("", INDEED_PASTE) == ("iTek People, Inc.", "Senior .NET Developer")

    def test_join_team_at(self):
        jd = "Platform Engineer\nJoin our infrastructure team at Initech.\nWe ship daily."
        assert infer_company_name("", jd) == "Initech"

    def test_html_entities_decoded(self):
        jd = "Senior Developer &amp; Architect\nSmith &amp; Sons"
        assert infer_job_post_details("", jd) == ("Smith & Sons", "Senior Developer & Architect")

    def test_role_decorations_removed(self):
        jd = "Java Developer with Spring Boot (W2 only) - Remote\nNorthwind Traders"
        assert infer_role_name("", jd) == "Java Developer"

    def test_url_fallback_when_description_is_silent(self):
        assert infer_job_post_details("https://careers.globex.com/job/1", "") == ("Globex", "")

    def test_description_wins_over_url(self):
        jd = "Company: Acme Corp\nRole: Data Engineer"
        assert infer_company_name("https://careers.globex.com/job/1", jd) == "Acme Corp"

    def test_nothing_recognizable(self):
        assert infer_job_post_details("", "Apply today!\nResponsibilities") == ("", "")


class TestInferCompanyFromUrl:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://boards.greenhouse.io/acme-robotics/jobs/123", "Acme robotics"),
            ("https://jobs.lever.co/initech/abc-123", "Initech"),
            ("https://careers.globex.com/job/1", "Globex"),
            ("https://www.initech.com/careers", "Initech"),
            ("https://jobs.acme-robotics.com/1", "Acme robotics"),
            ("https://www.indeed.com/viewjob?jk=abc", ""),
            ("https://www.linkedin.com/jobs/view/1", ""),
            ("https://www.dice.com/job-detail/1", ""),
            ("https://localhost/job", ""),
            ("not a url", ""),
            ("", ""),
        ],
    )
    def test_hosts(self, url, expected):
        assert infer_company_from_url(url) == expected


class TestHeuristics:
    @pytest.mark.parametrize(
        "line",
        [
            "4.2 out of 5 stars",
            "$120,000 a year",
            "Full-time",
            "5+ years of Python",
            "Posted 3 days ago",
            "Responsibilities",
            "(Required)",
            "https://acme.com",
            "Senior Software Engineer",
        ],
    )
    def test_not_a_company(self, line):
        assert not looks_like_company(line)

    @pytest.mark.parametrize("line", ["Confidential", "Acme Technologies", "Initech", "Globex, Ltd."])
    def test_company(self, line):
        assert looks_like_company(line)

    def test_line_matching_role_is_not_company(self):
        assert not looks_like_company("Backend Engineering Group", role="Backend Engineering Group")

    def test_repeated_line_counts_as_company(self):
        assert not looks_like_company("Northwind (US)")
        assert looks_like_company("Northwind (US)", count=2)

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("Senior Software Engineer", True),
            ("Engineering Manager", True),
            ("Benefits", False),
            ("Acme Corp Engineer", False),
            ("Posted 2 days ago by a recruiter lead", False),
            ("Full job description for Developer", False),
            ("Lead", False),
        ],
    )
    def test_is_likely_role(self, value, expected):
        assert is_likely_role(value) is expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Role: Java Developer with Spring (W2 only) - Remote", "Java Developer"),
            ("Data Engineer @ Remote", "Data Engineer"),
            ("QA Analyst | Posted today", "QA Analyst"),
            ("Cloud Architect (Contract 6 months)", "Cloud Architect"),
            ("Site Reliability Engineer - Job Post", "Site Reliability Engineer"),
        ],
    )
    def test_clean_role_candidate(self, raw, expected):
        assert clean_role_candidate(raw) == expected

    def test_extract_lines(self):
        text = "  Title  \r\n\r\n" + "x" * 141 + "\nAT&amp;T   Labs"
        assert extract_lines(text) == ["Title", "AT&T Labs"]

    def test_format_name(self):
        assert format_name("acme_robotics-inc") == "Acme robotics inc"
        assert format_name("") == ""
