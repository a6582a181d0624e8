"""Tests for profile, job description and corpus parsers."""

import json

import pytest

from resume_builder.models.profile import BaseRole, Profile
from resume_builder.parsers.profile_parser import (
    compute_years_of_experience,
    extract_year,
    get_profile,
    load_profiles,
    parse_profile,
)
from resume_builder.parsers.text_parser import load_jd_file, normalize_text, parse_corpus


@pytest.fixture
def profiles_file(tmp_path):
    data = {
        "jane": {
            "Display_Name": "Jane Doe",
            "contact_line": "Austin, TX | jane@example.com",
            "linkedin": "linkedin.com/in/janedoe",
            "experience": [
                {"Company": "Acme Corp", "Title": "Senior Engineer", "Dates": "Jan 2019 - Present"},
                {"company": "Globex", "title": "Engineer", "dates": "Jun 2016 - Dec 2018"},
            ],
            "education": [{"school": "UT Austin", "degree": "BS", "dates": None}],
        },
        "bob": {},
    }
    path = tmp_path / "profiles.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestProfileParser:
    def test_load_profiles(self, profiles_file):
        profiles = load_profiles(profiles_file)
        assert [p.id for p in profiles] == ["jane", "bob"]

        jane = profiles[0]
        assert jane.display_name == "Jane Doe"
        assert jane.roles_count == 2
        assert jane.experience[0] == BaseRole(company="Acme Corp", title="Senior Engineer", dates="Jan 2019 - Present")
        assert jane.education[0].dates == ""
        assert jane.has_linkedin

    def test_display_name_defaults_to_id(self, profiles_file):
        bob = load_profiles(profiles_file)[1]
        assert bob.display_name == "bob"
        assert bob.experience == []
        assert not bob.has_linkedin

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "profiles.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON object"):
            load_profiles(path)

    @pytest.mark.parametrize(
        "data",
        [{"jane": "Jane Doe"}, {"jane": {"experience": ["Acme, 2019"]}}],
    )
    def test_rejects_non_object_entries(self, tmp_path, data):
        path = tmp_path / "profiles.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        with pytest.raises(ValueError, match="Expected a JSON object"):
            load_profiles(path)

    def test_get_profile_case_insensitive(self, profiles_file):
        profiles = load_profiles(profiles_file)
        assert get_profile(profiles, "JANE").display_name == "Jane Doe"

    def test_get_profile_missing(self, profiles_file):
        with pytest.raises(KeyError, match="Profile not found"):
            get_profile(load_profiles(profiles_file), "alice")

    def test_parse_profile_contact_line_linkedin(self):
        profile = parse_profile("x", {"contact_line": "Remote | LinkedIn: /in/x"})
        assert profile.has_linkedin


class TestYearsOfExperience:
    def test_earliest_start_year(self, sample_profile):
        assert compute_years_of_experience(sample_profile, current_year=2026) == "10+"

    def test_minimum_one(self):
        profile = Profile(id="new", experience=[BaseRole(dates="Mar 2026 - Present")])
        assert compute_years_of_experience(profile, current_year=2026) == "1+"

    def test_no_years_falls_back(self):
        profile = Profile(id="x", experience=[BaseRole(dates="Present")])
        assert compute_years_of_experience(profile) == "5+"

    @pytest.mark.parametrize(
        "dates, expected",
        [("Jan 2019 - Present", 2019), ("1998-2001", 1998), ("Present", 0), ("", 0), (None, 0)],
    )
    def test_extract_year(self, dates, expected):
        assert extract_year(dates) == expected


class TestTextParser:
    def test_normalize_collapses_whitespace(self):
        text = "\ufeff  Hello   World  \n\n\n\nLine\u200b 2  "
        assert normalize_text(text) == "Hello World\n\nLine 2"

    def test_load_jd_file(self, tmp_path):
        jd_file = tmp_path / "jd.txt"
        jd_file.write_text("Backend Engineer\n\n\n\nRequirements:  Python", encoding="utf-8")
        assert load_jd_file(jd_file) == "Backend Engineer\n\nRequirements: Python"

    @pytest.mark.parametrize("suffix", [".txt", ".md"])
    def test_parse_text_corpus(self, tmp_path, suffix):
        path = tmp_path / f"resume{suffix}"
        path.write_text("Jane Doe\nSenior Engineer", encoding="utf-8")
        assert parse_corpus(path) == "Jane Doe\nSenior Engineer"

    def test_parse_docx_corpus(self, tmp_path):
        from docx import Document

        doc = Document()
        doc.add_paragraph("Jane Doe")
        doc.add_paragraph("Built Python services.")
        table = doc.add_table(rows=1, cols=2)
        table.rows[0].cells[0].text = "Skills"
        table.rows[0].cells[1].text = "Python, Go"
        path = tmp_path / "resume.docx"
        doc.save(str(path))

        text = parse_corpus(path)
        assert "Jane Doe" in text
        assert "Built Python services." in text
        assert "Skills | Python, Go" in text

    def test_parse_pdf_corpus(self, tmp_path):
        import fitz

        path = tmp_path / "resume.pdf"
        doc = fitz.open()
        page = doc.new_page()
        page.insert_text((72, 72), "Jane Doe Python Engineer")
        doc.save(str(path))
        doc.close()

        assert "Jane Doe Python Engineer" in parse_corpus(path)

    def test_unsupported_format(self, tmp_path):
        bad_file = tmp_path / "resume.xyz"
        bad_file.write_text("test")
        with pytest.raises(ValueError, match="Unsupported file format"):
            parse_corpus(bad_file)
