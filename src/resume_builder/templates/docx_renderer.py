"""DOCX output renderer for validated resume content."""

from __future__ import annotations

import re
from pathlib import Path

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_TAB_ALIGNMENT
from docx.shared import Inches, Pt, RGBColor

from resume_builder.models.profile import Profile
from resume_builder.models.resume import ResumeContent, SkillLine

FONT_NAME = "Calibri"
NAME_SIZE = Pt(14)
BODY_SIZE = Pt(11)
RIGHT_TAB = Inches(7.5)

BOLD_SPLIT = re.compile(r"(\*\*[^*]+\*\*)")
INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def generate_docx(
    content: ResumeContent,
    profile: Profile,
    output_path: str | Path,
) -> Path:
    """Write the resume as a .docx file and return its path."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = Document()
    font = doc.styles["Normal"].font
    font.name = FONT_NAME
    font.size = BODY_SIZE

    for section in doc.sections:
        section.top_margin = section.bottom_margin = Inches(0.5)
        section.left_margin = section.right_margin = Inches(0.5)

    name = doc.add_paragraph()
    name.alignment = WD_ALIGN_PARAGRAPH.CENTER
    run = name.add_run(profile.display_name or profile.id)
    run.bold = True
    run.font.size = NAME_SIZE

    contact = compose_contact_line(profile)
    if contact:
        p = doc.add_paragraph(contact)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    _heading(doc, "Summary")
    _add_rich_text(doc.add_paragraph(), content.summary)

    if content.skills:
        _heading(doc, "Technical Skills")
        for line in content.skills:
            _add_skill_line(doc, line)

    if content.education:
        _heading(doc, "Education")
        for edu in content.education:
            left = ", ".join(part for part in (edu.degree, edu.school) if part)
            _add_left_right(doc, left, edu.dates)
            if edu.details:
                doc.add_paragraph(edu.details)

    _heading(doc, "Professional Experience")
    for role in content.experience:
        left = " | ".join(part for part in (role.company.strip(), role.title.strip()) if part)
        _add_left_right(doc, left, role.dates.strip())
        for bullet in role.bullets:
            if bullet.strip():
                _add_rich_text(doc.add_paragraph(style="List Bullet"), bullet.strip())

    doc.save(str(output_path))
    return output_path


def compose_contact_line(profile: Profile) -> str:
    if profile.contact_line.strip():
        return profile.contact_line.strip()
    parts = [profile.address, profile.phone, profile.email, profile.linkedin]
    return " | ".join(part.strip() for part in parts if part and part.strip())


def safe_file_name(name: str, fallback: str = "resume") -> str:
    """Replace characters that are not allowed in file names."""
    cleaned = INVALID_FILENAME_CHARS.sub("_", name).strip().strip(".")
    cleaned = re.sub(r"\s+", "_", cleaned)
    return cleaned or fallback


def _heading(doc: Document, text: str) -> None:
    p = doc.add_paragraph()
    run = p.add_run(text.upper())
    run.bold = True
    run.font.size = Pt(12)
    run.font.color.rgb = RGBColor(0x1A, 0x1A, 0x1A)


def _add_skill_line(doc: Document, line: str) -> None:
    parsed = SkillLine.parse(line)
    p = doc.add_paragraph()
    if parsed is None:
        p.add_run(line.strip())
        return
    p.add_run(f"{parsed.category}: ").bold = True
    p.add_run(", ".join(parsed.items))


def _add_left_right(doc: Document, left: str, right: str) -> None:
    p = doc.add_paragraph()
    p.paragraph_format.tab_stops.add_tab_stop(RIGHT_TAB, WD_TAB_ALIGNMENT.RIGHT)
    p.add_run(left).bold = True
    if right:
        p.add_run(f"\t{right}").bold = True


def _add_rich_text(paragraph, text: str) -> None:
    """Add text to a paragraph, rendering **spans** as bold runs."""
    for part in BOLD_SPLIT.split(text or ""):
        if not part:
            continue
        if part.startswith("**") and part.endswith("**") and len(part) > 4:
            paragraph.add_run(part[2:-2]).bold = True
        else:
            paragraph.add_run(part)
