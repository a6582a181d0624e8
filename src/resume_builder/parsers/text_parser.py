"""Plain-text loading for job descriptions and candidate resume corpora."""

from __future__ import annotations

import re
from pathlib import Path


def normalize_text(text: str) -> str:
    """Collapse runs of spaces and blank lines, strip every line."""
    text = text.lstrip("\ufeff")
    text = re.sub(r"[\u200b\u200c\u200d\u00ad\u2060]", "", text)
    text = re.sub(r"[ \t]+", " ", text)
    lines = [line.strip() for line in text.splitlines()]
    text = "\n".join(lines)
    return re.sub(r"\n{3,}", "\n\n", text).strip()


def load_jd_file(file_path: str | Path) -> str:
    """Load a job description from a text file."""
    return normalize_text(Path(file_path).read_text(encoding="utf-8"))


def parse_corpus(file_path: str | Path) -> str:
    """Extract the candidate's existing resume text (PDF, DOCX, TXT, MD)."""
    path = Path(file_path)
    suffix = path.suffix.lower()
    if suffix == ".pdf":
        return normalize_text(_parse_pdf(path))
    if suffix == ".docx":
        return normalize_text(_parse_docx(path))
    if suffix in (".txt", ".md"):
        return normalize_text(path.read_text(encoding="utf-8"))
    raise ValueError(f"Unsupported file format: {path.suffix}")


def _parse_pdf(path: Path) -> str:
    import fitz  # pymupdf

    with fitz.open(str(path)) as doc:
        return "\n".join(page.get_text() for page in doc)


def _parse_docx(path: Path) -> str:
    from docx import Document

    doc = Document(str(path))
    parts = [p.text for p in doc.paragraphs if p.text.strip()]
    for table in doc.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                parts.append(" | ".join(cells))
    return "\n".join(parts)
