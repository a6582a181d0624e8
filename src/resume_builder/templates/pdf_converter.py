"""PDF export of a rendered DOCX resume through headless LibreOffice."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path

from resume_builder.errors import PdfExportError

logger = logging.getLogger(__name__)

SOFFICE_NAMES = ("soffice", "libreoffice")
CONVERT_TIMEOUT = 90


def find_soffice() -> str | None:
    """Path of the LibreOffice executable on PATH, or None."""
    for name in SOFFICE_NAMES:
        found = shutil.which(name)
        if found:
            return found
    return None


def convert_docx_to_pdf(
    docx_path: str | Path,
    pdf_path: str | Path | None = None,
    timeout: float = CONVERT_TIMEOUT,
) -> Path:
    """Convert a .docx file to PDF and return the PDF path.

    LibreOffice always names its output after the input file, so the result
    is moved when ``pdf_path`` asks for a different name.

    Raises PdfExportError when LibreOffice is not installed, times out,
    exits non-zero, or produces no file.
    """
    docx_path = Path(docx_path)
    pdf_path = Path(pdf_path) if pdf_path else docx_path.with_suffix(".pdf")

    soffice = find_soffice()
    if soffice is None:
        raise PdfExportError("PDF export needs LibreOffice; 'soffice' was not found on PATH.")

    out_dir = pdf_path.parent
    out_dir.mkdir(parents=True, exist_ok=True)
    cmd = [
        soffice,
        "--headless",
        "--nologo",
        "--norestore",
        "--convert-to", "pdf",
        "--outdir", str(out_dir),
        str(docx_path),
    ]
    logger.debug("Running %s", " ".join(cmd))
    try:
        subprocess.run(
            cmd,
            check=True,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as exc:
        raise PdfExportError("LibreOffice conversion timed out.") from exc
    except subprocess.CalledProcessError as exc:
        output = (exc.stderr or exc.stdout or b"").decode(errors="ignore").strip()
        raise PdfExportError(
            f"LibreOffice conversion failed (exit code {exc.returncode}): {output}"
        ) from exc

    produced = out_dir / f"{docx_path.stem}.pdf"
    if not produced.exists():
        raise PdfExportError("LibreOffice did not produce a PDF file.")
    if produced != pdf_path:
        produced.replace(pdf_path)
    return pdf_path
