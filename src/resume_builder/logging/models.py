"""Application log data models."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ApplicationLogEntry(BaseModel):
    """One generated resume submitted (or attempted) for a job posting."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=datetime.now)
    company: str = ""
    role: str = ""
    job_url: str = ""
    job_description: str = ""
    resume_path: str = ""
    profile_name: str = ""
    repaired: bool = False
    input_tokens: int = 0
    output_tokens: int = 0
    success: bool = True
    error_message: str | None = None
