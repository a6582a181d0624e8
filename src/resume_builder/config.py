"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

API_KEY_ENV = "ANTHROPIC_API_KEY"


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-sonnet-4-5-20250929"
    temperature: float = 0.6
    top_p: float | None = None  # newer Claude models reject top_p together with temperature
    max_tokens: int = 8192
    max_retries: int = 3
    timeout: int = 90

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")
        if self.top_p is not None and not 0.0 < self.top_p <= 1.0:
            raise ValueError(f"top_p must be in (0, 1], got {self.top_p}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if not 1 <= self.max_retries <= 10:
            raise ValueError(f"max_retries must be between 1 and 10, got {self.max_retries}")
        if self.timeout < 1:
            raise ValueError(f"timeout must be at least 1 second, got {self.timeout}")


@dataclass(frozen=True)
class PipelineConfig:
    jd_max_chars: int = 7000
    corpus_max_chars: int = 5000

    def __post_init__(self) -> None:
        if self.jd_max_chars < 1:
            raise ValueError(f"jd_max_chars must be positive, got {self.jd_max_chars}")
        if self.corpus_max_chars < 1:
            raise ValueError(f"corpus_max_chars must be positive, got {self.corpus_max_chars}")


@dataclass(frozen=True)
class StorageConfig:
    profiles_path: str = "profiles.json"
    output_dir: str = "./output"
    log_db_path: str = "~/.resume-builder/applications.db"

    @property
    def resolved_profiles_path(self) -> Path:
        return Path(self.profiles_path).expanduser()

    @property
    def resolved_output_dir(self) -> Path:
        return Path(self.output_dir).expanduser()

    @property
    def resolved_log_db_path(self) -> Path:
        return Path(self.log_db_path).expanduser()


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults.

    Raises ValueError when a configured value is out of range.
    """
    if path is None:
        # Look for config.yaml relative to the project root
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        pipeline=PipelineConfig(**raw.get("pipeline", {})),
        storage=StorageConfig(**raw.get("storage", {})),
    )


def get_api_key() -> str:
    """Return the API key from the environment, or an empty string."""
    return os.environ.get(API_KEY_ENV, "").strip()
