"""TOML configuration loader for pantrylens."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

from .db.scans import DEFAULT_DB_PATH
from .matcher import MIN_MATCH_SCORE

DEFAULT_CLAUDE_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"


@dataclass
class ClaudeConfig:
    api_key: str = ""
    model: str = DEFAULT_CLAUDE_MODEL


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = DEFAULT_GEMINI_MODEL


@dataclass
class TesseractConfig:
    lang: str = "eng"
    tesseract_cmd: str = ""


@dataclass
class OCRConfig:
    backend: str = "claude"
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    gemini: GeminiConfig = field(default_factory=GeminiConfig)
    tesseract: TesseractConfig = field(default_factory=TesseractConfig)


@dataclass
class LLMConfig:
    backend: str = "claude"
    max_tokens: int = 800
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    gemini: GeminiConfig = field(default_factory=GeminiConfig)


@dataclass
class MatcherConfig:
    min_score: float = MIN_MATCH_SCORE


@dataclass
class CatalogConfig:
    # empty: use the bundled catalog
    path: str = ""


@dataclass
class DatabaseConfig:
    path: str = DEFAULT_DB_PATH


@dataclass
class PantryLensConfig:
    ocr: OCRConfig = field(default_factory=OCRConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    matcher: MatcherConfig = field(default_factory=MatcherConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def _claude_config(raw: dict) -> ClaudeConfig:
    return ClaudeConfig(
        api_key=raw.get("api_key", "") or os.environ.get("ANTHROPIC_API_KEY", ""),
        model=raw.get("model", DEFAULT_CLAUDE_MODEL),
    )


def _gemini_config(raw: dict) -> GeminiConfig:
    return GeminiConfig(
        api_key=raw.get("api_key", "") or os.environ.get("GEMINI_API_KEY", ""),
        model=raw.get("model", DEFAULT_GEMINI_MODEL),
    )


def load_config(path: str | Path | None = None) -> PantryLensConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be overridden via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path).expanduser()
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    ocr = raw.get("ocr", {})
    llm = raw.get("llm", {})
    mat = raw.get("matcher", {})
    cat = raw.get("catalog", {})
    db = raw.get("database", {})

    tess = ocr.get("tesseract", {})

    return PantryLensConfig(
        ocr=OCRConfig(
            backend=ocr.get("backend", "claude"),
            claude=_claude_config(ocr.get("claude", {})),
            gemini=_gemini_config(ocr.get("gemini", {})),
            tesseract=TesseractConfig(
                lang=tess.get("lang", "eng"),
                tesseract_cmd=tess.get("tesseract_cmd", ""),
            ),
        ),
        llm=LLMConfig(
            backend=llm.get("backend", "claude"),
            max_tokens=llm.get("max_tokens", 800),
            claude=_claude_config(llm.get("claude", {})),
            gemini=_gemini_config(llm.get("gemini", {})),
        ),
        matcher=MatcherConfig(
            min_score=mat.get("min_score", MIN_MATCH_SCORE),
        ),
        catalog=CatalogConfig(
            path=cat.get("path", ""),
        ),
        database=DatabaseConfig(
            path=db.get("path", DEFAULT_DB_PATH),
        ),
    )
