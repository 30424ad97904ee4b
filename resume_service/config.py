"""
Runtime settings for the resume service.

Everything is read from the environment; a local .env file is loaded first
so developers can keep HF_TOKEN / GROQ_API_KEY / AWS settings out of the shell.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_int(name: str, default: int | None) -> int | None:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_response: bool = True
    raw_preview_chars: int = 800
    max_pdf_pages: int = 50
    translator_provider: str = "huggingface"
    hf_token: str | None = None
    hf_base_url: str = "https://router.huggingface.co/hf-inference/models"
    hf_timeout_seconds: int = 60
    groq_api_key: str | None = None
    groq_model: str = "llama-3.3-70b-versatile"
    translate_max_concurrency: int | None = None


def load_settings() -> Settings:
    return Settings(
        log_level=os.getenv("RESUME_PARSER_LOG_LEVEL", "INFO").upper(),
        log_response=_env_flag("RESUME_PARSER_LOG_RESPONSE", "true"),
        raw_preview_chars=_env_int("RESUME_PARSER_RAW_PREVIEW_CHARS", 800),
        max_pdf_pages=_env_int("RESUME_PARSER_MAX_PAGES", 50),
        translator_provider=os.getenv("RESUME_TRANSLATOR_PROVIDER", "huggingface").strip().lower(),
        hf_token=os.getenv("HF_TOKEN") or None,
        hf_base_url=os.getenv("HF_INFERENCE_BASE_URL", Settings.hf_base_url).rstrip("/"),
        hf_timeout_seconds=_env_int("HF_TIMEOUT_SECONDS", 60),
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        groq_model=os.getenv("GROQ_TRANSLATE_MODEL", Settings.groq_model),
        translate_max_concurrency=_env_int("RESUME_TRANSLATE_MAX_CONCURRENCY", None),
    )
