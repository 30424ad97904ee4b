from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from resume_service.errors import UnsupportedLanguageError


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    opus_model: str


class LanguageTable:
    """Read-only set of target languages, keyed by ISO 639-1 code."""

    def __init__(self, languages: Iterable[Language]):
        self._by_code: Mapping[str, Language] = MappingProxyType({l.code: l for l in languages})

    @property
    def codes(self) -> list[str]:
        return list(self._by_code)

    def get(self, code: str | None) -> Language | None:
        return self._by_code.get((code or "").strip().lower())

    def require(self, code: str | None) -> Language:
        lang = self.get(code)
        if lang is None:
            raise UnsupportedLanguageError(
                f"Unsupported language: {code}. Use one of: {', '.join(self.codes)}"
            )
        return lang

    def __contains__(self, code) -> bool:
        return self.get(code) is not None


def _opus(code: str, name: str) -> Language:
    return Language(code=code, name=name, opus_model=f"Helsinki-NLP/opus-mt-en-{code}")


DEFAULT_LANGUAGES = LanguageTable(
    [
        _opus("fr", "French"),
        _opus("es", "Spanish"),
        _opus("de", "German"),
        _opus("it", "Italian"),
        _opus("pt", "Portuguese"),
        _opus("ar", "Arabic"),
        _opus("hi", "Hindi"),
        _opus("ru", "Russian"),
        _opus("zh", "Chinese"),
    ]
)
