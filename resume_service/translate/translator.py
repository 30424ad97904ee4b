"""
Translation backends.

Every backend translates one string at a time from English into a target
language code. Emails and URLs are swapped for placeholders before the text
leaves the process and restored afterwards, so they come back byte-identical.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from groq import Groq

from resume_service.config import Settings
from resume_service.errors import TranslationError, TranslatorConfigError
from resume_service.translate.languages import DEFAULT_LANGUAGES, Language, LanguageTable
from resume_service.translate.protect import protect, unprotect

logger = logging.getLogger("resume-service")


class Translator(ABC):
    """Base class: placeholder protection around a backend call."""

    def __init__(self, languages: LanguageTable = DEFAULT_LANGUAGES):
        self.languages = languages

    def translate(self, text: str, target_language: str) -> str:
        lang = self.languages.require(target_language)
        trimmed = (text or "").strip()
        if not trimmed:
            return text

        replaced, keep = protect(trimmed)
        translated = self._translate(replaced, lang)
        return unprotect(translated, keep)

    @abstractmethod
    def _translate(self, text: str, lang: Language) -> str:
        """Send already-protected text to the backend."""


class HuggingFaceTranslator(Translator):
    """Helsinki-NLP opus-mt models behind the Hugging Face inference router."""

    def __init__(
        self,
        token: str | None,
        base_url: str = "https://router.huggingface.co/hf-inference/models",
        timeout: int = 60,
        languages: LanguageTable = DEFAULT_LANGUAGES,
    ):
        super().__init__(languages)
        if not token:
            raise TranslatorConfigError("Missing HF_TOKEN (add it to .env)")
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _translate(self, text: str, lang: Language) -> str:
        body = json.dumps({"inputs": text, "options": {"wait_for_model": True}}).encode("utf-8")
        req = Request(
            f"{self.base_url}/{lang.opus_model}",
            data=body,
            method="POST",
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json",
            },
        )
        try:
            with urlopen(req, timeout=self.timeout) as resp:
                data = json.loads(resp.read().decode("utf-8"))
        except HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")
            raise TranslationError(f"HF error {e.code}: {detail}") from e
        except URLError as e:
            raise TranslationError(f"HF request failed (network error): {e.reason}") from e
        except json.JSONDecodeError as e:
            raise TranslationError("HF returned a non-JSON response") from e

        if isinstance(data, list) and data and isinstance(data[0], dict) and data[0].get("translation_text"):
            return data[0]["translation_text"]
        if isinstance(data, str):
            return data
        logger.warning("Unexpected HF response shape for %s; keeping source text", lang.opus_model)
        return text


_GROQ_SYSTEM_PROMPT = (
    "You translate resume text from English into {language}. "
    "Return only the translation, with no quotes or explanations. "
    "Copy every token of the form [[KEEP_n]] exactly as it appears."
)


class GroqTranslator(Translator):
    """Chat-completion translation through Groq."""

    def __init__(
        self,
        api_key: str | None,
        model: str = "llama-3.3-70b-versatile",
        languages: LanguageTable = DEFAULT_LANGUAGES,
    ):
        super().__init__(languages)
        if not api_key:
            raise TranslatorConfigError("GROQ_API_KEY environment variable not set")
        self.client = Groq(api_key=api_key)
        self.model = model

    def _translate(self, text: str, lang: Language) -> str:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": _GROQ_SYSTEM_PROMPT.format(language=lang.name)},
                    {"role": "user", "content": text},
                ],
                temperature=0.1,
            )
        except Exception as e:
            raise TranslationError(f"Groq translation failed: {e}") from e
        return (response.choices[0].message.content or "").strip()


def get_translator(settings: Settings, languages: LanguageTable = DEFAULT_LANGUAGES) -> Translator:
    provider = settings.translator_provider
    if provider == "huggingface":
        return HuggingFaceTranslator(
            settings.hf_token,
            base_url=settings.hf_base_url,
            timeout=settings.hf_timeout_seconds,
            languages=languages,
        )
    if provider == "groq":
        return GroqTranslator(settings.groq_api_key, model=settings.groq_model, languages=languages)
    raise TranslatorConfigError(f"Unsupported translator provider: {provider}")
