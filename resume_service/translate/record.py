"""
Field-wise translation of a resume record.

The record is deep-copied, every translatable string leaf is listed as a
(path, value) pair, and each leaf is translated in its own task. Structure
(keys, list lengths, dates, contact details) is never touched.
"""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any

from resume_service.errors import TranslationError
from resume_service.translate.translator import Translator

logger = logging.getLogger("resume-service")

Path = tuple[Any, ...]

# Per-section string fields that carry prose. Email, phone, links and dates are left as-is.
TRANSLATABLE_FIELDS = {
    "header": ("name", "title", "location"),
    "experience": ("company", "role", "location"),
    "education": ("school", "program", "location"),
    "projects": ("name",),
}


def extract_leaves(record: dict) -> list[tuple[Path, str]]:
    leaves: list[tuple[Path, str]] = []

    header = record.get("header") or {}
    for field in TRANSLATABLE_FIELDS["header"]:
        if isinstance(header.get(field), str):
            leaves.append((("header", field), header[field]))

    if isinstance(record.get("summary"), str):
        leaves.append((("summary",), record["summary"]))

    for i, skill in enumerate(record.get("skills") or []):
        if isinstance(skill, str):
            leaves.append((("skills", i), skill))

    for section in ("experience", "education", "projects"):
        for i, entry in enumerate(record.get(section) or []):
            for field in TRANSLATABLE_FIELDS[section]:
                if isinstance(entry.get(field), str):
                    leaves.append(((section, i, field), entry[field]))
            for j, bullet in enumerate(entry.get("bullets") or []):
                if isinstance(bullet, str):
                    leaves.append(((section, i, "bullets", j), bullet))

    return leaves


def _set_path(target: Any, path: Path, value: str) -> None:
    for key in path[:-1]:
        target = target[key]
    target[path[-1]] = value


async def translate_record(
    record: dict,
    target_language: str,
    translator: Translator,
    max_concurrency: int | None = None,
) -> dict:
    """
    Return a translated copy of `record`; the input is not modified.

    All leaf calls run to completion. If any of them failed, the first failure
    in record order is raised and no partial translation is returned.
    """
    translator.languages.require(target_language)

    out = copy.deepcopy(record)
    leaves = extract_leaves(out)
    semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None

    async def _translate_leaf(value: str) -> str:
        if semaphore is None:
            return await asyncio.to_thread(translator.translate, value, target_language)
        async with semaphore:
            return await asyncio.to_thread(translator.translate, value, target_language)

    results = await asyncio.gather(
        *(_translate_leaf(value) for _path, value in leaves),
        return_exceptions=True,
    )

    failures = [r for r in results if isinstance(r, BaseException)]
    if failures:
        logger.warning("Translation to %s failed for %d of %d fields", target_language, len(failures), len(leaves))
        first = failures[0]
        if isinstance(first, TranslationError):
            raise first
        raise TranslationError(f"Translate failed: {first}") from first

    for (path, _value), translated in zip(leaves, results):
        _set_path(out, path, translated)
    return out
