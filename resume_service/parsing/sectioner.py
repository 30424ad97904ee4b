from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

SECTION_KEYS = ("summary", "skills", "experience", "education", "projects")

# Map heading text (lower-cased, colons removed) to the standard section name
SECTION_MAPPING = {
    "experience": "experience",
    "work experience": "experience",
    "professional experience": "experience",
    "employment": "experience",
    "employment history": "experience",
    "work history": "experience",
    "education": "education",
    "academic background": "education",
    "skills": "skills",
    "technical skills": "skills",
    "core skills": "skills",
    "projects": "projects",
    "personal projects": "projects",
    "summary": "summary",
    "professional summary": "summary",
    "profile": "summary",
    "about me": "summary",
}


@dataclass(frozen=True)
class HeadingTable:
    """
    Immutable alias -> section lookup used to recognise headings.

    Matching is exact on the lower-cased, colon-stripped, trimmed line, so
    "Work Experience:" is a heading and "My Work Experience" is not.
    """

    aliases: Mapping[str, str]

    def __post_init__(self):
        cleaned = {}
        for alias, section in dict(self.aliases).items():
            if section not in SECTION_KEYS:
                raise ValueError(f"Unknown section {section!r} for heading alias {alias!r}")
            cleaned[_heading_key(alias)] = section
        object.__setattr__(self, "aliases", MappingProxyType(cleaned))

    def lookup(self, line: str) -> str | None:
        return self.aliases.get(_heading_key(line))

    def is_heading(self, line: str) -> bool:
        return self.lookup(line) is not None


def _heading_key(line: str) -> str:
    return (line or "").lower().replace(":", "").strip()


DEFAULT_HEADINGS = HeadingTable(SECTION_MAPPING)


def split_header_block(lines: Sequence[str], headings: HeadingTable = DEFAULT_HEADINGS) -> list[str]:
    """Lines before the first heading (all of them if there is none)."""
    header: list[str] = []
    for line in lines:
        if headings.is_heading(line):
            break
        header.append(line)
    return header


def bucket_sections(lines: Sequence[str], headings: HeadingTable = DEFAULT_HEADINGS) -> dict[str, list[str]]:
    sections: dict[str, list[str]] = {k: [] for k in SECTION_KEYS}
    current: str | None = None

    for line in lines:
        mapped = headings.lookup(line)
        if mapped:
            current = mapped
            continue
        # Anything before the first heading belongs to the header block
        if current is None:
            continue
        sections[current].append(line)

    return sections
