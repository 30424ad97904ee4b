"""
Entry segmentation for list-like resume sections.

Experience, education and projects share the same line-shape state machine:
blank lines are ignored, "- " lines are bullets of the current entry and any
other line is header text for an entry. The sections differ only in when a
header line starts a *new* entry and how header text is assigned to fields;
both are supplied by an EntryPolicy.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Sequence

from resume_service.parsing.normalize import bullet_text, is_bullet


class SegmentState(enum.Enum):
    AWAITING_ENTRY = "awaiting_entry"
    COLLECTING_HEADER_FIELDS = "collecting_header_fields"
    COLLECTING_BULLETS = "collecting_bullets"


class EntryPolicy(ABC):
    """Per-section rules plugged into the Segmenter."""

    #: Output key order; keys whose value is None are left out.
    fields: tuple[str, ...] = ()
    #: An entry with none of these set and no bullets is dropped.
    identity_fields: tuple[str, ...] = ()

    def new_entry(self) -> dict:
        return {}

    @abstractmethod
    def starts_new_entry(self, state: SegmentState, entry: dict) -> bool:
        """Boundary predicate for a header line arriving while `entry` is open."""

    @abstractmethod
    def assign(self, entry: dict, line: str) -> None:
        """Store header text from `line` on the entry."""

    def add_bullet(self, entry: dict, text: str) -> None:
        entry.setdefault("bullets", []).append(text)

    def is_empty(self, entry: dict) -> bool:
        return not entry.get("bullets") and not any(entry.get(f) for f in self.identity_fields)

    def finalize(self, entry: dict) -> dict:
        return {f: entry[f] for f in self.fields if entry.get(f) is not None}


class Segmenter:
    def __init__(self, policy: EntryPolicy):
        self.policy = policy

    def segment(self, lines: Sequence[str]) -> list[dict]:
        entries: list[dict] = []
        current: dict | None = None
        state = SegmentState.AWAITING_ENTRY

        for line in lines:
            if not line:
                continue

            if is_bullet(line):
                if current is None:
                    current = self._open(entries)
                self.policy.add_bullet(current, bullet_text(line))
                state = SegmentState.COLLECTING_BULLETS
                continue

            if current is None or self.policy.starts_new_entry(state, current):
                current = self._open(entries)
            self.policy.assign(current, line.strip())
            state = SegmentState.COLLECTING_HEADER_FIELDS

        return [self.policy.finalize(e) for e in entries if not self.policy.is_empty(e)]

    def _open(self, entries: list[dict]) -> dict:
        entry = self.policy.new_entry()
        entries.append(entry)
        return entry
