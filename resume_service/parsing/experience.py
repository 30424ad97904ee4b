import re
from typing import Sequence

from resume_service.parsing.segmenter import EntryPolicy, Segmenter, SegmentState

# "Role - Company" with a hyphen, en dash or em dash between single spaces
DASH_SPLIT_RE = re.compile(r"\s[–—-]\s")
DATE_RANGE_RE = re.compile(
    r"((Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)\w*|\d{4}).{0,15}(Present|\d{4})",
    re.IGNORECASE,
)


class ExperiencePolicy(EntryPolicy):
    fields = ("company", "role", "location", "startDate", "endDate", "bullets")
    identity_fields = ("company", "role")

    def new_entry(self) -> dict:
        return {"bullets": []}

    def starts_new_entry(self, state: SegmentState, entry: dict) -> bool:
        # Once bullets have started, the next header line belongs to the next job
        return bool(entry["bullets"])

    def assign(self, entry: dict, line: str) -> None:
        parts = DASH_SPLIT_RE.split(line)
        if len(parts) >= 2:
            role = parts[0].strip()
            company = " - ".join(parts[1:]).strip()
            if role and not entry.get("role"):
                entry["role"] = role
            if company and not entry.get("company"):
                entry["company"] = company
        elif not entry.get("role"):
            entry["role"] = line
        elif not entry.get("company"):
            entry["company"] = line

        # NOTE: only the start of the span is recorded; endDate stays empty.
        if not entry.get("startDate"):
            m = DATE_RANGE_RE.search(line)
            if m:
                entry["startDate"] = m.group(0)


def parse_experience(lines: Sequence[str]) -> list[dict]:
    return Segmenter(ExperiencePolicy()).segment(lines)
