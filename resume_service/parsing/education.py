from typing import Sequence

from resume_service.parsing.segmenter import EntryPolicy, Segmenter, SegmentState


class EducationPolicy(EntryPolicy):
    """School on the first header line, program on the second."""

    fields = ("school", "program", "location", "startDate", "endDate", "bullets")
    identity_fields = ("school", "program")

    def starts_new_entry(self, state: SegmentState, entry: dict) -> bool:
        return bool(entry.get("school") and entry.get("program"))

    def assign(self, entry: dict, line: str) -> None:
        if not entry.get("school"):
            entry["school"] = line
        elif not entry.get("program"):
            entry["program"] = line


def parse_education(lines: Sequence[str]) -> list[dict]:
    return Segmenter(EducationPolicy()).segment(lines)
