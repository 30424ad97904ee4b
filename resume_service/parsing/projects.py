from typing import Sequence

from resume_service.parsing.segmenter import EntryPolicy, Segmenter, SegmentState


class ProjectsPolicy(EntryPolicy):
    fields = ("name", "bullets")
    identity_fields = ("name",)

    def new_entry(self) -> dict:
        return {"bullets": []}

    def starts_new_entry(self, state: SegmentState, entry: dict) -> bool:
        # Every non-bullet line names a new project
        return True

    def assign(self, entry: dict, line: str) -> None:
        entry["name"] = line


def parse_projects(lines: Sequence[str]) -> list[dict]:
    return Segmenter(ProjectsPolicy()).segment(lines)
