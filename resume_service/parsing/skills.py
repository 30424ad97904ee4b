import re
from typing import Sequence

from resume_service.parsing.normalize import BULLET_PREFIX

# Newlines are deliberately not separators here
_SKILL_SEPARATOR_RE = re.compile(r"[,|•]\s*")


def split_skills(lines: Sequence[str]) -> list[str]:
    """Skills in the order written, split on commas, pipes and bullet dots."""
    skills: list[str] = []
    for cand in _SKILL_SEPARATOR_RE.split("\n".join(lines)):
        if cand.startswith(BULLET_PREFIX):
            cand = cand[len(BULLET_PREFIX):]
        cand = cand.strip()
        if cand:
            skills.append(cand)
    return skills


def join_summary(lines: Sequence[str]) -> str | None:
    summary = " ".join(l for l in lines if l).strip()
    return summary or None
