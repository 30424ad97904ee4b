from __future__ import annotations

import re


# Bullet glyphs rewritten to the canonical "- " prefix. Hyphen and the en/em
# dashes only count when followed by whitespace.
_BULLET_PREFIX_RE = re.compile(r"^[•●▪◦‣∙–—-]\s+")
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_SPACE_RUN_RE = re.compile(r"\s{2,}")

BULLET_PREFIX = "- "


def normalize_line(line: str) -> str:
    s = (line or "").replace("\t", " ").strip()
    if not s:
        return ""
    if _BULLET_PREFIX_RE.match(s):
        s = BULLET_PREFIX + _BULLET_PREFIX_RE.sub("", s, count=1)
    return _SPACE_RUN_RE.sub(" ", s).strip()


def normalize_lines(raw: str | None) -> list[str]:
    """
    Turn extracted resume text into canonical lines.

    Bullets are unified to "- ", whitespace is collapsed and runs of blank
    lines are compacted to a single blank line. Blank lines are kept as ""
    because they still separate sections for a human reader.
    """
    if not raw:
        return []

    compact: list[str] = []
    blanks = 0
    for ln in _LINE_BREAK_RE.split(raw):
        s = normalize_line(ln)
        if not s:
            blanks += 1
            if blanks <= 1:
                compact.append("")
            continue
        blanks = 0
        compact.append(s)
    return compact


def is_bullet(line: str) -> bool:
    return line.startswith(BULLET_PREFIX)


def bullet_text(line: str) -> str:
    return line[len(BULLET_PREFIX):].strip()
