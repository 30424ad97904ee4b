import logging
from typing import Sequence

from resume_service.parsing.education import parse_education
from resume_service.parsing.experience import parse_experience
from resume_service.parsing.header import extract_header
from resume_service.parsing.normalize import normalize_lines
from resume_service.parsing.projects import parse_projects
from resume_service.parsing.sectioner import (
    DEFAULT_HEADINGS,
    HeadingTable,
    bucket_sections,
    split_header_block,
)
from resume_service.parsing.skills import join_summary, split_skills
from resume_service.parsing.text_extract import extract_text
from resume_service.schema import validate_record

logger = logging.getLogger("resume-service")


def parse(lines: Sequence[str], headings: HeadingTable = DEFAULT_HEADINGS) -> dict:
    """
    Build the resume record from normalized lines.

    Never raises on odd input: a document without recognised headings comes
    back as a header-only record with empty experience/education.
    """
    lines = list(lines)
    header = extract_header(split_header_block(lines, headings))
    sections = bucket_sections(lines, headings)
    logger.debug(
        "Section buckets: %s",
        {k: len(v) for k, v in sections.items() if v},
    )

    record: dict = {"header": header}

    summary = join_summary(sections["summary"])
    if summary:
        record["summary"] = summary

    skills = split_skills(sections["skills"])
    if skills:
        record["skills"] = skills

    record["experience"] = parse_experience(sections["experience"])
    record["education"] = parse_education(sections["education"])

    projects = parse_projects(sections["projects"])
    if projects:
        record["projects"] = projects

    return record


def parse_resume_from_text(raw_text: str, headings: HeadingTable = DEFAULT_HEADINGS) -> dict:
    return parse(normalize_lines(raw_text), headings)


def parse_document(
    data: bytes,
    file_type: str | None,
    filename: str | None = None,
    max_pages: int = 50,
) -> tuple[str, dict]:
    """Extract text from an uploaded document, parse it and validate the shape."""
    raw_text = extract_text(data, file_type, filename, max_pages=max_pages)
    parsed = parse_resume_from_text(raw_text)
    return raw_text, validate_record(parsed, strict=True)
