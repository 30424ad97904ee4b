import re
from typing import Sequence

from resume_service.parsing.normalize import is_bullet

EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)
PHONE_RE = re.compile(r"(\+?\d{1,2}\s*)?(\(?\d{3}\)?[\s.-]?\d{3}[\s.-]?\d{4})")
LINK_RE = re.compile(r"https?://\S+")


def extract_header(header_lines: Sequence[str]) -> dict:
    """
    Contact details from the lines above the first section heading.
    Returns only the keys that were found (name, email, phone, links).
    """
    text = " | ".join(l for l in header_lines if l)

    header: dict = {}

    # Name heuristic: first non-empty line that is not a bullet
    name = next((l for l in header_lines if l and not is_bullet(l)), None)
    if name:
        header["name"] = name

    email_match = EMAIL_RE.search(text)
    if email_match:
        header["email"] = email_match.group(0)

    phone_match = PHONE_RE.search(text)
    if phone_match:
        header["phone"] = phone_match.group(0)

    links = LINK_RE.findall(text)
    if links:
        header["links"] = links

    return header
