import hashlib
import json
import sys

from resume_service.parsing.normalize import normalize_lines
from resume_service.parsing.pipeline import parse
from resume_service.parsing.sectioner import bucket_sections
from resume_service.parsing.text_extract import extract_text


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: python scripts/debug_parse_local.py <resume.txt|.docx|.pdf>", file=sys.stderr)
        sys.exit(2)
    path = sys.argv[1]
    with open(path, "rb") as f:
        data = f.read()

    raw = extract_text(data, None, path)
    lines = normalize_lines(raw)
    sections = bucket_sections(lines)
    record = parse(lines)

    out = {
        "file": path,
        "sha256": hashlib.sha256(data).hexdigest(),
        "lineCount": len(lines),
        "sectionsFound": [k for k, v in sections.items() if any(v)],
        "sectionLineCounts": {k: len(v) for k, v in sections.items()},
        "nonAsciiChars": sorted({f"U+{ord(ch):04X} {ch!r}" for ch in raw if ord(ch) > 127})[:30],
        "parsed": record,
    }
    # Windows consoles can choke on bullet glyphs; always write UTF-8
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    print(json.dumps(out, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
