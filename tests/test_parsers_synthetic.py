import pytest

from resume_service.errors import SchemaValidationError
from resume_service.parsing.education import parse_education
from resume_service.parsing.experience import parse_experience
from resume_service.parsing.header import extract_header
from resume_service.parsing.normalize import normalize_lines
from resume_service.parsing.pipeline import parse, parse_resume_from_text
from resume_service.parsing.projects import parse_projects
from resume_service.parsing.sectioner import DEFAULT_HEADINGS, HeadingTable, bucket_sections
from resume_service.parsing.skills import join_summary, split_skills
from resume_service.schema import validate_record


def test_section_headers_variants():
    lines = normalize_lines(
        """
        JANE DOE
        PROFESSIONAL SUMMARY:
        Strong engineer who ships.

        WORK EXPERIENCE
        Engineer - Acme
        • Built APIs

        Education:
        State University
        """
    )
    sections = bucket_sections(lines)
    assert [l for l in sections["summary"] if l] == ["Strong engineer who ships."]
    assert [l for l in sections["experience"] if l] == ["Engineer - Acme", "- Built APIs"]
    assert [l for l in sections["education"] if l] == ["State University"]
    # Heading lines themselves never land in a bucket
    assert all("WORK EXPERIENCE" not in l for v in sections.values() for l in v)


@pytest.mark.parametrize("line", ["Work Experience", "WORK EXPERIENCE", "work experience:", "  Work Experience:  "])
def test_heading_exact_match(line):
    assert DEFAULT_HEADINGS.lookup(line) == "experience"


@pytest.mark.parametrize("line", ["My Work Experience", "Experience at Acme", "- Skills", "Skills and hobbies"])
def test_heading_requires_exact_match(line):
    assert DEFAULT_HEADINGS.lookup(line) is None


def test_profile_heading_maps_to_summary():
    assert DEFAULT_HEADINGS.lookup("Profile") == "summary"
    assert DEFAULT_HEADINGS.lookup("Employment:") == "experience"


def test_heading_table_rejects_unknown_section():
    with pytest.raises(ValueError):
        HeadingTable({"awards": "awards"})


def test_heading_table_is_read_only():
    with pytest.raises(TypeError):
        DEFAULT_HEADINGS.aliases["hobbies"] = "skills"


def test_lines_before_first_heading_are_not_bucketed():
    sections = bucket_sections(["Jane Doe", "Skills", "Python"])
    assert sections["skills"] == ["Python"]
    assert all("Jane Doe" not in v for v in sections.values())


def test_header_extraction_example():
    header = extract_header(["Jane Doe", "jane@example.com | +1 415-555-0100", "https://janedoe.dev"])
    assert header["name"] == "Jane Doe"
    assert header["email"] == "jane@example.com"
    assert header["phone"] == "+1 415-555-0100"
    assert header["links"] == ["https://janedoe.dev"]


def test_header_skips_bullet_for_name_and_keeps_link_order():
    header = extract_header(
        [
            "",
            "- Open to relocation",
            "John Smith",
            "(415) 555 0100 | JOHN.SMITH@Example.ORG",
            "https://github.com/jsmith https://jsmith.dev https://github.com/jsmith",
        ]
    )
    assert header["name"] == "John Smith"
    assert header["email"] == "JOHN.SMITH@Example.ORG"
    assert header["phone"] == "(415) 555 0100"
    assert header["links"] == ["https://github.com/jsmith", "https://jsmith.dev", "https://github.com/jsmith"]


def test_header_without_contact_details():
    assert extract_header(["- only a bullet"]) == {}
    assert extract_header([]) == {}


def test_experience_parses_role_dash_company_and_dates():
    lines = normalize_lines(
        """
        Staff Engineer – Acme Corporation – Payments
        Jan 2020 - Mar 2022
        • Led migration
        • Cut p99 latency by 40%
        Data Analyst
        Example Inc
        - Built dashboards
        """
    )
    assert parse_experience(lines) == [
        {
            "company": "Acme Corporation - Payments",
            "role": "Staff Engineer",
            "startDate": "Jan 2020 - Mar 2022",
            "bullets": ["Led migration", "Cut p99 latency by 40%"],
        },
        {
            "company": "Example Inc",
            "role": "Data Analyst",
            "bullets": ["Built dashboards"],
        },
    ]


def test_experience_present_range_only_sets_start_date():
    lines = normalize_lines(
        """
        Backend Developer — JobSpring
        Feb 2019 – Present
        - Built RESTful APIs
        """
    )
    exp = parse_experience(lines)
    assert len(exp) == 1
    assert exp[0]["role"] == "Backend Developer"
    assert exp[0]["company"] == "JobSpring"
    assert exp[0]["startDate"] == "Feb 2019 – Present"
    assert "endDate" not in exp[0]


def test_experience_plain_lines_fill_role_then_company():
    exp = parse_experience(["Acme Corp", "Platform Engineer", "Remote", "- Built things"])
    assert exp == [{"company": "Platform Engineer", "role": "Acme Corp", "bullets": ["Built things"]}]


def test_experience_dash_line_does_not_overwrite_role():
    exp = parse_experience(["Acme Corp", "Engineer - Payments Team"])
    assert exp == [{"company": "Payments Team", "role": "Acme Corp", "bullets": []}]


def test_experience_blank_bucket_is_empty():
    assert parse_experience(["", ""]) == []
    assert parse_resume_from_text("Jane\nExperience\n\n\n")["experience"] == []


def test_experience_bullets_before_any_header_line():
    assert parse_experience(["- Orphan bullet"]) == [{"bullets": ["Orphan bullet"]}]


def test_bullet_symbol_is_stripped_from_bullet_text():
    lines = normalize_lines("Experience\nEngineer\n• Built a cache layer")
    assert lines[-1] == "- Built a cache layer"
    record = parse(lines)
    assert record["experience"][0]["bullets"] == ["Built a cache layer"]


def test_education_groups_school_program_and_bullets():
    lines = normalize_lines(
        """
        MIT
        BS Computer Science
        • GPA 3.9
        Stanford University
        MS Statistics
        """
    )
    assert parse_education(lines) == [
        {"school": "MIT", "program": "BS Computer Science", "bullets": ["GPA 3.9"]},
        {"school": "Stanford University", "program": "MS Statistics"},
    ]


def test_education_entry_stays_open_until_program_is_known():
    lines = ["Example University", "- Dean's list", "Bachelor of Arts"]
    assert parse_education(lines) == [
        {"school": "Example University", "program": "Bachelor of Arts", "bullets": ["Dean's list"]}
    ]
    # Same lines through the experience rules split into two entries
    assert len(parse_experience(lines)) == 2


def test_projects_every_plain_line_starts_a_project():
    lines = normalize_lines(
        """
        resume-parser
        - Built a heading-driven parser
        - Added translation
        Cache Layer
        Another Project
        - Bullet
        """
    )
    assert parse_projects(lines) == [
        {"name": "resume-parser", "bullets": ["Built a heading-driven parser", "Added translation"]},
        {"name": "Cache Layer", "bullets": []},
        {"name": "Another Project", "bullets": ["Bullet"]},
    ]


def test_skills_split_on_commas_pipes_and_bullets():
    assert split_skills(["- Python, Go | Rust • SQL"]) == ["Python", "Go", "Rust", "SQL"]
    assert split_skills(["Python,, Go", ""]) == ["Python", "Go"]
    assert split_skills(["Python, Python"]) == ["Python", "Python"]
    assert split_skills(["", ""]) == []


def test_summary_joins_lines_with_single_spaces():
    assert join_summary(["Strong engineer", "", "who ships."]) == "Strong engineer who ships."
    assert join_summary(["", ""]) is None


def test_end_to_end_scenario():
    text = (
        "Jane Doe\n"
        "jane@example.com\n"
        "\n"
        "Experience\n"
        "Senior Engineer - Acme Corp\n"
        "- Led migration of billing system\n"
        "- Mentored 4 engineers\n"
        "\n"
        "Education\n"
        "MIT\n"
        "BS Computer Science\n"
    )
    record = parse_resume_from_text(text)
    assert record == {
        "header": {"name": "Jane Doe", "email": "jane@example.com"},
        "experience": [
            {
                "role": "Senior Engineer",
                "company": "Acme Corp",
                "bullets": ["Led migration of billing system", "Mentored 4 engineers"],
            }
        ],
        "education": [{"school": "MIT", "program": "BS Computer Science"}],
    }


def test_full_resume_sections():
    record = parse_resume_from_text(
        """
        Jane Doe
        Berlin | jane@example.com | https://janedoe.dev

        Summary
        Backend engineer focused on payments.
        Enjoys mentoring.

        Skills:
        Python, Go, PostgreSQL

        Projects
        Ledger
        - Double-entry bookkeeping service
        """
    )
    assert record["header"]["links"] == ["https://janedoe.dev"]
    assert record["summary"] == "Backend engineer focused on payments. Enjoys mentoring."
    assert record["skills"] == ["Python", "Go", "PostgreSQL"]
    assert record["projects"] == [{"name": "Ledger", "bullets": ["Double-entry bookkeeping service"]}]
    assert record["experience"] == []
    assert record["education"] == []


def test_headingless_input_is_all_header():
    record = parse_resume_from_text("Just some text\nreach me at me@example.com")
    assert record == {
        "header": {"name": "Just some text", "email": "me@example.com"},
        "experience": [],
        "education": [],
    }


def test_empty_input_degrades_to_empty_record():
    assert parse([]) == {"header": {}, "experience": [], "education": []}


def test_custom_heading_table():
    table = HeadingTable({"berufserfahrung": "experience"})
    record = parse(["Max Mustermann", "Berufserfahrung", "Entwickler - Firma", "Experience"], headings=table)
    assert record["header"] == {"name": "Max Mustermann"}
    # "Experience" is not a heading in this table, so it becomes the next line of the entry
    assert record["experience"] == [{"company": "Firma", "role": "Entwickler", "bullets": []}]


def test_validate_record_unknown_keys():
    record = {"header": {"name": "Jane", "pronouns": "she"}, "experience": [{"id": "x1"}], "education": []}
    assert validate_record(record) == {"header": {"name": "Jane"}, "experience": [{"bullets": []}], "education": []}
    with pytest.raises(SchemaValidationError):
        validate_record(record, strict=True)
    assert validate_record(parse_resume_from_text("Jane Doe\nSkills\nPython"), strict=True)["skills"] == ["Python"]
