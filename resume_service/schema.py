"""
Shape contract for the structured resume record.

Client-supplied records (the translate payload) are validated leniently:
unknown keys are dropped. Parser output is validated strictly, since the
parser always produces a conforming (possibly sparse) record and any extra or
malformed key there is an implementation bug, not bad input.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from resume_service.errors import SchemaValidationError

_FORBID = ConfigDict(extra="forbid")


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ResumeHeader(_Lenient):
    name: str | None = None
    title: str | None = None
    location: str | None = None
    email: str | None = None
    phone: str | None = None
    links: list[str] | None = None


class ExperienceEntry(_Lenient):
    company: str | None = None
    role: str | None = None
    location: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    bullets: list[str] = Field(default_factory=list)


class EducationEntry(_Lenient):
    school: str | None = None
    program: str | None = None
    location: str | None = None
    startDate: str | None = None
    endDate: str | None = None
    bullets: list[str] | None = None


class ProjectEntry(_Lenient):
    name: str | None = None
    bullets: list[str] = Field(default_factory=list)


class ResumeRecord(_Lenient):
    header: ResumeHeader
    summary: str | None = None
    skills: list[str] | None = None
    experience: list[ExperienceEntry]
    education: list[EducationEntry]
    projects: list[ProjectEntry] | None = None


# Same fields, unknown keys rejected at every level
class _StrictHeader(ResumeHeader):
    model_config = _FORBID


class _StrictExperienceEntry(ExperienceEntry):
    model_config = _FORBID


class _StrictEducationEntry(EducationEntry):
    model_config = _FORBID


class _StrictProjectEntry(ProjectEntry):
    model_config = _FORBID


class _StrictResumeRecord(ResumeRecord):
    model_config = _FORBID

    header: _StrictHeader
    experience: list[_StrictExperienceEntry]
    education: list[_StrictEducationEntry]
    projects: list[_StrictProjectEntry] | None = None


def validate_record(data: dict, strict: bool = False) -> dict:
    """
    Check `data` against ResumeRecord and return its JSON-shaped dump.

    With strict=True unknown keys are an error; otherwise they are dropped.
    """
    model = _StrictResumeRecord if strict else ResumeRecord
    try:
        record = model.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(f"Resume record does not match the expected shape: {e}") from e
    return record.model_dump(exclude_none=True)
