"""Portfolio records whose descriptions are editor-produced rich text.

Forms and detail views pass records through ``sanitize_record`` before any
description reaches a page.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, Field

from foliosafe.engine.facade import HtmlSanitizer, get_sanitizer


class RecordKind(str, Enum):
    EXPERIENCE = "experience"
    PROJECT = "project"
    CERTIFICATION = "certification"
    AWARD = "award"
    EDUCATION = "education"


class Experience(BaseModel):
    id: Optional[int] = None
    company_name: str = Field(alias="companyName")
    role: str
    start_date: str = Field(alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    current: bool = False
    description: str = ""
    skills: list[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True}


class Project(BaseModel):
    id: Optional[int] = None
    title: str
    description: str = ""
    tech_stack: Optional[str] = Field(default=None, alias="techStack")
    github_link: Optional[str] = Field(default=None, alias="githubLink")
    live_demo_link: Optional[str] = Field(default=None, alias="liveDemoLink")

    model_config = {"populate_by_name": True}


class Certification(BaseModel):
    id: Optional[int] = None
    title: str
    description: str = ""
    month_year: str = Field(default="", alias="monthYear")
    certification_link: Optional[str] = Field(default=None, alias="certificationLink")

    model_config = {"populate_by_name": True}


class Award(BaseModel):
    id: Optional[int] = None
    award_name: str = Field(alias="awardName")
    description: str = ""
    award_company_name: str = Field(default="", alias="awardCompanyName")
    award_link: Optional[str] = Field(default=None, alias="awardLink")
    award_year: Optional[str] = Field(default=None, alias="awardYear")

    model_config = {"populate_by_name": True}


class Education(BaseModel):
    id: Optional[int] = None
    degree: str
    field: str = ""
    university: str = ""
    institute: str = ""
    location: Optional[str] = None
    start_date: str = Field(default="", alias="startDate")
    end_date: Optional[str] = Field(default=None, alias="endDate")
    current_studying: bool = Field(default=False, alias="currentStudying")
    grade: str = ""
    education_type: str = Field(default="", alias="educationType")
    description: Optional[str] = None

    model_config = {"populate_by_name": True}


RECORD_MODELS: dict[RecordKind, type[BaseModel]] = {
    RecordKind.EXPERIENCE: Experience,
    RecordKind.PROJECT: Project,
    RecordKind.CERTIFICATION: Certification,
    RecordKind.AWARD: Award,
    RecordKind.EDUCATION: Education,
}

# Fields rendered as raw markup on the detail pages
RICH_TEXT_FIELDS: dict[type[BaseModel], tuple[str, ...]] = {
    Experience: ("description",),
    Project: ("description",),
    Certification: ("description",),
    Award: ("description",),
    Education: ("description",),
}

R = TypeVar("R", bound=BaseModel)


def sanitize_record(record: R, sanitizer: Optional[HtmlSanitizer] = None) -> R:
    """Return a copy of ``record`` with every rich-text field sanitized."""
    sanitizer = sanitizer or get_sanitizer()
    updates = {}
    for field_name in RICH_TEXT_FIELDS.get(type(record), ()):
        value = getattr(record, field_name)
        if value is not None:
            updates[field_name] = sanitizer.sanitize(value)
    return record.model_copy(update=updates)


def unsafe_fields(record: BaseModel, sanitizer: Optional[HtmlSanitizer] = None) -> list[str]:
    """List the rich-text fields the safety check flags."""
    sanitizer = sanitizer or get_sanitizer()
    return [
        field_name
        for field_name in RICH_TEXT_FIELDS.get(type(record), ())
        if not sanitizer.is_safe_content(getattr(record, field_name))
    ]


def parse_records(kind: RecordKind, items: list[dict]) -> list[BaseModel]:
    """Validate raw dicts into records of the given kind."""
    model = RECORD_MODELS[kind]
    return [model.model_validate(item) for item in items]


def cleanse_json(value: Any, sanitizer: Optional[HtmlSanitizer] = None) -> Any:
    """Walk a nested dict / list and sanitize every string leaf.

    Useful for scrubbing a whole API payload at once::

        safe = cleanse_json(payload)
    """
    sanitizer = sanitizer or get_sanitizer()
    if isinstance(value, str):
        return sanitizer.sanitize(value)
    if isinstance(value, list):
        return [cleanse_json(v, sanitizer) for v in value]
    if isinstance(value, dict):
        return {k: cleanse_json(v, sanitizer) for k, v in value.items()}
    return value
