from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from resume_tracker.lib.content_normalizer import (
    coerce_text,
    normalize_descriptions,
    normalize_names,
)


def _coerce_optional_text(v: Any) -> Optional[str]:
    text = coerce_text(v)
    return text if text is None else text.strip()


def _dict_items(v: Any) -> Optional[list]:
    # Lenient: a non-list section is treated as absent, non-object entries are dropped
    if not isinstance(v, list):
        return None
    return [item for item in v if isinstance(item, dict)]


class NamedEntity(BaseModel):
    name: str


class DescribedEntity(BaseModel):
    description: str


class RefinedLink(BaseModel):
    label: Optional[str] = None
    href: Optional[str] = None

    @field_validator("label", "href", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_optional_text(v)


class RefinedEducation(BaseModel):
    school: Optional[str] = None
    degree: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None

    @field_validator("school", "degree", "start", "end", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_optional_text(v)

    @property
    def is_complete(self) -> bool:
        return bool(self.school and self.degree)


class RefinedWork(BaseModel):
    company: Optional[str] = None
    link: Optional[str] = None
    title: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    description: Optional[str] = None
    badges: List[NamedEntity] = Field(default_factory=list)
    tasks: List[DescribedEntity] = Field(default_factory=list)

    @field_validator("company", "link", "title", "start", "end", "description", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_optional_text(v)

    @field_validator("badges", mode="before")
    @classmethod
    def normalize_badges(cls, v):
        return normalize_names(v)

    @field_validator("tasks", mode="before")
    @classmethod
    def normalize_tasks(cls, v):
        return normalize_descriptions(v)


class RefinedProject(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    description: Optional[str] = None
    tech_stack: List[NamedEntity] = Field(default_factory=list, alias="techStack")
    link: Optional[RefinedLink] = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_optional_text(v)

    @field_validator("tech_stack", mode="before")
    @classmethod
    def normalize_tech_stack(cls, v):
        return normalize_names(v)

    @field_validator("link", mode="before")
    @classmethod
    def coerce_link(cls, v):
        return v if isinstance(v, dict) else None


class RefinedResume(BaseModel):
    """
    Candidate resume fragment returned by the model.

    Every section is optional; a section the model got structurally wrong is
    dropped rather than failing validation, and every badge, skill, tech tag
    and task is normalized to its canonical shape.
    """

    name: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    summary: Optional[str] = None
    education: Optional[List[RefinedEducation]] = None
    work: Optional[List[RefinedWork]] = None
    skills: Optional[List[NamedEntity]] = None
    projects: Optional[List[RefinedProject]] = None

    @field_validator("name", "title", "location", "summary", mode="before")
    @classmethod
    def coerce_text_fields(cls, v):
        return _coerce_optional_text(v)

    @field_validator("education", "work", "projects", mode="before")
    @classmethod
    def keep_object_entries(cls, v):
        return _dict_items(v)

    @field_validator("skills", mode="before")
    @classmethod
    def normalize_skills(cls, v):
        return normalize_names(v) if v is not None else None

    def to_payload(self) -> Dict[str, Any]:
        """Wire shape: camelCase keys, absent sections omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)
