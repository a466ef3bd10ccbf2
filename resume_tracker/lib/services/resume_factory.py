"""Build ORM children from JSON fragments.

Shared by the field updater, duplication, seeding and the refinement
applier so every write path creates entities the same way.
"""
from typing import Any, List, Optional

from resume_tracker.lib.content_normalizer import (
    coerce_text,
    normalize_descriptions,
    normalize_names,
)
from resume_tracker.lib.models import (
    Contact,
    Education,
    Project,
    ProjectLink,
    ProjectTech,
    Resume,
    Skill,
    SocialLink,
    Work,
    WorkBadge,
    WorkTask,
)

DEFAULT_LINK_LABEL = "Project Link"
DEFAULT_LINK_HREF = "#"

EDUCATION_FIELDS = {"school": "school", "degree": "degree", "start": "start_date", "end": "end_date"}
WORK_SCALAR_FIELDS = {
    "company": "company",
    "link": "link",
    "title": "title",
    "start": "start_date",
    "end": "end_date",
    "description": "description",
}
PROJECT_SCALAR_FIELDS = {"title": "title", "description": "description"}
SOCIAL_FIELDS = ("name", "url")
CONTACT_FIELDS = ("email", "tel")


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def build_social_links(entries: Any) -> List[SocialLink]:
    links = []
    for entry in _as_list(entries):
        entry = _as_dict(entry)
        links.append(SocialLink(name=coerce_text(entry.get("name")), url=coerce_text(entry.get("url"))))
    return links


def build_contact(data: Any) -> Optional[Contact]:
    if not isinstance(data, dict):
        return None
    contact = Contact(email=coerce_text(data.get("email")), tel=coerce_text(data.get("tel")))
    if isinstance(data.get("social"), list):
        contact.social = build_social_links(data["social"])
    return contact


def build_education(entry: Any) -> Education:
    entry = _as_dict(entry)
    return Education(
        **{attr: coerce_text(entry.get(key)) for key, attr in EDUCATION_FIELDS.items()}
    )


def build_badges(values: Any) -> List[WorkBadge]:
    return [WorkBadge(name=badge["name"]) for badge in normalize_names(values)]


def build_tasks(values: Any) -> List[WorkTask]:
    return [WorkTask(description=task["description"]) for task in normalize_descriptions(values)]


def build_work(entry: Any, position: int = 0) -> Work:
    entry = _as_dict(entry)
    work = Work(
        position=position,
        **{attr: coerce_text(entry.get(key)) for key, attr in WORK_SCALAR_FIELDS.items()},
    )
    work.badges = build_badges(entry.get("badges"))
    work.tasks = build_tasks(entry.get("tasks"))
    return work


def build_skills(values: Any) -> List[Skill]:
    return [Skill(name=skill["name"]) for skill in normalize_names(values)]


def build_tech_stack(values: Any) -> List[ProjectTech]:
    return [ProjectTech(name=tech["name"]) for tech in normalize_names(values)]


def build_project_link(value: Any) -> Optional[ProjectLink]:
    """A link is only created when it has a label or an href."""
    value = _as_dict(value)
    label = coerce_text(value.get("label"))
    href = coerce_text(value.get("href"))
    if not label and not href:
        return None
    return ProjectLink(label=label or DEFAULT_LINK_LABEL, href=href or DEFAULT_LINK_HREF)


def build_project(entry: Any, position: int = 0) -> Project:
    entry = _as_dict(entry)
    project = Project(
        position=position,
        **{attr: coerce_text(entry.get(key)) for key, attr in PROJECT_SCALAR_FIELDS.items()},
    )
    project.tech_stack = build_tech_stack(entry.get("techStack"))
    project.link = build_project_link(entry.get("link"))
    return project


def build_resume(data: dict, user_id=None) -> Resume:
    """Deep-build a resume (with fresh identifiers) from a snapshot-shaped dict."""
    data = _as_dict(data)
    resume = Resume(
        user_id=user_id,
        **{attr: coerce_text(data.get(key)) for key, attr in Resume.SCALAR_FIELDS.items()},
    )
    resume.contact = build_contact(data.get("contact"))
    resume.education = [build_education(e) for e in _as_list(data.get("education"))]
    resume.work = [build_work(w, i) for i, w in enumerate(_as_list(data.get("work")))]
    resume.skills = build_skills(data.get("skills"))
    resume.projects = [build_project(p, i) for i, p in enumerate(_as_list(data.get("projects")))]
    return resume
