import logging
from datetime import datetime
from typing import Any, List, Sequence

from resume_tracker.lib.content_normalizer import coerce_text
from resume_tracker.lib.errors import IndexOutOfBounds, InvalidInput, UnknownPath
from resume_tracker.lib.models import Contact, Resume
from resume_tracker.lib.services import resume_factory
from resume_tracker.lib.services.resume_factory import (
    CONTACT_FIELDS,
    EDUCATION_FIELDS,
    PROJECT_SCALAR_FIELDS,
    SOCIAL_FIELDS,
    WORK_SCALAR_FIELDS,
)

logger = logging.getLogger(__name__)

COLLECTION_FIELDS = ("contact", "education", "work", "skills", "projects")


class ResumeFieldUpdater:
    """
    Apply ``value`` at ``path`` on a stored resume.

    Integer-looking segments index into the current fetch order of a
    collection. Whole-collection writes delete every existing child and
    recreate from the supplied array, in array order. Each ``apply`` is one
    transaction: it commits once at the end or rolls back entirely.
    """

    def __init__(self, resume: Resume, session=None):
        self.resume = resume
        self.session = session or Resume.get_session()

    def apply(self, path: Sequence[Any], value: Any) -> Resume:
        if not isinstance(path, (list, tuple)):
            raise InvalidInput("path must be an array of segments")
        path = list(path)
        try:
            self._dispatch(path, value)
            self.resume.updated_at = datetime.utcnow()
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.debug(f"Applied update to resume {self.resume.id} at path {path}")
        return self.resume

    # -- dispatch -----------------------------------------------------------

    def _dispatch(self, path: List[Any], value: Any):
        if not path:
            if not isinstance(value, dict):
                raise UnknownPath(path)
            self._apply_document(value)
            return

        head, rest = path[0], path[1:]
        if not isinstance(head, str):
            raise UnknownPath(path)
        if head in Resume.SCALAR_FIELDS and not rest:
            setattr(self.resume, Resume.SCALAR_FIELDS[head], coerce_text(value))
        elif head == "contact":
            self._apply_contact(path, rest, value)
        elif head == "education":
            self._apply_education(path, rest, value)
        elif head == "skills" and not rest:
            self._replace_skills(value)
        elif head == "work":
            self._apply_work(path, rest, value)
        elif head == "projects":
            self._apply_projects(path, rest, value)
        else:
            raise UnknownPath(path)

    def _apply_document(self, value: dict):
        # presence and non-null gate the update; "" is a legitimate value
        for key, attr in Resume.SCALAR_FIELDS.items():
            if value.get(key) is not None:
                setattr(self.resume, attr, coerce_text(value[key]))
        for key in COLLECTION_FIELDS:
            if value.get(key) is not None:
                self._dispatch([key], value[key])

    # -- helpers ------------------------------------------------------------

    @staticmethod
    def _require_list(value: Any, path: List[Any]) -> list:
        if not isinstance(value, list):
            raise InvalidInput(f"Expected an array value for path {path!r}")
        return value

    @staticmethod
    def _require_dict(value: Any, path: List[Any]) -> dict:
        if not isinstance(value, dict):
            raise InvalidInput(f"Expected an object value for path {path!r}")
        return value

    @staticmethod
    def _index(segment: Any, items: list, label: str) -> int:
        if isinstance(segment, bool) or (isinstance(segment, float) and not segment.is_integer()):
            raise InvalidInput(f"Invalid {label} index: {segment!r}")
        try:
            index = int(segment)
        except (TypeError, ValueError):
            raise InvalidInput(f"Invalid {label} index: {segment!r}")
        if index < 0:
            raise InvalidInput(f"Invalid {label} index: {segment!r}")
        if index >= len(items):
            raise IndexOutOfBounds(f"{label} index {index} out of bounds")
        return index

    def _clear(self, collection):
        collection.clear()
        self.session.flush()

    # -- contact ------------------------------------------------------------

    def _contact(self) -> Contact:
        if self.resume.contact is None:
            self.resume.contact = Contact()
        return self.resume.contact

    def _replace_social(self, contact: Contact, value: list):
        self._clear(contact.social)
        contact.social.extend(resume_factory.build_social_links(value))

    def _apply_contact(self, path, rest, value):
        if not rest:
            value = self._require_dict(value, path)
            contact = self._contact()
            for field in CONTACT_FIELDS:
                if value.get(field) is not None:
                    setattr(contact, field, coerce_text(value[field]))
            if isinstance(value.get("social"), list):
                self._replace_social(contact, value["social"])
            return

        field = rest[0]
        if field in CONTACT_FIELDS and len(rest) == 1:
            setattr(self._contact(), field, coerce_text(value))
        elif field == "social" and len(rest) == 1:
            self._replace_social(self._contact(), self._require_list(value, path))
        elif field == "social" and len(rest) == 3 and rest[2] in SOCIAL_FIELDS:
            links = self._contact().social
            link = links[self._index(rest[1], links, "social")]
            setattr(link, rest[2], coerce_text(value))
        else:
            raise UnknownPath(path)

    # -- education ----------------------------------------------------------

    def _apply_education(self, path, rest, value):
        entries = self.resume.education
        if not rest:
            value = self._require_list(value, path)
            self._clear(entries)
            entries.extend(resume_factory.build_education(e) for e in value)
            return

        entry = entries[self._index(rest[0], entries, "education")]
        if len(rest) == 1:
            value = self._require_dict(value, path)
            for key, attr in EDUCATION_FIELDS.items():
                if key in value:
                    setattr(entry, attr, coerce_text(value[key]))
        elif len(rest) == 2 and isinstance(rest[1], str) and rest[1] in EDUCATION_FIELDS:
            setattr(entry, EDUCATION_FIELDS[rest[1]], coerce_text(value))
        else:
            raise UnknownPath(path)

    # -- skills -------------------------------------------------------------

    def _replace_skills(self, value):
        value = self._require_list(value, ["skills"])
        self._clear(self.resume.skills)
        self.resume.skills.extend(resume_factory.build_skills(value))

    # -- work ---------------------------------------------------------------

    def _apply_work(self, path, rest, value):
        entries = self.resume.work
        if not rest:
            value = self._require_list(value, path)
            self._clear(entries)
            entries.extend(resume_factory.build_work(w, i) for i, w in enumerate(value))
            return

        index = self._index(rest[0], entries, "work")
        entry = entries[index]
        if len(rest) == 1:
            value = self._require_dict(value, path)
            position = entry.position
            entries.remove(entry)
            self.session.flush()
            entries.append(resume_factory.build_work(value, position))
            return

        field = rest[1] if len(rest) == 2 and isinstance(rest[1], str) else None
        if field in WORK_SCALAR_FIELDS:
            setattr(entry, WORK_SCALAR_FIELDS[field], coerce_text(value))
        elif field == "badges":
            value = self._require_list(value, path)
            self._clear(entry.badges)
            entry.badges.extend(resume_factory.build_badges(value))
        elif field == "tasks":
            value = self._require_list(value, path)
            self._clear(entry.tasks)
            entry.tasks.extend(resume_factory.build_tasks(value))
        else:
            raise UnknownPath(path)

    # -- projects -----------------------------------------------------------

    def _apply_projects(self, path, rest, value):
        entries = self.resume.projects
        if not rest:
            value = self._require_list(value, path)
            self._clear(entries)
            entries.extend(resume_factory.build_project(p, i) for i, p in enumerate(value))
            return

        entry = entries[self._index(rest[0], entries, "projects")]
        if len(rest) == 1:
            value = self._require_dict(value, path)
            position = entry.position
            entries.remove(entry)
            self.session.flush()
            entries.append(resume_factory.build_project(value, position))
            return

        field = rest[1] if len(rest) == 2 and isinstance(rest[1], str) else None
        if field in PROJECT_SCALAR_FIELDS:
            setattr(entry, PROJECT_SCALAR_FIELDS[field], coerce_text(value))
        elif field == "techStack":
            value = self._require_list(value, path)
            self._clear(entry.tech_stack)
            entry.tech_stack.extend(resume_factory.build_tech_stack(value))
        elif field == "link":
            if entry.link is not None:
                entry.link = None
                self.session.flush()
            entry.link = resume_factory.build_project_link(value)
        else:
            raise UnknownPath(path)
