import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from resume_tracker.lib.errors import InvalidInput
from resume_tracker.lib.models import AiRefinement, JobApplication, Resume
from resume_tracker.lib.refinement.schemas import RefinedResume
from resume_tracker.lib.services.resume_factory import build_resume

logger = logging.getLogger(__name__)

REFINED_SUFFIX = " (AI Refined)"


class RefinementApplier:
    """
    Commit a refinement as a brand new resume.

    The original resume is never mutated. The new resume is built from the
    refinements merged over the original's snapshot, the job application is
    repointed to it, and the raw refinements are kept in an audit row.
    """

    def __init__(self, session=None):
        self.session = session or Resume.get_session()

    def merge(self, original: dict, refined: RefinedResume) -> dict:
        """Snapshot-shaped dict for the new resume."""
        merged = {key: original.get(key) for key in Resume.SCALAR_FIELDS}
        base_title = refined.title or original.get("title") or original.get("name") or ""
        merged["title"] = f"{base_title}{REFINED_SUFFIX}"
        for key in ("name", "location", "summary"):
            value = getattr(refined, key)
            if value:
                merged[key] = value
        merged["contact"] = original.get("contact")
        merged["education"] = self._education(original, refined)
        merged["work"] = self._work(original, refined)
        merged["skills"] = (
            [s.model_dump() for s in refined.skills]
            if refined.skills is not None
            else original.get("skills") or []
        )
        merged["projects"] = self._projects(original, refined)
        return merged

    @staticmethod
    def _education(original: dict, refined: RefinedResume) -> List[dict]:
        entries = [e.model_dump() for e in refined.education or [] if e.is_complete]
        if entries:
            return entries
        if refined.education:
            logger.info("No usable refined education entries; keeping the original ones")
        return original.get("education") or []

    @staticmethod
    def _work(original: dict, refined: RefinedResume) -> List[dict]:
        if refined.work is None:
            return original.get("work") or []
        entries = []
        for work in refined.work:
            if not work.company or not work.title:
                logger.info(f"Skipping refined work entry without company or title: {work!r}")
                continue
            entry = work.model_dump()
            if not entry["description"]:
                entry["description"] = f"{work.title} at {work.company}"
            if not entry["badges"]:
                entry["badges"] = [{"name": work.title.split()[0]}]
            entries.append(entry)
        return entries

    @staticmethod
    def _projects(original: dict, refined: RefinedResume) -> List[dict]:
        if refined.projects is None:
            return original.get("projects") or []
        entries = []
        for project in refined.projects:
            if not project.title:
                logger.info("Skipping refined project without a title")
                continue
            entry = project.model_dump(by_alias=True)
            if not entry["description"]:
                entry["description"] = f"Project: {project.title}"
            entries.append(entry)
        return entries

    def apply(
        self, resume: Resume, job_application: JobApplication, refinements: Any
    ) -> Resume:
        if not isinstance(refinements, dict):
            raise InvalidInput("refinements must be an object")
        try:
            refined = RefinedResume.model_validate(refinements)
        except ValidationError as e:
            raise InvalidInput(f"Invalid refinements: {e}") from e

        new_resume = build_resume(self.merge(resume.to_snapshot(), refined), user_id=resume.user_id)
        self.session.add(new_resume)
        try:
            self.session.flush()
            job_application.resume_id = new_resume.id
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info(
            f"Applied refinements of resume {resume.id} as resume {new_resume.id} "
            f"for job application {job_application.id}"
        )
        self._audit(new_resume.id, job_application.id, refinements)
        return new_resume

    def _audit(self, resume_id: int, job_application_id: int, refinements: dict) -> Optional[AiRefinement]:
        try:
            row = AiRefinement(
                resume_id=resume_id,
                job_application_id=job_application_id,
                refinements=json.dumps(refinements, default=str),
            )
            self.session.add(row)
            self.session.commit()
            return row
        except Exception as e:
            self.session.rollback()
            logger.error(f"Failed to write refinement audit row for resume {resume_id}: {e}")
            return None
