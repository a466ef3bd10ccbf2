import copy
import logging
from typing import List, Optional

from resume_tracker.data.default_resume import DEFAULT_RESUME
from resume_tracker.lib.errors import NotFound
from resume_tracker.lib.models import Resume, User
from resume_tracker.lib.services.resume_factory import build_resume

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"


class ResumeService:
    """Whole-resume operations: lookup, listing, copy, seed and delete."""

    def __init__(self, session=None):
        self.session = session or Resume.get_session()

    def get(self, resume_id) -> Resume:
        try:
            resume = Resume.get(int(resume_id), session=self.session)
        except (TypeError, ValueError):
            resume = None
        if resume is None:
            raise NotFound(f"Resume {resume_id} not found")
        return resume

    def list_for_owner(self, user: User) -> List[Resume]:
        return (
            self.session.query(Resume)
            .filter(Resume.user_id == user.id)
            .order_by(Resume.updated_at.desc(), Resume.id.desc())
            .all()
        )

    def most_recent_for_owner(self, user: User) -> Optional[Resume]:
        return (
            self.session.query(Resume)
            .filter(Resume.user_id == user.id)
            .order_by(Resume.updated_at.desc(), Resume.id.desc())
            .first()
        )

    def _create(self, data: dict, user_id) -> Resume:
        resume = build_resume(data, user_id=user_id)
        self.session.add(resume)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return resume

    def duplicate(self, source: Resume, user: Optional[User] = None) -> Resume:
        """Deep copy with fresh identifiers; name and title get a " (Copy)" suffix."""
        data = source.to_snapshot()
        data["name"] = f"{data.get('name') or ''}{COPY_SUFFIX}"
        data["title"] = f"{data.get('title') or ''}{COPY_SUFFIX}"
        owner_id = user.id if user is not None else source.user_id
        resume = self._create(data, owner_id)
        logger.info(f"Duplicated resume {source.id} into {resume.id}")
        return resume

    def seed(self, user: User) -> Resume:
        resume = self._create(copy.deepcopy(DEFAULT_RESUME), user.id)
        logger.info(f"Seeded default resume {resume.id} for user {user.id}")
        return resume

    def create_for_owner(self, user: User, title: Optional[str] = None) -> Resume:
        """Duplicate the owner's most recent resume, or seed one if there is none."""
        source = self.most_recent_for_owner(user)
        resume = self.duplicate(source, user) if source else self.seed(user)
        if title is not None:
            resume.title = title
            self.session.commit()
        return resume

    def delete(self, resume: Resume):
        resume_id = resume.id
        self.session.delete(resume)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info(f"Deleted resume {resume_id}")
        return resume_id
