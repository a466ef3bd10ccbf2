import logging
from datetime import datetime, timezone
from typing import List

import dateparser

from resume_tracker.lib.errors import InvalidInput, NotFound
from resume_tracker.lib.models import JobApplication, Resume
from resume_tracker.lib.models.job_application import DEFAULT_STATUS

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("resumeId", "company", "position")

# Wire name -> column attribute for fields a client may write
WRITABLE_FIELDS = {
    "company": "company",
    "position": "position",
    "status": "status",
    "jobUrl": "job_url",
    "jobDescription": "job_description",
}


def _parse_datetime(val):
    if val is None or val == "":
        return None
    if isinstance(val, datetime):
        if val.tzinfo is not None:
            val = val.astimezone(timezone.utc).replace(tzinfo=None)
        return val
    dt = dateparser.parse(str(val))
    if dt is None:
        raise InvalidInput(f"Could not parse appliedDate: {val!r}")
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


class JobApplicationService:
    def __init__(self, session=None):
        self.session = session or JobApplication.get_session()

    def _resume(self, resume_id) -> Resume:
        try:
            resume = Resume.get(int(resume_id), session=self.session)
        except (TypeError, ValueError):
            resume = None
        if resume is None:
            raise NotFound(f"Resume {resume_id} not found")
        return resume

    def get(self, application_id) -> JobApplication:
        try:
            application = JobApplication.get(int(application_id), session=self.session)
        except (TypeError, ValueError):
            application = None
        if application is None:
            raise NotFound(f"Job application {application_id} not found")
        return application

    def list(self) -> List[JobApplication]:
        return (
            self.session.query(JobApplication)
            .order_by(JobApplication.updated_at.desc(), JobApplication.id.desc())
            .all()
        )

    def create(self, data: dict) -> JobApplication:
        missing = [f for f in REQUIRED_FIELDS if not data.get(f)]
        if missing:
            raise InvalidInput(f"Missing required fields: {', '.join(missing)}")
        resume = self._resume(data["resumeId"])

        application = JobApplication(resume_id=resume.id, status=DEFAULT_STATUS)
        self._assign(application, data)
        if application.applied_date is None:
            application.applied_date = datetime.utcnow()
        self._commit(application)
        logger.info(f"Created job application {application.id} for resume {resume.id}")
        return application

    def update(self, application: JobApplication, data: dict) -> JobApplication:
        for required in ("company", "position"):
            if required in data and not data[required]:
                raise InvalidInput(f"{required} cannot be empty")
        if "resumeId" in data:
            application.resume_id = (
                self._resume(data["resumeId"]).id if data["resumeId"] is not None else None
            )
        self._assign(application, data)
        self._commit(application)
        return application

    def delete(self, application: JobApplication):
        application_id = application.id
        self.session.delete(application)
        self._commit()
        logger.info(f"Deleted job application {application_id}")
        return application_id

    def _assign(self, application: JobApplication, data: dict):
        for key, attr in WRITABLE_FIELDS.items():
            if key in data and data[key] is not None:
                setattr(application, attr, str(data[key]))
        if data.get("appliedDate"):
            application.applied_date = _parse_datetime(data["appliedDate"])

    def _commit(self, application=None):
        if application is not None:
            self.session.add(application)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
