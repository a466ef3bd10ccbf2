from rest_framework.test import APITestCase

from resume_tracker.lib.db import get_engine, init_sqlalchemy
from resume_tracker.lib.models import Base, BaseModel, User
from resume_tracker.lib.services.resume_service import ResumeService


class SATestMixin:
    """Fresh SQLAlchemy schema per test on top of the configured test engine."""

    @classmethod
    def setUpClass(cls):
        super().setUpClass()
        # Initialize SQLAlchemy against the in-memory test database
        init_sqlalchemy()
        cls.engine = get_engine()

    def setUp(self):
        super().setUp()
        BaseModel.clear_session()
        Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        self.session = BaseModel.get_session()

    def tearDown(self):
        BaseModel.clear_session()
        super().tearDown()

    def owner(self):
        return User.anonymous(session=BaseModel.get_session())

    def seed_resume(self):
        """Seed the default resume for the anonymous owner and return its id."""
        session = BaseModel.get_session()
        return ResumeService(session).seed(User.anonymous(session=session)).id


class SAAPITestCase(SATestMixin, APITestCase):
    def get_resume(self, resume_id):
        response = self.client.get(f"/api/resume/{resume_id}/")
        self.assertEqual(response.status_code, 200)
        return response.data["data"]

    def patch_resume(self, resume_id, path, value):
        return self.client.patch(
            f"/api/resume/{resume_id}/", {"path": path, "value": value}, format="json"
        )
