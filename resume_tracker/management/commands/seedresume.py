from django.conf import settings
from django.core.management.base import BaseCommand
from resume_tracker.lib.db import ensure_sqlalchemy_schema
from resume_tracker.lib.models import JobApplication, Resume, User
from resume_tracker.lib.services.resume_service import ResumeService


class Command(BaseCommand):
    help = "Seed the anonymous owner and a default resume"

    def add_arguments(self, parser):
        parser.add_argument(
            "--keep",
            action="store_true",
            help="Keep existing resumes and job applications instead of clearing them",
        )

    def handle(self, *args, **options):
        ensure_sqlalchemy_schema(with_advisory_lock=True)
        session = Resume.get_session()

        if not options["keep"]:
            self.stdout.write("Clearing existing resumes and job applications...")
            for model in (JobApplication, Resume):
                for obj in session.query(model).all():
                    session.delete(obj)
            session.commit()

        owner = User.anonymous(session=session)
        owner.ai_calls_limit = settings.AI_CALLS_LIMIT
        session.commit()
        self.stdout.write(
            f"Anonymous owner {owner.email} (id {owner.id}) has {owner.ai_calls_limit} AI calls"
        )

        resume = ResumeService(session).seed(owner)
        self.stdout.write(self.style.SUCCESS(f"Seeded resume {resume.id}: {resume.title}"))
