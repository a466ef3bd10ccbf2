from django.conf import settings
from django.core.management.base import BaseCommand
from resume_tracker.lib.models import User


class Command(BaseCommand):
    help = "Reset the anonymous owner's AI calls limit"

    def add_arguments(self, parser):
        parser.add_argument(
            "--limit",
            type=int,
            default=None,
            help="New limit (defaults to the AI_CALLS_LIMIT setting)",
        )

    def handle(self, *args, **options):
        limit = options["limit"] if options["limit"] is not None else settings.AI_CALLS_LIMIT
        session = User.get_session()
        owner = User.anonymous(session=session)
        previous = owner.ai_calls_limit
        owner.ai_calls_limit = limit
        session.commit()
        self.stdout.write(
            self.style.SUCCESS(f"AI calls limit for {owner.email}: {previous} -> {limit}")
        )
