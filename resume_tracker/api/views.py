import logging

from django.conf import settings
from django.http import JsonResponse
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from sqlalchemy.exc import SQLAlchemyError

from resume_tracker.lib.ai_client import get_api_key, get_client
from resume_tracker.lib.db import database_reachable
from resume_tracker.lib.errors import (
    AIClientUnavailable,
    InvalidInput,
    PersistenceFailure,
    QuotaExhausted,
    ResumeTrackerError,
)
from resume_tracker.lib.models import OpenAiResponse, User
from resume_tracker.lib.models.base import BaseModel
from resume_tracker.lib.refinement.applier import RefinementApplier
from resume_tracker.lib.refinement.refiner import ResumeRefiner
from resume_tracker.lib.services.job_application_service import JobApplicationService
from resume_tracker.lib.services.resume_field_updater import ResumeFieldUpdater
from resume_tracker.lib.services.resume_service import ResumeService

logger = logging.getLogger(__name__)

REFINEMENT_APPLIED_MESSAGE = "Created a new AI-refined resume and updated the job application"


def _body(request) -> dict:
    data = request.data
    if not isinstance(data, dict):
        raise InvalidInput("Request body must be a JSON object")
    return data


@api_view(["GET"])
def healthcheck(request):
    db_ok = database_reachable()
    return JsonResponse(
        {
            "healthy": db_ok,
            "database": "ok" if db_ok else "unreachable",
            "openai_configured": get_api_key() is not None,
        },
        status=200 if db_ok else 503,
    )


class BaseSAViewSet(viewsets.ViewSet):
    """ViewSet backed by the SQLAlchemy session, answering ``{data}`` or ``{error}``."""

    lookup_value_regex = r"\d+"

    def get_session(self):
        return BaseModel.get_session()

    def handle_exception(self, exc):
        if isinstance(exc, SQLAlchemyError):
            BaseModel.cleanup_session_on_exception()
            logger.exception(f"Database error in {self.__class__.__name__}: {exc}")
            exc = PersistenceFailure(f"Database error: {exc.__class__.__name__}")
        if isinstance(exc, ResumeTrackerError):
            BaseModel.cleanup_session_on_exception()
            if exc.status_code >= 500:
                logger.error(f"{self.__class__.__name__} failed: {exc}")
            return Response({"error": str(exc)}, status=exc.status_code)
        if isinstance(exc, APIException):
            detail = exc.detail
            message = detail if isinstance(detail, str) else str(detail)
            return Response({"error": message}, status=exc.status_code)
        BaseModel.cleanup_session_on_exception()
        logger.exception(f"Unhandled error in {self.__class__.__name__}: {exc}")
        return Response({"error": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


class ResumeViewSet(BaseSAViewSet):
    def list(self, request):
        service = ResumeService(self.get_session())
        owner = User.anonymous(session=service.session)
        data = []
        for resume in service.list_for_owner(owner):
            item = resume.scalar_snapshot()
            item["contact"] = resume.contact.to_snapshot() if resume.contact else None
            data.append(item)
        return Response({"data": data})

    def retrieve(self, request, pk=None):
        resume = ResumeService(self.get_session()).get(pk)
        return Response({"data": resume.to_snapshot()})

    def partial_update(self, request, pk=None):
        data = _body(request)
        if "path" not in data:
            raise InvalidInput("path is required")
        resume = ResumeService(self.get_session()).get(pk)
        ResumeFieldUpdater(resume, self.get_session()).apply(data["path"], data.get("value"))
        return Response({"data": resume.to_snapshot()})

    def destroy(self, request, pk=None):
        service = ResumeService(self.get_session())
        deleted_id = service.delete(service.get(pk))
        return Response({"data": {"id": deleted_id}})

    def create(self, request):
        service = ResumeService(self.get_session())
        resume = service.create_for_owner(User.anonymous(session=service.session))
        return Response({"data": resume.to_snapshot()}, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def duplicate(self, request, pk=None):
        service = ResumeService(self.get_session())
        resume = service.duplicate(service.get(pk))
        return Response({"data": resume.to_snapshot()}, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="create-with-title")
    def create_with_title(self, request):
        title = _body(request).get("title")
        if not isinstance(title, str) or not title.strip():
            raise InvalidInput("title is required")
        service = ResumeService(self.get_session())
        owner = User.anonymous(session=service.session)
        resume = service.create_for_owner(owner, title=title.strip())
        return Response({"data": resume.to_snapshot()}, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=["post"], url_path="refine-with-ai")
    def refine_with_ai(self, request):
        client = get_client(required=False)
        if client is None:
            raise AIClientUnavailable("AI client not configured. Set OPENAI_API_KEY.")

        data = _body(request)
        resume_id = data.get("resumeId")
        if not resume_id:
            raise InvalidInput("resumeId is required")

        session = self.get_session()
        owner = User.anonymous(session=session)
        if owner.ai_calls_limit <= 0:
            raise QuotaExhausted(
                "AI calls limit reached. You have used all your available AI refinements."
            )
        resume = ResumeService(session).get(resume_id)

        result = ResumeRefiner(client).refine(
            resume.to_snapshot(),
            job_description=data.get("jobDescription"),
            job_url=data.get("jobUrl"),
            remaining_calls=owner.ai_calls_limit,
        )
        remaining = owner.spend_ai_call(session)

        payload = {
            "data": result.data,
            "originalResume": result.original,
            "remainingCalls": remaining,
        }
        if result.succeeded:
            self._record_response(resume.id, result.prompt, result.raw_response)
            payload["rawResponse"] = result.raw_response
        else:
            payload["warning"] = result.warning
        return Response(payload)

    def _record_response(self, resume_id, prompt, response):
        session = self.get_session()
        try:
            session.add(OpenAiResponse(resume_id=resume_id, prompt=prompt, response=response))
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Failed to store OpenAI response for resume {resume_id}: {e}")

    @action(detail=True, methods=["post"], url_path="apply-ai-refinements")
    def apply_ai_refinements(self, request, pk=None):
        data = _body(request)
        refinements = data.get("refinements")
        job_application_id = data.get("jobApplicationId")
        if not refinements or not job_application_id:
            raise InvalidInput("refinements and jobApplicationId are required")

        session = self.get_session()
        resume = ResumeService(session).get(pk)
        job_application = JobApplicationService(session).get(job_application_id)
        new_resume = RefinementApplier(session).apply(resume, job_application, refinements)
        return Response(
            {
                "data": new_resume.to_snapshot(),
                "refinements": refinements,
                "message": REFINEMENT_APPLIED_MESSAGE,
            },
            status=status.HTTP_201_CREATED,
        )


class JobApplicationViewSet(BaseSAViewSet):
    def list(self, request):
        applications = JobApplicationService(self.get_session()).list()
        return Response({"data": [a.to_snapshot() for a in applications]})

    def retrieve(self, request, pk=None):
        application = JobApplicationService(self.get_session()).get(pk)
        return Response({"data": application.to_snapshot()})

    def create(self, request):
        application = JobApplicationService(self.get_session()).create(_body(request))
        return Response({"data": application.to_snapshot()}, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        service = JobApplicationService(self.get_session())
        application = service.update(service.get(pk), _body(request))
        return Response({"data": application.to_snapshot()})

    def destroy(self, request, pk=None):
        service = JobApplicationService(self.get_session())
        deleted_id = service.delete(service.get(pk))
        return Response({"data": {"id": deleted_id}})


class UserViewSet(BaseSAViewSet):
    @action(detail=False, methods=["get"], url_path="ai-calls-limit")
    def ai_calls_limit(self, request):
        owner = User.anonymous(session=self.get_session())
        return Response({"data": {"aiCallsLimit": owner.ai_calls_limit}})

    @action(detail=False, methods=["post"], url_path="reset-ai-limit")
    def reset_ai_limit(self, request):
        session = self.get_session()
        owner = User.anonymous(session=session)
        owner.ai_calls_limit = settings.AI_CALLS_LIMIT
        session.commit()
        logger.info(f"Reset AI calls limit for {owner.email} to {settings.AI_CALLS_LIMIT}")
        return Response({"data": {"aiCallsLimit": owner.ai_calls_limit}})
