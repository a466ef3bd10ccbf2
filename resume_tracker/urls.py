"""resume_tracker URL Configuration"""

from django.urls import path, include
from rest_framework import routers
from resume_tracker.api.views import (
    JobApplicationViewSet,
    ResumeViewSet,
    UserViewSet,
    healthcheck,
)

router = routers.DefaultRouter()
# Accept both "/api/resume/1" and "/api/resume/1/"
router.trailing_slash = "/?"
router.register(r"resume", ResumeViewSet, basename="resume")
router.register(r"job-applications", JobApplicationViewSet, basename="job-applications")
router.register(r"user", UserViewSet, basename="user")

urlpatterns = [
    path("healthcheck/", healthcheck, name="healthcheck"),
    path("api/resumes", ResumeViewSet.as_view({"get": "list"}), name="resumes"),
    path("api/", include(router.urls)),
]
