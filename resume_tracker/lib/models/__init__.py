from .base import Base, BaseModel
from .user import User
from .resume import Resume
from .contact import Contact
from .social_link import SocialLink
from .education import Education
from .work import Work
from .work_badge import WorkBadge
from .work_task import WorkTask
from .skill import Skill
from .project import Project
from .project_tech import ProjectTech
from .project_link import ProjectLink
from .job_application import JobApplication
from .open_ai_response import OpenAiResponse
from .ai_refinement import AiRefinement

__all__ = [
    "Base",
    "BaseModel",
    "User",
    "Resume",
    "Contact",
    "SocialLink",
    "Education",
    "Work",
    "WorkBadge",
    "WorkTask",
    "Skill",
    "Project",
    "ProjectTech",
    "ProjectLink",
    "JobApplication",
    "OpenAiResponse",
    "AiRefinement",
]
