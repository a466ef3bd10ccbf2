import copy
import logging
from typing import Any, Dict, Optional

from django.conf import settings
from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel, ValidationError

from resume_tracker.lib.errors import UpstreamFailure
from resume_tracker.lib.refinement.json_repair import parse_llm_json
from resume_tracker.lib.refinement.schemas import RefinedResume
from resume_tracker.lib.services.prompt_utils import write_prompt_to_file

logger = logging.getLogger(__name__)

FALLBACK_WARNING = (
    "AI refinement encountered an error. Showing original resume with minimal changes."
)


class RefinementResult(BaseModel):
    data: Dict[str, Any]
    original: Dict[str, Any]
    remaining_calls: int
    prompt: str
    warning: Optional[str] = None
    raw_response: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.warning is None


class ResumeRefiner:
    """
    One-shot refinement of a resume snapshot against a job description.

    A single chat-completion call is made. Whatever happens to it, exactly one
    unit of quota is spent; when the reply cannot be turned into a candidate
    the original resume comes back with a warning instead of an error.
    """

    def __init__(self, ai_client, model: Optional[str] = None, temperature: float = 0.7):
        self.ai_client = ai_client
        self.model = model or settings.OPENAI_REFINE_MODEL
        self.temperature = temperature
        self.env = Environment(loader=FileSystemLoader(settings.PROMPT_TEMPLATE_DIR))

    def render_resume_text(self, resume_snapshot: dict) -> str:
        return self.env.get_template("refinement/resume_text.j2").render(resume=resume_snapshot)

    def build_prompt(
        self, resume_snapshot: dict, job_description: Optional[str] = None, job_url: Optional[str] = None
    ) -> str:
        template = self.env.get_template("refinement/refine_prompt.j2")
        return template.render(
            resume_text=self.render_resume_text(resume_snapshot),
            job_description=job_description,
            job_url=job_url,
        )

    def _complete(self, prompt: str) -> str:
        try:
            response = self.ai_client.chat.completions.create(
                model=self.model,
                messages=[
                    {
                        "role": "system",
                        "content": self.env.get_template("refinement/system_prompt.j2").render(),
                    },
                    {
                        "role": "user",
                        "content": prompt,
                    },
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
            content = response.choices[0].message.content
        except Exception as e:
            raise UpstreamFailure(f"Chat completion failed: {e}") from e
        if not content:
            raise UpstreamFailure("Chat completion returned no content")
        return content.strip()

    @staticmethod
    def parse_candidate(content: str) -> Dict[str, Any]:
        try:
            parsed = parse_llm_json(content)
            return RefinedResume.model_validate(parsed).to_payload()
        except (ValueError, ValidationError) as e:
            raise UpstreamFailure(f"Could not parse refinement: {e}") from e

    def refine(
        self,
        resume_snapshot: dict,
        job_description: Optional[str] = None,
        job_url: Optional[str] = None,
        remaining_calls: int = 0,
    ) -> RefinementResult:
        original = copy.deepcopy(resume_snapshot)
        prompt = self.build_prompt(resume_snapshot, job_description, job_url)
        write_prompt_to_file(
            prompt,
            kind="refine",
            identifiers={
                "resume_id": resume_snapshot.get("id"),
                "user_id": resume_snapshot.get("userId"),
            },
        )
        # spent whether or not the call succeeds
        remaining = remaining_calls - 1

        content = None
        try:
            content = self._complete(prompt)
            candidate = self.parse_candidate(content)
        except UpstreamFailure as e:
            logger.warning(
                f"Refinement of resume {resume_snapshot.get('id')} fell back to original: {e}"
            )
            return RefinementResult(
                data=copy.deepcopy(original),
                original=original,
                remaining_calls=remaining,
                prompt=prompt,
                warning=FALLBACK_WARNING,
                raw_response=content,
            )

        logger.info(f"Refined resume {resume_snapshot.get('id')}; {remaining} AI calls left")
        return RefinementResult(
            data=candidate,
            original=original,
            remaining_calls=remaining,
            prompt=prompt,
            raw_response=content,
        )
