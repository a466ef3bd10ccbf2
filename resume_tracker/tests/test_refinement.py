import json
from unittest.mock import MagicMock, patch

from django.test import SimpleTestCase
from rest_framework import status

from resume_tracker.lib.errors import UpstreamFailure
from resume_tracker.lib.models import BaseModel, OpenAiResponse, User
from resume_tracker.lib.refinement.refiner import FALLBACK_WARNING, ResumeRefiner
from resume_tracker.tests.support import SAAPITestCase

REFINED_REPLY = {
    "name": "Alex Morgan",
    "title": "Platform Engineer",
    "summary": "Platform engineer focused on data pipelines.",
    "work": [
        {
            "company": "Riverbend Analytics",
            "title": "Senior Software Engineer",
            "description": "Owns the ingestion platform.",
            "badges": ["Python", {"name": "Kafka"}, {"name": {"name": "AWS"}}, ""],
            "tasks": ["Built streaming ingestion", {"description": "Ran on-call"}],
        }
    ],
    "skills": ["Python", {"name": "Kafka"}, "  "],
    "projects": [{"title": "pgsnap", "techStack": ["Python", {"name": "Postgres"}]}],
}


def _fake_client(content=None, error=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        client.chat.completions.create.return_value.choices[0].message.content = content
    return client


class RefineWithAIAPITests(SAAPITestCase):
    url = "/api/resume/refine-with-ai/"

    def setUp(self):
        super().setUp()
        self.resume_id = self.seed_resume()

    def remaining_calls(self):
        return User.anonymous(session=BaseModel.get_session()).ai_calls_limit

    def refine(self, client, body=None):
        body = body if body is not None else {
            "resumeId": self.resume_id,
            "jobDescription": "Streaming data platform role",
        }
        with patch("resume_tracker.api.views.get_client", return_value=client):
            return self.client.post(self.url, body, format="json")

    def test_successful_refinement(self):
        """Test that a good reply is normalized and one call is spent"""
        before = self.remaining_calls()
        client = _fake_client(json.dumps(REFINED_REPLY))

        response = self.refine(client)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual(data["title"], "Platform Engineer")
        self.assertEqual(
            data["work"][0]["badges"], [{"name": "Python"}, {"name": "Kafka"}, {"name": "AWS"}]
        )
        self.assertEqual(
            data["work"][0]["tasks"],
            [{"description": "Built streaming ingestion"}, {"description": "Ran on-call"}],
        )
        self.assertEqual(data["skills"], [{"name": "Python"}, {"name": "Kafka"}])
        self.assertEqual(data["projects"][0]["techStack"], [{"name": "Python"}, {"name": "Postgres"}])
        self.assertEqual(response.data["originalResume"]["id"], self.resume_id)
        self.assertEqual(response.data["remainingCalls"], before - 1)
        self.assertNotIn("warning", response.data)
        self.assertEqual(self.remaining_calls(), before - 1)

        self.assertEqual(OpenAiResponse.count(session=BaseModel.get_session()), 1)

        kwargs = client.chat.completions.create.call_args.kwargs
        self.assertEqual(kwargs["response_format"], {"type": "json_object"})
        self.assertIn("Streaming data platform role", kwargs["messages"][1]["content"])
        self.assertIn("Riverbend Analytics", kwargs["messages"][1]["content"])

    def test_original_resume_is_not_modified(self):
        before = self.get_resume(self.resume_id)
        self.refine(_fake_client(json.dumps(REFINED_REPLY)))
        self.assertEqual(self.get_resume(self.resume_id), before)

    def test_unparseable_reply_falls_back_and_spends_quota(self):
        """Test that a parse failure returns the original and still decrements quota"""
        before = self.remaining_calls()
        original = self.get_resume(self.resume_id)

        response = self.refine(_fake_client("I cannot help with that."))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["warning"], FALLBACK_WARNING)
        self.assertEqual(response.data["data"], original)
        self.assertEqual(response.data["originalResume"], original)
        self.assertEqual(response.data["remainingCalls"], before - 1)
        self.assertEqual(self.remaining_calls(), before - 1)
        self.assertEqual(OpenAiResponse.count(session=BaseModel.get_session()), 0)

    def test_upstream_error_falls_back_and_spends_quota(self):
        before = self.remaining_calls()
        response = self.refine(_fake_client(error=RuntimeError("connection reset")))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["warning"], FALLBACK_WARNING)
        self.assertEqual(self.remaining_calls(), before - 1)

    def test_repaired_reply_is_accepted(self):
        reply = "```json\n" + '{"summary": "Fenced", "skills": ["Go",],}' + "\n```"
        response = self.refine(_fake_client(reply))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertNotIn("warning", response.data)
        self.assertEqual(response.data["data"]["summary"], "Fenced")

    def test_quota_exhausted(self):
        """Test that a zero quota is rejected before any call is made"""
        session = BaseModel.get_session()
        owner = User.anonymous(session=session)
        owner.ai_calls_limit = 0
        session.commit()
        client = _fake_client(json.dumps(REFINED_REPLY))

        response = self.refine(client)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn("AI calls limit reached", response.data["error"])
        client.chat.completions.create.assert_not_called()
        self.assertEqual(self.remaining_calls(), 0)

    def test_client_unavailable(self):
        response = self.refine(None)
        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertIn("OPENAI_API_KEY", response.data["error"])

    def test_missing_resume_id(self):
        client = _fake_client("{}")
        response = self.refine(client, body={"jobDescription": "x"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        client.chat.completions.create.assert_not_called()

    def test_unknown_resume(self):
        before = self.remaining_calls()
        response = self.refine(_fake_client("{}"), body={"resumeId": 999})
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.remaining_calls(), before)


class ResumeRefinerTests(SimpleTestCase):
    snapshot = {
        "id": 1,
        "userId": 1,
        "name": "Jane Doe",
        "title": "Engineer",
        "location": "Berlin",
        "summary": "Builds things.",
        "education": [{"school": "TU", "degree": "BSc", "start": "2010", "end": None}],
        "work": [
            {
                "company": "Acme",
                "title": "Dev",
                "start": "2015",
                "end": None,
                "link": None,
                "description": "Did work",
                "badges": [{"name": "Python"}],
                "tasks": [{"description": "Shipped"}],
            }
        ],
        "skills": [{"name": "Python"}],
        "projects": [],
    }

    def test_prompt_includes_resume_and_job(self):
        refiner = ResumeRefiner(MagicMock())
        prompt = refiner.build_prompt(self.snapshot, "Needs Go", "https://jobs.example.com/1")
        self.assertIn("Needs Go", prompt)
        self.assertIn("https://jobs.example.com/1", prompt)
        self.assertIn("Dev at Acme (2015 - Present)", prompt)
        self.assertIn("Skills: Python", prompt)

    def test_parse_candidate_normalizes(self):
        payload = ResumeRefiner.parse_candidate(
            '{"skills": [{"name": {"name": "Go"}}, ""], "work": "oops"}'
        )
        self.assertEqual(payload, {"skills": [{"name": "Go"}]})

    def test_parse_candidate_rejects_garbage(self):
        with self.assertRaises(UpstreamFailure):
            ResumeRefiner.parse_candidate("no json here")

    def test_refine_counts_the_attempt(self):
        client = _fake_client('{"summary": "Better"}')
        result = ResumeRefiner(client, model="test-model").refine(self.snapshot, remaining_calls=3)
        self.assertTrue(result.succeeded)
        self.assertEqual(result.remaining_calls, 2)
        self.assertEqual(result.data, {"summary": "Better"})
        self.assertEqual(client.chat.completions.create.call_args.kwargs["model"], "test-model")

    def test_empty_content_falls_back(self):
        result = ResumeRefiner(_fake_client("")).refine(self.snapshot, remaining_calls=1)
        self.assertFalse(result.succeeded)
        self.assertEqual(result.remaining_calls, 0)
        self.assertEqual(result.data, self.snapshot)
        self.assertIsNot(result.data, self.snapshot)
