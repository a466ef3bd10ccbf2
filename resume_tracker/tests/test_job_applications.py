from rest_framework import status

from resume_tracker.tests.support import SAAPITestCase


class JobApplicationAPITests(SAAPITestCase):
    url = "/api/job-applications/"

    def setUp(self):
        super().setUp()
        self.resume_id = self.seed_resume()

    def create_application(self, **overrides):
        body = {"resumeId": self.resume_id, "company": "Acme", "position": "Backend Engineer"}
        body.update(overrides)
        return self.client.post(self.url, body, format="json")

    def test_create_defaults(self):
        """Test that a new application defaults to Applied with today's date"""
        response = self.create_application(jobUrl="https://jobs.example.com/1")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data["data"]
        self.assertEqual(data["status"], "Applied")
        self.assertEqual(data["company"], "Acme")
        self.assertEqual(data["jobUrl"], "https://jobs.example.com/1")
        self.assertIsNotNone(data["appliedDate"])
        self.assertEqual(data["resume"]["id"], self.resume_id)

    def test_create_parses_applied_date(self):
        response = self.create_application(appliedDate="2024-03-05")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["data"]["appliedDate"].startswith("2024-03-05"))

    def test_create_rejects_bad_date(self):
        response = self.create_application(appliedDate="zzz-not-a-date-qqq")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_requires_fields(self):
        for missing in ("resumeId", "company", "position"):
            with self.subTest(missing=missing):
                response = self.create_application(**{missing: None})
                self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
                self.assertIn(missing, response.data["error"])

    def test_create_unknown_resume(self):
        response = self.create_application(resumeId=12345)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_list_and_retrieve(self):
        first = self.create_application(company="First").data["data"]
        second = self.create_application(company="Second").data["data"]

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([a["id"] for a in response.data["data"]], [second["id"], first["id"]])

        response = self.client.get(f"{self.url}{first['id']}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["company"], "First")

    def test_retrieve_missing(self):
        response = self.client.get(f"{self.url}321/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_update(self):
        application_id = self.create_application().data["data"]["id"]
        response = self.client.patch(
            f"{self.url}{application_id}/",
            {"status": "Interviewing", "jobDescription": "Build APIs"},
            format="json",
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data["data"]
        self.assertEqual(data["status"], "Interviewing")
        self.assertEqual(data["jobDescription"], "Build APIs")
        self.assertEqual(data["company"], "Acme")

    def test_update_rejects_empty_company(self):
        application_id = self.create_application().data["data"]["id"]
        response = self.client.patch(f"{self.url}{application_id}/", {"company": ""}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_can_unlink_resume(self):
        application_id = self.create_application().data["data"]["id"]
        response = self.client.patch(
            f"{self.url}{application_id}/", {"resumeId": None}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data["data"]["resumeId"])
        self.assertIsNone(response.data["data"]["resume"])

    def test_delete(self):
        application_id = self.create_application().data["data"]["id"]
        response = self.client.delete(f"{self.url}{application_id}/")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"data": {"id": application_id}})
        response = self.client.get(f"{self.url}{application_id}/")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
