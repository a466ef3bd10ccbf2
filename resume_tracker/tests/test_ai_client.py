import os
import unittest
from unittest.mock import patch

from resume_tracker.lib import ai_client

VALID_KEY = "sk-test-0123456789abcdefghij"


class AIClientTests(unittest.TestCase):
    def setUp(self):
        ai_client.reset_client()

    def tearDown(self):
        ai_client.reset_client()

    def test_missing_key_returns_none(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsNone(ai_client.get_client())
            with self.assertRaises(RuntimeError):
                ai_client.get_client(required=True)

    def test_malformed_key_returns_none(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "not-a-key"}, clear=True):
            self.assertIsNone(ai_client.get_client())

    def test_client_is_cached(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": VALID_KEY}, clear=True):
            with patch.object(ai_client, "OpenAI") as openai_cls:
                first = ai_client.get_client()
                second = ai_client.get_client()
        self.assertIs(first, second)
        openai_cls.assert_called_once_with(api_key=VALID_KEY, timeout=900.0)

    def test_timeout_from_environment(self):
        env = {"OPENAI_API_KEY": VALID_KEY, "OPENAI_TIMEOUT_SECONDS": "30"}
        with patch.dict(os.environ, env, clear=True):
            with patch.object(ai_client, "OpenAI") as openai_cls:
                ai_client.get_client()
        openai_cls.assert_called_once_with(api_key=VALID_KEY, timeout=30.0)

    def test_looks_like_api_key(self):
        self.assertTrue(ai_client.looks_like_api_key(VALID_KEY))
        self.assertFalse(ai_client.looks_like_api_key("sk-short"))
        self.assertFalse(ai_client.looks_like_api_key(None))
