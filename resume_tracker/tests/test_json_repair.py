import unittest

from resume_tracker.lib.refinement.json_repair import (
    parse_llm_json,
    repair_json_text,
    strip_code_fences,
)


class ParseLLMJsonTests(unittest.TestCase):
    def test_valid_json(self):
        self.assertEqual(parse_llm_json('{"name": "Jane"}'), {"name": "Jane"})

    def test_code_fences(self):
        text = '```json\n{"name": "Jane"}\n```'
        self.assertEqual(parse_llm_json(text), {"name": "Jane"})

    def test_trailing_commas(self):
        text = '{"skills": [{"name": "Go"},], "name": "Jane",}'
        self.assertEqual(parse_llm_json(text), {"skills": [{"name": "Go"}], "name": "Jane"})

    def test_missing_comma_between_lines(self):
        text = '{\n  "name": "Jane"\n  "title": "Engineer"\n}'
        self.assertEqual(parse_llm_json(text), {"name": "Jane", "title": "Engineer"})

    def test_surrounding_prose(self):
        text = 'Here is the resume:\n{"name": "Jane"}\nGood luck!'
        self.assertEqual(parse_llm_json(text), {"name": "Jane"})

    def test_empty_raises(self):
        for text in ("", "   ", None):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_llm_json(text)

    def test_non_object_raises(self):
        with self.assertRaises(ValueError):
            parse_llm_json("[1, 2, 3]")

    def test_garbage_raises(self):
        with self.assertRaises(ValueError):
            parse_llm_json("definitely not json")


class RepairHelpersTests(unittest.TestCase):
    def test_strip_code_fences(self):
        self.assertEqual(strip_code_fences("```\n{}\n```"), "{}")

    def test_repair_leaves_valid_json_alone(self):
        text = '{"a": [1, 2], "b": "c"}'
        self.assertEqual(repair_json_text(text), text)
