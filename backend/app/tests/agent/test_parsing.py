import json
import unittest

from app.agent.parsing import (
    normalize_complexity,
    parse_autofill_response,
    parse_ideas_response,
    parse_iteration_response,
    parse_spec_response,
)
from app.core.errors import MalformedResponseError


class IdeasResponseTests(unittest.TestCase):
    def test_keeps_model_order_and_fills_missing_fields(self):
        raw = json.dumps(
            {
                "ideas": [
                    {
                        "name": "ROI Calculator",
                        "summary": "Estimate savings",
                        "detailedDescription": "Enter numbers, get a report.",
                        "whyThis": "Founders care about runway.",
                        "complexityLevel": "moderate",
                    },
                    {"name": "Checklist"},
                    "not an idea",
                ]
            }
        )

        ideas = parse_ideas_response(raw)

        self.assertEqual([idea.name for idea in ideas], ["ROI Calculator", "Checklist"])
        self.assertEqual(ideas[0].complexity_level, "Moderate")
        self.assertEqual(ideas[1].summary, "No summary provided")
        self.assertEqual(ideas[1].detailed_description, "No description provided")
        self.assertEqual(ideas[1].why_this, "No explanation provided")
        self.assertEqual(ideas[1].complexity_level, "Simple")

    def test_unknown_complexity_falls_back_to_simple(self):
        raw = json.dumps({"ideas": [{"name": "Quiz", "complexityLevel": "Trivial"}]})

        self.assertEqual(parse_ideas_response(raw)[0].complexity_level, "Simple")

    def test_missing_name_gets_placeholder(self):
        raw = json.dumps({"ideas": [{"summary": "s"}]})

        self.assertEqual(parse_ideas_response(raw)[0].name, "Unnamed Idea")

    def test_rejects_invalid_json_and_missing_array(self):
        for raw in ("not json", "[]", json.dumps({"ideas": "nope"}), json.dumps({})):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedResponseError):
                    parse_ideas_response(raw)

    def test_empty_array_parses_to_empty_list(self):
        self.assertEqual(parse_ideas_response(json.dumps({"ideas": []})), [])


class SpecResponseTests(unittest.TestCase):
    def test_parses_both_artifacts(self):
        spec = parse_spec_response(json.dumps({"magnetSpec": "Spec", "creationPrompt": "Prompt"}))

        self.assertEqual(spec.magnet_spec, "Spec")
        self.assertEqual(spec.creation_prompt, "Prompt")

    def test_structured_spec_is_kept_as_json_text(self):
        raw = json.dumps(
            {"magnetSpec": {"flow": ["step 1", "step 2"]}, "creationPrompt": "Build it"}
        )

        spec = parse_spec_response(raw)

        self.assertEqual(json.loads(spec.magnet_spec), {"flow": ["step 1", "step 2"]})

    def test_missing_field_is_malformed(self):
        with self.assertRaises(MalformedResponseError):
            parse_spec_response(json.dumps({"magnetSpec": "Spec"}))
        with self.assertRaises(MalformedResponseError):
            parse_spec_response(json.dumps({"magnetSpec": "", "creationPrompt": "Prompt"}))


class IterationResponseTests(unittest.TestCase):
    def _payload(self, **overrides):
        payload = {
            "name": "Better Quiz",
            "summary": "A sharper quiz",
            "detailedDescription": "Longer quiz with scoring.",
            "whyThis": "It fits the feedback.",
            "complexityLevel": "Advanced",
        }
        payload.update(overrides)
        return json.dumps(payload)

    def test_parses_all_fields(self):
        idea = parse_iteration_response(self._payload())

        self.assertEqual(idea.name, "Better Quiz")
        self.assertEqual(idea.detailed_description, "Longer quiz with scoring.")
        self.assertEqual(idea.complexity_level, "Advanced")

    def test_any_missing_field_fails(self):
        for field in ("name", "summary", "detailedDescription", "whyThis", "complexityLevel"):
            with self.subTest(field=field):
                data = json.loads(self._payload())
                del data[field]
                with self.assertRaises(MalformedResponseError):
                    parse_iteration_response(json.dumps(data))

    def test_unknown_complexity_fails(self):
        with self.assertRaises(MalformedResponseError):
            parse_iteration_response(self._payload(complexityLevel="Huge"))


class AutofillResponseTests(unittest.TestCase):
    def test_parses_plain_json_and_clamps_confidence(self):
        raw = json.dumps(
            {"prodDescription": "Bakery", "targetAudience": "Locals", "confidence": 14}
        )

        suggestion = parse_autofill_response(raw, website="https://bakery.com")

        self.assertEqual(suggestion.prod_description, "Bakery")
        self.assertEqual(suggestion.target_audience, "Locals")
        self.assertEqual(suggestion.confidence, 10)
        self.assertEqual(suggestion.website, "https://bakery.com")

    def test_parses_fenced_json(self):
        raw = (
            "Here you go:\n```json\n"
            '{"prodDescription": "CRM", "targetAudience": "Sales teams", "confidence": 7}'
            "\n```"
        )

        suggestion = parse_autofill_response(raw)

        self.assertEqual(suggestion.prod_description, "CRM")
        self.assertEqual(suggestion.confidence, 7)

    def test_parses_object_embedded_in_prose(self):
        raw = 'Sure! {"prodDescription": "Gym {24/7}", "targetAudience": "Shift workers"} Hope that helps.'

        suggestion = parse_autofill_response(raw)

        self.assertEqual(suggestion.prod_description, "Gym {24/7}")
        self.assertIsNone(suggestion.confidence)

    def test_missing_fields_or_no_json_fail(self):
        for raw in ("", "no json here", json.dumps({"prodDescription": "Only this"})):
            with self.subTest(raw=raw):
                with self.assertRaises(MalformedResponseError):
                    parse_autofill_response(raw)


class ComplexityTests(unittest.TestCase):
    def test_normalizes_case_and_whitespace(self):
        self.assertEqual(normalize_complexity(" advanced "), "Advanced")
        self.assertIsNone(normalize_complexity("extreme"))
        self.assertIsNone(normalize_complexity(3))
