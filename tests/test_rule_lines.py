import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rejection_analyzer.extraction.rule_lines import extract_rule_lines, is_rule_line  # noqa: E402
from rejection_analyzer.schemas.analysis import PageText  # noqa: E402


class RuleLineFilterTests(unittest.TestCase):
    def test_keeps_keyword_lines_and_normalizes_whitespace(self):
        pages = [
            PageText(
                url="https://example.org/apply",
                text="Welcome to the portal\r\n   Applicants   must be at least 18  \nContact us by phone",
            )
        ]
        self.assertEqual(extract_rule_lines(pages), ["Applicants must be at least 18"])

    def test_duplicates_across_pages_collapse(self):
        pages = [
            PageText(url="https://example.org/a", text="Open to residents of Canada only"),
            PageText(url="https://example.org/b", text="Open to   residents of Canada only\nStudents only"),
        ]
        self.assertEqual(
            extract_rule_lines(pages),
            ["Open to residents of Canada only", "Students only"],
        )

    def test_length_bounds_are_inclusive(self):
        self.assertFalse(is_rule_line("Age 18"))
        self.assertTrue(is_rule_line("Age 18+!"))
        self.assertTrue(is_rule_line("must " + "x" * 275))
        self.assertFalse(is_rule_line("must " + "x" * 276))

    def test_lines_without_rule_vocabulary_are_dropped(self):
        pages = [PageText(url="unknown", text="Our office hours are nine to five on weekdays")]
        self.assertEqual(extract_rule_lines(pages), [])

    def test_accepts_raw_payload_mapping(self):
        payload = {"pages": [{"url": "https://example.org", "text": "Maximum income is 50,000"}, {"url": "x"}]}
        self.assertEqual(extract_rule_lines(payload), ["Maximum income is 50,000"])

    def test_empty_input_returns_empty_list(self):
        self.assertEqual(extract_rule_lines([]), [])


if __name__ == "__main__":
    unittest.main()
