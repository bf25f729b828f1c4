import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rejection_analyzer.rules import (  # noqa: E402
    collect_required_documents,
    detect_country_requirement,
    detect_required_documents,
    detect_student_requirement,
    normalize_country,
    parse_age_constraint,
    parse_income_constraint,
    parse_rule_line,
)


class AgeConstraintTests(unittest.TestCase):
    def test_pattern_cascade(self):
        between = parse_age_constraint("Applicants must be between 18 and 25 years of age")
        self.assertEqual((between.min, between.max), (18, 25))

        self.assertEqual(parse_age_constraint("Minimum age 21").min, 21)
        self.assertEqual(parse_age_constraint("Ages 16+ welcome").min, 16)

        under = parse_age_constraint("Applicants must be under 18")
        self.assertEqual(under.max, 18)
        self.assertTrue(under.max_exclusive)

        up_to = parse_age_constraint("Must be no older than 35 years old")
        self.assertEqual(up_to.max, 35)
        self.assertFalse(up_to.max_exclusive)

    def test_inverted_range_is_treated_as_unbounded(self):
        constraint = parse_age_constraint("Applicants aged between 30 and 18")
        self.assertTrue(constraint.is_empty)

    def test_age_mentioned_without_bound_is_recorded(self):
        parsed = parse_rule_line("Age restrictions apply to this program")
        self.assertIsNotNone(parsed.age)
        self.assertTrue(parsed.age.is_empty)

    def test_applicant_bound_without_age_word(self):
        parsed = parse_rule_line("Applicants must be at least 18")
        self.assertEqual(parsed.age.min, 18)

    def test_non_age_quantities_are_not_age_bounds(self):
        self.assertIsNone(parse_rule_line("Applicants must be at least 12 months into their course").age)
        self.assertIsNone(parse_rule_line("Applicants must be enrolled in at least 12 credits").age)
        self.assertIsNone(parse_rule_line("Applicants must be under 5 years post-PhD").age)
        self.assertIsNone(parse_rule_line("Household income must be below 100 thousand").age)
        self.assertIsNone(parse_rule_line("Students must be over 2 semesters into their degree").age)

    def test_years_old_still_counts_as_age_bound(self):
        parsed = parse_rule_line("Applicants must be under 25 years old")
        self.assertEqual(parsed.age.max, 25)
        self.assertTrue(parsed.age.max_exclusive)


class IncomeConstraintTests(unittest.TestCase):
    def test_comma_grouped_minimum(self):
        self.assertEqual(parse_income_constraint("Annual household income must be at least $30,000").min, 30000)

    def test_between_and_maximum(self):
        between = parse_income_constraint("Income between 20,000 and 50,000")
        self.assertEqual((between.min, between.max), (20000, 50000))
        self.assertEqual(parse_income_constraint("Income must be under 40000").max, 40000)

    def test_income_line_without_numbers_has_no_bound(self):
        parsed = parse_rule_line("Income must be reported on the form")
        self.assertIsNotNone(parsed.income)
        self.assertTrue(parsed.income.is_empty)
        self.assertIsNone(parsed.age)


class StudentAndResidencyTests(unittest.TestCase):
    def test_student_directions(self):
        self.assertEqual(detect_student_requirement("This grant is for students only"), "student")
        self.assertEqual(detect_student_requirement("Applicants who are not a student may apply"), "non-student")
        self.assertIsNone(detect_student_requirement("Student discounts available"))
        self.assertIsNone(detect_student_requirement("Must be employed"))

    def test_country_capture_and_fallbacks(self):
        self.assertEqual(detect_country_requirement("Must be a resident of Canada, or Mexico"), "canada")
        self.assertEqual(detect_country_requirement("USA residents only"), "united states")
        self.assertIsNone(detect_country_requirement("Residents must apply online"))

    def test_country_normalization(self):
        self.assertEqual(normalize_country("U.S.A."), "united states")
        self.assertEqual(normalize_country(" UK "), "united kingdom")
        self.assertEqual(normalize_country("Canada"), "canada")
        self.assertEqual(normalize_country(None), "")


class RequiredDocumentTests(unittest.TestCase):
    def test_requirement_phrase_is_needed(self):
        self.assertEqual(detect_required_documents("Applicants must provide a passport").categories, ["passport"])
        self.assertEqual(detect_required_documents("Passport holders are eligible").categories, [])

    def test_qualifiers_are_collected(self):
        detected = collect_required_documents(
            [
                "Applicants must provide bank statements from the last 3 months",
                "Upload your transcript",
            ]
        )
        self.assertIn("bank_statement", detected.categories)
        self.assertIn("income", detected.categories)
        self.assertIn("transcript", detected.categories)
        self.assertEqual(detected.qualifiers, ["recent_3_months"])


if __name__ == "__main__":
    unittest.main()
