import json
import sys
import tempfile
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rejection_analyzer.taxonomy import LocalDocumentTaxonomy, get_default_document_taxonomy  # noqa: E402


class DocumentTaxonomyTests(unittest.TestCase):
    def test_default_tables(self):
        taxonomy = get_default_document_taxonomy()
        self.assertIs(taxonomy, get_default_document_taxonomy())
        self.assertEqual(taxonomy.document_categories["passport"][0], "passport")
        self.assertEqual(
            taxonomy.mandatory_categories,
            ("passport", "transcript", "bank_statement", "income", "id", "visa", "address"),
        )
        self.assertIn("recent_3_months", taxonomy.qualifiers)
        self.assertIn(("ssn", "Social Security Number (SSN) card"), taxonomy.region_documents["United States"])

    def test_tables_are_read_only(self):
        taxonomy = get_default_document_taxonomy()
        with self.assertRaises(TypeError):
            taxonomy.document_categories["passport"] = ("anything",)

    def test_custom_file_is_lowercased(self):
        payload = {
            "document_categories": {"Permit": ["Work Permit"]},
            "mandatory_categories": ["permit", "unknown"],
        }
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = Path(tmp_dir) / "keywords.json"
            path.write_text(json.dumps(payload), encoding="utf-8")
            taxonomy = LocalDocumentTaxonomy(path)
        self.assertEqual(dict(taxonomy.document_categories), {"permit": ("work permit",)})
        self.assertEqual(taxonomy.mandatory_categories, ("permit",))
        self.assertEqual(dict(taxonomy.qualifiers), {})


if __name__ == "__main__":
    unittest.main()
