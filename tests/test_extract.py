import unittest

from synthcheck.extract import (
    COST_EXTRACTOR,
    IDENTIFIER_EXTRACTOR,
    PatternExtractor,
    apply_wiki_page,
    extract_wiki_fields,
    parse_cost_token,
)
from synthcheck.records import RecordStore, Source

BEEHIVE_WIKITEXT = """{{Still life
|name = Beehive
|cells = 6
|synthesis = 2
|synthesisRLE = true
}}
'''Beehive''' is the most common still life.
{{LinkCatagolue|b3s23/xs6_696}}
"""


class PatternExtractorTests(unittest.TestCase):
    def test_cost_token(self) -> None:
        self.assertEqual(COST_EXTRACTOR.extract("|synthesis = 12|foo"), "12")
        self.assertEqual(COST_EXTRACTOR.extract("|synthesis=7\n"), "7")

    def test_cost_token_first_occurrence(self) -> None:
        self.assertEqual(COST_EXTRACTOR.extract("synthesis = 9\nsynthesis = 4"), "9")

    def test_cost_token_absent(self) -> None:
        self.assertIsNone(COST_EXTRACTOR.extract("|cells = 6"))
        self.assertIsNone(COST_EXTRACTOR.extract(""))
        self.assertIsNone(COST_EXTRACTOR.extract(None))

    def test_identifier_inside_template(self) -> None:
        self.assertEqual(IDENTIFIER_EXTRACTOR.extract(BEEHIVE_WIKITEXT), "xs6_696")
        self.assertEqual(IDENTIFIER_EXTRACTOR.extract("{{LinkCatagolue|xs14_g88m952z121}}"), "xs14_g88m952z121")

    def test_identifier_outside_template_ignored(self) -> None:
        self.assertIsNone(IDENTIFIER_EXTRACTOR.extract("See xs6_696 on Catagolue."))

    def test_compiles_string_patterns(self) -> None:
        extractor = PatternExtractor("cells", r"cells\s*=\s*(\d+)")
        self.assertEqual(extractor.extract(BEEHIVE_WIKITEXT), "6")


class WikiFieldsTests(unittest.TestCase):
    def test_parse_cost_token(self) -> None:
        self.assertEqual(parse_cost_token("3"), 3)
        self.assertIsNone(parse_cost_token("unknown"))
        self.assertIsNone(parse_cost_token("999"))
        self.assertIsNone(parse_cost_token(None))

    def test_extract_both_fields(self) -> None:
        fields = extract_wiki_fields(BEEHIVE_WIKITEXT)
        self.assertEqual(fields.canonical_id, "xs6_696")
        self.assertEqual(fields.cost, 2)
        self.assertEqual(fields.raw_cost, "2")

    def test_page_without_identifier_changes_nothing(self) -> None:
        store = RecordStore()
        store.upsert("xs6_696", Source.PRIMARY_LIST, 2)
        before = store.to_dict()
        self.assertFalse(apply_wiki_page(store, "Beehive", "{{Still life\n|synthesis = 2\n}}"))
        self.assertEqual(store.to_dict(), before)

    def test_page_attaches_title_and_cost(self) -> None:
        store = RecordStore()
        store.upsert("xs6_696", Source.PRIMARY_LIST, 2)
        self.assertTrue(apply_wiki_page(store, "Beehive", BEEHIVE_WIKITEXT))
        record = store.get("xs6_696")
        self.assertEqual(record.display_title, "Beehive")
        self.assertEqual(record.value(Source.WIKI), 2)
        self.assertEqual(record.value(Source.PRIMARY_LIST), 2)

    def test_page_without_cost_materializes_record(self) -> None:
        store = RecordStore()
        text = "{{Still life\n|name = Loaf\n}}\n{{LinkCatagolue|b3s23/xs7_2596}}"
        self.assertTrue(apply_wiki_page(store, "Loaf", text))
        record = store.get("xs7_2596")
        self.assertEqual(record.display_title, "Loaf")
        self.assertIn(Source.WIKI, record.source_values)
        self.assertIsNone(record.value(Source.WIKI))
        self.assertIsNone(record.wiki_token)

    def test_later_page_without_cost_keeps_token(self) -> None:
        store = RecordStore()
        apply_wiki_page(store, "Beehive", "|synthesis = 5\n{{LinkCatagolue|b3s23/xs6_696}}")
        apply_wiki_page(store, "Beehive (alt)", "{{LinkCatagolue|b3s23/xs6_696}}")
        record = store.get("xs6_696")
        self.assertEqual(record.display_title, "Beehive (alt)")
        self.assertEqual(record.value(Source.WIKI), 5)
        self.assertEqual(record.wiki_token, "5")


if __name__ == "__main__":
    unittest.main()
