import unittest

from synthcheck.records import RecordStore, Source


class RecordStoreTests(unittest.TestCase):
    def test_upsert_creates_record_lazily(self) -> None:
        store = RecordStore()
        self.assertNotIn("xs4_33", store)
        store.upsert("xs4_33", Source.PRIMARY_LIST, 2)
        record = store.get("xs4_33")
        self.assertIsNotNone(record)
        self.assertEqual(record.value(Source.PRIMARY_LIST), 2)
        self.assertEqual(len(store), 1)

    def test_later_value_overwrites(self) -> None:
        store = RecordStore()
        store.upsert("xs4_33", Source.SECONDARY_LIST_A, 5)
        store.upsert("xs4_33", Source.SECONDARY_LIST_A, 4)
        self.assertEqual(store.get("xs4_33").value(Source.SECONDARY_LIST_A), 4)

    def test_known_value_never_cleared(self) -> None:
        store = RecordStore()
        store.upsert("xs6_696", Source.WIKI, 3)
        store.upsert("xs6_696", Source.WIKI, None)
        self.assertEqual(store.get("xs6_696").value(Source.WIKI), 3)

    def test_absent_value_is_no_opinion(self) -> None:
        store = RecordStore()
        store.upsert("xs6_696", Source.WIKI, None)
        record = store.get("xs6_696")
        self.assertFalse(record.has_opinion(Source.WIKI))
        self.assertIsNone(record.value(Source.PRIMARY_LIST))

    def test_unknown_field_rejected(self) -> None:
        store = RecordStore()
        with self.assertRaises(ValueError):
            store.upsert("xs4_33", "colour", "blue")

    def test_all_ids_sorted(self) -> None:
        store = RecordStore()
        for cid in ("xs6_696", "xs4_33", "xs5_253"):
            store.upsert(cid, "secondary_index", "1.1")
        self.assertEqual(store.all_ids(), ["xs4_33", "xs5_253", "xs6_696"])

    def test_index_lookup_uses_records_with_index_only(self) -> None:
        store = RecordStore()
        store.upsert("xs4_33", "secondary_index", "4.1")
        store.upsert("xs6_696", Source.WIKI, 4)
        lookup = store.build_index_lookup()
        self.assertEqual(len(lookup), 1)
        self.assertEqual(lookup.resolve("4.1"), "xs4_33")
        self.assertIsNone(lookup.resolve("6.1"))
        self.assertIn("4.1", lookup)
        self.assertNotIn("6.1", lookup)

    def test_index_lookup_is_exact_match(self) -> None:
        store = RecordStore()
        store.upsert("xs4_33", "secondary_index", "4.1")
        lookup = store.build_index_lookup()
        self.assertIsNone(lookup.resolve("04.1"))
        self.assertIsNone(lookup.resolve("4.10"))

    def test_index_lookup_is_a_snapshot(self) -> None:
        store = RecordStore()
        store.upsert("xs4_33", "secondary_index", "4.1")
        lookup = store.build_index_lookup()
        store.upsert("xs5_253", "secondary_index", "5.1")
        self.assertIsNone(lookup.resolve("5.1"))

    def test_duplicate_index_keeps_later_record(self) -> None:
        store = RecordStore()
        store.upsert("xs4_33", "secondary_index", "4.1")
        store.upsert("xs4_252", "secondary_index", "4.1")
        with self.assertLogs("synthcheck.records", level="WARNING"):
            lookup = store.build_index_lookup()
        self.assertEqual(lookup.resolve("4.1"), "xs4_33")

    def test_equality_and_dict(self) -> None:
        first = RecordStore()
        second = RecordStore()
        for store in (first, second):
            store.upsert("xs4_33", "secondary_index", "4.1")
            store.upsert("xs4_33", Source.PRIMARY_LIST, 2)
        self.assertEqual(first, second)
        self.assertEqual(
            first.to_dict()["xs4_33"]["source_values"],
            {"primary_list": 2},
        )
        second.upsert("xs4_33", Source.SECONDARY_LIST_B, 3)
        self.assertNotEqual(first, second)


if __name__ == "__main__":
    unittest.main()
