import json
import tempfile
import unittest
from pathlib import Path

from synthcheck.records import Source
from synthcheck.utils import DebugDump, format_elapsed


class DebugDumpTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_writes_labelled_json_and_closes(self) -> None:
        path = self.root / "logs" / "dumper.txt"
        with DebugDump(path) as dump:
            self.assertTrue(dump.active)
            dump.write("records", {"xs4_33": {Source.PRIMARY_LIST.value: 2, "source": Source.WIKI}})
        self.assertFalse(dump.active)
        label, body = path.read_text(encoding="utf-8").split("\n", 1)
        self.assertEqual(label, "# records")
        self.assertEqual(json.loads(body), {"xs4_33": {"primary_list": 2, "source": "wiki"}})

    def test_disabled_dump_writes_nothing(self) -> None:
        path = self.root / "dumper.txt"
        with DebugDump(path, enabled=False) as dump:
            dump.write("records", {})
        self.assertFalse(path.exists())

    def test_open_failure_is_tolerated(self) -> None:
        # A directory in place of the file makes open() fail.
        path = self.root / "dumper.txt"
        path.mkdir()
        with DebugDump(path) as dump:
            self.assertFalse(dump.active)
            dump.write("records", {"xs4_33": {}})


class FormatElapsedTests(unittest.TestCase):
    def test_format(self) -> None:
        self.assertEqual(format_elapsed(0), "00:00:00")
        self.assertEqual(format_elapsed(3725.9), "01:02:05")
        self.assertEqual(format_elapsed(-4), "00:00:00")


if __name__ == "__main__":
    unittest.main()
