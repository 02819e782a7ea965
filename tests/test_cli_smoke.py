import io
import json
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from pagebook.cli import main


class TestCLISmoke(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.dir = Path(self._td.name)

    def tearDown(self):
        self._td.cleanup()

    def run_cli(self, *args):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            rc = main(["--dir", str(self.dir), *args])
        return rc, out.getvalue(), err.getvalue()

    def test_save_show_export(self):
        rc, out, _ = self.run_cli("save", "--page", "5", "--title", "Hi", "--content", "World")
        self.assertEqual(rc, 0)
        self.assertIn("page 5/100", out)
        rc, out, _ = self.run_cli("show", "--page", "5")
        self.assertIn("title:   Hi", out)
        self.assertIn("World", out)

        csv_path = self.dir / "out.csv"
        rc, _, _ = self.run_cli("export-csv", "-o", str(csv_path))
        self.assertEqual(rc, 0)
        lines = csv_path.read_text(encoding="utf-8").splitlines()
        self.assertEqual(lines[0], "notebook,page,date,time,title,content")
        self.assertEqual(lines[5], "My First Notebook,5,,,Hi,World")

    def test_create_list_and_blank_name(self):
        rc, out, _ = self.run_cli("create", "Work")
        self.assertEqual(rc, 0)
        rc, out, _ = self.run_cli("list")
        self.assertIn("* ", out.splitlines()[1])
        self.assertIn("Work", out.splitlines()[1])
        rc, _, err = self.run_cli("create", "   ")
        self.assertEqual(rc, 1)
        self.assertIn("Error:", err)

    def test_json_export_import_roundtrip(self):
        self.run_cli("save", "--page", "2", "--title", "kept")
        backup = self.dir / "backup.json"
        self.assertEqual(self.run_cli("export-json", "-o", str(backup))[0], 0)
        self.run_cli("erase", "--yes")
        rc, out, _ = self.run_cli("show", "--page", "2")
        self.assertIn("never saved", out)
        self.assertEqual(self.run_cli("import", str(backup))[0], 0)
        rc, out, _ = self.run_cli("show", "--page", "2")
        self.assertIn("title:   kept", out)

    def test_import_rejects_bad_document(self):
        bad = self.dir / "bad.json"
        bad.write_text(json.dumps({"pages": []}), encoding="utf-8")
        rc, _, err = self.run_cli("import", str(bad))
        self.assertEqual(rc, 1)
        self.assertIn("notebooks", err)

    def test_info(self):
        rc, out, _ = self.run_cli("info")
        self.assertEqual(rc, 0)
        self.assertIn("Current:   My First Notebook", out)
        self.assertIn("KB", out)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
