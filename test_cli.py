#!/usr/bin/env python3
"""
test_cli.py - Tests for the grabproto command line

Schema generation is patched out except in the missing-install case, which
runs for real (it fails before any .NET code is needed).
"""

import io
import sys
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from grabproto import cli

SCHEMA = 'syntax = "proto3";\npackage vintagestory;\n\nmessage Packet_Client {\n   int32 Id = 1;\n}\n'


class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = cli.main(list(argv))
        return code, out.getvalue()

    def test_01_writes_output_file(self):
        output = self.root / "vintagestory.proto"
        with mock.patch.object(cli, "generate_schema", return_value=SCHEMA):
            code, out = self.run_cli("--input", str(self.root), "--output", str(output))
        resolved = output.resolve()
        self.assertEqual(code, 0)
        self.assertEqual(resolved.read_text(encoding="utf-8"), SCHEMA)
        self.assertEqual(out, f"Wrote to: {resolved}\n")

    def test_02_prints_without_output(self):
        with mock.patch.object(cli, "generate_schema", return_value=SCHEMA):
            code, out = self.run_cli("--input", str(self.root))
        self.assertEqual(code, 0)
        self.assertEqual(out, SCHEMA + "\n")

    def test_03_passes_input_and_package(self):
        with mock.patch.object(cli, "generate_schema", return_value=SCHEMA) as generate:
            self.run_cli("-i", str(self.root), "--package", "vs.proto")
        generate.assert_called_once_with(str(self.root), package="vs.proto")

    def test_04_default_package(self):
        with mock.patch.object(cli, "generate_schema", return_value=SCHEMA) as generate:
            self.run_cli("-i", str(self.root))
        generate.assert_called_once_with(str(self.root), package="vintagestory")

    def test_05_uses_default_location(self):
        with mock.patch.object(cli, "find_default_location", return_value=self.root), \
                mock.patch.object(cli, "generate_schema", return_value=SCHEMA) as generate:
            code, _ = self.run_cli()
        self.assertEqual(code, 0)
        generate.assert_called_once_with(self.root, package="vintagestory")

    def test_06_no_default_location(self):
        """Nothing found: no load is attempted."""
        with mock.patch.object(cli, "find_default_location", return_value=None), \
                mock.patch.object(cli, "generate_schema") as generate:
            code, out = self.run_cli()
        self.assertEqual(code, 1)
        self.assertIn("No Vintage Story installation found", out)
        generate.assert_not_called()

    def test_07_failure_writes_nothing(self):
        output = self.root / "vintagestory.proto"
        with mock.patch.object(cli, "generate_schema", return_value=None):
            code, out = self.run_cli("-i", str(self.root), "-o", str(output))
        self.assertEqual(code, 1)
        self.assertFalse(output.exists())
        self.assertNotIn("Wrote to", out)

    def test_08_missing_installation(self):
        code, out = self.run_cli("--input", str(self.root / "missing"))
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Error: Installation directory not found"))

    def test_09_setup_logging_levels(self):
        logger = cli.setup_logging(verbose=True)
        self.assertEqual(logger.level, cli.logging.DEBUG)
        logger = cli.setup_logging(verbose=False)
        self.assertEqual(logger.level, cli.logging.WARNING)
        self.assertEqual(len(logger.handlers), 1)

    def test_10_output_keeps_line_endings(self):
        """CRLF schema text is written byte for byte."""
        schema = SCHEMA.replace("\n", "\r\n")
        output = self.root / "vintagestory.proto"
        with mock.patch.object(cli, "generate_schema", return_value=schema):
            code, _ = self.run_cli("-i", str(self.root), "-o", str(output))
        self.assertEqual(code, 0)
        self.assertEqual(output.read_bytes(), schema.encode("utf-8"))

    def test_11_unwritable_output(self):
        output = self.root / "missing-dir" / "vintagestory.proto"
        with mock.patch.object(cli, "generate_schema", return_value=SCHEMA):
            code, out = self.run_cli("-i", str(self.root), "-o", str(output))
        self.assertEqual(code, 1)
        self.assertTrue(out.startswith("Error: "))
        self.assertNotIn("Wrote to", out)
        self.assertFalse(output.exists())

    def test_12_explicit_empty_input_is_not_auto_detected(self):
        with mock.patch.object(cli, "find_default_location") as find_default:
            code, out = self.run_cli("--input", "")
        self.assertEqual(code, 1)
        find_default.assert_not_called()
        self.assertEqual(out, "Error: No installation directory given\n")


if __name__ == "__main__":
    unittest.main(verbosity=2)
