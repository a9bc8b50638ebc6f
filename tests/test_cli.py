"""Tests for the ``python -m turbounescape`` entry point."""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from turbounescape.__main__ import main


class TestCommandLine(unittest.TestCase):
    def setUp(self) -> None:
        handle, self.path = tempfile.mkstemp()
        with os.fdopen(handle, "wb") as f:
            f.write(b"&timesX &#0; a=1&copy=2")

    def tearDown(self) -> None:
        os.unlink(self.path)

    def run_main(self, argv, encoding="utf-8"):
        out = io.TextIOWrapper(io.BytesIO(), encoding=encoding)
        err = io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            status = main(argv)
        out.flush()
        return status, out.buffer.getvalue().decode("utf-8"), err.getvalue()

    def test_general_context(self) -> None:
        status, out, err = self.run_main([self.path])
        assert status == 0
        assert out == "×X \ufffd a=1©=2"
        assert err == ""

    def test_attribute_context(self) -> None:
        status, out, _ = self.run_main([self.path, "--attribute"])
        assert status == 0
        assert out == "&timesX \ufffd a=1&copy=2"

    def test_errors_go_to_stderr(self) -> None:
        status, _, err = self.run_main([self.path, "--errors"])
        assert status == 0
        assert err.splitlines() == [
            "(0): missing-semicolon-after-character-reference",
            "(8): null-character-reference",
            "(16): missing-semicolon-after-character-reference",
        ]

    def test_non_utf8_stdout_gets_utf8_bytes(self) -> None:
        status, out, err = self.run_main([self.path], encoding="ascii")
        assert status == 0
        assert out == "×X \ufffd a=1©=2"
        assert err == ""

    def test_debug_lines_precede_output(self) -> None:
        status, out, _ = self.run_main([self.path, "--debug"])
        assert status == 0
        lines = out.split("\n")
        assert all(line.startswith("Unescaper: ") for line in lines[:-1])
        assert lines[-1] == "×X \ufffd a=1©=2"

    def test_missing_file(self) -> None:
        status, out, err = self.run_main([self.path + ".missing"])
        assert status == 1
        assert out == ""
        assert "cannot read" in err

    def test_reads_stdin(self) -> None:
        fake_stdin = mock.Mock()
        fake_stdin.buffer = io.BytesIO(b"&lt;p&gt;")
        with mock.patch("sys.stdin", fake_stdin):
            status, out, _ = self.run_main([])
        assert status == 0
        assert out == "<p>"


if __name__ == "__main__":
    unittest.main()
