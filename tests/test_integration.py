"""Integration tests — E2E via subprocess against sample.log."""

import json
import os
import subprocess
import sys
import tempfile
import unittest

SAMPLE_LOG = os.path.join(os.path.dirname(__file__), "..", "logs", "sample.log")
MAIN_PY = os.path.join(os.path.dirname(__file__), "..", "main.py")


def _run(*args: str) -> subprocess.CompletedProcess:
    """Run main.py with given args, return CompletedProcess."""
    return subprocess.run(
        [sys.executable, MAIN_PY, *args],
        capture_output=True,
        text=True,
    )


class TestReports(unittest.TestCase):
    def test_text_output(self):
        result = _run(SAMPLE_LOG)
        self.assertEqual(result.returncode, 0)
        lines = result.stdout.strip().split("\n")
        self.assertEqual(lines[4], "vpus is:")
        self.assertEqual(len(lines), 8)
        self.assertEqual(lines[3], "{11 [ERROR] [0/Kernel|7] panic averted, retrying}")

    def test_json_output(self):
        result = _run(SAMPLE_LOG, "--output", "json")
        self.assertEqual(result.returncode, 0)
        lines = result.stdout.strip().split("\n")
        numbers = [json.loads(l)["line_number"] for l in lines if l != "vpus is:"]
        self.assertEqual(numbers, [5, 7, 10, 11, 7, 10, 11])

    def test_stats_go_to_stderr(self):
        result = _run(SAMPLE_LOG, "--stats")
        self.assertEqual(result.returncode, 0)
        self.assertIn("Lines read: 12", result.stderr)
        self.assertNotIn("Lines read", result.stdout)

    def test_path_from_env(self):
        env = dict(os.environ, QUARK_LOG_PATH=SAMPLE_LOG)
        result = subprocess.run(
            [sys.executable, MAIN_PY], capture_output=True, text=True, env=env,
        )
        self.assertEqual(result.returncode, 0)
        self.assertIn("vpus is:", result.stdout)


class TestRawBytes(unittest.TestCase):
    def test_undecodable_bytes_written_back_unchanged(self):
        tmpdir = tempfile.mkdtemp()
        path = os.path.join(tmpdir, "quark.log")
        with open(path, "wb") as f:
            f.write(b"[INFO] [\xff/taskA|1] xxxxxxxx\n[INFO] [\xfe/taskB|1] xxxxxxxx\n")
        result = subprocess.run([sys.executable, MAIN_PY, path], capture_output=True)
        self.assertEqual(result.returncode, 0)
        self.assertEqual(
            result.stdout.splitlines(),
            [
                b"{1 [INFO] [\xff/taskA|1] xxxxxxxx}",
                b"{2 [INFO] [\xfe/taskB|1] xxxxxxxx}",
                b"vpus is:",
                b"{1 [INFO] [\xff/taskA|1] xxxxxxxx}",
                b"{2 [INFO] [\xfe/taskB|1] xxxxxxxx}",
            ],
        )


class TestFailures(unittest.TestCase):
    def test_nonexistent_file(self):
        result = _run("/nonexistent/quark.log")
        self.assertEqual(result.returncode, 1)
        self.assertEqual(result.stdout, "")
        self.assertIn("cannot open", result.stderr)

    def test_scan_error_after_primary_report(self):
        tmpdir = tempfile.mkdtemp()
        path = os.path.join(tmpdir, "quark.log")
        with open(path, "w") as f:
            f.write("[INFO] [0/task1|1] kept before failure\n")
            f.write("y" * (64 * 1024 + 10) + "\n")
        result = _run(path)
        self.assertEqual(result.returncode, 1)
        self.assertEqual(result.stdout, "{1 [INFO] [0/task1|1] kept before failure}\n")
        self.assertIn("exceeds", result.stderr)

    def test_bad_output_format_env(self):
        env = dict(os.environ, QUARK_OUTPUT_FORMAT="xml")
        result = subprocess.run(
            [sys.executable, MAIN_PY, SAMPLE_LOG], capture_output=True, text=True, env=env,
        )
        self.assertEqual(result.returncode, 2)

    def test_bad_yaml_values_exit_2(self):
        tmpdir = tempfile.mkdtemp()
        for body in ("prefixes: \"[INFO] [\"\n", "encoding: bogus\n"):
            path = os.path.join(tmpdir, "scan.yaml")
            with open(path, "w") as f:
                f.write(body)
            result = _run(SAMPLE_LOG, "--config", path)
            self.assertEqual(result.returncode, 2, body)
            self.assertEqual(result.stdout, "")
            self.assertIn("Invalid configuration", result.stderr)


if __name__ == "__main__":
    unittest.main()
