"""
Tests for the devtoolsctl CLI.
"""

import json

from apollo_devtools import __version__
from apollo_devtools.cli.devtoolsctl import main, read_snapshots


class TestReplay:
    """Replaying recorded snapshots."""

    def test_prints_changes_per_tick(self, tmp_path, capsys):
        path = tmp_path / "snapshots.jsonl"
        path.write_text('["A", "B"]\n\n["A", "B", "C"]\n["C"]\n')

        assert main(["replay", str(path)]) == 0

        lines = capsys.readouterr().out.strip().splitlines()
        records = [json.loads(line) for line in lines]
        assert [(r["tick"], r["change"], r["data"]) for r in records] == [
            (2, "added", "C"),
            (3, "removed", "A"),
            (3, "removed", "B"),
        ]

    def test_invalid_line(self, tmp_path, capsys):
        path = tmp_path / "snapshots.jsonl"
        path.write_text('["A"]\n{"not": "a list"}\n')

        assert main(["replay", str(path)]) == 1
        assert "line 2" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main(["replay", str(tmp_path / "missing.jsonl")]) == 1

    def test_read_snapshots_skips_blank_lines(self, tmp_path):
        path = tmp_path / "snapshots.jsonl"
        path.write_text('[1]\n\n[1, 2]\n')
        assert read_snapshots(str(path)) == [[1], [1, 2]]


class TestCacheCommand:
    """Inspecting a cache extract."""

    def test_lists_matching_entries(self, tmp_path, capsys):
        path = tmp_path / "extract.json"
        path.write_text(json.dumps({"User:1": {"name": "Ada"}, "Post:7": {"title": "Hello"}}))

        assert main(["cache", str(path), "--search", "post"]) == 0

        out = capsys.readouterr().out
        assert "Post:7" in out
        assert "User:1" not in out
        assert "overall size" in out

    def test_rejects_non_object(self, tmp_path):
        path = tmp_path / "extract.json"
        path.write_text("[1, 2]")
        assert main(["cache", str(path)]) == 1


class TestMisc:
    """Version and help."""

    def test_version(self, capsys):
        assert main(["version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_no_command(self, capsys):
        assert main([]) == 0

    def test_doctor_unreachable_api(self, capsys):
        assert main(["doctor", "--url", "http://127.0.0.1:9", "--timeout", "0.5"]) == 1
