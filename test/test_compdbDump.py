#!/usr/bin/env python3
"""Tests for compdbDump.py"""

import os
import json
from typing import Any

import pytest

import compdbDump
from compdb.constants import EXIT_SUCCESS, ProjectDirectoryError

from conftest import write_compile_commands, write_file


@pytest.fixture
def project_dir(temp_dir: str) -> str:
    build_dir = os.path.join(temp_dir, "build")
    write_compile_commands(
        temp_dir,
        [
            {"directory": build_dir, "file": "../src/main.cc", "command": "goma clang++ -I../include -c ../src/main.cc -o main.o"},
            {"directory": build_dir, "file": "../third_party/lib.cc", "arguments": ["clang++", "-iquote", "../q", "../third_party/lib.cc"]},
        ],
    )
    return temp_dir


class TestParseArguments:
    def test_defaults(self) -> None:
        args = compdbDump.parse_arguments(["/project"])
        assert args.project_directory == "/project"
        assert args.compilation_db_dir == ""
        assert args.extra_flag == []
        assert args.whitelist == []
        assert args.blacklist == []
        assert args.format == "text"

    def test_repeatable_options(self) -> None:
        args = compdbDump.parse_arguments(["/project", "--extra-flag=-DA", "--extra-flag=-DB", "--blacklist", "*/a/*", "--blacklist", "*/b/*"])
        assert args.extra_flag == ["-DA", "-DB"]
        assert args.blacklist == ["*/a/*", "*/b/*"]


class TestMain:
    """Tests for compdbDump.main()."""

    def test_text_output(self, project_dir: str, capsys: Any) -> None:
        assert compdbDump.main([project_dir, "--resource-dir", project_dir, "--no-color"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "[1/2] " + os.path.join(project_dir, "src", "main.cc") in out
        assert "clang++ -working-directory " + os.path.join(project_dir, "build") + " -xc++ -std=c++14 -I../include ../src/main.cc" in out
        assert "goma" not in out
        assert os.path.join(project_dir, "include") + os.sep in out
        assert "2 → 2" in out

    def test_blacklist(self, project_dir: str, capsys: Any) -> None:
        assert compdbDump.main([project_dir, "--resource-dir", project_dir, "--no-color", "--blacklist", "*/third_party/*"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "[1/2]" in out
        assert "[2/2]" not in out
        assert '2 → 1 | Skipped: 1 blacklist "*/third_party/*"' in out

    def test_json_output(self, project_dir: str, capsys: Any) -> None:
        assert compdbDump.main([project_dir, "--resource-dir", project_dir, "--format", "json", "--extra-flag=-DEXTRA"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["entries"] == 2
        assert data["quote_include_directories"] == [os.path.join(project_dir, "q") + os.sep]
        assert data["entries"][0]["arguments"][-4:] == ["-DEXTRA", "-resource-dir=" + project_dir, "-Wno-unknown-warning-option", "-fparse-all-comments"]

    def test_json_output_applies_blacklist(self, project_dir: str, capsys: Any) -> None:
        argv = [project_dir, "--resource-dir", project_dir, "--format", "json", "--blacklist", "*/third_party/*", "--log-skipped"]
        assert compdbDump.main(argv) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert [entry["file"] for entry in data["entries"]] == [os.path.join(project_dir, "src", "main.cc")]
        assert data["summary"]["entries"] == 1
        assert data["summary"]["filter"] == {"total": 2, "matched": 1, "skipped": 1, "skipped_by_reason": {'blacklist "*/third_party/*"': 1}}

    def test_json_output_whitelist_overrides_blacklist(self, project_dir: str, capsys: Any) -> None:
        argv = [project_dir, "--resource-dir", project_dir, "--format", "json", "--blacklist", "*.cc", "--whitelist", "*/main.cc"]
        assert compdbDump.main(argv) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert [os.path.basename(entry["file"]) for entry in data["entries"]] == ["main.cc"]
        assert data["summary"]["filter"]["skipped"] == 1

    def test_flag_file_project(self, source_tree: str, capsys: Any) -> None:
        write_file(os.path.join(source_tree, ".compdb_flags"), "-DFROM_FLAGS\n")
        assert compdbDump.main([source_tree, "--resource-dir", source_tree, "--format", "json"]) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["entries"] == 4
        assert all("-DFROM_FLAGS" in entry["arguments"] for entry in data["entries"])

    def test_exports(self, project_dir: str, temp_dir: str, capsys: Any) -> None:
        json_file = os.path.join(temp_dir, "normalized.json")
        csv_file = os.path.join(temp_dir, "dirs.csv")
        argv = [project_dir, "--resource-dir", project_dir, "--no-color", "--export-compile-commands", json_file, "--export-include-dirs", csv_file]
        assert compdbDump.main(argv) == EXIT_SUCCESS

        with open(json_file, "r") as f:
            records = json.load(f)
        assert [record["directory"] for record in records] == [project_dir, project_dir]
        assert os.path.isfile(csv_file)

    def test_empty_project_warns(self, temp_dir: str, capsys: Any) -> None:
        assert compdbDump.main([temp_dir, "--resource-dir", temp_dir, "--no-color"]) == EXIT_SUCCESS
        assert "No compilation entries found" in capsys.readouterr().err

    def test_missing_project_directory(self, temp_dir: str) -> None:
        with pytest.raises(ProjectDirectoryError):
            compdbDump.main([os.path.join(temp_dir, "missing"), "--resource-dir", temp_dir])
