#!/usr/bin/env python3
"""Tests for compdb/export_utils.py"""

import os
import csv
import json
from typing import Any

import pytest

from compdb.entry_types import Entry
from compdb.file_utils import FilterStatistics
from compdb.export_utils import entries_to_compile_commands, export_compile_commands, export_include_directories_csv, format_project_json
from compdb.project import Project


@pytest.fixture
def project() -> Project:
    project = Project()
    project.set_entries([Entry("/src/a.cc", ["clang++", "-working-directory", "/build", "a.cc"]), Entry("/src/b.c", ["clang", "b.c"])])
    project.quote_include_directories = ["/src/quoted/"]
    project.angle_include_directories = ["/src/include/", "/usr/include/"]
    return project


class TestEntriesToCompileCommands:
    def test_records_in_entry_order(self, project: Project) -> None:
        records = entries_to_compile_commands(project, "/src")
        assert records == [
            {"directory": "/src", "file": "/src/a.cc", "arguments": ["clang++", "-working-directory", "/build", "a.cc"]},
            {"directory": "/src", "file": "/src/b.c", "arguments": ["clang", "b.c"]},
        ]

    def test_arguments_are_copies(self, project: Project) -> None:
        records = entries_to_compile_commands(project, "/src")
        records[0]["arguments"].append("-DCHANGED")
        assert "-DCHANGED" not in project.entries[0].args


class TestFormatProjectJson:
    def test_summary_and_entries(self, project: Project) -> None:
        data = json.loads(format_project_json(project))
        assert data["summary"] == {"entries": 2, "quote_include_directories": 1, "angle_include_directories": 2}
        assert data["entries"][1] == {"file": "/src/b.c", "arguments": ["clang", "b.c"]}
        assert data["angle_include_directories"] == ["/src/include/", "/usr/include/"]

    def test_selected_entries_with_filter_statistics(self, project: Project) -> None:
        stats = FilterStatistics(total=2, matched=1)
        stats.skipped_by_reason['blacklist "*.c"'] += 1
        data = json.loads(format_project_json(project, project.entries[:1], stats))
        assert data["summary"]["entries"] == 1
        assert data["summary"]["filter"] == {"total": 2, "matched": 1, "skipped": 1, "skipped_by_reason": {'blacklist "*.c"': 1}}
        assert [entry["file"] for entry in data["entries"]] == ["/src/a.cc"]

    def test_no_filter_summary_without_statistics(self, project: Project) -> None:
        assert "filter" not in json.loads(format_project_json(project))["summary"]


class TestExportCompileCommands:
    def test_export(self, project: Project, temp_dir: str) -> None:
        output_file = os.path.join(temp_dir, "compile_commands.json")
        assert export_compile_commands(output_file, project, "/src") is True

        with open(output_file, "r") as f:
            data = json.load(f)
        assert [record["file"] for record in data] == ["/src/a.cc", "/src/b.c"]

    def test_export_to_missing_directory_fails(self, project: Project, temp_dir: str, capsys: Any) -> None:
        output_file = os.path.join(temp_dir, "missing", "out.json")
        assert export_compile_commands(output_file, project, "/src") is False
        assert "Failed to export compile commands" in capsys.readouterr().err


class TestExportIncludeDirectoriesCsv:
    def test_export(self, project: Project, temp_dir: str) -> None:
        output_file = os.path.join(temp_dir, "include_dirs.csv")
        assert export_include_directories_csv(output_file, project) is True

        with open(output_file, "r", newline="") as f:
            rows = list(csv.reader(f))
        assert rows == [["Kind", "Path"], ["quote", "/src/quoted/"], ["angle", "/src/include/"], ["angle", "/usr/include/"]]

    def test_export_to_missing_directory_fails(self, project: Project, temp_dir: str) -> None:
        assert export_include_directories_csv(os.path.join(temp_dir, "missing", "dirs.csv"), project) is False
