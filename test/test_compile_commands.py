"""Tests for compdb/compile_commands.py"""

import os
import logging

import pytest

from compdb.compile_commands import CompileCommand, load_compilation_database, parse_compile_command
from compdb.constants import CompilationDatabaseError

from conftest import write_compile_commands, write_file


@pytest.mark.unit
class TestParseCompileCommand:
    """Test conversion of single JSON records."""

    def test_arguments_list(self):
        record = {"directory": "/build", "file": "../src/a.cc", "arguments": ["clang++", "-c", "../src/a.cc"]}
        assert parse_compile_command(record) == CompileCommand("/build", "../src/a.cc", ["clang++", "-c", "../src/a.cc"])

    def test_command_string_is_shell_split(self):
        record = {"directory": "/build", "file": "a.cc", "command": 'clang++ -DNAME="a b" -I "inc dir" -c a.cc'}
        command = parse_compile_command(record)
        assert command is not None
        assert command.arguments == ["clang++", "-DNAME=a b", "-I", "inc dir", "-c", "a.cc"]

    def test_arguments_preferred_over_command(self):
        record = {"directory": "/build", "file": "a.cc", "arguments": ["clang"], "command": "gcc -c a.cc"}
        assert parse_compile_command(record).arguments == ["clang"]

    def test_missing_directory_is_empty(self):
        command = parse_compile_command({"file": "a.cc", "arguments": ["clang"]})
        assert command.directory == ""

    def test_missing_file_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_compile_command({"directory": "/build", "arguments": ["clang"]}) is None
        assert "without a file" in caplog.text

    def test_missing_command_skipped(self):
        assert parse_compile_command({"directory": "/build", "file": "a.cc"}) is None
        assert parse_compile_command({"directory": "/build", "file": "a.cc", "command": "   "}) is None

    def test_unbalanced_quotes_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_compile_command({"directory": "/build", "file": "a.cc", "command": 'clang "-DX'}) is None
        assert "failed to parse command" in caplog.text


@pytest.mark.unit
class TestLoadCompilationDatabase:
    """Test reading compile_commands.json files."""

    def test_load_records_in_order(self, temp_dir):
        write_compile_commands(
            temp_dir,
            [
                {"directory": temp_dir, "file": "b.cc", "arguments": ["clang++", "b.cc"]},
                {"directory": temp_dir, "file": "a.cc", "command": "clang++ a.cc"},
            ],
        )
        commands = load_compilation_database(temp_dir)
        assert [command.filename for command in commands] == ["b.cc", "a.cc"]
        assert commands[1].arguments == ["clang++", "a.cc"]

    def test_empty_database(self, temp_dir):
        write_compile_commands(temp_dir, [])
        assert load_compilation_database(temp_dir) == []

    def test_invalid_records_skipped(self, temp_dir):
        write_compile_commands(temp_dir, ["not a dict", {"directory": temp_dir}, {"directory": temp_dir, "file": "a.cc", "arguments": ["clang"]}])
        commands = load_compilation_database(temp_dir)
        assert len(commands) == 1
        assert commands[0].filename == "a.cc"

    def test_missing_database_raises(self, temp_dir):
        with pytest.raises(CompilationDatabaseError, match="not found"):
            load_compilation_database(temp_dir)

    def test_malformed_json_raises(self, temp_dir):
        write_file(os.path.join(temp_dir, "compile_commands.json"), "[{]")
        with pytest.raises(CompilationDatabaseError):
            load_compilation_database(temp_dir)

    def test_non_list_raises(self, temp_dir):
        write_file(os.path.join(temp_dir, "compile_commands.json"), '{"file": "a.cc"}')
        with pytest.raises(CompilationDatabaseError, match="expected list"):
            load_compilation_database(temp_dir)
