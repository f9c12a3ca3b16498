"""Tests for compdb/loader.py"""

import os
import logging

import pytest

from compdb.entry_types import ProjectConfig
from compdb.loader import load_compilation_entries_from_directory, load_from_directory_listing

from conftest import write_compile_commands, write_file

TRAILER = ["-resource-dir=/res", "-Wno-unknown-warning-option", "-fparse-all-comments"]


def make_config(project_dir: str, **kwargs) -> ProjectConfig:
    return ProjectConfig(project_dir=project_dir, resource_dir="/res", **kwargs)


@pytest.mark.unit
class TestDirectoryListing:
    """Test loading entries from a directory scan and the flag file."""

    def test_flag_file_applied_to_every_source(self, source_tree):
        write_file(os.path.join(source_tree, ".compdb_flags"), "# flags\n-DFOO\n-Iinclude\n")
        config = make_config(source_tree)

        entries = load_from_directory_listing(config)

        assert [entry.filename for entry in entries] == [
            os.path.join(source_tree, "src", "main.cc"),
            os.path.join(source_tree, "src", "util.c"),
            os.path.join(source_tree, "src", "view.mm"),
            os.path.join(source_tree, "third_party", "lib", "lib.cpp"),
        ]
        main_cc = entries[0]
        assert main_cc.args == [
            "clang++",
            "-working-directory",
            source_tree,
            "-xc++",
            "-std=c++14",
            "-DFOO",
            "-Iinclude",
            main_cc.filename,
        ] + TRAILER
        assert entries[1].args[:5] == ["clang", "-working-directory", source_tree, "-xc", "-std=gnu11"]
        assert config.angle_dirs == {os.path.join(source_tree, "include")}

    def test_headers_and_hidden_directories_skipped(self, source_tree):
        entries = load_from_directory_listing(make_config(source_tree))
        filenames = [entry.filename for entry in entries]
        assert os.path.join(source_tree, "src", "util.h") not in filenames
        assert not any(".git" in filename for filename in filenames)

    def test_no_arguments_warns(self, source_tree, caplog):
        with caplog.at_level(logging.WARNING):
            entries = load_from_directory_listing(make_config(source_tree))
        assert len(entries) == 4
        assert "No compiler arguments found" in caplog.text

    def test_extra_flags_suppress_warning(self, source_tree, caplog):
        with caplog.at_level(logging.WARNING):
            entries = load_from_directory_listing(make_config(source_tree, extra_flags=["-DEXTRA"]))
        assert "No compiler arguments found" not in caplog.text
        assert all("-DEXTRA" in entry.args for entry in entries)

    def test_empty_project(self, temp_dir):
        assert load_from_directory_listing(make_config(temp_dir)) == []


@pytest.mark.unit
class TestCompilationDatabase:
    """Test loading entries from compile_commands.json."""

    def test_entries_from_database(self, temp_dir):
        build_dir = os.path.join(temp_dir, "build")
        write_compile_commands(
            temp_dir,
            [
                {"directory": build_dir, "file": "../src/main.cc", "arguments": ["clang++", "-Iinc", "-c", "../src/main.cc", "-o", "main.o"]},
                {"directory": build_dir, "file": os.path.join(temp_dir, "src", "util.c"), "command": "gcc -iquote ../q -c ../src/util.c"},
            ],
        )
        config = make_config(temp_dir)

        entries = load_compilation_entries_from_directory(config)

        assert [entry.filename for entry in entries] == [os.path.join(temp_dir, "src", "main.cc"), os.path.join(temp_dir, "src", "util.c")]
        assert entries[0].args == ["clang++", "-working-directory", build_dir, "-xc++", "-std=c++14", "-Iinc", "../src/main.cc"] + TRAILER
        assert entries[1].args[0] == "gcc"
        assert config.angle_dirs == {os.path.join(build_dir, "inc")}
        assert config.quote_dirs == {os.path.join(temp_dir, "q")}

    def test_separate_database_directory(self, temp_dir):
        out_dir = os.path.join(temp_dir, "out")
        write_compile_commands(out_dir, [{"directory": out_dir, "file": "../a.cc", "arguments": ["clang++", "../a.cc"]}])

        entries = load_compilation_entries_from_directory(make_config(temp_dir), out_dir)

        assert [entry.filename for entry in entries] == [os.path.join(temp_dir, "a.cc")]

    def test_flag_file_wins_over_database(self, source_tree):
        write_compile_commands(source_tree, [{"directory": source_tree, "file": "only.cc", "arguments": ["clang++", "only.cc"]}])
        write_file(os.path.join(source_tree, ".compdb_flags"), "-DFROM_FLAG_FILE\n")

        entries = load_compilation_entries_from_directory(make_config(source_tree))

        assert len(entries) == 4
        assert all("-DFROM_FLAG_FILE" in entry.args for entry in entries)

    def test_missing_database_falls_back(self, source_tree):
        entries = load_compilation_entries_from_directory(make_config(source_tree))
        assert len(entries) == 4

    def test_malformed_database_falls_back(self, source_tree, caplog):
        write_file(os.path.join(source_tree, "compile_commands.json"), "not json")
        with caplog.at_level(logging.INFO):
            entries = load_compilation_entries_from_directory(make_config(source_tree))
        assert len(entries) == 4
        assert "using directory listing instead" in caplog.text

    def test_empty_database(self, source_tree):
        """Test an empty but valid database yields no entries and no fallback"""
        write_compile_commands(source_tree, [])
        assert load_compilation_entries_from_directory(make_config(source_tree)) == []

    def test_injected_normalizer_used(self, temp_dir):
        write_compile_commands(temp_dir, [{"directory": "/b", "file": "a.cc", "arguments": ["clang++", "-Iinc"]}])
        config = make_config(temp_dir, path_normalizer=lambda path: path.replace("/b/", "/normalized/"))

        entries = load_compilation_entries_from_directory(config)

        assert entries[0].filename == "/normalized/a.cc"
        assert config.angle_dirs == {"/normalized/inc"}

    def test_missing_directory_resolves_against_project(self, temp_dir):
        write_compile_commands(temp_dir, [{"file": "x/a.cc", "arguments": ["clang++", "-Iinc"]}])
        config = make_config(temp_dir)

        entries = load_compilation_entries_from_directory(config)

        assert entries[0].filename == os.path.join(temp_dir, "x", "a.cc")
        assert entries[0].args[1:3] == ["-working-directory", temp_dir]
        assert config.angle_dirs == {os.path.join(temp_dir, "inc")}
