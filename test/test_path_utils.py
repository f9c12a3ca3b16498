"""Tests for compdb/path_utils.py"""

import os

import pytest

from compdb.path_utils import ensure_ends_in_slash, join_if_relative, normalize_path


@pytest.mark.unit
class TestNormalizePath:
    def test_absolute_path_unchanged(self, temp_dir):
        assert normalize_path(temp_dir) == temp_dir

    def test_dot_segments_removed(self, temp_dir):
        os.makedirs(os.path.join(temp_dir, "a", "b"))
        assert normalize_path(os.path.join(temp_dir, "a", "b", "..", "b", ".")) == os.path.join(temp_dir, "a", "b")

    def test_relative_path_made_absolute(self, temp_dir, monkeypatch):
        monkeypatch.chdir(temp_dir)
        assert normalize_path("foo.cc") == os.path.join(temp_dir, "foo.cc")

    def test_missing_path_still_normalized(self, temp_dir):
        assert normalize_path(os.path.join(temp_dir, "missing", "..", "x.cc")) == os.path.join(temp_dir, "x.cc")

    def test_symlink_resolved(self, temp_dir):
        target = os.path.join(temp_dir, "real")
        os.makedirs(target)
        link = os.path.join(temp_dir, "link")
        os.symlink(target, link)
        assert normalize_path(os.path.join(link, "foo.cc")) == os.path.join(target, "foo.cc")


@pytest.mark.unit
class TestEnsureEndsInSlash:
    def test_adds_separator(self):
        assert ensure_ends_in_slash("/a/b") == "/a/b" + os.sep

    def test_keeps_existing_separator(self):
        path = "/a/b" + os.sep
        assert ensure_ends_in_slash(path) == path


@pytest.mark.unit
class TestJoinIfRelative:
    def test_relative_joined(self):
        assert join_if_relative("/base", "inc") == os.path.join("/base", "inc")

    def test_dot_segments_kept(self):
        assert join_if_relative("/base/out", "../inc") == "/base/out/../inc"

    def test_absolute_unchanged(self):
        assert join_if_relative("/base", "/abs/inc") == "/abs/inc"

    def test_empty_directory(self):
        assert join_if_relative("", "inc") == "inc"
