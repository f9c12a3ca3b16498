#!/usr/bin/env python3
#****************************************************************************************************************************************************
#* BSD 3-Clause License
#*
#* Copyright (c) 2025, Mana Battery
#* All rights reserved.
#*
#* Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
#*
#* 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
#* 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
#*    documentation and/or other materials provided with the distribution.
#* 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
#*    software without specific prior written permission.
#*
#* THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
#* THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
#* CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
#* PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
#* LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
#* EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#****************************************************************************************************************************************************
"""Pytest configuration and shared fixtures for compdb tests.

Path normalization is injected into every load, so most tests use one of two
stub normalizers instead of touching the real filesystem:

- marker_normalizer prefixes "&" to every normalized path, so a test can see
  exactly which paths went through normalization
- identity_normalizer returns paths unchanged
"""

import os
import sys
import json
import tempfile
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, Generator, List, Optional

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from compdb.entry_types import ProjectConfig  # noqa: E402


def _marker_normalize(path: str) -> str:
    return "&" + path


def _identity_normalize(path: str) -> str:
    return path


@pytest.fixture
def temp_dir() -> Generator[str, None, None]:
    """Create a temporary directory for tests.

    Scope: function (default)
    Use for: File I/O operations that need isolation
    """
    tmpdir = tempfile.mkdtemp(prefix="compdb_test_")
    yield os.path.realpath(tmpdir)
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def marker_normalizer() -> Callable[[str], str]:
    """Normalizer that marks every path it sees with a leading '&'."""
    return _marker_normalize


@pytest.fixture
def identity_normalizer() -> Callable[[str], str]:
    return _identity_normalize


@pytest.fixture
def marker_config() -> ProjectConfig:
    """ProjectConfig using the marker normalizer, as used by most normalizer tests."""
    return ProjectConfig(project_dir="/w/c/s/", resource_dir="/w/resource_dir/", path_normalizer=_marker_normalize)


def write_file(path: str, content: str = "") -> str:
    """Create a file (and its parent directories) with the given content."""
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    return path


def write_compile_commands(directory: str, records: List[Dict[str, Any]], filename: Optional[str] = None) -> str:
    """Write a compile_commands.json file into directory."""
    path = os.path.join(directory, filename or "compile_commands.json")
    write_file(path, json.dumps(records, indent=2))
    return path


@pytest.fixture
def source_tree(temp_dir: str) -> str:
    """Create a small C/C++ project tree.

    Layout:
        src/main.cc
        src/util.c
        src/util.h
        src/view.mm
        third_party/lib/lib.cpp
        docs/readme.txt
        .git/hooks/sample.cc   (hidden, never scanned)
    """
    for rel_path in ["src/main.cc", "src/util.c", "src/util.h", "src/view.mm", "third_party/lib/lib.cpp", "docs/readme.txt", ".git/hooks/sample.cc"]:
        write_file(os.path.join(temp_dir, rel_path), "// test\n")
    return temp_dir


@pytest.fixture(autouse=True)
def restore_colors() -> Generator[None, None, None]:
    """Undo Colors.disable() calls made by the command-line tools under test."""
    from compdb.color_utils import Colors

    saved = {name: value for name, value in vars(Colors).items() if name.isupper()}
    yield
    for name, value in saved.items():
        setattr(Colors, name, value)
