#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************

"""Data types shared by the compilation database loader and normalizer.

This module defines the records that flow through a load:

1. RawEntry - one build-system record before normalization
2. Entry - the normalized, per-file compiler invocation
3. IncludeDirectories - include paths discovered while normalizing one record
4. ProjectConfig - accumulator for a single load operation
"""

from dataclasses import dataclass, field
from typing import List, Set

from compdb.path_utils import PathNormalizer, normalize_path

__all__ = ["RawEntry", "Entry", "IncludeDirectories", "ProjectConfig"]


@dataclass
class RawEntry:
    """A compile command as recorded by the build system.

    Attributes:
        directory: Working directory at compile time (may be empty)
        file: Source path as recorded (may be relative)
        args: Literal command line, including the compiler and any wrapper prefix
    """

    directory: str
    file: str
    args: List[str] = field(default_factory=list)


@dataclass
class Entry:
    """Normalized compiler invocation for one source file.

    Loaded entries are not modified after normalization. Inferred entries are
    created per query and owned by the caller.

    Attributes:
        filename: Absolute, normalized path of the source file
        args: Ready-to-use argument vector, args[0] being the compiler binary
        is_inferred: True only for entries produced by inference
    """

    filename: str
    args: List[str] = field(default_factory=list)
    is_inferred: bool = False


@dataclass
class IncludeDirectories:
    """Include directories discovered from path flags.

    Attributes:
        quote_dirs: Search paths for #include "..." (-iquote)
        angle_dirs: Search paths for #include <...> (-I, -isystem)
    """

    quote_dirs: Set[str] = field(default_factory=set)
    angle_dirs: Set[str] = field(default_factory=set)


@dataclass
class ProjectConfig:
    """Settings and accumulated state for one load operation.

    Must not be shared between concurrent loads.

    Attributes:
        project_dir: Absolute project root
        resource_dir: Absolute path to the toolchain's built-in headers
        extra_flags: User flags appended verbatim to every entry
        quote_dirs: Accumulated quote include directories
        angle_dirs: Accumulated angle include directories
        path_normalizer: Strategy used to canonicalize every path of the load
    """

    project_dir: str = ""
    resource_dir: str = ""
    extra_flags: List[str] = field(default_factory=list)
    quote_dirs: Set[str] = field(default_factory=set)
    angle_dirs: Set[str] = field(default_factory=set)
    path_normalizer: PathNormalizer = normalize_path

    def add_include_directories(self, found: IncludeDirectories) -> None:
        """Merge the include directories discovered by one normalization."""
        self.quote_dirs.update(found.quote_dirs)
        self.angle_dirs.update(found.angle_dirs)
