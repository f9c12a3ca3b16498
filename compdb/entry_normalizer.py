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

"""Turn raw compile commands into normalized compilation entries.

The normalized argument vector is meant for a single-file compiler front-end:

- args[0] is the compiler binary (wrapper prefixes such as goma are stripped)
- -working-directory, -x and -std= are injected when missing
- flags that only make sense in a multi-file build are removed
- path-bearing flags are resolved so include directories can be indexed
- -resource-dir and a few diagnostics flags are appended once
"""

import logging
from typing import List, Optional, Tuple

from compdb.constants import (
    DEFAULT_C_COMPILER,
    DEFAULT_CXX_COMPILER,
    DEFAULT_C_STANDARD,
    DEFAULT_CXX_STANDARD,
    WORKING_DIRECTORY_FLAG,
    LANGUAGE_FLAG,
    STANDARD_FLAG,
    RESOURCE_DIR_FLAG,
    NO_UNKNOWN_WARNING_FLAG,
    PARSE_ALL_COMMENTS_FLAG,
    InvalidEntryError,
)
from compdb.entry_types import Entry, IncludeDirectories, ProjectConfig, RawEntry
from compdb.flag_tables import (
    any_starts_with,
    is_blacklisted,
    is_blacklisted_multi,
    looks_like_source_file,
    match_path_arg,
    needs_absolute_path,
    should_add_to_angle_includes,
    should_add_to_quote_includes,
    source_file_type,
)
from compdb.path_utils import join_if_relative

logger = logging.getLogger(__name__)

__all__ = ["normalize_entry"]


def _cleanup_maybe_relative_path(config: ProjectConfig, directory: str, path: str) -> str:
    """Resolve a path flag value against the compile directory and normalize it.

    Raises:
        InvalidEntryError: If path is empty
    """
    if not path:
        raise InvalidEntryError(f"Empty path value for a path flag (directory: '{directory}')")
    return config.path_normalizer(join_if_relative(directory, path))


def _find_compiler_index(config: ProjectConfig, raw: RawEntry, filename: str) -> int:
    """Return the index of the first argument that is not part of the compiler command.

    Leading tokens are skipped while they are not flags, are not the main source
    file and do not look like any other source file. This strips schedulers
    such as "goma clang -c foo.cc" down to the compiler itself.
    """
    i = 0
    while i < len(raw.args):
        arg = raw.args[i]
        if arg.startswith("-"):
            break
        if config.path_normalizer(arg) == filename:
            break
        if looks_like_source_file(arg):
            break
        i += 1
    return i


def _default_compiler(language: Optional[str]) -> str:
    return DEFAULT_C_COMPILER if language == "c" else DEFAULT_CXX_COMPILER


def _append_once(args: List[str], flag: str, value: Optional[str] = None) -> None:
    """Append value (or flag) unless an argument already starts with flag."""
    if not any_starts_with(args, flag):
        args.append(flag if value is None else value)


def normalize_entry(config: ProjectConfig, raw: RawEntry) -> Tuple[Entry, IncludeDirectories]:
    """Build a normalized compilation entry from a raw compile command.

    Include directories found in path flags are returned alongside the entry;
    the caller decides where to accumulate them (see
    ProjectConfig.add_include_directories).

    Only --sysroot= is forwarded with its path rewritten to an absolute path.
    Other path flags are forwarded exactly as written; their resolved form is
    only recorded in the include directories.

    Args:
        config: Load configuration (resource dir, extra flags, path normalizer)
        raw: Compile command to normalize

    Returns:
        Tuple of (entry, include_directories)

    Raises:
        InvalidEntryError: If a path flag carries an empty path
    """
    found = IncludeDirectories()
    filename = config.path_normalizer(raw.file)
    language = source_file_type(raw.file)

    i = _find_compiler_index(config, raw, filename)

    args: List[str] = []
    if i > 0:
        args.append(raw.args[i - 1])
        if i > 1:
            logger.debug("Stripped compiler wrapper(s) %s for %s", raw.args[: i - 1], filename)
    else:
        # Flags only, e.g. from the flag file. argv[0] is still required.
        args.append(_default_compiler(language))

    if not any_starts_with(raw.args, WORKING_DIRECTORY_FLAG):
        args.append(WORKING_DIRECTORY_FLAG)
        args.append(raw.directory)

    # Language detection of the compiler is unreliable, so state it explicitly.
    if language is not None:
        if not any_starts_with(raw.args, LANGUAGE_FLAG):
            args.append(LANGUAGE_FLAG + language)
        if not any_starts_with(raw.args, STANDARD_FLAG):
            if language == "c":
                args.append(DEFAULT_C_STANDARD)
            elif language == "c++":
                args.append(DEFAULT_CXX_STANDARD)

    next_flag_is_path = False
    add_next_flag_to_quote_dirs = False
    add_next_flag_to_angle_dirs = False

    while i < len(raw.args):
        arg = raw.args[i]

        if next_flag_is_path:
            # {"-I", "foo"} style: this token is the path of the previous flag.
            path = _cleanup_maybe_relative_path(config, raw.directory, arg)
            if add_next_flag_to_quote_dirs:
                found.quote_dirs.add(path)
            if add_next_flag_to_angle_dirs:
                found.angle_dirs.add(path)
            next_flag_is_path = False
            add_next_flag_to_quote_dirs = False
            add_next_flag_to_angle_dirs = False
        else:
            if is_blacklisted_multi(arg):
                logger.debug("Removing %s and its argument", arg)
                i += 2
                continue
            if is_blacklisted(arg):
                logger.debug("Removing %s", arg)
                i += 1
                continue

            match = match_path_arg(arg)
            if match is not None:
                flag, value = match
                if value is None:
                    next_flag_is_path = True
                    add_next_flag_to_quote_dirs = should_add_to_quote_includes(flag)
                    add_next_flag_to_angle_dirs = should_add_to_angle_includes(flag)
                else:
                    # {"-Ifoo"} style.
                    path = _cleanup_maybe_relative_path(config, raw.directory, value)
                    if needs_absolute_path(flag):
                        arg = flag + path
                    if should_add_to_quote_includes(flag):
                        found.quote_dirs.add(path)
                    if should_add_to_angle_includes(flag):
                        found.angle_dirs.add(path)

        args.append(arg)
        i += 1

    # User-given extra flags are trusted and appended as-is.
    args.extend(config.extra_flags)

    # Lets the front-end resolve builtin headers like <stddef.h>.
    _append_once(args, RESOURCE_DIR_FLAG, f"{RESOURCE_DIR_FLAG}={config.resource_dir}")
    # The project may have been built by another compiler version.
    _append_once(args, NO_UNKNOWN_WARNING_FLAG)
    # Needed for documentation comments in indexing and completion.
    _append_once(args, PARSE_ALL_COMMENTS_FLAG)

    return Entry(filename=filename, args=args), found
