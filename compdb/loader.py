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

"""Load compilation entries for a project.

Two strategies are supported:

1. Directory listing - every recognized source file below the project root gets
   the flags from the project's flag file. Used whenever the flag file exists,
   and as the fallback when no compilation database can be loaded.
2. Compilation database - every record of compile_commands.json is normalized.

Loading never fails on missing or malformed configuration; it produces fewer
(possibly zero) entries and logs why.
"""

import os
import time
import logging
from typing import List

from compdb.compile_commands import load_compilation_database
from compdb.constants import FLAG_FILE_NAME, CompilationDatabaseError
from compdb.entry_normalizer import normalize_entry
from compdb.entry_types import Entry, ProjectConfig, RawEntry
from compdb.file_utils import get_files_in_folder, read_flag_file
from compdb.flag_tables import source_file_type
from compdb.path_utils import join_if_relative

logger = logging.getLogger(__name__)

__all__ = ["load_from_directory_listing", "load_compilation_entries_from_directory"]


def _normalize_into(config: ProjectConfig, raw: RawEntry, result: List[Entry]) -> None:
    entry, include_dirs = normalize_entry(config, raw)
    config.add_include_directories(include_dirs)
    result.append(entry)


def load_from_directory_listing(config: ProjectConfig) -> List[Entry]:
    """Create an entry for every source file below the project root.

    Each file gets the flags of the flag file followed by its own path.

    Args:
        config: Load configuration; include directories are accumulated into it

    Returns:
        List of normalized entries in directory-scan order
    """
    flag_file = os.path.join(config.project_dir, FLAG_FILE_NAME)
    args = read_flag_file(flag_file)
    if args:
        logger.info("Using %s arguments %s", FLAG_FILE_NAME, " ".join(args))
    if not os.path.exists(flag_file) and not config.extra_flags:
        logger.warning(
            "No compiler arguments found for %s. Consider adding either a compile_commands.json or a %s file.", config.project_dir, FLAG_FILE_NAME
        )

    result: List[Entry] = []
    for file_path in get_files_in_folder(config.project_dir, recursive=True, add_folder_to_path=True):
        if source_file_type(file_path) is None:
            continue
        raw = RawEntry(directory=config.project_dir, file=file_path, args=args + [file_path])
        _normalize_into(config, raw, result)

    logger.info("Loaded %d entries from directory listing of %s", len(result), config.project_dir)
    return result


def load_compilation_entries_from_directory(config: ProjectConfig, opt_compilation_db_dir: str = "") -> List[Entry]:
    """Load entries from the flag file, a compilation database, or a directory listing.

    Args:
        config: Load configuration; include directories are accumulated into it
        opt_compilation_db_dir: Directory containing compile_commands.json.
            Defaults to the project root when empty.

    Returns:
        List of normalized entries in load order
    """
    # A flag file always wins over a compilation database.
    if os.path.exists(os.path.join(config.project_dir, FLAG_FILE_NAME)):
        return load_from_directory_listing(config)

    compilation_db_dir = opt_compilation_db_dir or config.project_dir
    logger.info("Trying to load compile_commands.json from %s", compilation_db_dir)

    start_time = time.time()
    try:
        commands = load_compilation_database(compilation_db_dir)
    except CompilationDatabaseError as e:
        logger.info("Unable to load compile_commands.json located at '%s' (%s); using directory listing instead.", compilation_db_dir, e)
        return load_from_directory_listing(config)
    read_time = time.time() - start_time

    start_time = time.time()
    result: List[Entry] = []
    for command in commands:
        # Records without a directory are relative to the project root.
        directory = command.directory or config.project_dir
        absolute_filename = join_if_relative(directory, command.filename)
        raw = RawEntry(directory=directory, file=config.path_normalizer(absolute_filename), args=command.arguments)
        _normalize_into(config, raw, result)
    normalize_time = time.time() - start_time

    logger.debug("compile_commands.json read time: %.3fs, normalize time: %.3fs", read_time, normalize_time)
    logger.info("Loaded %d entries from compile_commands.json", len(result))
    return result
