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

"""Export utilities for writing normalized entries to various file formats."""

import csv
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from compdb.color_utils import print_error, print_success
from compdb.entry_types import Entry
from compdb.file_utils import FilterStatistics
from compdb.project import Project

logger = logging.getLogger(__name__)


def entries_to_compile_commands(project: Project, directory: str) -> List[Dict[str, Any]]:
    """Convert project entries to compile_commands.json records.

    Args:
        project: Loaded project
        directory: Value for each record's "directory" field (the args carry
            their own -working-directory)

    Returns:
        List of {"directory", "file", "arguments"} records in entry order
    """
    return [{"directory": directory, "file": entry.filename, "arguments": list(entry.args)} for entry in project.entries]


def format_project_json(project: Project, entries: Optional[Sequence[Entry]] = None, stats: Optional[FilterStatistics] = None) -> str:
    """Format a project (entries and include directories) as JSON.

    Args:
        project: Loaded project
        entries: Entries to list (default: every project entry)
        stats: Statistics of the filter pass that selected entries, added as "filter"

    Returns:
        JSON formatted string
    """
    if entries is None:
        entries = project.entries
    summary: Dict[str, Any] = {
        "entries": len(entries),
        "quote_include_directories": len(project.quote_include_directories),
        "angle_include_directories": len(project.angle_include_directories),
    }
    if stats is not None:
        summary["filter"] = stats.as_dict()
    output = {
        "summary": summary,
        "quote_include_directories": project.quote_include_directories,
        "angle_include_directories": project.angle_include_directories,
        "entries": [{"file": entry.filename, "arguments": entry.args} for entry in entries],
    }
    return json.dumps(output, indent=2)


def export_compile_commands(filename: str, project: Project, directory: str) -> bool:
    """Write the normalized entries as a compile_commands.json file.

    Args:
        filename: Output JSON filename
        project: Loaded project
        directory: Value for each record's "directory" field

    Returns:
        True on success
    """
    try:
        with open(filename, "w", encoding="utf-8") as f:
            json.dump(entries_to_compile_commands(project, directory), f, indent=2)
    except IOError as e:
        logger.error("Failed to export compile commands: %s", e)
        print_error(f"Failed to export compile commands: {e}")
        return False

    logger.info("Exported %d entries to %s", len(project.entries), filename)
    print_success(f"Exported {len(project.entries)} normalized entries to {filename}")
    return True


def export_include_directories_csv(filename: str, project: Project) -> bool:
    """Export the include directories to a CSV file with columns Kind, Path.

    Args:
        filename: Output CSV filename
        project: Loaded project

    Returns:
        True on success
    """
    try:
        with open(filename, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(["Kind", "Path"])
            for path in project.quote_include_directories:
                writer.writerow(["quote", path])
            for path in project.angle_include_directories:
                writer.writerow(["angle", path])
    except IOError as e:
        logger.error("Failed to export CSV: %s", e)
        print_error(f"Failed to export CSV: {e}")
        return False

    logger.info("Exported include directories to %s", filename)
    print_success(f"Exported include directories to {filename}")
    return True
