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

"""File and path utilities: directory scans, the flag file and path filtering."""

import os
import fnmatch
import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import DefaultDict, Dict, List, Optional, Sequence, Tuple

from compdb.color_utils import Colors
from compdb.constants import FLAG_FILE_COMMENT

logger = logging.getLogger(__name__)


def get_files_in_folder(folder: str, recursive: bool = True, add_folder_to_path: bool = True) -> List[str]:
    """List the files below a folder in a stable order.

    Hidden directories (.git, .cache, ...) are not descended into.

    Args:
        folder: Directory to scan
        recursive: Descend into subdirectories
        add_folder_to_path: Return paths joined with folder instead of relative to it

    Returns:
        Sorted list of file paths
    """
    result: List[str] = []
    if not os.path.isdir(folder):
        logger.debug("Not scanning %s: not a directory", folder)
        return result

    for root, dirs, files in os.walk(folder):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        for name in sorted(files):
            path = os.path.join(root, name)
            result.append(path if add_folder_to_path else os.path.relpath(path, folder))
        if not recursive:
            break

    return result


def read_flag_file(path: str) -> List[str]:
    """Read compiler flags from a flat flag file.

    One flag per line. Lines are trimmed; blank lines and lines starting with '#'
    are skipped. A missing file yields no flags.

    Args:
        path: Path to the flag file

    Returns:
        List of flags in file order
    """
    flags: List[str] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith(FLAG_FILE_COMMENT):
                    continue
                flags.append(line)
    except FileNotFoundError:
        return flags
    except (IOError, UnicodeDecodeError) as e:
        logger.warning("Failed to read flag file %s: %s", path, e)
    return flags


class GroupMatch:
    """Whitelist/blacklist glob matcher for file paths.

    A path matching any whitelist pattern is accepted. Otherwise a path matching
    any blacklist pattern is rejected. Everything else is accepted.
    Patterns use fnmatch syntax and are matched against the full path.
    """

    def __init__(self, whitelist: Sequence[str], blacklist: Sequence[str]):
        self.whitelist = list(whitelist)
        self.blacklist = list(blacklist)

    def is_match(self, value: str) -> Tuple[bool, Optional[str]]:
        """Check a path against the pattern sets.

        Args:
            value: Path to check

        Returns:
            Tuple of (matched, failure_reason). failure_reason is None on match.
        """
        for pattern in self.whitelist:
            if fnmatch.fnmatch(value, pattern):
                return True, None

        for pattern in self.blacklist:
            if fnmatch.fnmatch(value, pattern):
                return False, f'blacklist "{pattern}"'

        return True, None


@dataclass
class FilterStatistics:
    """Statistics about one filtering pass over the project entries.

    Attributes:
        total: Number of entries considered
        matched: Number of entries passed to the action
        skipped_by_reason: Skip count per failure reason
    """

    total: int = 0
    matched: int = 0
    skipped_by_reason: DefaultDict[str, int] = field(default_factory=lambda: defaultdict(int))

    @property
    def skipped(self) -> int:
        return self.total - self.matched

    def as_dict(self) -> Dict[str, object]:
        return {"total": self.total, "matched": self.matched, "skipped": self.skipped, "skipped_by_reason": dict(self.skipped_by_reason)}

    def format_concise(self) -> str:
        """Format concise single-line summary.

        Returns:
            Formatted string like "120 → 97 | Skipped: 20 blacklist "*/third_party/*", 3 blacklist "*_test.cc""
        """
        parts = [f"{Colors.CYAN}{self.total:,}{Colors.RESET} → {Colors.CYAN}{self.matched:,}{Colors.RESET}"]
        if self.skipped_by_reason:
            skipped = [f"{Colors.CYAN}{count}{Colors.RESET} {Colors.DIM}{reason}{Colors.RESET}" for reason, count in sorted(self.skipped_by_reason.items())]
            parts.append(f"| {Colors.DIM}Skipped:{Colors.RESET} " + ", ".join(skipped))
        return " ".join(parts)
