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

"""Detection of the clang toolchain used to fill in the resource directory.

Detection results are cached within the Python process session to avoid repeated
subprocess calls.

CLI Interface:
    python3 -m compdb.tool_detection --find-clang       # Output command name, exit 0/1
    python3 -m compdb.tool_detection --resource-dir     # Output resource directory, exit 0/1
"""

import os
import sys
import shutil
import logging
import argparse
import subprocess
from typing import Dict, List, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Tool command variants to try (in order of preference)
CLANG_COMMANDS = ["clang", "clang-20", "clang-19", "clang-18"]

# Session-level cache for detection results
_tool_cache: Dict[str, "ToolInfo"] = {}


@dataclass
class ToolInfo:
    """Information about a detected external tool.

    Attributes:
        command: Command name (e.g., "clang-19")
        version: First line of the tool's --version output
    """

    command: Optional[str]
    version: Optional[str]

    def is_found(self) -> bool:
        return self.command is not None


def clear_cache() -> None:
    """Clear the tool detection cache."""
    _tool_cache.clear()
    logger.debug("Tool detection cache cleared")


def _run(cmd_parts: List[str], timeout: int = 5) -> Optional[str]:
    """Run a command and return its stripped stdout, or None on failure."""
    try:
        result = subprocess.run(cmd_parts, capture_output=True, text=True, check=True, timeout=timeout)
        return result.stdout.strip()
    except (subprocess.CalledProcessError, FileNotFoundError, subprocess.TimeoutExpired):
        return None


def find_clang() -> ToolInfo:
    """Find an available clang executable.

    Returns:
        ToolInfo with command and version if found, or empty ToolInfo if not found
    """
    cache_key = "find_clang"
    if cache_key in _tool_cache:
        return _tool_cache[cache_key]

    tool_info = ToolInfo(command=None, version=None)
    for cmd in CLANG_COMMANDS:
        if not shutil.which(cmd):
            logger.debug("%s not found", cmd)
            continue
        output = _run([cmd, "--version"])
        if output:
            tool_info = ToolInfo(command=cmd, version=output.split("\n")[0].strip())
            logger.debug("Found %s (%s)", cmd, tool_info.version)
            break

    _tool_cache[cache_key] = tool_info
    return tool_info


def detect_resource_dir() -> Optional[str]:
    """Ask clang for its resource directory (builtin headers such as stddef.h).

    Returns:
        Absolute resource directory, or None if clang is unavailable
    """
    clang = find_clang()
    if not clang.is_found():
        return None

    assert clang.command is not None
    output = _run([clang.command, "-print-resource-dir"])
    if not output or not os.path.isdir(output):
        logger.debug("%s reported no usable resource directory: %r", clang.command, output)
        return None
    return output


def main() -> int:
    parser = argparse.ArgumentParser(description="Detect the clang toolchain for compdb")
    parser.add_argument("--find-clang", action="store_true", help="Find clang command")
    parser.add_argument("--resource-dir", action="store_true", help="Print clang resource directory")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(message)s", stream=sys.stderr)

    if args.find_clang:
        tool_info = find_clang()
        if tool_info.is_found():
            print(tool_info.command)
            return 0
        return 1

    if args.resource_dir:
        resource_dir = detect_resource_dir()
        if resource_dir:
            print(resource_dir)
            return 0
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
