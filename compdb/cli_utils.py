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

"""Argument handling shared by the compdb command-line tools."""

import os
import signal
import sys
import logging
import argparse
from typing import Any

from compdb.color_utils import Colors, print_warning, should_use_color
from compdb.constants import EXIT_KEYBOARD_INTERRUPT, ProjectDirectoryError
from compdb.project import Project
from compdb.tool_detection import detect_resource_dir

logger = logging.getLogger(__name__)


def signal_handler(signum: int, frame: Any) -> None:
    """Handle interrupt signals gracefully."""
    print_warning("\nInterrupted by user. Exiting...", prefix=False)
    sys.exit(EXIT_KEYBOARD_INTERRUPT)


def install_signal_handlers() -> None:
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S", stream=sys.stderr
    )


def configure_colors(no_color: bool) -> None:
    if not should_use_color(no_color=no_color):
        Colors.disable()


def add_load_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the options that control how a project is loaded."""
    parser.add_argument("project_directory", metavar="PROJECT_DIR", help="Project root (location of compile_commands.json or .compdb_flags)")

    parser.add_argument(
        "--compilation-db-dir",
        metavar="DIR",
        default="",
        help="Directory containing compile_commands.json (default: PROJECT_DIR)",
    )

    parser.add_argument(
        "--resource-dir",
        metavar="DIR",
        help="Toolchain resource directory with builtin headers (default: ask clang -print-resource-dir)",
    )

    parser.add_argument(
        "--extra-flag",
        action="append",
        default=[],
        metavar="FLAG",
        help="Flag appended to every entry (can be used multiple times). Use --extra-flag=-DFOO for flags starting with '-'.",
    )

    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose debug logging")


def validate_project_directory(project_dir: str) -> str:
    """Return the absolute project directory.

    Raises:
        ProjectDirectoryError: If the directory does not exist
    """
    if not os.path.isdir(project_dir):
        raise ProjectDirectoryError(f"Project directory not found: {project_dir}")
    return os.path.realpath(os.path.abspath(project_dir))


def resolve_resource_dir(resource_dir: Any) -> str:
    """Use the given resource directory, or ask clang for one."""
    if resource_dir:
        return os.path.realpath(os.path.abspath(resource_dir))

    detected = detect_resource_dir()
    if detected:
        logger.debug("Using clang resource directory %s", detected)
        return detected

    print_warning("Could not detect the clang resource directory; builtin headers may not resolve. Use --resource-dir.")
    return ""


def load_project_from_args(args: argparse.Namespace) -> Project:
    """Load a Project from parsed command-line arguments."""
    project_dir = validate_project_directory(args.project_directory)
    compilation_db_dir = os.path.realpath(args.compilation_db_dir) if args.compilation_db_dir else ""
    resource_dir = resolve_resource_dir(args.resource_dir)

    project = Project()
    project.load(args.extra_flag, compilation_db_dir, project_dir, resource_dir)
    return project
