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

"""Shared constants for the compdb tools.

This module provides centralized constants used across the compdb library and
its command-line tools: exit codes, well-known file names, the default flags
injected into normalized entries, and the exception hierarchy.
"""

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_SUCCESS = 0
EXIT_INVALID_ARGS = 1
EXIT_RUNTIME_ERROR = 2
EXIT_KEYBOARD_INTERRUPT = 130

# =============================================================================
# Build System Constants
# =============================================================================

COMPILE_COMMANDS_JSON = "compile_commands.json"  # Standard compilation database filename
FLAG_FILE_NAME = ".compdb_flags"  # Flat flag file at the project root, one flag per line
FLAG_FILE_COMMENT = "#"  # Lines starting with this are ignored in the flag file

# =============================================================================
# Normalization Defaults
# =============================================================================

DEFAULT_C_COMPILER = "clang"  # argv[0] substituted for C sources when no binary is given
DEFAULT_CXX_COMPILER = "clang++"  # argv[0] substituted for everything else
DEFAULT_C_STANDARD = "-std=gnu11"
DEFAULT_CXX_STANDARD = "-std=c++14"

WORKING_DIRECTORY_FLAG = "-working-directory"
LANGUAGE_FLAG = "-x"
STANDARD_FLAG = "-std="
RESOURCE_DIR_FLAG = "-resource-dir"
NO_UNKNOWN_WARNING_FLAG = "-Wno-unknown-warning-option"
PARSE_ALL_COMMENTS_FLAG = "-fparse-all-comments"

# =============================================================================
# Inference Weights
# =============================================================================

MATCH_PREFIX_WEIGHT = 100  # Added per matching leading character
MISMATCH_DIRECTORY_WEIGHT = 100  # Subtracted per separator after the common prefix
MATCH_POSTFIX_WEIGHT = 1  # Added per matching trailing character

# =============================================================================
# Exception Classes
# =============================================================================


class CompdbError(Exception):
    """Base exception for all compdb errors.

    All compdb exceptions carry an exit_code attribute that indicates
    what exit code the program should use when this error is caught at the
    main entry point.
    """

    def __init__(self, message: str, exit_code: int = EXIT_RUNTIME_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


# Validation errors (EXIT_INVALID_ARGS)
class ValidationError(CompdbError):
    """Raised when input validation fails (arguments, paths, etc)."""

    def __init__(self, message: str):
        super().__init__(message, EXIT_INVALID_ARGS)


class ProjectDirectoryError(ValidationError):
    """Raised when the project directory is invalid or inaccessible."""


class ArgumentError(ValidationError):
    """Raised when command-line arguments are invalid."""


class CompilationDatabaseError(CompdbError):
    """Raised when a compilation database cannot be loaded.

    The loader treats this as "no database" and falls back to a directory
    listing; it never reaches the caller of a load.
    """


class InvalidEntryError(CompdbError):
    """Raised when a compile command violates an input contract.

    Example: a path-bearing flag whose path value is empty. This indicates a
    defect in the build configuration or in the normalizer and is not recovered.
    """


class MissingDependencyError(CompdbError):
    """Raised when a required Python package is missing or too old."""
