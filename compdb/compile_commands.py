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

"""Reader for compile_commands.json compilation databases."""

import os
import json
import shlex
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from compdb.constants import COMPILE_COMMANDS_JSON, CompilationDatabaseError

logger = logging.getLogger(__name__)

__all__ = ["CompileCommand", "load_compilation_database", "parse_compile_command"]


@dataclass
class CompileCommand:
    """One record of a compilation database.

    Attributes:
        directory: Working directory of the compilation
        filename: Source file as written in the database (may be relative)
        arguments: Tokenized command line
    """

    directory: str
    filename: str
    arguments: List[str] = field(default_factory=list)


def parse_compile_command(record: Dict[str, Any]) -> Optional[CompileCommand]:
    """Convert one JSON record into a CompileCommand.

    The "arguments" list is preferred. Otherwise the "command" string is split
    with shell quoting rules.

    Args:
        record: Decoded JSON object from compile_commands.json

    Returns:
        CompileCommand, or None if the record is unusable
    """
    file_path = record.get("file", "")
    if not isinstance(file_path, str) or not file_path:
        logger.warning("Skipping compile command without a file: %s", record)
        return None

    directory = record.get("directory", "")
    if not isinstance(directory, str):
        directory = ""

    arguments = record.get("arguments")
    if isinstance(arguments, list) and arguments:
        return CompileCommand(directory=directory, filename=file_path, arguments=[str(arg) for arg in arguments])

    command = record.get("command", "")
    if not isinstance(command, str) or not command.strip():
        logger.warning("Skipping compile command for %s: no arguments or command", file_path)
        return None

    try:
        parts = shlex.split(command)
    except ValueError as e:
        logger.warning("Skipping compile command for %s: failed to parse command: %s", file_path, e)
        return None

    return CompileCommand(directory=directory, filename=file_path, arguments=parts)


def load_compilation_database(db_dir: str) -> List[CompileCommand]:
    """Load every compile command from <db_dir>/compile_commands.json.

    Args:
        db_dir: Directory containing compile_commands.json

    Returns:
        List of compile commands in file order (may be empty)

    Raises:
        CompilationDatabaseError: If the database is missing, unreadable or malformed
    """
    db_path = os.path.join(db_dir, COMPILE_COMMANDS_JSON)
    if not os.path.isfile(db_path):
        raise CompilationDatabaseError(f"Compilation database not found: {db_path}")

    try:
        with open(db_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (IOError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CompilationDatabaseError(f"Failed to read {db_path}: {e}") from e

    if not isinstance(data, list):
        raise CompilationDatabaseError(f"Invalid {COMPILE_COMMANDS_JSON} format: expected list, got {type(data).__name__}")

    commands: List[CompileCommand] = []
    for record in data:
        if not isinstance(record, dict):
            logger.warning("Skipping invalid entry in %s: %s", COMPILE_COMMANDS_JSON, record)
            continue
        command = parse_compile_command(record)
        if command is not None:
            commands.append(command)

    logger.debug("Read %d compile commands from %s", len(commands), db_path)
    return commands
