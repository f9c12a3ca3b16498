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

"""Colored terminal output for the compdb tools (colorama)."""

import os
import sys
from typing import Optional, Sequence, TextIO

from colorama import Fore, Style, init

from compdb.constants import NO_UNKNOWN_WARNING_FLAG, PARSE_ALL_COMMENTS_FLAG, RESOURCE_DIR_FLAG, WORKING_DIRECTORY_FLAG

# Keep colors when stdout is piped; should_use_color() decides whether to disable them.
init(autoreset=False, strip=False)

# Flags the normalizer adds to every entry; shown dimmed so the build's own flags stand out.
_BOILERPLATE_PREFIXES = (RESOURCE_DIR_FLAG, NO_UNKNOWN_WARNING_FLAG, PARSE_ALL_COMMENTS_FLAG)


class Colors:
    """Escape codes used by the compdb tools. Empty strings once disabled."""

    RED = Fore.RED
    GREEN = Fore.GREEN
    YELLOW = Fore.YELLOW
    CYAN = Fore.CYAN
    WHITE = Fore.WHITE

    RESET = Style.RESET_ALL
    BRIGHT = Style.BRIGHT
    DIM = Style.DIM

    @staticmethod
    def disable() -> None:
        for attr in dir(Colors):
            if attr.isupper():
                setattr(Colors, attr, "")


def colored(text: str, color: str = "", style: str = "") -> str:
    """Wrap text in the given color and style codes.

    Returns text unchanged when neither is set.
    """
    if not color and not style:
        return text
    return f"{style}{color}{text}{Colors.RESET}"


def _emit(text: str, color: str, file: Optional[TextIO], to_stderr: bool, style: str = "") -> None:
    if file is None:
        file = sys.stderr if to_stderr else sys.stdout
    print(colored(text, color, style), file=file)


def print_success(text: str, file: Optional[TextIO] = None) -> None:
    """Report a finished export or check on stdout, in green."""
    _emit(text, Colors.GREEN, file, to_stderr=False)


def print_error(text: str, file: Optional[TextIO] = None, prefix: bool = True) -> None:
    """Print an error in red to stderr.

    Args:
        text: Error message to print
        file: File object (default: sys.stderr)
        prefix: If True, prepend "Error: " to message (default: True)
    """
    _emit(f"Error: {text}" if prefix else text, Colors.RED, file, to_stderr=True)


def print_warning(text: str, file: Optional[TextIO] = None, prefix: bool = True) -> None:
    """Print a warning in yellow to stderr.

    Args:
        text: Warning message to print
        file: File object (default: sys.stderr)
        prefix: If True, prepend "Warning: " to message (default: True)
    """
    _emit(f"Warning: {text}" if prefix else text, Colors.YELLOW, file, to_stderr=True)


def print_info(text: str, file: Optional[TextIO] = None) -> None:
    _emit(text, Colors.CYAN, file, to_stderr=False)


def print_highlight(text: str, file: Optional[TextIO] = None) -> None:
    """Print a file heading in bright white."""
    _emit(text, Colors.WHITE, file, to_stderr=False, style=Colors.BRIGHT)


def should_use_color(force_color: bool = False, no_color: bool = False) -> bool:
    """Decide whether output should be colored.

    Args:
        force_color: Color even when stdout is not a terminal
        no_color: Never color (takes precedence)

    Returns:
        True if color should be used
    """
    if no_color:
        return False
    if force_color:
        return True
    # See no-color.org
    return sys.stdout.isatty() and not os.environ.get("NO_COLOR")


def format_args(args: Sequence[str]) -> str:
    """Format a normalized argument vector on one line.

    The compiler is highlighted; the -working-directory pair and the flags
    appended to every entry are dimmed.

    Args:
        args: Argument vector, args[0] being the compiler

    Returns:
        Space-separated, colored argument string
    """
    parts = []
    dim_next = False
    for i, arg in enumerate(args):
        if i == 0:
            parts.append(colored(arg, Colors.WHITE, Colors.BRIGHT))
        elif dim_next or arg == WORKING_DIRECTORY_FLAG or arg.startswith(_BOILERPLATE_PREFIXES):
            parts.append(colored(arg, style=Colors.DIM))
        else:
            parts.append(arg)
        dim_next = arg == WORKING_DIRECTORY_FLAG
    return " ".join(parts)
