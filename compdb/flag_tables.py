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

"""Static flag tables and predicates used to classify compiler arguments.

Every table here is matched by prefix. A multi-token blacklist entry such as
``-MF`` therefore also matches ``-MFfoo.d`` and still consumes the following
token, mirroring how path-bearing flags are recognized.
"""

from typing import Iterable, Optional, Sequence, Tuple

__all__ = [
    "BLACKLIST_MULTI",
    "BLACKLIST",
    "PATH_ARGS",
    "NORMALIZE_PATH_ARGS",
    "QUOTE_INCLUDE_ARGS",
    "ANGLE_INCLUDE_ARGS",
    "SOURCE_FILE_TYPES",
    "source_file_type",
    "looks_like_source_file",
    "match_path_arg",
]

# Flags removed together with the token that follows them.
BLACKLIST_MULTI = ("-MF", "-MT", "-MQ", "-o", "--serialize-diagnostics", "-Xclang")

# Flags which are always removed from the command line.
BLACKLIST = ("-c", "-MP", "-MD", "-MMD", "--fcolor-diagnostics")

# Flags followed by a potentially relative path, either as {"-Ifoo"} or {"-I", "foo"}.
# Order matters: "-include-pch" must be tried before "-include".
PATH_ARGS = (
    "-I",
    "-iquote",
    "-isystem",
    "--sysroot=",
    "-isysroot",
    "-gcc-toolchain",
    "-include-pch",
    "-iframework",
    "-F",
    "-imacros",
    "-include",
)

# Path flags the compiler does not resolve against -working-directory, so the
# forwarded token is rewritten with the absolute path. Subset of PATH_ARGS.
NORMALIZE_PATH_ARGS = ("--sysroot=",)

# Path flags whose value feeds #include "..." / #include <...> completion.
QUOTE_INCLUDE_ARGS = ("-iquote",)
ANGLE_INCLUDE_ARGS = ("-I", "-isystem")

# Extension -> value for the -x flag. Checked in order with endswith().
SOURCE_FILE_TYPES = (
    (".c", "c"),
    (".cpp", "c++"),
    (".cc", "c++"),
    (".mm", "objective-c++"),
    (".m", "objective-c"),
)


def starts_with_any(value: str, prefixes: Iterable[str]) -> bool:
    """Check if value starts with any of the prefixes."""
    return any(value.startswith(prefix) for prefix in prefixes)


def any_starts_with(values: Iterable[str], prefix: str) -> bool:
    """Check if any value starts with prefix."""
    return any(value.startswith(prefix) for value in values)


def is_blacklisted_multi(arg: str) -> bool:
    """Check if arg and the token after it should both be dropped."""
    return starts_with_any(arg, BLACKLIST_MULTI)


def is_blacklisted(arg: str) -> bool:
    """Check if arg should be dropped on its own."""
    return starts_with_any(arg, BLACKLIST)


def should_add_to_quote_includes(flag: str) -> bool:
    return starts_with_any(flag, QUOTE_INCLUDE_ARGS)


def should_add_to_angle_includes(flag: str) -> bool:
    return starts_with_any(flag, ANGLE_INCLUDE_ARGS)


def needs_absolute_path(flag: str) -> bool:
    """Check if a path flag must be forwarded with its absolute path embedded."""
    return starts_with_any(flag, NORMALIZE_PATH_ARGS)


def match_path_arg(arg: str, path_args: Sequence[str] = PATH_ARGS) -> Optional[Tuple[str, Optional[str]]]:
    """Match an argument against the path-bearing flags.

    Args:
        arg: Command-line token
        path_args: Path flags to try, in order

    Returns:
        None if arg is not a path flag. Otherwise (flag, value) where value is
        None for the {"-I", "foo"} form (the path is the next token) and the
        inline path for the {"-Ifoo"} form.

    Examples:
        >>> match_path_arg("-I")
        ('-I', None)
        >>> match_path_arg("-Ifoo/bar")
        ('-I', 'foo/bar')
        >>> match_path_arg("-DFOO") is None
        True
    """
    for flag in path_args:
        if arg == flag:
            return flag, None
        if arg.startswith(flag):
            return flag, arg[len(flag) :]
    return None


def source_file_type(path: str) -> Optional[str]:
    """Infer the source language of a file from its extension.

    Args:
        path: Source file path

    Returns:
        Language name suitable for -x (c, c++, objective-c, objective-c++),
        or None for unknown extensions
    """
    for extension, language in SOURCE_FILE_TYPES:
        if path.endswith(extension):
            return language
    return None


def looks_like_source_file(token: str) -> bool:
    """Check if a leading command-line token is a file name rather than a command.

    A token is taken as a source file if the text after its last '.' is at most
    three characters and does not start with a digit. This separates foo.cc or
    bar.c from commands like clang-4.0 or ./a/b/goma.

    Args:
        token: Leading, non-flag command-line token

    Returns:
        True if the token looks like a source file name
    """
    dot = token.rfind(".")
    if dot == -1:
        return False
    extension = token[dot + 1 :]
    if len(extension) > 3:
        return False
    return not (extension and extension[0].isdigit())
