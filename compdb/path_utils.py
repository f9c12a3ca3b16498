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

"""Path normalization helpers used while building compilation entries."""

import os
import logging
from typing import Callable

logger = logging.getLogger(__name__)

__all__ = ["PathNormalizer", "normalize_path", "ensure_ends_in_slash", "join_if_relative"]

# Strategy used to canonicalize paths during a load. Tests inject a stub.
PathNormalizer = Callable[[str], str]


def normalize_path(path: str) -> str:
    """Canonicalize a path to an absolute, symlink-resolved form.

    Paths that do not exist are resolved as far as possible. If the platform
    cannot resolve the path at all, the input is returned unchanged.

    Args:
        path: File or directory path, absolute or relative to the current directory

    Returns:
        Absolute normalized path
    """
    try:
        return os.path.realpath(os.path.abspath(path))
    except (OSError, ValueError) as e:
        logger.debug("Unable to normalize %s: %s", path, e)
        return path


def ensure_ends_in_slash(path: str) -> str:
    """Append a path separator unless the path already ends in one."""
    if path.endswith(os.sep):
        return path
    return path + os.sep


def join_if_relative(directory: str, path: str) -> str:
    """Resolve path against directory unless it is already absolute.

    An empty directory means there is nothing to resolve against, so the path is
    returned as-is.

    Args:
        directory: Working directory of the compile command (may be empty)
        path: Path as written on the command line

    Returns:
        Joined path (not normalized)
    """
    if not directory or os.path.isabs(path):
        return path
    return os.path.join(directory, path)
