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

"""Best-effort compiler flags for files that are not in the compilation database.

The flags of the most similar known file are reused. Similarity is a score over
the two path strings:

- each matching leading character adds MATCH_PREFIX_WEIGHT
- each path separator after the common prefix, in either path, subtracts
  MISMATCH_DIRECTORY_WEIGHT (files in other subtrees are penalized)
- each matching trailing character adds MATCH_POSTFIX_WEIGHT, which breaks ties
  in favor of the same file name ending (foo_unittest.cc over foo_browsertest.cc)
"""

import os
import logging
import threading
from typing import Dict, Optional, Sequence

from compdb.constants import MATCH_POSTFIX_WEIGHT, MATCH_PREFIX_WEIGHT, MISMATCH_DIRECTORY_WEIGHT
from compdb.entry_types import Entry

logger = logging.getLogger(__name__)

__all__ = ["compute_guess_score", "infer_entry", "InferenceCache"]


def compute_guess_score(a: str, b: str, separator: str = os.sep) -> int:
    """Compute how well two paths match for argument guessing.

    Args:
        a: First path
        b: Second path
        separator: Path separator used to count directory distance

    Returns:
        Similarity score (higher is better, may be negative)
    """
    score = 0

    i = 0
    limit = min(len(a), len(b))
    while i < limit and a[i] == b[i]:
        score += MATCH_PREFIX_WEIGHT
        i += 1

    score -= a.count(separator, i) * MISMATCH_DIRECTORY_WEIGHT
    score -= b.count(separator, i) * MISMATCH_DIRECTORY_WEIGHT

    for offset in range(1, limit + 1):
        if a[-offset] != b[-offset]:
            break
        score += MATCH_POSTFIX_WEIGHT

    return score


def infer_entry(entries: Sequence[Entry], filename: str) -> Entry:
    """Guess a compilation entry for a file using the closest known entry.

    Ties keep the first entry seen. Never fails: with no entries at all the
    result has empty args.

    Args:
        entries: Known entries, in load order
        filename: File to infer flags for

    Returns:
        New Entry with is_inferred set
    """
    best_entry: Optional[Entry] = None
    best_score = 0
    for entry in entries:
        score = compute_guess_score(filename, entry.filename)
        if best_entry is None or score > best_score:
            best_score = score
            best_entry = entry

    result = Entry(filename=filename, is_inferred=True)
    if best_entry is not None:
        result.args = list(best_entry.args)
        logger.debug("Inferred flags for %s from %s (score %d)", filename, best_entry.filename, best_score)
    else:
        logger.debug("No entries to infer flags for %s", filename)
    return result


class InferenceCache:
    """Thread-safe memo of inferred entries keyed by the queried filename.

    The cache is only valid for the entries it was filled from; clear() it
    whenever the entries are reloaded. Two threads inferring the same new file
    at once may both compute it; the last write wins and both results are equal.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: Dict[str, Entry] = {}

    def get_or_infer(self, entries: Sequence[Entry], filename: str) -> Entry:
        """Return the cached inferred entry for filename, inferring it on a miss.

        A copy is returned so callers may modify it freely.
        """
        with self._lock:
            cached = self._entries.get(filename)
        if cached is None:
            cached = infer_entry(entries, filename)
            with self._lock:
                self._entries[filename] = cached
        return Entry(filename=cached.filename, args=list(cached.args), is_inferred=True)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
