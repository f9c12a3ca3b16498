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

"""Project index: loaded compilation entries, include directories and lookups.

After load() returns, a Project is treated as read-only. Exact lookups and
inference only read the entries and may run from several threads, as long as
nobody reloads the same Project at the same time.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from compdb.entry_types import Entry, ProjectConfig
from compdb.file_utils import FilterStatistics, GroupMatch
from compdb.inference import InferenceCache, infer_entry
from compdb.loader import load_compilation_entries_from_directory
from compdb.path_utils import PathNormalizer, ensure_ends_in_slash, normalize_path

logger = logging.getLogger(__name__)

__all__ = ["Project"]


class Project:
    """A loaded compilation database.

    Attributes:
        entries: Normalized entries in load order; the index is the entry's identity
        quote_include_directories: Sorted #include "..." search paths, separator-terminated
        angle_include_directories: Sorted #include <...> search paths, separator-terminated
    """

    def __init__(self, enable_inference_cache: bool = False) -> None:
        self.entries: List[Entry] = []
        self.quote_include_directories: List[str] = []
        self.angle_include_directories: List[str] = []
        self._absolute_path_to_entry_index: Dict[str, int] = {}
        self._inference_cache: Optional[InferenceCache] = InferenceCache() if enable_inference_cache else None

    def load(
        self,
        extra_flags: Sequence[str],
        opt_compilation_db_dir: str,
        root_directory: str,
        resource_directory: str,
        path_normalizer: PathNormalizer = normalize_path,
    ) -> None:
        """Load the project's compilation entries and include directories.

        Args:
            extra_flags: Flags appended verbatim to every entry
            opt_compilation_db_dir: Directory of compile_commands.json ("" = project root)
            root_directory: Absolute project root
            resource_directory: Absolute toolchain resource directory
            path_normalizer: Strategy used to canonicalize paths
        """
        config = ProjectConfig(
            project_dir=root_directory, resource_dir=resource_directory, extra_flags=list(extra_flags), path_normalizer=path_normalizer
        )
        entries = load_compilation_entries_from_directory(config, opt_compilation_db_dir)

        self.quote_include_directories = sorted(ensure_ends_in_slash(path) for path in config.quote_dirs)
        self.angle_include_directories = sorted(ensure_ends_in_slash(path) for path in config.angle_dirs)
        for path in self.quote_include_directories:
            logger.debug("quote_include_dir: %s", path)
        for path in self.angle_include_directories:
            logger.debug("angle_include_dir: %s", path)

        self.set_entries(entries)

    def set_entries(self, entries: Sequence[Entry]) -> None:
        """Replace the entries and rebuild the filename index.

        Clears any inferred entries cached for the previous entries.
        """
        self.entries = list(entries)
        self._absolute_path_to_entry_index = {entry.filename: i for i, entry in enumerate(self.entries)}
        if self._inference_cache is not None:
            self._inference_cache.clear()

    def find_compilation_entry_for_file(self, filename: str) -> Entry:
        """Return the entry for filename, inferring one if the file is unknown.

        Args:
            filename: Absolute, normalized path

        Returns:
            A copy of the loaded entry, or a new inferred entry (possibly with
            empty args). Callers may modify the result freely.
        """
        index = self._absolute_path_to_entry_index.get(filename)
        if index is not None:
            entry = self.entries[index]
            return Entry(filename=entry.filename, args=list(entry.args))

        if self._inference_cache is not None:
            return self._inference_cache.get_or_infer(self.entries, filename)
        return infer_entry(self.entries, filename)

    def for_all_filtered_files(
        self, whitelist: Sequence[str], blacklist: Sequence[str], log_skipped: bool, action: Callable[[int, Entry], None]
    ) -> FilterStatistics:
        """Invoke action(index, entry) for every entry accepted by the pattern filter.

        Exceptions raised by action propagate to the caller.

        Args:
            whitelist: Glob patterns that always accept a file
            blacklist: Glob patterns that reject a file unless whitelisted
            log_skipped: Log every skipped file
            action: Callback receiving the entry index and the entry

        Returns:
            FilterStatistics for this pass
        """
        matcher = GroupMatch(whitelist, blacklist)
        stats = FilterStatistics(total=len(self.entries))
        for i, entry in enumerate(self.entries):
            matched, failure_reason = matcher.is_match(entry.filename)
            if matched:
                stats.matched += 1
                action(i, entry)
                continue

            stats.skipped_by_reason[failure_reason or ""] += 1
            if log_skipped:
                logger.info("[%d/%d]: Failed %s; skipping %s", i + 1, len(self.entries), failure_reason, entry.filename)
        return stats
