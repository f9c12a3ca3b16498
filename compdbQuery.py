#!/usr/bin/env python3
#****************************************************************************************************************************************************
#* BSD 3-Clause License
#*
#* Copyright (c) 2025, Mana Battery
#* All rights reserved.
#*
#* Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
#*
#* 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
#* 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
#*    documentation and/or other materials provided with the distribution.
#* 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
#*    software without specific prior written permission.
#*
#* THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
#* THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
#* CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
#* PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
#* LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
#* EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#****************************************************************************************************************************************************

"""Print the compiler flags that apply to one file of a project.

PURPOSE:
    Answers "what compiler flags apply to this file?" for any file, including
    headers and new sources that are not in the compilation database.

METHOD:
    Files found in the database use their normalized entry. Other files borrow
    the flags of the most similar known file: the longest common directory wins,
    and among equally close files the one with the same file name ending
    (foo_unittest.cc vs foo_browsertest.cc) is preferred.

EXAMPLES:
    ./compdbQuery.py ~/src/project ~/src/project/base/strings/string_util.cc
    ./compdbQuery.py ~/src/project base/new_file.cc --format json
    ./compdbQuery.py ~/src/project base/new_file.cc --args-only

Exit Codes:
    0: Success (also for inferred entries)
    1: Invalid arguments or directory
    2: Runtime error
"""

import os
import sys
import json
import argparse
from typing import List, Optional

__version__ = "1.0.0"

from compdb.cli_utils import add_load_arguments, configure_colors, configure_logging, install_signal_handlers, load_project_from_args
from compdb.color_utils import Colors, format_args, print_highlight, print_warning
from compdb.constants import EXIT_SUCCESS, EXIT_RUNTIME_ERROR, EXIT_KEYBOARD_INTERRUPT, ArgumentError, CompdbError
from compdb.entry_types import Entry
from compdb.package_verification import require_packages
from compdb.path_utils import normalize_path

__all__ = ["EXIT_SUCCESS", "main", "format_entry_json"]


def format_entry_json(entry: Entry) -> str:
    """Format an entry as JSON.

    Args:
        entry: Loaded or inferred entry

    Returns:
        JSON formatted string
    """
    output = {"file": entry.filename, "inferred": entry.is_inferred, "arguments": entry.args, "version": __version__}
    return json.dumps(output, indent=2)


def parse_arguments(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the compiler flags for one file, inferring them if the file is not in the compilation database.",
        epilog=f"Version {__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}", help="Show version and exit")

    add_load_arguments(parser)

    parser.add_argument("file", metavar="FILE", help="Source or header file (relative paths are resolved against the current directory)")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")
    parser.add_argument("--args-only", action="store_true", help="Print only the arguments, one per line")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    install_signal_handlers()
    args = parse_arguments(argv)

    configure_logging(args.verbose)
    configure_colors(args.no_color or args.format == "json" or args.args_only)
    require_packages()

    if os.path.isdir(args.file):
        raise ArgumentError(f"Expected a file, got a directory: {args.file}")

    project = load_project_from_args(args)
    entry = project.find_compilation_entry_for_file(normalize_path(args.file))

    if args.format == "json":
        print(format_entry_json(entry))
        return EXIT_SUCCESS

    if args.args_only:
        for arg in entry.args:
            print(arg)
        return EXIT_SUCCESS

    if entry.is_inferred:
        if entry.args:
            print_warning(f"{os.path.basename(entry.filename)} is not in the compilation database; flags are inferred.")
        else:
            print_warning("The project has no entries; no flags could be inferred.")

    source = "inferred" if entry.is_inferred else "database"
    print_highlight(f"{entry.filename} {Colors.DIM}({source}){Colors.RESET}")
    print(f"  {format_args(entry.args)}")
    return EXIT_SUCCESS


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print_warning("Interrupted.", prefix=False)
        sys.exit(EXIT_KEYBOARD_INTERRUPT)
    except CompdbError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(e.exit_code)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(EXIT_RUNTIME_ERROR)
