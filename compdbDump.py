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

"""Load a project's compilation database and print the normalized entries.

PURPOSE:
    Shows exactly which argument vector a single-file compiler front-end receives
    for every source file of a project, together with the include directories
    discovered from -I, -isystem and -iquote flags.

WHAT IT DOES:
    - Uses .compdb_flags at the project root if present (flags applied to every
      source file found below the root)
    - Otherwise reads compile_commands.json, falling back to a directory listing
    - Strips compiler wrappers (goma, distributed build prefixes) and flags that
      only make sense in a multi-file build (-c, -MD, -MF <file>, -o <file>, ...)
    - Injects -working-directory, -x, -std=, -resource-dir when missing
    - Filters entries with --whitelist/--blacklist glob patterns

REQUIREMENTS:
    - Python 3.8+
    - colorama, packaging
    - clang (optional, to detect the resource directory)

EXAMPLES:
    ./compdbDump.py ~/src/project
    ./compdbDump.py ~/src/project --compilation-db-dir ~/src/project/build
    ./compdbDump.py ~/src/project --blacklist "*/third_party/*" --log-skipped
    ./compdbDump.py ~/src/project --format json > entries.json
    ./compdbDump.py ~/src/project --export-compile-commands normalized.json

Exit Codes:
    0: Success
    1: Invalid arguments or directory
    2: Runtime error
"""

import sys
import argparse
from typing import List, Optional

__version__ = "1.0.0"

from compdb.cli_utils import (
    add_load_arguments,
    configure_colors,
    configure_logging,
    install_signal_handlers,
    load_project_from_args,
    validate_project_directory,
)
from compdb.color_utils import Colors, format_args, print_highlight, print_info, print_warning
from compdb.constants import EXIT_SUCCESS, EXIT_RUNTIME_ERROR, EXIT_KEYBOARD_INTERRUPT, CompdbError
from compdb.entry_types import Entry
from compdb.export_utils import export_compile_commands, export_include_directories_csv, format_project_json
from compdb.package_verification import require_packages

__all__ = ["EXIT_SUCCESS", "main", "parse_arguments"]


def parse_arguments(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print the normalized compilation entries of a C/C++ project.",
        epilog=f"Version {__version__}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}", help="Show version and exit")

    add_load_arguments(parser)

    parser.add_argument("--whitelist", action="append", default=[], metavar="PATTERN", help="Always include files matching glob pattern (can be repeated)")
    parser.add_argument(
        "--blacklist", action="append", default=[], metavar="PATTERN", help='Skip files matching glob pattern unless whitelisted (e.g. "*/third_party/*")'
    )
    parser.add_argument("--log-skipped", action="store_true", help="Log every file skipped by the blacklist")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Output format (default: text)")
    parser.add_argument("--export-compile-commands", metavar="FILE.json", help="Write the normalized entries as a compile_commands.json")
    parser.add_argument("--export-include-dirs", metavar="FILE.csv", help="Write the include directories to a CSV file")

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the script.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    install_signal_handlers()
    args = parse_arguments(argv)

    configure_logging(args.verbose)
    configure_colors(args.no_color or args.format == "json")
    require_packages()

    project = load_project_from_args(args)

    if not project.entries:
        print_warning("No compilation entries found.")

    if args.export_compile_commands:
        if not export_compile_commands(args.export_compile_commands, project, validate_project_directory(args.project_directory)):
            return EXIT_RUNTIME_ERROR
    if args.export_include_dirs:
        if not export_include_directories_csv(args.export_include_dirs, project):
            return EXIT_RUNTIME_ERROR

    if args.format == "json":
        selected: List[Entry] = []
        stats = project.for_all_filtered_files(args.whitelist, args.blacklist, args.log_skipped, lambda index, entry: selected.append(entry))
        print(format_project_json(project, selected, stats))
        return EXIT_SUCCESS

    def print_entry(index: int, entry: Entry) -> None:
        print_highlight(f"[{index + 1}/{len(project.entries)}] {entry.filename}")
        print(f"  {format_args(entry.args)}")

    stats = project.for_all_filtered_files(args.whitelist, args.blacklist, args.log_skipped, print_entry)

    print()
    print_info(f"Quote include directories ({len(project.quote_include_directories)}):")
    for path in project.quote_include_directories:
        print(f"  {path}")
    print_info(f"Angle include directories ({len(project.angle_include_directories)}):")
    for path in project.angle_include_directories:
        print(f"  {path}")

    print()
    print(f"{Colors.BRIGHT}Entries:{Colors.RESET} {stats.format_concise()}")
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
