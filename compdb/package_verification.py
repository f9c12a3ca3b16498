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

"""Runtime dependency checks for the compdb tools.

The command-line tools call require_packages() before loading a project so that
a missing or outdated dependency is reported with the pip command that fixes it,
instead of surfacing later as an import error.
"""

import sys
import logging
import argparse
from dataclasses import dataclass
from importlib.metadata import version, PackageNotFoundError
from typing import Dict, Iterable, List, Optional

from packaging.version import parse

from compdb.color_utils import print_error, print_success
from compdb.constants import MissingDependencyError

logger = logging.getLogger(__name__)

# Minimum versions (Ubuntu 24.04 LTS)
PACKAGE_REQUIREMENTS: Dict[str, str] = {
    "packaging": "24.0",
    "colorama": "0.4.6",
}


@dataclass
class PackageStatus:
    """Installed state of one distribution.

    Attributes:
        name: Distribution name on PyPI
        required: Minimum version
        installed: Installed version, or None if the package is missing
    """

    name: str
    required: str
    installed: Optional[str]

    @property
    def is_installed(self) -> bool:
        return self.installed is not None

    @property
    def meets_version(self) -> bool:
        return self.installed is not None and parse(self.installed) >= parse(self.required)

    def problem(self) -> Optional[str]:
        """Describe what is wrong with the installation, or None if it is usable."""
        if not self.is_installed:
            return f"{self.name} is not installed. Install with: pip install '{self.name}>={self.required}'"
        if not self.meets_version:
            return f"{self.name} {self.installed} is too old (need >={self.required}). Upgrade with: pip install --upgrade '{self.name}>={self.required}'"
        return None


def get_package_status(package_name: str, min_version: Optional[str] = None) -> PackageStatus:
    """Look up the installed version of a package.

    Args:
        package_name: PyPI package name (e.g., 'colorama')
        min_version: Minimum version. If None, PACKAGE_REQUIREMENTS is used.

    Raises:
        ValueError: If no minimum version is known for the package
    """
    if min_version is None:
        min_version = PACKAGE_REQUIREMENTS.get(package_name)
        if min_version is None:
            raise ValueError(f"No version requirement specified for {package_name}")

    try:
        installed: Optional[str] = version(package_name)
    except PackageNotFoundError:
        installed = None
    logger.debug("%s: installed %s, required >=%s", package_name, installed, min_version)
    return PackageStatus(name=package_name, required=min_version, installed=installed)


def require_packages(package_names: Optional[Iterable[str]] = None) -> None:
    """Verify runtime dependencies before doing any work.

    Args:
        package_names: Packages to check (default: every entry of PACKAGE_REQUIREMENTS)

    Raises:
        MissingDependencyError: Listing every missing or outdated package
    """
    names = list(PACKAGE_REQUIREMENTS) if package_names is None else list(package_names)
    problems: List[str] = []
    for name in names:
        problem = get_package_status(name).problem()
        if problem:
            problems.append(problem)
    if problems:
        raise MissingDependencyError("; ".join(problems))


def check_all_packages() -> bool:
    """Print the status of every runtime package.

    Returns:
        True if all required packages are usable
    """
    all_ok = True
    for package_name in PACKAGE_REQUIREMENTS:
        status = get_package_status(package_name)
        problem = status.problem()
        if problem is None:
            print_success(f"{package_name} {status.installed}")
        else:
            print_error(problem, prefix=False)
            all_ok = False
    return all_ok


def main() -> int:
    parser = argparse.ArgumentParser(description="Verify compdb package dependencies")
    parser.add_argument("--check-all", action="store_true", help="Check all known runtime packages")
    args = parser.parse_args()

    if args.check_all:
        return 0 if check_all_packages() else 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
