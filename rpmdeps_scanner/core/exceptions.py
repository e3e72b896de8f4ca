# Copyright 2026 Cisco Systems, Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


"""rpmdeps scanner exceptions.

This module defines custom exceptions for rpmdeps scanner operations.
All exceptions inherit from RpmdepsScannerError for easy catching.

Inspection findings are never raised; these exceptions cover input that
cannot be read at all and callers that break an engine precondition.

Example:
    >>> from rpmdeps_scanner.core.loader import BuildLoader
    >>> from rpmdeps_scanner.core.exceptions import BuildLoadError
    >>>
    >>> try:
    ...     peers = BuildLoader().load_peers("after.yaml", before="before.yaml")
    ... except BuildLoadError as e:
    ...     print(f"Failed to load build: {e}")
"""


class RpmdepsScannerError(Exception):
    """Base exception for all rpmdeps scanner errors."""

    pass


class BuildLoadError(RpmdepsScannerError):
    """Raised when unable to load a build manifest.

    This can indicate:
    - Missing manifest file
    - Invalid YAML or JSON
    - A package entry without name, version or release
    """

    pass


class DepruleParseError(BuildLoadError):
    """Raised when a dependency rule string cannot be parsed."""

    pass


class InspectionPreconditionError(RpmdepsScannerError):
    """Raised when a caller breaks an engine precondition.

    For example, passing no package header to a check that needs one.
    This is a programming error, not an inspection finding.
    """

    pass
