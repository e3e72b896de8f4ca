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


"""
Constants for the rpmdeps scanner.
"""

try:
    from .._version import __version__ as PACKAGE_VERSION
except Exception:  # pragma: no cover
    PACKAGE_VERSION = "0.0.0-dev"


class RpmdepsScannerConstants:
    """Constants used throughout the inspection."""

    # Version derived from pyproject.toml via hatch-vcs at install time.
    VERSION = PACKAGE_VERSION

    # Inspection identity
    INSPECTION_NAME = "rpmdeps"
    INSPECTION_DESC = "Check for dependency problems and report changes in dependency rules between builds."

    # Package metadata conventions
    SRPM_ARCH_NAME = "src"
    SPEC_FILENAME_EXTENSION = ".spec"
    DEFAULT_SPEC_FILE_LABEL = "spec file"
    SHARED_LIB_PREFIX = "lib"

    # Noun template placeholders, expanded by whatever renders the result
    FILE_PLACEHOLDER = "${FILE}"
    ARCH_PLACEHOLDER = "${ARCH}"

    # Remediation identifiers
    REMEDY_RPMDEPS_MACROS = "RPMDEPS_MACROS"
    REMEDY_RPMDEPS_EXPLICIT = "RPMDEPS_EXPLICIT"
    REMEDY_RPMDEPS_EXPLICIT_EPOCH = "RPMDEPS_EXPLICIT_EPOCH"
    REMEDY_RPMDEPS_MULTIPLE = "RPMDEPS_MULTIPLE"
    REMEDY_RPMDEPS_EPOCH = "RPMDEPS_EPOCH"
    REMEDY_RPMDEPS_GAINED = "RPMDEPS_GAINED"
    REMEDY_RPMDEPS_LOST = "RPMDEPS_LOST"
    REMEDY_RPMDEPS_CHANGED = "RPMDEPS_CHANGED"

    REMEDIES = {
        REMEDY_RPMDEPS_MACROS: (
            "Dependency version strings should not contain unexpanded spec file macros. "
            "Check the spec file for a macro that is misspelled or not defined at build time."
        ),
        REMEDY_RPMDEPS_EXPLICIT: (
            "Add an explicit 'Requires: <subpackage> = %{version}-%{release}' to the subpackage "
            "that carries the automatic shared library dependency."
        ),
        REMEDY_RPMDEPS_EXPLICIT_EPOCH: (
            "Add an explicit 'Requires: <subpackage> = %{epoch}:%{version}-%{release}' to the "
            "subpackage that carries the automatic shared library dependency."
        ),
        REMEDY_RPMDEPS_MULTIPLE: (
            "Only one subpackage should provide a given shared library. Move the library into a "
            "single subpackage or exclude it from the others with %exclude."
        ),
        REMEDY_RPMDEPS_EPOCH: (
            "The package defines an Epoch, so dependency rules using %{version}-%{release} must be "
            "written as %{epoch}:%{version}-%{release}."
        ),
        REMEDY_RPMDEPS_GAINED: (
            "A new dependency rule appeared. Make sure it is intentional and does not pull in "
            "unexpected packages."
        ),
        REMEDY_RPMDEPS_LOST: (
            "A dependency rule disappeared. Make sure nothing relied on it and that a replacement "
            "is not needed."
        ),
        REMEDY_RPMDEPS_CHANGED: (
            "A dependency rule changed between builds. Make sure the new rule is correct for the "
            "packages that depend on it."
        ),
    }

    @classmethod
    def get_remediation(cls, remedy: str | None) -> str | None:
        """Get the remediation text for a remedy identifier."""
        if remedy is None:
            return None
        return cls.REMEDIES.get(remedy)
