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
Centralized check construction.

Every entry point (CLI, DepruleInspector fallback, tests) builds its checks
through :func:`build_checks` so the set of checks and their pass order is
defined in one place.
"""

from __future__ import annotations

import logging

from .analyzers.base import BaseCheck
from .analyzers.diff_analyzer import DiffAnalyzer
from .analyzers.epoch_analyzer import EpochAnalyzer
from .analyzers.explicit_requires_analyzer import ExplicitRequiresAnalyzer
from .analyzers.macro_analyzer import MacroAnalyzer

logger = logging.getLogger(__name__)


def build_checks(*, skip: set[str] | None = None) -> list[BaseCheck]:
    """Build the dependency checks in the order they report.

    Args:
        skip: Names of checks to leave out (e.g. ``{"dependency_changes"}``)

    Returns:
        A list of check instances
    """
    checks: list[BaseCheck] = [
        MacroAnalyzer(),
        ExplicitRequiresAnalyzer(),
        EpochAnalyzer(),
        DiffAnalyzer(),
    ]

    if skip:
        unknown = skip - {c.get_name() for c in checks}
        if unknown:
            logger.warning("Ignoring unknown checks to skip: %s", ", ".join(sorted(unknown)))
        checks = [c for c in checks if c.get_name() not in skip]

    return checks
