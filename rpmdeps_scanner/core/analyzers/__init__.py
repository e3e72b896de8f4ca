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
Dependency checks run by the rpmdeps inspection.
"""

from .base import PHASE_CROSS_PACKAGE, PHASE_DIFF, PHASE_PER_PACKAGE, BaseCheck
from .diff_analyzer import DiffAnalyzer
from .epoch_analyzer import EpochAnalyzer
from .explicit_requires_analyzer import ExplicitRequiresAnalyzer
from .macro_analyzer import MacroAnalyzer

__all__ = [
    "BaseCheck",
    "DiffAnalyzer",
    "EpochAnalyzer",
    "ExplicitRequiresAnalyzer",
    "MacroAnalyzer",
    "PHASE_CROSS_PACKAGE",
    "PHASE_DIFF",
    "PHASE_PER_PACKAGE",
]
