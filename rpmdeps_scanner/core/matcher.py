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
Pairs dependency rules of one package between the before and after builds.
"""

from __future__ import annotations

import logging

from .evr import isa_names_match
from .models import Deprule, DepruleList

logger = logging.getLogger(__name__)


def is_candidate(before: Deprule, after: Deprule) -> bool:
    """Two rules can be peers when they have the same type and requirement (ISA-insensitive)."""
    return before.type == after.type and isa_names_match(before.requirement, after.requirement)


def find_deprule_peers(before: DepruleList | None, after: DepruleList | None) -> int:
    """Link each before rule to the first unmatched candidate in the after list.

    Both sides record the index of their peer in the opposite list. Links are
    one-to-one and, once set, never replaced, so calling this again over the
    same lists changes nothing.

    Returns:
        Number of new links made
    """
    if not before or not after:
        return 0

    linked = 0
    for bi, brule in enumerate(before):
        if brule.peer is not None:
            continue

        for ai, arule in enumerate(after):
            if arule.peer is not None:
                continue

            if is_candidate(brule, arule):
                brule.peer = ai
                arule.peer = bi
                linked += 1
                break

    logger.debug("Peered %d of %d before rules against %d after rules", linked, len(before), len(after))
    return linked
