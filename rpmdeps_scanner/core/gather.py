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
Dependency rule gathering from package headers.

Rules are gathered in the order rpm stores them: every Requires, then every
Provides, Conflicts and Obsoletes, each in declaration order.
"""

from __future__ import annotations

import logging
import re

from .exceptions import DepruleParseError
from .models import Deprule, DepruleList, DepruleOperator, DepruleType, PackageHeader, PackagePeer

logger = logging.getLogger(__name__)

_DEPRULE_RE = re.compile(r"^(?P<requirement>\S+)(?:\s+(?P<operator>==|<=|>=|=|<|>)\s+(?P<version>\S+))?$")

GATHER_ORDER = (DepruleType.REQUIRES, DepruleType.PROVIDES, DepruleType.CONFLICTS, DepruleType.OBSOLETES)


def parse_deprule(deprule_type: DepruleType, text: str) -> Deprule:
    """
    Parse a rule string such as ``foo-libs(x86-64) = 1.0-1``.

    Rich dependencies (``(a or b)``) are kept whole as the requirement.

    Raises:
        DepruleParseError: If the string is empty or not of the form
            ``requirement [operator version]``
    """
    text = text.strip()
    if not text:
        raise DepruleParseError(f"Empty {deprule_type.value} rule")

    if text.startswith("(") and text.endswith(")"):
        return Deprule(type=deprule_type, requirement=text)

    match = _DEPRULE_RE.match(text)
    if not match:
        raise DepruleParseError(f"Invalid {deprule_type.value} rule: {text!r}")

    return Deprule(
        type=deprule_type,
        requirement=match.group("requirement"),
        operator=DepruleOperator.from_symbol(match.group("operator")),
        version=match.group("version"),
    )


def gather_deprules(header: PackageHeader | None) -> DepruleList:
    """Collect all dependency rules of a package header.

    Rule strings that cannot be parsed are logged and skipped; they leave
    nothing to check and never stop the rest of the header from being gathered.
    """
    if header is None:
        return []

    deprules: DepruleList = []
    for deprule_type in GATHER_ORDER:
        for text in header.raw_rules(deprule_type):
            try:
                deprules.append(parse_deprule(deprule_type, text))
            except DepruleParseError as e:
                logger.warning("Skipping rule of %s.%s: %s", header.name, header.header_arch, e)

    logger.debug("Gathered %d dependency rules from %s.%s", len(deprules), header.name, header.header_arch)
    return deprules


def gather_peer_deprules(peer: PackagePeer) -> None:
    """Fill in a peer's rule lists, leaving lists that are already gathered alone."""
    if peer.before_hdr is not None and peer.before_deprules is None:
        peer.before_deprules = gather_deprules(peer.before_hdr)

    if peer.after_hdr is not None and peer.after_deprules is None:
        peer.after_deprules = gather_deprules(peer.after_hdr)
