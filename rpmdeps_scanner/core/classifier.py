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
Classification of dependency rules as gained, lost, retained or changed.

The functions here only look at rule lists that were already peered by
:func:`rpmdeps_scanner.core.matcher.find_deprule_peers`; turning the
classifications into findings is the job of the diff analyzer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .evr import format_evr, strip_isa
from .models import Deprule, DepruleList, DepruleOperator, PackageHeader, PackagePeer


class DepruleChange(str, Enum):
    """What happened to a rule between the two builds."""

    GAINED = "gained"
    LOST = "lost"
    RETAINED = "retained"
    CHANGED = "changed"


@dataclass(frozen=True)
class Classification:
    """One classified rule; ``peer_deprule`` is the before-build rule for changed and retained rules."""

    change: DepruleChange
    deprule: Deprule
    peer_deprule: Deprule | None = None
    expected: bool = False


def classify_deprules(before: DepruleList | None, after: DepruleList | None) -> list[Classification]:
    """Classify every rule of both lists exactly once.

    After-build rules come first in list order, followed by the before-build
    rules that have no peer.
    """
    before = before or []
    after = after or []
    classifications: list[Classification] = []

    for deprule in after:
        if deprule.peer is None:
            classifications.append(Classification(DepruleChange.GAINED, deprule))
            continue

        peer_deprule = before[deprule.peer]
        if deprule.matches(peer_deprule):
            classifications.append(Classification(DepruleChange.RETAINED, deprule, peer_deprule))
        else:
            classifications.append(Classification(DepruleChange.CHANGED, deprule, peer_deprule))

    for deprule in before:
        if deprule.peer is None:
            classifications.append(Classification(DepruleChange.LOST, deprule))

    return classifications


def expected_deprule_change(deprule: Deprule, header: PackageHeader, peers: list[PackagePeer]) -> bool:
    """True when a changed rule just follows a subpackage's own version bump.

    That is the case for ``Requires: foo-libs(x86-64) = 1.1-1`` when the
    after build has a ``foo-libs`` subpackage of the same architecture at
    exactly ``1.1-1`` (or ``epoch:1.1-1`` when it has an epoch). Rules of
    source packages are never expected.
    """
    if header.is_source:
        return False

    if deprule.operator != DepruleOperator.EQUAL or deprule.version is None:
        return False

    arch = header.header_arch
    req = strip_isa(deprule.requirement)

    for peer in peers:
        phdr = peer.after_hdr
        if phdr is None or phdr.is_source:
            continue

        if phdr.header_arch == arch and phdr.name == req:
            return deprule.version == format_evr(phdr.epoch, phdr.version, phdr.release)

    return False


def classify_peer(
    peer: PackagePeer, peers: list[PackagePeer] | None = None, rebase: bool = False
) -> list[Classification]:
    """Classify a peer's rules, marking expected changes.

    Expected changes are only looked for outside of a rebase and when the
    full list of peers is given.
    """
    classifications = classify_deprules(peer.before_deprules, peer.after_deprules)
    if rebase or peers is None or peer.after_hdr is None:
        return classifications

    marked: list[Classification] = []
    for item in classifications:
        if item.change == DepruleChange.CHANGED and expected_deprule_change(item.deprule, peer.after_hdr, peers):
            item = Classification(item.change, item.deprule, item.peer_deprule, expected=True)
        marked.append(item)
    return marked
