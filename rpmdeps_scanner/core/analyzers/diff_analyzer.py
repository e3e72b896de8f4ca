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
Reports how each package's dependency rules changed between the before and after builds.
"""

from __future__ import annotations

from ...config.constants import RpmdepsScannerConstants
from ..classifier import Classification, DepruleChange, classify_peer
from ..context import InspectionContext
from ..models import Finding, PackagePeer, Severity, Verb, WaiverAuth
from .base import PHASE_DIFF, BaseCheck

_VERBS = {
    DepruleChange.GAINED: Verb.ADDED,
    DepruleChange.LOST: Verb.REMOVED,
    DepruleChange.RETAINED: Verb.OK,
    DepruleChange.CHANGED: Verb.CHANGED,
}

_REMEDIES = {
    DepruleChange.GAINED: RpmdepsScannerConstants.REMEDY_RPMDEPS_GAINED,
    DepruleChange.LOST: RpmdepsScannerConstants.REMEDY_RPMDEPS_LOST,
    DepruleChange.RETAINED: None,
    DepruleChange.CHANGED: RpmdepsScannerConstants.REMEDY_RPMDEPS_CHANGED,
}


class DiffAnalyzer(BaseCheck):
    """Emits one finding per gained, lost, retained or changed rule."""

    phase = PHASE_DIFF
    description = "Dependency rules gained, lost, retained or changed between builds"

    def __init__(self):
        super().__init__("dependency_changes")

    def applies_to(self, context: InspectionContext) -> bool:
        return context.has_before

    def check_peer(self, context: InspectionContext, peer: PackagePeer) -> list[Finding]:
        if peer.header is None:
            return []

        return [
            self._finding(context, peer, item)
            for item in classify_peer(peer, peers=context.peers, rebase=context.rebase)
        ]

    @staticmethod
    def _location(peer: PackagePeer) -> str:
        if peer.arch == RpmdepsScannerConstants.SRPM_ARCH_NAME:
            return f"source package {peer.name}"
        return f"subpackage {peer.name} on {peer.arch}"

    def _finding(self, context: InspectionContext, peer: PackagePeer, item: Classification) -> Finding:
        name = peer.name
        arch = peer.arch
        drs = str(item.deprule)
        where = self._location(peer)
        noun = f"'${{FILE}}' in {name} on ${{ARCH}}"

        if context.rebase or item.change == DepruleChange.RETAINED:
            severity, waiver_auth = Severity.INFO, WaiverAuth.NOT_WAIVABLE
        else:
            severity, waiver_auth = Severity.VERIFY, WaiverAuth.WAIVABLE_BY_ANYONE

        if item.change == DepruleChange.GAINED:
            message = f"Gained '{drs}' in {where}"
        elif item.change == DepruleChange.LOST:
            message = f"Lost '{drs}' in {where}"
        elif item.change == DepruleChange.RETAINED:
            message = f"Retained '{drs}' in {where}"
        else:
            pdrs = str(item.peer_deprule)
            message = f"Changed '{pdrs}' to '{drs}' in {where}"
            noun = f"'{pdrs}' became '${{FILE}}' in {name} on ${{ARCH}}"

            if item.expected:
                severity, waiver_auth = Severity.INFO, WaiverAuth.NOT_WAIVABLE
                message += "; this is expected"

        metadata = {"change": item.change.value, "expected": item.expected}
        if item.peer_deprule is not None:
            metadata["before"] = str(item.peer_deprule)

        return self.make_finding(
            context,
            severity=severity,
            waiver_auth=waiver_auth,
            verb=_VERBS[item.change],
            message=message,
            noun=noun,
            file=drs,
            package=name,
            arch=arch,
            remedy=_REMEDIES[item.change],
            metadata=metadata,
        )
