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
Checks that packages with an Epoch use it when pinning their own version-release.
"""

from __future__ import annotations

from ...config.constants import RpmdepsScannerConstants
from ..context import InspectionContext
from ..evr import format_verrel
from ..exceptions import InspectionPreconditionError
from ..models import DepruleList, Finding, PackageHeader, PackagePeer, Severity, Verb, WaiverAuth
from .base import PHASE_CROSS_PACKAGE, BaseCheck


class EpochAnalyzer(BaseCheck):
    """Reports rules ending in the package's version-release without an ``epoch:`` prefix."""

    phase = PHASE_CROSS_PACKAGE
    description = "Missing epoch prefix on version-release dependency strings"

    def __init__(self):
        super().__init__("epoch_prefix")

    def check_peer(self, context: InspectionContext, peer: PackagePeer) -> list[Finding]:
        if peer.after_hdr is None:
            return []
        return self.check_header(context, peer.after_hdr, peer.after_deprules)

    def check_header(
        self, context: InspectionContext, header: PackageHeader | None, after_deps: DepruleList | None
    ) -> list[Finding]:
        if header is None:
            raise InspectionPreconditionError("epoch prefix check needs the after build header")

        findings: list[Finding] = []
        if not after_deps or header.epoch == 0:
            return findings

        if context.rebase:
            severity, waiver_auth = Severity.INFO, WaiverAuth.NOT_WAIVABLE
        else:
            severity, waiver_auth = Severity.BAD, WaiverAuth.WAIVABLE_BY_ANYONE

        name = header.name
        arch = header.header_arch
        verrel = format_verrel(header.version, header.release)
        epoch_prefix = f"{header.epoch}:"

        for deprule in after_deps:
            if deprule.version is None:
                continue

            if deprule.version.endswith(verrel) and not deprule.version.startswith(epoch_prefix):
                rule_text = str(deprule)
                findings.append(
                    self.make_finding(
                        context,
                        severity=severity,
                        waiver_auth=waiver_auth,
                        verb=Verb.FAILED,
                        message=f"Missing epoch prefix on the version-release in '{rule_text}' for {name} on {arch}",
                        noun=f"'${{FILE}}' needs epoch in {name} on ${{ARCH}}",
                        file=rule_text,
                        package=name,
                        arch=arch,
                        remedy=RpmdepsScannerConstants.REMEDY_RPMDEPS_EPOCH,
                        metadata={"expected_prefix": epoch_prefix},
                        fails_inspection=True,
                    )
                )

        return findings
