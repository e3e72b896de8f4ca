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
Flags dependency versions that still contain unexpanded spec file macros.

A version such as ``%{upstream_version}`` means the macro was not defined
when the package was built, so the rule can never be satisfied as intended.
"""

from __future__ import annotations

from ...config.constants import RpmdepsScannerConstants
from ..context import InspectionContext
from ..models import DepruleList, Finding, PackagePeer, Severity, Verb, WaiverAuth
from .base import PHASE_PER_PACKAGE, BaseCheck


def has_unexpanded_macro(version: str | None) -> bool:
    """True when ``%{`` appears and any ``}`` follows it.

    The closing brace does not have to belong to the same macro.
    """
    if version is None:
        return False

    start = version.find("%{")
    if start == -1:
        return False
    return version.find("}", start) != -1


class MacroAnalyzer(BaseCheck):
    """Reports after-build rules whose version carries an unexpanded macro."""

    phase = PHASE_PER_PACKAGE
    description = "Unexpanded spec file macros in dependency versions"

    def __init__(self):
        super().__init__("unexpanded_macros")

    def check_peer(self, context: InspectionContext, peer: PackagePeer) -> list[Finding]:
        if peer.after_hdr is None:
            return []
        return self.check_deprules(context, peer.after_hdr.name, peer.after_hdr.header_arch, peer.after_deprules)

    def check_deprules(
        self, context: InspectionContext, name: str, arch: str, deprules: DepruleList | None
    ) -> list[Finding]:
        findings: list[Finding] = []
        if not deprules:
            return findings

        for deprule in deprules:
            if not has_unexpanded_macro(deprule.version):
                continue

            rule_text = str(deprule)
            findings.append(
                self.make_finding(
                    context,
                    severity=Severity.BAD,
                    waiver_auth=WaiverAuth.WAIVABLE_BY_ANYONE,
                    verb=Verb.FAILED,
                    message=(
                        f"Invalid looking {deprule.type.value} dependency in the {name} package on {arch}: {rule_text}"
                    ),
                    noun=f"'${{FILE}}' in {name} on ${{ARCH}}",
                    file=rule_text,
                    package=name,
                    arch=arch,
                    remedy=RpmdepsScannerConstants.REMEDY_RPMDEPS_MACROS,
                    fails_inspection=True,
                )
            )

        return findings
