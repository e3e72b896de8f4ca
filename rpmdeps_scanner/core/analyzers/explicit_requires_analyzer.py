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
Explicit Requires verification for automatic shared library dependencies.

When subpackage B picks up an automatic ``Requires: libfoo.so.1()(64-bit)``
satisfied by subpackage A of the same build, B must also carry
``Requires: A = %{version}-%{release}`` so that mixing old and new
subpackages is never possible. Two subpackages providing the same shared
library is reported as well.
"""

from __future__ import annotations

import logging

from ...config.constants import RpmdepsScannerConstants
from ..context import InspectionContext
from ..evr import format_evr, isa_names_match, strip_isa
from ..exceptions import InspectionPreconditionError
from ..models import (
    Deprule,
    DepruleList,
    DepruleOperator,
    DepruleType,
    Finding,
    PackageHeader,
    PackagePeer,
    Severity,
    Verb,
    WaiverAuth,
)
from .base import PHASE_CROSS_PACKAGE, BaseCheck

logger = logging.getLogger(__name__)


class ExplicitRequiresAnalyzer(BaseCheck):
    """Cross-package check of shared library Requires against the subpackages providing them."""

    phase = PHASE_CROSS_PACKAGE
    description = "Missing explicit subpackage Requires for shared library dependencies"

    def __init__(self):
        super().__init__("explicit_requires")

    def check_peer(self, context: InspectionContext, peer: PackagePeer) -> list[Finding]:
        if peer.after_hdr is None:
            return []
        return self.check_header(context, peer, peer.after_hdr, peer.after_deprules)

    def check_header(
        self,
        context: InspectionContext,
        peer: PackagePeer,
        header: PackageHeader | None,
        after_deps: DepruleList | None,
    ) -> list[Finding]:
        if header is None:
            raise InspectionPreconditionError("explicit Requires check needs the after build header")

        findings: list[Finding] = []
        if not after_deps:
            return findings

        prefix = context.shared_lib_prefix
        name = header.name
        arch = header.header_arch

        for req in after_deps:
            if req.type != DepruleType.REQUIRES or not req.requirement.startswith(prefix):
                continue

            provider = self.find_providers(context, peer, req)

            if provider is not None:
                phdr = provider.after_hdr
                evr = format_evr(phdr.epoch, phdr.version, phdr.release)

                if not self.has_explicit_requires(after_deps, phdr.name, evr, prefix):
                    findings.append(self._missing_finding(context, req, name, arch, phdr, evr))

            # independent of the explicit Requires above
            if len(req.providers) > 1:
                findings.append(self._multiple_finding(context, req, name, arch))

        return findings

    @staticmethod
    def find_providers(context: InspectionContext, peer: PackagePeer, req: Deprule) -> PackagePeer | None:
        """Record every other subpackage providing ``req`` and return the first one found.

        The same package built for another architecture is not another subpackage.
        """
        prefix = context.shared_lib_prefix
        potential: PackagePeer | None = None
        own_name = peer.name

        for other in context.peers:
            if other is peer or other.after_hdr is None or not other.after_deprules:
                continue

            if other.after_hdr.name == own_name:
                continue

            for prov in other.after_deprules:
                if prov is req:
                    continue

                if prov.type != DepruleType.PROVIDES or not prov.requirement.startswith(prefix):
                    continue

                if isa_names_match(req.requirement, prov.requirement):
                    req.add_provider(other.after_hdr.name)
                    if potential is None:
                        potential = other

        if potential is not None:
            logger.debug("'%s' is provided by %s", req, ", ".join(req.providers))
        return potential

    @staticmethod
    def has_explicit_requires(after_deps: DepruleList, provider_name: str, evr: str, prefix: str) -> bool:
        """True when a non-library Requires pins ``provider_name`` to exactly ``evr``."""
        for verify in after_deps:
            if verify.type != DepruleType.REQUIRES or verify.requirement.startswith(prefix):
                continue

            if (
                strip_isa(verify.requirement) == provider_name
                and verify.operator == DepruleOperator.EQUAL
                and verify.version == evr
            ):
                return True

        return False

    def _missing_finding(
        self, context: InspectionContext, req: Deprule, name: str, arch: str, phdr: PackageHeader, evr: str
    ) -> Finding:
        rule_text = str(req)
        pname = phdr.name

        if phdr.epoch > 0:
            rulestr = "%{epoch}:%{version}-%{release}"
            remedy = RpmdepsScannerConstants.REMEDY_RPMDEPS_EXPLICIT_EPOCH
        else:
            rulestr = "%{version}-%{release}"
            remedy = RpmdepsScannerConstants.REMEDY_RPMDEPS_EXPLICIT

        return self.make_finding(
            context,
            severity=Severity.VERIFY,
            waiver_auth=WaiverAuth.WAIVABLE_BY_ANYONE,
            verb=Verb.FAILED,
            message=(
                f"Subpackage {name} on {arch} carries '{rule_text}' which comes from subpackage {pname} "
                f"but does not carry an explicit package version requirement.  Please add "
                f"'Requires: {pname} = {rulestr}' to the {context.spec_file} to avoid the need to test "
                f"interoperability between various combinations of old and new subpackages."
            ),
            noun=f"missing 'Requires: ${{FILE}} = {rulestr}' in {name} on ${{ARCH}}",
            file=pname,
            package=name,
            arch=arch,
            remedy=remedy,
            metadata={"requirement": rule_text, "missing": f"Requires: {pname} = {evr}"},
            fails_inspection=True,
        )

    def _multiple_finding(self, context: InspectionContext, req: Deprule, name: str, arch: str) -> Finding:
        rule_text = str(req)
        multiples = ", ".join(req.providers)

        return self.make_finding(
            context,
            severity=Severity.VERIFY,
            waiver_auth=WaiverAuth.WAIVABLE_BY_ANYONE,
            verb=Verb.FAILED,
            message=f"Multiple subpackages provide '{rule_text}': {multiples}",
            noun=f"{multiples} all provide '${{FILE}}' on ${{ARCH}}",
            file=rule_text,
            package=name,
            arch=arch,
            remedy=RpmdepsScannerConstants.REMEDY_RPMDEPS_MULTIPLE,
            metadata={"providers": list(req.providers)},
            fails_inspection=True,
        )
