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
Base check interface for dependency rule inspection.
"""

from __future__ import annotations

import hashlib
from abc import ABC, abstractmethod
from typing import Any

from ...config.constants import RpmdepsScannerConstants
from ..context import InspectionContext
from ..models import Finding, PackagePeer, Severity, Verb, WaiverAuth

# Checks run in three passes over all peers, in this order
PHASE_PER_PACKAGE = 1
PHASE_CROSS_PACKAGE = 2
PHASE_DIFF = 3


class BaseCheck(ABC):
    """Abstract base class for all dependency checks."""

    phase: int = PHASE_PER_PACKAGE
    description: str = ""

    def __init__(self, name: str):
        """
        Initialize check.

        Args:
            name: Name of the check, recorded on every finding it emits
        """
        self.name = name

    @abstractmethod
    def check_peer(self, context: InspectionContext, peer: PackagePeer) -> list[Finding]:
        """
        Check one package peer.

        Args:
            context: Run-scoped state, including every peer of the run
            peer: The peer to check; its rule lists are already gathered and peered

        Returns:
            List of findings
        """
        pass

    def applies_to(self, context: InspectionContext) -> bool:
        """Whether this check should run at all for the given run."""
        return True

    def analyze(self, context: InspectionContext) -> list[Finding]:
        """Run the check over every peer of the run."""
        findings: list[Finding] = []
        if not self.applies_to(context):
            return findings
        for peer in context.peers:
            findings.extend(self.check_peer(context, peer))
        return findings

    def get_name(self) -> str:
        """Get the check name."""
        return self.name

    def make_finding(
        self,
        context: InspectionContext,
        *,
        severity: Severity,
        waiver_auth: WaiverAuth,
        verb: Verb,
        message: str,
        noun: str,
        file: str,
        package: str,
        arch: str,
        remedy: str | None = None,
        metadata: dict[str, Any] | None = None,
        fails_inspection: bool = False,
    ) -> Finding:
        """Build a finding with a stable id and the run's spec file attached.

        ``fails_inspection`` marks findings that report a defect, so the run
        fails even when the severity was lowered to INFO.
        """
        key = "|".join((self.name, verb.value, package, arch, file, message))
        finding_id = f"{self.name}-{hashlib.sha256(key.encode('utf-8')).hexdigest()[:12]}"

        meta = {"spec_file": context.spec_file}
        if metadata:
            meta.update(metadata)

        return Finding(
            id=finding_id,
            check=self.name,
            severity=severity,
            waiver_auth=waiver_auth,
            verb=verb,
            message=message,
            noun=noun,
            file=file,
            arch=arch,
            package=package,
            remedy=remedy,
            remediation=RpmdepsScannerConstants.get_remediation(remedy),
            metadata=meta,
            fails_inspection=fails_inspection,
        )
