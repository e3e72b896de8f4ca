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
Core inspection engine for orchestrating dependency rule checks.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from ..config.config import Config
from ..config.constants import RpmdepsScannerConstants
from .analyzer_factory import build_checks
from .analyzers.base import PHASE_CROSS_PACKAGE, PHASE_DIFF, PHASE_PER_PACKAGE, BaseCheck
from .context import InspectionContext, detect_rebase, find_spec_file
from .gather import gather_peer_deprules
from .loader import BuildLoader
from .matcher import find_deprule_peers
from .models import Finding, InspectionResult, PackagePeer, Severity, Verb, WaiverAuth

logger = logging.getLogger(__name__)


class DepruleInspector:
    """Main inspector that runs every dependency check over a set of package peers."""

    def __init__(self, checks: list[BaseCheck] | None = None, config: Config | None = None):
        """
        Initialize inspector with checks.

        Args:
            checks: List of checks to run. If None, uses every built-in check.
            config: Run configuration. If None, reads it from the environment.
        """
        self.config = config or Config.from_env()
        self.checks: list[BaseCheck] = build_checks() if checks is None else checks
        self.loader = BuildLoader()

    def inspect_builds(self, after: str | Path, before: str | Path | None = None) -> InspectionResult:
        """
        Load build manifests and inspect them.

        Args:
            after: Path to the after build manifest
            before: Optional path to the before build manifest

        Returns:
            InspectionResult with findings

        Raises:
            BuildLoadError: If a manifest cannot be loaded
        """
        peers = self.loader.load_peers(after, before=before)
        return self.inspect(peers, has_before=before is not None)

    def inspect(
        self,
        peers: list[PackagePeer],
        *,
        rebase: bool | None = None,
        has_before: bool | None = None,
    ) -> InspectionResult:
        """
        Run all checks over the given peers.

        Rule lists are gathered on first use and kept on the peers, so
        inspecting the same peers twice gives the same findings.

        Args:
            peers: Every package peer of the run, source package included
            rebase: Whether the after build is a rebase. Falls back to the
                config, then to comparing source package versions.
            has_before: Whether a before build exists. Defaults to True when
                any peer has a before header.

        Returns:
            InspectionResult with findings in the order they were found
        """
        start_time = time.time()

        if rebase is None:
            rebase = self.config.rebase
        if rebase is None:
            rebase = detect_rebase(peers)
        if has_before is None:
            has_before = any(p.before_hdr is not None for p in peers)

        spec_file = find_spec_file(peers)
        context = InspectionContext(
            peers=peers,
            rebase=rebase,
            has_before=has_before,
            spec_file=spec_file or RpmdepsScannerConstants.DEFAULT_SPEC_FILE_LABEL,
            shared_lib_prefix=self.config.shared_lib_prefix,
        )
        logger.info(
            "Inspecting %d packages (rebase=%s, before build=%s, spec file=%s)",
            len(peers),
            rebase,
            has_before,
            context.spec_file,
        )

        findings: list[Finding] = []
        checks_run: list[str] = []

        # first pass gathers and peers the rules before any check looks at them
        for peer in peers:
            gather_peer_deprules(peer)
            find_deprule_peers(peer.before_deprules, peer.after_deprules)

        for phase in (PHASE_PER_PACKAGE, PHASE_CROSS_PACKAGE, PHASE_DIFF):
            phase_checks = [c for c in self.checks if c.phase == phase and c.applies_to(context)]
            checks_run.extend(c.get_name() for c in phase_checks)

            for peer in peers:
                for check in phase_checks:
                    findings.extend(check.check_peer(context, peer))

        result = InspectionResult(
            inspection=RpmdepsScannerConstants.INSPECTION_NAME,
            findings=findings,
            rebase=rebase,
            spec_file=spec_file,
            checks_run=checks_run,
        )

        # if everything was fine, just say so
        if result.passed:
            result.findings.append(self._ok_finding())

        result.duration_seconds = time.time() - start_time
        logger.info(
            "Inspection %s with %d findings (max severity %s)",
            "passed" if result.passed else "failed",
            len(result.findings),
            result.max_severity.value,
        )
        return result

    @staticmethod
    def _ok_finding() -> Finding:
        return Finding(
            id=f"{RpmdepsScannerConstants.INSPECTION_NAME}-ok",
            check=RpmdepsScannerConstants.INSPECTION_NAME,
            severity=Severity.OK,
            waiver_auth=WaiverAuth.NOT_WAIVABLE,
            verb=Verb.OK,
        )


def inspect_builds(
    after: str | Path,
    before: str | Path | None = None,
    config: Config | None = None,
) -> InspectionResult:
    """
    Convenience function to inspect a pair of build manifests.

    Args:
        after: Path to the after build manifest
        before: Optional path to the before build manifest
        config: Optional run configuration

    Returns:
        InspectionResult with findings
    """
    inspector = DepruleInspector(config=config)
    return inspector.inspect_builds(after, before=before)
