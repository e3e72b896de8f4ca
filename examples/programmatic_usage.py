#!/usr/bin/env python3
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
Programmatic usage example - using the rpmdeps scanner as a Python library.

This example demonstrates:
1. Loading a before and after build from manifests
2. Running the inspection with an explicit configuration
3. Processing findings programmatically
"""

from pathlib import Path

from rpmdeps_scanner import Config, DepruleInspector
from rpmdeps_scanner.core.models import Severity

BUILDS = Path(__file__).parent / "builds"


def group_by_check(findings):
    """Group findings by the check that produced them."""
    by_check = {}
    for finding in findings:
        by_check.setdefault(finding.check, []).append(finding)
    return by_check


def main():
    inspector = DepruleInspector(config=Config(rebase=False))
    result = inspector.inspect_builds(BUILDS / "after.yaml", before=BUILDS / "before.yaml")

    print(f"{'=' * 60}")
    print("Inspection Results")
    print(f"{'=' * 60}")
    print(f"Passed: {result.passed}")
    print(f"Max severity: {result.max_severity.value}")
    print(f"Spec file: {result.spec_file}")
    print()

    for check, findings in group_by_check(result.findings).items():
        reportable = [f for f in findings if f.severity in (Severity.VERIFY, Severity.BAD)]
        print(f"{check}: {len(findings)} findings, {len(reportable)} need attention")
        for finding in reportable:
            print(f"  [{finding.severity.value}] {finding.message}")

    return 0 if result.passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
