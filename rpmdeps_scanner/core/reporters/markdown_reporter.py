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
Markdown format reporter for inspection results.
"""

from ...config.constants import RpmdepsScannerConstants
from ...core.models import Finding, InspectionResult, Severity

_SEVERITY_ORDER = [Severity.BAD, Severity.VERIFY, Severity.INFO]


def expand_noun(finding: Finding) -> str:
    """Fill the ``${FILE}`` and ``${ARCH}`` placeholders of a finding's noun."""
    noun = finding.noun or ""
    noun = noun.replace(RpmdepsScannerConstants.FILE_PLACEHOLDER, finding.file or "")
    return noun.replace(RpmdepsScannerConstants.ARCH_PLACEHOLDER, finding.arch or "")


class MarkdownReporter:
    """Generates Markdown format reports."""

    def __init__(self, detailed: bool = True):
        """
        Initialize Markdown reporter.

        Args:
            detailed: If True, include remediation text and informational findings
        """
        self.detailed = detailed

    def generate_report(self, result: InspectionResult) -> str:
        """
        Generate Markdown report.

        Args:
            result: InspectionResult object

        Returns:
            Markdown string
        """
        lines = []

        # Header
        lines.append(f"# Dependency Inspection Report ({result.inspection})")
        lines.append("")
        lines.append(f"_{RpmdepsScannerConstants.INSPECTION_DESC}_")
        lines.append("")
        lines.append(f"**Status:** {'[OK] PASSED' if result.passed else '[FAIL] ISSUES FOUND'}")
        lines.append(f"**Rebase:** {'yes' if result.rebase else 'no'}")
        if result.spec_file:
            lines.append(f"**Spec File:** {result.spec_file}")
        lines.append(f"**Max Severity:** {result.max_severity.value}")
        lines.append(f"**Duration:** {result.duration_seconds:.2f}s")
        lines.append(f"**Timestamp:** {result.timestamp.isoformat()}")
        lines.append("")

        # Summary
        lines.append("## Summary")
        lines.append("")
        lines.append(f"- **Total Findings:** {len(result.findings)}")
        lines.append(f"- **Bad:** {len(result.get_findings_by_severity(Severity.BAD))}")
        lines.append(f"- **Verify:** {len(result.get_findings_by_severity(Severity.VERIFY))}")
        lines.append(f"- **Info:** {len(result.get_findings_by_severity(Severity.INFO))}")
        lines.append("")

        shown = _SEVERITY_ORDER if self.detailed else _SEVERITY_ORDER[:2]
        if any(result.get_findings_by_severity(s) for s in shown):
            lines.append("## Findings")
            lines.append("")

            for severity in shown:
                findings = result.get_findings_by_severity(severity)
                if findings:
                    lines.append(f"### {severity.value}")
                    lines.append("")

                    for finding in findings:
                        lines.extend(self._format_finding(finding))
                        lines.append("")
        elif result.passed:
            lines.append("## [OK] No Issues Found")
            lines.append("")
            lines.append("All dependency checks passed.")
            lines.append("")

        lines.append("## Checks")
        lines.append("")
        for check in result.checks_run:
            lines.append(f"- {check}")
        lines.append("")

        return "\n".join(lines)

    def _format_finding(self, finding: Finding) -> list:
        """Format a single finding as markdown lines."""
        lines = []

        lines.append(f"#### [{finding.severity.value}] {expand_noun(finding)}")
        lines.append("")
        lines.append(f"**Check:** {finding.check}")
        lines.append(f"**Package:** {finding.package} ({finding.arch})")
        lines.append(f"**Waivable By:** {finding.waiver_auth.value}")
        lines.append("")
        lines.append(f"{finding.message}")

        if self.detailed and finding.remediation:
            lines.append("")
            lines.append(f"**Remediation:** {finding.remediation}")

        return lines

    def save_report(self, result: InspectionResult, output_path: str):
        """
        Save Markdown report to file.

        Args:
            result: InspectionResult object
            output_path: Path to save file
        """
        report_md = self.generate_report(result)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report_md)
