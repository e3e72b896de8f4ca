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
SARIF format reporter for code scanning integration.

Implements SARIF 2.1.0 specification for inspection results.
https://docs.oasis-open.org/sarif/sarif/v2.1.0/sarif-v2.1.0.html
"""

import json
from typing import Any

from ...config.constants import RpmdepsScannerConstants
from ...core.models import Finding, InspectionResult, Severity


class SARIFReporter:
    """Generates SARIF 2.1.0 format reports."""

    SARIF_VERSION = "2.1.0"
    SARIF_SCHEMA = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    # Map severity to SARIF levels
    SEVERITY_TO_LEVEL = {
        Severity.BAD: "error",
        Severity.VERIFY: "warning",
        Severity.INFO: "note",
        Severity.OK: "none",
    }

    def __init__(self, tool_name: str = "rpmdeps-scanner", tool_version: str = RpmdepsScannerConstants.VERSION):
        """
        Initialize SARIF reporter.

        Args:
            tool_name: Name of the scanning tool
            tool_version: Version of the scanning tool
        """
        self.tool_name = tool_name
        self.tool_version = tool_version

    def generate_report(self, result: InspectionResult) -> str:
        """
        Generate SARIF report.

        OK findings carry nothing to locate and are left out.

        Args:
            result: InspectionResult object

        Returns:
            SARIF JSON string
        """
        findings = [f for f in result.findings if f.severity != Severity.OK]
        spec_file = result.spec_file or RpmdepsScannerConstants.DEFAULT_SPEC_FILE_LABEL

        sarif = {
            "$schema": self.SARIF_SCHEMA,
            "version": self.SARIF_VERSION,
            "runs": [
                {
                    "tool": self._create_tool_component(self._extract_rules(findings)),
                    "results": self._convert_findings(findings, spec_file),
                    "invocations": [
                        {
                            "executionSuccessful": True,
                            "endTimeUtc": result.timestamp.isoformat() + "Z",
                        }
                    ],
                    "properties": {"rebase": result.rebase, "passed": result.passed},
                }
            ],
        }
        return json.dumps(sarif, indent=2, default=str)

    def _create_tool_component(self, rules: list[dict[str, Any]]) -> dict[str, Any]:
        """Create the tool component with rules."""
        return {
            "driver": {
                "name": self.tool_name,
                "version": self.tool_version,
                "rules": rules,
            }
        }

    @staticmethod
    def _rule_id(finding: Finding) -> str:
        return finding.remedy or finding.check.upper()

    def _extract_rules(self, findings: list[Finding]) -> list[dict[str, Any]]:
        """Extract one rule per remedy (or check, for findings without one)."""
        seen_rules: set[str] = set()
        rules = []

        for finding in findings:
            rule_id = self._rule_id(finding)
            if rule_id in seen_rules:
                continue
            seen_rules.add(rule_id)

            rule = {
                "id": rule_id,
                "name": rule_id.replace("_", " ").title(),
                "shortDescription": {
                    "text": finding.check.replace("_", " "),
                },
                "defaultConfiguration": {
                    "level": self.SEVERITY_TO_LEVEL.get(finding.severity, "warning"),
                },
                "properties": {
                    "check": finding.check,
                    "tags": [finding.check, "dependencies"],
                },
            }

            if finding.remediation:
                rule["help"] = {
                    "text": finding.remediation,
                    "markdown": f"**Remediation**: {finding.remediation}",
                }

            rules.append(rule)

        return rules

    def _convert_findings(self, findings: list[Finding], spec_file: str) -> list[dict[str, Any]]:
        """Convert findings to SARIF results, located in the spec file."""
        results = []

        for finding in findings:
            results.append(
                {
                    "ruleId": self._rule_id(finding),
                    "level": self.SEVERITY_TO_LEVEL.get(finding.severity, "warning"),
                    "message": {
                        "text": finding.message or "",
                    },
                    "properties": {
                        "severity": finding.severity.value,
                        "waiverAuth": finding.waiver_auth.value,
                        "package": finding.package,
                        "arch": finding.arch,
                        "deprule": finding.file,
                    },
                    "locations": [
                        {
                            "physicalLocation": {
                                "artifactLocation": {
                                    "uri": spec_file,
                                    "uriBaseId": "%SRCROOT%",
                                },
                            }
                        }
                    ],
                    # Add fingerprint for deduplication
                    "fingerprints": {
                        "primaryLocationLineHash": finding.id,
                    },
                }
            )

        return results

    def save_report(self, result: InspectionResult, output_path: str):
        """
        Save SARIF report to file.

        Args:
            result: InspectionResult object
            output_path: Path to save file
        """
        report_json = self.generate_report(result)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(report_json)
