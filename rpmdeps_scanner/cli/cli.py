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


"""Command-line interface for the rpmdeps scanner."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config.config import Config
from ..config.constants import RpmdepsScannerConstants
from ..core.analyzer_factory import build_checks
from ..core.exceptions import BuildLoadError
from ..core.inspector import DepruleInspector
from ..core.models import InspectionResult, Severity
from ..core.reporters.json_reporter import JSONReporter
from ..core.reporters.markdown_reporter import MarkdownReporter, expand_noun
from ..core.reporters.sarif_reporter import SARIFReporter

logger = logging.getLogger("rpmdeps_scanner.cli")


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


def _load_config(args: argparse.Namespace) -> Config:
    """Build the run configuration from ``--config`` and the rebase flags."""
    config_path = getattr(args, "config", None)
    config = Config.from_file(Path(config_path)) if config_path else Config.from_env()

    rebase = getattr(args, "rebase", None)
    if rebase is not None:
        config.rebase = rebase

    prefix = getattr(args, "shared_lib_prefix", None)
    if prefix:
        config.shared_lib_prefix = prefix

    if getattr(args, "format", None) is None:
        args.format = config.output_format
    if getattr(args, "detailed", False):
        config.detailed_output = True

    return config


def _format_output(args: argparse.Namespace, result: InspectionResult, config: Config) -> str:
    """Generate the formatted output string for an inspection result."""
    fmt = getattr(args, "format", "summary")
    if fmt == "json":
        return JSONReporter(pretty=not args.compact).generate_report(result)
    if fmt == "markdown":
        return MarkdownReporter(detailed=config.detailed_output).generate_report(result)
    if fmt == "sarif":
        return SARIFReporter().generate_report(result)
    return _generate_summary(result, detailed=config.detailed_output)


def _write_output(args: argparse.Namespace, output: str) -> None:
    """Write *output* to a file or stdout."""
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(output)
        print(f"Report saved to: {args.output}", file=sys.stderr)
    else:
        print(output)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def inspect_command(args: argparse.Namespace) -> int:
    """Handle the ``inspect`` command."""
    after = Path(args.after)
    before = Path(args.before) if args.before else None

    config = _load_config(args)
    skip = set(args.skip_check or [])
    inspector = DepruleInspector(checks=build_checks(skip=skip), config=config)

    try:
        result = inspector.inspect_builds(after, before=before)
    except BuildLoadError as e:
        print(f"Error loading build: {e}", file=sys.stderr)
        return 1

    _write_output(args, _format_output(args, result, config))

    if not result.passed and args.fail_on_findings:
        return 1
    return 0


def list_checks_command(_args: argparse.Namespace) -> int:
    """Handle the ``list-checks`` command."""
    print(f"{RpmdepsScannerConstants.INSPECTION_NAME}: {RpmdepsScannerConstants.INSPECTION_DESC}")
    print()
    print("Available checks (in reporting order):")
    for check in build_checks():
        print(f"  {check.get_name():<20s} {check.description}")
    return 0


# ---------------------------------------------------------------------------
# Summary formatter
# ---------------------------------------------------------------------------


def _generate_summary(result: InspectionResult, detailed: bool = False) -> str:
    lines = [
        "=" * 60,
        f"Inspection: {result.inspection}",
        "=" * 60,
        f"Status: {'[OK] PASSED' if result.passed else '[FAIL] ISSUES FOUND'}",
        f"Rebase: {'yes' if result.rebase else 'no'}",
        f"Max Severity: {result.max_severity.value}",
        f"Total Findings: {len(result.findings)}",
        f"Duration: {result.duration_seconds:.2f}s",
        "",
    ]
    if result.findings:
        lines.append("Findings Summary:")
        for sev in (Severity.BAD, Severity.VERIFY, Severity.INFO):
            lines.append(f"  {sev.value:>8s}: {len(result.get_findings_by_severity(sev))}")

        shown = (Severity.BAD, Severity.VERIFY, Severity.INFO) if detailed else (Severity.BAD, Severity.VERIFY)
        listed = [f for f in result.findings if f.severity in shown]
        if listed:
            lines.append("")
            lines.append("Findings:")
            for finding in listed:
                lines.append(f"  [{finding.severity.value}] {expand_noun(finding)}")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="rpmdeps scanner - compare and verify package dependency rules between builds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  rpmdeps-scanner inspect after.yaml
  rpmdeps-scanner inspect after.yaml --before before.yaml
  rpmdeps-scanner inspect after.yaml --before before.yaml --rebase --format json
  rpmdeps-scanner inspect after.yaml --before before.yaml --fail-on-findings
  rpmdeps-scanner list-checks
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # -- inspect -----------------------------------------------------------
    insp_p = subparsers.add_parser("inspect", help="Inspect the dependency rules of a build")
    insp_p.add_argument("after", help="Path to the after build manifest (YAML or JSON)")
    insp_p.add_argument("--before", "-b", help="Path to the before build manifest (YAML or JSON)")
    rebase_group = insp_p.add_mutually_exclusive_group()
    rebase_group.add_argument("--rebase", dest="rebase", action="store_true", default=None, help="Treat as a rebase")
    rebase_group.add_argument("--no-rebase", dest="rebase", action="store_false", help="Treat as a rebuild")
    insp_p.add_argument(
        "--format",
        choices=["summary", "json", "markdown", "sarif"],
        default=None,
        help="Output format (default: summary, or RPMDEPS_SCANNER_FORMAT)",
    )
    insp_p.add_argument("--output", "-o", help="Output file path")
    insp_p.add_argument("--compact", action="store_true", help="Compact JSON output")
    insp_p.add_argument("--detailed", action="store_true", help="Include informational findings and remediation")
    insp_p.add_argument("--fail-on-findings", action="store_true", help="Exit with error if the inspection fails")
    insp_p.add_argument("--shared-lib-prefix", metavar="PREFIX", help="Prefix of automatic shared library deps")
    insp_p.add_argument("--skip-check", action="append", metavar="NAME", help="Skip a check (repeatable)")
    insp_p.add_argument("--config", metavar="PATH", help="Path to a .env file with RPMDEPS_SCANNER_* settings")

    # -- list-checks -------------------------------------------------------
    subparsers.add_parser("list-checks", help="List available checks")

    # -- dispatch ----------------------------------------------------------
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    dispatch = {
        "inspect": inspect_command,
        "list-checks": list_checks_command,
    }
    handler = dispatch.get(args.command)
    if handler:
        return handler(args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
