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
Data models for package dependency rules, package peers and inspection findings.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..config.constants import RpmdepsScannerConstants
from .evr import isa_names_match


class DepruleType(str, Enum):
    """Kinds of package-level dependency rules."""

    REQUIRES = "Requires"
    PROVIDES = "Provides"
    CONFLICTS = "Conflicts"
    OBSOLETES = "Obsoletes"


class DepruleOperator(str, Enum):
    """Version comparison operators carried by a dependency rule."""

    NONE = ""
    EQUAL = "="
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    LESS_THAN = "<"
    GREATER_THAN = ">"

    @classmethod
    def from_symbol(cls, symbol: str | None) -> "DepruleOperator":
        """Map an operator symbol (``=``, ``>=``, ...) to its enum member."""
        if not symbol:
            return cls.NONE
        # "==" shows up in hand-written manifests
        if symbol == "==":
            return cls.EQUAL
        return cls(symbol)


class Severity(str, Enum):
    """Severity levels for inspection findings, lowest first."""

    OK = "OK"
    INFO = "INFO"
    VERIFY = "VERIFY"
    BAD = "BAD"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {Severity.OK: 0, Severity.INFO: 1, Severity.VERIFY: 2, Severity.BAD: 3}


class WaiverAuth(str, Enum):
    """Who may waive a finding."""

    NOT_WAIVABLE = "Not Waivable"
    WAIVABLE_BY_ANYONE = "Anyone"


class Verb(str, Enum):
    """What happened to the thing a finding is about."""

    OK = "OK"
    ADDED = "ADDED"
    REMOVED = "REMOVED"
    CHANGED = "CHANGED"
    FAILED = "FAILED"


@dataclass
class Deprule:
    """A single dependency declaration from a package header.

    ``peer`` is the index of the matched rule in the opposite build's rule
    list for the same package and architecture, or None when unmatched.
    """

    type: DepruleType
    requirement: str
    operator: DepruleOperator = DepruleOperator.NONE
    version: str | None = None
    providers: list[str] = field(default_factory=list)
    peer: int | None = None

    def add_provider(self, name: str) -> None:
        """Record a providing subpackage, keeping discovery order and no duplicates."""
        if name not in self.providers:
            self.providers.append(name)

    def matches(self, other: "Deprule") -> bool:
        """True when the rules are the same apart from an ISA qualifier on the requirement."""
        return (
            self.type == other.type
            and self.operator == other.operator
            and isa_names_match(self.requirement, other.requirement)
            and self.version == other.version
        )

    def __str__(self) -> str:
        text = f"{self.type.value}: {self.requirement}"
        if self.operator != DepruleOperator.NONE and self.version is not None:
            text += f" {self.operator.value} {self.version}"
        return text


DepruleList = list[Deprule]


@dataclass
class PackageHeader:
    """Package metadata as read from a built package header.

    The ``requires``/``provides``/``conflicts``/``obsoletes`` lists hold the
    raw rule strings in declaration order, e.g. ``"foo-libs(x86-64) = 1.0-1"``.
    """

    name: str
    version: str
    release: str
    epoch: int = 0
    arch: str = "noarch"
    is_source: bool = False
    files: list[str] = field(default_factory=list)
    requires: list[str] = field(default_factory=list)
    provides: list[str] = field(default_factory=list)
    conflicts: list[str] = field(default_factory=list)
    obsoletes: list[str] = field(default_factory=list)

    @property
    def header_arch(self) -> str:
        """Architecture used for reporting; source packages report ``src``."""
        if self.is_source:
            return RpmdepsScannerConstants.SRPM_ARCH_NAME
        return self.arch

    def raw_rules(self, deprule_type: DepruleType) -> list[str]:
        return {
            DepruleType.REQUIRES: self.requires,
            DepruleType.PROVIDES: self.provides,
            DepruleType.CONFLICTS: self.conflicts,
            DepruleType.OBSOLETES: self.obsoletes,
        }[deprule_type]


@dataclass
class PackagePeer:
    """The same package (or subpackage) in the before and after builds."""

    before_hdr: PackageHeader | None = None
    after_hdr: PackageHeader | None = None
    before_deprules: DepruleList | None = None
    after_deprules: DepruleList | None = None

    @property
    def header(self) -> PackageHeader | None:
        """The header used to name this peer, preferring the after build."""
        return self.after_hdr or self.before_hdr

    @property
    def name(self) -> str:
        hdr = self.header
        return hdr.name if hdr else ""

    @property
    def arch(self) -> str:
        hdr = self.header
        return hdr.header_arch if hdr else ""

    @property
    def is_source(self) -> bool:
        hdr = self.header
        return bool(hdr and hdr.is_source)

    @property
    def after_files(self) -> list[str]:
        return self.after_hdr.files if self.after_hdr else []


@dataclass
class Finding:
    """A single inspection result emitted by one of the dependency checks."""

    id: str
    check: str  # Which check produced this finding (e.g. "explicit_requires")
    severity: Severity
    waiver_auth: WaiverAuth
    verb: Verb
    message: str | None = None
    noun: str | None = None
    file: str | None = None
    arch: str | None = None
    package: str | None = None
    remedy: str | None = None
    remediation: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    # Reports a defect; fails the run even when the severity is only INFO
    fails_inspection: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert finding to dictionary."""
        return {
            "id": self.id,
            "check": self.check,
            "severity": self.severity.value,
            "waiver_auth": self.waiver_auth.value,
            "verb": self.verb.value,
            "message": self.message,
            "noun": self.noun,
            "file": self.file,
            "arch": self.arch,
            "package": self.package,
            "remedy": self.remedy,
            "remediation": self.remediation,
            "metadata": self.metadata,
            "fails_inspection": self.fails_inspection,
        }


@dataclass
class InspectionResult:
    """Results from running the dependency inspection over one pair of builds."""

    inspection: str
    findings: list[Finding] = field(default_factory=list)
    rebase: bool = False
    spec_file: str | None = None
    checks_run: list[str] = field(default_factory=list)
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def passed(self) -> bool:
        """True when no finding reports a defect, needs verification or is a hard failure."""
        return not any(
            f.fails_inspection or f.severity in (Severity.VERIFY, Severity.BAD) for f in self.findings
        )

    @property
    def max_severity(self) -> Severity:
        """Get the highest severity level found."""
        if not self.findings:
            return Severity.OK
        return max((f.severity for f in self.findings), key=lambda s: s.rank)

    def get_findings_by_severity(self, severity: Severity) -> list[Finding]:
        """Get all findings of a specific severity."""
        return [f for f in self.findings if f.severity == severity]

    def get_findings_by_check(self, check: str) -> list[Finding]:
        """Get all findings produced by one check."""
        return [f for f in self.findings if f.check == check]

    def to_dict(self) -> dict[str, Any]:
        """Convert inspection result to dictionary."""
        return {
            "inspection": self.inspection,
            "passed": self.passed,
            "rebase": self.rebase,
            "spec_file": self.spec_file,
            "max_severity": self.max_severity.value,
            "findings_count": len(self.findings),
            "findings": [f.to_dict() for f in self.findings],
            "duration_seconds": self.duration_seconds,
            "duration_ms": int(self.duration_seconds * 1000),
            "checks_run": self.checks_run,
            "timestamp": self.timestamp.isoformat(),
        }
