# Copyright 2026 Cisco Systems, Inc. and its affiliates
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
Tests for the inspection engine.
"""

import pytest

from rpmdeps_scanner.config.config import Config
from rpmdeps_scanner.core.analyzer_factory import build_checks
from rpmdeps_scanner.core.exceptions import BuildLoadError
from rpmdeps_scanner.core.inspector import DepruleInspector, inspect_builds
from rpmdeps_scanner.core.models import PackagePeer, Severity, Verb

LIB = "libfoo.so.1()(64-bit)"


@pytest.fixture
def inspector():
    return DepruleInspector(config=Config(rebase=False))


def _peers(make_header, before_release="1", after_release="2"):
    """A source package plus foo-libs and foo-devel, unpeered and ungathered."""
    peers = []
    for release, attr in ((before_release, "before_hdr"), (after_release, "after_hdr")):
        headers = [
            make_header("foo", release=release, source=True, files=["foo.spec"], requires=["gcc"]),
            make_header("foo-libs", release=release, provides=[LIB]),
            make_header("foo-devel", release=release, requires=[LIB, f"foo-libs(x86-64) = 1.0-{release}"]),
        ]
        if not peers:
            peers = [PackagePeer() for _ in headers]
        for peer, hdr in zip(peers, headers):
            setattr(peer, attr, hdr)
    return peers


class TestInspect:
    def test_clean_build_passes_with_ok_finding(self, inspector, make_header):
        peers = _peers(make_header, after_release="1")

        result = inspector.inspect(peers)

        assert result.passed
        assert result.findings[-1].severity == Severity.OK
        assert result.findings[-1].verb == Verb.OK
        assert all(f.severity in (Severity.OK, Severity.INFO) for f in result.findings)

    def test_expected_release_bump_passes(self, inspector, make_header):
        result = inspector.inspect(_peers(make_header))

        changed = [f for f in result.findings if f.verb == Verb.CHANGED]
        assert len(changed) == 1
        assert changed[0].message.endswith("; this is expected")
        assert result.passed

    def test_findings_follow_pass_order(self, inspector, make_header):
        peers = _peers(make_header)
        peers[2].after_hdr.requires = [LIB, "python3 >= %{python3_min}"]

        result = inspector.inspect(peers)

        checks = [f.check for f in result.findings]
        assert checks.index("unexpanded_macros") < checks.index("explicit_requires")
        assert checks.index("explicit_requires") < checks.index("dependency_changes")
        assert not result.passed
        assert result.max_severity == Severity.BAD
        assert all(f.severity != Severity.OK for f in result.findings)

    def test_unexpanded_macro_fails_run(self, inspector, make_header):
        peer = PackagePeer(after_hdr=make_header("foo", requires=["bar >= %{bar_version}"]))

        result = inspector.inspect([peer], has_before=False)

        assert not result.passed
        assert [f.check for f in result.findings] == ["unexpanded_macros"]
        assert result.findings[0].severity == Severity.BAD

    def test_malformed_rule_does_not_stop_other_checks(self, inspector, make_header):
        leaking = PackagePeer(after_hdr=make_header("foo", requires=["bar = %{upstream_version}"]))
        malformed = PackagePeer(after_hdr=make_header("foo-devel", requires=["baz =", "qux"]))

        result = inspector.inspect([leaking, malformed], has_before=False)

        assert [(f.check, f.package) for f in result.findings] == [("unexpanded_macros", "foo")]
        assert [str(d) for d in malformed.after_deprules] == ["Requires: qux"]

    def test_inspecting_twice_gives_same_findings(self, inspector, make_header):
        peers = _peers(make_header)
        peers[2].after_hdr.requires = [LIB]

        first = inspector.inspect(peers)
        second = inspector.inspect(peers)

        assert [f.to_dict() for f in first.findings] == [f.to_dict() for f in second.findings]
        assert peers[2].after_deprules[0].providers == ["foo-libs"]

    def test_without_before_build_skips_diff(self, inspector, make_header):
        peers = [PackagePeer(after_hdr=make_header("foo", requires=["bar"]))]

        result = inspector.inspect(peers)

        assert "dependency_changes" not in result.checks_run
        assert result.passed

    def test_spec_file_found_in_source_package(self, inspector, make_header):
        peers = _peers(make_header)
        peers[2].after_hdr.requires = [LIB]

        result = inspector.inspect(peers)

        assert result.spec_file == "foo.spec"
        explicit = result.get_findings_by_check("explicit_requires")[0]
        assert "to the foo.spec to avoid" in explicit.message
        assert explicit.metadata["spec_file"] == "foo.spec"

    def test_missing_spec_file_uses_generic_label(self, inspector, make_header):
        a = PackagePeer(after_hdr=make_header("foo-libs", provides=[LIB]))
        b = PackagePeer(after_hdr=make_header("foo-devel", requires=[LIB]))

        result = inspector.inspect([a, b])

        assert result.spec_file is None
        assert "to the spec file to avoid" in result.findings[0].message


class TestRebase:
    def test_version_change_is_detected_as_rebase(self, make_header):
        before = make_header("foo", "1.0", source=True, requires=["gcc"])
        after = make_header("foo", "2.0", source=True, requires=["clang"])

        result = DepruleInspector(config=Config()).inspect([PackagePeer(before_hdr=before, after_hdr=after)])

        assert result.rebase
        assert result.passed
        assert {f.severity for f in result.findings} == {Severity.INFO, Severity.OK}

    def test_release_change_is_not_a_rebase(self, inspector, make_header):
        assert not inspector.inspect(_peers(make_header)).rebase

    def test_config_overrides_detection(self, make_header):
        before = make_header("foo", "1.0", source=True, requires=["gcc"])
        after = make_header("foo", "2.0", source=True, requires=["clang"])

        result = DepruleInspector(config=Config(rebase=False)).inspect(
            [PackagePeer(before_hdr=before, after_hdr=after)]
        )

        assert not result.rebase
        assert not result.passed

    def test_argument_overrides_config(self, inspector, make_header):
        result = inspector.inspect(_peers(make_header), rebase=True)

        assert result.rebase
        assert all(f.severity in (Severity.OK, Severity.INFO) for f in result.findings)

    def test_epoch_defect_fails_rebase(self, inspector, make_header):
        before = make_header("foo", "1.0", "1", epoch=2, requires=["bar = 2:1.0-1"])
        after = make_header("foo", "2.0", "1", epoch=2, requires=["bar = 2.0-1"])

        result = inspector.inspect([PackagePeer(before_hdr=before, after_hdr=after)], rebase=True)

        assert [f.check for f in result.findings] == ["epoch_prefix", "dependency_changes"]
        assert {f.severity for f in result.findings} == {Severity.INFO}
        assert not result.passed
        assert all(f.severity != Severity.OK for f in result.findings)


class TestChecksSelection:
    def test_skipped_check_does_not_run(self, make_header):
        peer = PackagePeer(after_hdr=make_header("foo", requires=["bar >= %{bar_version}"]))
        inspector = DepruleInspector(checks=build_checks(skip={"unexpanded_macros"}), config=Config(rebase=False))

        result = inspector.inspect([peer], has_before=False)

        assert result.passed
        assert "unexpanded_macros" not in result.checks_run

    def test_unknown_skip_is_ignored(self):
        assert len(build_checks(skip={"no_such_check"})) == 4


class TestExampleBuilds:
    def test_example_builds(self, inspector, example_builds_dir):
        result = inspector.inspect_builds(example_builds_dir / "after.yaml", example_builds_dir / "before.yaml")

        assert not result.rebase
        assert result.spec_file == "foo.spec"
        assert not result.passed

        macros = result.get_findings_by_check("unexpanded_macros")
        assert [f.package for f in macros] == ["foo"]

        explicit = result.get_findings_by_check("explicit_requires")
        missing = [f for f in explicit if f.remedy == "RPMDEPS_EXPLICIT"]
        multiple = [f for f in explicit if f.remedy == "RPMDEPS_MULTIPLE"]
        assert [f.package for f in missing] == ["foo-devel"]
        assert [f.package for f in multiple] == ["foo", "foo-devel"]

        changes = result.get_findings_by_check("dependency_changes")
        messages = [f.message for f in changes]
        assert "Gained 'Requires: meson' in source package foo" in messages
        assert (
            "Changed 'Provides: foo = 1.0-1.fc40' to 'Provides: foo = 1.0-2.fc40' "
            "in subpackage foo on x86_64; this is expected"
        ) in messages
        assert "Lost 'Requires: foo-libs(x86-64) = 1.0-1.fc40' in subpackage foo-devel on x86_64" in messages
        assert any(m.startswith("Gained 'Provides: libfoo.so.1()(64-bit)' in subpackage foo-compat") for m in messages)

    def test_after_build_only(self, example_builds_dir):
        result = inspect_builds(example_builds_dir / "after.yaml", config=Config(rebase=False))

        assert result.get_findings_by_check("dependency_changes") == []
        assert result.get_findings_by_check("unexpanded_macros")

    def test_missing_manifest_raises(self, inspector, tmp_path):
        with pytest.raises(BuildLoadError):
            inspector.inspect_builds(tmp_path / "missing.yaml")
