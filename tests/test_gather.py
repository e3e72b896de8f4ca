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
Tests for dependency rule parsing and gathering.
"""

import pytest

from rpmdeps_scanner.core.exceptions import BuildLoadError, DepruleParseError
from rpmdeps_scanner.core.gather import gather_deprules, gather_peer_deprules, parse_deprule
from rpmdeps_scanner.core.models import DepruleOperator, DepruleType, PackagePeer


class TestParseDeprule:
    def test_plain_requirement(self):
        deprule = parse_deprule(DepruleType.REQUIRES, "libfoo.so.1()(64-bit)")

        assert deprule.requirement == "libfoo.so.1()(64-bit)"
        assert deprule.operator == DepruleOperator.NONE
        assert deprule.version is None

    def test_versioned_requirement(self):
        deprule = parse_deprule(DepruleType.REQUIRES, "foo-libs(x86-64) = 2:1.0-1.fc40")

        assert deprule.requirement == "foo-libs(x86-64)"
        assert deprule.operator == DepruleOperator.EQUAL
        assert deprule.version == "2:1.0-1.fc40"

    def test_surrounding_whitespace_is_ignored(self):
        deprule = parse_deprule(DepruleType.CONFLICTS, "  bar <  2.0 ")

        assert deprule.requirement == "bar"
        assert deprule.operator == DepruleOperator.LESS_THAN
        assert deprule.version == "2.0"

    def test_rich_dependency_is_kept_whole(self):
        deprule = parse_deprule(DepruleType.REQUIRES, "(foo >= 1.0 or bar)")

        assert deprule.requirement == "(foo >= 1.0 or bar)"
        assert deprule.version is None

    @pytest.mark.parametrize("text", ["", "   ", "foo >=", "foo ~ 1.0", "foo = 1.0 extra"])
    def test_malformed_rules_raise(self, text):
        with pytest.raises(DepruleParseError):
            parse_deprule(DepruleType.PROVIDES, text)

    def test_parse_error_is_a_load_error(self):
        with pytest.raises(BuildLoadError):
            parse_deprule(DepruleType.PROVIDES, "foo >=")


class TestGatherDeprules:
    def test_gather_order_follows_rule_types(self, make_header):
        hdr = make_header(
            "foo",
            obsoletes=["foo-old < 1.0"],
            conflicts=["bar"],
            provides=["foo = 1.0-1"],
            requires=["baz", "libbaz.so.2"],
        )

        deprules = gather_deprules(hdr)

        assert [str(d) for d in deprules] == [
            "Requires: baz",
            "Requires: libbaz.so.2",
            "Provides: foo = 1.0-1",
            "Conflicts: bar",
            "Obsoletes: foo-old < 1.0",
        ]

    def test_malformed_rule_is_skipped(self, make_header, caplog):
        hdr = make_header("foo", requires=["baz =", "bar = %{upstream_version}"], provides=["foo = 1.0-1"])

        with caplog.at_level("WARNING"):
            deprules = gather_deprules(hdr)

        assert [str(d) for d in deprules] == ["Requires: bar = %{upstream_version}", "Provides: foo = 1.0-1"]
        assert "baz =" in caplog.text

    def test_gather_without_header_is_empty(self):
        assert gather_deprules(None) == []

    def test_peer_gathering_is_memoized(self, make_header):
        peer = PackagePeer(before_hdr=make_header("foo", requires=["a"]), after_hdr=make_header("foo", requires=["b"]))

        gather_peer_deprules(peer)
        after = peer.after_deprules
        after[0].add_provider("marker")
        gather_peer_deprules(peer)

        assert peer.after_deprules is after
        assert peer.after_deprules[0].providers == ["marker"]
        assert [str(d) for d in peer.before_deprules] == ["Requires: a"]

    def test_peer_without_before_header_keeps_no_before_list(self, make_header):
        peer = PackagePeer(after_hdr=make_header("foo", requires=["a"]))

        gather_peer_deprules(peer)

        assert peer.before_deprules is None
        assert len(peer.after_deprules) == 1
