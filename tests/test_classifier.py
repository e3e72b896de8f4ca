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
Tests for classifying dependency rules between builds.
"""

from rpmdeps_scanner.core.classifier import (
    DepruleChange,
    classify_deprules,
    classify_peer,
    expected_deprule_change,
)
from rpmdeps_scanner.core.gather import parse_deprule
from rpmdeps_scanner.core.matcher import find_deprule_peers
from rpmdeps_scanner.core.models import DepruleType

R = DepruleType.REQUIRES


def _peered(before_texts, after_texts):
    before = [parse_deprule(R, t) for t in before_texts]
    after = [parse_deprule(R, t) for t in after_texts]
    find_deprule_peers(before, after)
    return before, after


class TestClassifyDeprules:
    def test_every_rule_classified_once(self):
        before, after = _peered(["a", "b = 1", "c"], ["a", "b = 2", "d"])

        items = classify_deprules(before, after)

        assert [(i.change, str(i.deprule)) for i in items] == [
            (DepruleChange.RETAINED, "Requires: a"),
            (DepruleChange.CHANGED, "Requires: b = 2"),
            (DepruleChange.GAINED, "Requires: d"),
            (DepruleChange.LOST, "Requires: c"),
        ]
        classified = [id(i.deprule) for i in items]
        assert sorted(classified) == sorted(id(d) for d in after + [before[2]])
        assert len(classified) == len(set(classified))

    def test_changed_carries_before_rule(self):
        before, after = _peered(["b >= 1"], ["b >= 2"])

        (item,) = classify_deprules(before, after)

        assert item.change == DepruleChange.CHANGED
        assert str(item.peer_deprule) == "Requires: b >= 1"
        assert str(item.deprule) == "Requires: b >= 2"

    def test_operator_change_is_a_change(self):
        before, after = _peered(["b >= 1"], ["b = 1"])

        (item,) = classify_deprules(before, after)

        assert item.change == DepruleChange.CHANGED

    def test_isa_qualifier_difference_is_retained(self):
        before, after = _peered(["foo(x86-64) = 1.0"], ["foo = 1.0"])

        (item,) = classify_deprules(before, after)

        assert item.change == DepruleChange.RETAINED
        assert item.peer_deprule is before[0]

    def test_after_only_everything_is_gained(self):
        after = [parse_deprule(R, "a"), parse_deprule(R, "b")]

        items = classify_deprules(None, after)

        assert [i.change for i in items] == [DepruleChange.GAINED, DepruleChange.GAINED]

    def test_before_only_everything_is_lost(self):
        before = [parse_deprule(R, "a")]

        items = classify_deprules(before, None)

        assert [i.change for i in items] == [DepruleChange.LOST]

    def test_empty_lists(self):
        assert classify_deprules(None, None) == []


class TestExpectedChange:
    def test_lock_on_subpackage_version_is_expected(self, make_header, make_peer):
        libs = make_peer(after=make_header("foo-libs", "1.1", "1"))
        foo_hdr = make_header("foo", "1.1", "1", requires=["foo-libs(x86-64) = 1.1-1"])
        deprule = parse_deprule(R, "foo-libs(x86-64) = 1.1-1")

        assert expected_deprule_change(deprule, foo_hdr, [libs])

    def test_lock_with_epoch_needs_epoch(self, make_header, make_peer):
        libs = make_peer(after=make_header("foo-libs", "1.1", "1", epoch=3))
        foo_hdr = make_header("foo", "1.1", "1")

        assert expected_deprule_change(parse_deprule(R, "foo-libs = 3:1.1-1"), foo_hdr, [libs])
        assert not expected_deprule_change(parse_deprule(R, "foo-libs = 1.1-1"), foo_hdr, [libs])

    def test_other_arch_is_not_expected(self, make_header, make_peer):
        libs = make_peer(after=make_header("foo-libs", "1.1", "1", arch="i686"))
        foo_hdr = make_header("foo", "1.1", "1", arch="x86_64")

        assert not expected_deprule_change(parse_deprule(R, "foo-libs = 1.1-1"), foo_hdr, [libs])

    def test_non_equal_operator_is_not_expected(self, make_header, make_peer):
        libs = make_peer(after=make_header("foo-libs", "1.1", "1"))
        foo_hdr = make_header("foo", "1.1", "1")

        assert not expected_deprule_change(parse_deprule(R, "foo-libs >= 1.1-1"), foo_hdr, [libs])

    def test_unknown_package_is_not_expected(self, make_header, make_peer):
        libs = make_peer(after=make_header("foo-libs", "1.1", "1"))
        foo_hdr = make_header("foo", "1.1", "1")

        assert not expected_deprule_change(parse_deprule(R, "bar = 1.1-1"), foo_hdr, [libs])

    def test_source_package_rules_are_never_expected(self, make_header, make_peer):
        libs = make_peer(after=make_header("foo-libs", "1.1", "1"))
        srpm = make_header("foo", "1.1", "1", source=True)

        assert not expected_deprule_change(parse_deprule(R, "foo-libs = 1.1-1"), srpm, [libs])

    def test_source_peers_are_not_candidates(self, make_header, make_peer):
        srpm = make_peer(after=make_header("foo", "1.1", "1", source=True))
        hdr = make_header("foo-tools", "1.1", "1", arch="src")

        assert not expected_deprule_change(parse_deprule(R, "foo = 1.1-1"), hdr, [srpm])


class TestClassifyPeer:
    def _peers(self, make_header, make_peer):
        libs = make_peer(
            before=make_header("foo-libs", "1.0", "1"),
            after=make_header("foo-libs", "1.1", "1"),
        )
        foo = make_peer(
            before=make_header("foo", "1.0", "1", requires=["foo-libs(x86-64) = 1.0-1", "bar >= 1"]),
            after=make_header("foo", "1.1", "1", requires=["foo-libs(x86-64) = 1.1-1", "bar >= 2"]),
        )
        return [libs, foo]

    def test_marks_expected_changes(self, make_header, make_peer):
        peers = self._peers(make_header, make_peer)

        items = classify_peer(peers[1], peers=peers)

        assert [(i.change, i.expected) for i in items] == [
            (DepruleChange.CHANGED, True),
            (DepruleChange.CHANGED, False),
        ]

    def test_rebase_skips_expected_check(self, make_header, make_peer):
        peers = self._peers(make_header, make_peer)

        items = classify_peer(peers[1], peers=peers, rebase=True)

        assert [i.expected for i in items] == [False, False]

    def test_without_peers_nothing_is_expected(self, make_header, make_peer):
        peers = self._peers(make_header, make_peer)

        items = classify_peer(peers[1])

        assert not any(i.expected for i in items)
