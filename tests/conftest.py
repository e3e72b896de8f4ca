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
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest before running tests.
All fixtures defined here are available to every test module without
explicit imports.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rpmdeps_scanner.core.context import InspectionContext
from rpmdeps_scanner.core.gather import gather_peer_deprules
from rpmdeps_scanner.core.matcher import find_deprule_peers
from rpmdeps_scanner.core.models import PackageHeader, PackagePeer

project_root = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Example build fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def example_builds_dir() -> Path:
    """Directory holding the example before/after build manifests."""
    return project_root / "examples" / "builds"


# ---------------------------------------------------------------------------
# Factory fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_header():
    """Factory fixture for creating :class:`PackageHeader` objects.

    Usage::

        hdr = make_header("foo-libs", release="2", provides=["libfoo.so.1()(64-bit)"])
    """

    def _make(
        name: str,
        version: str = "1.0",
        release: str = "1",
        *,
        epoch: int = 0,
        arch: str = "x86_64",
        source: bool = False,
        files: list[str] | None = None,
        requires: list[str] | None = None,
        provides: list[str] | None = None,
        conflicts: list[str] | None = None,
        obsoletes: list[str] | None = None,
    ) -> PackageHeader:
        return PackageHeader(
            name=name,
            version=version,
            release=release,
            epoch=epoch,
            arch=arch,
            is_source=source,
            files=list(files or []),
            requires=list(requires or []),
            provides=list(provides or []),
            conflicts=list(conflicts or []),
            obsoletes=list(obsoletes or []),
        )

    return _make


@pytest.fixture
def make_peer():
    """Factory fixture for creating gathered and peered :class:`PackagePeer` objects.

    Usage::

        peer = make_peer(after=make_header("foo"), before=make_header("foo", release="0"))
    """

    def _make(after: PackageHeader | None = None, before: PackageHeader | None = None) -> PackagePeer:
        peer = PackagePeer(before_hdr=before, after_hdr=after)
        gather_peer_deprules(peer)
        find_deprule_peers(peer.before_deprules, peer.after_deprules)
        return peer

    return _make


@pytest.fixture
def make_context():
    """Factory fixture for creating an :class:`InspectionContext` over some peers."""

    def _make(peers: list[PackagePeer], **kwargs) -> InspectionContext:
        return InspectionContext(peers=peers, **kwargs)

    return _make
