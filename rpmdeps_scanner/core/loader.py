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
Build manifest loader.

A build manifest describes the packages of one build and their dependency
rules, as YAML (or JSON, which YAML accepts)::

    packages:
      - name: foo
        version: "1.0"
        release: "1.fc40"
        epoch: 0
        arch: x86_64
        source: false
        files: []
        requires: ["libfoo.so.1()(64-bit)", "foo-libs(x86-64) = 1.0-1.fc40"]
        provides: []
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .exceptions import BuildLoadError
from .models import PackageHeader, PackagePeer

logger = logging.getLogger(__name__)


class BuildLoader:
    """Loads build manifests and pairs their packages into peers."""

    RULE_KEYS = ("requires", "provides", "conflicts", "obsoletes")
    KNOWN_KEYS = {"name", "version", "release", "epoch", "arch", "source", "files", *RULE_KEYS}

    def load_build(self, manifest_path: str | Path) -> list[PackageHeader]:
        """
        Load every package header of one build.

        Args:
            manifest_path: Path to the YAML or JSON manifest

        Returns:
            Package headers in manifest order

        Raises:
            BuildLoadError: If the manifest cannot be read or is malformed
        """
        if not isinstance(manifest_path, Path):
            manifest_path = Path(manifest_path)

        if not manifest_path.is_file():
            raise BuildLoadError(f"Build manifest does not exist: {manifest_path}")

        try:
            with open(manifest_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise BuildLoadError(f"Failed to read {manifest_path}: {e}")
        except yaml.YAMLError as e:
            raise BuildLoadError(f"Invalid YAML in {manifest_path}: {e}")

        return self.headers_from_dict(data, source=str(manifest_path))

    def headers_from_dict(self, data: Any, source: str = "<manifest>") -> list[PackageHeader]:
        """Build package headers from an already parsed manifest."""
        if not isinstance(data, dict) or not isinstance(data.get("packages"), list):
            raise BuildLoadError(f"{source}: expected a mapping with a 'packages' list")

        return [self._parse_package(entry, source, i) for i, entry in enumerate(data["packages"])]

    def _parse_package(self, entry: Any, source: str, index: int) -> PackageHeader:
        if not isinstance(entry, dict):
            raise BuildLoadError(f"{source}: package #{index} is not a mapping")

        for key in ("name", "version", "release"):
            if entry.get(key) in (None, ""):
                raise BuildLoadError(f"{source}: package #{index} is missing '{key}'")

        unknown = set(entry) - self.KNOWN_KEYS
        if unknown:
            logger.warning("%s: ignoring unknown keys for %s: %s", source, entry["name"], ", ".join(sorted(unknown)))

        try:
            epoch = int(entry.get("epoch") or 0)
        except (TypeError, ValueError):
            raise BuildLoadError(f"{source}: package {entry['name']} has a non-numeric epoch: {entry['epoch']!r}")

        if epoch < 0:
            raise BuildLoadError(f"{source}: package {entry['name']} has a negative epoch")

        rules = {key: self._string_list(entry, key, source) for key in self.RULE_KEYS}

        return PackageHeader(
            name=str(entry["name"]),
            version=str(entry["version"]),
            release=str(entry["release"]),
            epoch=epoch,
            arch=str(entry.get("arch") or "noarch"),
            is_source=bool(entry.get("source", False)),
            files=self._string_list(entry, "files", source),
            **rules,
        )

    @staticmethod
    def _string_list(entry: dict, key: str, source: str) -> list[str]:
        value = entry.get(key) or []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise BuildLoadError(f"{source}: '{key}' of package {entry['name']} must be a list")
        return [str(v) for v in value]

    def load_peers(self, after: str | Path, before: str | Path | None = None) -> list[PackagePeer]:
        """
        Load the after build (and optionally the before build) and pair packages.

        Args:
            after: Path to the after build manifest
            before: Optional path to the before build manifest

        Returns:
            One peer per package name and architecture

        Raises:
            BuildLoadError: If a manifest cannot be loaded
        """
        after_headers = self.load_build(after)
        before_headers = self.load_build(before) if before is not None else []
        return pair_headers(before_headers, after_headers)


def pair_headers(before: list[PackageHeader], after: list[PackageHeader]) -> list[PackagePeer]:
    """Pair headers of both builds by package name and architecture.

    Peers follow the after build's order; packages only present in the
    before build are appended at the end.
    """
    peers: list[PackagePeer] = []
    by_key: dict[tuple[str, str], PackagePeer] = {}

    for hdr in after:
        key = (hdr.name, hdr.header_arch)
        if key in by_key:
            raise BuildLoadError(f"Duplicate package {hdr.name} on {hdr.header_arch} in the after build")
        peer = PackagePeer(after_hdr=hdr)
        by_key[key] = peer
        peers.append(peer)

    for hdr in before:
        key = (hdr.name, hdr.header_arch)
        peer = by_key.get(key)
        if peer is None:
            peer = PackagePeer(before_hdr=hdr)
            by_key[key] = peer
            peers.append(peer)
        elif peer.before_hdr is not None:
            raise BuildLoadError(f"Duplicate package {hdr.name} on {hdr.header_arch} in the before build")
        else:
            peer.before_hdr = hdr

    logger.debug("Paired %d before and %d after packages into %d peers", len(before), len(after), len(peers))
    return peers
