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
Run-scoped state shared by every dependency check in one inspection.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config.constants import RpmdepsScannerConstants
from .models import PackagePeer


@dataclass
class InspectionContext:
    """Everything a check may look at besides the peer it is checking."""

    peers: list[PackagePeer] = field(default_factory=list)
    rebase: bool = False
    # False when only an after build was given; disables the before/after diff
    has_before: bool = True
    spec_file: str = RpmdepsScannerConstants.DEFAULT_SPEC_FILE_LABEL
    shared_lib_prefix: str = RpmdepsScannerConstants.SHARED_LIB_PREFIX


def find_spec_file(peers: list[PackagePeer]) -> str | None:
    """Return the spec file name carried by the after build's source package, if any."""
    for peer in peers:
        if peer.after_hdr is None or not peer.after_hdr.is_source:
            continue

        for path in peer.after_files:
            if path.endswith(RpmdepsScannerConstants.SPEC_FILENAME_EXTENSION):
                return path

    return None


def detect_rebase(peers: list[PackagePeer]) -> bool:
    """Decide whether the after build is a new upstream version.

    Compares the source package versions of both builds, falling back to the
    first package present in both builds when there is no source package.
    """
    both = [p for p in peers if p.before_hdr is not None and p.after_hdr is not None]
    if not both:
        return False

    sources = [p for p in both if p.after_hdr.is_source]
    reference = sources[0] if sources else both[0]
    return reference.before_hdr.version != reference.after_hdr.version
