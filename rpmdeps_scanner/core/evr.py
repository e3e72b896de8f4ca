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
Name and version helpers for comparing dependency rules.
"""


def strip_isa(name: str) -> str:
    """Drop an ISA qualifier such as ``(x86-64)`` from a requirement name.

    Everything from the first ``(`` on is removed, so
    ``libfoo.so.1()(64-bit)`` becomes ``libfoo.so.1``.
    """
    paren = name.find("(")
    if paren == -1:
        return name
    return name[:paren]


def isa_names_match(left: str, right: str) -> bool:
    """True when two requirement names are equal, ignoring ISA qualifiers.

    The qualifier is only stripped when at least one side carries one.
    """
    if left == right:
        return True
    if "(" in left or "(" in right:
        return strip_isa(left) == strip_isa(right)
    return False


def format_verrel(version: str, release: str) -> str:
    return f"{version}-{release}"


def format_evr(epoch: int, version: str, release: str) -> str:
    """Build the string a dependency rule uses to pin an exact package build.

    Returns ``version-release`` when there is no epoch and
    ``epoch:version-release`` otherwise.
    """
    if epoch > 0:
        return f"{epoch}:{format_verrel(version, release)}"
    return format_verrel(version, release)
