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
rpmdeps scanner - dependency rule diff and verification for package builds.
"""

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0+unknown"


def __getattr__(name: str):
    """Lazy-load public API symbols on first access.

    Keeps ``python -m rpmdeps_scanner.cli.cli`` from importing every
    submodule before ``runpy`` executes it.
    """
    _lazy_map = {
        "Config": (".config.config", "Config"),
        "RpmdepsScannerConstants": (".config.constants", "RpmdepsScannerConstants"),
        "BuildLoader": (".core.loader", "BuildLoader"),
        "Deprule": (".core.models", "Deprule"),
        "DepruleOperator": (".core.models", "DepruleOperator"),
        "DepruleType": (".core.models", "DepruleType"),
        "Finding": (".core.models", "Finding"),
        "InspectionResult": (".core.models", "InspectionResult"),
        "PackageHeader": (".core.models", "PackageHeader"),
        "PackagePeer": (".core.models", "PackagePeer"),
        "Severity": (".core.models", "Severity"),
        "DepruleInspector": (".core.inspector", "DepruleInspector"),
        "inspect_builds": (".core.inspector", "inspect_builds"),
    }
    if name in _lazy_map:
        module_path, attr = _lazy_map[name]
        import importlib

        mod = importlib.import_module(module_path, __package__)
        val = getattr(mod, attr)
        # Cache on the module so __getattr__ is only called once per symbol
        globals()[name] = val
        return val
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "DepruleInspector",
    "inspect_builds",
    "Deprule",
    "DepruleOperator",
    "DepruleType",
    "PackageHeader",
    "PackagePeer",
    "Finding",
    "InspectionResult",
    "Severity",
    "BuildLoader",
    "Config",
    "RpmdepsScannerConstants",
]
