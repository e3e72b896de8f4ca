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
Configuration class for the rpmdeps scanner.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

from .constants import RpmdepsScannerConstants

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no")


@dataclass
class Config:
    """
    Configuration for an inspection run.

    Values left at their defaults are filled in from ``RPMDEPS_SCANNER_*``
    environment variables.
    """

    # None means "decide from the builds" (source package versions differ)
    rebase: bool | None = None

    # Automatic shared library dependencies start with this prefix
    shared_lib_prefix: str = RpmdepsScannerConstants.SHARED_LIB_PREFIX

    # Output Options
    output_format: str = "summary"
    detailed_output: bool = False

    def __post_init__(self):
        """Load configuration from environment variables if not provided."""

        if self.rebase is None:
            env_rebase = os.getenv("RPMDEPS_SCANNER_REBASE", "").lower()
            if env_rebase in _TRUE_VALUES:
                self.rebase = True
            elif env_rebase in _FALSE_VALUES:
                self.rebase = False

        if self.shared_lib_prefix == RpmdepsScannerConstants.SHARED_LIB_PREFIX:
            if env_prefix := os.getenv("RPMDEPS_SCANNER_SHARED_LIB_PREFIX"):
                self.shared_lib_prefix = env_prefix

        if self.output_format == "summary":
            if env_format := os.getenv("RPMDEPS_SCANNER_FORMAT"):
                self.output_format = env_format

        if os.getenv("RPMDEPS_SCANNER_DETAILED", "").lower() in _TRUE_VALUES:
            self.detailed_output = True

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Config instance with values from environment
        """
        return cls()

    @classmethod
    def from_file(cls, config_file: Path) -> "Config":
        """
        Load configuration from a .env file.

        Variables already set in the environment are not overridden.

        Args:
            config_file: Path to .env file

        Returns:
            Config instance
        """
        if config_file.exists():
            for key, value in dotenv_values(config_file).items():
                if value is not None:
                    os.environ.setdefault(key, value)

        return cls.from_env()
