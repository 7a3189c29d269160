# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Build configuration of ACP projects."""

from acpbuilder.workspace.config import (
    BUILD_CONFIG_NAME,
    BuildConfig,
    BuildConfigError,
    default_config_text,
    load_build_config,
    parse_build_config,
)

__all__ = [
    "BUILD_CONFIG_NAME",
    "BuildConfig",
    "BuildConfigError",
    "default_config_text",
    "load_build_config",
    "parse_build_config",
]
