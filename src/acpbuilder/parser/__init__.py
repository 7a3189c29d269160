# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Readers for XML module and project descriptions."""

from acpbuilder.parser.module_reader import DESCRIPTION_FILE, parse_module, read_module
from acpbuilder.parser.project_reader import parse_project, read_project

__all__ = [
    "DESCRIPTION_FILE",
    "parse_module",
    "parse_project",
    "read_module",
    "read_project",
]
