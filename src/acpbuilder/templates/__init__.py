# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Templates of the generated C/C++ files, loaded as package resources."""
