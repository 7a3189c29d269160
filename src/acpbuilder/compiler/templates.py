# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Text templates with ``$identifier`` placeholders.

A placeholder starts with ``$`` and extends over the longest following run
of ASCII letters, digits, and underscores.  Known placeholders are replaced
by their value, unknown ones are dropped.  The ``$`` character itself is
never emitted.

Template files are shipped as resources of the :mod:`acpbuilder.templates`
package.
"""

from __future__ import annotations

import logging
import re
from importlib import resources
from pathlib import Path

from acpbuilder.errors import CompilationError

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

TEMPLATE_PACKAGE = "acpbuilder.templates"


def substitute(template: str, replacements: dict[str, str]) -> str:
    """Return *template* with every ``$identifier`` placeholder replaced.

    Examples:
        >>> substitute("Hello $name!", {"name": "Bob"})
        'Hello Bob!'
        >>> substitute("$a$b", {"a": "1"})
        '1'
    """
    return _PLACEHOLDER_RE.sub(lambda match: replacements.get(match.group(1), ""), template)


def load_template(name: str) -> str:
    """Return the text of the packaged template *name*.

    Raises:
        CompilationError: If the template is not available.
    """
    try:
        return resources.files(TEMPLATE_PACKAGE).joinpath(name).read_text(encoding="utf-8")
    except (OSError, ModuleNotFoundError) as exc:
        raise CompilationError(f"Template {name} is not available.") from exc


def render_to_file(template_name: str, output_file: Path, replacements: dict[str, str]) -> None:
    """Render the packaged template *template_name* into *output_file*.

    Raises:
        CompilationError: If the template is missing or the file cannot be
            written.
    """
    content = substitute(load_template(template_name), replacements)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise CompilationError(f"Generation of file {output_file} failed.") from exc
    logger.debug(f"Wrote {output_file} from template {template_name}")


def merge_lines(lines: list[str], prefix: str = "") -> str:
    """Join *lines* with newlines, prepending *prefix* to each non-empty line."""
    return "\n".join(prefix + line if line else line for line in lines)


def merge_slashes(path: str) -> str:
    """Collapse runs of ``/`` into a single slash."""
    while "//" in path:
        path = path.replace("//", "/")
    return path


# ################
# Implementation
# ################

_PLACEHOLDER_RE = re.compile(r"\$([A-Za-z0-9_]*)")
