# Copyright 2026 ACP Builder Contributors
# SPDX-License-Identifier: Apache-2.0

"""Exception hierarchy shared by all parts of the ACP builder.

Two kinds of failure are distinguished:

* :class:`ConfigurationError`: a module or project description is malformed
  or violates its own contract (missing fields, unknown binding codes,
  duplicated names, ...).
* :class:`CompilationError`: a semantic or I/O failure while resolving,
  validating, or generating a project (unknown platform, unresolved module,
  undeclared property, circular generator dependency, unwritable file, ...).

Both are fail-fast.  The underlying cause of an error is chained with
``raise ... from ...`` so callers can render the whole chain with
:func:`format_error_chain`.
"""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class ACPError(Exception):
    """Base class of all errors raised by the ACP builder."""


class ConfigurationError(ACPError):
    """Raised when a module or project description is invalid."""


class CompilationError(ACPError):
    """Raised when a project cannot be compiled."""


def format_error_chain(exc: BaseException, indent: str = "  ") -> str:
    """Render *exc* followed by its chained causes, one per line.

    Each cause is indented one level deeper than the error that wraps it.
    Explicit causes (``raise ... from ...``) are followed, and implicit
    contexts unless they were suppressed with ``from None``.
    """
    lines: list[str] = []
    prefix = ""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        lines.append(f"{prefix}{current}")
        prefix += indent
        if current.__cause__ is not None or current.__suppress_context__:
            current = current.__cause__
        else:
            current = current.__context__
    return "\n".join(lines)
