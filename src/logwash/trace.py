"""Validation of line-trace (``-L``) arguments."""

from __future__ import annotations

import re

from .errors import ErrorCode, LogWashError

TRACE_PATTERN = re.compile(r"^(/.+/|:[^:]+|[0-9]+,[-+]?[0-9]+)(,[-+]?[0-9]+)?$")


def validate_trace_spec(trace: str, path: str) -> str:
    """Return the ``trace:path`` argument, or raise for a malformed trace."""
    trace = trace.strip()
    path = path.strip()
    if not path:
        raise LogWashError(
            ErrorCode.INVALID_TRACE_SPEC,
            "A file is required to trace line evolution",
            "Pass the file whose lines should be traced.",
        )
    if not TRACE_PATTERN.match(trace):
        raise LogWashError(
            ErrorCode.INVALID_TRACE_SPEC,
            f"Trace is invalid: {trace!r}",
            "Use START,END, /REGEX/ or :FUNCNAME, see man git-log.",
            {"trace": trace},
        )
    return f"{trace}:{path}"
