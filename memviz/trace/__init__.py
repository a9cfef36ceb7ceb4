"""Trace-file loading: grammar plus profile construction."""

from __future__ import annotations

from pathlib import Path

from ..profile_model import Profile
from .parser import (
    CHECKPOINTS_HEADER,
    LOCATIONS_HEADER,
    ParsedTrace,
    TraceParseError,
    TraceRecord,
    parse_trace,
    parse_trace_text,
)


def load_profile(path: Path) -> Profile:
    """Parse the trace at ``path`` into an unsynchronized ``Profile``."""
    parsed = parse_trace(path)
    return Profile.from_records(parsed.records, parsed.checkpoints)


__all__ = [
    "CHECKPOINTS_HEADER",
    "LOCATIONS_HEADER",
    "ParsedTrace",
    "TraceParseError",
    "TraceRecord",
    "parse_trace",
    "parse_trace_text",
    "load_profile",
]
