"""
Links component - Redirect rules, validity, and append modes.
"""

from ._impl import (
    build_redirect_url,
    evaluate_state,
    extract_trailing,
    is_absolute_url,
    is_valid,
)
from .component import current_unix_time, run_build, run_evaluate
from .models import AppendMode, Link, LinkState, MalformedAppendError
from .ports import TimePort

__all__ = [
    # Entry points
    "run_build",
    "run_evaluate",
    "current_unix_time",
    # Models
    "AppendMode",
    "Link",
    "LinkState",
    "MalformedAppendError",
    # Ports
    "TimePort",
    # Functional core
    "build_redirect_url",
    "evaluate_state",
    "extract_trailing",
    "is_absolute_url",
    "is_valid",
]
