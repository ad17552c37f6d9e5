"""Flake check discovery and execution.

This module provides:
- Discovery of checks for the current system
- Two-phase (dry-run, then real) execution of each check
"""

from flake_junit.checks.discovery import discover_checks
from flake_junit.checks.models import (
    CHECK_ATTRIBUTE_PREFIX,
    CheckOutcome,
    CheckStatus,
    CheckTarget,
    RunSummary,
)
from flake_junit.checks.runner import CheckRunner

__all__ = [
    "CHECK_ATTRIBUTE_PREFIX",
    "CheckOutcome",
    "CheckStatus",
    "CheckTarget",
    "RunSummary",
    "discover_checks",
    "CheckRunner",
]
