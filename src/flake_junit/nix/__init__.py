"""Async adapter for the nix command line."""

from flake_junit.nix.client import CURRENT_SYSTEM_EXPR, NixClient
from flake_junit.nix.models import BuildDerivation, BuildMode

__all__ = [
    "CURRENT_SYSTEM_EXPR",
    "NixClient",
    "BuildDerivation",
    "BuildMode",
]
