"""Discovery of the checks a flake declares for the current system."""

import json
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from flake_junit.checks.models import CheckTarget
from flake_junit.core.exceptions.errors import SchemaError
from flake_junit.core.logger.logger import get_logger

logger = get_logger(__name__)


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2, sort_keys=True, default=str)


def discover_checks(document: Mapping[str, Any], system: str) -> dict[str, CheckTarget]:
    """Extract the checks for ``system`` from ``nix flake show --json`` output.

    A single malformed entry fails the whole discovery; nothing is filtered
    out silently.

    Args:
        document: Parsed ``nix flake show --json`` document.
        system: Current system, e.g. ``x86_64-linux``.

    Returns:
        Check targets keyed by attribute name, sorted by key.

    Raises:
        SchemaError: If ``checks.<system>`` is missing, is not a mapping, or
            holds an entry that is not a derivation.
    """
    checks = document.get("checks") if isinstance(document, Mapping) else None
    if not isinstance(checks, Mapping):
        raise SchemaError(
            f"flake has no checks output mapping:\n{_dump(checks)}",
            details={"system": system},
        )

    entries = checks.get(system)
    if not isinstance(entries, Mapping):
        raise SchemaError(
            f"checks flake output is not a map of derivations:\n{_dump(entries)}",
            details={"system": system},
        )

    targets: dict[str, CheckTarget] = {}
    for key in sorted(entries):
        entry = entries[key]
        if not isinstance(entry, Mapping):
            raise SchemaError(
                f"check '{key}' is not a derivation entry:\n{_dump(entry)}",
                details={"system": system, "check": key},
            )
        try:
            targets[key] = CheckTarget.model_validate({**entry, "key": key})
        except ValidationError as e:
            raise SchemaError(
                f"check '{key}' is not a valid derivation entry: {e}\n{_dump(entry)}",
                details={"system": system, "check": key},
            ) from e

    logger.info(f"Checking the following attributes: {', '.join(targets)}")
    return targets
