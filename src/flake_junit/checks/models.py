"""
Check Data Models

Models for discovered flake checks and the outcome of building them.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CHECK_ATTRIBUTE_PREFIX = ".#checks"


class CheckTarget(BaseModel):
    """A derivation listed under ``checks.<system>`` in ``nix flake show --json``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    key: str = Field(..., description="Attribute name under checks.<system>")
    name: str = Field(..., description="Derivation name, used as the test case name")
    type: Literal["derivation"] = Field(..., description="Entry kind reported by nix")

    def installable(self, system: str) -> str:
        """Flake installable that builds this check on ``system``."""
        return f"{CHECK_ATTRIBUTE_PREFIX}.{system}.{self.key}"


class CheckStatus(str, Enum):
    """Result of the real build of a check."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class CheckOutcome:
    """Outcome of building one check.

    Attributes:
        key: Attribute name of the check.
        name: Display name (the derivation name).
        status: Whether the real build succeeded.
        duration_seconds: Wall-clock time of the real build only.
        log_output: Build log for failures, never empty for them.
        drv_path: Derivation resolved by the dry-run probe.
    """

    key: str
    name: str
    status: CheckStatus
    duration_seconds: float
    log_output: str | None = None
    drv_path: str | None = None

    def __post_init__(self) -> None:
        if self.duration_seconds < 0:
            raise ValueError("duration_seconds must be >= 0")
        if self.status == CheckStatus.FAILURE and not self.log_output:
            raise ValueError("failed checks must carry log output")

    @property
    def succeeded(self) -> bool:
        return self.status == CheckStatus.SUCCESS


@dataclass
class RunSummary:
    """Result of a complete run-checks invocation."""

    system: str
    outcomes: list[CheckOutcome]
    output_path: Path

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.succeeded)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def duration_seconds(self) -> float:
        return sum(o.duration_seconds for o in self.outcomes)
