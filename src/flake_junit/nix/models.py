"""Data models for nix command output."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class BuildMode(str, Enum):
    """How ``nix build`` is invoked."""

    DRY_RUN = "dry_run"  # Resolve derivations only, build nothing
    REAL = "real"


class BuildDerivation(BaseModel):
    """One entry of the ``nix build --json`` result list."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    drv_path: str = Field(..., alias="drvPath", description="Store path of the .drv file")
    outputs: dict[str, str | None] = Field(
        default_factory=dict,
        description="Output name to store path",
    )
